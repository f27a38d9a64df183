"""커밋 활동 서비스 테스트"""

from datetime import datetime, timezone
from unittest.mock import AsyncMock, patch

import pytest

from app.core.exceptions import ValidationError
from app.domain.activity.constants import NO_REPOSITORIES_NOTICE
from app.domain.activity.schemas import AggregationResult, empty_months
from app.domain.activity.service import available_years, change_year, search


class TestAvailableYears:
    """available_years 함수 테스트"""

    def test_descending_range(self):
        """현재 연도부터 생성 연도까지 내림차순"""
        created_at = datetime(2021, 7, 1, tzinfo=timezone.utc)
        now = datetime(2024, 2, 1, tzinfo=timezone.utc)

        assert available_years(created_at, now) == [2024, 2023, 2022, 2021]

    def test_created_this_year(self):
        """올해 생성된 계정은 올해만"""
        now = datetime(2024, 2, 1, tzinfo=timezone.utc)
        assert available_years(datetime(2024, 1, 5, tzinfo=timezone.utc), now) == [2024]

    @pytest.mark.parametrize("year", [2019, 2020, 2025, 2030])
    def test_out_of_range_never_offered(self, year):
        """범위 밖 연도는 제공되지 않음"""
        created_at = datetime(2021, 7, 1, tzinfo=timezone.utc)
        now = datetime(2024, 2, 1, tzinfo=timezone.utc)

        assert year not in available_years(created_at, now)


class TestSearch:
    """search 함수 테스트"""

    @pytest.mark.asyncio
    async def test_aggregates_current_year(self, sample_profile, make_repositories):
        """올해 커밋을 집계"""
        repositories = make_repositories(3)
        current_year = datetime.now(timezone.utc).year
        activity = AggregationResult(year=current_year, months=empty_months(), run_id="abcd1234")

        with (
            patch(
                "app.domain.activity.service.get_user",
                new_callable=AsyncMock,
                return_value=sample_profile,
            ),
            patch(
                "app.domain.activity.service.get_user_repos",
                new_callable=AsyncMock,
                return_value=repositories,
            ),
            patch(
                "app.domain.activity.service.aggregate",
                new_callable=AsyncMock,
                return_value=activity,
            ) as mock_aggregate,
        ):
            result = await search("octocat")

        assert result.selected_year == current_year
        assert result.years[0] == current_year
        assert result.years[-1] == 2020
        assert result.repositories == repositories
        assert result.activity is activity
        assert result.notice is None
        assert mock_aggregate.call_args.args[:3] == ("octocat", current_year, repositories)

    @pytest.mark.asyncio
    async def test_no_repositories(self, sample_profile):
        """레포가 없으면 집계 없이 안내 메시지"""
        with (
            patch(
                "app.domain.activity.service.get_user",
                new_callable=AsyncMock,
                return_value=sample_profile,
            ),
            patch(
                "app.domain.activity.service.get_user_repos",
                new_callable=AsyncMock,
                return_value=[],
            ),
            patch(
                "app.domain.activity.service.aggregate", new_callable=AsyncMock
            ) as mock_aggregate,
        ):
            result = await search("octocat")

        mock_aggregate.assert_not_called()
        assert result.activity is None
        assert result.notice == NO_REPOSITORIES_NOTICE


class TestChangeYear:
    """change_year 함수 테스트"""

    @pytest.mark.asyncio
    async def test_year_before_creation_rejected(self, sample_profile):
        """계정 생성 이전 연도는 ValidationError"""
        with (
            patch(
                "app.domain.activity.service.get_user",
                new_callable=AsyncMock,
                return_value=sample_profile,
            ),
            patch(
                "app.domain.activity.service.get_user_repos", new_callable=AsyncMock
            ) as mock_repos,
        ):
            with pytest.raises(ValidationError):
                await change_year("octocat", 2019)

        mock_repos.assert_not_called()

    @pytest.mark.asyncio
    async def test_valid_year(self, sample_profile, make_repositories):
        """선택 가능한 연도면 집계"""
        repositories = make_repositories(2)
        activity = AggregationResult(year=2021, months=empty_months())

        with (
            patch(
                "app.domain.activity.service.get_user",
                new_callable=AsyncMock,
                return_value=sample_profile,
            ),
            patch(
                "app.domain.activity.service.get_user_repos",
                new_callable=AsyncMock,
                return_value=repositories,
            ),
            patch(
                "app.domain.activity.service.aggregate",
                new_callable=AsyncMock,
                return_value=activity,
            ) as mock_aggregate,
        ):
            result = await change_year("octocat", 2021)

        assert result is activity
        assert mock_aggregate.call_args.args[:3] == ("octocat", 2021, repositories)
