from datetime import datetime, timezone

from pydantic import BaseModel

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.domain.activity.aggregator import aggregate
from app.domain.activity.constants import NO_REPOSITORIES_NOTICE
from app.domain.activity.schemas import AggregationResult, Repository, UserProfile
from app.infra.github.client import get_user, get_user_repos

logger = get_logger(__name__)


class SearchResult(BaseModel):
    """사용자 검색 결과"""

    profile: UserProfile
    years: list[int]
    selected_year: int
    repositories: list[Repository]
    activity: AggregationResult | None = None
    notice: str | None = None


def available_years(created_at: datetime, now: datetime | None = None) -> list[int]:
    """선택 가능한 연도 목록, 현재 연도부터 계정 생성 연도까지 내림차순"""
    if now is None:
        now = datetime.now(timezone.utc)
    return list(range(now.year, created_at.year - 1, -1))


async def search(username: str, token: str | None = None) -> SearchResult:
    """사용자 프로필, 레포 목록, 올해 커밋 집계 조회

    Args:
        username: GitHub 유저네임
        token: GitHub 액세스 토큰

    Returns:
        검색 결과, 레포가 없으면 activity 없이 notice 포함
    """
    profile = await get_user(username, token)
    now = datetime.now(timezone.utc)
    years = available_years(profile.created_at, now)

    repositories = await get_user_repos(username, token)
    result = SearchResult(
        profile=profile,
        years=years,
        selected_year=now.year,
        repositories=repositories,
    )

    if not repositories:
        logger.info("레포 없음", username=username)
        result.notice = NO_REPOSITORIES_NOTICE
        return result

    result.activity = await aggregate(username, now.year, repositories, token, now=now)
    return result


async def change_year(username: str, year: int, token: str | None = None) -> AggregationResult:
    """선택 연도의 커밋 집계

    Raises:
        ValidationError: 선택 가능한 연도가 아닌 경우
    """
    profile = await get_user(username, token)
    now = datetime.now(timezone.utc)
    if year not in available_years(profile.created_at, now):
        raise ValidationError(
            detail=f"year must be between {profile.created_at.year} and {now.year}: {year}"
        )

    repositories = await get_user_repos(username, token)
    return await aggregate(username, year, repositories, token, now=now)
