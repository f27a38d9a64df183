"""커밋 활동 API 스키마."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from app.domain.activity.schemas import AggregationResult, Repository
from app.domain.activity.service import SearchResult

GITHUB_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9](?:[A-Za-z0-9-]{0,38})$")


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class RepositoryResponse(_CamelModel):
    id: int
    name: str
    html_url: str = Field(alias="htmlUrl")

    @classmethod
    def from_domain(cls, repo: Repository) -> "RepositoryResponse":
        return cls(id=repo.id, name=repo.name, html_url=repo.html_url)


class MonthlyCountResponse(_CamelModel):
    month: str
    commits: int


class ActivityResponse(_CamelModel):
    """연간 월별 커밋 집계 응답."""

    year: int
    months: list[MonthlyCountResponse]
    total: int
    peak_month: str | None = Field(alias="peakMonth")
    has_commits: bool = Field(alias="hasCommits")
    partial: bool
    run_id: str | None = Field(alias="runId")

    @classmethod
    def from_domain(cls, result: AggregationResult) -> "ActivityResponse":
        return cls(
            year=result.year,
            months=[MonthlyCountResponse(month=m.month, commits=m.commits) for m in result.months],
            total=result.total,
            peak_month=result.peak_month,
            has_commits=result.has_commits,
            partial=result.partial,
            run_id=result.run_id,
        )


class UserSearchResponse(_CamelModel):
    """사용자 검색 응답."""

    login: str
    created_at: datetime = Field(alias="createdAt")
    years: list[int]
    selected_year: int = Field(alias="selectedYear")
    repositories: list[RepositoryResponse]
    activity: ActivityResponse | None = None
    notice: str | None = None

    @classmethod
    def from_domain(cls, result: SearchResult) -> "UserSearchResponse":
        return cls(
            login=result.profile.login,
            created_at=result.profile.created_at,
            years=result.years,
            selected_year=result.selected_year,
            repositories=[RepositoryResponse.from_domain(r) for r in result.repositories],
            activity=ActivityResponse.from_domain(result.activity) if result.activity else None,
            notice=result.notice,
        )
