from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator

from app.core.config import settings
from app.domain.activity.constants import MAX_YEAR, MIN_YEAR, MONTH_LABELS


class Repository(BaseModel):
    """레포지토리 스냅샷"""

    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    html_url: str


class UserProfile(BaseModel):
    """GitHub 사용자 프로필"""

    login: str
    created_at: datetime


class MonthlyCount(BaseModel):
    """월별 커밋 수"""

    month: str
    commits: int = Field(default=0, ge=0)


class DateWindow(BaseModel):
    """커밋 조회 기간, 양 끝 포함"""

    since: datetime
    until: datetime

    def as_params(self) -> dict[str, str]:
        return {
            "since": self.since.strftime("%Y-%m-%dT%H:%M:%SZ"),
            "until": self.until.strftime("%Y-%m-%dT%H:%M:%SZ"),
        }


class AggregationRequest(BaseModel):
    """커밋 집계 요청"""

    username: str = Field(min_length=1)
    year: int = Field(ge=MIN_YEAR, le=MAX_YEAR)
    repositories: list[Repository] = Field(default_factory=list)
    max_repositories: int = Field(default_factory=lambda: settings.activity_max_repositories, ge=0)
    max_pages: int = Field(default_factory=lambda: settings.activity_max_pages, ge=1)
    page_size: int = Field(default_factory=lambda: settings.activity_page_size, ge=1, le=100)

    @field_validator("username")
    @classmethod
    def validate_username(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("username은 비어 있을 수 없습니다")
        return v.strip()

    @property
    def selected_repositories(self) -> list[Repository]:
        """조회 대상 레포지토리, 입력 순서 기준 상위 max_repositories개"""
        return self.repositories[: self.max_repositories]


class RepositoryIssue(BaseModel):
    """레포지토리 단위 조회 문제"""

    repository: str
    status_code: int | None = None
    reason: str


class AggregationResult(BaseModel):
    """커밋 집계 결과"""

    year: int
    months: list[MonthlyCount]
    issues: list[RepositoryIssue] = Field(default_factory=list)
    run_id: str | None = None

    @field_validator("months")
    @classmethod
    def validate_months(cls, v: list[MonthlyCount]) -> list[MonthlyCount]:
        if len(v) != len(MONTH_LABELS):
            raise ValueError(f"월별 집계는 12개여야 합니다: {len(v)}")
        return v

    @computed_field
    @property
    def total(self) -> int:
        return sum(m.commits for m in self.months)

    @computed_field
    @property
    def has_commits(self) -> bool:
        return any(m.commits > 0 for m in self.months)

    @computed_field
    @property
    def peak_month(self) -> str | None:
        """가장 커밋이 많은 월, 동률이면 앞선 월"""
        if not self.has_commits:
            return None
        peak = self.months[0]
        for month in self.months[1:]:
            if month.commits > peak.commits:
                peak = month
        return peak.month

    @computed_field
    @property
    def partial(self) -> bool:
        return bool(self.issues)


def empty_months() -> list[MonthlyCount]:
    """0으로 초기화된 12개월 집계"""
    return [MonthlyCount(month=label, commits=0) for label in MONTH_LABELS]
