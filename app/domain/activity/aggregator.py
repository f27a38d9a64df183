"""월별 커밋 집계

레포지토리마다 커밋 목록을 페이지 단위로 순차 조회하여 12개월 버킷에 누적한다.
레포 단위 실패는 로그만 남기고 다음 레포로 넘어간다.
"""

from datetime import datetime, timezone

import httpx

from app.core.context import new_run_id
from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.domain.activity.constants import EMPTY_REPOSITORY_STATUS_CODES, MAX_YEAR, MIN_YEAR
from app.domain.activity.schemas import (
    AggregationRequest,
    AggregationResult,
    DateWindow,
    MonthlyCount,
    Repository,
    RepositoryIssue,
    empty_months,
)
from app.infra.github.client import get_commits_page, parse_github_datetime

logger = get_logger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def build_date_window(year: int, now: datetime | None = None) -> DateWindow:
    """연도의 조회 기간 계산, 미래 시점은 현재 시각으로 제한

    Args:
        year: 대상 연도
        now: 기준 시각, 테스트용

    Returns:
        [1월 1일 00:00:00, 12월 31일 23:59:59] 기간
    """
    if now is None:
        now = _utcnow()
    since = datetime(year, 1, 1, 0, 0, 0, tzinfo=timezone.utc)
    until = datetime(year, 12, 31, 23, 59, 59, tzinfo=timezone.utc)
    if until > now:
        until = now
    return DateWindow(since=since, until=until)


def month_index(commit: dict) -> int:
    """커밋 작성 시각의 월 인덱스(0-11)"""
    authored = parse_github_datetime(commit["commit"]["author"]["date"])
    return authored.astimezone(timezone.utc).month - 1


async def _count_repository_commits(
    username: str,
    repo: Repository,
    window: DateWindow,
    months: list[MonthlyCount],
    request: AggregationRequest,
    issues: list[RepositoryIssue],
    token: str | None,
) -> int:
    """한 레포의 커밋을 페이지 단위로 조회하여 버킷에 누적, 누적한 커밋 수 반환"""
    counted = 0
    for page in range(1, request.max_pages + 1):
        try:
            commits = await get_commits_page(
                username, repo.name, window, page=page, per_page=request.page_size, token=token
            )
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            if status_code in EMPTY_REPOSITORY_STATUS_CODES:
                logger.info("커밋 없는 레포 스킵", repo=repo.name, status_code=status_code)
            else:
                logger.warning("커밋 조회 실패", repo=repo.name, status_code=status_code)
                issues.append(
                    RepositoryIssue(
                        repository=repo.name, status_code=status_code, reason="commit fetch failed"
                    )
                )
            break

        for commit in commits[: request.page_size]:
            months[month_index(commit)].commits += 1
            counted += 1

        if len(commits) < request.page_size:
            break

    return counted


async def aggregate(
    username: str,
    year: int,
    repositories: list[Repository],
    token: str | None = None,
    *,
    now: datetime | None = None,
    issues: list[RepositoryIssue] | None = None,
) -> AggregationResult:
    """레포지토리 목록의 연간 커밋을 월별로 집계

    Args:
        username: 레포 소유자 GitHub 유저네임
        year: 대상 연도
        repositories: 레포지토리 목록, 앞에서부터 최대 25개만 조회
        token: GitHub 액세스 토큰
        now: 기준 시각, 테스트용
        issues: 레포 단위 조회 문제를 기록할 리스트

    Returns:
        12개월 집계 결과

    Raises:
        ValidationError: username이 비었거나 year가 유효하지 않은 경우
    """
    if not username or not username.strip():
        raise ValidationError(detail="username is required")
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(detail=f"invalid year: {year}")

    request = AggregationRequest(username=username, year=year, repositories=repositories)
    if issues is None:
        issues = []

    run_id = new_run_id()
    months = empty_months()
    selected = request.selected_repositories

    if not selected:
        return AggregationResult(year=year, months=months, issues=issues, run_id=run_id)

    window = build_date_window(year, now)
    logger.info(
        "커밋 집계 시작",
        username=request.username,
        year=year,
        repos=len(selected),
        skipped=len(repositories) - len(selected),
        until=window.until.isoformat(),
    )

    for processed, repo in enumerate(selected, start=1):
        try:
            counted = await _count_repository_commits(
                request.username, repo, window, months, request, issues, token
            )
            logger.debug(
                "레포 집계 완료", repo=repo.name, commits=counted, progress=f"{processed}/{len(selected)}"
            )
        except Exception as e:
            logger.error("레포 처리 실패", repo=repo.name, error=type(e).__name__)
            issues.append(RepositoryIssue(repository=repo.name, reason=type(e).__name__))

    result = AggregationResult(year=year, months=months, issues=issues, run_id=run_id)
    logger.info(
        "커밋 집계 완료",
        username=request.username,
        year=year,
        total=result.total,
        issues=len(issues),
    )
    return result
