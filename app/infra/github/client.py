from datetime import datetime

import httpx

from app.core.config import settings
from app.core.exceptions import (
    GitHubAPIError,
    GitHubRateLimitError,
    GitHubUnauthorizedError,
    RepoFetchError,
    UserNotFoundError,
)
from app.core.logging import get_logger
from app.domain.activity.schemas import DateWindow, Repository, UserProfile

logger = get_logger(__name__)

_client = httpx.AsyncClient(base_url=settings.github_api_base, timeout=settings.github_timeout)


def _get_headers(token: str | None = None) -> dict[str, str]:
    """GitHub API 요청 헤더 생성

    Args:
        token: GitHub 액세스 토큰, 없으면 설정값 사용

    Returns:
        HTTP 헤더 딕셔너리
    """
    if token is None:
        token = settings.github_token
    headers = {"Accept": "application/vnd.github.v3+json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


async def close_client():
    """httpx 클라이언트 종료"""
    await _client.aclose()


def parse_github_datetime(value: str) -> datetime:
    """GitHub ISO 8601 타임스탬프 파싱 ("Z" 접미사 포함)"""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def get_user(username: str, token: str | None = None) -> UserProfile:
    """사용자 프로필 조회

    Args:
        username: GitHub 유저네임
        token: GitHub 액세스 토큰

    Returns:
        계정 생성 시각을 포함한 사용자 프로필

    Raises:
        UserNotFoundError: 404
        GitHubUnauthorizedError: 401
        GitHubRateLimitError: 403
        GitHubAPIError: 그 외 실패
    """
    try:
        response = await _client.get(f"/users/{username}", headers=_get_headers(token))
    except httpx.RequestError as e:
        logger.warning("사용자 조회 요청 실패", username=username, error=type(e).__name__)
        raise GitHubAPIError(detail=type(e).__name__) from e

    if response.status_code == 404:
        raise UserNotFoundError(detail=username)
    if response.status_code == 401:
        raise GitHubUnauthorizedError()
    if response.status_code == 403:
        raise GitHubRateLimitError(detail=response.headers.get("X-RateLimit-Reset"))
    if not response.is_success:
        raise GitHubAPIError(status=response.status_code)

    try:
        data = response.json()
        profile = UserProfile(
            login=data.get("login", username),
            created_at=parse_github_datetime(data["created_at"]),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as e:
        logger.warning("사용자 응답 파싱 실패", username=username, error=type(e).__name__)
        raise GitHubAPIError(detail=type(e).__name__) from e

    logger.info("사용자 조회 완료", username=username)
    return profile


async def get_user_repos(username: str, token: str | None = None) -> list[Repository]:
    """사용자 레포지토리 목록 조회, 첫 페이지만 사용

    Args:
        username: GitHub 유저네임
        token: GitHub 액세스 토큰

    Returns:
        레포지토리 목록

    Raises:
        RepoFetchError: 조회 실패 시
    """
    params = {"per_page": settings.repos_page_size}

    try:
        response = await _client.get(
            f"/users/{username}/repos", headers=_get_headers(token), params=params
        )
    except httpx.RequestError as e:
        logger.warning("레포 목록 요청 실패", username=username, error=type(e).__name__)
        raise RepoFetchError(detail=type(e).__name__) from e

    if not response.is_success:
        raise RepoFetchError(status=response.status_code)

    try:
        data = response.json()
        if not isinstance(data, list):
            raise TypeError(f"unexpected payload: {type(data).__name__}")
        repos = [
            Repository(id=repo["id"], name=repo["name"], html_url=repo["html_url"])
            for repo in data
        ]
    except (KeyError, TypeError, ValueError) as e:
        logger.warning("레포 목록 파싱 실패", username=username, error=type(e).__name__)
        raise RepoFetchError(detail=type(e).__name__) from e

    logger.info("레포 목록 조회 완료", username=username, count=len(repos))
    return repos


async def get_commits_page(
    owner: str,
    repo: str,
    window: DateWindow,
    page: int = 1,
    per_page: int = 100,
    token: str | None = None,
) -> list[dict]:
    """기간 내 커밋 목록 한 페이지 조회

    Args:
        owner: 레포지토리 소유자
        repo: 레포지토리 이름
        window: 조회 기간
        page: 1부터 시작하는 페이지 번호
        per_page: 페이지 크기, 최대 100
        token: GitHub 액세스 토큰

    Returns:
        커밋 객체 목록

    Raises:
        httpx.HTTPStatusError: 2xx가 아닌 응답
    """
    params = {**window.as_params(), "per_page": min(per_page, 100), "page": page}

    response = await _client.get(
        f"/repos/{owner}/{repo}/commits", headers=_get_headers(token), params=params
    )
    response.raise_for_status()
    data = response.json()

    logger.debug("커밋 페이지 조회 완료", repo=f"{owner}/{repo}", page=page, count=len(data))
    return data
