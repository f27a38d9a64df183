"""테스트 공통 fixture"""

from datetime import datetime, timezone

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.core.limiter import limiter
from app.domain.activity.schemas import Repository, UserProfile
from app.main import app


@pytest.fixture(autouse=True)
def disable_rate_limit():
    """테스트 중 요청 제한 비활성화"""
    limiter.enabled = False
    yield
    limiter.enabled = True


@pytest.fixture
def async_client():
    """비동기 HTTP 클라이언트"""
    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest.fixture
def sample_profile() -> UserProfile:
    """테스트용 사용자 프로필"""
    return UserProfile(
        login="octocat",
        created_at=datetime(2020, 5, 1, 12, 0, 0, tzinfo=timezone.utc),
    )


@pytest.fixture
def make_repositories():
    """테스트용 레포지토리 목록 생성 helper"""

    def _make(count: int) -> list[Repository]:
        return [
            Repository(id=i, name=f"repo-{i}", html_url=f"https://github.com/octocat/repo-{i}")
            for i in range(count)
        ]

    return _make


@pytest.fixture
def make_commit():
    """테스트용 커밋 객체 생성 helper"""

    def _make(date: str) -> dict:
        return {"sha": "abc123", "commit": {"author": {"name": "octocat", "date": date}}}

    return _make


@pytest.fixture
def make_response():
    """GitHub API 응답 생성 helper"""

    def _make(status_code: int, json=None, url: str = "https://api.github.com/test"):
        return httpx.Response(
            status_code,
            json=json if json is not None else {},
            request=httpx.Request("GET", url),
        )

    return _make


@pytest.fixture
def create_http_error():
    """HTTPStatusError 생성 helper"""

    def _create(status_code: int, message: str = "Error"):
        return httpx.HTTPStatusError(
            message,
            request=httpx.Request("GET", "https://api.github.com/test"),
            response=httpx.Response(status_code),
        )

    return _create
