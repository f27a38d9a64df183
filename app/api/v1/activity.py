from typing import Annotated

from fastapi import APIRouter, Path, Query

from app.api.v1.schemas import GITHUB_USERNAME_PATTERN, ActivityResponse, UserSearchResponse
from app.domain.activity import service

router = APIRouter(prefix="/users", tags=["activity"])

Username = Annotated[
    str, Path(min_length=1, max_length=39, pattern=GITHUB_USERNAME_PATTERN.pattern)
]


@router.get("/{username}", response_model=UserSearchResponse)
async def search_user(username: Username) -> UserSearchResponse:
    """사용자 검색: 프로필, 선택 가능 연도, 레포 목록, 올해 커밋 집계"""
    result = await service.search(username)
    return UserSearchResponse.from_domain(result)


@router.get("/{username}/activity", response_model=ActivityResponse)
async def get_activity(
    username: Username,
    year: Annotated[int, Query(ge=1, le=9999)],
) -> ActivityResponse:
    """선택 연도의 월별 커밋 집계"""
    result = await service.change_year(username, year)
    return ActivityResponse.from_domain(result)
