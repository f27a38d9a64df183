from app.api.v1.schemas.activity import (
    GITHUB_USERNAME_PATTERN,
    ActivityResponse,
    MonthlyCountResponse,
    RepositoryResponse,
    UserSearchResponse,
)

__all__ = [
    "GITHUB_USERNAME_PATTERN",
    "ActivityResponse",
    "MonthlyCountResponse",
    "RepositoryResponse",
    "UserSearchResponse",
]
