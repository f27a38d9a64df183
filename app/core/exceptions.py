from enum import Enum

from fastapi import Request
from fastapi.responses import JSONResponse

from app.core.config import settings


class ErrorCode(str, Enum):
    """에러 코드 열거형"""

    GITHUB_UNAUTHORIZED = "GITHUB_UNAUTHORIZED"
    GITHUB_NOT_FOUND = "GITHUB_NOT_FOUND"
    GITHUB_RATE_LIMITED = "GITHUB_RATE_LIMITED"
    GITHUB_API_ERROR = "GITHUB_API_ERROR"
    REPO_FETCH_FAILED = "REPO_FETCH_FAILED"
    INVALID_INPUT = "INVALID_INPUT"
    INTERNAL_ERROR = "INTERNAL_ERROR"


class CustomException(Exception):
    def __init__(
        self,
        status_code: int,
        error_code: ErrorCode | str,
        message: str,
        detail: str | None = None,
    ):
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.detail = detail
        super().__init__(message)


class UserNotFoundError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=404,
            error_code=ErrorCode.GITHUB_NOT_FOUND,
            message="User not found",
            detail=detail,
        )


class GitHubUnauthorizedError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GITHUB_UNAUTHORIZED,
            message="Invalid GitHub token. Check your configuration.",
            detail=detail,
        )


class GitHubRateLimitError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=429,
            error_code=ErrorCode.GITHUB_RATE_LIMITED,
            message="API rate limit exceeded or authentication issue",
            detail=detail,
        )


class GitHubAPIError(CustomException):
    def __init__(self, status: int | None = None, detail: str | None = None):
        self.status = status
        super().__init__(
            status_code=502,
            error_code=ErrorCode.GITHUB_API_ERROR,
            message=f"GitHub API error: {status}" if status else "GitHub API error",
            detail=detail,
        )


class RepoFetchError(CustomException):
    def __init__(self, status: int | None = None, detail: str | None = None):
        self.status = status
        super().__init__(
            status_code=502,
            error_code=ErrorCode.REPO_FETCH_FAILED,
            message=(
                f"Failed to fetch repositories: {status}"
                if status
                else "Failed to fetch repositories"
            ),
            detail=detail,
        )


class ValidationError(CustomException):
    def __init__(self, detail: str | None = None):
        super().__init__(
            status_code=400,
            error_code=ErrorCode.INVALID_INPUT,
            message="Invalid input",
            detail=detail,
        )


def register_exception_handlers(app):
    @app.exception_handler(CustomException)
    async def custom_exception_handler(request: Request, exc: CustomException):
        content = {
            "error_code": exc.error_code,
            "message": exc.message,
        }
        if exc.detail and not settings.is_production:
            content["detail"] = exc.detail

        return JSONResponse(
            status_code=exc.status_code,
            content=content,
        )
