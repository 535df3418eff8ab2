"""
Application errors and their HTTP rendering.

Every failure a handler or dependency wants to report to the client is raised
as an ``AppError`` subclass; a single exception handler turns it into a JSON
response of the form ``{<body_key>: <message>}``.
"""
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for errors rendered straight to the client."""

    status_code: int = status.HTTP_400_BAD_REQUEST
    body_key: str = "error"
    headers: dict | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_response(self) -> JSONResponse:
        return JSONResponse(
            status_code=self.status_code,
            content={self.body_key: self.message},
            headers=self.headers,
        )


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class AuthorizationError(AppError):
    status_code = status.HTTP_403_FORBIDDEN


class CredentialsTooShortError(AuthorizationError):
    body_key = "message"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    body_key = "message"


class UpstreamError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


# Persistence failures are reported as 404, matching the service's established
# client contract rather than a 5xx.
class UnexpectedError(AppError):
    status_code = status.HTTP_404_NOT_FOUND


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle application errors"""
    if exc.status_code >= status.HTTP_404_NOT_FOUND:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code}: {exc.message}")
    return exc.to_response()
