"""Application error taxonomy and the handlers that render it."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class AppError(Exception):
    """Base class for failures that map to a client-facing response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal server error"

    def __init__(self, message: str | None = None, headers: dict[str, str] | None = None):
        super().__init__(message or self.message)
        if message is not None:
            self.message = message
        self.headers = headers


class BadRequestError(AppError):
    """Missing or malformed input."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid request"


class InvalidCredentialsError(AppError):
    """Login failed. Deliberately does not say whether the email exists."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid email or password"


class ConflictError(AppError):
    """Resource already exists."""

    status_code = status.HTTP_409_CONFLICT
    message = "Resource already exists"


class InvalidOrExpiredCodeError(AppError):
    """Reset code unknown, already used, superseded or expired."""

    status_code = status.HTTP_400_BAD_REQUEST
    message = "Invalid or expired code"


class UnauthorizedError(AppError):
    """Missing or expired token, or wrong current password."""

    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Authentication required"


class ForbiddenError(AppError):
    """Invalid token or an unmet role/verification requirement."""

    status_code = status.HTTP_403_FORBIDDEN
    message = "Access denied"


class NotFoundError(AppError):
    """Resource absent."""

    status_code = status.HTTP_404_NOT_FOUND
    message = "Not found"


def error_response(
    status_code: int,
    message: str,
    errors: list[str] | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    """Build the failure envelope."""
    content: dict = {"success": False, "message": message}
    if errors:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, headers=exc.headers)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return error_response(exc.status_code, message, headers=getattr(exc, "headers", None))


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = []
    for error in exc.errors():
        field = ".".join(str(part) for part in error["loc"] if part != "body")
        errors.append(f"{field}: {error['msg']}" if field else error["msg"])
    return error_response(status.HTTP_400_BAD_REQUEST, "Invalid data", errors=errors)


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as a {success: false, message} envelope."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
