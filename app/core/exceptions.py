"""
Global exception handling for the application.
Every error leaves the API as {"error": <status>, "message": <text>}; outside
production the body also echoes the traceback and the offending request.
"""

import traceback
from typing import Any, Dict

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import get_settings

logger = structlog.get_logger(__name__)


class AppError(Exception):
    """Base class for all application exceptions."""
    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
    ):
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class BadRequestException(AppError):
    """Malformed input or a failed invariant pre-check."""
    def __init__(self, message: str = "Bad Request"):
        super().__init__(message, status.HTTP_400_BAD_REQUEST)


class UnauthorizedException(AppError):
    """Authentication failure error."""
    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class ForbiddenException(AppError):
    """Authorization failure error."""
    def __init__(self, message: str = "Forbidden"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class EntityNotFoundException(AppError):
    """Resource not found error."""
    def __init__(self, message: str = "Entity not found"):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class InternalServerError(AppError):
    def __init__(self, message: str = "Internal Server Error"):
        super().__init__(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def _error_response(request: Request, exc: Exception, status_code: int, message: str) -> JSONResponse:
    content: Dict[str, Any] = {"error": status_code, "message": message}

    if get_settings().ENVIRONMENT != "production":
        content["stack"] = "".join(
            traceback.format_exception(type(exc), exc, exc.__traceback__)
        )
        content["details"] = {
            "method": request.method,
            "path": request.url.path,
            # Set by the body-reading dependencies once the payload is parsed
            "body": getattr(request.state, "body", None),
        }

    return JSONResponse(status_code=status_code, content=content)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    logger.warning(
        "Request rejected",
        status_code=exc.status_code,
        error=exc.message,
        method=request.method,
        path=request.url.path,
    )
    return _error_response(request, exc, exc.status_code, exc.message)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Unparseable JSON or a body that is not an object."""
    logger.warning(
        "Invalid payload",
        errors=exc.errors(),
        method=request.method,
        path=request.url.path,
    )
    return _error_response(request, exc, status.HTTP_400_BAD_REQUEST, "Invalid JSON payload")


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Framework-level errors: unknown routes, unsupported methods."""
    message = exc.detail if isinstance(exc.detail, str) else "Error"
    return _error_response(request, exc, exc.status_code, message)


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all uncaught exceptions globally."""
    logger.exception(
        "Unexpected error occurred",
        method=request.method,
        path=request.url.path,
    )
    return _error_response(
        request, exc, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal Server Error"
    )


def register_exception_handlers(app) -> None:
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
