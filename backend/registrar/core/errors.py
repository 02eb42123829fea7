"""
Domain errors and their translation into JSON error responses.

Every error response uses the same envelope as successful ones:
``{"success": false, "error": "...", "errors": {...}}``.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings


logger = logging.getLogger(__name__)


class AppError(Exception):
    """Expected error carrying the HTTP status it maps to."""

    def __init__(
        self,
        message: str,
        status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR,
        errors: Optional[Dict[str, str]] = None
    ):
        self.message = message
        self.status_code = status_code
        self.errors = errors
        super().__init__(message)


class BadRequestError(AppError):
    def __init__(self, message: str, errors: Optional[Dict[str, str]] = None):
        super().__init__(message, status.HTTP_400_BAD_REQUEST, errors)


class AuthenticationError(AppError):
    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, status.HTTP_401_UNAUTHORIZED)


class PermissionDeniedError(AppError):
    def __init__(self, message: str = "Access denied, insufficient permissions"):
        super().__init__(message, status.HTTP_403_FORBIDDEN)


class NotFoundError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_404_NOT_FOUND)


class ConflictError(AppError):
    def __init__(self, message: str):
        super().__init__(message, status.HTTP_409_CONFLICT)


def error_body(message: str, errors: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Build the failure envelope."""
    body: Dict[str, Any] = {"success": False, "error": message}
    if errors:
        body["errors"] = errors
    return body


def _field_name(loc) -> str:
    # ("body", "parent", "father_email") -> "parent.father_email"
    parts = [str(p) for p in loc if p not in ("body", "query", "path")]
    return ".".join(parts) or "request"


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Handle expected domain errors."""
    if exc.status_code >= 500:
        logger.error(f"{exc.message} - Path: {request.url.path}")
    else:
        logger.info(f"{exc.status_code} {exc.message} - Path: {request.url.path}")
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, exc.errors),
        headers=headers
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Wrap framework HTTP errors (unknown routes, wrong methods) in the envelope."""
    if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
        message = f"Route {request.url.path} not found"
    else:
        message = str(exc.detail)
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Return field-level validation messages."""
    errors: Dict[str, str] = {}
    for error in exc.errors():
        field = _field_name(error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        # pydantic prefixes messages raised from validators
        errors.setdefault(field, message.removeprefix("Value error, "))
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=error_body("Validation failed", errors)
    )


async def integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """Unique and foreign key violations that slipped past the services."""
    logger.warning(f"Integrity error on {request.url.path}: {exc.orig}")
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content=error_body("Duplicate field value")
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc} - {request.method} {request.url.path}")
    message = str(exc) if settings.DEBUG else "Internal Server Error"
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(message)
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all error handlers to the application."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_error_handler)
    app.add_exception_handler(Exception, general_exception_handler)
