"""Application exceptions and FastAPI exception handlers.

Every failure leaving the HTTP boundary is rendered as the same envelope::

    {"success": false, "error": "...", "code": "...", "details": ..., "request_id": ...}

``details`` carries field errors for rejected input and, outside production,
a diagnostic string for server-side failures.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fastapi import FastAPI, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import ORJSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException as StarletteHTTPException

from recipe_share.observability.logging import get_logger


if TYPE_CHECKING:
    from fastapi import Request


logger = get_logger(__name__)


class ErrorDetail(BaseModel):
    """Structured error detail for rejected input."""

    code: str
    message: str
    field: str | None = None


class ErrorResponse(BaseModel):
    """Structured failure envelope."""

    success: bool = False
    error: str
    code: str
    details: list[ErrorDetail] | str | None = None
    request_id: str | None = None


class AppError(Exception):
    """Base application error.

    Carries the HTTP status and machine-readable code used when the error
    crosses the API boundary.
    """

    def __init__(
        self,
        status_code: int,
        code: str,
        message: str,
        details: list[ErrorDetail] | str | None = None,
    ) -> None:
        self.status_code = status_code
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)


class ValidationError(AppError):
    """Malformed or missing input. Raised before any write is attempted."""

    def __init__(
        self,
        message: str,
        details: list[ErrorDetail] | str | None = None,
    ) -> None:
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            code="VALIDATION_ERROR",
            message=message,
            details=details,
        )


class NotFoundError(AppError):
    """Referenced resource is absent."""

    def __init__(self, resource: str, identifier: Any) -> None:
        self.resource = resource
        self.identifier = identifier
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            code="NOT_FOUND",
            message=f"{resource} not found",
            details=f"{resource} with identifier '{identifier}' not found",
        )


class StorageError(AppError):
    """Transaction or connection failure. The unit of work was rolled back."""

    def __init__(
        self,
        message: str = "Storage operation failed",
        details: str | None = None,
    ) -> None:
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            code="STORAGE_ERROR",
            message=message,
            details=details,
        )


class SideEffectError(AppError):
    """A best-effort action (e.g. notification) failed.

    Logged by the service that triggered it; never returned to callers.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        super().__init__(
            status_code=status.HTTP_502_BAD_GATEWAY,
            code="SIDE_EFFECT_FAILED",
            message=message,
            details=details,
        )


class UnauthorizedError(AppError):
    """Missing or invalid credentials."""

    def __init__(self, message: str = "Could not validate credentials") -> None:
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="UNAUTHORIZED",
            message=message,
        )


class ForbiddenError(AppError):
    """Caller lacks the privilege for this action."""

    def __init__(self, message: str = "Insufficient permissions") -> None:
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            code="FORBIDDEN",
            message=message,
        )


class RateLimitError(AppError):
    """Rate limit exceeded."""

    def __init__(self, message: str = "Rate limit exceeded") -> None:
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            code="RATE_LIMIT_EXCEEDED",
            message=message,
        )


class ServiceUnavailableError(AppError):
    """Dependency temporarily unavailable."""

    def __init__(self, message: str = "Service temporarily unavailable") -> None:
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            code="SERVICE_UNAVAILABLE",
            message=message,
        )


def _request_id(request: Request) -> str | None:
    return getattr(request.state, "request_id", None)


def _expose_details(request: Request) -> bool:
    """Diagnostic strings are only returned outside production."""
    settings = getattr(request.app.state, "settings", None)
    return settings is None or not settings.is_production


def error_response(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: list[ErrorDetail] | str | None = None,
) -> ORJSONResponse:
    """Render the standard error envelope; string details only outside production."""
    if isinstance(details, str) and not _expose_details(request):
        details = None
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=message,
            code=code,
            details=details,
            request_id=_request_id(request),
        ).model_dump(exclude_none=True),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Route every error through ``error_response``."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> ORJSONResponse:
        if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.error(
                "Request failed",
                code=exc.code,
                path=request.url.path,
                details=exc.details,
            )
        return error_response(
            request, exc.status_code, exc.code, exc.message, exc.details
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request,
        exc: StarletteHTTPException,
    ) -> ORJSONResponse:
        return error_response(request, exc.status_code, "HTTP_ERROR", str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> ORJSONResponse:
        """Report rejected request bodies as 400 with per-field details."""
        errors = exc.errors()
        details = [
            ErrorDetail(
                code=str(error["type"]).upper(),
                message=error["msg"],
                field=".".join(str(loc) for loc in error["loc"] if loc != "body"),
            )
            for error in errors
        ]
        missing = [d.field for d in details if d.code == "MISSING"]
        message = (
            f"Missing required fields: {', '.join(str(f) for f in missing)}"
            if missing
            else "Request validation failed"
        )
        return error_response(
            request, status.HTTP_400_BAD_REQUEST, "VALIDATION_ERROR", message, details
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(
        request: Request,
        exc: Exception,
    ) -> ORJSONResponse:
        logger.opt(exception=exc).error("Unhandled exception", path=request.url.path)
        return error_response(
            request,
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred",
            f"{type(exc).__name__}: {exc}",
        )
