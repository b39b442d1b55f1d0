"""Global exception handlers for the FastAPI applications.

Every failure in a request, including strict response validation rejections,
ends up as an ``ErrorResponse`` body built by ``create_error_response``. The
handlers log the sanitized error context with the correlation ID bound.
"""

import traceback
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import Response
from loguru import logger
from starlette.exceptions import HTTPException

from api_skeleton.api.constants import HTTP_500_INTERNAL_SERVER_ERROR
from api_skeleton.api.schemas.errors import ErrorResponse, ServiceInfo
from api_skeleton.api.utils.responses import ORJSONResponse
from api_skeleton.core.config import Settings
from api_skeleton.core.context import RequestContext, generate_request_id
from api_skeleton.core.error_context import sanitize_error_context
from api_skeleton.core.exceptions import (
    ErrorCode,
    NotFoundError,
    SkeletonError,
    UnauthorizedError,
    ValidationError,
)


def get_service_info(settings: Settings) -> ServiceInfo:
    """Create ServiceInfo from application settings.

    Args:
        settings: Application settings

    Returns:
        ServiceInfo: Instance with current service metadata
    """
    return ServiceInfo(
        name=settings.app_name,
        version=settings.app_version,
        environment=settings.environment,
    )


def create_error_response(
    request: Request,
    *,
    status_code: int,
    error_code: str | ErrorCode,
    message: str,
    severity: str,
    details: dict[str, Any] | None = None,
    debug_info: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
) -> ORJSONResponse:
    """Render the standard error body for the current request.

    Args:
        request: The request being answered.
        status_code: HTTP status code of the response.
        error_code: Machine-readable error code.
        message: Human-readable message.
        severity: Severity label.
        details: Extra structured information for the client.
        debug_info: Development-only diagnostics.
        headers: Extra response headers.

    Returns:
        ORJSONResponse: The error response.
    """
    settings: Settings = request.app.state.settings
    error_response = ErrorResponse(
        status_code=status_code,
        error_code=(
            error_code.value if isinstance(error_code, ErrorCode) else error_code
        ),
        message=message,
        details=details,
        correlation_id=RequestContext.get_correlation_id(),
        request_id=generate_request_id(),
        severity=severity,
        service_info=get_service_info(settings),
        debug_info=debug_info,
    )
    return ORJSONResponse(
        status_code=status_code,
        content=error_response.model_dump(mode="json"),
        headers=headers,
    )


def _status_for(exc: SkeletonError) -> int:
    if isinstance(exc, ValidationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, NotFoundError):
        return status.HTTP_404_NOT_FOUND
    if isinstance(exc, UnauthorizedError):
        return status.HTTP_401_UNAUTHORIZED
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def skeleton_error_handler(request: Request, exc: Exception) -> Response:
    """Handle SkeletonError exceptions.

    Args:
        request: The FastAPI request that caused the exception
        exc: The SkeletonError exception to handle

    Returns:
        Response: ORJSONResponse with error details

    Raises:
        TypeError: If exc is not a SkeletonError instance
    """
    if not isinstance(exc, SkeletonError):
        raise TypeError(f"Expected SkeletonError, got {type(exc).__name__}")

    settings: Settings = request.app.state.settings
    status_code = _status_for(exc)

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
            "error_code": exc.error_code,
            "fingerprint": exc.fingerprint,
        },
    )
    log = logger.warning if exc.is_expected else logger.error
    log(
        "Handling {exception_type}: {message}",
        exception_type=type(exc).__name__,
        message=exc.message,
        status_code=status_code,
        **error_context,
    )

    debug_info = None
    if settings.environment == "development":
        debug_info = {
            "stack_trace": exc.stack_trace,
            "exception_type": type(exc).__name__,
        }
        if exc.cause:
            debug_info["cause"] = {
                "type": type(exc.cause).__name__,
                "message": str(exc.cause),
            }

    headers = None
    if isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Basic"}

    return create_error_response(
        request,
        status_code=status_code,
        error_code=exc.error_code,
        message=exc.message,
        severity=exc.severity.value,
        details=exc.context or None,
        debug_info=debug_info,
        headers=headers,
    )


def _field_name(location: tuple[Any, ...] | list[Any]) -> str:
    """Join an error location, dropping the leading source ('query', 'body')."""
    name = ".".join(str(loc) for loc in location[1:] if loc != "__root__")
    return name or "root"


async def validation_error_handler(request: Request, exc: Exception) -> Response:
    """Handle FastAPI RequestValidationError exceptions.

    Bracketed query parameter names such as ``page[number]`` are reported
    verbatim.

    Args:
        request: The FastAPI request that caused the exception
        exc: The RequestValidationError exception to handle

    Returns:
        Response: ORJSONResponse with validation error details

    Raises:
        TypeError: If exc is not a RequestValidationError instance
    """
    if not isinstance(exc, RequestValidationError):
        raise TypeError(f"Expected RequestValidationError, got {type(exc).__name__}")

    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field_name = _field_name(error.get("loc", ()))
        field_errors.setdefault(field_name, []).append(
            error.get("msg", "Invalid value")
        )

    error_context = sanitize_error_context(
        exc,
        {
            "path": str(request.url.path),
            "method": request.method,
            "validation_errors": field_errors,
        },
    )
    logger.warning(
        "Request validation failed",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        **error_context,
    )

    return create_error_response(
        request,
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        error_code=ErrorCode.VALIDATION_ERROR,
        message="Request validation failed",
        severity="LOW",
        details={"validation_errors": field_errors},
    )


async def http_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle Starlette HTTPException, including unmatched routes (404).

    Args:
        request: The FastAPI request that caused the exception
        exc: The HTTPException to handle

    Returns:
        Response: ORJSONResponse with error details

    Raises:
        TypeError: If exc is not an HTTPException instance
    """
    if not isinstance(exc, HTTPException):
        raise TypeError(f"Expected HTTPException, got {type(exc).__name__}")

    error_code = ErrorCode.INTERNAL_ERROR
    severity = "MEDIUM"
    message = str(exc.detail)

    if exc.status_code == status.HTTP_400_BAD_REQUEST:
        error_code = ErrorCode.VALIDATION_ERROR
        severity = "LOW"
    elif exc.status_code == status.HTTP_401_UNAUTHORIZED:
        error_code = ErrorCode.UNAUTHORIZED
        severity = "HIGH"
    elif exc.status_code == status.HTTP_404_NOT_FOUND:
        error_code = ErrorCode.NOT_FOUND
        severity = "LOW"
        if message == "Not Found":
            message = "Resource not found."
    elif exc.status_code >= HTTP_500_INTERNAL_SERVER_ERROR:
        severity = "HIGH"

    error_context = sanitize_error_context(
        exc,
        {
            "status": exc.status_code,
            "method": request.method,
            "path": str(request.url.path),
        },
    )
    logger.warning("HTTP exception", **error_context)

    return create_error_response(
        request,
        status_code=exc.status_code,
        error_code=error_code,
        message=message,
        severity=severity,
        headers=getattr(exc, "headers", None),
    )


async def generic_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle any exception no other handler claimed.

    In production the internal details are hidden from the client.

    Args:
        request: The FastAPI request that caused the exception
        exc: The unhandled exception

    Returns:
        Response: ORJSONResponse with generic error message
    """
    settings: Settings = request.app.state.settings

    error_context = sanitize_error_context(
        exc,
        {
            "request_method": request.method,
            "request_path": str(request.url.path),
        },
    )
    logger.opt(exception=exc).error(
        "Unhandled exception: {exception_type}",
        exception_type=type(exc).__name__,
        **error_context,
    )

    if settings.environment == "production":
        message = "An internal server error occurred"
        details = None
        debug_info = None
    else:
        message = f"Internal server error: {type(exc).__name__}"
        details = {"error": str(exc), "type": type(exc).__name__}
        debug_info = {
            "stack_trace": traceback.format_tb(exc.__traceback__),
            "exception_type": type(exc).__name__,
        }

    return create_error_response(
        request,
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        error_code=ErrorCode.INTERNAL_ERROR,
        message=message,
        severity="CRITICAL",
        details=details,
        debug_info=debug_info,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(SkeletonError, skeleton_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)

    logger.debug("Exception handlers registered")
