"""
Standardized Error Handling

Provides:
- Custom exception classes for different error types
- Consistent error envelope for every failure
- Correlation ID tracking in errors
- Appropriate HTTP status codes
"""

from datetime import datetime, timezone
from fastapi import Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi.routing import APIRoute
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
import structlog
from typing import Any, Dict, List, Tuple

from information_layer.core.exceptions import InvalidSignalsError

logger = structlog.get_logger(__name__)

# ==================== Custom Exceptions ====================

class APIError(Exception):
    """Base class for API errors."""
    def __init__(
        self,
        message: str,
        error_code: str = None,
        status_code: int = 500,
        details: Dict[str, Any] = None
    ):
        self.message = message
        self.error_code = error_code or "INTERNAL_ERROR"
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(APIError):
    """Input validation error (400)."""
    def __init__(self, message: str, field: str = None, **kwargs):
        details = {"field": field} if field else {}
        details.update(kwargs)
        super().__init__(
            message=message,
            error_code="VALIDATION_ERROR",
            status_code=400,
            details=details
        )


class InvalidSignalsAPIError(APIError):
    """Classifier rejected the signal vector (400)."""
    def __init__(self, error: InvalidSignalsError):
        super().__init__(
            message=error.message,
            error_code="INVALID_SIGNALS",
            status_code=400,
            details={"missing": error.missing, "malformed": error.malformed}
        )


class PayloadTooLargeError(APIError):
    """Request body over the configured limit (413)."""
    def __init__(self, limit_bytes: int, actual_bytes: int = None):
        details = {"limit_bytes": limit_bytes}
        if actual_bytes is not None:
            details["actual_bytes"] = actual_bytes

        super().__init__(
            message=f"Request body exceeds {limit_bytes} bytes",
            error_code="PAYLOAD_TOO_LARGE",
            status_code=413,
            details=details
        )


class RateLimitError(APIError):
    """Rate limit exceeded (429)."""
    def __init__(self, limit: str, retry_after: int = None, **kwargs):
        message = f"Too many requests, please try again later. Limit: {limit}"
        details = {"limit": limit}
        if retry_after:
            details["retry_after_seconds"] = retry_after
        details.update(kwargs)

        super().__init__(
            message=message,
            error_code="RATE_LIMIT_EXCEEDED",
            status_code=429,
            details=details
        )


# ==================== Error Response Format ====================

def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def _correlation_id(request: Request) -> str:
    correlation_id = getattr(request.state, "correlation_id", None)
    if not correlation_id:
        correlation_id = structlog.contextvars.get_contextvars().get("correlation_id")
    return correlation_id


def create_error_response(
    error: Exception,
    path: str = None,
    correlation_id: str = None
) -> Tuple[Dict[str, Any], int]:
    """
    Create standardized error response.

    Format:
    {
        "success": false,
        "error": {
            "code": "ERROR_CODE",
            "message": "Human-readable message",
            "details": {...},
            "correlation_id": "uuid"
        },
        "timestamp": "2025-10-28T10:30:45Z",
        "path": "/api/v1/segment/classify"
    }
    """
    if isinstance(error, APIError):
        error_code = error.error_code
        message = error.message
        details = error.details
        status_code = error.status_code
    elif isinstance(error, StarletteHTTPException):
        error_code = "NOT_FOUND" if error.status_code == 404 else "HTTP_ERROR"
        message = error.detail
        details = {}
        status_code = error.status_code
    else:
        error_code = "INTERNAL_ERROR"
        message = "An unexpected error occurred. Please try again later."
        details = {}
        status_code = 500

    response = {
        "success": False,
        "error": {
            "code": error_code,
            "message": message,
            "details": details
        },
        "timestamp": _timestamp(),
        "path": path
    }

    if correlation_id:
        response["error"]["correlation_id"] = correlation_id

    return response, status_code


def available_endpoints(request: Request) -> List[str]:
    """'METHOD /path' for every API route on the app."""
    endpoints = []
    for route in request.app.routes:
        if not isinstance(route, APIRoute) or not route.include_in_schema:
            continue
        for method in sorted(route.methods - {"HEAD"}):
            endpoints.append(f"{method} {route.path}")
    return endpoints


# ==================== Exception Handlers ====================

async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle custom API errors."""
    log = logger.error if exc.status_code >= 500 else logger.warning
    log(
        "api_error",
        error_code=exc.error_code,
        error_message=exc.message,
        status_code=exc.status_code,
        details=exc.details
    )

    response_data, status_code = create_error_response(
        exc,
        path=request.url.path,
        correlation_id=_correlation_id(request)
    )

    return JSONResponse(
        status_code=status_code,
        content=response_data
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Handle standard HTTP exceptions. Unknown routes list what is available."""
    logger.warning(
        "http_exception",
        status_code=exc.status_code,
        detail=exc.detail,
        path=request.url.path
    )

    response_data, status_code = create_error_response(
        exc,
        path=request.url.path,
        correlation_id=_correlation_id(request)
    )

    if status_code == 404 and exc.detail == "Not Found":
        response_data["error"]["message"] = f"Cannot {request.method} {request.url.path}"
        response_data["error"]["details"]["available_endpoints"] = available_endpoints(request)

    return JSONResponse(
        status_code=status_code,
        content=response_data,
        headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handle request validation errors (422)."""
    validation_errors = []
    for error in exc.errors():
        validation_errors.append({
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"]
        })

    logger.warning(
        "validation_error",
        path=request.url.path,
        errors=validation_errors
    )

    response_data = {
        "success": False,
        "error": {
            "code": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": {
                "validation_errors": validation_errors
            }
        },
        "timestamp": _timestamp(),
        "path": request.url.path
    }

    correlation_id = _correlation_id(request)
    if correlation_id:
        response_data["error"]["correlation_id"] = correlation_id

    return JSONResponse(
        status_code=422,
        content=response_data
    )


async def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """Handle slowapi rate limit errors (429)."""
    return await api_error_handler(request, RateLimitError(limit=str(exc.detail)))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions (500)."""
    correlation_id = _correlation_id(request)

    logger.error(
        "unexpected_error",
        error_type=type(exc).__name__,
        error_message=str(exc),
        path=request.url.path,
        exc_info=exc
    )

    # Don't expose internal details to client
    response_data, status_code = create_error_response(
        exc,
        path=request.url.path,
        correlation_id=correlation_id
    )

    if correlation_id:
        response_data["error"]["message"] += f" Reference: {correlation_id}"

    return JSONResponse(
        status_code=status_code,
        content=response_data
    )
