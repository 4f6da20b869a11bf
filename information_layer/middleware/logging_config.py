"""
Structured Logging Configuration

structlog setup for the information layer. Every log line emitted while a
request is in flight carries its request context:

- correlation_id: from X-Correlation-ID / X-Request-ID, or a new UUID4
- session_id: the visitor session from X-Session-ID, when the frontend sends one
- method and path

so a classification can be traced from request_started to
segment_classification_completed to request_completed.
"""

import logging
import time
import uuid

import structlog
from fastapi import Request

SESSION_HEADER = "X-Session-ID"
CORRELATION_HEADER = "X-Correlation-ID"


# ==================== Configuration ====================

def configure_logging(log_level: str = "INFO", json_logs: bool = True):
    """
    Configure structlog and route stdlib logging (uvicorn) to the same level.

    Args:
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL
        json_logs: JSON lines for log shipping; console renderer otherwise
    """
    level = getattr(logging, log_level.upper())

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if json_logs:
        processors = shared_processors + [
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False),
            structlog.dev.ConsoleRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(format="%(message)s", level=level, force=True)


# ==================== Request Context Middleware ====================

async def correlation_id_middleware(request: Request, call_next):
    """
    Bind the request context to structlog contextvars for the request's lifetime.

    The correlation ID is also stored on request.state for the error handlers
    and echoed in the X-Correlation-ID response header.
    """
    correlation_id = (
        request.headers.get(CORRELATION_HEADER)
        or request.headers.get("X-Request-ID")
        or str(uuid.uuid4())
    )
    request.state.correlation_id = correlation_id

    context = {
        "correlation_id": correlation_id,
        "method": request.method,
        "path": request.url.path,
    }
    session_id = request.headers.get(SESSION_HEADER)
    if session_id:
        context["session_id"] = session_id

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(**context)

    logger = structlog.get_logger()
    logger.info(
        "request_started",
        client_ip=request.client.host if request.client else "unknown",
        user_agent=request.headers.get("user-agent", "unknown")
    )

    start_time = time.perf_counter()
    try:
        response = await call_next(request)
    except Exception as e:
        logger.error(
            "request_failed",
            error_type=type(e).__name__,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2),
            exc_info=True
        )
        raise
    else:
        response.headers[CORRELATION_HEADER] = correlation_id
        logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=round((time.perf_counter() - start_time) * 1000, 2)
        )
        return response
    finally:
        structlog.contextvars.clear_contextvars()


# ==================== Helper Functions ====================

def get_logger(name: str = None):
    """
    Usage:
        logger = get_logger(__name__)
        logger.info("segment_classification_completed", primary_segment="luxury_project_planner")
    """
    return structlog.get_logger(name)


def log_business_event(event_type: str, **details):
    """
    Log an event the sales team tracks, e.g. a session ready for consultation.

    Usage:
        log_business_event("consultation_ready", session_id="abc", readiness=0.92)
    """
    structlog.get_logger().info("business_event", event_type=event_type, **details)
