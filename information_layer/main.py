"""
VDE Information Layer API

FastAPI application providing:
1. Visitor segment classification from behavioral signals
2. Demo signal generation and demo visitor profiles
3. Read-only segment catalog configuration

Version: 1.0.0
"""

import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from information_layer.core.config import settings

# Import structured logging
from information_layer.middleware.logging_config import configure_logging, get_logger, correlation_id_middleware

# Import error handling
from information_layer.middleware.error_handling import (
    APIError,
    PayloadTooLargeError,
    api_error_handler,
    create_error_response,
    http_exception_handler,
    validation_exception_handler,
    rate_limit_exceeded_handler,
    generic_exception_handler
)

# Import Prometheus metrics (optional)
from information_layer.middleware.metrics import metrics_middleware, METRICS_ENABLED

from information_layer.middleware.rate_limiting import limiter

from information_layer.segmentation import DEFAULT_CATALOG, SegmentClassifier

# Import routers
from information_layer.api.routers import (
    health_router,
    system_router,
    segments_router,
    catalog_router,
    profiles_router,
    analytics_router,
)

configure_logging(log_level=settings.log_level, json_logs=settings.json_logs)

logger = get_logger(__name__)


# ==================== Application Lifespan ====================

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: startup and shutdown."""
    logger.info("application_starting", version=settings.app_version, environment=settings.environment)

    # Catalog is static for the life of the process
    app.state.catalog = DEFAULT_CATALOG
    app.state.classifier = SegmentClassifier(DEFAULT_CATALOG)
    app.state.started_at = time.monotonic()

    logger.info(
        "segment_catalog_loaded",
        version=DEFAULT_CATALOG.metadata.get("version"),
        **DEFAULT_CATALOG.stats()
    )

    missing_keys = settings.missing_api_keys()
    if missing_keys:
        logger.warning(
            "api_keys_not_configured",
            missing_keys=missing_keys,
            demo_mode=settings.enable_demo_mode,
            impact="external integrations unavailable; classification unaffected"
        )

    yield

    logger.info("application_stopping")


# ==================== FastAPI Application ====================

app = FastAPI(
    title="VDE Information Layer API",
    description="""
## Visual Discovery Engine: Information Layer

Classifies a visitor session into one of four customer segments from 16
behavioral signals.

### Segments
- **italian_heritage_advocate**: designer stories and craftsmanship
- **luxury_project_planner**: complete multi-room projects
- **international_minimalist**: clean contemporary integration
- **hospitality_professional**: commercial and technical buyers

Each classification returns the segment probabilities, the factors that
triggered it, a recommended content angle and a consultation readiness score.
    """,
    version=settings.app_version,
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_tags=[
        {"name": "health", "description": "Health check and system status endpoints"},
        {"name": "system", "description": "Service information and configuration status"},
        {"name": "segments", "description": "Visitor segment classification"},
        {"name": "catalog", "description": "Segment catalog configuration"},
        {"name": "profiles", "description": "Demo visitor profiles"},
        {"name": "analytics", "description": "Demo session analytics"},
    ]
)

# ==================== Exception Handlers ====================

app.add_exception_handler(APIError, api_error_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

logger.info("error_handlers_registered", handlers=["APIError", "HTTPException", "ValidationError", "Exception"])

# ==================== Rate Limiting ====================

app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

logger.info("rate_limiting_configured", enabled=settings.rate_limit_enabled, limit=settings.rate_limit)

# ==================== Middleware ====================

ALLOWED_ORIGINS = settings.allowed_origins_list

# Validate no wildcard in production
if settings.is_production and "*" in ALLOWED_ORIGINS:
    raise ValueError("Wildcard CORS origins not allowed in production")


@app.middleware("http")
async def request_size_limit_middleware(request: Request, call_next):
    """Reject bodies larger than MAX_REQUEST_BODY_BYTES before they are parsed."""
    content_length = request.headers.get("content-length")
    limit = settings.max_request_body_bytes

    if content_length and content_length.isdigit() and int(content_length) > limit:
        logger.warning("request_body_too_large", content_length=int(content_length), limit=limit)
        response_data, status_code = create_error_response(
            PayloadTooLargeError(limit_bytes=limit, actual_bytes=int(content_length)),
            path=request.url.path,
            correlation_id=getattr(request.state, "correlation_id", None)
        )
        return JSONResponse(status_code=status_code, content=response_data)

    return await call_next(request)


# Add Prometheus metrics middleware (optional - only if enabled)
if METRICS_ENABLED:
    app.middleware("http")(metrics_middleware)
    logger.info("prometheus_middleware_enabled")

# Correlation IDs wrap everything below so every log line carries one
app.middleware("http")(correlation_id_middleware)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=[
        "Content-Type",
        "Authorization",
        "X-Session-ID",
        "X-Correlation-ID",
        "X-Request-ID",
        "Accept",
        "Origin"
    ],
    expose_headers=[
        "Content-Type",
        "X-Correlation-ID"
    ],
)

logger.info("cors_configured", origins=ALLOWED_ORIGINS)


# ==================== Include Routers ====================

app.include_router(health_router)
app.include_router(system_router)
app.include_router(segments_router)
app.include_router(catalog_router)
app.include_router(profiles_router)
app.include_router(analytics_router)

logger.info("routers_registered", routers=["health", "system", "segments", "catalog", "profiles", "analytics"])


# ==================== Run Application ====================

if __name__ == "__main__":
    uvicorn.run(
        "information_layer.main:app",
        host="0.0.0.0",
        port=settings.port,
        log_level=settings.log_level.lower()
    )
