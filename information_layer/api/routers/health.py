"""
Health Check Endpoints Router

Provides health check endpoints for monitoring and load balancers.
"""
import time
from datetime import datetime, timezone
from fastapi import APIRouter, HTTPException, Request

from information_layer.core.config import settings
from information_layer.middleware.logging_config import get_logger
from information_layer.middleware.metrics import metrics_endpoint, METRICS_ENABLED
from information_layer.middleware.rate_limiting import limiter, DEFAULT_RATE_LIMIT

logger = get_logger(__name__)

router = APIRouter(
    tags=["health"],
    responses={404: {"description": "Not found"}},
)


@router.get("/health")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def health_check(request: Request):
    """
    Basic health check endpoint.

    Returns 200 if service is running.
    """
    started_at = getattr(request.app.state, "started_at", None)
    uptime = time.monotonic() - started_at if started_at is not None else 0.0

    return {
        "success": True,
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime_seconds": round(uptime, 3),
        "version": settings.app_version
    }


@router.get("/health/live")
async def liveness_probe():
    """Kubernetes liveness probe."""
    return {"status": "alive"}


@router.get("/metrics")
async def prometheus_metrics():
    """
    Prometheus metrics endpoint (optional - only if ENABLE_PROMETHEUS_METRICS=true).

    Returns application metrics in Prometheus exposition format.
    """
    if not METRICS_ENABLED:
        raise HTTPException(
            status_code=404,
            detail="Metrics disabled. Set ENABLE_PROMETHEUS_METRICS=true to enable."
        )
    return await metrics_endpoint()
