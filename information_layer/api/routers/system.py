"""
System Information Router

Provides:
- Service description and feature flags
- Credential configuration status (presence only, no external calls)
"""

from datetime import datetime, timezone
from fastapi import APIRouter, Depends, Request

from information_layer.api.dependencies import get_settings
from information_layer.core.config import Settings
from information_layer.middleware.metrics import METRICS_ENABLED
from information_layer.middleware.rate_limiting import limiter, DEFAULT_RATE_LIMIT

router = APIRouter(prefix="/api/v1", tags=["system"])


@router.get("/demo")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def service_info(request: Request, settings: Settings = Depends(get_settings)):
    """Service information for the demo frontend."""
    return {
        "message": "VDE Information Layer API",
        "version": settings.app_version,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "status": "operational",
        "features": {
            "segment_classification": "rule_based",
            "demo_modes": ["heritage", "planner", "random"],
            "input_validation": "strict",
            "rate_limit": settings.rate_limit if settings.rate_limit_enabled else "disabled",
            "cors_origins": settings.allowed_origins_list,
            "prometheus_metrics": METRICS_ENABLED
        }
    }


@router.get("/config/status")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def configuration_status(request: Request, settings: Settings = Depends(get_settings)):
    """
    Report which third-party credentials are configured.

    Values are never returned, only whether each one is set to something
    other than a template placeholder.
    """
    return {
        "success": True,
        "data": settings.configuration_status(),
        "timestamp": datetime.now(timezone.utc).isoformat()
    }
