"""
API Routers

Exports all routers for the FastAPI application.
"""
from .health import router as health_router
from .system import router as system_router
from .segments import router as segments_router
from .catalog import router as catalog_router
from .profiles import router as profiles_router
from .analytics import router as analytics_router

__all__ = [
    "health_router",
    "system_router",
    "segments_router",
    "catalog_router",
    "profiles_router",
    "analytics_router",
]
