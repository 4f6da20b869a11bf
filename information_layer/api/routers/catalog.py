"""
Segment Catalog Router

Read-only view of the MOHD segment configuration: segments with their
thresholds, content angles, business rules and catalog metadata.
"""

from fastapi import APIRouter, Depends, Request

from information_layer.api.dependencies import get_catalog
from information_layer.middleware.rate_limiting import limiter, DEFAULT_RATE_LIMIT
from information_layer.segmentation import SegmentCatalog

router = APIRouter(prefix="/api/v1/mohd", tags=["catalog"])


@router.get("/config")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_catalog_config(request: Request, catalog: SegmentCatalog = Depends(get_catalog)):
    """Full segment catalog with entry counts."""
    return {
        "success": True,
        "data": {
            "config": catalog.to_dict(),
            "stats": catalog.stats()
        }
    }
