"""
API Dependencies

Shared dependencies for FastAPI endpoints. The catalog and classifier are
built once in the application lifespan and read from app.state.
"""
import random

from fastapi import Request

from information_layer.core.config import Settings, settings
from information_layer.segmentation import SegmentCatalog, SegmentClassifier


def get_settings() -> Settings:
    return settings


def get_random_source() -> random.Random:
    """Randomness for demo signal generation. Overridden with a seeded source in tests."""
    return random.Random()


def get_catalog(request: Request) -> SegmentCatalog:
    """Process-wide segment catalog."""
    return request.app.state.catalog


def get_classifier(request: Request) -> SegmentClassifier:
    """
    Shared classifier instance.

    Usage:
        @router.post("/classify")
        async def classify(classifier: SegmentClassifier = Depends(get_classifier)):
            ...
    """
    return request.app.state.classifier
