"""
Segment Classification Router

Provides real-time segment classification for a browsing session, either
from an explicit signal vector or from a generated demo vector.
"""

import random
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Union

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, Field, StrictBool, StrictFloat, StrictInt, field_validator

from information_layer.api.dependencies import get_classifier, get_random_source, get_settings
from information_layer.core.config import Settings
from information_layer.core.exceptions import InvalidSignalsError
from information_layer.middleware.error_handling import InvalidSignalsAPIError, ValidationError
from information_layer.middleware.rate_limiting import limiter, DEFAULT_RATE_LIMIT
from information_layer.segmentation import SegmentClassifier, generate_demo_signals
from information_layer.segmentation.signals import UNBOUNDED_SIGNALS, is_finite_number

router = APIRouter(prefix="/api/v1/segment", tags=["segments"])

SignalValue = Union[StrictBool, StrictInt, StrictFloat]


# ==================== Request/Response Models ====================

class SegmentClassifyRequest(BaseModel):
    """Signals to classify, or a demo selector that replaces them."""
    signals: Optional[Dict[str, SignalValue]] = Field(
        default=None,
        description="Behavioral signals keyed by name. Numbers or booleans only."
    )
    demo_mode: Optional[Literal["heritage", "planner", "random"]] = Field(
        default=None,
        description="Generate a demo signal vector instead of using `signals`"
    )

    @field_validator("signals")
    @classmethod
    def check_signal_ranges(cls, signals):
        if signals is None:
            return signals

        for key, value in signals.items():
            if isinstance(value, bool):
                continue
            if not is_finite_number(value):
                raise ValueError(f"Signal '{key}' must be a finite number that fits in a float")
            if value < 0:
                raise ValueError(f"Signal '{key}' must not be negative, got {value}")
            if key not in UNBOUNDED_SIGNALS and value > 1:
                raise ValueError(f"Signal '{key}' must be between 0 and 1, got {value}")

        return signals

    model_config = {
        "json_schema_extra": {
            "example": {
                "signals": {
                    "designer_story_engagement": 0.9,
                    "craftsmanship_content_focus": 0.8,
                    "heritage_content_time": 150,
                    "multi_room_navigation": False,
                    "complete_project_interest": 0.3,
                    "budget_premium_indicators": 0.5,
                    "clean_aesthetic_preference": 0.4,
                    "integration_content_focus": 0.3,
                    "contemporary_browsing_pattern": 0.2,
                    "commercial_scale_indicators": 0.1,
                    "durability_specs_interest": 0.2,
                    "technical_documentation_focus": 0.1,
                    "session_duration": 420,
                    "page_depth": 9,
                    "product_interaction_quality": 0.75,
                    "return_visitor_pattern": True
                }
            }
        }
    }


class SegmentClassification(BaseModel):
    primary_segment: str
    confidence_score: float
    segment_probabilities: Dict[str, float]
    classification_factors: List[str]
    recommended_content_angle: str
    consultation_readiness_score: float


class ProcessingInfo(BaseModel):
    timestamp: datetime
    demo_mode: Union[str, bool]
    algorithm_version: str
    validated: bool = True


class ClassificationData(BaseModel):
    classification: SegmentClassification
    signals_used: Dict[str, Any]
    processing_info: ProcessingInfo


class SegmentClassifyResponse(BaseModel):
    success: bool = True
    data: ClassificationData


# ==================== Classification Endpoint ====================

@router.post("/classify", response_model=SegmentClassifyResponse)
@limiter.limit(DEFAULT_RATE_LIMIT)
async def classify_segment(
    request: Request,
    body: SegmentClassifyRequest,
    classifier: SegmentClassifier = Depends(get_classifier),
    settings: Settings = Depends(get_settings),
    rng: random.Random = Depends(get_random_source),
):
    """
    Classify a browsing session into a customer segment.

    Send either:
    - `signals`: all 16 behavioral signals
    - `demo_mode`: heritage, planner or random to classify a generated vector

    `demo_mode` takes precedence when both are present.
    """
    if body.demo_mode:
        signals = generate_demo_signals(body.demo_mode, rng)
    elif body.signals is not None:
        signals = body.signals
    else:
        raise ValidationError(
            "No signals provided and demo_mode not specified",
            field="signals"
        )

    try:
        result = classifier.classify(signals)
    except InvalidSignalsError as e:
        raise InvalidSignalsAPIError(e)

    return SegmentClassifyResponse(
        data=ClassificationData(
            classification=SegmentClassification(**result.to_dict()),
            signals_used=signals,
            processing_info=ProcessingInfo(
                timestamp=datetime.now(timezone.utc),
                demo_mode=body.demo_mode or False,
                algorithm_version=settings.app_version,
            ),
        )
    )
