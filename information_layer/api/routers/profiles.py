"""
Visitor Profile Router

Builds a demo visitor profile for a session: a generated signal vector,
its classification, engagement metrics and a business value estimate.
There is no session store, so every call produces a fresh profile.
"""

import random
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Path, Request

from information_layer.api.dependencies import get_classifier, get_random_source
from information_layer.middleware.logging_config import log_business_event
from information_layer.middleware.rate_limiting import limiter, DEFAULT_RATE_LIMIT
from information_layer.segmentation import SegmentClassifier, SegmentId, generate_demo_signals

router = APIRouter(prefix="/api/v1", tags=["profiles"])

HIGH_URGENCY_READINESS = 0.8

PROJECT_VALUE_ESTIMATES = {
    SegmentId.LUXURY_PROJECT_PLANNER.value: "€15,000+",
}
DEFAULT_PROJECT_VALUE = "€3,000+"


@router.get("/user-profile/{session_id}")
@limiter.limit(DEFAULT_RATE_LIMIT)
async def get_user_profile(
    request: Request,
    session_id: str = Path(..., min_length=1, max_length=128, pattern=r"^[A-Za-z0-9_.-]+$"),
    classifier: SegmentClassifier = Depends(get_classifier),
    rng: random.Random = Depends(get_random_source),
):
    """Generate and classify a demo profile for `session_id`."""
    signals = generate_demo_signals("random", rng)
    classification = classifier.classify(signals)

    readiness = classification.consultation_readiness_score
    urgency = "high" if readiness > HIGH_URGENCY_READINESS else "medium"

    if urgency == "high":
        log_business_event(
            "consultation_ready",
            session_id=session_id,
            primary_segment=classification.primary_segment,
            readiness=round(readiness, 4)
        )

    profile = {
        "session_id": session_id,
        "segment_classification": classification.to_dict(),
        "behavioral_history": [signals],
        "engagement_metrics": {
            "total_sessions": rng.randint(1, 10),
            "average_session_duration": signals["session_duration"],
            "content_engagement_score": classification.confidence_score,
            "consultation_interactions": rng.randint(0, 2)
        },
        "business_value": {
            "estimated_project_value": PROJECT_VALUE_ESTIMATES.get(
                classification.primary_segment, DEFAULT_PROJECT_VALUE
            ),
            "consultation_urgency": urgency,
            "conversion_probability": classification.confidence_score
        }
    }

    return {
        "success": True,
        "data": profile,
        "metadata": {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "confidence": classification.confidence_score
        }
    }
