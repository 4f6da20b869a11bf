"""
Segment Classifier

Maps a session's behavioral signal vector onto one of the four catalog
segments and derives the supporting metadata:

1. Segment probabilities: weighted linear score per segment, clamped to [0, 1]
2. Primary segment: highest probability among segments that clear their own
   confidence threshold (first declared wins ties); international_minimalist
   when none do
3. Classification factors: which of the primary segment's signals crossed
   their factor threshold
4. Content angle: fixed lookup from the primary segment
5. Consultation readiness: engagement depth scaled by a per-segment
   multiplier; falls back to 0.5 if it cannot be computed

The classifier is pure and stateless apart from the read-only catalog, so a
single instance is shared by every request.
"""

import math
import time
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from information_layer.core.exceptions import DegradedComputationError, InvalidSignalsError
from information_layer.middleware.logging_config import get_logger
from information_layer.middleware.metrics import track_classification, track_readiness_fallback
from information_layer.segmentation import signals as sig
from information_layer.segmentation.catalog import (
    DEFAULT_CATALOG,
    DEFAULT_CONTENT_ANGLE,
    DEFAULT_PRIMARY_SEGMENT,
    SegmentCatalog,
)
from information_layer.segmentation.scoring_models import get_scoring_model

logger = get_logger(__name__)

READINESS_FALLBACK = 0.5
DEFAULT_READINESS_MULTIPLIER = 1.0

SESSION_DURATION_CAP_SECONDS = 600.0
PAGE_DEPTH_CAP = 10.0


@dataclass
class ClassificationResult:
    """Classification of a single session"""
    primary_segment: str
    confidence_score: float
    segment_probabilities: Dict[str, float]
    classification_factors: List[str] = field(default_factory=list)
    recommended_content_angle: str = DEFAULT_CONTENT_ANGLE.value
    consultation_readiness_score: float = READINESS_FALLBACK

    def to_dict(self) -> Dict[str, Any]:
        return {
            "primary_segment": self.primary_segment,
            "confidence_score": self.confidence_score,
            "segment_probabilities": dict(self.segment_probabilities),
            "classification_factors": list(self.classification_factors),
            "recommended_content_angle": self.recommended_content_angle,
            "consultation_readiness_score": self.consultation_readiness_score,
        }


class SegmentClassifier:
    """
    Rule-based segment classifier.

    Usage:
        classifier = SegmentClassifier(catalog)
        result = classifier.classify(signals)
    """

    def __init__(self, catalog: Optional[SegmentCatalog] = None):
        self.catalog = catalog or DEFAULT_CATALOG

    def classify(self, signals: Mapping[str, Any]) -> ClassificationResult:
        """
        Classify a session from its signal vector.

        Args:
            signals: All 16 required signals; extra keys are ignored

        Returns:
            ClassificationResult

        Raises:
            InvalidSignalsError: missing or malformed signals (nothing is scored)
        """
        start_time = time.perf_counter()

        try:
            signals = sig.validate_signals(signals)
        except InvalidSignalsError as e:
            logger.error(
                "segment_classification_failed",
                error=e.message,
                missing=e.missing,
                malformed=e.malformed,
                signal_count=len(signals) if isinstance(signals, Mapping) else 0,
            )
            raise

        probabilities = self.calculate_segment_probabilities(signals)
        primary_segment = self.select_primary_segment(probabilities)

        result = ClassificationResult(
            primary_segment=primary_segment,
            confidence_score=probabilities[primary_segment],
            segment_probabilities=probabilities,
            classification_factors=self.identify_classification_factors(signals, primary_segment),
            recommended_content_angle=self.select_content_angle(primary_segment),
            consultation_readiness_score=self.calculate_consultation_readiness(signals, primary_segment),
        )

        duration = time.perf_counter() - start_time
        track_classification(primary_segment, duration)

        logger.info(
            "segment_classification_completed",
            primary_segment=primary_segment,
            confidence=round(result.confidence_score, 4),
            processing_time_ms=round(duration * 1000, 3),
            signal_count=len(signals),
        )

        return result

    def calculate_segment_probabilities(self, signals: Mapping[str, Any]) -> Dict[str, float]:
        """Clamped weighted score for every segment, in catalog order."""
        probabilities = {}
        for segment in self.catalog.segments:
            model = get_scoring_model(segment.id.value)
            probabilities[segment.id.value] = model.score(signals)
        return probabilities

    def select_primary_segment(self, probabilities: Mapping[str, float]) -> str:
        """
        Pick the highest-scoring segment that clears its own confidence threshold.

        Segments are visited in catalog order with a strict comparison, so the
        first declared segment wins an exact tie. If no segment qualifies the
        result is international_minimalist regardless of its score.
        """
        max_score = 0.0
        primary_segment = DEFAULT_PRIMARY_SEGMENT.value

        for segment_id in self.catalog.segment_ids:
            probability = probabilities[segment_id]
            if probability >= self.catalog.confidence_threshold(segment_id) and probability > max_score:
                max_score = probability
                primary_segment = segment_id

        return primary_segment

    def identify_classification_factors(self, signals: Mapping[str, Any], primary_segment: str) -> List[str]:
        model = get_scoring_model(primary_segment)
        if model is None:
            return []
        return model.matched_factors(signals)

    def select_content_angle(self, primary_segment: str) -> str:
        model = get_scoring_model(primary_segment)
        if model is None:
            return DEFAULT_CONTENT_ANGLE.value
        return model.content_angle.value

    def calculate_consultation_readiness(self, signals: Mapping[str, Any], primary_segment: str) -> float:
        """
        How ready the session is for a human sales follow-up, in [0, 1].

        base = 0.3 * min(session_duration / 600, 1)
             + 0.2 * min(page_depth / 10, 1)
             + 0.3 * product_interaction_quality
             + 0.2 * return_visitor_pattern

        scaled by the segment's multiplier. Any failure yields 0.5.
        """
        try:
            base_score = (
                min(signals[sig.SESSION_DURATION] / SESSION_DURATION_CAP_SECONDS, 1.0) * 0.3 +
                min(signals[sig.PAGE_DEPTH] / PAGE_DEPTH_CAP, 1.0) * 0.2 +
                signals[sig.PRODUCT_INTERACTION_QUALITY] * 0.3 +
                (0.2 if signals[sig.RETURN_VISITOR_PATTERN] else 0.0)
            )

            model = get_scoring_model(primary_segment)
            multiplier = model.readiness_multiplier if model else DEFAULT_READINESS_MULTIPLIER

            score = base_score * multiplier
            if not math.isfinite(score):
                raise DegradedComputationError(
                    "Consultation readiness is not a finite number",
                    {"base_score": base_score, "multiplier": multiplier},
                )

            return min(max(score, 0.0), 1.0)

        except Exception as e:
            logger.warning(
                "consultation_readiness_fallback",
                error=str(e),
                error_type=type(e).__name__,
                primary_segment=primary_segment,
                fallback=READINESS_FALLBACK,
            )
            track_readiness_fallback()
            return READINESS_FALLBACK
