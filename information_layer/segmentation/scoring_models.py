"""
Segment Scoring Models

One SegmentScoringModel per SegmentId. Each variant carries:
- three weighted terms (weights sum to 1.0)
- up to three factor rules, in reporting order
- the content angle it maps to
- its consultation readiness multiplier

SCORING_MODELS is checked at import to cover SegmentId exactly, so adding a
segment without a scoring model fails fast.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from information_layer.segmentation import signals as sig
from information_layer.segmentation.catalog import ContentAngleId, SegmentId


# Engagement level a ratio signal must exceed to count as a classification factor
FACTOR_THRESHOLD = 0.6

HERITAGE_TIME_CAP_SECONDS = 120.0
HERITAGE_TIME_FACTOR_SECONDS = 90.0


@dataclass(frozen=True)
class WeightedTerm:
    """weight * value, where value is optionally soft-capped (value / cap, max 1)
    or reduced to 0/1 for flag signals."""
    signal: str
    weight: float
    cap: Optional[float] = None
    flag: bool = False

    def value(self, signals: Mapping[str, Any]) -> float:
        raw = signals[self.signal]
        if self.flag:
            return 1.0 if raw else 0.0
        if self.cap is not None:
            return min(raw / self.cap, 1.0)
        return raw

    def contribution(self, signals: Mapping[str, Any]) -> float:
        return self.value(signals) * self.weight


@dataclass(frozen=True)
class FactorRule:
    """A human-readable factor reported when the signal exceeds threshold.
    A rule without threshold fires on a truthy flag."""
    signal: str
    label: str
    threshold: Optional[float] = FACTOR_THRESHOLD

    def applies(self, signals: Mapping[str, Any]) -> bool:
        value = signals[self.signal]
        if self.threshold is None:
            return bool(value)
        return value > self.threshold


@dataclass(frozen=True)
class SegmentScoringModel:
    segment: SegmentId
    terms: Tuple[WeightedTerm, ...]
    factors: Tuple[FactorRule, ...]
    content_angle: ContentAngleId
    readiness_multiplier: float

    def __post_init__(self):
        total = sum(term.weight for term in self.terms)
        if abs(total - 1.0) > 1e-9:
            raise ValueError(f"{self.segment.value} weights sum to {total}, expected 1.0")

    def raw_score(self, signals: Mapping[str, Any]) -> float:
        score = 0.0
        for term in self.terms:
            score += term.contribution(signals)
        return score

    def score(self, signals: Mapping[str, Any]) -> float:
        """Weighted score clamped to [0, 1]."""
        return min(max(self.raw_score(signals), 0.0), 1.0)

    def matched_factors(self, signals: Mapping[str, Any]) -> list:
        return [rule.label for rule in self.factors if rule.applies(signals)]


# ==================== Variants ====================

HERITAGE_MODEL = SegmentScoringModel(
    segment=SegmentId.ITALIAN_HERITAGE_ADVOCATE,
    terms=(
        WeightedTerm(sig.DESIGNER_STORY_ENGAGEMENT, 0.4),
        WeightedTerm(sig.CRAFTSMANSHIP_CONTENT_FOCUS, 0.3),
        WeightedTerm(sig.HERITAGE_CONTENT_TIME, 0.3, cap=HERITAGE_TIME_CAP_SECONDS),
    ),
    factors=(
        FactorRule(sig.DESIGNER_STORY_ENGAGEMENT, "High designer story engagement"),
        FactorRule(sig.CRAFTSMANSHIP_CONTENT_FOCUS, "Strong craftsmanship interest"),
        FactorRule(sig.HERITAGE_CONTENT_TIME, "Extended heritage content consumption",
                   threshold=HERITAGE_TIME_FACTOR_SECONDS),
    ),
    content_angle=ContentAngleId.ITALIAN_HERITAGE,
    readiness_multiplier=1.1,
)

PLANNER_MODEL = SegmentScoringModel(
    segment=SegmentId.LUXURY_PROJECT_PLANNER,
    terms=(
        WeightedTerm(sig.MULTI_ROOM_NAVIGATION, 0.35, flag=True),
        WeightedTerm(sig.COMPLETE_PROJECT_INTEREST, 0.35),
        WeightedTerm(sig.BUDGET_PREMIUM_INDICATORS, 0.3),
    ),
    factors=(
        FactorRule(sig.MULTI_ROOM_NAVIGATION, "Multi-room project exploration", threshold=None),
        FactorRule(sig.COMPLETE_PROJECT_INTEREST, "Complete project interest signals"),
        FactorRule(sig.BUDGET_PREMIUM_INDICATORS, "Premium budget indicators"),
    ),
    content_angle=ContentAngleId.PROJECT_COMPLETION,
    readiness_multiplier=1.5,
)

MINIMALIST_MODEL = SegmentScoringModel(
    segment=SegmentId.INTERNATIONAL_MINIMALIST,
    terms=(
        WeightedTerm(sig.CLEAN_AESTHETIC_PREFERENCE, 0.4),
        WeightedTerm(sig.INTEGRATION_CONTENT_FOCUS, 0.35),
        WeightedTerm(sig.CONTEMPORARY_BROWSING_PATTERN, 0.25),
    ),
    factors=(
        FactorRule(sig.CLEAN_AESTHETIC_PREFERENCE, "Clean aesthetic preference"),
        FactorRule(sig.INTEGRATION_CONTENT_FOCUS, "Integration-focused browsing"),
        FactorRule(sig.CONTEMPORARY_BROWSING_PATTERN, "Contemporary design pattern"),
    ),
    content_angle=ContentAngleId.CONTEMPORARY_INTEGRATION,
    readiness_multiplier=0.8,
)

HOSPITALITY_MODEL = SegmentScoringModel(
    segment=SegmentId.HOSPITALITY_PROFESSIONAL,
    terms=(
        WeightedTerm(sig.COMMERCIAL_SCALE_INDICATORS, 0.4),
        WeightedTerm(sig.DURABILITY_SPECS_INTEREST, 0.3),
        WeightedTerm(sig.TECHNICAL_DOCUMENTATION_FOCUS, 0.3),
    ),
    factors=(
        FactorRule(sig.COMMERCIAL_SCALE_INDICATORS, "Commercial scale indicators"),
        FactorRule(sig.DURABILITY_SPECS_INTEREST, "Technical specification focus"),
        FactorRule(sig.TECHNICAL_DOCUMENTATION_FOCUS, "Professional documentation interest"),
    ),
    content_angle=ContentAngleId.ARTISANAL_EXCELLENCE,
    readiness_multiplier=1.3,
)

SCORING_MODELS: Mapping[SegmentId, SegmentScoringModel] = MappingProxyType({
    model.segment: model
    for model in (HERITAGE_MODEL, PLANNER_MODEL, MINIMALIST_MODEL, HOSPITALITY_MODEL)
})

if set(SCORING_MODELS) != set(SegmentId):
    raise RuntimeError("every SegmentId needs a scoring model")


def get_scoring_model(segment_id: str) -> Optional[SegmentScoringModel]:
    """Look up a variant by id string. None for ids outside the catalog."""
    try:
        return SCORING_MODELS[SegmentId(segment_id)]
    except ValueError:
        return None
