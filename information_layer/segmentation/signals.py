"""
Behavioral Signal Contract

The 16 session signals every classification needs, grouped by how the
scoring math treats them:

- Flag signals: truthiness only (bool or number)
- Unbounded signals: positive magnitudes (seconds, page count), soft-capped
  by the scoring formulas
- Bounded signals: engagement ratios expected in [0, 1]

validate_signals() is the classifier's own precondition check. It runs
before any scoring so a bad vector never produces a partial result.
"""

import math
from numbers import Real
from typing import Any, Dict, List, Mapping

from information_layer.core.exceptions import InvalidSignalsError


DESIGNER_STORY_ENGAGEMENT = "designer_story_engagement"
CRAFTSMANSHIP_CONTENT_FOCUS = "craftsmanship_content_focus"
HERITAGE_CONTENT_TIME = "heritage_content_time"
MULTI_ROOM_NAVIGATION = "multi_room_navigation"
COMPLETE_PROJECT_INTEREST = "complete_project_interest"
BUDGET_PREMIUM_INDICATORS = "budget_premium_indicators"
CLEAN_AESTHETIC_PREFERENCE = "clean_aesthetic_preference"
INTEGRATION_CONTENT_FOCUS = "integration_content_focus"
CONTEMPORARY_BROWSING_PATTERN = "contemporary_browsing_pattern"
COMMERCIAL_SCALE_INDICATORS = "commercial_scale_indicators"
DURABILITY_SPECS_INTEREST = "durability_specs_interest"
TECHNICAL_DOCUMENTATION_FOCUS = "technical_documentation_focus"
SESSION_DURATION = "session_duration"
PAGE_DEPTH = "page_depth"
PRODUCT_INTERACTION_QUALITY = "product_interaction_quality"
RETURN_VISITOR_PATTERN = "return_visitor_pattern"

REQUIRED_SIGNALS = (
    DESIGNER_STORY_ENGAGEMENT,
    CRAFTSMANSHIP_CONTENT_FOCUS,
    HERITAGE_CONTENT_TIME,
    MULTI_ROOM_NAVIGATION,
    COMPLETE_PROJECT_INTEREST,
    BUDGET_PREMIUM_INDICATORS,
    CLEAN_AESTHETIC_PREFERENCE,
    INTEGRATION_CONTENT_FOCUS,
    CONTEMPORARY_BROWSING_PATTERN,
    COMMERCIAL_SCALE_INDICATORS,
    DURABILITY_SPECS_INTEREST,
    TECHNICAL_DOCUMENTATION_FOCUS,
    SESSION_DURATION,
    PAGE_DEPTH,
    PRODUCT_INTERACTION_QUALITY,
    RETURN_VISITOR_PATTERN,
)

FLAG_SIGNALS = frozenset({MULTI_ROOM_NAVIGATION, RETURN_VISITOR_PATTERN})

UNBOUNDED_SIGNALS = frozenset({SESSION_DURATION, PAGE_DEPTH, HERITAGE_CONTENT_TIME})

BOUNDED_SIGNALS = frozenset(REQUIRED_SIGNALS) - FLAG_SIGNALS - UNBOUNDED_SIGNALS


def is_finite_number(value: Any) -> bool:
    """True for finite real numbers. bool is a flag, not a number."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # int too large to convert to float
        return False


def find_missing_signals(signals: Mapping[str, Any]) -> List[str]:
    """Required keys that are absent or None, in declared order."""
    return [name for name in REQUIRED_SIGNALS if signals.get(name) is None]


def find_malformed_signals(signals: Mapping[str, Any]) -> List[str]:
    """Required keys whose values the scoring math cannot use."""
    malformed = []
    for name in REQUIRED_SIGNALS:
        value = signals[name]
        if name in FLAG_SIGNALS:
            if not (isinstance(value, bool) or is_finite_number(value)):
                malformed.append(name)
        elif not is_finite_number(value):
            malformed.append(name)
    return malformed


def validate_signals(signals: Any) -> Dict[str, Any]:
    """
    Check a signal vector before scoring.

    Missing keys are reported on their own; malformed values are only checked
    once every key is present.

    Returns:
        A plain dict copy of the vector

    Raises:
        InvalidSignalsError: missing or malformed signals
    """
    if not isinstance(signals, Mapping):
        raise InvalidSignalsError(missing=list(REQUIRED_SIGNALS))

    missing = find_missing_signals(signals)
    if missing:
        raise InvalidSignalsError(missing=missing)

    malformed = find_malformed_signals(signals)
    if malformed:
        raise InvalidSignalsError(malformed=malformed)

    return dict(signals)
