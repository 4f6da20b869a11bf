"""
Demo Signal Generator

Produces plausible signal vectors for the demo paths of the API
(demo_mode on /segment/classify and the user profile endpoint).

Values are drawn uniformly from per-template ranges. Output is random unless
a seeded random.Random is passed in.
"""

import random
from typing import Any, Dict, Optional, Tuple

from information_layer.segmentation import signals as sig


DEMO_MODES = ("heritage", "planner", "random")

# (low, span): value = low + uniform(0, 1) * span
# Flags: probability of True
SIGNAL_TEMPLATES: Dict[str, Dict[str, Tuple[float, float]]] = {
    "heritage": {
        sig.DESIGNER_STORY_ENGAGEMENT: (0.8, 0.2),
        sig.CRAFTSMANSHIP_CONTENT_FOCUS: (0.7, 0.3),
        sig.HERITAGE_CONTENT_TIME: (90, 120),
        sig.COMPLETE_PROJECT_INTEREST: (0.2, 0.3),
        sig.BUDGET_PREMIUM_INDICATORS: (0.4, 0.3),
        sig.CLEAN_AESTHETIC_PREFERENCE: (0.3, 0.3),
        sig.INTEGRATION_CONTENT_FOCUS: (0.2, 0.3),
        sig.CONTEMPORARY_BROWSING_PATTERN: (0.1, 0.3),
        sig.COMMERCIAL_SCALE_INDICATORS: (0.1, 0.2),
        sig.DURABILITY_SPECS_INTEREST: (0.1, 0.2),
        sig.TECHNICAL_DOCUMENTATION_FOCUS: (0.1, 0.2),
        sig.SESSION_DURATION: (200, 400),
        sig.PAGE_DEPTH: (5, 10),
        sig.PRODUCT_INTERACTION_QUALITY: (0.6, 0.4),
    },
    "planner": {
        sig.DESIGNER_STORY_ENGAGEMENT: (0.1, 0.3),
        sig.CRAFTSMANSHIP_CONTENT_FOCUS: (0.2, 0.3),
        sig.HERITAGE_CONTENT_TIME: (10, 60),
        sig.COMPLETE_PROJECT_INTEREST: (0.8, 0.2),
        sig.BUDGET_PREMIUM_INDICATORS: (0.7, 0.3),
        sig.CLEAN_AESTHETIC_PREFERENCE: (0.4, 0.4),
        sig.INTEGRATION_CONTENT_FOCUS: (0.3, 0.4),
        sig.CONTEMPORARY_BROWSING_PATTERN: (0.5, 0.3),
        sig.COMMERCIAL_SCALE_INDICATORS: (0.1, 0.3),
        sig.DURABILITY_SPECS_INTEREST: (0.2, 0.3),
        sig.TECHNICAL_DOCUMENTATION_FOCUS: (0.1, 0.3),
        sig.SESSION_DURATION: (400, 400),
        sig.PAGE_DEPTH: (8, 12),
        sig.PRODUCT_INTERACTION_QUALITY: (0.8, 0.2),
    },
}

FLAG_PROBABILITIES: Dict[str, Dict[str, float]] = {
    "heritage": {sig.MULTI_ROOM_NAVIGATION: 0.3, sig.RETURN_VISITOR_PATTERN: 0.5},
    "planner": {sig.MULTI_ROOM_NAVIGATION: 1.0, sig.RETURN_VISITOR_PATTERN: 0.7},
}


def resolve_demo_mode(mode: str, rng: Optional[random.Random] = None) -> str:
    """Map a demo selector to a concrete template. Unknown selectors use heritage."""
    rng = rng or random
    if mode == "random":
        return rng.choice(sorted(SIGNAL_TEMPLATES))
    if mode not in SIGNAL_TEMPLATES:
        return "heritage"
    return mode


def generate_demo_signals(mode: str = "random", rng: Optional[random.Random] = None) -> Dict[str, Any]:
    """
    Generate a complete demo signal vector.

    Args:
        mode: heritage, planner or random
        rng: Optional random.Random for reproducible output

    Returns:
        Dict with all 16 required signals, in declared order
    """
    rng = rng or random
    template = resolve_demo_mode(mode, rng)

    ranges = SIGNAL_TEMPLATES[template]
    flags = FLAG_PROBABILITIES[template]

    signals = {}
    for name in sig.REQUIRED_SIGNALS:
        if name in sig.FLAG_SIGNALS:
            signals[name] = rng.random() < flags[name]
        else:
            low, span = ranges[name]
            signals[name] = low + rng.random() * span
    return signals
