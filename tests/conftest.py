"""
Pytest Configuration and Fixtures

Shared fixtures for all tests:
- Signal vectors for the documented scenarios
- Classifier and catalog instances
- FastAPI test clients
- Assertion helpers
"""

import random
import pytest
from typing import Any, Dict

from information_layer.segmentation import DEFAULT_CATALOG, REQUIRED_SIGNALS, SegmentClassifier
from information_layer.segmentation.signals import FLAG_SIGNALS, UNBOUNDED_SIGNALS


def make_signals(**overrides) -> Dict[str, Any]:
    """All-zero signal vector (flags False) with selected overrides."""
    signals = {name: (False if name in FLAG_SIGNALS else 0.0) for name in REQUIRED_SIGNALS}
    signals.update(overrides)
    return signals


def random_signals(rng: random.Random) -> Dict[str, Any]:
    """Random in-range vector covering the whole valid input space."""
    signals = {}
    for name in REQUIRED_SIGNALS:
        if name in FLAG_SIGNALS:
            signals[name] = rng.random() < 0.5
        elif name in UNBOUNDED_SIGNALS:
            signals[name] = rng.uniform(0, 1000)
        else:
            signals[name] = rng.random()
    return signals


# Signal fixtures

@pytest.fixture
def zero_signals() -> Dict[str, Any]:
    """Every numeric signal 0, flags False"""
    return make_signals()


@pytest.fixture
def heritage_signals() -> Dict[str, Any]:
    """Heritage score = 0.4 + 0.3 + 0.3 * min(240 / 120, 1) = 1.0"""
    return make_signals(
        designer_story_engagement=1.0,
        craftsmanship_content_focus=1.0,
        heritage_content_time=240,
    )


@pytest.fixture
def planner_signals() -> Dict[str, Any]:
    """Planner score = 0.35 + 0.35 + 0.3 = 1.0"""
    return make_signals(
        multi_room_navigation=True,
        complete_project_interest=1.0,
        budget_premium_indicators=1.0,
    )


@pytest.fixture
def engaged_session_signals() -> Dict[str, Any]:
    """Readiness base = 0.15 + 0.1 + 0.15 + 0.2 = 0.6"""
    return make_signals(
        session_duration=300,
        page_depth=5,
        product_interaction_quality=0.5,
        return_visitor_pattern=True,
    )


# Service fixtures

@pytest.fixture
def catalog():
    return DEFAULT_CATALOG


@pytest.fixture
def classifier(catalog) -> SegmentClassifier:
    return SegmentClassifier(catalog)


@pytest.fixture
def seeded_rng() -> random.Random:
    return random.Random(20251019)


@pytest.fixture
def client():
    """Provide FastAPI test client with lifespan run"""
    from fastapi.testclient import TestClient
    from information_layer.main import app

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def lenient_client():
    """Test client that returns 500 responses instead of raising"""
    from fastapi.testclient import TestClient
    from information_layer.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

    app.dependency_overrides.clear()


# Assertion helpers

def assert_probabilities_valid(probabilities: Dict[str, float]):
    """Assert one probability per catalog segment, each within [0, 1]"""
    assert list(probabilities) == list(DEFAULT_CATALOG.segment_ids), "Probabilities should follow catalog order"

    for segment, probability in probabilities.items():
        assert 0.0 <= probability <= 1.0, f"Probability for {segment} should be 0-1, got {probability}"


def assert_error_envelope(body: Dict[str, Any], code: str):
    """Assert response body uses the standard error envelope"""
    assert body["success"] is False
    assert body["error"]["code"] == code, f"Expected {code}, got {body['error']['code']}"
    assert body["error"]["message"]
    assert "timestamp" in body
    assert "path" in body
