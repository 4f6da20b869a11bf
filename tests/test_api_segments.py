"""
API Tests for Segment Classification

Tests:
- POST /api/v1/segment/classify success envelope
- demo_mode handling
- Request validation (422) and classifier validation (400)
"""

import random
import pytest

from information_layer.api.dependencies import get_random_source
from information_layer.main import app
from information_layer.segmentation import REQUIRED_SIGNALS
from tests.conftest import assert_error_envelope, assert_probabilities_valid, make_signals

CLASSIFY_URL = "/api/v1/segment/classify"


class TestClassifyWithSignals:
    """Test classification of an explicit signal vector"""

    def test_heritage_classification(self, client, heritage_signals):
        response = client.post(CLASSIFY_URL, json={"signals": heritage_signals})

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True

        classification = body["data"]["classification"]
        assert classification["primary_segment"] == "italian_heritage_advocate"
        assert classification["confidence_score"] == pytest.approx(1.0)
        assert classification["recommended_content_angle"] == "italian_heritage"
        assert_probabilities_valid(classification["segment_probabilities"])

    def test_signals_echoed_back(self, client, planner_signals):
        response = client.post(CLASSIFY_URL, json={"signals": planner_signals})

        data = response.json()["data"]
        assert data["signals_used"] == planner_signals
        assert data["processing_info"]["demo_mode"] is False
        assert data["processing_info"]["validated"] is True
        assert data["processing_info"]["algorithm_version"] == "1.0.0"

    def test_all_zero_signals_fall_back(self, client, zero_signals):
        response = client.post(CLASSIFY_URL, json={"signals": zero_signals})

        classification = response.json()["data"]["classification"]
        assert classification["primary_segment"] == "international_minimalist"
        assert classification["confidence_score"] == 0
        assert classification["classification_factors"] == []

    def test_integer_values_accepted(self, client):
        signals = make_signals(session_duration=600, page_depth=10, return_visitor_pattern=1)

        response = client.post(CLASSIFY_URL, json={"signals": signals})

        assert response.status_code == 200
        assert response.json()["data"]["classification"]["consultation_readiness_score"] == pytest.approx(0.56)

    def test_correlation_id_header(self, client, zero_signals):
        response = client.post(
            CLASSIFY_URL,
            json={"signals": zero_signals},
            headers={"X-Correlation-ID": "test-correlation-123"}
        )

        assert response.headers["X-Correlation-ID"] == "test-correlation-123"


class TestClassifyDemoMode:
    """Test generated demo vectors"""

    def test_heritage_demo(self, client):
        app.dependency_overrides[get_random_source] = lambda: random.Random(1)

        response = client.post(CLASSIFY_URL, json={"demo_mode": "heritage"})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["classification"]["primary_segment"] == "italian_heritage_advocate"
        assert data["processing_info"]["demo_mode"] == "heritage"
        assert list(data["signals_used"]) == list(REQUIRED_SIGNALS)

    def test_demo_mode_takes_precedence(self, client, zero_signals):
        app.dependency_overrides[get_random_source] = lambda: random.Random(2)

        response = client.post(CLASSIFY_URL, json={"signals": zero_signals, "demo_mode": "heritage"})

        data = response.json()["data"]
        assert data["signals_used"] != zero_signals
        assert data["classification"]["primary_segment"] == "italian_heritage_advocate"

    def test_seeded_demo_is_reproducible(self, client):
        app.dependency_overrides[get_random_source] = lambda: random.Random(3)

        first = client.post(CLASSIFY_URL, json={"demo_mode": "random"}).json()["data"]
        second = client.post(CLASSIFY_URL, json={"demo_mode": "random"}).json()["data"]

        assert first["signals_used"] == second["signals_used"]
        assert first["classification"] == second["classification"]

    def test_unknown_demo_mode_rejected(self, client):
        response = client.post(CLASSIFY_URL, json={"demo_mode": "hospitality"})

        assert response.status_code == 422
        assert_error_envelope(response.json(), "VALIDATION_ERROR")


class TestClassifyValidation:
    """Test request and signal validation"""

    def test_empty_body_rejected(self, client):
        response = client.post(CLASSIFY_URL, json={})

        assert response.status_code == 400
        body = response.json()
        assert_error_envelope(body, "VALIDATION_ERROR")
        assert body["error"]["message"] == "No signals provided and demo_mode not specified"
        assert body["error"]["details"]["field"] == "signals"
        assert body["path"] == CLASSIFY_URL

    def test_missing_signals_listed(self, client):
        signals = make_signals()
        del signals["page_depth"]
        del signals["return_visitor_pattern"]

        response = client.post(CLASSIFY_URL, json={"signals": signals})

        assert response.status_code == 400
        body = response.json()
        assert_error_envelope(body, "INVALID_SIGNALS")
        assert body["error"]["details"]["missing"] == ["page_depth", "return_visitor_pattern"]
        assert "page_depth" in body["error"]["message"]

    def test_null_signal_is_rejected(self, client):
        response = client.post(CLASSIFY_URL, json={"signals": make_signals(page_depth=None)})

        assert response.status_code == 422

    @pytest.mark.parametrize("key,value", [
        ("craftsmanship_content_focus", "0.9"),
        ("designer_story_engagement", -0.1),
        ("designer_story_engagement", 1.5),
        ("return_visitor_pattern", 2),
        ("session_duration", -30),
    ])
    def test_bad_values_rejected(self, client, key, value):
        response = client.post(CLASSIFY_URL, json={"signals": make_signals(**{key: value})})

        assert response.status_code == 422
        body = response.json()
        assert_error_envelope(body, "VALIDATION_ERROR")
        assert body["error"]["details"]["validation_errors"]

    def test_int_too_large_for_float_rejected(self, client):
        body = '{"signals": {"session_duration": 1' + "0" * 400 + "}}"

        response = client.post(
            CLASSIFY_URL,
            content=body,
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422
        assert_error_envelope(response.json(), "VALIDATION_ERROR")

    def test_unbounded_signals_may_exceed_one(self, client):
        signals = make_signals(session_duration=1800, page_depth=40, heritage_content_time=500)

        response = client.post(CLASSIFY_URL, json={"signals": signals})

        assert response.status_code == 200

    def test_extra_signals_ignored(self, client, heritage_signals):
        heritage_signals["scroll_velocity"] = 0.4

        response = client.post(CLASSIFY_URL, json={"signals": heritage_signals})

        assert response.status_code == 200
        assert response.json()["data"]["classification"]["primary_segment"] == "italian_heritage_advocate"

    def test_malformed_json_rejected(self, client):
        response = client.post(
            CLASSIFY_URL,
            content="{not json",
            headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 422

    def test_get_not_allowed(self, client):
        response = client.get(CLASSIFY_URL)

        assert response.status_code == 405
        assert_error_envelope(response.json(), "HTTP_ERROR")
