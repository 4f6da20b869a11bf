"""
Tests for the Segment Catalog and Scoring Models

Tests:
- Catalog contents and declared order
- Immutability of the shared catalog
- Scoring model variants cover every segment
"""

import dataclasses
import pytest

from information_layer.segmentation import SegmentId, build_default_catalog
from information_layer.segmentation.catalog import (
    ContentAngle,
    ContentAngleId,
    SegmentCatalog,
    SegmentThresholds,
)
from information_layer.segmentation.scoring_models import (
    SCORING_MODELS,
    SegmentScoringModel,
    WeightedTerm,
    get_scoring_model,
)


class TestDefaultCatalog:
    """Test the built-in MOHD catalog"""

    def test_segment_order(self, catalog):
        assert catalog.segment_ids == (
            "italian_heritage_advocate",
            "luxury_project_planner",
            "international_minimalist",
            "hospitality_professional",
        )

    @pytest.mark.parametrize("segment,threshold", [
        ("italian_heritage_advocate", 0.75),
        ("luxury_project_planner", 0.85),
        ("international_minimalist", 0.7),
        ("hospitality_professional", 0.8),
    ])
    def test_confidence_thresholds(self, catalog, segment, threshold):
        assert catalog.confidence_threshold(segment) == threshold

    def test_unknown_segment_lookup(self, catalog):
        assert catalog.get_segment("weekend_browser") is None

        with pytest.raises(KeyError):
            catalog.confidence_threshold("weekend_browser")

    def test_content_angles(self, catalog):
        assert {angle.id for angle in catalog.content_angles} == set(ContentAngleId)
        assert catalog.to_dict()["content_angles"]["project_completion"]["name"] == "Complete Project Solutions"

    def test_stats(self, catalog):
        assert catalog.stats() == {"segments": 4, "content_angles": 4, "business_rules": 2}

    def test_to_dict_shape(self, catalog):
        data = catalog.to_dict()

        assert list(data["customer_segments"]) == list(catalog.segment_ids)
        assert data["customer_segments"]["luxury_project_planner"]["thresholds"] == {
            "engagement": 0.8,
            "confidence": 0.85,
            "priority": 0.9,
        }
        assert data["business_rules"]["immediate_consultation"]["trigger_conditions"] == {
            "segment_match": ["luxury_project_planner"],
            "engagement_threshold": 0.8,
            "session_depth": 3,
        }
        assert data["metadata"]["version"] == "1.0.0"

    def test_version_is_configurable(self):
        assert build_default_catalog(version="2.1.0").metadata["version"] == "2.1.0"


class TestCatalogImmutability:
    """The shared catalog cannot be changed at runtime"""

    def test_segments_are_frozen(self, catalog):
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog.segments[0].name = "Renamed"

    def test_thresholds_are_frozen(self, catalog):
        with pytest.raises(dataclasses.FrozenInstanceError):
            catalog.segments[0].thresholds.confidence = 0.1

    def test_metadata_is_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog.metadata["version"] = "hacked"

    def test_characteristics_are_read_only(self, catalog):
        with pytest.raises(TypeError):
            catalog.segments[0].characteristics["browsing_pattern"] = "hacked"

    def test_to_dict_returns_copies(self, catalog):
        data = catalog.to_dict()
        data["metadata"]["version"] = "changed"

        assert catalog.metadata["version"] == "1.0.0"


class TestCatalogValidation:

    def test_missing_segment_rejected(self, catalog):
        with pytest.raises(ValueError, match="missing segments"):
            SegmentCatalog(
                segments=catalog.segments[:3],
                content_angles=catalog.content_angles,
                business_rules=(),
            )

    def test_duplicate_segment_rejected(self, catalog):
        with pytest.raises(ValueError, match="unique"):
            SegmentCatalog(
                segments=catalog.segments + catalog.segments[:1],
                content_angles=catalog.content_angles,
                business_rules=(),
            )

    def test_confidence_threshold_range(self):
        with pytest.raises(ValueError):
            SegmentThresholds(engagement=0.5, confidence=1.5, priority=0.5)

    def test_content_angle_serialization(self):
        angle = ContentAngle(id=ContentAngleId.ITALIAN_HERITAGE, name="Heritage", focus="Stories")

        assert angle.to_dict() == {"id": "italian_heritage", "name": "Heritage", "focus": "Stories"}


class TestScoringModels:
    """Test the closed set of per-segment scoring rules"""

    def test_every_segment_has_a_model(self):
        assert set(SCORING_MODELS) == set(SegmentId)

    def test_weights_sum_to_one(self):
        for model in SCORING_MODELS.values():
            assert sum(term.weight for term in model.terms) == pytest.approx(1.0)

    def test_lookup_by_string(self):
        model = get_scoring_model("hospitality_professional")

        assert model.segment == SegmentId.HOSPITALITY_PROFESSIONAL
        assert model.readiness_multiplier == 1.3

    def test_unknown_lookup_returns_none(self):
        assert get_scoring_model("weekend_browser") is None

    def test_bad_weights_rejected(self):
        with pytest.raises(ValueError, match="weights sum"):
            SegmentScoringModel(
                segment=SegmentId.INTERNATIONAL_MINIMALIST,
                terms=(WeightedTerm("clean_aesthetic_preference", 0.5),),
                factors=(),
                content_angle=ContentAngleId.CONTEMPORARY_INTEGRATION,
                readiness_multiplier=1.0,
            )

    def test_capped_term(self):
        term = WeightedTerm("heritage_content_time", 0.3, cap=120.0)

        assert term.contribution({"heritage_content_time": 60}) == pytest.approx(0.15)
        assert term.contribution({"heritage_content_time": 600}) == pytest.approx(0.3)

    def test_flag_term(self):
        term = WeightedTerm("multi_room_navigation", 0.35, flag=True)

        assert term.contribution({"multi_room_navigation": True}) == 0.35
        assert term.contribution({"multi_room_navigation": 0}) == 0.0
