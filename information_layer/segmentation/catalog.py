"""
Segment Catalog

Static configuration for the four customer segments, the content angles they
map to, and the business rules the consultation team works from.

The catalog is built once at import (DEFAULT_CATALOG) and never mutated:
every container is a frozen dataclass, a tuple or a read-only mapping, so it
can be shared across concurrent requests without locking.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class SegmentId(str, Enum):
    """Customer segments, in catalog-declared order"""
    ITALIAN_HERITAGE_ADVOCATE = "italian_heritage_advocate"
    LUXURY_PROJECT_PLANNER = "luxury_project_planner"
    INTERNATIONAL_MINIMALIST = "international_minimalist"
    HOSPITALITY_PROFESSIONAL = "hospitality_professional"


class ContentAngleId(str, Enum):
    """Marketing messaging categories"""
    ITALIAN_HERITAGE = "italian_heritage"
    ARTISANAL_EXCELLENCE = "artisanal_excellence"
    PROJECT_COMPLETION = "project_completion"
    CONTEMPORARY_INTEGRATION = "contemporary_integration"


# Used when no segment clears its own confidence threshold
DEFAULT_PRIMARY_SEGMENT = SegmentId.INTERNATIONAL_MINIMALIST

DEFAULT_CONTENT_ANGLE = ContentAngleId.CONTEMPORARY_INTEGRATION


def _freeze(mapping: Optional[Mapping[str, Any]]) -> Mapping[str, Any]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class SegmentThresholds:
    engagement: float
    confidence: float
    priority: float

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"confidence threshold must be in [0, 1], got {self.confidence}")

    def to_dict(self) -> Dict[str, float]:
        return {
            "engagement": self.engagement,
            "confidence": self.confidence,
            "priority": self.priority,
        }


@dataclass(frozen=True)
class SegmentDefinition:
    """A customer archetype. key_signals and characteristics are descriptive only."""
    id: SegmentId
    name: str
    description: str
    key_signals: Tuple[str, ...]
    thresholds: SegmentThresholds
    characteristics: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        object.__setattr__(self, "characteristics", _freeze(self.characteristics))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id.value,
            "name": self.name,
            "description": self.description,
            "key_signals": list(self.key_signals),
            "thresholds": self.thresholds.to_dict(),
            "characteristics": dict(self.characteristics),
        }


@dataclass(frozen=True)
class ContentAngle:
    id: ContentAngleId
    name: str
    focus: str

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id.value, "name": self.name, "focus": self.focus}


@dataclass(frozen=True)
class BusinessRule:
    """Consultation trigger used by the sales team. Reference data, not evaluated here."""
    id: str
    name: str
    segment_match: Tuple[SegmentId, ...]
    engagement_threshold: float
    session_depth: int
    expected_outcomes: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        object.__setattr__(self, "expected_outcomes", _freeze(self.expected_outcomes))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "trigger_conditions": {
                "segment_match": [segment.value for segment in self.segment_match],
                "engagement_threshold": self.engagement_threshold,
                "session_depth": self.session_depth,
            },
            "expected_outcomes": dict(self.expected_outcomes),
        }


@dataclass(frozen=True)
class SegmentCatalog:
    """Process-wide segment configuration"""
    segments: Tuple[SegmentDefinition, ...]
    content_angles: Tuple[ContentAngle, ...]
    business_rules: Tuple[BusinessRule, ...]
    metadata: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    def __post_init__(self):
        object.__setattr__(self, "metadata", _freeze(self.metadata))

        declared = [segment.id for segment in self.segments]
        if len(set(declared)) != len(declared):
            raise ValueError("segment ids must be unique")
        if set(declared) != set(SegmentId):
            missing = sorted(s.value for s in set(SegmentId) - set(declared))
            raise ValueError(f"catalog is missing segments: {missing}")

    @property
    def segment_ids(self) -> Tuple[str, ...]:
        return tuple(segment.id.value for segment in self.segments)

    def get_segment(self, segment_id: str) -> Optional[SegmentDefinition]:
        for segment in self.segments:
            if segment.id.value == segment_id:
                return segment
        return None

    def confidence_threshold(self, segment_id: str) -> float:
        segment = self.get_segment(segment_id)
        if segment is None:
            raise KeyError(segment_id)
        return segment.thresholds.confidence

    def stats(self) -> Dict[str, int]:
        return {
            "segments": len(self.segments),
            "content_angles": len(self.content_angles),
            "business_rules": len(self.business_rules),
        }

    def to_dict(self) -> Dict[str, Any]:
        return {
            "customer_segments": {s.id.value: s.to_dict() for s in self.segments},
            "content_angles": {a.id.value: a.to_dict() for a in self.content_angles},
            "business_rules": {r.id: r.to_dict() for r in self.business_rules},
            "metadata": dict(self.metadata),
        }


# ==================== Default Catalog ====================

def build_default_catalog(version: str = "1.0.0") -> SegmentCatalog:
    """Build the MOHD segment catalog."""
    segments = (
        SegmentDefinition(
            id=SegmentId.ITALIAN_HERITAGE_ADVOCATE,
            name="Italian Heritage Advocate",
            description="Customers passionate about Italian design legacy and craftsmanship stories",
            key_signals=("designer_story_engagement", "craftsmanship_content_focus", "heritage_content_time"),
            thresholds=SegmentThresholds(engagement=0.7, confidence=0.75, priority=0.8),
            characteristics={
                "browsing_pattern": "deep_content_exploration",
                "content_preference": "designer_stories_and_heritage",
                "aesthetic_inclination": "classic_italian_design",
                "budget_indicators": "premium_investment_mindset",
                "timeline_urgency": "relationship_building_phase",
            },
        ),
        SegmentDefinition(
            id=SegmentId.LUXURY_PROJECT_PLANNER,
            name="Luxury Project Planner",
            description="High-value customers planning complete interior projects",
            key_signals=("multi_room_navigation", "complete_project_interest", "budget_premium_indicators"),
            thresholds=SegmentThresholds(engagement=0.8, confidence=0.85, priority=0.9),
            characteristics={
                "browsing_pattern": "comprehensive_multi_room_exploration",
                "content_preference": "complete_project_scenarios",
                "aesthetic_inclination": "sophisticated_luxury_coordination",
                "budget_indicators": "premium_budget_no_constraints",
                "timeline_urgency": "active_planning_consultation_ready",
            },
        ),
        SegmentDefinition(
            id=SegmentId.INTERNATIONAL_MINIMALIST,
            name="International Minimalist",
            description="Global customers seeking clean, contemporary Italian design integration",
            key_signals=("clean_aesthetic_preference", "integration_content_focus", "contemporary_browsing_pattern"),
            thresholds=SegmentThresholds(engagement=0.6, confidence=0.7, priority=0.65),
            characteristics={
                "browsing_pattern": "selective_aesthetic_focused",
                "content_preference": "integration_and_harmony_guidance",
                "aesthetic_inclination": "minimal_contemporary_elegance",
                "budget_indicators": "considered_investment_approach",
                "timeline_urgency": "research_and_education_phase",
            },
        ),
        SegmentDefinition(
            id=SegmentId.HOSPITALITY_PROFESSIONAL,
            name="Hospitality Professional",
            description="Commercial buyers for hospitality and business environments",
            key_signals=("commercial_scale_indicators", "durability_specs_interest", "technical_documentation_focus"),
            thresholds=SegmentThresholds(engagement=0.75, confidence=0.8, priority=0.85),
            characteristics={
                "browsing_pattern": "technical_specification_focused",
                "content_preference": "durability_and_commercial_viability",
                "aesthetic_inclination": "professional_sophisticated_environments",
                "budget_indicators": "commercial_budget_value_focused",
                "timeline_urgency": "project_timeline_driven",
            },
        ),
    )

    content_angles = (
        ContentAngle(
            id=ContentAngleId.ITALIAN_HERITAGE,
            name="Italian Heritage & Legacy",
            focus="Designer storytelling and craftsmanship tradition",
        ),
        ContentAngle(
            id=ContentAngleId.ARTISANAL_EXCELLENCE,
            name="Artisanal Excellence & Quality",
            focus="Technical superiority and manufacturing excellence",
        ),
        ContentAngle(
            id=ContentAngleId.PROJECT_COMPLETION,
            name="Complete Project Solutions",
            focus="Comprehensive interior design scenarios and coordination",
        ),
        ContentAngle(
            id=ContentAngleId.CONTEMPORARY_INTEGRATION,
            name="Contemporary Integration & Harmony",
            focus="Modern living integration and aesthetic harmony",
        ),
    )

    business_rules = (
        BusinessRule(
            id="immediate_consultation",
            name="Immediate Consultation Trigger",
            segment_match=(SegmentId.LUXURY_PROJECT_PLANNER,),
            engagement_threshold=0.8,
            session_depth=3,
            expected_outcomes={"conversion_lift": 0.35, "engagement_improvement": 0.25, "consultation_quality": 0.9},
        ),
        BusinessRule(
            id="heritage_education",
            name="Heritage Education Path",
            segment_match=(SegmentId.ITALIAN_HERITAGE_ADVOCATE,),
            engagement_threshold=0.6,
            session_depth=2,
            expected_outcomes={"conversion_lift": 0.20, "engagement_improvement": 0.40, "consultation_quality": 0.75},
        ),
    )

    return SegmentCatalog(
        segments=segments,
        content_angles=content_angles,
        business_rules=business_rules,
        metadata={
            "version": version,
            "configuration_owner": "MOHD_MVIP_Team",
            "validation_status": "validated",
        },
    )


DEFAULT_CATALOG = build_default_catalog()
