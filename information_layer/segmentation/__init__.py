"""
Visitor Segment Classification

Rule-based classification of a browsing session into one of four customer
segments, plus the derived content angle and consultation readiness.

Main components:
- SegmentClassifier: scores a signal vector against the catalog
- SegmentCatalog: immutable segment / content angle / business rule config
- generate_demo_signals: random signal vectors for demo paths

Usage:
    from information_layer.segmentation import SegmentClassifier, DEFAULT_CATALOG

    classifier = SegmentClassifier(DEFAULT_CATALOG)
    result = classifier.classify(signals)
"""

from information_layer.segmentation.catalog import (
    DEFAULT_CATALOG,
    SegmentCatalog,
    SegmentDefinition,
    SegmentId,
    ContentAngleId,
    build_default_catalog,
)

from information_layer.segmentation.classifier import (
    ClassificationResult,
    SegmentClassifier,
)

from information_layer.segmentation.demo_signals import (
    DEMO_MODES,
    generate_demo_signals,
)

from information_layer.segmentation.signals import (
    REQUIRED_SIGNALS,
    validate_signals,
)

__all__ = [
    'DEFAULT_CATALOG',
    'SegmentCatalog',
    'SegmentDefinition',
    'SegmentId',
    'ContentAngleId',
    'build_default_catalog',
    'ClassificationResult',
    'SegmentClassifier',
    'DEMO_MODES',
    'generate_demo_signals',
    'REQUIRED_SIGNALS',
    'validate_signals',
]
