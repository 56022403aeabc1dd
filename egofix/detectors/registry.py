"""
Detector Registry for EgoFix Diagnostics.

Holds the ordered set of detectors the DiagnosticEngine runs. Adding a
detector = implement PatternDetector + register; the engine is untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from egofix.detectors.avoidance import AvoidanceDetector
from egofix.detectors.base import PatternDetector
from egofix.detectors.context_spike import ContextSpikeDetector
from egofix.detectors.correlated_bugs import CorrelatedBugsDetector
from egofix.detectors.improvement import ImprovementDetector
from egofix.detectors.plateau import PlateauDetector
from egofix.detectors.temporal_crash import TemporalCrashDetector
from egofix.models.pattern import PatternType

logger = logging.getLogger(__name__)


def default_detectors() -> list[PatternDetector]:
    """The six built-in detectors, in run order."""
    return [
        AvoidanceDetector(),
        TemporalCrashDetector(),
        ContextSpikeDetector(),
        CorrelatedBugsDetector(),
        PlateauDetector(),
        ImprovementDetector(),
    ]


class DetectorRegistry:
    """Ordered registry of detectors, one per pattern type.

    Example:
        registry = DetectorRegistry.with_defaults()
        engine = DiagnosticEngine(store, detectors=list(registry))
    """

    def __init__(self) -> None:
        self._detectors: dict[PatternType, PatternDetector] = {}

    @classmethod
    def with_defaults(cls) -> DetectorRegistry:
        registry = cls()
        for detector in default_detectors():
            registry.register(detector)
        return registry

    def register(self, detector: PatternDetector) -> None:
        """Register a detector.

        Raises:
            ValueError: If a detector for the same pattern type is already registered
        """
        if detector.pattern_type in self._detectors:
            existing = type(self._detectors[detector.pattern_type]).__name__
            raise ValueError(
                f"Pattern type '{detector.pattern_type}' is already handled by {existing}. "
                "Deregister it first."
            )
        self._detectors[detector.pattern_type] = detector
        logger.debug("Registered detector %s for %s", type(detector).__name__, detector.pattern_type)

    def deregister(self, pattern_type: PatternType) -> bool:
        """Remove the detector for a pattern type. Returns False if none was registered."""
        return self._detectors.pop(pattern_type, None) is not None

    def get(self, pattern_type: PatternType) -> PatternDetector | None:
        return self._detectors.get(pattern_type)

    def pattern_types(self) -> list[PatternType]:
        return list(self._detectors)

    def __iter__(self) -> Iterator[PatternDetector]:
        return iter(list(self._detectors.values()))

    def __len__(self) -> int:
        return len(self._detectors)
