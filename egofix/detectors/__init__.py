"""
Pattern detectors for EgoFix Diagnostics.

Detectors (6):
    - AvoidanceDetector: fixes for one bug mostly skipped
    - TemporalCrashDetector: crashes cluster on a weekday or part of day
    - ContextSpikeDetector: one context dominated by loud weeks
    - CorrelatedBugsDetector: two bugs flare up together
    - PlateauDetector: fixes applied but the bug is not moving
    - ImprovementDetector: a bug trending down to quiet
"""

from egofix.detectors.avoidance import AvoidanceDetector
from egofix.detectors.base import DataSource, PatternDetector
from egofix.detectors.context_spike import ContextSpikeDetector
from egofix.detectors.correlated_bugs import CorrelatedBugsDetector
from egofix.detectors.improvement import ImprovementDetector, is_downward_trend_ending_quiet
from egofix.detectors.plateau import PlateauDetector
from egofix.detectors.registry import DetectorRegistry, default_detectors
from egofix.detectors.stats import INTENSITY_WEIGHTS, pearson_correlation
from egofix.detectors.temporal_crash import TemporalCrashDetector, TimeBucket

__all__ = [
    # Contract
    "PatternDetector",
    "DataSource",
    # Detectors
    "AvoidanceDetector",
    "TemporalCrashDetector",
    "ContextSpikeDetector",
    "CorrelatedBugsDetector",
    "PlateauDetector",
    "ImprovementDetector",
    # Registry
    "DetectorRegistry",
    "default_detectors",
    # Helpers
    "TimeBucket",
    "INTENSITY_WEIGHTS",
    "pearson_correlation",
    "is_downward_trend_ending_quiet",
]
