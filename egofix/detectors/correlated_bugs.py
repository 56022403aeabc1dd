"""
Correlated Bugs Detector for EgoFix Diagnostics.

Builds a weekly intensity timeline per bug and flags the first pair of bugs
that rise and fall together. Pairs are enumerated over sorted bug ids
(i < j) and the first pair above the threshold wins; pairs are not ranked
by strength.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from itertools import combinations

from egofix.detectors.base import (
    DataSource,
    bug_display_name,
    diagnostic_bug_ids,
    weeks_oldest_first,
)
from egofix.detectors.stats import INTENSITY_WEIGHTS, pearson_correlation
from egofix.models.diagnostic import WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData
from egofix.models.pattern import DetectedPatternData, PatternSeverity, PatternType


class CorrelatedBugsDetector:
    """
    Detects two bugs whose weekly intensities correlate with r > 0.7 over 6+ weeks.

    Timeline values: quiet 0.0, present 0.5, loud 1.0; a week without an
    answer for the bug counts as 0.0.

    Usage:
        detector = CorrelatedBugsDetector()
        pattern = detector.analyze(events, diagnostics, user_id, bug_names)
    """

    pattern_type = PatternType.CORRELATED_BUGS
    minimum_data_points = 6
    data_source = DataSource.DIAGNOSTICS

    CORRELATION_THRESHOLD = 0.7
    MIN_WEEKS = 6

    def analyze(
        self,
        events: Sequence[AnalyticsEventData],
        diagnostics: Sequence[WeeklyDiagnosticData],
        user_id: str,
        bug_names: Mapping[str, str],
    ) -> DetectedPatternData | None:
        weeks = weeks_oldest_first(diagnostics)
        if len(weeks) < self.MIN_WEEKS:
            return None

        bug_ids = diagnostic_bug_ids(weeks)
        if len(bug_ids) < 2:
            return None

        timelines = {bug_id: self._timeline(weeks, bug_id) for bug_id in bug_ids}

        for bug_a, bug_b in combinations(bug_ids, 2):
            correlation = pearson_correlation(timelines[bug_a], timelines[bug_b])
            if correlation > self.CORRELATION_THRESHOLD:
                name_a = bug_display_name(bug_names, bug_a)
                name_b = bug_display_name(bug_names, bug_b)
                return DetectedPatternData(
                    user_id=user_id,
                    pattern_type=PatternType.CORRELATED_BUGS,
                    severity=PatternSeverity.INSIGHT,
                    title="Correlated Bugs",
                    body=(
                        f"'{name_a}' and '{name_b}' tend to flare up together. "
                        "They might share a root cause."
                    ),
                    related_bug_ids=(bug_a, bug_b),
                    data_points=len(weeks),
                )

        return None

    @staticmethod
    def _timeline(weeks: list[WeeklyDiagnosticData], bug_id: str) -> list[float]:
        timeline: list[float] = []
        for week in weeks:
            response = week.response_for(bug_id)
            timeline.append(INTENSITY_WEIGHTS[response.intensity] if response else 0.0)
        return timeline
