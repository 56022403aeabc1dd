"""
Improvement Detector for EgoFix Diagnostics.

Celebrates a bug that has been trending down over the last four answered
weeks and was quiet in the latest one.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

from egofix.detectors.base import (
    DataSource,
    bug_display_name,
    diagnostic_bug_ids,
    weeks_oldest_first,
)
from egofix.models.diagnostic import BugIntensity, WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData
from egofix.models.pattern import DetectedPatternData, PatternSeverity, PatternType


class ImprovementDetector:
    """
    Detects a downward intensity trend ending in quiet.

    Only weeks in which the bug was answered count toward its timeline.
    Over the latest MIN_WEEKS answers: the last must be quiet and
    week-over-week drops must outnumber rises.

    Usage:
        detector = ImprovementDetector()
        pattern = detector.analyze(events, diagnostics, user_id, bug_names)
    """

    pattern_type = PatternType.IMPROVEMENT
    minimum_data_points = 4
    data_source = DataSource.DIAGNOSTICS

    MIN_WEEKS = 4

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

        for bug_id in diagnostic_bug_ids(weeks):
            intensities = [
                response.intensity
                for response in (week.response_for(bug_id) for week in weeks)
                if response is not None
            ]
            if len(intensities) < self.MIN_WEEKS:
                continue

            if is_downward_trend_ending_quiet(intensities[-self.MIN_WEEKS:]):
                name = bug_display_name(bug_names, bug_id)
                return DetectedPatternData(
                    user_id=user_id,
                    pattern_type=PatternType.IMPROVEMENT,
                    severity=PatternSeverity.OBSERVATION,
                    title="Still running",
                    body=(
                        f"'{name}' has been trending down for {self.MIN_WEEKS} weeks "
                        "and was quiet last week. Whatever you're doing, keep doing it."
                    ),
                    related_bug_ids=(bug_id,),
                    data_points=len(intensities),
                )

        return None


def is_downward_trend_ending_quiet(intensities: Sequence[BugIntensity]) -> bool:
    """
    True when the series ends quiet and has more drops than rises.

    Example:
        >>> is_downward_trend_ending_quiet([BugIntensity.LOUD, BugIntensity.PRESENT,
        ...                                 BugIntensity.PRESENT, BugIntensity.QUIET])
        True
    """
    if not intensities or intensities[-1] != BugIntensity.QUIET:
        return False

    downward = 0
    upward = 0
    for previous, current in zip(intensities, intensities[1:]):
        if current.score < previous.score:
            downward += 1
        elif current.score > previous.score:
            upward += 1

    return downward > upward
