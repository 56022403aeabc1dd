"""
Plateau Detector for EgoFix Diagnostics.

A bug has plateaued when the user keeps applying fixes for it but it has
stayed present or loud in every one of the most recent weekly check-ins.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence

from egofix.detectors.base import (
    DataSource,
    bug_display_name,
    diagnostic_bug_ids,
    live_events,
    weeks_oldest_first,
)
from egofix.models.diagnostic import BugIntensity, WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData, EventType
from egofix.models.pattern import DetectedPatternData, PatternSeverity, PatternType

_STAGNANT = frozenset({BugIntensity.PRESENT, BugIntensity.LOUD})


class PlateauDetector:
    """
    Detects a bug with 6+ applied fixes that was present/loud in each of the last 4 weeks.

    Usage:
        detector = PlateauDetector()
        pattern = detector.analyze(events, diagnostics, user_id, bug_names)
    """

    pattern_type = PatternType.PLATEAU
    minimum_data_points = 6
    data_source = DataSource.EVENTS

    MIN_STAGNANT_WEEKS = 4
    MIN_FIXES_APPLIED = 6

    def analyze(
        self,
        events: Sequence[AnalyticsEventData],
        diagnostics: Sequence[WeeklyDiagnosticData],
        user_id: str,
        bug_names: Mapping[str, str],
    ) -> DetectedPatternData | None:
        weeks = weeks_oldest_first(diagnostics)
        if len(weeks) < self.MIN_STAGNANT_WEEKS:
            return None

        applied_counts = Counter(
            event.bug_id
            for event in live_events(events)
            if event.event_type == EventType.FIX_APPLIED and event.bug_id is not None
        )

        # Most recent first
        recent_weeks = list(reversed(weeks))[: self.MIN_STAGNANT_WEEKS]

        for bug_id in diagnostic_bug_ids(weeks):
            applied_count = applied_counts.get(bug_id, 0)
            if applied_count < self.MIN_FIXES_APPLIED:
                continue

            stagnant_weeks = 0
            for week in recent_weeks:
                response = week.response_for(bug_id)
                if response is not None and response.intensity in _STAGNANT:
                    stagnant_weeks += 1

            if stagnant_weeks >= self.MIN_STAGNANT_WEEKS:
                name = bug_display_name(bug_names, bug_id)
                return DetectedPatternData(
                    user_id=user_id,
                    pattern_type=PatternType.PLATEAU,
                    severity=PatternSeverity.ALERT,
                    title="Progress Plateau",
                    body=(
                        f"You've applied {applied_count} fixes, but '{name}' has been present "
                        f"or loud for {stagnant_weeks} straight weeks. "
                        "The current approach might not be working."
                    ),
                    related_bug_ids=(bug_id,),
                    data_points=applied_count,
                )

        return None
