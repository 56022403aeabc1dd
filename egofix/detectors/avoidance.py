"""
Avoidance Detector for EgoFix Diagnostics.

Flags a bug whose assigned fixes are mostly skipped. Skipping is usually a
sign the bug is especially active, not that the fix is irrelevant.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence

from egofix.detectors.base import DataSource, bug_display_name, live_events
from egofix.models.diagnostic import WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData, EventType
from egofix.models.pattern import DetectedPatternData, PatternSeverity, PatternType

# Outcomes that count toward a bug's resolved-fix total
_OUTCOME_TYPES = frozenset({EventType.FIX_SKIPPED, EventType.FIX_APPLIED, EventType.FIX_FAILED})


class AvoidanceDetector:
    """
    Detects bugs with a skip rate above 50%.

    skip_rate = skipped / (skipped + applied + failed), per bug.
    Fires when skipped >= MIN_SKIPS and skip_rate > SKIP_RATE_THRESHOLD.

    Usage:
        detector = AvoidanceDetector()
        pattern = detector.analyze(events, diagnostics, user_id, bug_names)
    """

    pattern_type = PatternType.AVOIDANCE
    minimum_data_points = 4
    data_source = DataSource.EVENTS

    SKIP_RATE_THRESHOLD = 0.5
    MIN_SKIPS = 4

    def analyze(
        self,
        events: Sequence[AnalyticsEventData],
        diagnostics: Sequence[WeeklyDiagnosticData],
        user_id: str,
        bug_names: Mapping[str, str],
    ) -> DetectedPatternData | None:
        skip_counts: Counter[str] = Counter()
        total_counts: Counter[str] = Counter()

        for event in live_events(events):
            if event.bug_id is None or event.event_type not in _OUTCOME_TYPES:
                continue
            total_counts[event.bug_id] += 1
            if event.event_type == EventType.FIX_SKIPPED:
                skip_counts[event.bug_id] += 1

        for bug_id in sorted(skip_counts):
            skip_count = skip_counts[bug_id]
            total_count = total_counts[bug_id]
            if skip_count < self.MIN_SKIPS or total_count == 0:
                continue

            skip_rate = skip_count / total_count
            if skip_rate > self.SKIP_RATE_THRESHOLD:
                name = bug_display_name(bug_names, bug_id)
                return DetectedPatternData(
                    user_id=user_id,
                    pattern_type=PatternType.AVOIDANCE,
                    severity=PatternSeverity.INSIGHT,
                    title="Avoidance Pattern",
                    body=(
                        f"You've skipped {skip_count} of {total_count} fixes for '{name}'. "
                        "Avoidance is often a sign the bug is particularly active."
                    ),
                    related_bug_ids=(bug_id,),
                    data_points=total_count,
                )

        return None
