"""
Context Spike Detector for EgoFix Diagnostics.

Groups weekly diagnostic answers by the context the user named as the
bug's main arena and flags a context where most answers were "loud".
"""

from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Mapping, Sequence

from egofix.config.display import context_display_name
from egofix.detectors.base import DataSource, weeks_oldest_first
from egofix.models.diagnostic import BugIntensity, WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData, EventContext
from egofix.models.pattern import DetectedPatternData, PatternSeverity, PatternType


class ContextSpikeDetector:
    """
    Detects a context where more than 60% of answers were loud (minimum 3 loud).

    Contexts are checked in EventContext declaration order.

    Usage:
        detector = ContextSpikeDetector()
        pattern = detector.analyze(events, diagnostics, user_id, bug_names)
    """

    pattern_type = PatternType.CONTEXTUAL_SPIKE
    minimum_data_points = 3
    data_source = DataSource.DIAGNOSTICS

    LOUD_SHARE_THRESHOLD = 0.6
    MIN_LOUD_RESPONSES = 3

    def analyze(
        self,
        events: Sequence[AnalyticsEventData],
        diagnostics: Sequence[WeeklyDiagnosticData],
        user_id: str,
        bug_names: Mapping[str, str],
    ) -> DetectedPatternData | None:
        total_counts: Counter[EventContext] = Counter()
        loud_counts: Counter[EventContext] = Counter()
        loud_bugs: defaultdict[EventContext, set[str]] = defaultdict(set)

        for diagnostic in weeks_oldest_first(diagnostics):
            for response in diagnostic.responses:
                context = response.primary_context
                if context is None:
                    continue
                total_counts[context] += 1
                if response.intensity == BugIntensity.LOUD:
                    loud_counts[context] += 1
                    loud_bugs[context].add(response.bug_id)

        for context in EventContext:
            loud_count = loud_counts.get(context, 0)
            total_count = total_counts.get(context, 0)
            if loud_count < self.MIN_LOUD_RESPONSES or total_count == 0:
                continue

            if loud_count / total_count > self.LOUD_SHARE_THRESHOLD:
                name = context_display_name(context.value)
                return DetectedPatternData(
                    user_id=user_id,
                    pattern_type=PatternType.CONTEXTUAL_SPIKE,
                    severity=PatternSeverity.INSIGHT,
                    title=f"{name} Spike",
                    body=(
                        f"Your bugs are loudest at {name.lower()}. "
                        f"{loud_count} of {total_count} responses there were 'loud'."
                    ),
                    related_bug_ids=tuple(sorted(loud_bugs[context])),
                    data_points=total_count,
                )

        return None
