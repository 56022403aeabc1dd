"""
Temporal Crash Detector for EgoFix Diagnostics.

Looks for crashes clustering in time, in two passes:
- Day pattern: one weekday holds more than 40% of all crashes (alert)
- Time pattern: one part of the day holds more than 50% (insight)

The day pattern takes precedence. When it fires the time pattern is not
evaluated, so a call yields at most one pattern.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Mapping, Sequence
from enum import StrEnum

from egofix.config.display import weekday_name
from egofix.detectors.base import DataSource, live_events
from egofix.models.diagnostic import WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData, EventType
from egofix.models.pattern import DetectedPatternData, PatternSeverity, PatternType


class TimeBucket(StrEnum):
    """Parts of the day: morning 6-12, afternoon 12-18, evening 18-24, night 0-6."""
    MORNING = "morning"
    AFTERNOON = "afternoon"
    EVENING = "evening"
    NIGHT = "night"

    @classmethod
    def for_hour(cls, hour: int) -> TimeBucket:
        if 6 <= hour < 12:
            return cls.MORNING
        if 12 <= hour < 18:
            return cls.AFTERNOON
        if 18 <= hour < 24:
            return cls.EVENING
        return cls.NIGHT


class TemporalCrashDetector:
    """
    Detects crashes concentrated on one weekday or one part of the day.

    Usage:
        detector = TemporalCrashDetector()
        pattern = detector.analyze(events, diagnostics, user_id, bug_names)
    """

    pattern_type = PatternType.TEMPORAL_CRASH
    minimum_data_points = 3
    data_source = DataSource.EVENTS

    DAY_SHARE_THRESHOLD = 0.4
    TIME_SHARE_THRESHOLD = 0.5
    MIN_CRASHES = 3

    def analyze(
        self,
        events: Sequence[AnalyticsEventData],
        diagnostics: Sequence[WeeklyDiagnosticData],
        user_id: str,
        bug_names: Mapping[str, str],
    ) -> DetectedPatternData | None:
        crashes = [e for e in live_events(events) if e.event_type == EventType.CRASH_LOGGED]
        if len(crashes) < self.MIN_CRASHES:
            return None

        day_pattern = self._detect_day_pattern(crashes, user_id, bug_names)
        if day_pattern is not None:
            return day_pattern

        return self._detect_time_pattern(crashes, user_id)

    def _detect_day_pattern(
        self,
        crashes: list[AnalyticsEventData],
        user_id: str,
        bug_names: Mapping[str, str],
    ) -> DetectedPatternData | None:
        day_counts = Counter(crash.day_of_week for crash in crashes)
        total = len(crashes)

        for day in sorted(day_counts):
            count = day_counts[day]
            if count < self.MIN_CRASHES:
                continue
            if count / total > self.DAY_SHARE_THRESHOLD:
                day_name = weekday_name(day)
                related = _crash_bug_ids(crashes)
                named = [bug_names[bug_id] for bug_id in related if bug_id in bug_names]
                bug_context = f" Related: {', '.join(named)}." if named else ""
                return DetectedPatternData(
                    user_id=user_id,
                    pattern_type=PatternType.TEMPORAL_CRASH,
                    severity=PatternSeverity.ALERT,
                    title=f"{day_name}s are rough",
                    body=(
                        f"{count} of {total} crashes happened on {day_name}s. "
                        f"Something about that day gets you.{bug_context}"
                    ),
                    related_bug_ids=related,
                    data_points=total,
                )

        return None

    def _detect_time_pattern(
        self,
        crashes: list[AnalyticsEventData],
        user_id: str,
    ) -> DetectedPatternData | None:
        bucket_counts = Counter(TimeBucket.for_hour(crash.hour_of_day) for crash in crashes)
        total = len(crashes)

        for bucket in TimeBucket:
            count = bucket_counts.get(bucket, 0)
            if count < self.MIN_CRASHES:
                continue
            if count / total > self.TIME_SHARE_THRESHOLD:
                return DetectedPatternData(
                    user_id=user_id,
                    pattern_type=PatternType.TEMPORAL_CRASH,
                    severity=PatternSeverity.INSIGHT,
                    title=f"{bucket.value.capitalize()} slips",
                    body=f"{count} of {total} crashes in the {bucket.value}. Your defenses drop then.",
                    related_bug_ids=_crash_bug_ids(crashes),
                    data_points=total,
                )

        return None


def _crash_bug_ids(crashes: list[AnalyticsEventData]) -> tuple[str, ...]:
    return tuple(sorted({crash.bug_id for crash in crashes if crash.bug_id is not None}))
