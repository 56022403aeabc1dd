"""
Detector contract for EgoFix Diagnostics.

Every detector implements PatternDetector: a pure, stateless analysis of one
user's full history that returns at most one pattern. Detectors never raise
for missing data; they return None until there is enough history.

Determinism: candidates (bugs, contexts, weekdays) are always visited in a
stable order so identical inputs yield identical output.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from enum import StrEnum
from typing import Protocol

from egofix.config.display import UNNAMED_BUG
from egofix.models.diagnostic import WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData
from egofix.models.pattern import DetectedPatternData, PatternType


class DataSource(StrEnum):
    """Which history a detector's minimum_data_points is measured against."""
    EVENTS = "events"
    DIAGNOSTICS = "diagnostics"


class PatternDetector(Protocol):
    """Every detector implements this interface."""

    pattern_type: PatternType
    minimum_data_points: int
    data_source: DataSource

    def analyze(
        self,
        events: Sequence[AnalyticsEventData],
        diagnostics: Sequence[WeeklyDiagnosticData],
        user_id: str,
        bug_names: Mapping[str, str],
    ) -> DetectedPatternData | None:
        """Analyze one user's history.

        Args:
            events: All analytics events for the user
            diagnostics: All weekly diagnostics for the user
            user_id: The user's ID
            bug_names: Bug id -> display name lookup

        Returns:
            A detected pattern if one is found, None otherwise
        """
        ...


# =============================================================================
# Shared helpers
# =============================================================================

def live_events(events: Iterable[AnalyticsEventData]) -> list[AnalyticsEventData]:
    """Drop soft-deleted events."""
    return [event for event in events if not event.is_deleted]


def weeks_oldest_first(diagnostics: Iterable[WeeklyDiagnosticData]) -> list[WeeklyDiagnosticData]:
    """Non-deleted diagnostics sorted by week, oldest first."""
    live = [d for d in diagnostics if not d.is_deleted]
    return sorted(live, key=lambda d: (d.week_starting, d.id))


def diagnostic_bug_ids(diagnostics: Iterable[WeeklyDiagnosticData]) -> list[str]:
    """Every bug id answered in any diagnostic, sorted."""
    bug_ids: set[str] = set()
    for diagnostic in diagnostics:
        bug_ids |= diagnostic.bug_ids
    return sorted(bug_ids)


def bug_display_name(bug_names: Mapping[str, str], bug_id: str) -> str:
    return bug_names.get(bug_id, UNNAMED_BUG)
