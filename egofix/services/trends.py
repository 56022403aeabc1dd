"""
Trend Analysis for EgoFix Diagnostics.

Per-bug intensity trends from weekly diagnostics, used alongside detected
patterns (e.g. a trend chart next to a plateau alert).

Values: quiet 0, present 1, loud 2. A falling average is an improvement.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from egofix.detectors.base import weeks_oldest_first
from egofix.models.diagnostic import WeeklyDiagnosticData

# Minimum change in mean intensity that counts as a direction
DIRECTION_THRESHOLD = 0.3
# How many points the recent and older windows hold
TREND_WINDOW = 4


class TrendDirection(StrEnum):
    IMPROVING = "improving"
    WORSENING = "worsening"
    STABLE = "stable"


@dataclass(frozen=True)
class TrendPoint:
    """One week of one bug's intensity."""

    week_starting: date
    value: float

    @property
    def label(self) -> str:
        return self.week_starting.strftime("%m/%d")


def bug_intensity_trend(
    diagnostics: Iterable[WeeklyDiagnosticData],
    bug_id: str,
    weeks: int,
) -> list[TrendPoint]:
    """
    Intensity points for a bug over the latest `weeks` diagnostics.

    Weeks in which the bug was not answered are left out.

    Args:
        diagnostics: The user's weekly diagnostics (any order)
        bug_id: Bug to chart
        weeks: How many of the latest diagnostics to consider

    Returns:
        Points ordered oldest week first
    """
    if weeks <= 0:
        return []
    points: list[TrendPoint] = []
    for diagnostic in weeks_oldest_first(diagnostics)[-weeks:]:
        response = diagnostic.response_for(bug_id)
        if response is not None:
            points.append(TrendPoint(diagnostic.week_starting, float(response.intensity.score)))
    return points


def trend_direction(points: Sequence[TrendPoint]) -> TrendDirection:
    """
    Compare the mean of the latest points to the mean of the earliest ones.

    Both windows hold min(4, n) points, so they overlap until there are more
    than four points; with identical windows the result is STABLE. Fewer
    than two points is STABLE too.

    Example:
        >>> values = [2.0, 2.0, 1.0, 1.0, 0.0]
        >>> trend_direction([TrendPoint(date(2026, 1, 1 + 7 * i), v) for i, v in enumerate(values)])
        <TrendDirection.IMPROVING: 'improving'>
    """
    if len(points) < 2:
        return TrendDirection.STABLE

    window = min(TREND_WINDOW, len(points))
    recent = [p.value for p in points[-window:]]
    older = [p.value for p in points[:window]]

    diff = sum(recent) / len(recent) - sum(older) / len(older)
    if diff < -DIRECTION_THRESHOLD:
        return TrendDirection.IMPROVING
    if diff > DIRECTION_THRESHOLD:
        return TrendDirection.WORSENING
    return TrendDirection.STABLE
