"""
Tests for per-bug intensity trends.
"""

from datetime import date, timedelta

from egofix.models import BugDiagnosticResponse, BugIntensity, WeeklyDiagnosticData
from egofix.services.trends import (
    TrendDirection,
    TrendPoint,
    bug_intensity_trend,
    trend_direction,
)

START = date(2026, 1, 5)


def _week(index: int, intensity: BugIntensity | None) -> WeeklyDiagnosticData:
    responses = () if intensity is None else (BugDiagnosticResponse("bug-a", intensity),)
    return WeeklyDiagnosticData(
        user_id="user-1",
        week_starting=START + timedelta(weeks=index),
        responses=responses,
    )


def _points(*values: float) -> list[TrendPoint]:
    return [TrendPoint(START + timedelta(weeks=i), v) for i, v in enumerate(values)]


class TestBugIntensityTrend:

    def test_values_and_order(self):
        weeks = [_week(1, BugIntensity.PRESENT), _week(0, BugIntensity.LOUD), _week(2, BugIntensity.QUIET)]

        points = bug_intensity_trend(weeks, "bug-a", weeks=8)

        assert [p.value for p in points] == [2.0, 1.0, 0.0]
        assert points[0].week_starting == START

    def test_limited_to_latest_weeks(self):
        weeks = [_week(i, BugIntensity.LOUD) for i in range(6)]

        points = bug_intensity_trend(weeks, "bug-a", weeks=4)

        assert [p.week_starting for p in points] == [START + timedelta(weeks=i) for i in range(2, 6)]

    def test_unanswered_weeks_left_out(self):
        weeks = [_week(0, BugIntensity.LOUD), _week(1, None), _week(2, BugIntensity.QUIET)]

        points = bug_intensity_trend(weeks, "bug-a", weeks=3)

        assert len(points) == 2

    def test_non_positive_weeks(self):
        assert bug_intensity_trend([_week(0, BugIntensity.LOUD)], "bug-a", weeks=0) == []

    def test_label(self):
        assert TrendPoint(date(2026, 3, 9), 1.0).label == "03/09"


class TestTrendDirection:

    def test_too_few_points(self):
        assert trend_direction([]) == TrendDirection.STABLE
        assert trend_direction(_points(2.0)) == TrendDirection.STABLE

    def test_improving(self):
        assert trend_direction(_points(2.0, 2.0, 2.0, 2.0, 1.0, 0.0, 0.0, 0.0)) == TrendDirection.IMPROVING

    def test_worsening(self):
        assert trend_direction(_points(0.0, 0.0, 0.0, 0.0, 1.0, 2.0, 2.0, 2.0)) == TrendDirection.WORSENING

    def test_small_change_is_stable(self):
        assert trend_direction(_points(1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 1.0, 2.0)) == TrendDirection.STABLE

    def test_overlapping_windows_are_stable(self):
        """Four points or fewer: both windows are the same points."""
        assert trend_direction(_points(2.0, 1.0, 0.0, 0.0)) == TrendDirection.STABLE
