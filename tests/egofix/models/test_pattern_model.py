"""
Tests for the detected pattern model.
"""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from egofix.models import DetectedPattern, DetectedPatternData, PatternSeverity, PatternType


def _pattern(detected_at, pattern_type=PatternType.CONTEXTUAL_SPIKE, **kwargs) -> DetectedPatternData:
    return DetectedPatternData(
        user_id="user-1",
        pattern_type=pattern_type,
        severity=PatternSeverity.INSIGHT,
        title="Work Spike",
        body="Your bugs are loudest at work.",
        data_points=4,
        related_bug_ids=("bug-a", "bug-b"),
        detected_at=detected_at,
        **kwargs,
    )


def test_severity_priority():
    assert PatternSeverity.ALERT.priority > PatternSeverity.INSIGHT.priority > PatternSeverity.OBSERVATION.priority


def test_lifecycle_flags(now):
    pattern = _pattern(now, viewed_at=now)

    assert pattern.is_viewed is True
    assert pattern.is_dismissed is False
    assert pattern.is_deleted is False


def test_detected_on_is_calendar_day(now):
    row = DetectedPattern.from_data(_pattern(now))

    assert row.detected_on == now.date()
    assert row.related_bug_ids == ["bug-a", "bug-b"]


def test_round_trip_through_database(db_session, now):
    pattern = _pattern(now, dismissed_at=now + timedelta(hours=1))
    db_session.add(DetectedPattern.from_data(pattern))
    db_session.commit()
    db_session.expire_all()

    assert db_session.get(DetectedPattern, pattern.id).to_data() == pattern


def test_one_live_pattern_per_type_and_day(db_session, now):
    db_session.add(DetectedPattern.from_data(_pattern(now)))
    db_session.commit()

    db_session.add(DetectedPattern.from_data(_pattern(now + timedelta(hours=2))))
    with pytest.raises(IntegrityError):
        db_session.commit()
    db_session.rollback()


def test_other_type_or_day_allowed(db_session, now):
    db_session.add_all([
        DetectedPattern.from_data(_pattern(now)),
        DetectedPattern.from_data(_pattern(now, pattern_type=PatternType.PLATEAU)),
        DetectedPattern.from_data(_pattern(now + timedelta(days=1))),
        DetectedPattern.from_data(_pattern(now, deleted_at=now)),
    ])
    db_session.commit()

    assert db_session.query(DetectedPattern).count() == 4
