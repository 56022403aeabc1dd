"""
Tests for pattern surfacing: the pure ranking function and the per-session
PatternSurfacingService.
"""

from datetime import timedelta

import pytest

from egofix.models import DetectedPatternData, EventType, PatternSeverity, PatternType
from egofix.services.pattern_surfacing import PatternSurfacingService, select_pattern_to_surface

# =============================================================================
# Helper
# =============================================================================

def _pattern(detected_at, severity=PatternSeverity.INSIGHT, pattern_type=PatternType.AVOIDANCE,
             user_id="user-1", **kwargs) -> DetectedPatternData:
    return DetectedPatternData(
        user_id=user_id,
        pattern_type=pattern_type,
        severity=severity,
        title="Pattern",
        body="body",
        data_points=5,
        detected_at=detected_at,
        **kwargs,
    )


# =============================================================================
# select_pattern_to_surface
# =============================================================================

class TestSelectPatternToSurface:

    def test_empty(self):
        assert select_pattern_to_surface([]) is None

    def test_alert_beats_newer_insight(self, now):
        insight = _pattern(now, PatternSeverity.INSIGHT)
        alert = _pattern(now - timedelta(days=5), PatternSeverity.ALERT)

        assert select_pattern_to_surface([insight, alert]) is alert

    def test_insight_beats_observation(self, now):
        observation = _pattern(now, PatternSeverity.OBSERVATION)
        insight = _pattern(now - timedelta(days=1), PatternSeverity.INSIGHT)

        assert select_pattern_to_surface([observation, insight]) is insight

    def test_newest_wins_within_severity(self, now):
        older = _pattern(now - timedelta(days=2))
        newer = _pattern(now)

        assert select_pattern_to_surface([newer, older]) is newer
        assert select_pattern_to_surface([older, newer]) is newer

    def test_id_breaks_timestamp_ties(self, now):
        a = _pattern(now, id="aaaa")
        b = _pattern(now, id="bbbb")

        assert select_pattern_to_surface([a, b]) is b
        assert select_pattern_to_surface([b, a]) is b

    def test_viewed_dismissed_and_deleted_are_skipped(self, now):
        viewed = _pattern(now, PatternSeverity.ALERT, viewed_at=now)
        dismissed = _pattern(now, PatternSeverity.ALERT, dismissed_at=now)
        deleted = _pattern(now, PatternSeverity.ALERT, deleted_at=now)
        observation = _pattern(now - timedelta(days=9), PatternSeverity.OBSERVATION)

        assert select_pattern_to_surface([viewed, dismissed, deleted, observation]) is observation

    def test_accepts_any_iterable(self, now):
        pattern = _pattern(now)
        assert select_pattern_to_surface(p for p in [pattern]) is pattern


# =============================================================================
# PatternSurfacingService
# =============================================================================

@pytest.fixture
def surfacing(store, user_id, now):
    return PatternSurfacingService(store, user_id, clock=lambda: now)


class TestPatternSurfacingService:

    @pytest.mark.asyncio
    async def test_pattern_for_session(self, surfacing, store, user_id, now):
        alert = await store.persist_pattern(
            _pattern(now, PatternSeverity.ALERT, PatternType.PLATEAU, user_id=user_id)
        )
        await store.persist_pattern(_pattern(now, user_id=user_id))

        assert (await surfacing.pattern_for_session()).id == alert.id
        assert surfacing.session_pattern_shown is False

    @pytest.mark.asyncio
    async def test_one_pattern_per_session(self, surfacing, store, user_id, now):
        first = await store.persist_pattern(
            _pattern(now, PatternSeverity.ALERT, PatternType.PLATEAU, user_id=user_id)
        )
        second = await store.persist_pattern(_pattern(now, user_id=user_id))

        await surfacing.mark_pattern_shown(first.id)

        assert surfacing.session_pattern_shown is True
        assert await surfacing.pattern_for_session() is None

        surfacing.reset_session()
        assert (await surfacing.pattern_for_session()).id == second.id

    @pytest.mark.asyncio
    async def test_mark_shown_records_view(self, surfacing, store, user_id, now):
        pattern = await store.persist_pattern(_pattern(now, user_id=user_id))

        await surfacing.mark_pattern_shown(pattern.id)

        assert (await store.get_pattern(pattern.id)).viewed_at == now
        events = await store.load_events(user_id)
        assert [e.event_type for e in events] == [EventType.PATTERN_VIEWED]
        assert events[0].timestamp == now

    @pytest.mark.asyncio
    async def test_dismiss_records_event(self, surfacing, store, user_id, now):
        pattern = await store.persist_pattern(_pattern(now, user_id=user_id))

        await surfacing.dismiss_pattern(pattern.id)

        assert (await store.get_pattern(pattern.id)).dismissed_at == now
        assert await surfacing.pattern_for_session() is None
        assert surfacing.session_pattern_shown is False
        events = await store.load_events(user_id)
        assert [e.event_type for e in events] == [EventType.PATTERN_DISMISSED]

    @pytest.mark.asyncio
    async def test_unknown_id_is_ignored(self, surfacing, store, user_id):
        await surfacing.mark_pattern_shown("missing")
        await surfacing.dismiss_pattern("missing")

        assert surfacing.session_pattern_shown is False
        assert await store.load_events(user_id) == []

    @pytest.mark.asyncio
    async def test_before_fix_only_alerts(self, surfacing, store, user_id, now):
        await store.persist_pattern(_pattern(now, PatternSeverity.INSIGHT, user_id=user_id))
        assert await surfacing.pattern_before_fix() is None

        alert = await store.persist_pattern(
            _pattern(now, PatternSeverity.ALERT, PatternType.TEMPORAL_CRASH, user_id=user_id)
        )
        assert (await surfacing.pattern_before_fix()).id == alert.id

    @pytest.mark.asyncio
    async def test_after_fix_only_insights(self, surfacing, store, user_id, now):
        await store.persist_pattern(
            _pattern(now, PatternSeverity.OBSERVATION, PatternType.IMPROVEMENT, user_id=user_id)
        )
        assert await surfacing.pattern_after_fix() is None

        insight = await store.persist_pattern(_pattern(now, PatternSeverity.INSIGHT, user_id=user_id))
        assert (await surfacing.pattern_after_fix()).id == insight.id

    @pytest.mark.asyncio
    async def test_after_fix_yields_to_pending_alert(self, surfacing, store, user_id, now):
        """The top pattern is an alert, so the insight slot stays empty."""
        await store.persist_pattern(_pattern(now, PatternSeverity.INSIGHT, user_id=user_id))
        await store.persist_pattern(
            _pattern(now, PatternSeverity.ALERT, PatternType.PLATEAU, user_id=user_id)
        )

        assert await surfacing.pattern_after_fix() is None

    @pytest.mark.asyncio
    async def test_slots_closed_after_shown(self, surfacing, store, user_id, now):
        alert = await store.persist_pattern(
            _pattern(now, PatternSeverity.ALERT, PatternType.PLATEAU, user_id=user_id)
        )
        await store.persist_pattern(_pattern(now, PatternSeverity.INSIGHT, user_id=user_id))

        await surfacing.mark_pattern_shown(alert.id)

        assert await surfacing.pattern_after_fix() is None
