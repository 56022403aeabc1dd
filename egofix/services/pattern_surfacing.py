"""
Pattern Surfacing for EgoFix Diagnostics.

Decides which already-detected pattern, if any, the user sees next. At most
one pattern per session to avoid alert fatigue.

- select_pattern_to_surface(): pure ranking. Alert > insight > observation,
  then newest detected_at first. Viewed, dismissed and deleted patterns are
  never selected.
- PatternSurfacingService: the caller side. Remembers whether this session
  already showed a pattern and performs the explicit "shown" and "dismissed"
  acknowledgements.

Selecting a pattern does not mark it viewed. Marking happens only in
mark_pattern_shown(), after the pattern was rendered, so a selection that is
never displayed does not consume the pattern.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import datetime

from egofix.models.base import utcnow
from egofix.models.event import AnalyticsEventData, EventType
from egofix.models.pattern import DetectedPatternData, PatternSeverity
from egofix.services.diagnostic_store import DiagnosticStore

logger = logging.getLogger(__name__)


def select_pattern_to_surface(
    unviewed_patterns: Iterable[DetectedPatternData],
) -> DetectedPatternData | None:
    """
    Pick the single pattern to show this session.

    Args:
        unviewed_patterns: Candidate patterns for one user

    Returns:
        The highest-ranked eligible pattern, or None
    """
    eligible = [
        p for p in unviewed_patterns
        if not p.is_viewed and not p.is_dismissed and not p.is_deleted
    ]
    if not eligible:
        return None

    # Id last so equal timestamps still rank deterministically
    ranked = sorted(
        eligible,
        key=lambda p: (p.severity.priority, p.detected_at, p.id),
        reverse=True,
    )
    return ranked[0]


class PatternSurfacingService:
    """
    Per-session surfacing for one user.

    The host creates one service per user session (or calls reset_session()
    on each app foreground). Slots:
    - before the daily fix: only alerts
    - after the fix outcome: only insights
    - anywhere: pattern_for_session(), any severity

    Usage:
        surfacing = PatternSurfacingService(store, user_id)
        pattern = await surfacing.pattern_before_fix()
        if pattern:
            render(pattern)
            await surfacing.mark_pattern_shown(pattern.id)
    """

    def __init__(
        self,
        store: DiagnosticStore,
        user_id: str,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.store = store
        self.user_id = user_id
        self._clock = clock
        self._session_pattern_shown = False

    @property
    def session_pattern_shown(self) -> bool:
        return self._session_pattern_shown

    def reset_session(self) -> None:
        self._session_pattern_shown = False

    async def pattern_for_session(self) -> DetectedPatternData | None:
        """Top-ranked unviewed pattern, unless this session already showed one."""
        if self._session_pattern_shown:
            return None
        unviewed = await self.store.load_unviewed_patterns(self.user_id)
        return select_pattern_to_surface(unviewed)

    async def pattern_before_fix(self) -> DetectedPatternData | None:
        return await self._pattern_with_severity(PatternSeverity.ALERT)

    async def pattern_after_fix(self) -> DetectedPatternData | None:
        return await self._pattern_with_severity(PatternSeverity.INSIGHT)

    async def _pattern_with_severity(self, severity: PatternSeverity) -> DetectedPatternData | None:
        pattern = await self.pattern_for_session()
        if pattern is None or pattern.severity != severity:
            return None
        return pattern

    async def mark_pattern_shown(self, pattern_id: str) -> None:
        """
        Acknowledge that a pattern was rendered.

        Marks it viewed, closes the session slot and logs a pattern_viewed
        event. Unknown or deleted ids are ignored.

        Raises:
            StorageError: If marking or logging fails
        """
        now = self._clock()
        if not await self.store.mark_viewed(pattern_id, at=now):
            logger.warning("Cannot mark unknown pattern %s as shown", pattern_id)
            return
        self._session_pattern_shown = True
        await self.store.record_event(
            AnalyticsEventData.create(
                user_id=self.user_id,
                event_type=EventType.PATTERN_VIEWED,
                timestamp=now,
            )
        )
        logger.info("Pattern %s shown to user %s", pattern_id, self.user_id)

    async def dismiss_pattern(self, pattern_id: str) -> None:
        """
        Record that the user dismissed a pattern and log a pattern_dismissed
        event. Unknown or deleted ids are ignored.
        """
        now = self._clock()
        if not await self.store.mark_dismissed(pattern_id, at=now):
            logger.warning("Cannot dismiss unknown pattern %s", pattern_id)
            return
        await self.store.record_event(
            AnalyticsEventData.create(
                user_id=self.user_id,
                event_type=EventType.PATTERN_DISMISSED,
                timestamp=now,
            )
        )
        logger.info("Pattern %s dismissed by user %s", pattern_id, self.user_id)
