"""
Diagnostic Store for EgoFix Diagnostics.

The storage boundary of the diagnostics core. The engine and the surfacing
service only talk to the DiagnosticStore protocol; SQLAlchemyDiagnosticStore
is the implementation backed by a SQLAlchemy session.

Every database failure is rolled back and re-raised as StorageError, so a
failed run leaves existing data untouched. Rows that no longer decode into
their Data snapshots raise StorageError too.

Usage:
    store = SQLAlchemyDiagnosticStore(db)
    events = await store.load_events(user_id)
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence
from contextlib import contextmanager
from datetime import datetime
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from egofix.lib.exceptions import StorageError, ValidationError
from egofix.models.base import as_utc, utcnow
from egofix.models.bug import Bug
from egofix.models.diagnostic import WeeklyDiagnostic, WeeklyDiagnosticData
from egofix.models.event import AnalyticsEvent, AnalyticsEventData
from egofix.models.pattern import DetectedPattern, DetectedPatternData, PatternType
from egofix.models.user import UserProfile

logger = logging.getLogger(__name__)


class DiagnosticStore(Protocol):
    """Read/write interface the diagnostics core needs from storage."""

    async def load_events(self, user_id: str) -> list[AnalyticsEventData]:
        """All non-deleted analytics events for a user, oldest first."""
        ...

    async def load_diagnostics(self, user_id: str) -> list[WeeklyDiagnosticData]:
        """All non-deleted weekly diagnostics for a user, oldest week first."""
        ...

    async def load_bug_names(self, bug_ids: Iterable[str]) -> dict[str, str]:
        """Bug id -> display title for the given ids (unknown ids are omitted)."""
        ...

    async def load_existing_patterns(
        self,
        user_id: str,
        pattern_type: PatternType,
        since: datetime,
    ) -> list[DetectedPatternData]:
        """Non-deleted patterns of one type detected at or after `since`."""
        ...

    async def persist_pattern(self, pattern: DetectedPatternData) -> DetectedPatternData:
        """Persist a single pattern."""
        ...

    async def persist_run(
        self,
        user_id: str,
        patterns: Sequence[DetectedPatternData],
        run_at: datetime,
    ) -> list[DetectedPatternData]:
        """Persist a run's patterns and the run timestamp atomically."""
        ...

    async def load_unviewed_patterns(self, user_id: str) -> list[DetectedPatternData]:
        """Non-deleted patterns that have never been viewed."""
        ...

    async def get_pattern(self, pattern_id: str) -> DetectedPatternData | None:
        ...

    async def mark_viewed(self, pattern_id: str, at: datetime | None = None) -> bool:
        """Set viewed_at once. Returns False for unknown ids; re-marking is a no-op."""
        ...

    async def mark_dismissed(self, pattern_id: str, at: datetime | None = None) -> bool:
        """Set dismissed_at once. Returns False for unknown ids; re-marking is a no-op."""
        ...

    async def record_event(self, event: AnalyticsEventData) -> None:
        ...

    async def get_last_run(self, user_id: str) -> tuple[bool, datetime | None]:
        """(profile exists, last diagnostics run time)."""
        ...


class SQLAlchemyDiagnosticStore:
    """
    DiagnosticStore backed by a SQLAlchemy session.

    The session is owned by the caller; this class commits after each write
    and rolls back on failure.
    """

    def __init__(self, db: Session):
        """
        Initialize the store.

        Args:
            db: SQLAlchemy database session
        """
        self.db = db

    @contextmanager
    def _guard(self, action: str) -> Iterator[None]:
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("Storage failure while %s: %s", action, e)
            raise StorageError(f"Failed while {action}") from e
        except (ValidationError, ValueError, KeyError) as e:
            logger.error("Corrupt row while %s: %s", action, e)
            raise StorageError(f"Failed while {action}") from e

    # =========================================================================
    # History
    # =========================================================================

    async def load_events(self, user_id: str) -> list[AnalyticsEventData]:
        with self._guard("loading events"):
            rows = (
                self.db.query(AnalyticsEvent)
                .filter(
                    AnalyticsEvent.user_id == user_id,
                    AnalyticsEvent.deleted_at.is_(None),
                )
                .order_by(AnalyticsEvent.timestamp, AnalyticsEvent.id)
                .all()
            )
            return [row.to_data() for row in rows]

    async def load_diagnostics(self, user_id: str) -> list[WeeklyDiagnosticData]:
        with self._guard("loading weekly diagnostics"):
            rows = (
                self.db.query(WeeklyDiagnostic)
                .filter(
                    WeeklyDiagnostic.user_id == user_id,
                    WeeklyDiagnostic.deleted_at.is_(None),
                )
                .order_by(WeeklyDiagnostic.week_starting)
                .all()
            )
            return [row.to_data() for row in rows]

    async def load_bug_names(self, bug_ids: Iterable[str]) -> dict[str, str]:
        ids = set(bug_ids)
        if not ids:
            return {}
        with self._guard("loading bug names"):
            rows = self.db.query(Bug.id, Bug.title).filter(Bug.id.in_(ids)).all()
            return {bug_id: title for bug_id, title in rows}

    async def record_event(self, event: AnalyticsEventData) -> None:
        with self._guard("recording analytics event"):
            self.db.add(AnalyticsEvent.from_data(event))
            self.db.commit()

    # =========================================================================
    # Patterns
    # =========================================================================

    async def load_existing_patterns(
        self,
        user_id: str,
        pattern_type: PatternType,
        since: datetime,
    ) -> list[DetectedPatternData]:
        with self._guard("loading recent patterns"):
            rows = (
                self.db.query(DetectedPattern)
                .filter(
                    DetectedPattern.user_id == user_id,
                    DetectedPattern.pattern_type == pattern_type.value,
                    DetectedPattern.detected_at >= since,
                    DetectedPattern.deleted_at.is_(None),
                )
                .all()
            )
            return [row.to_data() for row in rows]

    async def persist_pattern(self, pattern: DetectedPatternData) -> DetectedPatternData:
        with self._guard("persisting pattern"):
            self.db.add(DetectedPattern.from_data(pattern))
            self.db.commit()
        return pattern

    async def persist_run(
        self,
        user_id: str,
        patterns: Sequence[DetectedPatternData],
        run_at: datetime,
    ) -> list[DetectedPatternData]:
        with self._guard("persisting diagnostics run"):
            self.db.add_all([DetectedPattern.from_data(p) for p in patterns])
            profile = self.db.get(UserProfile, user_id)
            if profile is not None:
                profile.last_diagnostics_run_at = run_at
                profile.updated_at = run_at
            self.db.commit()
        return list(patterns)

    async def load_unviewed_patterns(self, user_id: str) -> list[DetectedPatternData]:
        with self._guard("loading unviewed patterns"):
            rows = (
                self.db.query(DetectedPattern)
                .filter(
                    DetectedPattern.user_id == user_id,
                    DetectedPattern.viewed_at.is_(None),
                    DetectedPattern.deleted_at.is_(None),
                )
                .order_by(DetectedPattern.detected_at.desc())
                .all()
            )
            return [row.to_data() for row in rows]

    async def get_pattern(self, pattern_id: str) -> DetectedPatternData | None:
        with self._guard("loading pattern"):
            row = self._live_pattern(pattern_id)
            return row.to_data() if row is not None else None

    async def mark_viewed(self, pattern_id: str, at: datetime | None = None) -> bool:
        with self._guard("marking pattern viewed"):
            row = self._live_pattern(pattern_id)
            if row is None:
                return False
            if row.viewed_at is None:
                row.viewed_at = at or utcnow()
                self.db.commit()
            return True

    async def mark_dismissed(self, pattern_id: str, at: datetime | None = None) -> bool:
        with self._guard("dismissing pattern"):
            row = self._live_pattern(pattern_id)
            if row is None:
                return False
            if row.dismissed_at is None:
                row.dismissed_at = at or utcnow()
                self.db.commit()
            return True

    def _live_pattern(self, pattern_id: str) -> DetectedPattern | None:
        return (
            self.db.query(DetectedPattern)
            .filter(
                DetectedPattern.id == pattern_id,
                DetectedPattern.deleted_at.is_(None),
            )
            .first()
        )

    # =========================================================================
    # Users
    # =========================================================================

    async def get_last_run(self, user_id: str) -> tuple[bool, datetime | None]:
        with self._guard("loading user profile"):
            profile = self.db.get(UserProfile, user_id)
            if profile is None:
                return False, None
            return True, as_utc(profile.last_diagnostics_run_at)
