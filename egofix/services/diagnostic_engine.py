"""
Diagnostic Engine for EgoFix Diagnostics.

Runs every pattern detector against one user's history and persists the
patterns worth telling the user about.

Run algorithm:
1. Load events, weekly diagnostics and bug names (abort on StorageError,
   nothing written)
2. Skip detectors whose input history is below their minimum_data_points
3. Run the remaining detectors on the same immutable snapshot
4. Drop candidates whose pattern type was already detected for the user
   inside the cooldown window (default 14 days), whatever the severity.
   Within one run only the first candidate of each pattern type is kept
5. Stamp survivors with the run time and persist them in one transaction

Runs are serialized per user so two concurrent runs cannot both pass the
cooldown check. The store's unique (user, type, day) index backs this up.

Usage:
    engine = DiagnosticEngine(store)
    if await engine.should_run_diagnostics(user_id):
        new_patterns = await engine.run_diagnostics(user_id)
"""

from __future__ import annotations

import asyncio
import dataclasses
import logging
import weakref
from collections.abc import Callable, Sequence
from datetime import datetime

from egofix.config.diagnostics import DiagnosticsSettings
from egofix.detectors.base import DataSource, PatternDetector, diagnostic_bug_ids
from egofix.detectors.registry import default_detectors
from egofix.models.base import utcnow
from egofix.models.diagnostic import WeeklyDiagnosticData
from egofix.models.event import AnalyticsEventData
from egofix.models.pattern import DetectedPatternData, PatternType
from egofix.services.diagnostic_store import DiagnosticStore
from egofix.services.pattern_surfacing import select_pattern_to_surface

logger = logging.getLogger(__name__)


class DiagnosticEngine:
    """
    Orchestrates the detectors, the cooldown filter and pattern persistence.

    The engine never decides what is displayed; see PatternSurfacingService.
    """

    def __init__(
        self,
        store: DiagnosticStore,
        detectors: Sequence[PatternDetector] | None = None,
        settings: DiagnosticsSettings | None = None,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize the engine.

        Args:
            store: Storage collaborator
            detectors: Detectors to run, in order (defaults to the six built-ins)
            settings: Cooldown and scheduling settings
            clock: Source of "now" (UTC), injectable for tests
        """
        self.store = store
        self.detectors: list[PatternDetector] = (
            list(detectors) if detectors is not None else default_detectors()
        )
        self.settings = settings or DiagnosticsSettings()
        self._clock = clock
        # Entries vanish once no run holds or awaits the lock
        self._user_locks: weakref.WeakValueDictionary[str, asyncio.Lock] = (
            weakref.WeakValueDictionary()
        )

    def _lock_for(self, user_id: str) -> asyncio.Lock:
        lock = self._user_locks.get(user_id)
        if lock is None:
            lock = asyncio.Lock()
            self._user_locks[user_id] = lock
        return lock

    async def should_run_diagnostics(self, user_id: str) -> bool:
        """
        Whether a scheduled run is due.

        Returns:
            True if the user never ran diagnostics or the last run is at least
            run_interval_days old; False if the user profile does not exist
        """
        exists, last_run = await self.store.get_last_run(user_id)
        if not exists:
            return False
        if last_run is None:
            return True
        return self._clock() - last_run >= self.settings.run_interval

    async def run_diagnostics(self, user_id: str) -> list[DetectedPatternData]:
        """
        Run all detectors for a user and persist the new patterns.

        Args:
            user_id: The user's ID

        Returns:
            Patterns persisted by this run (possibly empty)

        Raises:
            StorageError: If loading history or persisting fails; no partial writes
        """
        async with self._lock_for(user_id):
            events = await self.store.load_events(user_id)
            diagnostics = await self.store.load_diagnostics(user_id)
            bug_names = await self.store.load_bug_names(_referenced_bug_ids(events, diagnostics))

            run_at = self._clock()
            candidates = self._analyze(events, diagnostics, user_id, bug_names)

            fresh: list[DetectedPatternData] = []
            seen_types: set[PatternType] = set()
            since = run_at - self.settings.cooldown
            for candidate in candidates:
                if candidate.pattern_type in seen_types:
                    logger.debug(
                        "Suppressing %s for user %s: already produced in this run",
                        candidate.pattern_type, user_id,
                    )
                    continue
                seen_types.add(candidate.pattern_type)

                recent = await self.store.load_existing_patterns(
                    user_id, candidate.pattern_type, since
                )
                if recent:
                    logger.debug(
                        "Suppressing %s for user %s: detected %d time(s) in cooldown",
                        candidate.pattern_type, user_id, len(recent),
                    )
                    continue
                fresh.append(dataclasses.replace(candidate, detected_at=run_at))

            persisted = await self.store.persist_run(user_id, fresh, run_at)

        logger.info(
            "Diagnostics run for user %s: %d events, %d weeks, %d candidates, %d new",
            user_id, len(events), len(diagnostics), len(candidates), len(persisted),
        )
        return persisted

    def _analyze(
        self,
        events: list[AnalyticsEventData],
        diagnostics: list[WeeklyDiagnosticData],
        user_id: str,
        bug_names: dict[str, str],
    ) -> list[DetectedPatternData]:
        """Run each detector whose coarse data minimum is met."""
        available = {
            DataSource.EVENTS: len(events),
            DataSource.DIAGNOSTICS: len(diagnostics),
        }
        candidates: list[DetectedPatternData] = []
        for detector in self.detectors:
            if available[detector.data_source] < detector.minimum_data_points:
                logger.debug(
                    "Skipping %s: %d %s < %d",
                    type(detector).__name__,
                    available[detector.data_source],
                    detector.data_source,
                    detector.minimum_data_points,
                )
                continue

            pattern = detector.analyze(events, diagnostics, user_id, bug_names)
            if pattern is not None:
                candidates.append(pattern)
        return candidates

    async def pattern_to_surface(self, user_id: str) -> DetectedPatternData | None:
        """Highest-ranked unviewed pattern for a user; does not mark it viewed."""
        unviewed = await self.store.load_unviewed_patterns(user_id)
        return select_pattern_to_surface(unviewed)

    async def mark_pattern_viewed(self, pattern_id: str) -> None:
        """Idempotent; unknown ids are ignored."""
        await self.store.mark_viewed(pattern_id, at=self._clock())

    async def dismiss_pattern(self, pattern_id: str) -> None:
        """Idempotent; unknown ids are ignored."""
        await self.store.mark_dismissed(pattern_id, at=self._clock())


def _referenced_bug_ids(
    events: list[AnalyticsEventData],
    diagnostics: list[WeeklyDiagnosticData],
) -> set[str]:
    bug_ids = {event.bug_id for event in events if event.bug_id is not None}
    bug_ids.update(diagnostic_bug_ids(diagnostics))
    return bug_ids
