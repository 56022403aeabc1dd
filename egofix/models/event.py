"""
Analytics Event Model for EgoFix Diagnostics.

Events are immutable facts recorded by the host app on user action (a fix
was skipped, a crash was logged, ...). They are never updated except for
soft deletion. Detectors only ever see the frozen AnalyticsEventData twin.

Weekday numbering: 1 = Sunday ... 7 = Saturday.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from sqlalchemy import Column, DateTime, Index, Integer, String

from egofix.lib.exceptions import ValidationError
from egofix.models.base import Base, as_utc, new_id, utcnow

# =============================================================================
# Enums
# =============================================================================

class EventType(StrEnum):
    """Kinds of analytics events recorded by the host app."""
    FIX_ASSIGNED = "fix_assigned"
    FIX_APPLIED = "fix_applied"
    FIX_SKIPPED = "fix_skipped"
    FIX_FAILED = "fix_failed"
    CRASH_LOGGED = "crash_logged"
    CRASH_REBOOTED = "crash_rebooted"
    APP_OPENED = "app_opened"
    WEEKLY_COMPLETED = "weekly_completed"
    PATTERN_VIEWED = "pattern_viewed"
    PATTERN_DISMISSED = "pattern_dismissed"
    FIX_SHARED = "fix_shared"


class EventContext(StrEnum):
    """Where the user was when the event happened (declaration order is the iteration order)."""
    WORK = "work"
    HOME = "home"
    SOCIAL = "social"
    FAMILY = "family"
    ONLINE = "online"
    UNKNOWN = "unknown"


def calendar_fields(moment: datetime) -> tuple[int, int]:
    """
    Derive the stored (day_of_week, hour_of_day) pair for a timestamp.

    Example:
        >>> calendar_fields(datetime(2026, 10, 19, 9, 30))  # a Monday
        (2, 9)
    """
    return moment.isoweekday() % 7 + 1, moment.hour


# =============================================================================
# Data Class
# =============================================================================

@dataclass(frozen=True)
class AnalyticsEventData:
    """Read-only snapshot of an analytics event, as consumed by detectors."""

    user_id: str
    event_type: EventType
    day_of_week: int
    hour_of_day: int
    bug_id: str | None = None
    fix_id: str | None = None
    context: EventContext | None = None
    timestamp: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=new_id)
    deleted_at: datetime | None = None

    def __post_init__(self) -> None:
        if not 1 <= self.day_of_week <= 7:
            raise ValidationError(f"day_of_week must be 1..7, got {self.day_of_week}")
        if not 0 <= self.hour_of_day <= 23:
            raise ValidationError(f"hour_of_day must be 0..23, got {self.hour_of_day}")

    @classmethod
    def create(
        cls,
        user_id: str,
        event_type: EventType,
        bug_id: str | None = None,
        fix_id: str | None = None,
        context: EventContext | None = None,
        timestamp: datetime | None = None,
    ) -> AnalyticsEventData:
        """Build an event whose weekday/hour are derived from its timestamp."""
        moment = timestamp or utcnow()
        day_of_week, hour_of_day = calendar_fields(moment)
        return cls(
            user_id=user_id,
            event_type=event_type,
            day_of_week=day_of_week,
            hour_of_day=hour_of_day,
            bug_id=bug_id,
            fix_id=fix_id,
            context=context,
            timestamp=moment,
        )

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


# =============================================================================
# Analytics Event Model
# =============================================================================

class AnalyticsEvent(Base):
    """
    A discrete behavioral event for one user.

    Attributes:
        id: UUID primary key
        user_id: Owning user
        event_type: EventType value
        bug_id: Bug the event concerns (optional)
        fix_id: Fix the event concerns (optional)
        context: EventContext value (optional)
        day_of_week: 1 = Sunday ... 7 = Saturday
        hour_of_day: 0..23
        timestamp: When the event happened
        deleted_at: Soft-delete marker
    """

    __tablename__ = "analytics_events"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    event_type = Column(String(30), nullable=False)
    bug_id = Column(String(36), nullable=True)
    fix_id = Column(String(36), nullable=True)
    context = Column(String(20), nullable=True)
    day_of_week = Column(Integer, nullable=False)
    hour_of_day = Column(Integer, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_event_user_type", "user_id", "event_type"),
        Index("idx_event_timestamp", "timestamp"),
    )

    @classmethod
    def from_data(cls, data: AnalyticsEventData) -> AnalyticsEvent:
        return cls(
            id=data.id,
            user_id=data.user_id,
            event_type=data.event_type.value,
            bug_id=data.bug_id,
            fix_id=data.fix_id,
            context=data.context.value if data.context else None,
            day_of_week=data.day_of_week,
            hour_of_day=data.hour_of_day,
            timestamp=data.timestamp,
            deleted_at=data.deleted_at,
        )

    def to_data(self) -> AnalyticsEventData:
        return AnalyticsEventData(
            id=self.id,
            user_id=self.user_id,
            event_type=EventType(self.event_type),
            bug_id=self.bug_id,
            fix_id=self.fix_id,
            context=EventContext(self.context) if self.context else None,
            day_of_week=self.day_of_week,
            hour_of_day=self.hour_of_day,
            timestamp=as_utc(self.timestamp),
            deleted_at=as_utc(self.deleted_at),
        )

    def __repr__(self) -> str:
        return f"<AnalyticsEvent(id={self.id}, user_id={self.user_id}, type={self.event_type})>"
