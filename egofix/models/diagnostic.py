"""
Weekly Diagnostic Model for EgoFix Diagnostics.

One self-report per user per calendar week: for each tracked bug the user
rates how loud it was and, optionally, where it showed up most. Records
are immutable once completed.

Uniqueness: at most one non-deleted diagnostic per (user_id, week_starting).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

from sqlalchemy import JSON, Column, Date, DateTime, Index, String, text

from egofix.models.base import Base, as_utc, new_id, utcnow
from egofix.models.event import EventContext

# =============================================================================
# Enums
# =============================================================================

class BugIntensity(StrEnum):
    """How loud a bug was during the week."""
    QUIET = "quiet"
    PRESENT = "present"
    LOUD = "loud"

    @property
    def score(self) -> int:
        """Ordinal value: quiet 0, present 1, loud 2."""
        return _INTENSITY_SCORES[self]


_INTENSITY_SCORES: dict[BugIntensity, int] = {
    BugIntensity.QUIET: 0,
    BugIntensity.PRESENT: 1,
    BugIntensity.LOUD: 2,
}


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class BugDiagnosticResponse:
    """One bug's answer inside a weekly diagnostic."""

    bug_id: str
    intensity: BugIntensity
    primary_context: EventContext | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "bug_id": self.bug_id,
            "intensity": self.intensity.value,
            "primary_context": self.primary_context.value if self.primary_context else None,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> BugDiagnosticResponse:
        context = data.get("primary_context")
        return cls(
            bug_id=data["bug_id"],
            intensity=BugIntensity(data["intensity"]),
            primary_context=EventContext(context) if context else None,
        )


@dataclass(frozen=True)
class WeeklyDiagnosticData:
    """Read-only snapshot of a completed weekly check-in."""

    user_id: str
    week_starting: date
    responses: tuple[BugDiagnosticResponse, ...] = ()
    completed_at: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=new_id)
    deleted_at: datetime | None = None

    def response_for(self, bug_id: str) -> BugDiagnosticResponse | None:
        """First response recorded for a bug this week, if any."""
        for response in self.responses:
            if response.bug_id == bug_id:
                return response
        return None

    @property
    def bug_ids(self) -> set[str]:
        return {response.bug_id for response in self.responses}

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


# =============================================================================
# Weekly Diagnostic Model
# =============================================================================

class WeeklyDiagnostic(Base):
    """
    A user's weekly self-report.

    Attributes:
        id: UUID primary key
        user_id: Owning user
        week_starting: First day of the reported calendar week
        responses: JSON list of BugDiagnosticResponse dicts, in answer order
        completed_at: When the check-in was finished
        deleted_at: Soft-delete marker
    """

    __tablename__ = "weekly_diagnostics"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    week_starting = Column(Date, nullable=False)
    responses = Column(JSON, nullable=False, default=list)
    completed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index(
            "uq_weekly_diagnostic_user_week",
            "user_id",
            "week_starting",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    @classmethod
    def from_data(cls, data: WeeklyDiagnosticData) -> WeeklyDiagnostic:
        return cls(
            id=data.id,
            user_id=data.user_id,
            week_starting=data.week_starting,
            responses=[response.to_dict() for response in data.responses],
            completed_at=data.completed_at,
            deleted_at=data.deleted_at,
        )

    def to_data(self) -> WeeklyDiagnosticData:
        return WeeklyDiagnosticData(
            id=self.id,
            user_id=self.user_id,
            week_starting=self.week_starting,
            responses=tuple(BugDiagnosticResponse.from_dict(r) for r in self.responses or []),
            completed_at=as_utc(self.completed_at),
            deleted_at=as_utc(self.deleted_at),
        )

    def __repr__(self) -> str:
        return f"<WeeklyDiagnostic(id={self.id}, user_id={self.user_id}, week={self.week_starting})>"
