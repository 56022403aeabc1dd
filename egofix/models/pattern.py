"""
Detected Pattern Model for EgoFix Diagnostics.

Lifecycle:
- created: by the DiagnosticEngine when a detector fires and the pattern
  type is not in cooldown
- viewed: set once, after the pattern was actually rendered
- dismissed: set when the user dismisses it (independent of viewed)
- deleted: soft delete, only through explicit user deletion
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

from sqlalchemy import JSON, Column, Date, DateTime, Index, Integer, String, Text, text

from egofix.models.base import Base, as_utc, new_id, utcnow

# =============================================================================
# Enums
# =============================================================================

class PatternType(StrEnum):
    """Kinds of patterns. REGRESSION is reserved; no detector emits it yet."""
    AVOIDANCE = "avoidance"
    TEMPORAL_CRASH = "temporal_crash"
    CONTEXTUAL_SPIKE = "contextual_spike"
    CORRELATED_BUGS = "correlated_bugs"
    PLATEAU = "plateau"
    REGRESSION = "regression"
    IMPROVEMENT = "improvement"


class PatternSeverity(StrEnum):
    """How urgently a pattern should reach the user."""
    OBSERVATION = "observation"
    INSIGHT = "insight"
    ALERT = "alert"

    @property
    def priority(self) -> int:
        """Surfacing rank: alert 3 > insight 2 > observation 1."""
        return _SEVERITY_PRIORITY[self]


_SEVERITY_PRIORITY: dict[PatternSeverity, int] = {
    PatternSeverity.OBSERVATION: 1,
    PatternSeverity.INSIGHT: 2,
    PatternSeverity.ALERT: 3,
}


# =============================================================================
# Data Class
# =============================================================================

@dataclass(frozen=True)
class DetectedPatternData:
    """A detected pattern, either a fresh detector candidate or a loaded record."""

    user_id: str
    pattern_type: PatternType
    severity: PatternSeverity
    title: str
    body: str
    data_points: int
    related_bug_ids: tuple[str, ...] = ()
    detected_at: datetime = field(default_factory=utcnow)
    id: str = field(default_factory=new_id)
    viewed_at: datetime | None = None
    dismissed_at: datetime | None = None
    deleted_at: datetime | None = None

    @property
    def is_viewed(self) -> bool:
        return self.viewed_at is not None

    @property
    def is_dismissed(self) -> bool:
        return self.dismissed_at is not None

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None


# =============================================================================
# Detected Pattern Model
# =============================================================================

class DetectedPattern(Base):
    """
    A persisted pattern.

    Attributes:
        id: UUID primary key
        user_id: Owning user
        pattern_type: PatternType value
        severity: PatternSeverity value
        title: Short headline
        body: Explanation with the underlying counts
        related_bug_ids: JSON list of bug ids the pattern concerns
        data_points: Number of observations behind the conclusion
        detected_at: Engine run time that produced the pattern
        detected_on: Calendar day of detected_at (uniqueness bucket)
        viewed_at: Set once the pattern was shown
        dismissed_at: Set when the user dismissed the pattern
        deleted_at: Soft-delete marker
    """

    __tablename__ = "detected_patterns"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), nullable=False, index=True)
    pattern_type = Column(String(30), nullable=False)
    severity = Column(String(20), nullable=False)
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    related_bug_ids = Column(JSON, nullable=False, default=list)
    data_points = Column(Integer, nullable=False, default=0)
    detected_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    detected_on = Column(Date, nullable=False)
    viewed_at = Column(DateTime(timezone=True), nullable=True)
    dismissed_at = Column(DateTime(timezone=True), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True)

    __table_args__ = (
        Index("idx_pattern_user_type_detected", "user_id", "pattern_type", "detected_at"),
        Index(
            "uq_pattern_user_type_day",
            "user_id",
            "pattern_type",
            "detected_on",
            unique=True,
            sqlite_where=text("deleted_at IS NULL"),
            postgresql_where=text("deleted_at IS NULL"),
        ),
    )

    @classmethod
    def from_data(cls, data: DetectedPatternData) -> DetectedPattern:
        return cls(
            id=data.id,
            user_id=data.user_id,
            pattern_type=data.pattern_type.value,
            severity=data.severity.value,
            title=data.title,
            body=data.body,
            related_bug_ids=list(data.related_bug_ids),
            data_points=data.data_points,
            detected_at=data.detected_at,
            detected_on=data.detected_at.date(),
            viewed_at=data.viewed_at,
            dismissed_at=data.dismissed_at,
            deleted_at=data.deleted_at,
        )

    def to_data(self) -> DetectedPatternData:
        return DetectedPatternData(
            id=self.id,
            user_id=self.user_id,
            pattern_type=PatternType(self.pattern_type),
            severity=PatternSeverity(self.severity),
            title=self.title,
            body=self.body,
            related_bug_ids=tuple(self.related_bug_ids or ()),
            data_points=self.data_points,
            detected_at=as_utc(self.detected_at),
            viewed_at=as_utc(self.viewed_at),
            dismissed_at=as_utc(self.dismissed_at),
            deleted_at=as_utc(self.deleted_at),
        )

    def __repr__(self) -> str:
        return (
            f"<DetectedPattern(id={self.id}, user_id={self.user_id}, "
            f"type={self.pattern_type}, severity={self.severity})>"
        )
