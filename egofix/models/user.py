"""
User Profile Model for EgoFix Diagnostics.

Holds the bookkeeping the diagnostic engine needs between runs.
"""

from sqlalchemy import Column, DateTime, String

from egofix.models.base import Base, new_id, utcnow


class UserProfile(Base):
    """
    Per-user diagnostics bookkeeping.

    Attributes:
        id: User id (UUID string)
        last_diagnostics_run_at: When the engine last completed a run
        created_at: Creation timestamp
        updated_at: Last update timestamp
    """

    __tablename__ = "user_profiles"

    id = Column(String(36), primary_key=True, default=new_id)
    last_diagnostics_run_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<UserProfile(id={self.id}, last_run={self.last_diagnostics_run_at})>"
