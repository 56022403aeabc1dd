"""
Bug Model for EgoFix Diagnostics.

Only the id and display title matter to the diagnostics core: titles feed
the bug name lookup used in pattern text.
"""

from sqlalchemy import Column, DateTime, String

from egofix.models.base import Base, new_id, utcnow


class Bug(Base):
    """A recurring behavioral bug the user tracks."""

    __tablename__ = "bugs"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Bug(id={self.id}, title={self.title!r})>"
