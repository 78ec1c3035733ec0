"""EndingCredits model: the generated closing summary of a session."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, ForeignKey, Integer, Uuid
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.types import JSONType


class EndingCredits(Base):
    """At most one row per session; lines are kept in generation order and never regenerated."""

    __tablename__ = "ending_credits"

    session_id = Column(
        Uuid,
        ForeignKey("conversation_sessions.id", ondelete="CASCADE"),
        primary_key=True,
    )
    lines = Column(JSONType, nullable=False, default=list)
    message_count = Column(Integer, nullable=False, default=0)
    duration_sec = Column(Integer, nullable=False, default=0)
    generated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    session = relationship("Session", back_populates="ending_credits")
