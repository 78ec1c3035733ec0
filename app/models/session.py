"""Session model: one row per conversation, owning its lifecycle status."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Index, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from app.constants.conversation import SessionStatus
from app.db import Base
from app.models.mixins import TimestampMixin
from app.models.types import JSONType


class Session(Base, TimestampMixin):
    """One row per conversation. ended_at is set exactly when status is ENDED."""

    __tablename__ = "conversation_sessions"

    __table_args__ = (
        Index("ix_conversation_sessions_user_id_started_at", "user_id", "started_at"),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(String(256), nullable=True)
    status = Column(String(16), nullable=False, default=SessionStatus.CREATED.value)
    started_at = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    ended_at = Column(DateTime(timezone=True), nullable=True)
    end_reason = Column(Text, nullable=True)
    extra = Column(
        "metadata", JSONType, nullable=True
    )  # DB column "metadata"; avoid shadowing Base.metadata
    message_count = Column(Integer, nullable=False, default=0)

    messages = relationship(
        "SessionMessage",
        back_populates="session",
        cascade="all, delete-orphan",
        order_by="SessionMessage.sequence",
    )
    ending_credits = relationship(
        "EndingCredits",
        back_populates="session",
        cascade="all, delete-orphan",
        uselist=False,
    )

    @property
    def session_metadata(self) -> dict | None:
        """Expose DB column 'metadata' for Pydantic/serialization (avoid shadowing Base.metadata)."""
        return self.extra
