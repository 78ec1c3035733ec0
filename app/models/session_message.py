"""SessionMessage model: one row per turn, ordered by its per-session sequence."""

from __future__ import annotations

import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship

from app.db import Base
from app.models.types import JSONType


class SessionMessage(Base):
    """Immutable turn. sequence is the append order (1-based) within a session."""

    __tablename__ = "conversation_messages"

    __table_args__ = (
        UniqueConstraint(
            "session_id", "sequence", name="uq_conversation_messages_session_sequence"
        ),
    )

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    session_id = Column(
        Uuid,
        ForeignKey("conversation_sessions.id", ondelete="CASCADE"),
        nullable=False,
    )
    sequence = Column(Integer, nullable=False)
    role = Column(String(16), nullable=False)  # USER | ASSISTANT | SYSTEM
    content = Column(Text, nullable=False)
    extra = Column(
        "metadata", JSONType, nullable=True
    )  # DB column "metadata"; avoid shadowing Base.metadata
    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    session = relationship("Session", back_populates="messages")

    # Set on the returned object only; never persisted.
    assistant_preview = None

    @property
    def message_metadata(self) -> dict | None:
        """Expose DB column 'metadata' for Pydantic/serialization (avoid shadowing Base.metadata)."""
        return self.extra
