"""Pydantic schemas for Session and SessionMessage."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from app.constants.conversation import MessageRole, SessionStatus
from app.utils.time import as_utc

# -----------------------------------------------------------------------------
# Session schemas
# -----------------------------------------------------------------------------


class StartSessionRequest(BaseModel):
    """Schema for starting a session. Both fields are optional."""

    user_id: Optional[str] = Field(None, max_length=256)
    metadata: Optional[dict[str, Any]] = None


class SessionRead(BaseModel):
    """Session for API responses."""

    session_id: UUID
    user_id: Optional[str] = None
    status: SessionStatus
    started_at: datetime
    ended_at: Optional[datetime] = None
    end_reason: Optional[str] = None
    metadata: Optional[dict[str, Any]] = None
    message_count: int = 0

    model_config = {"from_attributes": True}

    @field_validator("started_at", "ended_at")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)

    @classmethod
    def model_validate(cls, obj, **kwargs):
        if hasattr(obj, "session_metadata"):
            # ORM has .extra as DB column and .id as key; expose as API names
            data = {
                "session_id": getattr(obj, "id", None),
                "user_id": getattr(obj, "user_id", None),
                "status": getattr(obj, "status", None),
                "started_at": getattr(obj, "started_at", None),
                "ended_at": getattr(obj, "ended_at", None),
                "end_reason": getattr(obj, "end_reason", None),
                "metadata": getattr(obj, "session_metadata", None),
                "message_count": getattr(obj, "message_count", None) or 0,
            }
            return cls.model_validate(data, **kwargs)
        return super().model_validate(obj, **kwargs)


class EndSessionRequest(BaseModel):
    """Schema for ending a session."""

    reason: Optional[str] = Field(None, max_length=1024)


class EndSessionResponse(BaseModel):
    """Ended session summary."""

    session_id: UUID
    status: SessionStatus
    ended_at: datetime
    end_reason: Optional[str] = None

    @field_validator("ended_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)


# -----------------------------------------------------------------------------
# SessionMessage schemas
# -----------------------------------------------------------------------------


class MessageCreate(BaseModel):
    """Schema for appending a message to a session."""

    role: MessageRole
    content: str = Field(..., min_length=1)
    metadata: Optional[dict[str, Any]] = None

    @field_validator("role", mode="before")
    @classmethod
    def _normalize_role(cls, value: Any) -> Any:
        # Free text at the boundary ("user", "Assistant") maps onto the closed set.
        if isinstance(value, str):
            return value.strip().upper()
        return value


class ChatMessageCreate(BaseModel):
    """Schema for a user message that should receive a generated reply."""

    content: str = Field(..., min_length=1)
    metadata: Optional[dict[str, Any]] = None


class MessageRead(BaseModel):
    """Session message for API responses."""

    message_id: UUID
    session_id: UUID
    sequence: int
    role: MessageRole
    content: str
    metadata: Optional[dict[str, Any]] = None
    created_at: datetime

    model_config = {"from_attributes": True}

    @field_validator("created_at")
    @classmethod
    def _utc(cls, value: datetime) -> datetime:
        return as_utc(value)

    @classmethod
    def model_validate(cls, obj, **kwargs):
        if hasattr(obj, "message_metadata"):
            # ORM has .extra as DB column; expose as .metadata for schema
            data = {
                "message_id": getattr(obj, "id", None),
                "session_id": getattr(obj, "session_id", None),
                "sequence": getattr(obj, "sequence", None),
                "role": getattr(obj, "role", None),
                "content": getattr(obj, "content", None),
                "metadata": getattr(obj, "message_metadata", None),
                "created_at": getattr(obj, "created_at", None),
            }
            if "assistant_preview" in cls.model_fields:
                data["assistant_preview"] = getattr(obj, "assistant_preview", None)
            return cls.model_validate(data, **kwargs)
        return super().model_validate(obj, **kwargs)


class PostMessageResponse(MessageRead):
    """Stored message plus the local preview echo for USER messages."""

    assistant_preview: Optional[str] = None


class ChatTurnResponse(BaseModel):
    """Both sides of a chat turn: the stored user message and the generated reply."""

    user_message: MessageRead
    assistant_message: MessageRead


class ConversationRead(BaseModel):
    """One page of a session's history."""

    session_id: UUID
    status: SessionStatus
    started_at: datetime
    ended_at: Optional[datetime] = None
    end_reason: Optional[str] = None
    messages: list[MessageRead]
    total: int
    page: int
    size: int

    @field_validator("started_at", "ended_at")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)
