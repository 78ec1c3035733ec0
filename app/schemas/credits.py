"""Pydantic schemas for ending credits."""

from __future__ import annotations

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, field_validator

from app.utils.time import as_utc


class EndingCreditsRequest(BaseModel):
    """Request schema for generating ending credits."""

    session_id: UUID
    include_duration: bool = True


class CreditsStats(BaseModel):
    """Derived statistics; recomputed on every request."""

    message_count: int
    duration_sec: int


class Credit(BaseModel):
    """One entry of the cast list."""

    role: str
    name: str


class EndingCreditsResponse(BaseModel):
    """Ending credits for a session."""

    session_id: UUID
    stats: CreditsStats
    lines: list[str]
    credits: list[Credit]
    generated_at: Optional[datetime] = None

    @field_validator("generated_at")
    @classmethod
    def _utc(cls, value: Optional[datetime]) -> Optional[datetime]:
        return as_utc(value)
