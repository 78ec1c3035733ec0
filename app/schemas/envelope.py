"""Common response envelope for every API response."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ErrorPayload(BaseModel):
    """Structured error: stable code, readable message, optional details."""

    code: str
    message: str
    details: Optional[Any] = None


class ResponseEnvelope(BaseModel, Generic[T]):
    """{"success", "data" | "error", "timestamp"}."""

    success: bool
    data: Optional[T] = None
    error: Optional[ErrorPayload] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: T) -> "ResponseEnvelope[T]":
        return cls(success=True, data=data)

    @classmethod
    def fail(
        cls, code: str, message: str, details: Optional[Any] = None
    ) -> "ResponseEnvelope[T]":
        return cls(
            success=False,
            error=ErrorPayload(code=code, message=message, details=details),
        )
