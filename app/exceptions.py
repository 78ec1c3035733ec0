"""
Errors raised by the conversation core.

Each error carries a stable machine-readable ``kind`` and the HTTP status the
API layer maps it to. ``UpstreamUnavailableError`` never leaves the
generation layer; it is converted to a fallback result there.
"""

from __future__ import annotations

from typing import Any, Optional


class ConversationError(Exception):
    """Base class for errors surfaced to callers as a structured payload."""

    kind: str = "INTERNAL_ERROR"
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(ConversationError):
    """The referenced session does not exist."""

    kind = "NOT_FOUND"
    status_code = 404


class InvalidStateError(ConversationError):
    """The operation is not allowed in the session's current status."""

    kind = "INVALID_STATE"
    status_code = 409


class InvalidArgumentError(ConversationError):
    """Malformed input reached the core."""

    kind = "INVALID_ARGUMENT"
    status_code = 400


class UpstreamUnavailableError(ConversationError):
    """The external text generator failed, timed out or answered badly."""

    kind = "UPSTREAM_UNAVAILABLE"
    status_code = 502
