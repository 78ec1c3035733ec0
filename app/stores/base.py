"""
Conversation store interface.

The core never talks to a database directly; it goes through a store that
guarantees the atomic operations the session lifecycle depends on:
conditional status transitions and "append unless ENDED".
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple
from uuid import UUID

from app.constants.conversation import MessageRole, SessionStatus
from app.models.ending_credits import EndingCredits
from app.models.session import Session
from app.models.session_message import SessionMessage


class ConversationStore(ABC):
    """Contract for session, message and credits persistence. Backends implement this interface."""

    @abstractmethod
    def create_session(
        self,
        user_id: Optional[str],
        metadata: Optional[dict[str, Any]],
        started_at: datetime,
    ) -> Session:
        """Persist a new CREATED session and return it."""
        ...

    @abstractmethod
    def get_session(self, session_id: UUID) -> Optional[Session]:
        """Return the session or None when unknown."""
        ...

    @abstractmethod
    def list_sessions(
        self,
        user_id: Optional[str] = None,
        status: Optional[SessionStatus] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Session], int]:
        """Return one slice of sessions (newest first) and the total matching count."""
        ...

    @abstractmethod
    def transition_status(
        self,
        session_id: UUID,
        from_statuses: Iterable[SessionStatus],
        to_status: SessionStatus,
        **fields: Any,
    ) -> bool:
        """
        Atomically move a session to to_status if its current status is one of
        from_statuses, writing any extra fields in the same step.
        Return True if the transition was applied.
        """
        ...

    @abstractmethod
    def append_message(
        self,
        session_id: UUID,
        role: MessageRole,
        content: str,
        metadata: Optional[dict[str, Any]],
        created_at: datetime,
    ) -> Optional[SessionMessage]:
        """
        Atomically append a message unless the session is ENDED (or missing).

        Assigns the next sequence number. created_at is clamped to the previous
        message's timestamp so timestamps never decrease within a session.
        Return None when nothing was appended.
        """
        ...

    @abstractmethod
    def list_messages(
        self,
        session_id: UUID,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[SessionMessage]:
        """Return messages in append order; limit=None returns everything from offset."""
        ...

    @abstractmethod
    def count_messages(self, session_id: UUID) -> int:
        ...

    @abstractmethod
    def get_credits(self, session_id: UUID) -> Optional[EndingCredits]:
        ...

    @abstractmethod
    def save_credits(
        self,
        session_id: UUID,
        lines: List[str],
        message_count: int,
        duration_sec: int,
        generated_at: datetime,
    ) -> EndingCredits:
        """
        Insert the credits record if none exists yet.
        Return the stored record, which is the existing one when another caller got there first.
        """
        ...
