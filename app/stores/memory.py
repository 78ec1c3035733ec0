"""In-memory conversation store (single process)."""

from __future__ import annotations

import threading
import uuid
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from uuid import UUID

from app.constants.conversation import OPEN_STATUSES, MessageRole, SessionStatus
from app.models.ending_credits import EndingCredits
from app.models.session import Session
from app.models.session_message import SessionMessage
from app.stores.base import ConversationStore
from app.utils.time import as_utc, utcnow


class InMemoryConversationStore(ConversationStore):
    """
    Keeps sessions, messages and credits in dicts keyed by session id.

    Every operation runs under one re-entrant lock, which makes each of them
    atomic with respect to the others. Objects are transient ORM instances so
    the rest of the application sees the same shapes as with the database.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[UUID, Session] = {}
        self._messages: Dict[UUID, List[SessionMessage]] = {}
        self._credits: Dict[UUID, EndingCredits] = {}

    def create_session(
        self,
        user_id: Optional[str],
        metadata: Optional[dict[str, Any]],
        started_at: datetime,
    ) -> Session:
        session = Session(
            id=uuid.uuid4(),
            user_id=user_id,
            status=SessionStatus.CREATED.value,
            started_at=started_at,
            ended_at=None,
            end_reason=None,
            extra=dict(metadata) if metadata is not None else None,
            message_count=0,
            created_at=started_at,
            updated_at=started_at,
        )
        with self._lock:
            self._sessions[session.id] = session
            self._messages[session.id] = []
        return session

    def get_session(self, session_id: UUID) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(session_id)

    def list_sessions(
        self,
        user_id: Optional[str] = None,
        status: Optional[SessionStatus] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Session], int]:
        with self._lock:
            sessions = list(self._sessions.values())
        if user_id is not None:
            sessions = [s for s in sessions if s.user_id == user_id]
        if status is not None:
            sessions = [s for s in sessions if s.status == status.value]
        sessions.sort(key=lambda s: as_utc(s.started_at), reverse=True)
        return sessions[offset : offset + limit], len(sessions)

    def transition_status(
        self,
        session_id: UUID,
        from_statuses: Iterable[SessionStatus],
        to_status: SessionStatus,
        **fields: Any,
    ) -> bool:
        allowed = {s.value for s in from_statuses}
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session.status not in allowed:
                return False
            session.status = to_status.value
            for key, value in fields.items():
                setattr(session, key, value)
            session.updated_at = utcnow()
            return True

    def append_message(
        self,
        session_id: UUID,
        role: MessageRole,
        content: str,
        metadata: Optional[dict[str, Any]],
        created_at: datetime,
    ) -> Optional[SessionMessage]:
        open_values = {s.value for s in OPEN_STATUSES}
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None or session.status not in open_values:
                return None
            messages = self._messages[session_id]
            created_at = as_utc(created_at)
            if messages and created_at < as_utc(messages[-1].created_at):
                created_at = as_utc(messages[-1].created_at)
            msg = SessionMessage(
                id=uuid.uuid4(),
                session_id=session_id,
                sequence=len(messages) + 1,
                role=role.value,
                content=content,
                extra=dict(metadata) if metadata is not None else None,
                created_at=created_at,
            )
            messages.append(msg)
            session.message_count = len(messages)
            session.updated_at = utcnow()
            return msg

    def list_messages(
        self,
        session_id: UUID,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[SessionMessage]:
        with self._lock:
            messages = list(self._messages.get(session_id, []))
        end = None if limit is None else offset + limit
        return messages[offset:end]

    def count_messages(self, session_id: UUID) -> int:
        with self._lock:
            return len(self._messages.get(session_id, []))

    def get_credits(self, session_id: UUID) -> Optional[EndingCredits]:
        with self._lock:
            return self._credits.get(session_id)

    def save_credits(
        self,
        session_id: UUID,
        lines: List[str],
        message_count: int,
        duration_sec: int,
        generated_at: datetime,
    ) -> EndingCredits:
        with self._lock:
            existing = self._credits.get(session_id)
            if existing is not None:
                return existing
            credits = EndingCredits(
                session_id=session_id,
                lines=list(lines),
                message_count=message_count,
                duration_sec=duration_sec,
                generated_at=generated_at,
            )
            self._credits[session_id] = credits
            return credits
