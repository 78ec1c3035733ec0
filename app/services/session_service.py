"""Session lifecycle: start, activate on first message, end, lookup."""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple
from uuid import UUID

from app.constants.conversation import OPEN_STATUSES, SessionStatus
from app.exceptions import InvalidStateError, NotFoundError
from app.infra.logging_config import get_logger
from app.models.session import Session
from app.stores.base import ConversationStore
from app.utils.time import as_utc, utcnow

logger = get_logger("sessions")


class SessionService:
    """
    Owns session status. CREATED -> ACTIVE happens on the first appended
    message; any open status -> ENDED happens on end(). ENDED is terminal.
    """

    def __init__(self, store: ConversationStore) -> None:
        self.store = store

    def start(
        self,
        user_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> Session:
        session = self.store.create_session(
            user_id=user_id, metadata=metadata, started_at=utcnow()
        )
        logger.info("Started session %s for user %s", session.id, user_id)
        return session

    def get(self, session_id: UUID) -> Session:
        session = self.store.get_session(session_id)
        if session is None:
            raise NotFoundError(f"Session not found: {session_id}")
        return session

    def list(
        self,
        user_id: Optional[str] = None,
        status: Optional[SessionStatus] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Session], int]:
        return self.store.list_sessions(
            user_id=user_id, status=status, offset=offset, limit=limit
        )

    def activate_on_first_message(self, session: Session) -> Session:
        """Move a CREATED session to ACTIVE. No-op when already ACTIVE."""
        status = SessionStatus(session.status)
        if status is SessionStatus.ACTIVE:
            return session
        if status is SessionStatus.ENDED:
            raise InvalidStateError(
                f"Cannot add message to ended session: {session.id}"
            )

        if self.store.transition_status(
            session.id, [SessionStatus.CREATED], SessionStatus.ACTIVE
        ):
            logger.info("Session %s is now ACTIVE", session.id)
            return self.get(session.id)

        # Someone else moved it first; only ENDED is a problem.
        current = self.get(session.id)
        if current.status == SessionStatus.ENDED:
            raise InvalidStateError(
                f"Cannot add message to ended session: {session.id}"
            )
        return current

    def end(self, session_id: UUID, reason: Optional[str] = None) -> Session:
        """End a session. Ending an already ended session is an error and leaves ended_at untouched."""
        session = self.get(session_id)
        if session.status == SessionStatus.ENDED:
            raise InvalidStateError(f"Session already ended: {session_id}")

        ended_at = max(utcnow(), as_utc(session.started_at))
        applied = self.store.transition_status(
            session.id,
            OPEN_STATUSES,
            SessionStatus.ENDED,
            ended_at=ended_at,
            end_reason=reason,
        )
        if not applied:
            raise InvalidStateError(f"Session already ended: {session_id}")

        logger.info("Ended session %s, reason: %s", session_id, reason)
        return self.get(session_id)
