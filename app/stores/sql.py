"""SQLAlchemy-backed conversation store."""

from __future__ import annotations

from datetime import datetime
from typing import Any, Iterable, List, Optional, Tuple
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session as DBSession

from app.constants.conversation import OPEN_STATUSES, MessageRole, SessionStatus
from app.models.ending_credits import EndingCredits
from app.models.session import Session
from app.models.session_message import SessionMessage
from app.stores.base import ConversationStore
from app.utils.time import as_utc, utcnow


class SqlConversationStore(ConversationStore):
    """
    Store on a relational database.

    Status checks are conditional UPDATEs, so the row lock taken by the
    database decides races between "end session" and "append message".
    """

    def __init__(self, db: DBSession) -> None:
        self.db = db

    def create_session(
        self,
        user_id: Optional[str],
        metadata: Optional[dict[str, Any]],
        started_at: datetime,
    ) -> Session:
        session = Session(
            user_id=user_id,
            status=SessionStatus.CREATED.value,
            started_at=started_at,
            extra=metadata,
            message_count=0,
        )
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session

    def get_session(self, session_id: UUID) -> Optional[Session]:
        return (
            self.db.query(Session)
            .populate_existing()
            .filter(Session.id == session_id)
            .first()
        )

    def list_sessions(
        self,
        user_id: Optional[str] = None,
        status: Optional[SessionStatus] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Session], int]:
        query = self.db.query(Session)
        if user_id is not None:
            query = query.filter(Session.user_id == user_id)
        if status is not None:
            query = query.filter(Session.status == status.value)
        total = query.count()
        items = (
            query.order_by(Session.started_at.desc(), Session.id)
            .offset(offset)
            .limit(limit)
            .all()
        )
        return items, total

    def transition_status(
        self,
        session_id: UUID,
        from_statuses: Iterable[SessionStatus],
        to_status: SessionStatus,
        **fields: Any,
    ) -> bool:
        values = {"status": to_status.value, "updated_at": utcnow(), **fields}
        result = self.db.execute(
            update(Session)
            .where(
                Session.id == session_id,
                Session.status.in_([s.value for s in from_statuses]),
            )
            .values(**values)
            .execution_options(synchronize_session="fetch")
        )
        self.db.commit()
        return result.rowcount == 1

    def append_message(
        self,
        session_id: UUID,
        role: MessageRole,
        content: str,
        metadata: Optional[dict[str, Any]],
        created_at: datetime,
    ) -> Optional[SessionMessage]:
        # Claims the next sequence number and locks the row until commit.
        result = self.db.execute(
            update(Session)
            .where(
                Session.id == session_id,
                Session.status.in_([s.value for s in OPEN_STATUSES]),
            )
            .values(message_count=Session.message_count + 1, updated_at=utcnow())
            .execution_options(synchronize_session="fetch")
        )
        if result.rowcount != 1:
            self.db.rollback()
            return None

        sequence = (
            self.db.query(Session.message_count)
            .filter(Session.id == session_id)
            .scalar()
        )
        previous_created_at = as_utc(
            self.db.query(SessionMessage.created_at)
            .filter(
                SessionMessage.session_id == session_id,
                SessionMessage.sequence == sequence - 1,
            )
            .scalar()
        )
        created_at = as_utc(created_at)
        if previous_created_at is not None and created_at < previous_created_at:
            created_at = previous_created_at

        msg = SessionMessage(
            session_id=session_id,
            sequence=sequence,
            role=role.value,
            content=content,
            extra=metadata,
            created_at=created_at,
        )
        self.db.add(msg)
        self.db.commit()
        self.db.refresh(msg)
        return msg

    def list_messages(
        self,
        session_id: UUID,
        offset: int = 0,
        limit: Optional[int] = None,
    ) -> List[SessionMessage]:
        query = (
            self.db.query(SessionMessage)
            .filter(SessionMessage.session_id == session_id)
            .order_by(SessionMessage.sequence)
            .offset(offset)
        )
        if limit is not None:
            query = query.limit(limit)
        return query.all()

    def count_messages(self, session_id: UUID) -> int:
        return (
            self.db.query(SessionMessage)
            .filter(SessionMessage.session_id == session_id)
            .count()
        )

    def get_credits(self, session_id: UUID) -> Optional[EndingCredits]:
        return (
            self.db.query(EndingCredits)
            .filter(EndingCredits.session_id == session_id)
            .first()
        )

    def save_credits(
        self,
        session_id: UUID,
        lines: List[str],
        message_count: int,
        duration_sec: int,
        generated_at: datetime,
    ) -> EndingCredits:
        existing = self.get_credits(session_id)
        if existing is not None:
            return existing
        credits = EndingCredits(
            session_id=session_id,
            lines=list(lines),
            message_count=message_count,
            duration_sec=duration_sec,
            generated_at=generated_at,
        )
        self.db.add(credits)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request stored credits for this session first.
            self.db.rollback()
            existing = self.get_credits(session_id)
            if existing is None:
                raise
            return existing
        self.db.refresh(credits)
        return credits
