"""Append-only message ledger with page/size history reads."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple, Union
from uuid import UUID

from app.constants.conversation import MessageRole
from app.exceptions import InvalidArgumentError, InvalidStateError
from app.infra.logging_config import get_logger
from app.models.session_message import SessionMessage
from app.services.session_service import SessionService
from app.stores.base import ConversationStore
from app.utils.time import utcnow

logger = get_logger("messages")

ASSISTANT_PREVIEW_TEMPLATE = "This is a mock reply to: {content}"


def build_assistant_preview(content: str) -> str:
    """Cheap local echo shown next to a USER message; not a generated reply."""
    return ASSISTANT_PREVIEW_TEMPLATE.format(content=content)


def _coerce_role(role: Union[MessageRole, str]) -> MessageRole:
    if isinstance(role, MessageRole):
        return role
    try:
        return MessageRole(str(role).strip().upper())
    except ValueError:
        raise InvalidArgumentError(
            f"Unknown message role: {role!r}",
            details={"role": [r.value for r in MessageRole]},
        ) from None


class SessionMessageService:
    def __init__(
        self,
        store: ConversationStore,
        session_service: Optional[SessionService] = None,
    ) -> None:
        self.store = store
        self.sessions = session_service or SessionService(store)

    def append(
        self,
        session_id: UUID,
        role: Union[MessageRole, str],
        content: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> SessionMessage:
        """
        Append a message to an open session.

        USER messages come back with assistant_preview set; it is not stored.
        """
        role = _coerce_role(role)
        if content is None or not content.strip():
            raise InvalidArgumentError(
                "Message content must not be empty",
                details={"content": "must not be blank"},
            )

        session = self.sessions.get(session_id)
        self.sessions.activate_on_first_message(session)

        msg = self.store.append_message(
            session_id=session.id,
            role=role,
            content=content,
            metadata=metadata,
            created_at=utcnow(),
        )
        if msg is None:
            # Ended between activation and append.
            raise InvalidStateError(
                f"Cannot add message to ended session: {session_id}"
            )

        if role is MessageRole.USER:
            msg.assistant_preview = build_assistant_preview(content)
        logger.info(
            "Added message %s (#%s, %s) to session %s",
            msg.id,
            msg.sequence,
            role.value,
            session_id,
        )
        return msg

    def page(
        self, session_id: UUID, page: int, size: int
    ) -> Tuple[List[SessionMessage], int]:
        """Return messages [page*size, page*size+size) in append order, plus the total."""
        if page < 0:
            raise InvalidArgumentError(
                "Page number must not be negative", details={"page": page}
            )
        if size < 1:
            raise InvalidArgumentError(
                "Page size must be at least 1", details={"size": size}
            )

        self.sessions.get(session_id)
        total = self.store.count_messages(session_id)
        start = page * size
        if start >= total:
            return [], total
        end = min(start + size, total)
        return self.store.list_messages(session_id, offset=start, limit=end - start), total

    def count(self, session_id: UUID) -> int:
        return self.store.count_messages(session_id)

    def history(self, session_id: UUID) -> List[SessionMessage]:
        """All messages of the session in append order."""
        return self.store.list_messages(session_id)
