"""SessionManager: facade for start, post_message, chat, get_conversation, end, credits, list."""

from __future__ import annotations

from typing import Any, List, Optional, Tuple
from uuid import UUID

from app.config import Settings, get_settings
from app.constants.conversation import MessageRole, SessionStatus
from app.infra.logging_config import get_logger
from app.models.session import Session
from app.models.session_message import SessionMessage
from app.services.ending_credits_service import CreditsResult, EndingCreditsService
from app.services.generation_service import GenerationService
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService
from app.stores.base import ConversationStore

logger = get_logger("session_manager")


class SessionManager:
    def __init__(
        self,
        store: ConversationStore,
        generation: GenerationService,
        settings: Optional[Settings] = None,
    ) -> None:
        settings = settings or get_settings()
        self._session_svc = SessionService(store)
        self._message_svc = SessionMessageService(store, self._session_svc)
        self._credits_svc = EndingCreditsService(
            store,
            generation,
            summary_line_count=settings.credits_summary_line_count,
        )
        self._generation = generation
        self._auto_credits = settings.auto_generate_credits_on_end

    def start_session(
        self,
        user_id: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Session:
        return self._session_svc.start(user_id=user_id, metadata=metadata)

    def get_session(self, session_id: UUID) -> Session:
        return self._session_svc.get(session_id)

    def list_sessions(
        self,
        user_id: Optional[str] = None,
        status: Optional[SessionStatus] = None,
        offset: int = 0,
        limit: int = 100,
    ) -> Tuple[List[Session], int]:
        return self._session_svc.list(
            user_id=user_id, status=status, offset=offset, limit=limit
        )

    def post_message(
        self,
        session_id: UUID,
        role: MessageRole | str,
        content: str,
        metadata: Optional[dict[str, Any]] = None,
    ) -> SessionMessage:
        return self._message_svc.append(session_id, role, content, metadata)

    def chat(
        self,
        session_id: UUID,
        content: str,
        character: Optional[str] = None,
        metadata: Optional[dict[str, Any]] = None,
    ) -> Tuple[SessionMessage, SessionMessage]:
        """Record a USER turn, generate a reply and record it as an ASSISTANT turn."""
        user_msg = self._message_svc.append(
            session_id, MessageRole.USER, content, metadata
        )
        reply = self._generation.reply(content, session_id, character)
        assistant_meta: dict[str, Any] = {"generator": self._generation.generator.name}
        if character:
            assistant_meta["character"] = character
        assistant_msg = self._message_svc.append(
            session_id, MessageRole.ASSISTANT, reply, assistant_meta
        )
        return user_msg, assistant_msg

    def get_conversation(
        self, session_id: UUID, page: int = 0, size: int = 20
    ) -> Tuple[Session, List[SessionMessage], int]:
        session = self._session_svc.get(session_id)
        messages, total = self._message_svc.page(session_id, page, size)
        return session, messages, total

    def end_session(self, session_id: UUID, reason: Optional[str] = None) -> Session:
        """
        End the session, then try to generate its ending credits.

        Credits generation is best effort; a failure is logged and the ended
        session is still returned.
        """
        session = self._session_svc.end(session_id, reason)
        if self._auto_credits:
            try:
                self._credits_svc.generate(session.id, include_duration=True)
            except Exception:
                logger.exception(
                    "Automatic ending credits failed for session %s", session.id
                )
        return session

    def generate_credits(
        self, session_id: UUID, include_duration: bool = True
    ) -> CreditsResult:
        return self._credits_svc.generate(session_id, include_duration)
