"""Ending credits: session stats plus summary lines generated once per session."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from app.constants.fallback_text import DefaultCredits
from app.infra.logging_config import get_logger
from app.models.session import Session
from app.services.generation_service import GenerationService
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService
from app.stores.base import ConversationStore
from app.utils.time import as_utc, utcnow

logger = get_logger("ending_credits")

DEFAULT_SUMMARY_LINE_COUNT = 10


@dataclass
class CreditsResult:
    """Result of a generate call."""

    session_id: UUID
    message_count: int
    duration_sec: int
    lines: List[str]
    generated_at: Optional[datetime] = None
    reused: bool = False
    credits: List[dict] = field(default_factory=lambda: list(DefaultCredits.CAST))


def session_duration_seconds(session: Session) -> int:
    """Whole seconds from start to end (or to now while the session is open)."""
    end = as_utc(session.ended_at) or utcnow()
    seconds = int((end - as_utc(session.started_at)).total_seconds())
    return max(seconds, 0)


class EndingCreditsService:
    def __init__(
        self,
        store: ConversationStore,
        generation: GenerationService,
        summary_line_count: int = DEFAULT_SUMMARY_LINE_COUNT,
    ) -> None:
        self.store = store
        self.sessions = SessionService(store)
        self.messages = SessionMessageService(store, self.sessions)
        self.generation = generation
        self.summary_line_count = summary_line_count

    def generate(self, session_id: UUID, include_duration: bool = True) -> CreditsResult:
        """
        Return stats and summary lines for a session.

        Stats are recomputed on every call. Lines are generated and stored on
        the first call only; later calls (including a concurrent automatic one)
        return the stored lines.
        """
        session = self.sessions.get(session_id)
        message_count = self.messages.count(session.id)
        duration_sec = session_duration_seconds(session) if include_duration else 0

        record = self.store.get_credits(session.id)
        reused = record is not None and bool(record.lines)
        if reused:
            logger.info("Reusing stored ending credits for session %s", session.id)
        else:
            lines = self.generation.summarize(
                session, self.messages.history(session.id), self.summary_line_count
            )
            record = self.store.save_credits(
                session_id=session.id,
                lines=lines,
                message_count=message_count,
                duration_sec=duration_sec,
                generated_at=utcnow(),
            )
            logger.info(
                "Generated %d ending credit lines for session %s",
                len(record.lines),
                session.id,
            )

        return CreditsResult(
            session_id=session.id,
            message_count=message_count,
            duration_sec=duration_sec,
            lines=list(record.lines),
            generated_at=record.generated_at,
            reused=reused,
        )
