"""
Assistant replies and ending-credit summaries with a local fallback.

Whatever backend is configured, callers always get text back: generator
failures are logged here and replaced by the deterministic fallback.
"""

from __future__ import annotations

from typing import Optional, Sequence
from uuid import UUID

from app.adapters.base import BaseTextGenerator
from app.adapters.local_generator import (
    LocalTextGenerator,
    fallback_reply,
    fallback_summary,
    new_conversation_summary,
)
from app.adapters.rag_client import RagTextGenerator
from app.config import Settings, get_settings
from app.exceptions import UpstreamUnavailableError
from app.infra.logging_config import get_logger
from app.models.session import Session
from app.models.session_message import SessionMessage

logger = get_logger("generation")


class GenerationService:
    def __init__(
        self,
        generator: BaseTextGenerator,
        summaries_enabled: bool = True,
    ) -> None:
        self.generator = generator
        self.summaries_enabled = summaries_enabled

    def reply(
        self,
        content: str,
        session_id: UUID | str,
        character: Optional[str] = None,
    ) -> str:
        """Return an assistant reply; never raises."""
        try:
            text = self.generator.reply(content, str(session_id), character)
        except UpstreamUnavailableError as e:
            logger.warning(
                "Text generator %s failed for session %s, using fallback reply: %s",
                self.generator.name,
                session_id,
                e.message,
            )
            return fallback_reply(content, character)
        if not text or not text.strip():
            logger.warning(
                "Text generator %s returned an empty reply for session %s",
                self.generator.name,
                session_id,
            )
            return fallback_reply(content, character)
        return text

    def summarize(
        self,
        session: Session,
        messages: Sequence[SessionMessage],
        line_count: int,
    ) -> list[str]:
        """
        Return ending-credit lines for the session.

        An empty conversation always gets the fixed "new conversation" lines.
        Otherwise a disabled, failing or empty generator yields the fixed
        fallback lines; line_count is only passed on to the generator.
        """
        if not messages:
            return new_conversation_summary()

        fallback = fallback_summary(len(messages))
        if not self.summaries_enabled:
            return fallback

        turns = [{"role": m.role.lower(), "content": m.content} for m in messages]
        try:
            lines = self.generator.summarize(str(session.id), turns, line_count)
        except UpstreamUnavailableError as e:
            logger.warning(
                "Text generator %s failed to summarize session %s, using fallback: %s",
                self.generator.name,
                session.id,
                e.message,
            )
            return fallback

        lines = [line for line in lines if line and line.strip()]
        if not lines:
            logger.warning(
                "Text generator %s returned no summary lines for session %s",
                self.generator.name,
                session.id,
            )
            return fallback
        return lines


def build_text_generator(settings: Optional[Settings] = None) -> BaseTextGenerator:
    """Pick the generator backend from configuration (once, at startup)."""
    settings = settings or get_settings()
    backend = (settings.generation_backend or "local").lower()
    logger.info("Text generation backend: %s", backend)
    if backend == "rag":
        return RagTextGenerator(
            base_url=settings.rag_api_url,
            timeout=settings.rag_timeout_seconds,
        )
    if backend == "llm":
        from app.workers.llm import build_llm_generator_from_env

        return build_llm_generator_from_env()
    if backend != "local":
        logger.warning(
            "Unknown GENERATION_BACKEND %r; using the local fallback generator",
            backend,
        )
    return LocalTextGenerator()
