"""Deterministic generator used when no external service is configured or reachable."""

from __future__ import annotations

from typing import Optional

from app.adapters.base import BaseTextGenerator
from app.constants.fallback_text import FallbackReply, FallbackSummary


def fallback_reply(content: str, character: Optional[str] = None) -> str:
    prefix = ""
    if character:
        prefix = FallbackReply.CHARACTER_PREFIX.format(character=character)
    return prefix + FallbackReply.TEMPLATE.format(content=content)


def fallback_summary(message_count: int) -> list[str]:
    lines = list(FallbackSummary.LINES)
    lines[0] = lines[0].format(message_count=message_count)
    return lines


def new_conversation_summary() -> list[str]:
    return list(FallbackSummary.NEW_CONVERSATION)


class LocalTextGenerator(BaseTextGenerator):
    """Never fails; always returns the fixed fallback texts."""

    name = "local"

    def reply(
        self,
        content: str,
        session_id: str,
        character: Optional[str] = None,
    ) -> str:
        return fallback_reply(content, character)

    def summarize(
        self,
        session_id: str,
        messages: list[dict[str, str]],
        count: int,
    ) -> list[str]:
        if not messages:
            return new_conversation_summary()
        return fallback_summary(len(messages))
