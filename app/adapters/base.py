"""
Text generator interface.

Generators encapsulate one way of producing assistant replies and ending-credit
summaries (local fallback, external RAG service, LLM) behind the same calls.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class BaseTextGenerator(ABC):
    """Contract for text generators. New backends implement this interface."""

    name: str = "base"

    @abstractmethod
    def reply(
        self,
        content: str,
        session_id: str,
        character: Optional[str] = None,
    ) -> str:
        """Return an assistant reply. Raise UpstreamUnavailableError if none could be produced."""
        ...

    @abstractmethod
    def summarize(
        self,
        session_id: str,
        messages: list[dict[str, str]],
        count: int,
    ) -> list[str]:
        """
        Return narrative summary lines for the given {role, content} turns.
        count is advisory. Raise UpstreamUnavailableError on failure.
        """
        ...
