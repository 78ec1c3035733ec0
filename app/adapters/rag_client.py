"""Client for the external RAG text service (/chat and /summarize)."""

from __future__ import annotations

from typing import Any, Optional, Type, TypeVar

import requests
from pydantic import BaseModel, ValidationError

from app.adapters.base import BaseTextGenerator
from app.exceptions import UpstreamUnavailableError
from app.infra.logging_config import get_logger
from app.schemas.generation import (
    RagChatRequest,
    RagChatResponse,
    RagSummarizeRequest,
    RagSummarizeResponse,
    RagTurn,
)

logger = get_logger("rag_client")

CHAT_PATH = "/chat"
SUMMARIZE_PATH = "/summarize"
DEFAULT_TIMEOUT_SECONDS = 30

ResponseT = TypeVar("ResponseT", bound=BaseModel)


class RagTextGenerator(BaseTextGenerator):
    """Calls the RAG service over HTTP with a bounded timeout."""

    name = "rag"

    def __init__(
        self,
        base_url: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        http: Optional[requests.Session] = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._http = http or requests.Session()

    def reply(
        self,
        content: str,
        session_id: str,
        character: Optional[str] = None,
    ) -> str:
        body = RagChatRequest(message=content, session_id=session_id, character=character)
        result = self._post(CHAT_PATH, body, RagChatResponse)
        return result.response.strip()

    def summarize(
        self,
        session_id: str,
        messages: list[dict[str, str]],
        count: int,
    ) -> list[str]:
        body = RagSummarizeRequest(
            session_id=session_id,
            messages=[RagTurn(**m) for m in messages],
            count=count,
        )
        result = self._post(SUMMARIZE_PATH, body, RagSummarizeResponse)
        return [line.strip() for line in result.summaries if line and line.strip()]

    def _post(
        self, path: str, body: BaseModel, response_model: Type[ResponseT]
    ) -> ResponseT:
        url = f"{self._base_url}{path}"
        payload: dict[str, Any] = body.model_dump(by_alias=True, exclude_none=True)
        logger.info("Calling RAG service %s", url)

        try:
            resp = self._http.post(
                url,
                json=payload,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            raise UpstreamUnavailableError(f"RAG request to {url} failed: {e}") from e

        if resp.status_code != 200:
            raise UpstreamUnavailableError(
                f"HTTP {resp.status_code}: {resp.text[:500] if resp.text else 'no body'}"
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise UpstreamUnavailableError(f"Invalid JSON: {e}") from e

        try:
            return response_model.model_validate(data)
        except ValidationError as e:
            raise UpstreamUnavailableError(f"Invalid RAG response: {e}") from e
