"""Mock semantic search index returning deterministic ranked snippets."""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

from app.exceptions import InvalidArgumentError
from app.infra.logging_config import get_logger
from app.schemas.search import SearchResponse, SearchResult

logger = get_logger("search_index")

TOP_SCORE = 0.9
SCORE_STEP = 0.05
MAX_TOP_K = 50


class SearchIndexService:
    def query(
        self,
        query: str,
        top_k: int = 5,
        filters: Optional[dict[str, Any]] = None,
        session_id: Optional[UUID] = None,
    ) -> SearchResponse:
        if not query or not query.strip():
            raise InvalidArgumentError(
                "Query must not be empty", details={"query": "must not be blank"}
            )
        if top_k < 1 or top_k > MAX_TOP_K:
            raise InvalidArgumentError(
                f"top_k must be between 1 and {MAX_TOP_K}", details={"top_k": top_k}
            )

        logger.debug(
            "Mock search %r (top_k=%d, session=%s, filters=%s)",
            query,
            top_k,
            session_id,
            filters,
        )
        results = [
            SearchResult(
                id=f"doc-{i}",
                score=round(TOP_SCORE - SCORE_STEP * (i - 1), 4),
                snippet=f"Mock snippet about '{query}' - result {i}",
            )
            for i in range(1, top_k + 1)
        ]
        return SearchResponse(query=query, results=results)
