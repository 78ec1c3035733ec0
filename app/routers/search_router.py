"""Mock search index endpoint."""

from fastapi import APIRouter

from app.schemas.envelope import ResponseEnvelope
from app.schemas.search import SearchRequest, SearchResponse
from app.services.search_index_service import SearchIndexService

search_router = APIRouter(prefix="/search-index", tags=["Search Index"])


@search_router.post("/query", response_model=ResponseEnvelope[SearchResponse])
def query_search_index(body: SearchRequest) -> ResponseEnvelope[SearchResponse]:
    """Return top_k deterministic mock results for the query."""
    return ResponseEnvelope.ok(
        SearchIndexService().query(
            body.query,
            top_k=body.top_k,
            filters=body.filters,
            session_id=body.session_id,
        )
    )
