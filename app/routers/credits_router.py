"""Ending credits API."""

from __future__ import annotations

from uuid import UUID

from fastapi import APIRouter, Depends, Query

from app.routers.utils.dependencies import get_session_manager
from app.schemas.credits import (
    Credit,
    CreditsStats,
    EndingCreditsRequest,
    EndingCreditsResponse,
)
from app.schemas.envelope import ResponseEnvelope
from app.services.ending_credits_service import CreditsResult
from app.services.session_manager import SessionManager

credits_router = APIRouter(prefix="/ending-credits", tags=["Ending Credits"])


def _to_response(result: CreditsResult) -> EndingCreditsResponse:
    return EndingCreditsResponse(
        session_id=result.session_id,
        stats=CreditsStats(
            message_count=result.message_count, duration_sec=result.duration_sec
        ),
        lines=result.lines,
        credits=[Credit(**c) for c in result.credits],
        generated_at=result.generated_at,
    )


@credits_router.post("", response_model=ResponseEnvelope[EndingCreditsResponse])
def generate_ending_credits(
    body: EndingCreditsRequest,
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[EndingCreditsResponse]:
    """Generate (or return the stored) ending credits for a session."""
    result = manager.generate_credits(body.session_id, body.include_duration)
    return ResponseEnvelope.ok(_to_response(result))


@credits_router.get(
    "/{session_id}", response_model=ResponseEnvelope[EndingCreditsResponse]
)
def get_ending_credits(
    session_id: UUID,
    include_duration: bool = Query(True),
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[EndingCreditsResponse]:
    """Same as POST; convenient for fetching after an automatic generation."""
    result = manager.generate_credits(session_id, include_duration)
    return ResponseEnvelope.ok(_to_response(result))
