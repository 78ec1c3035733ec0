"""Conversations API: start, list, post message, chat, history page, end."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi_pagination import Page, Params, create_page

from app.config import get_settings
from app.constants.conversation import SessionStatus
from app.exceptions import InvalidArgumentError
from app.routers.utils.dependencies import get_session_manager
from app.schemas.envelope import ResponseEnvelope
from app.schemas.session import (
    ChatMessageCreate,
    ChatTurnResponse,
    ConversationRead,
    EndSessionRequest,
    EndSessionResponse,
    MessageCreate,
    MessageRead,
    PostMessageResponse,
    SessionRead,
    StartSessionRequest,
)
from app.services.session_manager import SessionManager

sessions_router = APIRouter(prefix="/conversations", tags=["Conversation"])


@sessions_router.post(
    "", response_model=ResponseEnvelope[SessionRead], status_code=201
)
def start_conversation(
    body: Optional[StartSessionRequest] = None,
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[SessionRead]:
    """Start a new conversation session in CREATED status."""
    body = body or StartSessionRequest()
    session = manager.start_session(user_id=body.user_id, metadata=body.metadata)
    return ResponseEnvelope.ok(SessionRead.model_validate(session))


@sessions_router.get("", response_model=ResponseEnvelope[Page[SessionRead]])
def list_conversations(
    params: Params = Depends(),
    user_id: str | None = Query(None),
    status: SessionStatus | None = Query(None),
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[Page[SessionRead]]:
    """List sessions, newest first, optionally filtered by user and status."""
    offset = (params.page - 1) * params.size
    sessions, total = manager.list_sessions(
        user_id=user_id, status=status, offset=offset, limit=params.size
    )
    rows = [SessionRead.model_validate(s) for s in sessions]
    return ResponseEnvelope.ok(create_page(rows, total=total, params=params))


@sessions_router.post(
    "/{session_id}/messages", response_model=ResponseEnvelope[PostMessageResponse]
)
def post_message(
    session_id: UUID,
    body: MessageCreate,
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[PostMessageResponse]:
    """Append a message; USER messages come back with a preview echo."""
    msg = manager.post_message(session_id, body.role, body.content, body.metadata)
    return ResponseEnvelope.ok(PostMessageResponse.model_validate(msg))


@sessions_router.post(
    "/{session_id}/chat", response_model=ResponseEnvelope[ChatTurnResponse]
)
def chat(
    session_id: UUID,
    body: ChatMessageCreate,
    character: str | None = Query(None, max_length=128),
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[ChatTurnResponse]:
    """Append a user message and a generated assistant reply."""
    user_msg, assistant_msg = manager.chat(
        session_id, body.content, character=character, metadata=body.metadata
    )
    return ResponseEnvelope.ok(
        ChatTurnResponse(
            user_message=MessageRead.model_validate(user_msg),
            assistant_message=MessageRead.model_validate(assistant_msg),
        )
    )


@sessions_router.get(
    "/{session_id}", response_model=ResponseEnvelope[ConversationRead]
)
def get_conversation(
    session_id: UUID,
    page: int = Query(0),
    size: int | None = Query(None),
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[ConversationRead]:
    """Return session state plus one zero-based page of its messages."""
    settings = get_settings()
    size = settings.default_page_size if size is None else size
    if size > settings.max_page_size:
        raise InvalidArgumentError(
            f"Page size must not exceed {settings.max_page_size}",
            details={"size": size},
        )
    session, messages, total = manager.get_conversation(session_id, page, size)
    return ResponseEnvelope.ok(
        ConversationRead(
            session_id=session.id,
            status=session.status,
            started_at=session.started_at,
            ended_at=session.ended_at,
            end_reason=session.end_reason,
            messages=[MessageRead.model_validate(m) for m in messages],
            total=total,
            page=page,
            size=size,
        )
    )


@sessions_router.put(
    "/{session_id}/end", response_model=ResponseEnvelope[EndSessionResponse]
)
def end_conversation(
    session_id: UUID,
    body: Optional[EndSessionRequest] = None,
    manager: SessionManager = Depends(get_session_manager),
) -> ResponseEnvelope[EndSessionResponse]:
    """End a session. Ending credits are generated in the same call when enabled."""
    reason = body.reason if body else None
    session = manager.end_session(session_id, reason)
    return ResponseEnvelope.ok(
        EndSessionResponse(
            session_id=session.id,
            status=session.status,
            ended_at=session.ended_at,
            end_reason=session.end_reason,
        )
    )
