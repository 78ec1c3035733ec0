from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.config import get_settings
from app.db import get_db
from app.services.generation_service import GenerationService
from app.services.session_manager import SessionManager
from app.stores.base import ConversationStore
from app.stores.sql import SqlConversationStore


def get_store(
    request: Request,
    db: Session = Depends(get_db),
) -> ConversationStore:
    """FastAPI dependency returning the configured conversation store."""
    memory_store = getattr(request.app.state, "memory_store", None)
    if memory_store is not None:
        return memory_store
    return SqlConversationStore(db)


def get_generation_service(request: Request) -> GenerationService:
    """FastAPI dependency wrapping the generator chosen at startup."""
    return GenerationService(
        request.app.state.text_generator,
        summaries_enabled=get_settings().summaries_enabled,
    )


def get_session_manager(
    store: ConversationStore = Depends(get_store),
    generation: GenerationService = Depends(get_generation_service),
) -> SessionManager:
    """FastAPI dependency for the conversation facade."""
    return SessionManager(store, generation)
