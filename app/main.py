"""FastAPI application factory."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi_pagination import add_pagination

from app.config import get_settings
from app.db import init_db
from app.infra.error_handlers import register_exception_handlers
from app.infra.logging_config import LoggingConfig, get_logger
from app.routers.credits_router import credits_router
from app.routers.search_router import search_router
from app.routers.sessions_router import sessions_router
from app.routers.speech_router import speech_router
from app.routers.system import router as system_router
from app.services.generation_service import build_text_generator
from app.stores.memory import InMemoryConversationStore

logger = get_logger("main")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = get_settings()
    logger.info(
        "Starting %s (%s, store=%s, generation=%s)",
        settings.app_name,
        settings.environment,
        settings.store_backend,
        settings.generation_backend,
    )
    if not settings.is_production and not settings.uses_memory_store:
        # Alembic owns the schema in production
        init_db()
    yield
    logger.info("Shutting down %s", settings.app_name)


def create_app(testing: bool = False) -> FastAPI:
    settings = get_settings()
    LoggingConfig()

    app = FastAPI(
        title="Chat Orchestra API",
        description="Conversation sessions, message history, replies and ending credits",
        version="0.1.0",
        lifespan=None if testing else lifespan,
    )

    # Both are chosen once per process
    app.state.text_generator = build_text_generator(settings)
    app.state.memory_store = (
        InMemoryConversationStore() if settings.uses_memory_store else None
    )

    register_exception_handlers(app)

    app.include_router(sessions_router)
    app.include_router(credits_router)
    app.include_router(speech_router)
    app.include_router(search_router)
    app.include_router(system_router)

    add_pagination(app)
    return app


# Default app instance for uvicorn
app = create_app()
