from fastapi import APIRouter
from sqlalchemy.exc import ArgumentError

from app.config import get_settings
from app.schemas.envelope import ResponseEnvelope
from app.schemas.system import (
    AppGroup,
    ConversationGroup,
    DatabaseGroup,
    GeneralGroup,
    GenerationGroup,
    SystemSettingsGrouped,
)

router = APIRouter(
    prefix="/system",
    tags=["system"],
    responses={404: {"description": "Not found"}},
)


@router.get("/settings", response_model=ResponseEnvelope[SystemSettingsGrouped])
def get_system_settings() -> ResponseEnvelope[SystemSettingsGrouped]:
    """Return grouped, non-sensitive system configuration settings for troubleshooting."""
    s = get_settings()

    app_group = AppGroup(
        name=s.app_name,
        environment=s.environment,
        log_level=s.log_level,
        port=s.port,
    )

    # Extract safe database info only (no credentials)
    database_host = None
    database_driver = None
    try:
        url_obj = s.database_url_obj
        database_host = url_obj.host
        database_driver = url_obj.get_backend_name()
    except (ArgumentError, ValueError):
        database_driver = None

    database_group = DatabaseGroup(
        store_backend=s.store_backend,
        database_host=database_host,
        database_driver=database_driver,
        pool_size=s.database_pool_size,
        max_overflow=s.database_max_overflow,
    )

    general_group = GeneralGroup(
        is_production=s.is_production,
    )

    generation_group = GenerationGroup(
        backend=s.generation_backend,
        summaries_enabled=s.summaries_enabled,
        rag_api_url=s.rag_api_url,
        timeout_seconds=s.rag_timeout_seconds,
        llm_model=s.llm_model,
    )

    conversation_group = ConversationGroup(
        default_page_size=s.default_page_size,
        max_page_size=s.max_page_size,
        credits_summary_line_count=s.credits_summary_line_count,
        auto_generate_credits_on_end=s.auto_generate_credits_on_end,
    )

    grouped = SystemSettingsGrouped(
        app=app_group,
        database=database_group,
        general=general_group,
        generation=generation_group,
        conversation=conversation_group,
    )

    return ResponseEnvelope.ok(grouped)
