import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import AliasChoices, Field, model_validator
from typing import Optional
from pydantic_settings import BaseSettings
from sqlalchemy.engine.url import make_url, URL

DEFAULT_DATABASE_URL = "sqlite:///./chat_orchestra.db"
DEFAULT_TEST_DATABASE_URL = "sqlite://"

# Project root (parent of app/) - used so .env is found regardless of cwd
_PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Explicitly load .env into os.environ so it works in tests and subprocesses
load_dotenv(_PROJECT_ROOT / ".env")


class Settings(BaseSettings):
    app_name: str = "chat-orchestra-api"
    database_url: Optional[str] = None  # Will be set dynamically
    database_pool_size: int = Field(
        default=10, json_schema_extra={"env": "DATABASE_POOL_SIZE"}
    )
    database_max_overflow: int = Field(
        default=20, json_schema_extra={"env": "DATABASE_MAX_OVERFLOW"}
    )
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("ENV", "ENVIRONMENT"),
    )
    log_level: str = Field(default="INFO", json_schema_extra={"env": "LOG_LEVEL"})
    port: int = Field(default=8000, json_schema_extra={"env": "PORT"})

    # Persistence: "database" (SQLAlchemy) or "memory" (process-local)
    store_backend: str = Field(
        default="database", json_schema_extra={"env": "STORE_BACKEND"}
    )

    # Text generation: "local" (fallback only), "rag" (HTTP service) or "llm"
    generation_backend: str = Field(
        default="local", json_schema_extra={"env": "GENERATION_BACKEND"}
    )
    summaries_enabled: bool = Field(
        default=True, json_schema_extra={"env": "SUMMARIES_ENABLED"}
    )
    rag_api_url: str = Field(
        default="http://localhost:8001", json_schema_extra={"env": "RAG_API_URL"}
    )
    rag_timeout_seconds: float = Field(
        default=30.0, gt=0, json_schema_extra={"env": "RAG_TIMEOUT_SECONDS"}
    )

    # LLM / LiteLLM
    llm_model: str = Field(
        default="gpt-4o-mini", json_schema_extra={"env": "LLM_MODEL"}
    )
    litellm_api_key: Optional[str] = Field(
        default=None, json_schema_extra={"env": "LITELLM_API_KEY"}
    )
    litellm_api_base: Optional[str] = Field(
        default=None, json_schema_extra={"env": "LITELLM_API_BASE"}
    )

    # Ending credits
    credits_summary_line_count: int = Field(
        default=10, ge=1, json_schema_extra={"env": "CREDITS_SUMMARY_LINE_COUNT"}
    )
    auto_generate_credits_on_end: bool = Field(
        default=True, json_schema_extra={"env": "AUTO_GENERATE_CREDITS_ON_END"}
    )

    # Conversation history paging
    default_page_size: int = Field(
        default=20, ge=1, json_schema_extra={"env": "DEFAULT_PAGE_SIZE"}
    )
    max_page_size: int = Field(
        default=100, ge=1, json_schema_extra={"env": "MAX_PAGE_SIZE"}
    )

    # Speech mocks
    stt_default_language: str = Field(
        default="ko-KR", json_schema_extra={"env": "STT_DEFAULT_LANGUAGE"}
    )
    tts_default_language: str = Field(
        default="ko-KR", json_schema_extra={"env": "TTS_DEFAULT_LANGUAGE"}
    )

    @model_validator(mode="before")
    def set_database_url(cls, values):
        """Set the database_url dynamically based on the environment field."""
        environment = values.get("environment", os.getenv("ENV", "development"))
        if environment.lower() == "test":
            values["database_url"] = os.getenv(
                "TEST_DATABASE_URL", DEFAULT_TEST_DATABASE_URL
            )
        else:
            values["database_url"] = os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL)

        return values

    @property
    def is_production(self) -> bool:
        """Check if the current environment is production."""
        return self.environment.lower() == "production"

    @property
    def is_test(self) -> bool:
        """Check if the current environment is test."""
        return self.environment.lower() == "test"

    @property
    def uses_memory_store(self) -> bool:
        return self.store_backend.lower() == "memory"

    @property
    def database_url_obj(self) -> URL:
        """Return the database URL as a URL object using sqlalchemy's make_url."""
        if not self.database_url:
            raise ValueError("Database URL is not set.")
        return make_url(self.database_url)

    class ConfigDict:
        env_file = str(_PROJECT_ROOT / ".env")
        env_file_encoding = "utf-8"
        extra = "allow"  # Allow extra environment variables


def get_settings() -> Settings:
    """Get application settings with required environment variables."""
    return Settings()
