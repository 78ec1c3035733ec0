"""Grouped, non-sensitive view of the running configuration."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel


class AppGroup(BaseModel):
    name: str
    environment: str
    log_level: str
    port: int


class DatabaseGroup(BaseModel):
    store_backend: str
    database_host: Optional[str] = None
    database_driver: Optional[str] = None
    pool_size: int
    max_overflow: int


class GeneralGroup(BaseModel):
    is_production: bool


class GenerationGroup(BaseModel):
    backend: str
    summaries_enabled: bool
    rag_api_url: str
    timeout_seconds: float
    llm_model: str


class ConversationGroup(BaseModel):
    default_page_size: int
    max_page_size: int
    credits_summary_line_count: int
    auto_generate_credits_on_end: bool


class SystemSettingsGrouped(BaseModel):
    app: AppGroup
    database: DatabaseGroup
    general: GeneralGroup
    generation: GenerationGroup
    conversation: ConversationGroup
