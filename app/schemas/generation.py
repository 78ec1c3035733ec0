"""
Wire schemas for the external RAG text service.

The service speaks camelCase JSON; these models accept and emit it while
exposing snake_case attributes.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field


class RagChatRequest(BaseModel):
    message: str
    session_id: str = Field(..., alias="sessionId")
    character: Optional[str] = None

    model_config = {"populate_by_name": True}


class RagChatResponse(BaseModel):
    response: str = Field(..., min_length=1)


class RagTurn(BaseModel):
    role: str
    content: str


class RagSummarizeRequest(BaseModel):
    session_id: str = Field(..., alias="sessionId")
    messages: list[RagTurn]
    count: int

    model_config = {"populate_by_name": True}


class RagSummarizeResponse(BaseModel):
    summaries: list[str] = Field(default_factory=list)
