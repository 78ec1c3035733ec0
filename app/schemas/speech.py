"""Pydantic schemas for the speech-to-text and text-to-speech mocks."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from app.constants.conversation import VoiceType


class SttRequest(BaseModel):
    audio_base64: str = Field(..., min_length=1)
    language: Optional[str] = None


class SttResponse(BaseModel):
    transcript: str
    duration_ms: int
    language: str


class TtsRequest(BaseModel):
    text: str = Field(..., min_length=1)
    voice: VoiceType = VoiceType.NEUTRAL
    language: Optional[str] = None


class TtsResponse(BaseModel):
    audio_base64: str
    voice: VoiceType
    language: str
    estimated_duration_ms: int
