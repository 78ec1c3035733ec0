"""Mock speech-to-text and text-to-speech. Deterministic, no audio processing."""

from __future__ import annotations

import base64
import binascii
from typing import Optional

from app.config import get_settings
from app.constants.conversation import VoiceType
from app.exceptions import InvalidArgumentError
from app.infra.logging_config import get_logger
from app.schemas.speech import SttResponse, TtsResponse

logger = get_logger("speech")

STT_MIN_DURATION_MS = 200
STT_MAX_DURATION_MS = 3000
TTS_MIN_DURATION_MS = 800
TTS_MS_PER_CHAR = 100


class SttService:
    def __init__(self, default_language: Optional[str] = None) -> None:
        self.default_language = default_language or get_settings().stt_default_language

    def transcribe(self, audio_base64: str, language: Optional[str] = None) -> SttResponse:
        try:
            audio = base64.b64decode(audio_base64, validate=True)
        except (binascii.Error, ValueError):
            raise InvalidArgumentError(
                "audio_base64 is not valid base64",
                details={"audio_base64": "invalid base64"},
            ) from None
        language = language or self.default_language
        duration_ms = min(STT_MAX_DURATION_MS, STT_MIN_DURATION_MS + len(audio) // 2)
        logger.debug("Mock STT: %d bytes, language %s", len(audio), language)
        return SttResponse(
            transcript=f"Transcribed {len(audio)} bytes in {language}",
            duration_ms=duration_ms,
            language=language,
        )


class TtsService:
    def __init__(self, default_language: Optional[str] = None) -> None:
        self.default_language = default_language or get_settings().tts_default_language

    def synthesize(
        self,
        text: str,
        voice: VoiceType = VoiceType.NEUTRAL,
        language: Optional[str] = None,
    ) -> TtsResponse:
        if not text or not text.strip():
            raise InvalidArgumentError(
                "Text must not be empty", details={"text": "must not be blank"}
            )
        audio = base64.b64encode(f"AUDIO:{text}".encode("utf-8")).decode("ascii")
        return TtsResponse(
            audio_base64=audio,
            voice=voice,
            language=language or self.default_language,
            estimated_duration_ms=max(TTS_MIN_DURATION_MS, len(text) * TTS_MS_PER_CHAR),
        )
