"""Mock STT/TTS endpoints."""

from fastapi import APIRouter

from app.schemas.envelope import ResponseEnvelope
from app.schemas.speech import SttRequest, SttResponse, TtsRequest, TtsResponse
from app.services.speech_service import SttService, TtsService

speech_router = APIRouter(tags=["Speech"])


@speech_router.post("/stt", response_model=ResponseEnvelope[SttResponse])
def speech_to_text(body: SttRequest) -> ResponseEnvelope[SttResponse]:
    return ResponseEnvelope.ok(SttService().transcribe(body.audio_base64, body.language))


@speech_router.post("/tts", response_model=ResponseEnvelope[TtsResponse])
def text_to_speech(body: TtsRequest) -> ResponseEnvelope[TtsResponse]:
    return ResponseEnvelope.ok(
        TtsService().synthesize(body.text, voice=body.voice, language=body.language)
    )
