"""Tests for the speech and search index mocks."""

import base64

import pytest

from app.constants.conversation import VoiceType
from app.exceptions import InvalidArgumentError
from app.services.search_index_service import SearchIndexService
from app.services.speech_service import SttService, TtsService


def test_stt_transcribes_byte_count():
    audio = base64.b64encode(b"x" * 1000).decode()
    result = SttService().transcribe(audio)
    assert result.transcript == "Transcribed 1000 bytes in ko-KR"
    assert result.duration_ms == 700
    assert result.language == "ko-KR"


def test_stt_duration_is_capped():
    audio = base64.b64encode(b"x" * 100_000).decode()
    result = SttService().transcribe(audio, language="en-US")
    assert result.duration_ms == 3000
    assert result.language == "en-US"


def test_stt_rejects_invalid_base64():
    with pytest.raises(InvalidArgumentError):
        SttService().transcribe("not base64!!")


def test_tts_encodes_text():
    result = TtsService().synthesize("hello", voice=VoiceType.FEMALE)
    assert base64.b64decode(result.audio_base64) == b"AUDIO:hello"
    assert result.voice == VoiceType.FEMALE
    assert result.language == "ko-KR"
    assert result.estimated_duration_ms == 800


def test_tts_duration_grows_with_text():
    result = TtsService().synthesize("x" * 20)
    assert result.estimated_duration_ms == 2000


def test_search_returns_ranked_results():
    response = SearchIndexService().query("python", top_k=3)
    assert response.query == "python"
    assert [r.id for r in response.results] == ["doc-1", "doc-2", "doc-3"]
    assert [r.score for r in response.results] == [0.9, 0.85, 0.8]
    assert response.results[1].snippet == "Mock snippet about 'python' - result 2"


@pytest.mark.parametrize("top_k", [0, 51])
def test_search_rejects_top_k_out_of_range(top_k):
    with pytest.raises(InvalidArgumentError):
        SearchIndexService().query("python", top_k=top_k)
