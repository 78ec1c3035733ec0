"""Tests for the STT, TTS and search index endpoints."""

import base64


def test_stt(client):
    audio = base64.b64encode(b"\x00" * 400).decode()
    r = client.post("/stt", json={"audio_base64": audio})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["transcript"] == "Transcribed 400 bytes in ko-KR"
    assert data["duration_ms"] == 400


def test_stt_invalid_audio(client):
    r = client.post("/stt", json={"audio_base64": "%%%"})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"


def test_tts(client):
    r = client.post("/tts", json={"text": "hi", "voice": "MALE", "language": "en-US"})
    assert r.status_code == 200
    data = r.json()["data"]
    assert base64.b64decode(data["audio_base64"]) == b"AUDIO:hi"
    assert data["voice"] == "MALE"
    assert data["language"] == "en-US"


def test_tts_unknown_voice(client):
    r = client.post("/tts", json={"text": "hi", "voice": "ROBOT"})
    assert r.status_code == 400


def test_search(client):
    r = client.post("/search-index/query", json={"query": "credits", "top_k": 2})
    assert r.status_code == 200
    data = r.json()["data"]
    assert data["query"] == "credits"
    assert [res["id"] for res in data["results"]] == ["doc-1", "doc-2"]


def test_search_top_k_out_of_range(client):
    r = client.post("/search-index/query", json={"query": "credits", "top_k": 99})
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "INVALID_ARGUMENT"
