"""Tests for RagTextGenerator (HTTP client for the RAG service)."""

from unittest.mock import MagicMock

import pytest
import requests

from app.adapters.rag_client import RagTextGenerator
from app.exceptions import UpstreamUnavailableError


def _response(status_code=200, json_data=None, text=""):
    resp = MagicMock()
    resp.status_code = status_code
    resp.text = text
    if isinstance(json_data, Exception):
        resp.json.side_effect = json_data
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture
def http():
    return MagicMock(spec=requests.Session)


@pytest.fixture
def rag(http):
    return RagTextGenerator("http://rag.local/", timeout=5, http=http)


def test_reply_posts_camel_case_body(rag, http):
    http.post.return_value = _response(json_data={"response": " Hello! "})
    assert rag.reply("hi", "sess-1", character="Bard") == "Hello!"
    args, kwargs = http.post.call_args
    assert args[0] == "http://rag.local/chat"
    assert kwargs["json"] == {"message": "hi", "sessionId": "sess-1", "character": "Bard"}
    assert kwargs["timeout"] == 5


def test_reply_omits_missing_character(rag, http):
    http.post.return_value = _response(json_data={"response": "ok"})
    rag.reply("hi", "sess-1")
    assert "character" not in http.post.call_args.kwargs["json"]


def test_summarize(rag, http):
    http.post.return_value = _response(
        json_data={"summaries": ["first", " ", "second "]}
    )
    lines = rag.summarize(
        "sess-1",
        [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "yo"}],
        10,
    )
    assert lines == ["first", "second"]
    body = http.post.call_args.kwargs["json"]
    assert http.post.call_args.args[0] == "http://rag.local/summarize"
    assert body["sessionId"] == "sess-1"
    assert body["count"] == 10
    assert body["messages"][1] == {"role": "assistant", "content": "yo"}


def test_timeout_is_upstream_unavailable(rag, http):
    http.post.side_effect = requests.Timeout("slow")
    with pytest.raises(UpstreamUnavailableError):
        rag.reply("hi", "sess-1")


def test_connection_error_is_upstream_unavailable(rag, http):
    http.post.side_effect = requests.ConnectionError("refused")
    with pytest.raises(UpstreamUnavailableError):
        rag.summarize("sess-1", [], 10)


def test_non_200_is_upstream_unavailable(rag, http):
    http.post.return_value = _response(status_code=503, text="busy")
    with pytest.raises(UpstreamUnavailableError, match="503"):
        rag.reply("hi", "sess-1")


def test_invalid_json_is_upstream_unavailable(rag, http):
    http.post.return_value = _response(json_data=ValueError("not json"))
    with pytest.raises(UpstreamUnavailableError):
        rag.reply("hi", "sess-1")


def test_empty_reply_is_upstream_unavailable(rag, http):
    http.post.return_value = _response(json_data={"response": ""})
    with pytest.raises(UpstreamUnavailableError):
        rag.reply("hi", "sess-1")
