"""Tests for LLMTextGenerator (pydantic-ai agent)."""

from unittest.mock import MagicMock, patch

import pytest
from pydantic_ai.messages import ModelRequest, ModelResponse, SystemPromptPart

from app.exceptions import UpstreamUnavailableError
from app.workers.llm import (
    LLMTextGenerator,
    _message_list_with_system_prompt,
    _split_lines,
)


@pytest.fixture
def agent():
    with patch("app.workers.llm.Agent") as agent_cls, patch(
        "app.workers.llm.OpenAIChatModel"
    ), patch("app.workers.llm.LiteLLMProvider"):
        yield agent_cls.return_value


@pytest.fixture
def generator(agent):
    return LLMTextGenerator(model_name="test-model", api_key="k", timeout=3)


def test_message_list_starts_with_system_prompt():
    out = _message_list_with_system_prompt(
        "be brief",
        [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": "hello"},
            {"role": "user", "content": "  "},
        ],
    )
    assert isinstance(out[0], ModelRequest)
    assert isinstance(out[0].parts[0], SystemPromptPart)
    assert isinstance(out[2], ModelResponse)
    assert len(out) == 3


def test_split_lines_strips_bullets():
    assert _split_lines("- one\n\n* two\n three ") == ["one", "two", "three"]


def test_reply(generator, agent):
    agent.run_sync.return_value = MagicMock(output=" Hi there ")
    assert generator.reply("hello", "sess-1", character="Bard") == "Hi there"
    kwargs = agent.run_sync.call_args.kwargs
    system = kwargs["message_history"][0].parts[0].content
    assert "Bard" in system
    assert kwargs["model_settings"] == {"timeout": 3}


def test_reply_empty_output_raises(generator, agent):
    agent.run_sync.return_value = MagicMock(output="  ")
    with pytest.raises(UpstreamUnavailableError):
        generator.reply("hello", "sess-1")


def test_provider_error_is_upstream_unavailable(generator, agent):
    agent.run_sync.side_effect = RuntimeError("401 unauthorized")
    with pytest.raises(UpstreamUnavailableError):
        generator.summarize("sess-1", [{"role": "user", "content": "hi"}], 10)


def test_summarize_returns_lines(generator, agent):
    agent.run_sync.return_value = MagicMock(output="First line\nSecond line\n")
    lines = generator.summarize("sess-1", [{"role": "user", "content": "hi"}], 2)
    assert lines == ["First line", "Second line"]
    assert "2 lines" in agent.run_sync.call_args.args[0]
