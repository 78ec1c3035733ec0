"""Tests for GenerationService and the generator factory."""

import pytest

from app.adapters.local_generator import (
    LocalTextGenerator,
    fallback_reply,
    fallback_summary,
    new_conversation_summary,
)
from app.adapters.rag_client import RagTextGenerator
from app.config import get_settings
from app.constants.conversation import MessageRole
from app.services.generation_service import GenerationService, build_text_generator
from tests.fixtures.generation_fixtures import StubTextGenerator


def test_reply_uses_generator(generation_service, stub_generator, setup_session):
    text = generation_service.reply("hello", setup_session.id, character="Alice")
    assert text == "stub reply"
    assert stub_generator.reply_calls == [("hello", str(setup_session.id), "Alice")]


def test_reply_falls_back_when_generator_fails(failing_generator, setup_session):
    svc = GenerationService(failing_generator)
    text = svc.reply("What is RAG?", setup_session.id)
    assert text == (
        "AI response to your question 'What is RAG?'. "
        "The external RAG server's /chat API would normally generate this reply."
    )


def test_reply_fallback_with_character(failing_generator, setup_session):
    svc = GenerationService(failing_generator)
    text = svc.reply("hi", setup_session.id, character="Pirate")
    assert text.startswith("[Responding as Pirate] ")
    assert text == fallback_reply("hi", "Pirate")


def test_reply_falls_back_on_empty_text(setup_session):
    svc = GenerationService(StubTextGenerator(reply_text="   "))
    assert svc.reply("hi", setup_session.id) == fallback_reply("hi")


def test_reply_failure_is_logged(failing_generator, setup_session, caplog):
    svc = GenerationService(failing_generator)
    with caplog.at_level("WARNING"):
        svc.reply("hi", setup_session.id)
    assert "using fallback reply" in caplog.text


def test_summarize_empty_conversation(generation_service, stub_generator, setup_session):
    lines = generation_service.summarize(setup_session, [], 10)
    assert lines == new_conversation_summary()
    assert lines[0] == "A new conversation has begun"
    assert stub_generator.summarize_calls == []


def test_summarize_uses_generator(
    generation_service, stub_generator, message_service, setup_active_session
):
    history = message_service.history(setup_active_session.id)
    lines = generation_service.summarize(setup_active_session, history, 7)
    assert lines == ["line one", "line two"]
    session_id, turns, count = stub_generator.summarize_calls[0]
    assert session_id == str(setup_active_session.id)
    assert count == 7
    assert [t["role"] for t in turns] == ["user", "assistant"]


def test_summarize_falls_back_when_generator_fails(
    failing_generator, message_service, setup_active_session
):
    svc = GenerationService(failing_generator)
    history = message_service.history(setup_active_session.id)
    lines = svc.summarize(setup_active_session, history, 10)
    assert lines == fallback_summary(2)
    assert len(lines) == 10
    assert lines[0] == "Our conversation carried on across 2 messages"


def test_summarize_falls_back_on_empty_output(message_service, setup_active_session):
    svc = GenerationService(StubTextGenerator(summary_lines=["", "  "]))
    history = message_service.history(setup_active_session.id)
    assert svc.summarize(setup_active_session, history, 10) == fallback_summary(2)


def test_summarize_disabled_uses_fallback(
    stub_generator, message_service, setup_active_session
):
    svc = GenerationService(stub_generator, summaries_enabled=False)
    history = message_service.history(setup_active_session.id)
    assert svc.summarize(setup_active_session, history, 10) == fallback_summary(2)
    assert stub_generator.summarize_calls == []


def test_local_generator_never_fails(setup_session):
    svc = GenerationService(LocalTextGenerator())
    assert svc.reply("ping", setup_session.id) == fallback_reply("ping")


@pytest.mark.parametrize(
    "backend,expected",
    [("local", LocalTextGenerator), ("rag", RagTextGenerator), ("bogus", LocalTextGenerator)],
)
def test_build_text_generator(monkeypatch, backend, expected):
    monkeypatch.setenv("GENERATION_BACKEND", backend)
    generator = build_text_generator(get_settings())
    assert isinstance(generator, expected)
