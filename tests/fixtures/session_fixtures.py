"""Fixtures for sessions and messages."""

import pytest

from app.constants.conversation import MessageRole
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService


@pytest.fixture(scope="function")
def session_service(store):
    return SessionService(store)


@pytest.fixture(scope="function")
def message_service(store, session_service):
    return SessionMessageService(store, session_service)


@pytest.fixture(scope="function")
def setup_session(session_service, faker):
    """A freshly started (CREATED) session."""
    return session_service.start(
        user_id=faker.user_name(), metadata={"source": "test"}
    )


@pytest.fixture(scope="function")
def setup_active_session(setup_session, message_service, faker):
    """An ACTIVE session holding one USER and one ASSISTANT message."""
    message_service.append(setup_session.id, MessageRole.USER, faker.sentence())
    message_service.append(setup_session.id, MessageRole.ASSISTANT, faker.sentence())
    return setup_session
