"""Closed vocabularies for sessions, messages and the speech mocks."""

from enum import StrEnum


class SessionStatus(StrEnum):
    """Session lifecycle. CREATED and ACTIVE accept appends; ENDED is terminal."""

    CREATED = "CREATED"
    ACTIVE = "ACTIVE"
    ENDED = "ENDED"

    @property
    def is_open(self) -> bool:
        return self is not SessionStatus.ENDED


OPEN_STATUSES = (SessionStatus.CREATED, SessionStatus.ACTIVE)


class MessageRole(StrEnum):
    """Author of a message."""

    USER = "USER"
    ASSISTANT = "ASSISTANT"
    SYSTEM = "SYSTEM"


class VoiceType(StrEnum):
    """Voices offered by the text-to-speech mock."""

    NEUTRAL = "NEUTRAL"
    MALE = "MALE"
    FEMALE = "FEMALE"
