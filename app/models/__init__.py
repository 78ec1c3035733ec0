from app.models.ending_credits import EndingCredits
from app.models.session import Session
from app.models.session_message import SessionMessage

__all__ = [
    "EndingCredits",
    "Session",
    "SessionMessage",
]
