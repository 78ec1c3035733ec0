from app.services.ending_credits_service import EndingCreditsService
from app.services.generation_service import GenerationService
from app.services.session_manager import SessionManager
from app.services.session_message_service import SessionMessageService
from app.services.session_service import SessionService

__all__ = [
    "EndingCreditsService",
    "GenerationService",
    "SessionManager",
    "SessionMessageService",
    "SessionService",
]
