"""
Services module - clarifying questions workflow.

Contains the session store and the application services built on it.

Usage:
    from services import SessionRegistry, ClarifyingQuestionsService

    registry = SessionRegistry()
    store = registry.start_session(user_id)   # on sign-in
    service = ClarifyingQuestionsService(store)
    ...
    registry.end_session(user_id)             # on sign-out
"""

from services.clarifying_questions_store import ClarifyingQuestionsStore
from services.clarifying_questions_service import (
    ClarifyingQuestionsService,
    QuestionIndicator,
    RegenerationRequest,
)
from services.session_registry import SessionRegistry

__all__ = [
    "ClarifyingQuestionsStore",
    "ClarifyingQuestionsService",
    "QuestionIndicator",
    "RegenerationRequest",
    "SessionRegistry",
]
