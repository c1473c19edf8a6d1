"""
Per-user session registry.

Each signed-in user gets their own ClarifyingQuestionsStore. The store is
created on sign-in and reset and discarded on sign-out, so no question set
outlives the session that produced it.
"""

import logging
from typing import Dict, List, Optional

from services.clarifying_questions_store import ClarifyingQuestionsStore

logger = logging.getLogger(__name__)


class SessionRegistry:
    """Maps user id -> ClarifyingQuestionsStore for active sessions"""

    def __init__(self):
        self._stores: Dict[str, ClarifyingQuestionsStore] = {}

    def start_session(self, user_id: str) -> ClarifyingQuestionsStore:
        """
        Get the store for a user, creating it on first sign-in.

        Returns:
            The user's session store
        """
        store = self._stores.get(user_id)
        if store is None:
            store = ClarifyingQuestionsStore()
            self._stores[user_id] = store
            logger.info(f"Started clarifying questions session for user {user_id}")
        return store

    def get_store(self, user_id: str) -> Optional[ClarifyingQuestionsStore]:
        return self._stores.get(user_id)

    def end_session(self, user_id: str) -> bool:
        """
        Reset and discard a user's store (sign-out).

        Returns:
            True if a session existed
        """
        store = self._stores.pop(user_id, None)
        if store is None:
            return False

        store.reset()
        logger.info(f"Ended clarifying questions session for user {user_id}")
        return True

    def active_user_ids(self) -> List[str]:
        return list(self._stores.keys())

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, user_id: object) -> bool:
        return user_id in self._stores
