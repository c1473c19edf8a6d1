"""
Unit tests for SessionRegistry.

Run: pytest tests/unit/test_session_registry.py -v
"""

import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from services.session_registry import SessionRegistry


class TestSessionRegistry:

    def test_start_session_creates_store(self):
        registry = SessionRegistry()

        store = registry.start_session("user_1")

        assert registry.get_store("user_1") is store
        assert "user_1" in registry
        assert len(registry) == 1

    def test_start_session_is_idempotent(self):
        registry = SessionRegistry()
        store = registry.start_session("user_1")
        store.add_question_set("job_perf", "U1", [{"question": "A"}])

        again = registry.start_session("user_1")

        assert again is store
        assert again.get_unanswered_count("U1") == 1

    def test_users_get_separate_stores(self):
        registry = SessionRegistry()
        first = registry.start_session("user_1")
        second = registry.start_session("user_2")

        first.add_question_set("job_perf", "U1", [{"question": "A"}])

        assert second.get_unanswered_count("U1") == 0
        assert registry.active_user_ids() == ["user_1", "user_2"]

    def test_end_session_resets_and_discards(self):
        registry = SessionRegistry()
        store = registry.start_session("user_1")
        set_id = store.add_question_set("job_perf", "U1", [{"question": "A"}])
        store.open_modal(set_id)

        assert registry.end_session("user_1") is True

        assert registry.get_store("user_1") is None
        assert "user_1" not in registry
        assert len(store) == 0
        assert store.is_modal_open is False

    def test_new_session_after_sign_out_starts_empty(self):
        registry = SessionRegistry()
        registry.start_session("user_1").add_question_set("job_perf", "U1", [{"question": "A"}])
        registry.end_session("user_1")

        store = registry.start_session("user_1")

        assert store.get_unanswered_count("U1") == 0

    def test_end_unknown_session(self):
        assert SessionRegistry().end_session("nobody") is False
