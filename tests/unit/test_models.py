"""
Unit tests for clarifying question models.

Run: pytest tests/unit/test_models.py -v
"""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest
from pydantic import ValidationError

from models import (
    QuestionCategory,
    QUESTION_CATEGORY_LABELS,
    ClarifyingQuestionCreate,
    ClarifyingQuestion,
    QuestionSet,
)
from utils.id_generator import generate_id


class TestQuestionCategory:

    @pytest.mark.parametrize("raw, expected", [
        ("impact", QuestionCategory.IMPACT),
        ("Recognition", QuestionCategory.RECOGNITION),
        (QuestionCategory.SCOPE, QuestionCategory.SCOPE),
        ("unknown", QuestionCategory.GENERAL),
        (None, QuestionCategory.GENERAL),
        (42, QuestionCategory.GENERAL),
    ])
    def test_coerce(self, raw, expected):
        assert QuestionCategory.coerce(raw) == expected

    def test_every_category_has_label(self):
        assert set(QUESTION_CATEGORY_LABELS) == set(QuestionCategory)
        assert QUESTION_CATEGORY_LABELS[QuestionCategory.METRICS] == "Numbers & Metrics"


class TestClarifyingQuestion:

    def test_create_defaults(self):
        q = ClarifyingQuestionCreate(question="Why?")
        assert q.category == QuestionCategory.GENERAL
        assert q.id is None

    def test_create_rejects_bad_sentence_number(self):
        with pytest.raises(ValidationError):
            ClarifyingQuestionCreate(question="Why?", sentence_number=3)

    def test_is_answered_ignores_whitespace(self):
        q = ClarifyingQuestion(id="q_1", question="Why?")
        assert q.is_answered is False

        q.answer = "  "
        assert q.is_answered is False

        q.answer = "Because"
        assert q.is_answered is True

    def test_category_label(self):
        q = ClarifyingQuestion(id="q_1", question="Why?", category=QuestionCategory.LEADERSHIP)
        assert q.category_label == "Leadership & Team"


class TestQuestionSet:

    def test_find_question_and_answered(self):
        qs = QuestionSet(
            id="cq_1",
            mpa_key="job_perf",
            ratee_id="U1",
            created_at=datetime.now(timezone.utc),
            questions=[
                ClarifyingQuestion(id="q_1", question="A", answer="yes"),
                ClarifyingQuestion(id="q_2", question="B"),
            ],
        )

        assert qs.find_question("q_2").question == "B"
        assert qs.find_question("missing") is None
        assert [q.id for q in qs.answered_questions] == ["q_1"]

    def test_identity_is_frozen(self):
        qs = QuestionSet(id="cq_1", mpa_key="job_perf", ratee_id="U1", created_at=datetime.now(timezone.utc))
        with pytest.raises(ValidationError):
            qs.mpa_key = "leadership"


class TestIdGenerator:

    def test_prefix(self):
        assert generate_id("cq").startswith("cq_")
        assert "_" not in generate_id()

    def test_unique(self):
        assert len({generate_id("q") for _ in range(1000)}) == 1000
