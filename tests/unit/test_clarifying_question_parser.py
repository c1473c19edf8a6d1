"""
Unit tests for ClarifyingQuestionParser.

Run: pytest tests/unit/test_clarifying_question_parser.py -v
"""

import json
import sys
from pathlib import Path

# Add project root to Python path (for direct invocation)
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

import pytest

from models.clarifying_question import QuestionCategory
from utils.clarifying_question_parser import ClarifyingQuestionParser


@pytest.fixture
def parser():
    return ClarifyingQuestionParser(max_questions=3)


class TestParse:

    def test_parses_questions_from_dict(self, parser):
        result = parser.parse({
            "statements": ["Led 6 Airmen..."],
            "clarifyingQuestions": [
                {"question": "What was the dollar impact?", "category": "impact", "hint": "Annual savings"},
                {"question": "How many people?", "category": "leadership", "sentenceNumber": 2},
            ]
        })

        assert len(result) == 2
        assert result[0].question == "What was the dollar impact?"
        assert result[0].category == QuestionCategory.IMPACT
        assert result[0].hint == "Annual savings"
        assert result[0].id is None
        assert result[1].sentence_number == 2

    def test_parses_json_string(self, parser):
        payload = json.dumps({"clarifyingQuestions": [{"question": "Scope?", "category": "scope"}]})

        result = parser.parse(payload)

        assert [q.category for q in result] == [QuestionCategory.SCOPE]

    def test_invalid_json_returns_empty(self, parser):
        assert parser.parse("{not json") == []

    def test_none_and_non_object_payloads(self, parser):
        assert parser.parse(None) == []
        assert parser.parse("[1, 2]") == []

    def test_missing_questions_field(self, parser):
        assert parser.parse({"statements": ["x"]}) == []
        assert parser.parse({"clarifyingQuestions": None}) == []
        assert parser.parse({"clarifyingQuestions": "not a list"}) == []

    def test_unknown_or_missing_category_defaults_to_general(self, parser):
        result = parser.parse({"clarifyingQuestions": [
            {"question": "A", "category": "budget"},
            {"question": "B"},
            {"question": "C", "category": " METRICS "},
        ]})

        assert [q.category for q in result] == [
            QuestionCategory.GENERAL,
            QuestionCategory.GENERAL,
            QuestionCategory.METRICS,
        ]

    def test_skips_entries_without_question_text(self, parser):
        result = parser.parse({"clarifyingQuestions": [
            {"category": "impact"},
            {"question": "   "},
            "not an object",
            {"question": " Kept "},
        ]})

        assert [q.question for q in result] == ["Kept"]

    def test_blank_hint_and_bad_sentence_number_dropped(self, parser):
        result = parser.parse({"clarifyingQuestions": [
            {"question": "A", "hint": "  ", "sentenceNumber": 3},
            {"question": "B", "sentenceNumber": True},
        ]})

        assert result[0].hint is None
        assert result[0].sentence_number is None
        assert result[1].sentence_number is None

    def test_truncates_to_max_questions(self, parser):
        result = parser.parse({"clarifyingQuestions": [
            {"question": f"Q{i}"} for i in range(5)
        ]})

        assert [q.question for q in result] == ["Q0", "Q1", "Q2"]


class TestExtractStatements:

    def test_returns_string_statements(self, parser):
        assert parser.extract_statements({"statements": ["one", 2, "two"]}) == ["one", "two"]

    def test_missing_statements(self, parser):
        assert parser.extract_statements({}) == []
        assert parser.extract_statements("bad json") == []


class TestResponseSchema:

    def test_schema_lists_categories_and_limit(self, parser):
        schema = parser.get_response_schema()
        items = schema["properties"]["clarifyingQuestions"]

        assert items["maxItems"] == 3
        assert set(items["items"]["properties"]["category"]["enum"]) == {c.value for c in QuestionCategory}
        assert schema["required"] == ["statements"]

    def test_default_limit_comes_from_settings(self):
        from config.settings import settings
        assert ClarifyingQuestionParser().max_questions == settings.MAX_CLARIFYING_QUESTIONS
