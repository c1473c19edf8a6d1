"""
Parser that turns an LLM generation result into clarifying question inputs.

The generation prompt asks the LLM to return:
{
    "statements": [...],
    "clarifyingQuestions": [
        {"question": str, "category": str, "hint": str, "sentenceNumber": 1|2}
    ]
}

LLM output is untrusted: malformed entries are dropped rather than raised,
so a bad response never reaches the session store.
"""
import json
import logging
from typing import Dict, Any, List, Optional, Union

from pydantic import ValidationError

from config.settings import settings
from models.clarifying_question import ClarifyingQuestionCreate, QuestionCategory

logger = logging.getLogger(__name__)

Payload = Union[Dict[str, Any], str, None]


class ClarifyingQuestionParser:
    """Parse clarifying questions out of a generation result for one MPA"""

    def __init__(self, max_questions: Optional[int] = None):
        self.max_questions = max_questions if max_questions is not None else settings.MAX_CLARIFYING_QUESTIONS

    def parse(self, payload: Payload) -> List[ClarifyingQuestionCreate]:
        """
        Extract clarifying questions from a generation result.

        Args:
            payload: Decoded result dict, or the raw JSON string from the LLM

        Returns:
            List of questions ready for the store (may be empty)
        """
        data = self._decode(payload)
        if data is None:
            return []

        raw_questions = data.get("clarifyingQuestions") or []
        if not isinstance(raw_questions, list):
            logger.warning(f"Ignoring clarifyingQuestions of type {type(raw_questions).__name__}")
            return []

        questions: List[ClarifyingQuestionCreate] = []
        for index, item in enumerate(raw_questions):
            question = self._parse_item(item, index)
            if question is not None:
                questions.append(question)

        if len(questions) > self.max_questions:
            logger.info(f"Truncating {len(questions)} clarifying questions to {self.max_questions}")
            questions = questions[:self.max_questions]

        return questions

    def extract_statements(self, payload: Payload) -> List[str]:
        """Generated statements from the same result ([] if absent)"""
        data = self._decode(payload)
        if data is None:
            return []

        statements = data.get("statements") or []
        if not isinstance(statements, list):
            return []
        return [s for s in statements if isinstance(s, str)]

    def get_response_schema(self) -> Dict[str, Any]:
        """JSON schema for the generation result"""
        return {
            "type": "object",
            "properties": {
                "statements": {
                    "type": "array",
                    "items": {"type": "string"},
                    "description": "Generated narrative statements"
                },
                "clarifyingQuestions": {
                    "type": "array",
                    "maxItems": self.max_questions,
                    "items": {
                        "type": "object",
                        "properties": {
                            "question": {
                                "type": "string",
                                "description": "The question text"
                            },
                            "category": {
                                "type": "string",
                                "enum": [c.value for c in QuestionCategory],
                                "description": "Category of the question"
                            },
                            "hint": {
                                "type": "string",
                                "description": "Brief hint on what kind of answer would help"
                            },
                            "sentenceNumber": {
                                "type": "integer",
                                "enum": [1, 2],
                                "description": "Which statement sentence the question is about"
                            }
                        },
                        "required": ["question", "category"]
                    }
                }
            },
            "required": ["statements"]
        }

    # ------------------------------------------------------------------

    def _decode(self, payload: Payload) -> Optional[Dict[str, Any]]:
        if payload is None:
            return None

        if isinstance(payload, str):
            try:
                payload = json.loads(payload)
            except json.JSONDecodeError as e:
                logger.warning(f"Could not decode generation result as JSON: {e}")
                return None

        if not isinstance(payload, dict):
            logger.warning(f"Ignoring generation result of type {type(payload).__name__}")
            return None

        return payload

    def _parse_item(self, item: Any, index: int) -> Optional[ClarifyingQuestionCreate]:
        if not isinstance(item, dict):
            logger.warning(f"Skipping clarifying question {index}: not an object")
            return None

        text = item.get("question")
        if not isinstance(text, str) or not text.strip():
            logger.warning(f"Skipping clarifying question {index}: missing question text")
            return None

        hint = item.get("hint")
        if not isinstance(hint, str) or not hint.strip():
            hint = None

        sentence_number = item.get("sentenceNumber")
        if sentence_number not in (1, 2) or isinstance(sentence_number, bool):
            sentence_number = None

        try:
            return ClarifyingQuestionCreate(
                question=text.strip(),
                category=QuestionCategory.coerce(item.get("category")),
                hint=hint.strip() if hint else None,
                sentence_number=sentence_number,
            )
        except ValidationError as e:
            logger.warning(f"Skipping clarifying question {index}: {e}")
            return None
