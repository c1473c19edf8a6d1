from pydantic import BaseModel, Field
from typing import Optional, Any
from enum import Enum


class QuestionCategory(str, Enum):
    """Categories the LLM uses to group clarifying questions"""
    IMPACT = "impact"
    SCOPE = "scope"
    LEADERSHIP = "leadership"
    RECOGNITION = "recognition"
    METRICS = "metrics"
    GENERAL = "general"

    @classmethod
    def coerce(cls, value: Any) -> "QuestionCategory":
        """
        Map a raw category value from an LLM response to a category.

        Missing or unrecognized values fall back to GENERAL.
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        return cls.GENERAL


QUESTION_CATEGORY_LABELS = {
    QuestionCategory.IMPACT: "Impact & Results",
    QuestionCategory.SCOPE: "Scope & Reach",
    QuestionCategory.LEADERSHIP: "Leadership & Team",
    QuestionCategory.RECOGNITION: "Recognition & Selection",
    QuestionCategory.METRICS: "Numbers & Metrics",
    QuestionCategory.GENERAL: "General",
}


class ClarifyingQuestionCreate(BaseModel):
    """Schema for a question proposed by the LLM, before it enters the store"""
    id: Optional[str] = Field(None, description="Caller-supplied identity; generated when omitted")
    question: str = Field(..., min_length=1, description="The question text")
    category: QuestionCategory = Field(QuestionCategory.GENERAL, description="Question category for grouping")
    hint: Optional[str] = Field(None, description="What kind of answer would help")
    sentence_number: Optional[int] = Field(None, ge=1, le=2, description="Targeted sentence of a two-sentence statement")

    class Config:
        json_schema_extra = {
            "example": {
                "question": "What was the dollar impact?",
                "category": "impact",
                "hint": "Annual savings, cost avoidance, or budget managed",
            }
        }


class ClarifyingQuestion(BaseModel):
    """
    A single clarifying question held by a question set.

    Identity fields are frozen; the answer is the only field the store mutates.
    """
    id: str = Field(..., frozen=True)
    question: str = Field(..., frozen=True)
    category: QuestionCategory = Field(QuestionCategory.GENERAL, frozen=True)
    answer: str = ""  # Empty string until the user answers
    hint: Optional[str] = Field(None, frozen=True)
    sentence_number: Optional[int] = Field(None, frozen=True)

    @property
    def is_answered(self) -> bool:
        return len(self.answer.strip()) > 0

    @property
    def category_label(self) -> str:
        return QUESTION_CATEGORY_LABELS[self.category]
