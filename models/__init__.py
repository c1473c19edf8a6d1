from models.clarifying_question import (
    QuestionCategory,
    QUESTION_CATEGORY_LABELS,
    ClarifyingQuestionCreate,
    ClarifyingQuestion,
)
from models.question_set import SourceContext, QuestionSet

__all__ = [
    "QuestionCategory",
    "QUESTION_CATEGORY_LABELS",
    "ClarifyingQuestionCreate",
    "ClarifyingQuestion",
    "SourceContext",
    "QuestionSet",
]
