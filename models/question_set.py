from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from models.clarifying_question import ClarifyingQuestion


class SourceContext(BaseModel):
    """
    Snapshot of what the questions were asked about.

    Captured at generation time so the modal can show the user the
    statement inputs and the statements the LLM produced from them.
    """
    statement1_input: Optional[str] = None
    statement2_input: Optional[str] = None
    statement1_generated: Optional[str] = None
    statement2_generated: Optional[str] = None
    mpa_label: Optional[str] = None  # e.g., "Executing the Mission"


class QuestionSet(BaseModel):
    """
    A batch of clarifying questions for one MPA of one ratee.

    Only one question set exists per (mpa_key, ratee_id) at a time.
    """
    id: str = Field(..., frozen=True)
    mpa_key: str = Field(..., frozen=True)  # e.g., "job_perf", "leadership"
    ratee_id: str = Field(..., frozen=True)
    created_at: datetime = Field(..., frozen=True)
    original_context: Optional[str] = None  # Prompt context that produced the questions
    source_context: Optional[SourceContext] = None
    questions: List[ClarifyingQuestion] = Field(default_factory=list)  # Display/answer order
    additional_context: str = ""  # Free-form text the user adds
    has_been_viewed: bool = False

    @property
    def answered_questions(self) -> List[ClarifyingQuestion]:
        return [q for q in self.questions if q.is_answered]

    def find_question(self, question_id: str) -> Optional[ClarifyingQuestion]:
        for question in self.questions:
            if question.id == question_id:
                return question
        return None
