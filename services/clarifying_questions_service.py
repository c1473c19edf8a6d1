"""
Clarifying Questions Service - workflow around the session store.

Sits between the generation/regeneration request builders and the UI on
one side, and the ClarifyingQuestionsStore on the other:
- Adds generation guidance to prompts
- Records questions returned with a generation result
- Feeds the UI indicator
- Consumes an answered set into a regeneration request
"""

import logging
from typing import Dict, Optional, Any

from pydantic import BaseModel

from config.settings import settings
from models.question_set import SourceContext
from services.clarifying_questions_store import ClarifyingQuestionsStore
from utils.clarifying_question_parser import ClarifyingQuestionParser
from utils.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)


class QuestionIndicator(BaseModel):
    """What the UI needs to render the clarifying questions badge"""
    question_set_id: str
    question_count: int
    is_new: bool  # Not viewed yet
    label: str


class RegenerationRequest(BaseModel):
    """Inputs for regenerating a statement with the user's clarifying answers"""
    question_set_id: str
    mpa_key: str
    ratee_id: str
    original_context: Optional[str] = None
    clarifying_context: str
    # Regeneration never asks for another round of questions
    request_clarifying_questions: bool = False


class ClarifyingQuestionsService:
    """
    Application service for the clarifying questions workflow.

    Responsibilities:
    - Validate caller input at the boundary (the store itself never raises)
    - Translate LLM generation results into question sets
    - Apply user answers and build regeneration requests
    """

    def __init__(
        self,
        store: ClarifyingQuestionsStore,
        parser: Optional[ClarifyingQuestionParser] = None,
        prompt_loader: Optional[PromptLoader] = None
    ):
        self.store = store
        self.parser = parser or ClarifyingQuestionParser()
        self.prompt_loader = prompt_loader or PromptLoader()

    # ============ GENERATION ============

    def get_generation_guidance(self) -> str:
        """Prompt section asking the LLM for optional clarifying questions"""
        if not settings.CLARIFYING_QUESTIONS_ENABLED:
            return ""

        return self.prompt_loader.load_generation(
            "clarifying_question_guidance",
            max_questions=self.parser.max_questions
        )

    def record_generation_result(
        self,
        mpa_key: str,
        ratee_id: str,
        payload: Any,
        original_context: Optional[str] = None,
        source_context: Optional[SourceContext] = None
    ) -> Optional[str]:
        """
        Store the clarifying questions returned with a generation result.

        Args:
            mpa_key: MPA the statement was generated for
            ratee_id: Ratee the statement was generated for
            payload: Generation result for the MPA (dict or raw JSON string)
            original_context: Context the statement was generated from
            source_context: Statement inputs/outputs shown alongside the questions

        Returns:
            ID of the new question set, or None if the result had no questions

        Raises:
            ValueError: If mpa_key or ratee_id is blank
        """
        if not mpa_key or not mpa_key.strip():
            raise ValueError("mpa_key is required")
        if not ratee_id or not ratee_id.strip():
            raise ValueError("ratee_id is required")

        questions = self.parser.parse(payload)
        if not questions:
            logger.debug(f"No clarifying questions for mpa={mpa_key} ratee={ratee_id}")
            return None

        return self.store.add_question_set(
            mpa_key=mpa_key,
            ratee_id=ratee_id,
            questions=questions,
            original_context=original_context,
            source_context=source_context,
        )

    # ============ UI ============

    def get_indicator(self, mpa_key: str, ratee_id: str) -> Optional[QuestionIndicator]:
        """
        Badge state for an MPA of a ratee.

        Returns:
            QuestionIndicator, or None when there is nothing to show
        """
        question_set = self.store.get_questions_for_mpa(mpa_key, ratee_id)
        if question_set is None or not question_set.questions:
            return None

        count = len(question_set.questions)
        plural = "s" if count > 1 else ""
        return QuestionIndicator(
            question_set_id=question_set.id,
            question_count=count,
            is_new=not question_set.has_been_viewed,
            label=f"{count} clarifying question{plural} available",
        )

    def save_answers(
        self,
        question_set_id: str,
        answers: Dict[str, str],
        additional_context: Optional[str] = None
    ) -> None:
        """
        Apply answers entered in the modal.

        Args:
            question_set_id: Set being answered
            answers: {question_id: answer}
            additional_context: Replaces the set's free text when given
        """
        for question_id, answer in answers.items():
            self.store.update_answer(question_set_id, question_id, answer)

        if additional_context is not None:
            self.store.update_additional_context(question_set_id, additional_context)

    def dismiss(self, question_set_id: str) -> None:
        """Discard a question set without regenerating"""
        self.store.remove_question_set(question_set_id)
        self.store.close_modal()
        logger.info(f"Dismissed question set {question_set_id}")

    # ============ REGENERATION ============

    def prepare_regeneration(
        self,
        question_set_id: str,
        answers: Optional[Dict[str, str]] = None,
        additional_context: Optional[str] = None
    ) -> RegenerationRequest:
        """
        Consume an answered question set into a regeneration request.

        Saves pending answers, builds the clarifying context, then removes
        the set and closes the modal.

        Raises:
            ValueError: If the question set doesn't exist
        """
        question_set = self.store.get_question_set(question_set_id)
        if question_set is None:
            raise ValueError(f"Question set {question_set_id} does not exist")

        # Pending edits land in the store first so the context reflects them
        self.save_answers(question_set_id, answers or {}, additional_context)
        context = self.store.build_clarifying_context(question_set_id)

        request = RegenerationRequest(
            question_set_id=question_set_id,
            mpa_key=question_set.mpa_key,
            ratee_id=question_set.ratee_id,
            original_context=question_set.original_context,
            clarifying_context=context,
        )

        self.store.remove_question_set(question_set_id)
        self.store.close_modal()
        logger.info(f"Prepared regeneration for mpa={request.mpa_key} ratee={request.ratee_id}")
        return request

    def build_regeneration_prompt(self, request: RegenerationRequest, mpa_label: Optional[str] = None) -> str:
        """
        Prompt section carrying the clarifying context.

        Returns:
            Formatted section, or "" if the request has no context
        """
        if not request.clarifying_context.strip():
            return ""

        return self.prompt_loader.load_regeneration(
            "clarifying_context",
            mpa_label=mpa_label or request.mpa_key,
            clarifying_context=request.clarifying_context
        )
