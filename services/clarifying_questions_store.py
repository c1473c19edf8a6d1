"""
Clarifying Questions Store - non-persistent session state.

Holds the clarifying questions the LLM proposes alongside generated
statements, the user's answers to them, and the modal state used to
answer them.

Flow:
1. LLM generates statements + optional clarifying questions
2. Questions are stored here (never persisted)
3. UI shows an indicator when questions are available
4. User answers questions and regenerates with the enhanced context

Rules:
- One question set per (mpa_key, ratee_id); a new set replaces the old one
- Unknown ids are tolerated: mutations are no-ops, reads return None / ""
- The modal is open if and only if the active set id resolves to a set
- Reads return deep copies; callers re-query by id after every change
"""

import logging
from collections import OrderedDict
from datetime import datetime, timezone
from typing import Dict, List, Optional, Any, Iterable, Union

from config.settings import settings
from models.clarifying_question import (
    ClarifyingQuestion,
    ClarifyingQuestionCreate,
    QuestionCategory,
)
from models.question_set import QuestionSet, SourceContext
from utils.id_generator import generate_id

logger = logging.getLogger(__name__)

CLARIFYING_SECTION_HEADER = "=== CLARIFYING INFORMATION FROM USER ==="
ADDITIONAL_CONTEXT_HEADER = "=== ADDITIONAL CONTEXT FROM USER ==="

QuestionInput = Union[ClarifyingQuestionCreate, Dict[str, Any]]


class ClarifyingQuestionsStore:
    """In-memory store of clarifying question sets for one user session"""

    def __init__(self):
        self._question_sets: Dict[str, QuestionSet] = {}
        self._active_question_set_id: Optional[str] = None
        self._is_modal_open: bool = False

    # ========================
    # Private Helpers
    # ========================

    def _build_question(self, data: QuestionInput) -> ClarifyingQuestion:
        if not isinstance(data, ClarifyingQuestionCreate):
            data = ClarifyingQuestionCreate.model_validate(data)

        return ClarifyingQuestion(
            id=data.id or generate_id(settings.QUESTION_ID_PREFIX),
            question=data.question,
            category=data.category,
            answer="",
            hint=data.hint,
            sentence_number=data.sentence_number,
        )

    def _clear_active_if(self, removed_ids: Iterable[str]) -> None:
        if self._active_question_set_id in set(removed_ids):
            self._active_question_set_id = None
            self._is_modal_open = False

    # ========================
    # Question Set Management
    # ========================

    def add_question_set(
        self,
        mpa_key: str,
        ratee_id: str,
        questions: List[QuestionInput],
        original_context: Optional[str] = None,
        source_context: Optional[SourceContext] = None
    ) -> str:
        """
        Add a new question set from an LLM response.

        Any existing set for the same (mpa_key, ratee_id) is removed first.
        Old and new questions are never merged.

        Args:
            mpa_key: MPA the questions relate to (e.g., "job_perf")
            ratee_id: Ratee the questions are for
            questions: Proposed questions (ClarifyingQuestionCreate or dicts)
            original_context: Prompt context that produced the questions
            source_context: Statement inputs/outputs the questions refer to

        Returns:
            str: ID of the new question set
        """
        set_id = generate_id(settings.QUESTION_SET_ID_PREFIX)
        question_set = QuestionSet(
            id=set_id,
            mpa_key=mpa_key,
            ratee_id=ratee_id,
            created_at=datetime.now(timezone.utc),
            original_context=original_context,
            source_context=source_context,
            questions=[self._build_question(q) for q in questions],
        )

        superseded = [
            existing_id
            for existing_id, existing in self._question_sets.items()
            if existing.mpa_key == mpa_key and existing.ratee_id == ratee_id
        ]
        for existing_id in superseded:
            del self._question_sets[existing_id]
        self._clear_active_if(superseded)

        self._question_sets[set_id] = question_set

        logger.info(
            f"Added question set {set_id} ({len(question_set.questions)} questions) "
            f"for mpa={mpa_key} ratee={ratee_id}"
            + (f", replaced {len(superseded)}" if superseded else "")
        )
        return set_id

    def get_question_set(self, question_set_id: str) -> Optional[QuestionSet]:
        """
        Get a question set by ID.

        Returns:
            QuestionSet (deep copy) or None if it doesn't exist
        """
        question_set = self._question_sets.get(question_set_id)
        return question_set.model_copy(deep=True) if question_set else None

    def get_questions_for_mpa(self, mpa_key: str, ratee_id: str) -> Optional[QuestionSet]:
        """
        Get the question set for a specific MPA and ratee.

        Returns:
            QuestionSet (deep copy) or None if no set exists for the pair
        """
        for question_set in self._question_sets.values():
            if question_set.mpa_key == mpa_key and question_set.ratee_id == ratee_id:
                return question_set.model_copy(deep=True)
        return None

    def list_question_sets(self, ratee_id: Optional[str] = None) -> List[QuestionSet]:
        """
        List question sets in insertion order.

        Args:
            ratee_id: Optional filter by ratee

        Returns:
            list: Question sets (deep copies)
        """
        return [
            qs.model_copy(deep=True)
            for qs in self._question_sets.values()
            if ratee_id is None or qs.ratee_id == ratee_id
        ]

    def has_unanswered_questions(self, mpa_key: str, ratee_id: str) -> bool:
        """
        Check whether a question set with at least one question exists.

        This reports that the user has not dismissed the set, not that
        individual answers are missing.
        """
        question_set = self.get_questions_for_mpa(mpa_key, ratee_id)
        if question_set is None:
            return False
        return len(question_set.questions) > 0

    def get_unanswered_count(self, ratee_id: str) -> int:
        """Count of question sets with at least one question for a ratee, across MPAs"""
        return sum(
            1 for qs in self._question_sets.values()
            if qs.ratee_id == ratee_id and len(qs.questions) > 0
        )

    def get_answered_count(self, question_set_id: str) -> int:
        """Number of questions with a non-blank answer (0 for unknown sets)"""
        question_set = self._question_sets.get(question_set_id)
        if question_set is None:
            return 0
        return len(question_set.answered_questions)

    def group_questions_by_category(
        self,
        question_set_id: str
    ) -> "OrderedDict[QuestionCategory, List[ClarifyingQuestion]]":
        """
        Group a set's questions by category for display.

        Categories appear in order of first appearance; question order is
        preserved within each group.

        Returns:
            OrderedDict: {category: [questions]} (deep copies), empty for unknown sets
        """
        groups: "OrderedDict[QuestionCategory, List[ClarifyingQuestion]]" = OrderedDict()
        question_set = self._question_sets.get(question_set_id)
        if question_set is None:
            return groups

        for question in question_set.questions:
            groups.setdefault(question.category, []).append(question.model_copy(deep=True))
        return groups

    # ========================
    # Mutations
    # ========================

    def update_answer(self, question_set_id: str, question_id: str, answer: str) -> None:
        """
        Update the answer for a specific question.

        No-op if the set or question doesn't exist.
        """
        question_set = self._question_sets.get(question_set_id)
        if question_set is None:
            return

        question = question_set.find_question(question_id)
        if question is None:
            return

        question.answer = answer
        logger.debug(f"Question set {question_set_id}: answered question '{question_id}'")

    def update_additional_context(self, question_set_id: str, context: str) -> None:
        """Replace the free-form additional context. No-op if the set doesn't exist."""
        question_set = self._question_sets.get(question_set_id)
        if question_set is None:
            return

        question_set.additional_context = context
        logger.debug(f"Question set {question_set_id}: updated additional context")

    def mark_as_viewed(self, question_set_id: str) -> None:
        """Mark a question set as viewed. No-op if the set doesn't exist."""
        question_set = self._question_sets.get(question_set_id)
        if question_set is None:
            return

        question_set.has_been_viewed = True
        logger.debug(f"Question set {question_set_id}: marked as viewed")

    def remove_question_set(self, question_set_id: str) -> None:
        """
        Remove a question set (after regeneration or dismissal).

        If it was the active set, the modal is closed as well.
        """
        if self._question_sets.pop(question_set_id, None) is None:
            return

        self._clear_active_if([question_set_id])
        logger.info(f"Removed question set {question_set_id}")

    def clear_questions_for_ratee(self, ratee_id: str) -> None:
        """Remove every question set for a ratee, regardless of MPA"""
        removed = [
            set_id for set_id, qs in self._question_sets.items()
            if qs.ratee_id == ratee_id
        ]
        for set_id in removed:
            del self._question_sets[set_id]

        self._clear_active_if(removed)
        logger.info(f"Cleared {len(removed)} question sets for ratee={ratee_id}")

    # ========================
    # Modal State
    # ========================

    @property
    def is_modal_open(self) -> bool:
        return self._is_modal_open

    @property
    def active_question_set_id(self) -> Optional[str]:
        return self._active_question_set_id

    def open_modal(self, question_set_id: str) -> None:
        """
        Open the modal for a question set and mark it viewed.

        No-op if the set doesn't exist.
        """
        if question_set_id not in self._question_sets:
            return

        self._active_question_set_id = question_set_id
        self._is_modal_open = True
        self.mark_as_viewed(question_set_id)

    def close_modal(self) -> None:
        """Close the modal and clear the active set"""
        self._is_modal_open = False
        self._active_question_set_id = None

    def get_active_question_set(self) -> Optional[QuestionSet]:
        """
        Get the active question set.

        Returns:
            QuestionSet (deep copy) or None if no set is active
        """
        if not self._active_question_set_id:
            return None
        return self.get_question_set(self._active_question_set_id)

    # ========================
    # Export Methods
    # ========================

    def build_clarifying_context(self, question_set_id: str) -> str:
        """
        Build the context block sent with a regeneration request.

        Answered questions are listed as Q:/A: pairs in question order,
        followed by the additional context. Unanswered questions are skipped.

        Returns:
            str: Context block, or "" if the set doesn't exist or has nothing to add
        """
        question_set = self._question_sets.get(question_set_id)
        if question_set is None:
            return ""

        parts: List[str] = []

        answered = question_set.answered_questions
        if answered:
            parts.append(CLARIFYING_SECTION_HEADER)
            for question in answered:
                parts.append(f"Q: {question.question}")
                parts.append(f"A: {question.answer}")
                parts.append("")

        if question_set.additional_context.strip():
            parts.append(ADDITIONAL_CONTEXT_HEADER)
            parts.append(question_set.additional_context)

        return "\n".join(parts)

    # ========================
    # Utility Methods
    # ========================

    def reset(self) -> None:
        """
        Clear all state (session end, e.g. sign-out).

        Warning: This erases all question sets and answers.
        """
        self._question_sets.clear()
        self._active_question_set_id = None
        self._is_modal_open = False
        logger.info("Clarifying questions store reset - all question sets cleared")

    def get_summary_stats(self) -> Dict[str, Any]:
        """
        Get summary statistics (for debugging/logging).

        Returns:
            dict: Summary of current state
        """
        return {
            'total_question_sets': len(self._question_sets),
            'total_questions': sum(len(qs.questions) for qs in self._question_sets.values()),
            'total_answered': sum(len(qs.answered_questions) for qs in self._question_sets.values()),
            'ratee_ids': sorted({qs.ratee_id for qs in self._question_sets.values()}),
            'active_question_set_id': self._active_question_set_id,
            'is_modal_open': self._is_modal_open,
        }

    def __len__(self) -> int:
        return len(self._question_sets)
