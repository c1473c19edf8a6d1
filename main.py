"""
Main entry point for the clarifying questions workflow.

Walks through one session: a generation result arrives with clarifying
questions, the user answers them, and the answers are turned into a
regeneration request. The LLM response is canned; no provider is called.
"""

import logging

from config.settings import settings
from models.question_set import SourceContext
from services import SessionRegistry, ClarifyingQuestionsService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

SAMPLE_GENERATION_RESULT = {
    "statements": [
        "Overhauled unit supply tracking process; cut reorder errors and freed technicians for mission tasks."
    ],
    "clarifyingQuestions": [
        {
            "question": "What was the dollar impact?",
            "category": "impact",
            "hint": "Annual savings, cost avoidance, or budget managed"
        },
        {
            "question": "How many people did you lead on this effort?",
            "category": "leadership"
        },
        {
            "question": "Did the new process get adopted beyond your unit?",
            "category": "scope"
        }
    ]
}


def print_separator(char="=", length=60):
    """Print a separator line"""
    print(char * length)


def main():
    print_separator()
    print("CLARIFYING QUESTIONS - CONSOLE WALKTHROUGH")
    print_separator()

    registry = SessionRegistry()
    store = registry.start_session("user_demo")
    service = ClarifyingQuestionsService(store)

    original_context = "Rebuilt supply tracking spreadsheet into a shared database"
    set_id = service.record_generation_result(
        mpa_key="job_perf",
        ratee_id="ratee_demo",
        payload=SAMPLE_GENERATION_RESULT,
        original_context=original_context,
        source_context=SourceContext(
            statement1_input=original_context,
            statement1_generated=SAMPLE_GENERATION_RESULT["statements"][0],
            mpa_label="Executing the Mission",
        ),
    )

    indicator = service.get_indicator("job_perf", "ratee_demo")
    print(f"\nIndicator: {indicator.label} (new={indicator.is_new})")

    store.open_modal(set_id)
    active = store.get_active_question_set()
    for questions in store.group_questions_by_category(set_id).values():
        print(f"\n[{questions[0].category_label}]")
        for question in questions:
            print(f"  - {question.question}")

    request = service.prepare_regeneration(
        set_id,
        answers={
            active.questions[0].id: "Saved $50K annually",
            active.questions[1].id: "Led a team of 6 Airmen",
        },
        additional_context="Process was briefed to the Group commander",
    )

    print()
    print_separator("-")
    print("REGENERATION PROMPT SECTION:")
    print_separator("-")
    print(service.build_regeneration_prompt(request, mpa_label="Executing the Mission"))
    print_separator("-")
    print(f"Remaining question sets: {store.get_unanswered_count('ratee_demo')}")

    registry.end_session("user_demo")
    print("\nSession ended")


if __name__ == "__main__":
    main()
