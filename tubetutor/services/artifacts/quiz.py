"""
Multiple-choice quizzes: the knowledge-check tiers and the code-dojo quiz.
"""
from __future__ import annotations

from typing import Any

from tubetutor.services.artifacts.base import ArtifactSpec
from tubetutor.services.extraction.blocks import QUESTION_LABEL
from tubetutor.services.extraction.fields import ANSWER_LABEL, MULTI, OPTION_LETTER, FieldSpec
from tubetutor.services.extraction.normalize import (
    EnumRule,
    ListRule,
    Schema,
    TextRule,
    count_items,
    has_text,
)
from tubetutor.services.llm import prompts

LETTERS = ("A", "B", "C", "D")
QUIZ_MAX = 10
CODE_DOJO_MAX = 5


def _accept_question(raw: dict[str, Any]) -> bool:
    return has_text(raw, "question") and count_items(raw, "options") >= 2


def _quiz_fields(answer_field: str, note_field: str, note_label: str, *, keep_letters: bool = False):
    return (
        FieldSpec("question", "Question:"),
        FieldSpec("options_marker", "Options:", kind="marker"),
        FieldSpec("options", OPTION_LETTER, cardinality=MULTI, keep_prefix=keep_letters),
        FieldSpec(answer_field, ANSWER_LABEL, kind="letter", allowed=LETTERS),
        FieldSpec(note_field, note_label, continuation=True),
    )


def _quiz_schema(
    name: str,
    *,
    answer_field: str,
    note_field: str,
    question_default: str,
    note_default: str,
    pad,
    fallback_records,
    max_items: int = QUIZ_MAX,
    with_ids: bool = False,
) -> Schema:
    finalize = None
    if with_ids:
        def finalize(rec: dict[str, Any], i: int) -> dict[str, Any]:
            return {"id": i + 1, **rec}

    return Schema(
        name=name,
        fields={
            "question": TextRule(question_default),
            "options": ListRule(min_count=4, max_count=4, pad=pad),
            answer_field: EnumRule(LETTERS, default="A"),
            note_field: TextRule(note_default),
        },
        max_items=max_items,
        accept=_accept_question,
        finalize=finalize,
        fallback_records=fallback_records,
    )


# ----------------------------
# Fallback sets
# ----------------------------

def _easy_fallback() -> list[dict[str, Any]]:
    return [
        {
            "question": "What does HTML stand for?",
            "options": [
                "Hyper Text Markup Language",
                "High Tech Modern Language",
                "Hyper Transfer Markup Language",
                "Home Tool Markup Language",
            ],
            "correctAnswer": "A",
            "hint": "It's the standard language for creating web pages",
        },
        {
            "question": "Which symbol is used for single-line comments in JavaScript?",
            "options": ["//", "/*", "#", "--"],
            "correctAnswer": "A",
            "hint": "Think about how you temporarily disable code",
        },
    ]


def _medium_fallback() -> list[dict[str, Any]]:
    return [
        {
            "question": "What is the time complexity of a well-balanced binary search tree?",
            "options": [
                "O(1) for all operations",
                "O(n) for search",
                "O(log n) for search, insertion, and deletion",
                "O(n log n) for insertion",
            ],
            "correctAnswer": "C",
            "explanation": (
                "Balanced BSTs maintain O(log n) time for core operations due to their "
                "height-balanced structure."
            ),
        },
        {
            "question": "Which data structure uses FIFO (First-In-First-Out) ordering?",
            "options": ["Stack", "Heap", "Queue", "Tree"],
            "correctAnswer": "C",
            "explanation": (
                "Queues process elements in the order they were added (first-in-first-out), "
                "unlike stacks which are LIFO."
            ),
        },
    ]


def _hard_fallback() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "question": "What is the time complexity of the Floyd-Warshall algorithm?",
            "options": ["O(n log n)", "O(n^3)", "O(2^n)", "O(n^2)"],
            "correctAnswer": "B",
            "analysis": (
                "Floyd-Warshall computes shortest paths between all pairs of vertices in O(V^3) "
                "time, making it suitable for dense graphs but inefficient for large sparse graphs."
            ),
        }
    ]


def _code_dojo_fallback() -> list[dict[str, Any]]:
    return [
        {
            "question": "What is the time complexity of a binary search algorithm?",
            "options": ["A) O(1)", "B) O(n)", "C) O(log n)", "D) O(n log n)"],
            "answer": "C",
            "explanation": (
                "Binary search divides the search space in half with each iteration, "
                "resulting in logarithmic time complexity."
            ),
        }
    ]


# ----------------------------
# Artifact definitions
# ----------------------------

QUIZ_EASY = ArtifactSpec(
    key="quiz-easy",
    template=prompts.QUIZ_EASY_TEMPLATE,
    item_count=QUIZ_MAX,
    label=QUESTION_LABEL,
    fields=_quiz_fields("correctAnswer", "hint", "Hint:"),
    schema=lambda transcript: _quiz_schema(
        "quiz-easy",
        answer_field="correctAnswer",
        note_field="hint",
        question_default="Programming concept question",
        note_default="Review basic programming concepts",
        pad=lambda n: f"Option {n}",
        fallback_records=_easy_fallback,
    ),
    collection="questions",
    count_key="questionCount",
)

QUIZ_MEDIUM = ArtifactSpec(
    key="quiz-medium",
    template=prompts.QUIZ_MEDIUM_TEMPLATE,
    item_count=QUIZ_MAX,
    label=QUESTION_LABEL,
    fields=_quiz_fields("correctAnswer", "explanation", "Explanation:"),
    schema=lambda transcript: _quiz_schema(
        "quiz-medium",
        answer_field="correctAnswer",
        note_field="explanation",
        question_default="Intermediate programming concept",
        note_default="Detailed technical explanation not available",
        pad=lambda n: f"Option {n}",
        fallback_records=_medium_fallback,
    ),
    collection="questions",
    count_key="questionCount",
)

QUIZ_HARD = ArtifactSpec(
    key="quiz-hard",
    template=prompts.QUIZ_HARD_TEMPLATE,
    item_count=QUIZ_MAX,
    label=QUESTION_LABEL,
    fields=_quiz_fields("correctAnswer", "analysis", "Technical Analysis:"),
    schema=lambda transcript: _quiz_schema(
        "quiz-hard",
        answer_field="correctAnswer",
        note_field="analysis",
        question_default="Advanced Programming Question",
        note_default="Detailed technical analysis not available",
        pad=lambda n: f"Advanced Option {n}",
        fallback_records=_hard_fallback,
        with_ids=True,
    ),
    collection="questions",
    count_key="count",
)

CODE_DOJO_QUIZ = ArtifactSpec(
    key="code-dojo-quiz",
    template=prompts.CODE_DOJO_QUIZ_TEMPLATE,
    item_count=CODE_DOJO_MAX,
    label=QUESTION_LABEL,
    fields=_quiz_fields("answer", "explanation", "Explanation:", keep_letters=True),
    schema=lambda transcript: _quiz_schema(
        "code-dojo-quiz",
        answer_field="answer",
        note_field="explanation",
        question_default="Programming concept question",
        note_default="Key concept explanation",
        pad=lambda n: f"{LETTERS[n - 1]}) Placeholder option",
        fallback_records=_code_dojo_fallback,
        max_items=CODE_DOJO_MAX,
    ),
    collection="quiz",
    count_key="questionCount",
)

QUIZ_TIERS = {
    "easy": QUIZ_EASY,
    "medium": QUIZ_MEDIUM,
    "hard": QUIZ_HARD,
}
