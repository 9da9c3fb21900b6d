"""
Summary artifacts: the course-card summary, the prose brief and the
timestamped section breakdown.
"""
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from tubetutor.services.artifacts.base import RAW, ArtifactSpec
from tubetutor.services.extraction.blocks import TRIPLE_QUOTE, single_block, split_blocks, split_on_timestamps
from tubetutor.services.extraction.fields import BULLET, MULTI, FieldSpec
from tubetutor.services.extraction.normalize import (
    ListRule,
    NumberRule,
    PatternRule,
    Schema,
    TextRule,
    count_items,
    has_text,
)
from tubetutor.services.llm import prompts

if TYPE_CHECKING:
    from tubetutor.services.transcript import Transcript

HHMMSS = re.compile(r"\d+:\d{2}:\d{2}")
NO_KEY_TOPICS = "No key topics identified"
SECTIONS_MAX = 5
BRIEF_FALLBACK_WORDS = 60

SECTION_TIPS_FALLBACK = [
    "Pay attention to key concepts",
    "Take notes on important points",
    "Review difficult sections",
]

_DIGITS = re.compile(r"\d+")


def first_words(text: str, n: int) -> str:
    """First n words of text, with "..." when anything was cut."""
    words = (text or "").split()
    head = " ".join(words[:n])
    return head + "..." if len(words) > n else head


# ----------------------------
# Course summary
# ----------------------------

COURSE_FIELDS = (
    FieldSpec("title", "Title:"),
    FieldSpec("duration", "Duration:"),
    FieldSpec("topics", "Topics:"),
    FieldSpec("points", "Points:"),
    FieldSpec("key_topics_marker", "KEY TOPICS:", kind="marker"),
    FieldSpec("keyTopics", BULLET, cardinality=MULTI, after="key_topics_marker"),
)


def _finalize_course(rec: dict[str, Any], _i: int) -> dict[str, Any]:
    # "5 Topics" -> "5"; otherwise count what was listed
    m = _DIGITS.search(rec["topics"])
    if m:
        rec["topics"] = str(int(m.group(0)))
    else:
        listed = [t for t in rec["keyTopics"] if t != NO_KEY_TOPICS]
        rec["topics"] = str(len(listed))
    return rec


def course_summary_schema(transcript: "Transcript") -> Schema:
    title = first_words(transcript.text, 5)
    if not title.endswith("..."):
        title += "..."

    def fallback_records() -> list[dict[str, Any]]:
        return [
            {
                "title": title,
                "duration": "00:00:00",
                "topics": "0",
                "points": "200",
                "keyTopics": [NO_KEY_TOPICS],
            }
        ]

    return Schema(
        name="course-summary",
        fields={
            "title": TextRule(title),
            "duration": PatternRule(HHMMSS, "00:00:00"),
            "topics": TextRule(""),
            "points": NumberRule(min=150, max=300, default=200, as_string=True),
            "keyTopics": ListRule(min_count=1, pad=lambda n: NO_KEY_TOPICS),
        },
        max_items=1,
        accept=lambda raw: has_text(raw, "title") or count_items(raw, "keyTopics") > 0,
        finalize=_finalize_course,
        fallback_records=fallback_records,
    )


COURSE_SUMMARY = ArtifactSpec(
    key="course-summary",
    template=prompts.COURSE_SUMMARY_TEMPLATE,
    item_count=1,
    split=single_block,
    fields=COURSE_FIELDS,
    schema=course_summary_schema,
)


# ----------------------------
# Brief prose summary
# ----------------------------

def brief_summary_schema(transcript: "Transcript") -> Schema:
    excerpt = first_words(transcript.text, BRIEF_FALLBACK_WORDS)
    return Schema(
        name="brief-summary",
        fields={"summary": TextRule(excerpt)},
        max_items=1,
        accept=lambda raw: has_text(raw, "summary"),
        fallback_records=lambda: [{"summary": excerpt}],
    )


BRIEF_SUMMARY = ArtifactSpec(
    key="brief-summary",
    template=prompts.BRIEF_SUMMARY_TEMPLATE,
    item_count=1,
    mode=RAW,
    raw_field="summary",
    schema=brief_summary_schema,
)


# ----------------------------
# Section breakdown
# ----------------------------

SECTION_TIMESTAMP = re.compile(
    r"^(?:Timestamp:\s*)?\[?(?P<value>\d{1,2}:\d{2}:\d{2})\]?", re.IGNORECASE
)

SECTION_FIELDS = (
    FieldSpec("timestamp", SECTION_TIMESTAMP),
    FieldSpec("title", "Title:"),
    FieldSpec("subtitle", "Subtitle:"),
    FieldSpec("summary", "Summary:", continuation=True),
    FieldSpec("tips_marker", "Tips:", kind="marker"),
    FieldSpec("tips", BULLET, cardinality=MULTI),
)


def split_sections(raw: str) -> list[str]:
    """
    Sections are normally fenced with triple quotes. When the model drops the
    fences (or wraps several sections in one pair) the timestamp lines are the
    boundaries instead.
    """
    fenced = split_blocks(raw, TRIPLE_QUOTE) or [raw]
    out: list[str] = []
    for block in fenced:
        parts = split_on_timestamps(block)
        out.extend(parts if len(parts) > 1 else [block])
    return [b for b in out if b.strip()]


def sections_schema(transcript: "Transcript") -> Schema:
    intro = first_words(transcript.text, 20)

    def fallback_records() -> list[dict[str, Any]]:
        return [
            {
                "timestamp": "00:00:00",
                "title": "Introduction",
                "subtitle": "Video Overview",
                "summary": intro,
                "tips": list(SECTION_TIPS_FALLBACK),
            }
        ]

    return Schema(
        name="sections",
        fields={
            "timestamp": PatternRule(HHMMSS, "00:00:00"),
            "title": TextRule("Untitled Section"),
            "subtitle": TextRule("Key Concepts"),
            "summary": TextRule("Essential insights from this section"),
            "tips": ListRule(max_count=3),
        },
        max_items=SECTIONS_MAX,
        accept=lambda raw: (
            has_text(raw, "timestamp") and has_text(raw, "title") and count_items(raw, "tips") >= 3
        ),
        fallback_records=fallback_records,
    )


SECTIONS = ArtifactSpec(
    key="sections",
    template=prompts.SECTIONS_TEMPLATE,
    item_count=SECTIONS_MAX,
    split=split_sections,
    fields=SECTION_FIELDS,
    schema=sections_schema,
    collection="subPoints",
    count_key="sectionCount",
)
