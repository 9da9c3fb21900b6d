from __future__ import annotations

import math
from typing import TYPE_CHECKING, Any

from tubetutor.services.artifacts.base import JSON, ArtifactSpec
from tubetutor.services.extraction.normalize import NumberRule, Schema, TextRule, has_text
from tubetutor.services.llm import prompts

if TYPE_CHECKING:
    from tubetutor.services.transcript import Transcript

CONCEPTS_MAX = 8
FALLBACK_TIMESTAMP = 30


def timestamped_text(transcript: "Transcript") -> str:
    """One caption per line, prefixed with its start second: "[42s] ..."."""
    if not transcript.segments:
        return transcript.text
    return "\n".join(
        f"[{int(seg.get('start') or 0)}s] {seg.get('text', '')}" for seg in transcript.segments
    )


def concept_records(data: Any) -> list[dict[str, Any]]:
    return [item for item in data if isinstance(item, dict)]


def concepts_schema(transcript: "Transcript") -> Schema:
    duration = transcript.duration_sec
    max_ts = math.floor(duration) if duration > 0 else None
    fallback_ts = FALLBACK_TIMESTAMP if max_ts is None else min(FALLBACK_TIMESTAMP, max_ts)

    return Schema(
        name="key-concepts",
        fields={
            "name": TextRule("Key Concept"),
            "timestamp": NumberRule(min=0, max=max_ts, default=0),
            "description": TextRule("Review this concept in the video"),
            "topic": TextRule("General"),
        },
        max_items=CONCEPTS_MAX,
        accept=lambda raw: has_text(raw, "name"),
        fallback_records=lambda: [
            {
                "name": "Key Concepts",
                "timestamp": fallback_ts,
                "description": "Review the main concepts from this video",
                "topic": "General",
            }
        ],
    )


KEY_CONCEPTS = ArtifactSpec(
    key="key-concepts",
    template=prompts.KEY_CONCEPTS_TEMPLATE,
    item_count=CONCEPTS_MAX,
    mode=JSON,
    json_expect="array",
    json_records=concept_records,
    prompt_source=timestamped_text,
    schema=concepts_schema,
    collection="concepts",
    count_key="conceptCount",
)
