from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tubetutor.services.artifacts.base import ArtifactSpec

MAX_CHARS = 30000
TRUNCATION_MARKER = "... [truncated]"


def truncate_transcript(text: str, max_chars: int = MAX_CHARS) -> str:
    text = text or ""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + TRUNCATION_MARKER


def build_prompt(transcript: str, spec: "ArtifactSpec", max_chars: int = MAX_CHARS) -> str:
    """
    Interpolate the (truncated) transcript into the artifact's template.

    Callers reject empty / too-short transcripts before reaching this point.
    """
    return spec.template.format(
        transcript=truncate_transcript(transcript, max_chars),
        count=spec.item_count,
    )
