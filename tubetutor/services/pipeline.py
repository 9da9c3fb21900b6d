from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import structlog

from tubetutor.core.config import Settings
from tubetutor.core.errors import MalformedModelOutput, TranscriptTooShort
from tubetutor.services.artifacts.base import JSON, RAW, ArtifactSpec
from tubetutor.services.extraction.fallbacks import fallback
from tubetutor.services.extraction.fields import extract_fields
from tubetutor.services.extraction.json_mode import extract_json
from tubetutor.services.extraction.normalize import normalize
from tubetutor.services.extraction.prompt import build_prompt
from tubetutor.services.llm.client import GenerationClient
from tubetutor.services.llm.retry import generate_with_retry
from tubetutor.services.transcript import Transcript, TranscriptService
from tubetutor.services.youtube import validate_video_id

logger = structlog.get_logger(__name__)


@dataclass
class ArtifactResult:
    items: list[dict[str, Any]]
    used_fallback: bool
    transcript: Transcript

    @property
    def transcript_length(self) -> int:
        return len(self.transcript.text)


def extract_records(raw: str, spec: ArtifactSpec) -> list[dict[str, Any]]:
    """Raw model output -> un-normalized records, according to the artifact's mode."""
    if spec.mode == RAW:
        return [{spec.raw_field: raw}]

    if spec.mode == JSON:
        try:
            data = extract_json(raw, expect=spec.json_expect)
        except MalformedModelOutput:
            if not spec.recover_malformed:
                raise
            logger.warning("json_output_malformed", artifact=spec.key, head=(raw or "")[:200])
            return []
        return spec.json_records(data) if spec.json_records else list(data)

    return [extract_fields(block, list(spec.fields)) for block in spec.blocks(raw)]


class ArtifactPipeline:
    """
    transcript -> prompt -> generate (with retry) -> blocks -> fields
    -> normalize -> fallback when nothing survived
    """

    def __init__(self, transcripts: TranscriptService, client: GenerationClient, settings: Settings) -> None:
        self.transcripts = transcripts
        self.client = client
        self.settings = settings

    def load_transcript(self, video_id: str) -> Transcript:
        video_id = validate_video_id(video_id)
        transcript = self.transcripts.get_transcript(video_id)
        if len(transcript.text.strip()) < self.settings.transcript_min_chars:
            raise TranscriptTooShort(
                f"Transcript for {video_id} has {len(transcript.text)} chars, "
                f"need at least {self.settings.transcript_min_chars}"
            )
        return transcript

    def run(self, video_id: str, spec: ArtifactSpec) -> ArtifactResult:
        transcript = self.load_transcript(video_id)

        prompt = build_prompt(
            spec.prompt_source(transcript),
            spec,
            max_chars=self.settings.transcript_max_chars,
        )
        raw = generate_with_retry(
            self.client,
            prompt,
            attempts=spec.attempts or self.settings.llm_attempts,
            backoff_sec=self.settings.llm_backoff_sec,
            timeout_sec=self.settings.llm_timeout_sec,
            backoff=self.settings.llm_backoff_mode,
        )

        schema = spec.schema(transcript)
        records = extract_records(raw, spec)
        items = normalize(records, schema)

        used_fallback = False
        if not items:
            used_fallback = True
            items = fallback(schema)
            logger.info(
                "extraction_fallback",
                artifact=spec.key,
                video_id=video_id,
                extracted=len(records),
                raw_chars=len(raw or ""),
            )

        logger.info(
            "artifact_generated",
            artifact=spec.key,
            video_id=video_id,
            items=len(items),
            used_fallback=used_fallback,
            transcript_cached=transcript.cached,
        )
        return ArtifactResult(items=items, used_fallback=used_fallback, transcript=transcript)
