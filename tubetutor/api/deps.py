from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from tubetutor.core.config import settings
from tubetutor.services.cache import TranscriptCache, build_transcript_cache
from tubetutor.services.llm.client import GenerationClient, build_generation_client
from tubetutor.services.pipeline import ArtifactPipeline
from tubetutor.services.transcript import TranscriptService


@lru_cache(maxsize=1)
def get_transcript_cache() -> TranscriptCache:
    return build_transcript_cache(settings.transcript_cache_url, settings.transcript_cache_ttl_sec)


def get_transcript_service(cache: TranscriptCache = Depends(get_transcript_cache)) -> TranscriptService:
    return TranscriptService(cache)


@lru_cache(maxsize=1)
def get_generation_client() -> GenerationClient:
    return build_generation_client(settings)


def get_pipeline(
    transcripts: TranscriptService = Depends(get_transcript_service),
    client: GenerationClient = Depends(get_generation_client),
) -> ArtifactPipeline:
    return ArtifactPipeline(transcripts, client, settings)
