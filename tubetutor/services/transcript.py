from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from typing import Any, Callable

import requests
import structlog
from youtube_transcript_api import (
    CouldNotRetrieveTranscript,
    YouTubeRequestFailed,
    YouTubeTranscriptApi,
)
from youtube_transcript_api.proxies import GenericProxyConfig

from tubetutor.core.config import settings
from tubetutor.core.errors import TranscriptServiceUnavailable, TranscriptUnavailable
from tubetutor.services.cache import TranscriptCache

logger = structlog.get_logger(__name__)

Fetcher = Callable[[str], list[dict[str, Any]]]


@dataclass
class Transcript:
    video_id: str
    text: str
    segments: list[dict[str, Any]] = field(default_factory=list)
    cached: bool = False

    @property
    def duration_sec(self) -> float:
        """End of the last timed segment; 0.0 when no timing is known."""
        if not self.segments:
            return 0.0
        last = self.segments[-1]
        return float(last.get("start") or 0.0) + float(last.get("duration") or 0.0)

    def to_cache(self) -> dict[str, Any]:
        return {"text": self.text, "segments": self.segments, "fetched_at": time.time()}


def _normalize_space(s: str) -> str:
    s = (s or "").replace("\u200b", " ")
    s = re.sub(r"\s+", " ", s).strip()
    return s


def clean_segments(segments: list[dict[str, Any]]) -> list[dict[str, Any]]:
    """
    Normalize raw caption segments into {text, start, duration}:
    - collapse whitespace
    - drop empty captions
    - clamp negative timing to 0
    Ordering is preserved (caption order is chronological).
    """
    cleaned: list[dict[str, Any]] = []
    for seg in segments or []:
        txt = _normalize_space(seg.get("text") or "")
        if not txt:
            continue
        start = max(0.0, float(seg.get("start") or 0.0))
        duration = max(0.0, float(seg.get("duration") or 0.0))
        cleaned.append({"text": txt, "start": start, "duration": duration})
    return cleaned


def segments_to_text(segments: list[dict[str, Any]]) -> str:
    return " ".join(seg["text"] for seg in segments if seg.get("text")).strip()


def fetch_youtube_segments(video_id: str) -> list[dict[str, Any]]:
    proxy_config = None
    if settings.youtube_proxy_url:
        proxy_config = GenericProxyConfig(
            http_url=settings.youtube_proxy_url,
            https_url=settings.youtube_proxy_url,
        )

    api = YouTubeTranscriptApi(proxy_config=proxy_config)
    fetched = api.fetch(video_id, languages=list(settings.youtube_languages) or ["en"])
    return fetched.to_raw_data()


class TranscriptService:
    """
    Cache-first transcript lookup.

    A miss fetches from YouTube and overwrites the cache entry; there is no
    single-flight coordination between concurrent misses for the same id.
    """

    def __init__(self, cache: TranscriptCache, fetcher: Fetcher = fetch_youtube_segments) -> None:
        self.cache = cache
        self.fetcher = fetcher

    def get_transcript(self, video_id: str) -> Transcript:
        cached = self.cache.get(video_id)
        if cached is not None:
            logger.info("transcript_cache_hit", video_id=video_id)
            return Transcript(
                video_id=video_id,
                text=cached.get("text") or "",
                segments=list(cached.get("segments") or []),
                cached=True,
            )

        logger.info("transcript_fetch_started", video_id=video_id)
        try:
            raw_segments = self.fetcher(video_id)
        except YouTubeRequestFailed as e:
            logger.warning("transcript_fetch_network_error", video_id=video_id, error=str(e))
            raise TranscriptServiceUnavailable(str(e)) from e
        except CouldNotRetrieveTranscript as e:
            logger.info("transcript_unavailable", video_id=video_id, reason=type(e).__name__)
            raise TranscriptUnavailable(f"No transcript for video {video_id}") from e
        except requests.RequestException as e:
            logger.warning("transcript_fetch_network_error", video_id=video_id, error=str(e))
            raise TranscriptServiceUnavailable(str(e)) from e

        segments = clean_segments(raw_segments)
        if not segments:
            raise TranscriptUnavailable(f"Transcript empty for video {video_id}")

        transcript = Transcript(video_id=video_id, text=segments_to_text(segments), segments=segments)
        self.cache.set(video_id, transcript.to_cache())
        logger.info("transcript_fetched", video_id=video_id, chars=len(transcript.text), segments=len(segments))
        return transcript
