import dataclasses

import pytest
from fastapi.testclient import TestClient

from tubetutor.api.deps import get_pipeline, get_transcript_cache, get_transcript_service
from tubetutor.core.config import settings
from tubetutor.main import app
from tubetutor.services.cache import MemoryTranscriptCache
from tubetutor.services.pipeline import ArtifactPipeline
from tubetutor.services.transcript import TranscriptService

VIDEO_ID = "dQw4w9WgXcQ"

SEGMENTS = [
    {"text": "Today we look at how binary search works on sorted arrays.", "start": 0.0, "duration": 6.5},
    {"text": "Each step compares the middle element and discards half of the range.", "start": 6.5, "duration": 7.0},
    {"text": "That gives logarithmic time, which we compare with a linear scan.", "start": 13.5, "duration": 8.0},
]


class ScriptedClient:
    """Generation client that replays canned responses; the last one repeats."""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    def generate(self, prompt, *, timeout_sec):
        self.prompts.append(prompt)
        item = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture
def fetch_calls():
    return []


@pytest.fixture
def cache():
    return MemoryTranscriptCache(ttl_sec=3600)


@pytest.fixture
def transcript_service(cache, fetch_calls):
    def fetcher(video_id):
        fetch_calls.append(video_id)
        return [dict(s) for s in SEGMENTS]

    return TranscriptService(cache, fetcher=fetcher)


@pytest.fixture
def test_settings():
    return dataclasses.replace(settings, llm_attempts=3, llm_backoff_sec=0.0, transcript_min_chars=100)


@pytest.fixture
def make_pipeline(transcript_service, test_settings):
    def _make(*responses):
        return ArtifactPipeline(transcript_service, ScriptedClient(*responses), test_settings)

    return _make


@pytest.fixture
def api(cache, transcript_service):
    """TestClient wired to in-memory fakes; `api.use(*responses)` scripts the model."""
    client = TestClient(app)
    state = {"pipeline": None}

    def use(*responses):
        state["pipeline"] = ArtifactPipeline(
            transcript_service,
            ScriptedClient(*responses),
            dataclasses.replace(settings, llm_backoff_sec=0.0),
        )
        return state["pipeline"]

    client.use = use
    use("")

    app.dependency_overrides[get_transcript_cache] = lambda: cache
    app.dependency_overrides[get_transcript_service] = lambda: transcript_service
    app.dependency_overrides[get_pipeline] = lambda: state["pipeline"]
    yield client
    app.dependency_overrides.clear()
