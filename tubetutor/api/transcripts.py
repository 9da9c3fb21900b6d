from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, ConfigDict, Field

from tubetutor.api.deps import get_transcript_cache, get_transcript_service
from tubetutor.services.cache import TranscriptCache
from tubetutor.services.transcript import TranscriptService
from tubetutor.services.youtube import validate_video_id

router = APIRouter(prefix="/api/v1", tags=["transcripts"])


class ClearCacheRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_id: str | None = Field(default=None, alias="videoId")


@router.get("/transcript")
def get_transcript(
    video_id: str | None = Query(default=None, alias="videoId"),
    service: TranscriptService = Depends(get_transcript_service),
):
    vid = validate_video_id(video_id)
    t = service.get_transcript(vid)
    return {
        "success": True,
        "videoId": vid,
        "transcript": t.text,
        "fullTranscript": t.segments,
        "cacheInfo": "Cached" if t.cached else "Fresh",
    }


@router.post("/cache/clear")
def clear_cache(req: ClearCacheRequest | None = None, cache: TranscriptCache = Depends(get_transcript_cache)):
    video_id = req.video_id if req else None
    if video_id:
        removed = int(cache.delete(video_id))
        message = f"Cache cleared for {video_id}"
    else:
        removed = cache.clear()
        message = "All cache cleared"
    return {"success": True, "message": message, "removed": removed}


@router.get("/cache/stats")
def cache_stats(cache: TranscriptCache = Depends(get_transcript_cache)):
    return cache.stats()
