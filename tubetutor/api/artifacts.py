from __future__ import annotations

from enum import Enum
from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, Field

from tubetutor.api.deps import get_pipeline
from tubetutor.services.artifacts.base import ArtifactSpec
from tubetutor.services.artifacts.coding import PROBLEM_TIERS
from tubetutor.services.artifacts.concepts import KEY_CONCEPTS
from tubetutor.services.artifacts.formula import FORMULA_FUSION
from tubetutor.services.artifacts.quiz import CODE_DOJO_QUIZ, QUIZ_TIERS
from tubetutor.services.artifacts.summary import BRIEF_SUMMARY, COURSE_SUMMARY, SECTIONS
from tubetutor.services.pipeline import ArtifactPipeline
from tubetutor.services.youtube import resolve_video_id

router = APIRouter(prefix="/api/v1", tags=["artifacts"])


class VideoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    video_id: str | None = Field(default=None, alias="videoId")
    url: str | None = None  # full YouTube URL, used when videoId is absent


class Tier(str, Enum):
    easy = "easy"
    medium = "medium"
    hard = "hard"


def _generate(pipeline: ArtifactPipeline, req: VideoRequest, spec: ArtifactSpec) -> dict[str, Any]:
    video_id = resolve_video_id(req.video_id, req.url)
    result = pipeline.run(video_id, spec)
    return {
        "success": True,
        **spec.payload(result.items),
        "videoId": video_id,
        "usedFallback": result.used_fallback,
        "transcriptLength": result.transcript_length,
    }


# -----------------------
# Knowledge check / code dojo
# -----------------------
@router.post("/quiz/{tier}")
def knowledge_check(tier: Tier, req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, QUIZ_TIERS[tier.value])


@router.post("/code-dojo/quiz")
def code_dojo_quiz(req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, CODE_DOJO_QUIZ)


@router.post("/code-dojo/problems/{tier}")
def code_dojo_problems(tier: Tier, req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, PROBLEM_TIERS[tier.value])


# -----------------------
# Summaries
# -----------------------
@router.post("/summary")
def course_summary(req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, COURSE_SUMMARY)


@router.post("/summary/brief")
def brief_summary(req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, BRIEF_SUMMARY)


@router.post("/summary/sections")
def section_breakdown(req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, SECTIONS)


# -----------------------
# Study modules
# -----------------------
@router.post("/concepts")
def key_concepts(req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, KEY_CONCEPTS)


@router.post("/formula-fusion")
def formula_fusion(req: VideoRequest, pipeline: ArtifactPipeline = Depends(get_pipeline)):
    return _generate(pipeline, req, FORMULA_FUSION)
