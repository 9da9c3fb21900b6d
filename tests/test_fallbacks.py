import pytest

from tubetutor.services.artifacts.coding import PROBLEM_TIERS
from tubetutor.services.artifacts.concepts import KEY_CONCEPTS
from tubetutor.services.artifacts.formula import FORMULA_FUSION
from tubetutor.services.artifacts.quiz import CODE_DOJO_QUIZ, QUIZ_TIERS
from tubetutor.services.artifacts.summary import BRIEF_SUMMARY, COURSE_SUMMARY, SECTIONS
from tubetutor.services.extraction.fallbacks import fallback
from tubetutor.services.extraction.normalize import normalize
from tubetutor.services.transcript import Transcript

from conftest import SEGMENTS

ALL_SPECS = [
    *QUIZ_TIERS.values(),
    CODE_DOJO_QUIZ,
    *PROBLEM_TIERS.values(),
    COURSE_SUMMARY,
    BRIEF_SUMMARY,
    SECTIONS,
    KEY_CONCEPTS,
    FORMULA_FUSION,
]

TRANSCRIPT = Transcript(
    video_id="dQw4w9WgXcQ",
    text=" ".join(s["text"] for s in SEGMENTS),
    segments=SEGMENTS,
)


@pytest.mark.parametrize("spec", ALL_SPECS, ids=lambda s: s.key)
def test_fallback_is_non_empty_and_schema_valid(spec):
    schema = spec.schema(TRANSCRIPT)
    records = fallback(schema)
    assert len(records) >= 1
    assert normalize(records, schema) == records


@pytest.mark.parametrize("spec", ALL_SPECS, ids=lambda s: s.key)
def test_fallback_is_deterministic_and_not_shared(spec):
    schema = spec.schema(TRANSCRIPT)
    first = fallback(schema)
    first[0]["mutated"] = True
    assert "mutated" not in fallback(schema)[0]
    assert fallback(schema) == fallback(schema)


def test_section_fallback_uses_transcript_opening():
    [section] = fallback(SECTIONS.schema(TRANSCRIPT))
    assert section["title"] == "Introduction"
    assert section["summary"].startswith("Today we look at how binary search works")
    assert section["summary"].endswith("...")
    assert len(section["tips"]) == 3


def test_concept_fallback_timestamp_is_clamped_to_video_length():
    [concept] = fallback(KEY_CONCEPTS.schema(TRANSCRIPT))
    assert concept["timestamp"] == 21
