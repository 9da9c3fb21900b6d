from tubetutor.services.artifacts.quiz import QUIZ_EASY
from tubetutor.services.extraction.prompt import MAX_CHARS, TRUNCATION_MARKER, build_prompt, truncate_transcript


def test_short_transcript_is_verbatim():
    text = "a" * 500
    assert truncate_transcript(text) == text


def test_boundary_length_is_not_truncated():
    text = "x" * MAX_CHARS
    assert truncate_transcript(text) == text


def test_one_over_boundary_is_truncated_with_marker():
    text = "x" * (MAX_CHARS + 1)
    out = truncate_transcript(text)
    assert out == "x" * MAX_CHARS + TRUNCATION_MARKER
    assert len(out) == MAX_CHARS + len(TRUNCATION_MARKER)


def test_truncation_is_idempotent_on_the_kept_prefix():
    text = "word " * 10000
    once = truncate_transcript(text, 1000)
    twice = truncate_transcript(once[:1000], 1000)
    assert once[:1000] == twice


def test_build_prompt_interpolates_transcript_and_count():
    prompt = build_prompt("the transcript body", QUIZ_EASY)
    assert "Transcript: the transcript body" in prompt
    assert prompt.startswith("Generate 10 beginner programming quiz questions")
    assert "{transcript}" not in prompt


def test_build_prompt_respects_max_chars():
    prompt = build_prompt("y" * 50, QUIZ_EASY, max_chars=10)
    assert "y" * 10 + TRUNCATION_MARKER in prompt
    assert "y" * 11 not in prompt
