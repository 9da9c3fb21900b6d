import pytest

from tubetutor.core.errors import MalformedModelOutput
from tubetutor.services.artifacts.concepts import KEY_CONCEPTS, timestamped_text
from tubetutor.services.extraction.json_mode import extract_json
from tubetutor.services.extraction.normalize import normalize
from tubetutor.services.transcript import Transcript


def test_array_is_sliced_out_of_prose():
    raw = 'Here are the concepts: [ {"timestamp": 12.7, "name": "Intro"} ] Thanks!'
    data = extract_json(raw, "array")
    assert data == [{"timestamp": 12.7, "name": "Intro"}]


def test_prose_wrapped_concepts_normalize_with_floored_timestamp():
    raw = 'Here are the concepts: [ {"timestamp": 12.7, "name": "Intro"} ] Thanks!'
    schema = KEY_CONCEPTS.schema(Transcript(video_id="dQw4w9WgXcQ", text="x" * 200))
    [rec] = normalize(KEY_CONCEPTS.json_records(extract_json(raw, "array")), schema)
    assert rec["timestamp"] == 12
    assert rec["name"] == "Intro"
    assert rec["topic"] == "General"


def test_code_fenced_json():
    raw = '```json\n{"derivations": []}\n```'
    assert extract_json(raw, "object") == {"derivations": []}


def test_wrapped_array_is_unwrapped():
    assert extract_json('{"concepts": [{"name": "A"}]}', "array") == [{"name": "A"}]


def test_object_from_single_element_list():
    assert extract_json('[{"derivations": []}]', "object") == {"derivations": []}


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "no json here at all",
        "[ {\"name\": \"broken\", } oops",
        "[1, 2",
    ],
)
def test_malformed_output_raises(raw):
    with pytest.raises(MalformedModelOutput):
        extract_json(raw, "array")


def test_unknown_expectation_is_a_programming_error():
    with pytest.raises(ValueError):
        extract_json("[]", "tuple")


def test_concept_timestamps_clamp_to_video_length():
    t = Transcript(
        video_id="dQw4w9WgXcQ",
        text="x" * 200,
        segments=[{"text": "x", "start": 0.0, "duration": 90.0}],
    )
    [rec] = normalize([{"name": "Late", "timestamp": 500}], KEY_CONCEPTS.schema(t))
    assert rec["timestamp"] == 90


def test_timestamped_prompt_source():
    t = Transcript(
        video_id="dQw4w9WgXcQ",
        text="hello world",
        segments=[{"text": "hello", "start": 0.4, "duration": 1.0}, {"text": "world", "start": 42.9, "duration": 1.0}],
    )
    assert timestamped_text(t) == "[0s] hello\n[42s] world"
