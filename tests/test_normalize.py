import re

from tubetutor.services.artifacts.concepts import concepts_schema
from tubetutor.services.artifacts.quiz import QUIZ_EASY, QUIZ_HARD
from tubetutor.services.artifacts.summary import course_summary_schema
from tubetutor.services.extraction.json_mode import extract_json
from tubetutor.services.extraction.normalize import (
    EnumRule,
    ListRule,
    NumberRule,
    PatternRule,
    Schema,
    TextRule,
    normalize,
)
from tubetutor.services.transcript import Transcript

TRANSCRIPT = Transcript(video_id="dQw4w9WgXcQ", text="one two three four five six seven eight")


def test_number_rule_clamps_to_nearest_bound():
    rule = NumberRule(min=150, max=300, default=200)
    assert rule.apply(999) == 300
    assert rule.apply(3) == 150
    assert rule.apply(220) == 220


def test_number_rule_defaults_on_garbage():
    rule = NumberRule(min=150, max=300, default=200)
    assert rule.apply("lots") == 200
    assert rule.apply(None) == 200


def test_number_rule_floors_and_parses_text():
    rule = NumberRule(min=0)
    assert rule.apply(12.7) == 12
    assert rule.apply("about 42 seconds") == 42
    assert rule.apply("1:05") == 65


def test_number_rule_defaults_on_values_too_large_for_float():
    rule = NumberRule(min=0, max=600, default=5)
    assert rule.apply(10**400) == 5
    assert rule.apply("9" * 400) == 5
    assert rule.apply(float("inf")) == 5
    assert rule.apply(f"{'9' * 400}:00:00") == 5


def test_oversized_concept_timestamp_falls_back_to_default():
    transcript = Transcript(
        video_id="dQw4w9WgXcQ",
        text="intro",
        segments=[{"text": "intro", "start": 0.0, "duration": 120.0}],
    )
    digits = "9" * 400
    for raw in (
        f'[{{"name": "Intro", "timestamp": {digits}}}]',
        f'[{{"name": "Intro", "timestamp": "{digits}"}}]',
    ):
        [rec] = normalize(extract_json(raw), concepts_schema(transcript))
        assert rec["name"] == "Intro"
        assert rec["timestamp"] == 0


def test_number_rule_as_string():
    assert NumberRule(min=150, max=300, default=200, as_string=True).apply("250 Total Points") == "250"


def test_list_rule_pads_with_position():
    rule = ListRule(min_count=4, max_count=4, pad=lambda n: f"Option {n}")
    assert rule.apply(["a", "b"]) == ["a", "b", "Option 3", "Option 4"]


def test_list_rule_truncates_in_order_and_drops_blanks():
    rule = ListRule(min_count=4, max_count=4, pad=lambda n: f"Option {n}")
    assert rule.apply(["a", " ", "b", "c", "d", "e"]) == ["a", "b", "c", "d"]


def test_enum_and_pattern_rules():
    assert EnumRule(("A", "B", "C", "D"), default="A").apply("x") == "A"
    assert EnumRule(("A", "B", "C", "D"), default="A").apply("c") == "C"
    hhmmss = PatternRule(re.compile(r"\d+:\d{2}:\d{2}"), "00:00:00")
    assert hhmmss.apply("1:02:03") == "1:02:03"
    assert hhmmss.apply("12 minutes") == "00:00:00"


def test_text_rule_default_and_join():
    assert TextRule("fallback").apply("   ") == "fallback"
    assert TextRule("", join="\n").apply(["a", "b"]) == "a\nb"


def test_quiz_record_with_two_options_is_padded():
    schema = QUIZ_EASY.schema(TRANSCRIPT)
    raw = {"question": "What is a loop?", "options": ["for", "while"], "correctAnswer": None, "hint": None}
    [rec] = normalize([raw], schema)
    assert rec["options"] == ["for", "while", "Option 3", "Option 4"]
    assert rec["correctAnswer"] == "A"
    assert rec["hint"] == "Review basic programming concepts"


def test_quiz_record_without_enough_options_is_dropped():
    schema = QUIZ_EASY.schema(TRANSCRIPT)
    raw = {"question": "What is a loop?", "options": ["for"], "correctAnswer": "A", "hint": None}
    assert normalize([raw], schema) == []


def test_hard_quiz_gets_positional_ids():
    schema = QUIZ_HARD.schema(TRANSCRIPT)
    raws = [
        {"question": f"Q{i}", "options": ["a", "b", "c", "d"], "correctAnswer": "B", "analysis": "x"}
        for i in range(3)
    ]
    assert [r["id"] for r in normalize(raws, schema)] == [1, 2, 3]


def test_max_items_truncates():
    schema = Schema(name="t", fields={"name": TextRule("")}, max_items=2)
    assert len(normalize([{"name": str(i)} for i in range(5)], schema)) == 2


def test_course_summary_defaults():
    schema = course_summary_schema(TRANSCRIPT)
    raw = {"title": None, "duration": "12 minutes", "topics": None, "points": None, "keyTopics": ["Loops", "Arrays"]}
    [rec] = normalize([raw], schema)
    assert rec == {
        "title": "one two three four five...",
        "duration": "00:00:00",
        "topics": "2",
        "points": "200",
        "keyTopics": ["Loops", "Arrays"],
    }
