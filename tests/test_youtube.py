import pytest

from tubetutor.core.errors import InvalidVideoId
from tubetutor.services.youtube import extract_youtube_video_id, resolve_video_id, validate_video_id


@pytest.mark.parametrize(
    "url",
    [
        "https://www.youtube.com/watch?v=dQw4w9WgXcQ",
        "https://youtu.be/dQw4w9WgXcQ",
        "https://www.youtube.com/shorts/dQw4w9WgXcQ",
        "https://www.youtube.com/embed/dQw4w9WgXcQ",
        "https://m.youtube.com/watch?v=dQw4w9WgXcQ&t=42s",
        "https://www.youtube.com/live/dQw4w9WgXcQ?si=abc",
        "https://www.youtube-nocookie.com/embed/dQw4w9WgXcQ",
    ],
)
def test_extract_video_id(url):
    assert extract_youtube_video_id(url) == "dQw4w9WgXcQ"


def test_extract_video_id_rejects_other_hosts():
    assert extract_youtube_video_id("https://vimeo.com/12345678901") is None


@pytest.mark.parametrize("bad", [None, "", "short123ab", "dQw4w9WgXcQ1", "dQw4w9WgX!Q"])
def test_validate_video_id_rejects(bad):
    with pytest.raises(InvalidVideoId) as exc_info:
        validate_video_id(bad)
    assert exc_info.value.status_code == 400
    assert exc_info.value.envelope()["example"] == "dQw4w9WgXcQ"


def test_resolve_prefers_id_then_url():
    assert resolve_video_id("dQw4w9WgXcQ", "https://youtu.be/aaaaaaaaaaa") == "dQw4w9WgXcQ"
    assert resolve_video_id(None, "https://youtu.be/aaaaaaaaaaa") == "aaaaaaaaaaa"
    with pytest.raises(InvalidVideoId):
        resolve_video_id(None, "https://example.com/video")
    with pytest.raises(InvalidVideoId):
        resolve_video_id()
