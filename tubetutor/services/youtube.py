import re
from urllib.parse import parse_qs, urlparse

from tubetutor.core.errors import InvalidVideoId

_YT_ID_RE = re.compile(r"^[a-zA-Z0-9_-]{11}$")

# youtube.com/<prefix>/VIDEOID
_ID_PATH_PREFIXES = ("shorts", "embed", "live", "v")


def is_valid_video_id(video_id: str | None) -> bool:
    return bool(video_id) and bool(_YT_ID_RE.match(video_id))


def validate_video_id(video_id: str | None) -> str:
    vid = (video_id or "").strip()
    if not is_valid_video_id(vid):
        raise InvalidVideoId(f"Invalid YouTube video ID: {video_id!r}")
    return vid


def _candidate_from_url(host: str, parts: list[str], query: str) -> str:
    if host.endswith("youtu.be"):
        return parts[0] if parts else ""

    if not (host.endswith("youtube.com") or host.endswith("youtube-nocookie.com")):
        return ""

    if parts[:1] == ["watch"]:
        return parse_qs(query).get("v", [""])[0]
    if len(parts) >= 2 and parts[0] in _ID_PATH_PREFIXES:
        return parts[1]
    return ""


def extract_youtube_video_id(url: str) -> str | None:
    """
    Video id from a watch, youtu.be, shorts, embed or live URL
    (any youtube.com subdomain); None for anything else.
    """
    try:
        u = urlparse((url or "").strip())
    except ValueError:
        return None

    host = (u.netloc or "").lower().split(":")[0]
    parts = [p for p in (u.path or "").split("/") if p]
    vid = _candidate_from_url(host, parts, u.query or "").strip()
    return vid if is_valid_video_id(vid) else None


def resolve_video_id(video_id: str | None = None, url: str | None = None) -> str:
    """
    Request bodies may carry either a bare id or a full video URL.
    The id wins when both are given.
    """
    if video_id:
        return validate_video_id(video_id)
    if url:
        vid = extract_youtube_video_id(url)
        if vid:
            return vid
        raise InvalidVideoId(f"Could not find a video ID in URL: {url!r}")
    raise InvalidVideoId("videoId is required")
