from __future__ import annotations

from typing import Any


class TubeTutorError(Exception):
    """
    Base for every error that reaches the HTTP layer.

    `error` is the short public message of the envelope; the exception text
    becomes `message`. `extra` is merged into the envelope as-is.
    """

    status_code: int = 500
    error: str = "Internal error"

    def __init__(self, message: str = "", *, extra: dict[str, Any] | None = None) -> None:
        super().__init__(message or self.error)
        self.extra: dict[str, Any] = dict(extra or {})

    def envelope(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": False, "error": self.error, "message": str(self)}
        body.update(self.extra)
        return body


class InvalidVideoId(TubeTutorError):
    status_code = 400
    error = "Invalid YouTube video ID format"

    def __init__(self, message: str = "") -> None:
        super().__init__(
            message or "Video ID must be 11 characters of [a-zA-Z0-9_-]",
            extra={"example": "dQw4w9WgXcQ"},
        )


class TranscriptUnavailable(TubeTutorError):
    status_code = 404
    error = "Transcript not available for this video"

    POSSIBLE_REASONS = [
        "Transcripts disabled by creator",
        "Video is private or age-restricted",
        "Live stream or music content",
    ]

    def __init__(self, message: str = "") -> None:
        super().__init__(message, extra={"possibleReasons": list(self.POSSIBLE_REASONS)})


class TranscriptTooShort(TubeTutorError):
    status_code = 404
    error = "Transcript unavailable or too short"


class TranscriptServiceUnavailable(TubeTutorError):
    status_code = 503
    error = "Network error - cannot access YouTube"


class GenerationFailed(TubeTutorError):
    error = "Content generation failed"

    def __init__(self, message: str = "", *, attempts: int = 0, timed_out: bool = False) -> None:
        super().__init__(message)
        self.attempts = attempts
        self.timed_out = timed_out
        if timed_out:
            self.status_code = 504
            self.error = "Content generation timed out"


class MalformedModelOutput(TubeTutorError):
    status_code = 500
    error = "Failed to parse model output"
