from __future__ import annotations

import json
from typing import Any

from tubetutor.core.errors import MalformedModelOutput

_BRACKETS = {"array": ("[", "]"), "object": ("{", "}")}


def _strip_code_fence(text: str) -> str:
    # ```json ... ``` or ``` ... ```
    text = text.strip()
    if text.startswith("```"):
        first_nl = text.find("\n")
        text = text[first_nl + 1:] if first_nl != -1 else ""
        if text.rstrip().endswith("```"):
            text = text.rstrip()[:-3]
    return text.strip()


def extract_json(raw: str, expect: str = "array") -> Any:
    """
    Best-effort JSON extraction when the model wraps the payload in prose:
    slice from the first opening bracket to the last closing one and parse.
    """
    if expect not in _BRACKETS:
        raise ValueError(f"expect must be 'array' or 'object', got {expect!r}")

    text = _strip_code_fence(raw or "")
    if not text:
        raise MalformedModelOutput("Empty response from model")

    # Fast path
    try:
        data = json.loads(text)
    except ValueError:
        open_ch, close_ch = _BRACKETS[expect]
        start = text.find(open_ch)
        end = text.rfind(close_ch)
        if start < 0 or end <= start:
            raise MalformedModelOutput(f"No JSON {expect} in model output. First 200 chars: {text[:200]!r}")
        try:
            data = json.loads(text[start: end + 1])
        except ValueError as e:
            raise MalformedModelOutput(f"Model returned invalid JSON: {e}") from e

    return _coerce(data, expect)


def _coerce(data: Any, expect: str) -> Any:
    if expect == "array":
        if isinstance(data, list):
            return data
        # {"concepts": [...]} -> first list value
        if isinstance(data, dict):
            for v in data.values():
                if isinstance(v, list):
                    return v
        raise MalformedModelOutput(f"Expected a JSON array, got {type(data).__name__}")

    if isinstance(data, dict):
        return data
    if isinstance(data, list) and data and isinstance(data[0], dict):
        return data[0]
    raise MalformedModelOutput(f"Expected a JSON object, got {type(data).__name__}")
