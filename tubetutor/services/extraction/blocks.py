from __future__ import annotations

import re
from typing import Pattern, Union

Label = Union[str, Pattern[str]]

QUESTION_LABEL = re.compile(r"Question\s+\d+\s*:", re.IGNORECASE)
PROBLEM_LABEL = re.compile(r"Problem\s+\d+\s*:", re.IGNORECASE)
TRIPLE_QUOTE = '"""'
TIMESTAMP_LINE = re.compile(r"^[ \t>*#-]*\[?\d{1,2}:\d{2}:\d{2}\]?[ \t*]*$", re.MULTILINE)


def _compile(label: Label) -> Pattern[str]:
    if isinstance(label, str):
        return re.compile(re.escape(label))
    return label


def _usable(chunk: str) -> bool:
    s = chunk.strip()
    # "Transcript:" chunks are the prompt echoed back by the model
    return bool(s) and not s.startswith("Transcript:")


def split_blocks(
    raw: str,
    label: Label,
    *,
    keep_leading: bool | None = None,
    keep_label: bool = False,
) -> list[str]:
    """
    Split model output into item blocks on a recurring label.

    - Label text is only a boundary; it never ends up in a block unless
      keep_label=True (used when the label itself carries data, e.g. a
      timestamp line).
    - Text before the first label is prose preamble and is dropped, except
      for literal separators (keep_leading defaults to True for str labels).
    - No label in the text -> [] (nothing found, not an error).
    """
    text = raw or ""
    pattern = _compile(label)
    if keep_leading is None:
        keep_leading = isinstance(label, str)

    matches = list(pattern.finditer(text))
    if not matches:
        return []

    chunks: list[str] = []
    if keep_leading:
        chunks.append(text[: matches[0].start()])

    for i, m in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(text)
        start = m.start() if keep_label else m.end()
        chunks.append(text[start:end])

    return [c.strip() for c in chunks if _usable(c)]


def split_on_timestamps(raw: str) -> list[str]:
    """Blocks that each start with their own [HH:MM:SS] line."""
    return split_blocks(raw, TIMESTAMP_LINE, keep_leading=False, keep_label=True)


def single_block(raw: str) -> list[str]:
    """Whole output as one block, with any triple-quote fences removed."""
    text = (raw or "").replace(TRIPLE_QUOTE, "\n").strip()
    return [text] if text else []
