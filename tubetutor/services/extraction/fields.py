"""
Line-prefix field extraction.

A block is read top to bottom once. Each line is tested against the field
specs in declaration order and the first match claims it. Single fields keep
the last match, multi fields collect every match in order.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Optional, Pattern, Union

Matcher = Union[str, Pattern[str]]

SINGLE = "single"
MULTI = "multi"

ANY_LINE = re.compile(r"^")
# "-tip" and "- tip" are both bullets; "---" and "**bold**" are not
BULLET = re.compile(r"^[-*•](?![-*•])\s*(?P<value>.+)$")
OPTION_LETTER = re.compile(r"^\(?[A-D][\).:]\s*")
ANSWER_LABEL = re.compile(r"^(?:Correct\s+)?Answer\s*:", re.IGNORECASE)
CODE_FENCE = re.compile(r"^```")


@dataclass(frozen=True)
class FieldSpec:
    """
    kind:
      - "text": value is the line minus its prefix (or the `value` regex group)
      - "letter": first letter after the prefix, uppercased, kept only if in `allowed`
      - "marker": a bare section label such as "Options:"; produces no output
    continuation: single text field that absorbs following unlabeled lines
    after: only active once the named marker has been seen in the block
    keep_prefix: store the whole line instead of the remainder
    raw: store the original line (indentation kept) instead of the cleaned one
    """

    name: str
    matcher: Matcher
    cardinality: str = SINGLE
    kind: str = "text"
    continuation: bool = False
    allowed: tuple[str, ...] = ("A", "B", "C", "D")
    after: Optional[str] = None
    keep_prefix: bool = False
    raw: bool = False

    def match(self, line: str) -> Optional[str]:
        """Return the captured value for `line`, or None if it doesn't match."""
        if isinstance(self.matcher, str):
            if not line.lower().startswith(self.matcher.lower()):
                return None
            rest = line[len(self.matcher):]
        else:
            m = self.matcher.match(line)
            if not m:
                return None
            if "value" in m.re.groupindex:
                return (m.group("value") or "").strip()
            rest = line[m.end():]

        if self.keep_prefix:
            return line.strip()
        return rest.strip()


def _clean_line(line: str) -> str:
    # Models like to bold their labels: "**Question:** ..."
    return line.replace("**", "").strip()


def _first_letter(value: str) -> str:
    for ch in value:
        if ch.isalpha():
            return ch.upper()
    return ""


def empty_record(field_specs: list[FieldSpec]) -> dict[str, Any]:
    record: dict[str, Any] = {}
    for spec in field_specs:
        if spec.kind == "marker":
            continue
        record[spec.name] = [] if spec.cardinality == MULTI else None
    return record


def extract_fields(block: str, field_specs: list[FieldSpec]) -> dict[str, Any]:
    record = empty_record(field_specs)
    seen_markers: set[str] = set()
    continuing: Optional[str] = None

    for original in (block or "").splitlines():
        line = _clean_line(original)
        if not line:
            continue

        matched: Optional[FieldSpec] = None
        value: Optional[str] = None
        for spec in field_specs:
            if spec.after and spec.after not in seen_markers:
                continue
            value = spec.match(line)
            if value is not None:
                matched = spec
                break

        if matched is None:
            if continuing is not None:
                current = record[continuing] or ""
                record[continuing] = f"{current} {line}" if current else line
            continue

        continuing = None

        if matched.kind == "marker":
            seen_markers.add(matched.name)
            continue

        if matched.kind == "letter":
            letter = _first_letter(value or "")
            if letter in matched.allowed:
                record[matched.name] = letter
            continue

        if matched.raw:
            value = original.rstrip()

        if matched.cardinality == MULTI:
            record[matched.name].append(value)
        else:
            record[matched.name] = value
            if matched.continuation:
                continuing = matched.name

    return record
