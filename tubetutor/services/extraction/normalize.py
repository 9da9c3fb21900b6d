"""
Schema normalization for extracted records.

Every rule is applied on its own and never raises: a bad field is replaced by
its default instead of discarding the record. Whether a record is kept at all
is decided by the schema's `accept` predicate on the raw extracted record.
"""
from __future__ import annotations

import math
import re
import textwrap
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Pattern

_NUMBER_RE = re.compile(r"-?\d+(?:\.\d+)?")
_CLOCK_RE = re.compile(r"^\s*(?:(\d+):)?(\d{1,2}):(\d{2}(?:\.\d+)?)\s*$")


def _parse_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        clock = _CLOCK_RE.match(value)
        if clock:
            h, m, s = clock.groups()
            return int(h or 0) * 3600 + int(m) * 60 + float(s)
        m = _NUMBER_RE.search(value)
        if m:
            return float(m.group(0))
    return None


def _to_number(value: Any) -> Optional[float]:
    # huge ints overflow float(); long digit strings parse to inf
    try:
        n = _parse_number(value)
    except OverflowError:
        return None
    return n if n is not None and math.isfinite(n) else None


def clamp(value: float, lo: Optional[float], hi: Optional[float]) -> float:
    if lo is not None and value < lo:
        return lo
    if hi is not None and value > hi:
        return hi
    return value


@dataclass(frozen=True)
class TextRule:
    default: str = ""
    join: Optional[str] = None
    dedent: bool = False

    def apply(self, value: Any) -> str:
        if isinstance(value, list):
            value = (self.join if self.join is not None else " ").join(
                str(v) for v in value if v is not None
            )
        text = "" if value is None else str(value)
        if self.dedent:
            text = textwrap.dedent(text)
        text = text.strip()
        return text or self.default


@dataclass(frozen=True)
class NumberRule:
    min: Optional[float] = None
    max: Optional[float] = None
    default: float = 0
    integer: bool = True
    as_string: bool = False

    def apply(self, value: Any):
        n = _to_number(value)
        if n is None:
            n = float(self.default)
        if self.integer:
            n = math.floor(n)
        n = clamp(n, self.min, self.max)
        if self.integer:
            n = int(n)
        return str(n) if self.as_string else n


@dataclass(frozen=True)
class EnumRule:
    allowed: tuple[str, ...]
    default: Optional[str] = None

    def apply(self, value: Any) -> str:
        v = str(value).strip().upper() if value is not None else ""
        if v in self.allowed:
            return v
        return self.default if self.default is not None else self.allowed[0]


@dataclass(frozen=True)
class PatternRule:
    pattern: Pattern[str]
    default: str

    def apply(self, value: Any) -> str:
        v = str(value).strip() if value is not None else ""
        return v if self.pattern.fullmatch(v) else self.default


@dataclass(frozen=True)
class ListRule:
    """
    Strings are trimmed and empty entries dropped before counting. Shorter
    than min_count -> padded with pad(n) for 1-based position n; longer than
    max_count -> truncated in order.
    """

    min_count: int = 0
    max_count: Optional[int] = None
    pad: Optional[Callable[[int], Any]] = None
    item: Optional[Callable[[Any], Any]] = None

    def apply(self, value: Any) -> list:
        if value is None:
            items: list = []
        elif isinstance(value, (list, tuple)):
            items = list(value)
        else:
            items = [value]

        cleaned: list = []
        for it in items:
            if self.item is not None:
                it = self.item(it)
            elif isinstance(it, str):
                it = it.strip()
            elif it is not None and not isinstance(it, (dict, list)):
                it = str(it).strip()
            if it is None or it == "":
                continue
            cleaned.append(it)

        if self.max_count is not None:
            cleaned = cleaned[: self.max_count]
        if self.pad is not None:
            while len(cleaned) < self.min_count:
                cleaned.append(self.pad(len(cleaned) + 1))
        return cleaned


@dataclass(frozen=True)
class RecordListRule:
    """A nested list of records, normalized with its own schema."""

    schema: "Schema"

    def apply(self, value: Any) -> list[dict[str, Any]]:
        records = value if isinstance(value, list) else []
        return normalize(records, self.schema)


@dataclass
class Schema:
    name: str
    fields: dict[str, Any]
    max_items: int
    accept: Callable[[dict[str, Any]], bool] = lambda raw: True
    finalize: Optional[Callable[[dict[str, Any], int], dict[str, Any]]] = None
    fallback_records: Callable[[], list[dict[str, Any]]] = field(default=lambda: [])


def normalize(records: list[dict[str, Any]], schema: Schema) -> list[dict[str, Any]]:
    out: list[dict[str, Any]] = []
    for raw in records or []:
        if len(out) >= schema.max_items:
            break
        if not isinstance(raw, dict) or not schema.accept(raw):
            continue
        out.append({name: rule.apply(raw.get(name)) for name, rule in schema.fields.items()})

    if schema.finalize is not None:
        out = [schema.finalize(rec, i) for i, rec in enumerate(out)]
    return out


# ----------------------------
# Acceptance helpers
# ----------------------------

def has_text(raw: dict[str, Any], key: str) -> bool:
    v = raw.get(key)
    return isinstance(v, (str, int, float)) and not isinstance(v, bool) and bool(str(v).strip())


def count_items(raw: dict[str, Any], key: str) -> int:
    v = raw.get(key)
    if not isinstance(v, list):
        return 0
    return sum(1 for it in v if it is not None and str(it).strip())
