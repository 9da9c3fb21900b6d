from __future__ import annotations

import copy
from typing import Any

from tubetutor.services.extraction.normalize import Schema


def fallback(schema: Schema) -> list[dict[str, Any]]:
    """
    Hand-authored default set for an artifact type, used whenever
    normalization accepted nothing. Records are schema-valid as written.
    """
    records = copy.deepcopy(schema.fallback_records())
    if not records:
        raise ValueError(f"Schema {schema.name!r} defines no fallback records")
    return records[: schema.max_items]
