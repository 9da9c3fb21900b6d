from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Optional

from tubetutor.services.extraction.blocks import Label, split_blocks
from tubetutor.services.extraction.fields import FieldSpec
from tubetutor.services.extraction.normalize import Schema

if TYPE_CHECKING:
    from tubetutor.services.transcript import Transcript

TEXT = "text"
JSON = "json"
RAW = "raw"


def _plain_text(transcript: "Transcript") -> str:
    return transcript.text


@dataclass(frozen=True)
class ArtifactSpec:
    """
    Everything the pipeline needs to produce one artifact type.

    mode:
      - "text": split on `label` (or `split`), extract `fields` per block
      - "json": parse a JSON array/object (`json_expect`), map with `json_records`
      - "raw": the whole response is the single value of `raw_field`
    """

    key: str
    template: str
    item_count: int
    schema: Callable[["Transcript"], Schema]
    mode: str = TEXT
    label: Optional[Label] = None
    fields: tuple[FieldSpec, ...] = ()
    split: Optional[Callable[[str], list[str]]] = None
    json_expect: str = "array"
    json_records: Optional[Callable[[Any], list[dict[str, Any]]]] = None
    raw_field: str = "text"
    recover_malformed: bool = True
    prompt_source: Callable[["Transcript"], str] = field(default=_plain_text)

    # response shape: list artifacts under `collection` with a `count_key`,
    # single-record artifacts are spread into the envelope
    collection: Optional[str] = None
    count_key: Optional[str] = None
    attempts: Optional[int] = None

    def blocks(self, raw: str) -> list[str]:
        if self.split is not None:
            return self.split(raw)
        if self.label is None:
            raise ValueError(f"Artifact {self.key!r} has neither label nor split")
        return split_blocks(raw, self.label)

    def payload(self, items: list[dict[str, Any]]) -> dict[str, Any]:
        if self.collection is None:
            return dict(items[0]) if items else {}
        body: dict[str, Any] = {self.collection: items}
        if self.count_key:
            body[self.count_key] = len(items)
        return body
