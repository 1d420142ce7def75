"""
Record - a single row of data as returned by a record source.
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from ..errors import DecodeError


@dataclass(frozen=True)
class Record:
    id: Any
    title: str = ""
    body: str = ""
    extra: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    @staticmethod
    def from_dict(d: Dict[str, Any]) -> "Record":
        """Build a Record from a decoded payload item, keeping unknown fields in ``extra``."""
        if not isinstance(d, dict):
            raise DecodeError(f"Expected a mapping for a record, got {type(d).__name__}")
        if d.get("id") is None:
            raise DecodeError(f"Record is missing an 'id': {d!r}")
        record_id = d["id"]
        try:
            hash(record_id)
        except TypeError:
            raise DecodeError(f"Record id must be a scalar, got {type(record_id).__name__}")

        title = d.get("title")
        body = d.get("body")
        extra = {k: v for k, v in d.items() if k not in ("id", "title", "body")}
        return Record(
            id=record_id,
            title="" if title is None else str(title),
            body="" if body is None else str(body),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        d = dict(self.extra)
        d.update({"id": self.id, "title": self.title, "body": self.body})
        return d
