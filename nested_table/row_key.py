"""
row_key.py - Composite identity of a row inside the nested table

A row is identified by the record id *and* the level it is rendered at, so the
same record nested under different ancestors keeps independent expansion state.
Ids of different types never match, even when Python compares them equal
(``1``, ``1.0`` and ``True`` are three different records).
"""
import json
from typing import Any, Hashable, NamedTuple, Tuple


class RowKey(NamedTuple):
    """(record id, nesting level) pair, tagged with the id's type"""
    id: Any
    level: int
    id_type: str = ""

    def to_token(self) -> str:
        """Encode as a string that cannot collide for distinct keys"""
        return json.dumps([self.id, self.level], separators=(",", ":"))

    @classmethod
    def from_token(cls, token: str) -> "RowKey":
        try:
            record_id, level = json.loads(token)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid row key token: {token!r}") from e
        return make_key(record_id, level)


def id_identity(record_id: Any) -> Tuple[str, Hashable]:
    """Type-aware identity of a record id, for matching ids across fetches."""
    return type(record_id).__name__, record_id


def same_id(a: Any, b: Any) -> bool:
    return type(a) is type(b) and a == b


def make_key(record_id: Any, level: int) -> RowKey:
    """Build the key for a record rendered at ``level``."""
    if isinstance(level, bool) or not isinstance(level, int):
        raise ValueError(f"level must be an int, got {type(level).__name__}")
    if level < 0:
        raise ValueError(f"level must be non-negative, got {level}")
    # Ids live in sets, so they must be hashable
    hash(record_id)
    return RowKey(record_id, level, type(record_id).__name__)
