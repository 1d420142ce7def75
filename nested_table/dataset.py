"""
Dataset - the session's accumulated records, root and nested.

Storage is append-only: every successful fetch adds its records at the end,
tagged with the id of the row whose expansion triggered it. Nothing already
stored is removed, reordered or deduplicated.
"""
from typing import Any, Iterable, List, NamedTuple, Optional, Tuple

import pyarrow as pa

from .row_key import id_identity, same_id
from .types.record import Record
from .util.arrow_utils import records_to_arrow


class DatasetEntry(NamedTuple):
    record: Record
    parent_id: Any = None


class Dataset:
    def __init__(self, records: Optional[Iterable[Record]] = None):
        self._entries: List[DatasetEntry] = []
        if records:
            self.append(records)

    def append(self, records: Iterable[Record], parent_id: Any = None) -> int:
        """
        Append records fetched for ``parent_id`` (None for the root set).

        Returns:
            The number of records appended.
        """
        new_entries = [DatasetEntry(r, parent_id) for r in records]
        self._entries.extend(new_entries)
        return len(new_entries)

    def records(self) -> List[Record]:
        return [e.record for e in self._entries]

    def roots(self) -> List[Record]:
        return self.children_of(None)

    def children_of(self, parent_id: Any) -> List[Record]:
        """
        Records merged from fetches scoped to ``parent_id``.

        Repeated fetches for the same parent append the same records again;
        the view keeps only the first occurrence of each id.
        """
        seen = set()
        children = []
        for entry in self._entries:
            identity = id_identity(entry.record.id)
            if not same_id(entry.parent_id, parent_id) or identity in seen:
                continue
            seen.add(identity)
            children.append(entry.record)
        return children

    def snapshot(self) -> Tuple[DatasetEntry, ...]:
        return tuple(self._entries)

    def to_arrow(self) -> pa.Table:
        """All entries as an Arrow table with a ``parent_id`` column."""
        return records_to_arrow(
            [e.record for e in self._entries],
            parent_ids=[e.parent_id for e in self._entries],
        )

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self.records())
