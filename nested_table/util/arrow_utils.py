"""
Utilities for moving records in and out of Arrow tables.
"""
from typing import Any, Dict, List, Optional, Sequence

import pyarrow as pa

from ..errors import DecodeError
from ..types.record import Record

RECORD_COLUMNS = ("id", "title", "body")


def records_to_arrow(records: Sequence[Record], parent_ids: Optional[Sequence[Any]] = None) -> pa.Table:
    """
    Convert records to a PyArrow Table.

    Args:
        records: Records to convert; ``extra`` fields become extra columns.
        parent_ids: Optional parent id per record, added as a ``parent_id`` column.

    Returns:
        pa.Table
    """
    if parent_ids is not None and len(parent_ids) != len(records):
        raise ValueError("parent_ids must have one entry per record")

    rows: List[Dict[str, Any]] = []
    for idx, record in enumerate(records):
        row = record.to_dict()
        if parent_ids is not None:
            row["parent_id"] = parent_ids[idx]
        rows.append(row)

    if not rows:
        columns = list(RECORD_COLUMNS) + (["parent_id"] if parent_ids is not None else [])
        return pa.Table.from_pydict({c: [] for c in columns})

    try:
        return pa.Table.from_pylist(rows)
    except (pa.ArrowInvalid, pa.ArrowTypeError) as e:
        raise ValueError(f"Could not convert records to Arrow: {e}")


def arrow_to_records(table: pa.Table) -> List[Record]:
    """Convert an Arrow table with at least an ``id`` column back into records."""
    if "id" not in table.column_names:
        raise DecodeError(f"Arrow table has no 'id' column (columns: {table.column_names})")
    return [Record.from_dict(row) for row in table.to_pylist()]


def ensure_arrow_table(data: Any) -> pa.Table:
    """
    Ensure the input data is a PyArrow Table.

    Args:
        data: pa.Table, list of dicts or dict of columns

    Returns:
        pa.Table
    """
    if isinstance(data, pa.Table):
        return data

    if isinstance(data, list):
        if not data:
            return pa.Table.from_pydict({})
        return pa.Table.from_pylist(data)

    if isinstance(data, dict):
        return pa.Table.from_pydict(data)

    raise ValueError(f"Could not convert {type(data)} to PyArrow Table")
