"""
IbisRecordSource - fetch records from a table through any Ibis backend.

The table holds one row per record plus a ``parent_id`` column; root records
have a null ``parent_id``. DuckDB in memory is the default backend.
"""
import asyncio
import logging
from typing import Any, List, Optional, Sequence

import ibis
import pyarrow as pa

from ..errors import DecodeError, NetworkError
from ..types.record import Record
from ..util.arrow_utils import arrow_to_records, ensure_arrow_table, records_to_arrow
from .base import RecordSource

logger = logging.getLogger(__name__)

REQUIRED_COLUMNS = ("id", "title", "body", "parent_id")


def connect(connection_uri: str = ":memory:"):
    """Open an Ibis connection for a ``duckdb://``/``sqlite://`` URI or a DuckDB path."""
    if connection_uri.startswith("sqlite://"):
        return ibis.sqlite.connect(connection_uri.replace("sqlite://", ""))
    if connection_uri.startswith("duckdb://"):
        return ibis.duckdb.connect(connection_uri.replace("duckdb://", ""))
    return ibis.duckdb.connect(connection_uri)


class IbisRecordSource(RecordSource):
    def __init__(
        self,
        connection: Optional[Any] = None,
        connection_uri: str = ":memory:",
        table_name: str = "records",
    ):
        self.con = connection if connection is not None else connect(connection_uri)
        self.table_name = table_name

    def load_arrow(self, table: Any):
        """Replace the backing table with ``table`` (Arrow table, list of dicts or dict of columns)."""
        table = ensure_arrow_table(table)
        missing = [c for c in REQUIRED_COLUMNS if c not in table.column_names]
        if missing:
            raise ValueError(f"Arrow table is missing columns: {missing}")
        self.con.create_table(self.table_name, table, overwrite=True)

    def load_records(self, records: Sequence[Record], parent_ids: Optional[Sequence[Any]] = None):
        """Replace the backing table with ``records``; ``parent_ids`` defaults to all roots."""
        if parent_ids is None:
            parent_ids = [None] * len(records)
        table = records_to_arrow(records, parent_ids=parent_ids)

        # An all-null parent column has no usable type; give it the id type
        idx = table.schema.get_field_index("parent_id")
        if pa.types.is_null(table.schema.field(idx).type):
            id_type = table.schema.field("id").type
            if pa.types.is_null(id_type):
                id_type = pa.int64()
            table = table.set_column(idx, "parent_id", pa.nulls(table.num_rows, type=id_type))

        self.load_arrow(table)

    def _query(self, scope_id: Optional[Any]) -> pa.Table:
        t = self.con.table(self.table_name)
        missing = [c for c in REQUIRED_COLUMNS if c not in t.columns]
        if missing:
            raise DecodeError(f"Table {self.table_name!r} is missing columns: {missing}", scope_id=scope_id)

        if scope_id is None:
            expr = t.filter(t.parent_id.isnull())
        else:
            expr = t.filter(t.parent_id == scope_id)
        return expr.order_by("id").to_pyarrow()

    async def fetch(self, scope_id: Optional[Any] = None) -> List[Record]:
        loop = asyncio.get_running_loop()
        try:
            # Offload Ibis execution to the thread pool to keep the event loop free
            result = await loop.run_in_executor(None, self._query, scope_id)
        except DecodeError:
            raise
        except Exception as e:
            logger.debug("Ibis query for scope %r failed", scope_id, exc_info=True)
            raise NetworkError(f"Error querying {self.table_name!r}: {e}", scope_id=scope_id)

        return arrow_to_records(result.drop_columns(["parent_id"]))
