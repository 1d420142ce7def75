"""
FetchCoordinator - lazy child loading for expanded rows.

Every collapsed -> expanded transition gets exactly one fetch, scoped to the
row's record id. Fetches run as tasks on the event loop; their results are
merged through a callback owned by the controller. Failures stay local to the
row that triggered them.
"""
import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Set

from .cache.memory_cache import MemoryCache
from .errors import ExpansionFetchError, SourceError
from .row_key import RowKey, make_key
from .sources.base import RecordSource
from .types.record import Record

logger = logging.getLogger(__name__)

MergeCallback = Callable[[List[Record], Any], Any]


class FetchCoordinator:
    def __init__(
        self,
        source: RecordSource,
        merge: MergeCallback,
        child_cache: Optional[MemoryCache] = None,
    ):
        self.source = source
        self.merge = merge
        self.child_cache = child_cache
        self.failures: Dict[RowKey, ExpansionFetchError] = {}
        self.fetch_count = 0
        self._inflight: Set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return sum(1 for t in self._inflight if not t.done())

    def on_expand(self, record_id: Any, level: int) -> Optional[asyncio.Task]:
        """
        Start the child fetch for a row that just became expanded.

        Must be called from within a running event loop. Returns the fetch
        task, or None when no fetch was needed.
        """
        key = make_key(record_id, level)

        if self.child_cache is not None and self.child_cache.contains(key.to_token()):
            logger.debug("Children of %r at level %d already fetched, skipping", record_id, level)
            return None

        self.fetch_count += 1
        task = asyncio.get_running_loop().create_task(self._fetch_children(key))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def _fetch_children(self, key: RowKey):
        try:
            records = await self.source.fetch(key.id)
        except Exception as e:
            error = ExpansionFetchError(key, e)
            self.failures[key] = error
            logger.warning("%s", error, exc_info=not isinstance(e, SourceError))
            return

        self.failures.pop(key, None)
        self.merge(records, key.id)
        if self.child_cache is not None:
            self.child_cache.set(key.to_token(), len(records))
        logger.debug("Merged %d children for %r at level %d", len(records), key.id, key.level)

    async def wait_idle(self):
        """Wait until every fetch started so far has finished."""
        while True:
            pending = [t for t in self._inflight if not t.done()]
            if not pending:
                return
            await asyncio.gather(*pending)
