"""
NestedTableController - owns the session state of one nested table.

Coordinates: initial load -> Dataset / ExpansionRegistry -> FetchCoordinator -> TreeRenderer
"""
import logging
from enum import Enum
from typing import Any, Optional

from .cache.memory_cache import MemoryCache
from .config import NestedTableConfig, DEFAULT_MAX_DEPTH
from .dataset import Dataset
from .errors import ControllerStateError, InitialLoadError
from .expansion import ExpansionRegistry, ToggleResult
from .fetch_coordinator import FetchCoordinator
from .renderer import TreeRenderer
from .row_key import make_key
from .sources.base import RecordSource
from .sources.http_source import HttpRecordSource
from .sources.ibis_source import IbisRecordSource
from .types.rendered import TableView

logger = logging.getLogger(__name__)

INITIAL_LOAD_ERROR_MESSAGE = "Failed to fetch data"


class LoadStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


class NestedTableController:
    """
    Root of the nested table. The Dataset and the expansion state live here
    and only change through ``load``, ``toggle`` and fetch merges.
    """

    def __init__(
        self,
        source: RecordSource,
        max_depth: int = DEFAULT_MAX_DEPTH,
        child_cache: Optional[MemoryCache] = None,
    ):
        if max_depth <= 0:
            raise ValueError("max_depth must be positive")
        self.source = source
        self.max_depth = max_depth
        self.child_cache = child_cache
        self._mount()

    @classmethod
    def from_config(cls, config: NestedTableConfig) -> "NestedTableController":
        """Build a controller with the source and cache described by ``config``."""
        config.validate()
        if config.source_type == "ibis":
            source: RecordSource = IbisRecordSource(
                connection_uri=config.backend_uri, table_name=config.table_name
            )
        else:
            source = HttpRecordSource(
                url=config.api_url, scope_param=config.scope_param, timeout=config.request_timeout
            )
        child_cache = MemoryCache(ttl=config.child_cache_ttl) if config.enable_child_cache else None
        return cls(source, max_depth=config.max_depth, child_cache=child_cache)

    def _mount(self, fresh_cache: bool = False):
        self.status = LoadStatus.LOADING
        self.error_message: Optional[str] = None
        self.last_error: Optional[InitialLoadError] = None
        self._dataset = Dataset()
        self.registry = ExpansionRegistry()
        if fresh_cache and self.child_cache is not None:
            # Fetches still running for the old mount write to the old cache only
            self.child_cache = MemoryCache(ttl=self.child_cache.default_ttl)
        self.coordinator = FetchCoordinator(
            self.source, self._dataset.append, child_cache=self.child_cache
        )
        self._load_started = False

    @property
    def dataset(self) -> Dataset:
        return self._dataset

    async def load(self):
        """Fetch the root record set. Runs once per mount."""
        if self._load_started:
            return
        self._load_started = True
        self.status = LoadStatus.LOADING

        try:
            records = await self.source.fetch()
        except Exception as e:
            self.last_error = InitialLoadError(INITIAL_LOAD_ERROR_MESSAGE, cause=e)
            self.error_message = INITIAL_LOAD_ERROR_MESSAGE
            self.status = LoadStatus.ERROR
            logger.error("Error fetching data: %s", e)
            return

        self._dataset.append(records)
        self.status = LoadStatus.READY
        logger.info("Loaded %d root records", len(records))

    async def retry(self):
        """Re-run the initial load after it failed."""
        if self.status != LoadStatus.ERROR:
            raise ControllerStateError(f"Cannot retry the initial load while {self.status.value}")
        self._load_started = False
        self.error_message = None
        self.last_error = None
        await self.load()

    def reset(self):
        """Full remount: forget all records and expansions. In-flight fetches merge into the old dataset and cache."""
        self._mount(fresh_cache=True)

    def toggle(self, record_id: Any, level: int) -> ToggleResult:
        """
        Expand or collapse a row. The flip is visible immediately; on expansion
        the child fetch is started and merges later.
        """
        if self.status != LoadStatus.READY:
            raise ControllerStateError(f"Cannot toggle rows while {self.status.value}")

        result = self.registry.toggle(make_key(record_id, level))
        if result.expanded:
            self.coordinator.on_expand(record_id, level)
        return result

    def is_expanded(self, record_id: Any, level: int) -> bool:
        return self.registry.is_expanded(make_key(record_id, level))

    def view(self) -> TableView:
        """Render the current state for the presentation layer."""
        view = TableView(
            status=self.status.value,
            error=self.error_message,
            dataset_size=len(self._dataset),
            pending_fetches=self.coordinator.pending,
        )
        if self.status == LoadStatus.READY:
            renderer = TreeRenderer(self._dataset, self.registry.expanded_keys(), self.max_depth)
            view.rows = renderer.render(self._dataset.roots(), 0)
        return view

    async def wait_for_fetches(self):
        await self.coordinator.wait_idle()

    async def aclose(self):
        await self.source.aclose()
