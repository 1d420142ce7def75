"""
nested_table package - expandable, lazily loaded nested record tables

Expose the controller and the building blocks it wires together.
"""
from .controller import NestedTableController, LoadStatus
from .dataset import Dataset
from .expansion import ExpansionRegistry, ExpansionState, ToggleResult
from .fetch_coordinator import FetchCoordinator
from .renderer import TreeRenderer, render, format_text
from .row_key import RowKey, make_key
from .types.record import Record

__all__ = [
    "NestedTableController", "LoadStatus", "Dataset", "ExpansionRegistry",
    "ExpansionState", "ToggleResult", "FetchCoordinator", "TreeRenderer",
    "render", "format_text", "RowKey", "make_key", "Record",
]
