"""
TreeRenderer - turns (Dataset, expansion snapshot, level) into nested rows.

Rendering is a pure function of its inputs: one snapshot of the expanded keys
is taken per pass and nothing is mutated. Recursion stops at ``max_depth``
whatever the expansion state, so cyclic parent links cannot loop.
"""
import logging
from typing import Any, FrozenSet, List, Optional

from .config import DEFAULT_MAX_DEPTH
from .dataset import Dataset
from .row_key import RowKey, make_key
from .types.record import Record
from .types.rendered import DiagnosticRow, RenderedNode, RenderedRow

logger = logging.getLogger(__name__)

COLUMNS = ("ID", "Title", "Body")
INDENT = "  "


class TreeRenderer:
    def __init__(self, dataset: Dataset, expanded: FrozenSet[RowKey], max_depth: int = DEFAULT_MAX_DEPTH):
        self.dataset = dataset
        self.expanded = expanded
        self.max_depth = max_depth

    def render(self, records: Any, level: int = 0) -> List[RenderedNode]:
        if level >= self.max_depth:
            return []

        if not isinstance(records, (list, tuple)):
            logger.warning("Expected a list of records at level %d, received %s", level, type(records).__name__)
            return [DiagnosticRow(level, f"Expected a list of records, received {type(records).__name__}")]

        nodes: List[RenderedNode] = []
        for item in records:
            if not isinstance(item, Record):
                logger.warning("Skipping malformed row at level %d: %r", level, item)
                nodes.append(DiagnosticRow(level, f"Malformed row: {type(item).__name__}"))
                continue
            try:
                nodes.append(self._render_row(item, level))
            except TypeError as e:
                logger.warning("Cannot key row %r at level %d: %s", item.id, level, e)
                nodes.append(DiagnosticRow(level, f"Unusable row id: {item.id!r}"))
        return nodes

    def _render_row(self, record: Record, level: int) -> RenderedRow:
        key = make_key(record.id, level)
        row = RenderedRow(
            id=record.id,
            title=record.title,
            body=record.body,
            level=level,
            key=key.to_token(),
        )
        if key in self.expanded:
            row.expanded = True
            row.children = self.render(self.dataset.children_of(record.id), level + 1)
        return row


def render(
    dataset: Dataset,
    expanded: FrozenSet[RowKey],
    records: Optional[Any] = None,
    level: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> List[RenderedNode]:
    """Render ``records`` (the dataset's root records by default) at ``level``."""
    if records is None:
        records = dataset.roots()
    return TreeRenderer(dataset, frozenset(expanded), max_depth).render(records, level)


def format_text(nodes: List[RenderedNode]) -> str:
    """Plain-text rendition of rendered rows, one line per row, indented by level."""
    lines = [" | ".join(COLUMNS)]
    _format_nodes(nodes, lines)
    return "\n".join(lines)


def _format_nodes(nodes: List[RenderedNode], lines: List[str]):
    for node in nodes:
        indent = INDENT * node.level
        if isinstance(node, DiagnosticRow):
            lines.append(f"{indent}! {node.message}")
            continue
        marker = "-" if node.expanded else "+"
        lines.append(f"{indent}{marker} {node.id} | {node.title} | {node.body}")
        if node.children:
            _format_nodes(node.children, lines)
