"""
Rendered output of a tree pass, ready for the presentation layer.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass
class RenderedRow:
    """One visible row. ``children`` is None when the row is collapsed."""
    id: Any
    title: str
    body: str
    level: int
    key: str
    expanded: bool = False
    children: Optional[List["RenderedNode"]] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": "row",
            "id": self.id,
            "title": self.title,
            "body": self.body,
            "level": self.level,
            "key": self.key,
            "expanded": self.expanded,
            "children": None if self.children is None else [c.to_dict() for c in self.children],
        }


@dataclass
class DiagnosticRow:
    """Placeholder rendered in place of data that could not be rendered"""
    level: int
    message: str

    def to_dict(self) -> Dict[str, Any]:
        return {"type": "diagnostic", "level": self.level, "message": self.message}


RenderedNode = Union[RenderedRow, DiagnosticRow]


@dataclass
class TableView:
    """Everything the presentation layer needs for one paint"""
    status: str
    error: Optional[str] = None
    rows: List[RenderedNode] = field(default_factory=list)
    dataset_size: int = 0
    pending_fetches: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "status": self.status,
            "error": self.error,
            "rows": [r.to_dict() for r in self.rows],
            "dataset_size": self.dataset_size,
            "pending_fetches": self.pending_fetches,
        }
