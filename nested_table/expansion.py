"""
Expansion State Management for the Nested Table

Tracks which (record, level) rows are currently expanded. The state is owned
by the controller and handed to the renderer as a read-only snapshot.
"""

from typing import Any, Dict, FrozenSet, NamedTuple, Optional, Set
from dataclasses import dataclass, field
import time
import json

from .row_key import RowKey


@dataclass
class ExpansionState:
    """Tracks expansion state for one table session"""
    expanded_keys: Set[RowKey] = field(default_factory=set)
    timestamp: float = field(default_factory=time.time)

    def is_expanded(self, key: RowKey) -> bool:
        """Check if key is expanded"""
        return key in self.expanded_keys

    def expand(self, key: RowKey):
        """Mark key as expanded"""
        self.expanded_keys.add(key)
        self.timestamp = time.time()

    def collapse(self, key: RowKey):
        """Mark key as collapsed"""
        self.expanded_keys.discard(key)
        self.timestamp = time.time()


class ToggleResult(NamedTuple):
    key: RowKey
    expanded: bool


class ExpansionRegistry:
    """
    Query/toggle front for an ExpansionState.
    """

    def __init__(self, state: Optional[ExpansionState] = None):
        self.state = state or ExpansionState()

    def is_expanded(self, key: RowKey) -> bool:
        return self.state.is_expanded(key)

    def toggle(self, key: RowKey) -> ToggleResult:
        """Flip the key and return its new state so the caller can decide whether to fetch."""
        was_expanded = self.state.is_expanded(key)
        if was_expanded:
            self.state.collapse(key)
        else:
            self.state.expand(key)
        return ToggleResult(key, not was_expanded)

    def expanded_keys(self) -> FrozenSet[RowKey]:
        """Snapshot of the expanded keys for a single render pass"""
        return frozenset(self.state.expanded_keys)

    def __len__(self) -> int:
        return len(self.state.expanded_keys)

    def serialize(self) -> str:
        return json.dumps({
            "expanded_keys": sorted(key.to_token() for key in self.state.expanded_keys),
            "timestamp": self.state.timestamp
        })

    @classmethod
    def deserialize(cls, data: str) -> "ExpansionRegistry":
        obj: Dict[str, Any] = json.loads(data)
        return cls(ExpansionState(
            expanded_keys={RowKey.from_token(t) for t in obj.get("expanded_keys", [])},
            timestamp=obj.get("timestamp", time.time())
        ))
