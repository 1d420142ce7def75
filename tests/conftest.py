"""
Shared test helpers: a record source whose answers and timing the test controls.
"""
import asyncio
from typing import Any, Dict, List, Optional

import pytest

from nested_table.sources.base import RecordSource
from nested_table.types.record import Record


class FakeRecordSource(RecordSource):
    """
    Answers fetches from ``responses`` (scope id -> list of dicts or an
    exception). A scope can be held with ``hold`` until the test releases it.
    """

    def __init__(self, responses: Optional[Dict[Any, Any]] = None):
        self.responses = responses or {}
        self.calls: List[Any] = []
        self.gates: Dict[Any, asyncio.Event] = {}
        self.closed = False

    def hold(self, scope_id: Any) -> asyncio.Event:
        gate = asyncio.Event()
        self.gates[scope_id] = gate
        return gate

    async def fetch(self, scope_id: Optional[Any] = None) -> List[Record]:
        self.calls.append(scope_id)
        gate = self.gates.get(scope_id)
        if gate is not None:
            await gate.wait()
        response = self.responses.get(scope_id, [])
        if isinstance(response, Exception):
            raise response
        return [Record.from_dict(d) for d in response]

    async def aclose(self) -> None:
        self.closed = True


ROOT_RECORDS = [
    {"id": 1, "title": "A", "body": "a"},
    {"id": 2, "title": "B", "body": "b"},
]


@pytest.fixture
def fake_source():
    return FakeRecordSource({None: ROOT_RECORDS, 1: [{"id": 3, "title": "C", "body": "c"}]})
