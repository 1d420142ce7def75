"""
Tests for the expansion registry.
"""
import json

from nested_table.expansion import ExpansionRegistry, ExpansionState
from nested_table.row_key import make_key


def test_registry_starts_empty():
    registry = ExpansionRegistry()
    assert len(registry) == 0
    assert not registry.is_expanded(make_key(1, 0))


def test_toggle_returns_new_state():
    registry = ExpansionRegistry()
    key = make_key(1, 0)

    result = registry.toggle(key)
    assert result.expanded is True
    assert result.key == key
    assert registry.is_expanded(key)

    result = registry.toggle(key)
    assert result.expanded is False
    assert not registry.is_expanded(key)


def test_toggle_twice_is_identity():
    registry = ExpansionRegistry()
    keys = [make_key(i, level) for i in range(3) for level in range(3)]
    registry.toggle(keys[4])
    before = registry.expanded_keys()

    for key in keys:
        registry.toggle(key)
        registry.toggle(key)

    assert registry.expanded_keys() == before


def test_levels_are_tracked_independently():
    registry = ExpansionRegistry()
    registry.toggle(make_key(1, 0))

    assert registry.is_expanded(make_key(1, 0))
    assert not registry.is_expanded(make_key(1, 1))


def test_snapshot_is_not_affected_by_later_toggles():
    registry = ExpansionRegistry()
    registry.toggle(make_key(1, 0))
    snapshot = registry.expanded_keys()

    registry.toggle(make_key(2, 0))
    registry.toggle(make_key(1, 0))

    assert snapshot == frozenset({make_key(1, 0)})


def test_toggle_updates_timestamp():
    state = ExpansionState(timestamp=0.0)
    registry = ExpansionRegistry(state)
    registry.toggle(make_key(1, 0))
    assert state.timestamp > 0.0


def test_serialize_round_trip():
    registry = ExpansionRegistry()
    registry.toggle(make_key(1, 0))
    registry.toggle(make_key("x", 3))

    data = registry.serialize()
    assert len(json.loads(data)["expanded_keys"]) == 2

    restored = ExpansionRegistry.deserialize(data)
    assert restored.expanded_keys() == registry.expanded_keys()
    assert restored.state.timestamp == registry.state.timestamp
