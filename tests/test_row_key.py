"""
Tests for row identity across nesting levels.
"""
import pytest

from nested_table.row_key import RowKey, make_key


def test_same_id_different_levels_are_distinct():
    """A record nested at two depths gets two independent keys"""
    keys = {make_key(7, level) for level in range(6)}
    assert len(keys) == 6


def test_same_id_same_level_share_key():
    assert make_key(7, 2) == make_key(7, 2)
    assert hash(make_key(7, 2)) == hash(make_key(7, 2))


def test_no_concatenation_collisions():
    """(1, 23) and (12, 3) would both read "123" if joined naively"""
    assert make_key(1, 23) != make_key(12, 3)
    assert make_key(1, 23).to_token() != make_key(12, 3).to_token()
    assert make_key("1-2", 3) != make_key("1", 23)
    assert make_key("1-2", 3).to_token() != make_key("1", 23).to_token()


def test_string_and_int_ids_do_not_collide():
    assert make_key("1", 0) != make_key(1, 0)
    assert make_key("1", 0).to_token() != make_key(1, 0).to_token()


def test_token_round_trip_keeps_id_type():
    for key in (make_key(1, 0), make_key("abc|1", 4), make_key("1", 2)):
        assert RowKey.from_token(key.to_token()) == key


def test_invalid_levels_rejected():
    with pytest.raises(ValueError):
        make_key(1, -1)
    with pytest.raises(ValueError):
        make_key(1, 1.5)
    with pytest.raises(ValueError):
        make_key(1, True)


def test_unhashable_id_rejected():
    with pytest.raises(TypeError):
        make_key([1, 2], 0)


def test_invalid_token_rejected():
    with pytest.raises(ValueError):
        RowKey.from_token("not json")
    with pytest.raises(ValueError):
        RowKey.from_token("[1, -2]")


def test_ids_of_different_types_are_distinct():
    """1, 1.0 and True compare equal in Python but are different records"""
    keys = {make_key(1, 0), make_key(1.0, 0), make_key(True, 0)}
    assert len(keys) == 3
    assert make_key(1, 0) != make_key(True, 0)
    assert make_key(1, 0) == make_key(1, 0)


def test_token_round_trip_keeps_float_and_bool_ids():
    for key in (make_key(1.0, 0), make_key(True, 2)):
        restored = RowKey.from_token(key.to_token())
        assert restored == key
        assert type(restored.id) is type(key.id)
