"""
Tests for record decoding and Arrow conversion.
"""
import dataclasses

import pyarrow as pa
import pytest

from nested_table.errors import DecodeError
from nested_table.types.record import Record
from nested_table.util.arrow_utils import arrow_to_records, ensure_arrow_table, records_to_arrow


def test_from_dict_keeps_extra_fields():
    record = Record.from_dict({"id": 1, "title": "A", "body": "a", "userId": 5})
    assert record == Record(id=1, title="A", body="a")
    assert record.extra == {"userId": 5}
    assert record.to_dict() == {"id": 1, "title": "A", "body": "a", "userId": 5}


def test_from_dict_defaults_and_coercion():
    record = Record.from_dict({"id": "x", "title": None, "body": 12})
    assert record.title == ""
    assert record.body == "12"


@pytest.mark.parametrize("bad", [{"title": "no id"}, {"id": None}, {"id": [1]}, ["id", 1]])
def test_from_dict_rejects_bad_items(bad):
    with pytest.raises(DecodeError):
        Record.from_dict(bad)


def test_records_are_immutable():
    record = Record(id=1)
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.title = "changed"


def test_arrow_round_trip_with_parents():
    records = [Record(id=1, title="A"), Record(id=2, title="B")]
    table = records_to_arrow(records, parent_ids=[None, 1])

    assert table.column("parent_id").to_pylist() == [None, 1]
    assert arrow_to_records(table.drop_columns(["parent_id"])) == records


def test_records_to_arrow_length_mismatch():
    with pytest.raises(ValueError):
        records_to_arrow([Record(id=1)], parent_ids=[])


def test_arrow_to_records_requires_id():
    with pytest.raises(DecodeError):
        arrow_to_records(pa.table({"title": ["A"]}))


def test_ensure_arrow_table():
    table = pa.table({"a": [1]})
    assert ensure_arrow_table(table) is table
    assert ensure_arrow_table([{"a": 1}]).num_rows == 1
    assert ensure_arrow_table({"a": [1, 2]}).num_rows == 2
    with pytest.raises(ValueError):
        ensure_arrow_table(42)
