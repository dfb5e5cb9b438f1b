from decimal import Decimal

import pytest
from pydantic import ValidationError

from cjtsd.core.schema import ColumnarRecord, DataPoint


def test_record_defaults_are_empty() -> None:
    rec = ColumnarRecord()
    assert rec.unit is None
    assert rec.timestamps == []
    assert rec.durations == []
    assert rec.counts is None
    assert rec.objects is None
    assert rec.point_count == 0


def test_record_accepts_aliases_and_field_names() -> None:
    by_alias = ColumnarRecord.model_validate({"u": "s", "t": [1, 2], "d": [1], "c": [3]})
    by_name = ColumnarRecord(unit="s", timestamps=[1, 2], durations=[1], counts=[3])
    assert by_alias == by_name
    assert by_alias.point_count == 2


def test_to_wire_suppresses_empty_and_none_columns() -> None:
    rec = ColumnarRecord(t=[10, 20], d=[5], s=[], o=None)
    assert rec.to_wire() == {"t": [10, 20], "d": [5]}
    assert ColumnarRecord().to_wire() == {}


def test_to_wire_keeps_unit_and_metrics() -> None:
    rec = ColumnarRecord(u="S", t=[1], d=[2], x=[Decimal("1.5")], o=[{"k": "v"}])
    assert rec.to_wire() == {"u": "S", "t": [1], "d": [2], "x": [Decimal("1.5")], "o": [{"k": "v"}]}


def test_from_wire_treats_null_as_absent() -> None:
    rec = ColumnarRecord.from_wire({"u": None, "t": [1, 2], "d": None, "c": None})
    assert rec.unit is None
    assert rec.durations == []
    assert rec.counts is None


def test_from_wire_ignores_unknown_keys_and_keeps_unknown_unit() -> None:
    # Permissive read: unit tags are only checked when the record is expanded.
    rec = ColumnarRecord.from_wire({"u": "h", "t": [1], "d": [1], "zz": [1]})
    assert rec.unit == "h"


def test_from_wire_coerces_numbers_to_decimal() -> None:
    rec = ColumnarRecord.from_wire({"t": [1, 2], "d": [1], "s": [1, "2.50"]})
    assert rec.sums == [Decimal(1), Decimal("2.50")]


def test_from_wire_rejects_non_integer_timestamps() -> None:
    with pytest.raises(ValidationError):
        ColumnarRecord.from_wire({"t": ["yesterday"], "d": [1]})


def test_record_is_frozen() -> None:
    rec = ColumnarRecord(t=[1], d=[1])
    with pytest.raises(ValidationError):
        rec.unit = "s"  # type: ignore[misc]


def test_data_point_rejects_unknown_fields() -> None:
    with pytest.raises(ValidationError):
        DataPoint.model_validate({"timestamp": 0, "duration": 0, "median": 1})
