from decimal import Decimal

import pytest
import simplejson

from cjtsd.codec.builder import create
from cjtsd.core.errors import InvalidMetricError
from cjtsd.core.schema import ColumnarRecord
from cjtsd.core.serde import json_dumps, json_dumps_canonical, json_loads


def test_json_dumps_is_canonical_and_compact() -> None:
    rec = ColumnarRecord(u="s", t=[1, 2, 3], d=[500], c=[10, 20, 30])
    assert json_dumps(rec) == '{"c":[10,20,30],"d":[500],"t":[1,2,3],"u":"s"}'


def test_empty_record_serializes_to_empty_object() -> None:
    assert json_dumps(ColumnarRecord()) == "{}"
    rec = json_loads("{}")
    assert rec.timestamps == []
    assert rec.durations == []


def test_decimals_are_json_numbers_and_survive_round_trip() -> None:
    rec = ColumnarRecord(t=[1, 2], d=[1], s=[Decimal("0.1"), Decimal("123456789.000000001")])
    text = json_dumps(rec)
    assert '"s":[0.1,123456789.000000001]' in text
    back = json_loads(text)
    assert back.sums == [Decimal("0.1"), Decimal("123456789.000000001")]
    assert json_dumps(back) == text


def test_json_loads_round_trip_equality() -> None:
    rec = ColumnarRecord(u="S", t=[0, 500, 1000], d=[500, -1, 20], o=["a", {"b": 1}], n=[Decimal("2.5")])
    assert json_loads(json_dumps(rec)) == rec


def test_json_loads_accepts_bytes() -> None:
    rec = json_loads(b'{"t":[1],"d":[3]}')
    assert rec.timestamps == [1]


def test_json_loads_rejects_non_object() -> None:
    with pytest.raises(TypeError, match="JSON object"):
        json_loads("[1, 2]")


def test_json_loads_rejects_invalid_json() -> None:
    with pytest.raises(simplejson.JSONDecodeError):
        json_loads("{not json")


def test_json_dumps_canonical_order_insensitive() -> None:
    a = json_dumps_canonical({"b": 1, "a": Decimal("1.10")})
    b = json_dumps_canonical({"a": Decimal("1.10"), "b": 1})
    assert a == b == '{"a":1.10,"b":1}'


@pytest.mark.parametrize("value", [Decimal("NaN"), Decimal("Infinity"), Decimal("-Infinity")])
def test_non_finite_decimals_are_rejected_on_dump(value: Decimal) -> None:
    rec = create().add(0, 1).add_sum(Decimal(1)).add(1).add_sum(value).build()
    with pytest.raises(InvalidMetricError, match="non-finite"):
        json_dumps(rec)


def test_json_dumps_canonical_rejects_nan() -> None:
    with pytest.raises(ValueError):
        json_dumps_canonical({"a": float("nan")})
