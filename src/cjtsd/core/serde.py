"""
JSON serialization/deserialization of columnar records.

Provides a single canonical JSON policy for the wire form and thin wrappers that
map ColumnarRecord to and from JSON text. This module is zero-IO.

Notes:
    - Canonical JSON:
        - sort_keys=True
        - separators=(",", ":")
        - ensure_ascii=False
    - Decimal metric values are written as JSON numbers and read back as Decimal
      (simplejson ``use_decimal=True``), so values survive repeated round trips
      without binary floating point drift.
    - Empty or absent columns are never emitted (see ColumnarRecord.to_wire).
"""

from __future__ import annotations

from typing import Any

import simplejson

from .errors import InvalidMetricError
from .schema import ColumnarRecord

__all__ = [
    "json_dumps_canonical",
    "json_dumps",
    "json_loads",
]

# Decimal metric columns by wire alias; JSON has no NaN or Infinity.
_DECIMAL_KEYS = ("s", "a", "m", "x", "n")


def json_dumps_canonical(obj: Any) -> str:
    """
    Serialize an object to a canonical JSON string.

    Args:
        obj (Any): JSON-serializable object; Decimal values are allowed.

    Returns:
        str: Canonical JSON string with sorted keys and compact separators.

    Raises:
        ValueError: If a float or Decimal is NaN or infinite.
    """
    return simplejson.dumps(
        obj,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        use_decimal=True,
        allow_nan=False,
    )


def json_dumps(record: ColumnarRecord) -> str:
    """
    Serialize a record to its compact wire JSON.

    Raises:
        InvalidMetricError: If a decimal metric column holds NaN or Infinity.

    Examples:
        >>> from cjtsd.core.schema import ColumnarRecord
        >>> json_dumps(ColumnarRecord(t=[1, 2], d=[1]))
        '{"d":[1],"t":[1,2]}'
    """
    wire = record.to_wire()
    for key in _DECIMAL_KEYS:
        for value in wire.get(key, ()):
            if not value.is_finite():
                raise InvalidMetricError(f"Column {key!r} holds non-finite value {value}")
    return json_dumps_canonical(wire)


def json_loads(s: str | bytes) -> ColumnarRecord:
    """
    Parse wire JSON into a record.

    Args:
        s (str | bytes): JSON object text.

    Returns:
        ColumnarRecord: Validated record; fractional numbers are parsed as Decimal.

    Raises:
        simplejson.JSONDecodeError: If the text is not valid JSON.
        TypeError: If the document is not a JSON object.
        pydantic.ValidationError: If a column has the wrong shape.
    """
    data = simplejson.loads(s, use_decimal=True)
    if not isinstance(data, dict):
        raise TypeError(f"CJTSD document must be a JSON object, got {type(data).__name__}")
    return ColumnarRecord.from_wire(data)
