"""
Pydantic v2 models for the CJTSD columnar record and the expanded data points.

Responsibilities
- Define ColumnarRecord, the wire shape: parallel columns keyed by one-letter aliases.
- Define DataPoint (datetime/timedelta based) and RawDataPoint (integer milliseconds),
  the per-point forms produced by the decoder.
- Map records to and from alias-keyed wire mappings with empty columns suppressed.

Style
- Zero-IO (stdlib + pydantic only).
- Records are frozen; column lists are owned by the record once built.
- Reads are permissive: unknown keys are ignored and the unit tag is only checked
  when the record is expanded.

Wire mapping
------------
| field      | alias | column
|------------|-------|-------------------------------------------
| unit       | u     | "s" / "S" / absent (minutes)
| timestamps | t     | ticks since the Unix epoch, one per point
| durations  | d     | ticks, or -1 to reuse the last explicit value
| counts     | c     | integers
| sums       | s     | decimals
| avgs       | a     | decimals
| mins       | m     | decimals
| maxs       | x     | decimals
| numbers    | n     | decimals
| objects    | o     | anything JSON can hold

Examples
--------
>>> from cjtsd.core.schema import ColumnarRecord
>>> rec = ColumnarRecord.from_wire({"u": "s", "t": [10, 20], "d": [10]})
>>> rec.to_wire()
{'u': 's', 't': [10, 20], 'd': [10]}
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .typing import JsonDict

__all__ = [
    "ColumnarRecord",
    "DataPoint",
    "RawDataPoint",
    "METRIC_FIELDS",
]

# (record column, point attribute) pairs, in wire order.
METRIC_FIELDS: tuple[tuple[str, str], ...] = (
    ("counts", "count"),
    ("sums", "sum"),
    ("avgs", "avg"),
    ("mins", "min"),
    ("maxs", "max"),
    ("numbers", "number"),
    ("objects", "obj"),
)


class ColumnarRecord(BaseModel):
    """
    Compact columnar form of a time series.

    Attributes:
        unit (str | None): Wire unit tag; None means minutes.
        timestamps (list[int]): One entry per data point.
        durations (list[int]): Possibly shorter than timestamps; missing tail
            entries and -1 entries reuse the last explicit duration.
        counts (list[int] | None): Optional count column.
        sums, avgs, mins, maxs, numbers (list[Decimal] | None): Optional decimal columns.
        objects (list[Any] | None): Optional opaque column.

    Notes:
        No validation ties column lengths together. Values beyond the number of
        timestamps are kept but never read by the decoder.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    unit: str | None = Field(default=None, alias="u")
    timestamps: list[int] = Field(default_factory=list, alias="t")
    durations: list[int] = Field(default_factory=list, alias="d")

    counts: list[int] | None = Field(default=None, alias="c")
    sums: list[Decimal] | None = Field(default=None, alias="s")
    avgs: list[Decimal] | None = Field(default=None, alias="a")
    mins: list[Decimal] | None = Field(default=None, alias="m")
    maxs: list[Decimal] | None = Field(default=None, alias="x")
    numbers: list[Decimal] | None = Field(default=None, alias="n")
    objects: list[Any] | None = Field(default=None, alias="o")

    @property
    def point_count(self) -> int:
        return len(self.timestamps)

    def to_wire(self) -> JsonDict:
        """
        Alias-keyed mapping ready for JSON encoding.

        Returns:
            JsonDict: Only the columns that hold values; ``None`` fields and empty
            lists are omitted, so an empty record maps to ``{}``.
        """
        out: JsonDict = {}
        for name, field in type(self).model_fields.items():
            value = getattr(self, name)
            if value is None:
                continue
            if isinstance(value, list):
                if not value:
                    continue
                value = list(value)
            out[field.alias or name] = value
        return out

    @classmethod
    def from_wire(cls, data: Mapping[str, Any]) -> ColumnarRecord:
        """
        Validate a decoded wire mapping into a record.

        Args:
            data (Mapping[str, Any]): Mapping keyed by wire aliases (``u``, ``t``, ...).
                Absent columns take their defaults; ``null`` columns are treated as absent.

        Raises:
            pydantic.ValidationError: If a column holds values of the wrong type.
        """
        return cls.model_validate({k: v for k, v in data.items() if v is not None})


class DataPoint(BaseModel):
    """
    One fully realized sample as produced by ``expand``.

    Attributes:
        timestamp (datetime): Timezone-aware start instant.
        duration (timedelta): Forward-filled duration.
        count (int | None): Count metric, if the column reached this point.
        sum, avg, min, max, number (Decimal | None): Decimal metrics.
        obj (Any): Opaque value, or None.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: datetime
    duration: timedelta
    count: int | None = None
    sum: Decimal | None = None
    avg: Decimal | None = None
    min: Decimal | None = None
    max: Decimal | None = None
    number: Decimal | None = None
    obj: Any = None


class RawDataPoint(BaseModel):
    """
    One sample with time as integer milliseconds, as produced by ``expand_raw``.

    Attributes:
        timestamp (int): Milliseconds since the Unix epoch.
        duration (int): Duration in milliseconds.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    timestamp: int
    duration: int
    count: int | None = None
    sum: Decimal | None = None
    avg: Decimal | None = None
    min: Decimal | None = None
    max: Decimal | None = None
    number: Decimal | None = None
    obj: Any = None
