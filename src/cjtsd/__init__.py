"""
cjtsd — Compact JSON Time Series Data codec.

Encodes timestamped metric samples into a columnar record with repeated durations
omitted, and expands such records back into per-point values.

Examples
--------
>>> from datetime import datetime, timedelta, UTC
>>> import cjtsd
>>> start = datetime(2024, 1, 1, tzinfo=UTC)
>>> rec = (
...     cjtsd.create(unit="s")
...     .add(start, timedelta(seconds=500)).add_count(10)
...     .add(start + timedelta(seconds=500), timedelta(seconds=500)).add_count(20)
...     .build()
... )
>>> cjtsd.json_dumps(rec)
'{"c":[10,20],"d":[500],"t":[1704067200,1704067700],"u":"s"}'
>>> [p.count for p in cjtsd.expand(cjtsd.json_loads(cjtsd.json_dumps(rec)))]
[10, 20]
"""

from .codec import CjtsdBuilder, CodecSettings, create, encode, expand, expand_raw
from .core.errors import (
    CjtsdError,
    InvalidDurationError,
    InvalidMetricError,
    MetricGapError,
    MissingDurationError,
    UnsupportedUnitError,
)
from .core.schema import ColumnarRecord, DataPoint, RawDataPoint
from .core.serde import json_dumps, json_loads
from .core.units import Unit

__all__ = [
    "CjtsdBuilder",
    "CjtsdError",
    "CodecSettings",
    "ColumnarRecord",
    "DataPoint",
    "InvalidDurationError",
    "InvalidMetricError",
    "MetricGapError",
    "MissingDurationError",
    "RawDataPoint",
    "Unit",
    "UnsupportedUnitError",
    "create",
    "encode",
    "expand",
    "expand_raw",
    "json_dumps",
    "json_loads",
]
