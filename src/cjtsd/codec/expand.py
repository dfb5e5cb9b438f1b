"""
Decoder for CJTSD records.

Expands a ColumnarRecord into one value per data point, forward-filling omitted
durations and undoing unit scaling. Two output forms share the same walk:

- ``expand``: DataPoint items with datetime/timedelta values.
- ``expand_raw``: RawDataPoint items with integer milliseconds.

Notes:
    - The first point's duration defaults to 0 when the record carries none.
    - Metric values beyond a column's length are absent (None), not zero.
    - Irregular records are read permissively: extra metric values past the last
      timestamp are never read, and no column lengths are checked.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import timedelta
from typing import Any

from cjtsd.core.constants import EPOCH, REUSE_DURATION
from cjtsd.core.schema import METRIC_FIELDS, ColumnarRecord, DataPoint, RawDataPoint
from cjtsd.core.typing import Millis
from cjtsd.core.units import unit_from_code, unit_millis

from .config import CodecSettings

logger = logging.getLogger(__name__)

__all__ = [
    "expand",
    "expand_raw",
]


def _column_value(column: list[Any] | None, i: int) -> Any:
    if column is None or i >= len(column):
        return None
    return column[i]


def _walk(record: ColumnarRecord) -> Iterator[tuple[Millis, Millis, dict[str, Any]]]:
    """Yield (timestamp_ms, duration_ms, metrics) for each point of the record."""
    timestamps = record.timestamps
    durations = record.durations or []
    tick_millis = unit_millis(unit_from_code(record.unit))
    columns = [(attr, getattr(record, name)) for name, attr in METRIC_FIELDS]

    last_duration = 0
    for i, ts in enumerate(timestamps):
        duration = durations[i] if i < len(durations) else REUSE_DURATION
        if duration == REUSE_DURATION:
            duration = last_duration
        last_duration = duration

        metrics = {attr: _column_value(col, i) for attr, col in columns}
        yield Millis(ts * tick_millis), Millis(duration * tick_millis), metrics


def expand(record: ColumnarRecord, settings: CodecSettings | None = None) -> list[DataPoint]:
    """
    Expand a record into DataPoint items.

    Args:
        record (ColumnarRecord): Record to expand.
        settings (CodecSettings | None): ``settings.timezone`` selects UTC-aware
            (default) or local-zone datetimes.

    Returns:
        list[DataPoint]: One item per timestamp; empty for an empty record.

    Raises:
        UnsupportedUnitError: If the record is non-empty and its unit tag is unknown.
    """
    if not record.timestamps:
        return []
    settings = settings or CodecSettings()
    local = settings.timezone == "local"

    result: list[DataPoint] = []
    for ts_ms, dur_ms, metrics in _walk(record):
        timestamp = EPOCH + timedelta(milliseconds=ts_ms)
        if local:
            timestamp = timestamp.astimezone()
        result.append(
            DataPoint(timestamp=timestamp, duration=timedelta(milliseconds=dur_ms), **metrics)
        )
    logger.debug("Expanded CJTSD record into %d points", len(result))
    return result


def expand_raw(record: ColumnarRecord) -> list[RawDataPoint]:
    """
    Expand a record into RawDataPoint items with millisecond integers.

    Same walk as ``expand`` without building datetime values: minutes scale by
    60000, seconds by 1000 and milliseconds by 1.

    Raises:
        UnsupportedUnitError: If the record is non-empty and its unit tag is unknown.
    """
    if not record.timestamps:
        return []
    result = [
        RawDataPoint(timestamp=ts_ms, duration=dur_ms, **metrics)
        for ts_ms, dur_ms, metrics in _walk(record)
    ]
    logger.debug("Expanded CJTSD record into %d raw points", len(result))
    return result
