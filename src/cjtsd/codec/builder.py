"""
Encoder for CJTSD records.

CjtsdBuilder accumulates data points column by column, drops durations that repeat
the last explicit one, and hands its buffers to an immutable ColumnarRecord on
``build()``.

Duration column rules
- ``add`` stores -1 when the new duration equals the nearest previous explicit
  duration, and -1 when no duration is given (reuse).
- ``build`` truncates the column right after its last explicit value; the decoder
  forward-fills everything after it.
- ``build`` then undoes omissions that follow a value below 100, left to right, since
  a one- or two-digit literal is no longer than "-1".

Examples
--------
>>> from cjtsd.codec.builder import create
>>> rec = create().set_unit_to_seconds().add(0, 500).add(500, 500).add(1000, 500).build()
>>> rec.durations
[500]
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from datetime import UTC, datetime, timedelta
from decimal import Decimal
from typing import Any

from cjtsd.core.constants import EPOCH, LITERAL_DURATION_LIMIT, REUSE_DURATION
from cjtsd.core.errors import (
    InvalidDurationError,
    InvalidMetricError,
    MetricGapError,
    MissingDurationError,
)
from cjtsd.core.schema import METRIC_FIELDS, ColumnarRecord, DataPoint, RawDataPoint
from cjtsd.core.typing import DecimalLike, DurationLike, Ticks, TimestampLike
from cjtsd.core.units import Unit, normalize_unit, unit_millis, unit_to_code

from .config import CodecSettings

logger = logging.getLogger(__name__)

__all__ = [
    "CjtsdBuilder",
    "create",
    "encode",
]

_MICROSECOND = timedelta(microseconds=1)


def _trunc_div(a: int, b: int) -> int:
    # Integer division rounding toward zero (// rounds toward negative infinity).
    q = abs(a) // b
    return -q if a < 0 else q


def _to_count(value: int | Decimal | float) -> int:
    # Integral decimals/floats (e.g. Decimal("3")) are accepted; anything else would truncate.
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, Decimal) and value.is_finite() and value == value.to_integral_value():
        return int(value)
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return int(value)
    raise InvalidMetricError(f"Count must be an integer, got {value!r}")


def _to_decimal(value: DecimalLike) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


class CjtsdBuilder:
    """
    Single-use builder producing a ColumnarRecord.

    Args:
        unit (Unit | str | None): Unit of every timestamp and duration; defaults to
            ``settings.unit``.
        settings (CodecSettings | None): Defaults source; ``CodecSettings()`` if omitted.

    Notes:
        - Set the unit before adding points. Changing it afterwards does not rescale
          points already added; the resulting record mixes scales.
        - Metric columns are independent; value *i* of a column belongs to the *i*-th
          point and nothing checks that columns keep pace with timestamps.
        - Instances are not thread-safe.
    """

    def __init__(self, unit: Unit | str | None = None, settings: CodecSettings | None = None) -> None:
        settings = settings or CodecSettings()
        self._unit: Unit = settings.unit if unit is None else normalize_unit(unit)
        self._reset()

    def _reset(self) -> None:
        self._timestamps: list[int] = []
        self._durations: list[int] = []
        self._last_specified: int = -1
        self._counts: list[int] | None = None
        self._sums: list[Decimal] | None = None
        self._avgs: list[Decimal] | None = None
        self._mins: list[Decimal] | None = None
        self._maxs: list[Decimal] | None = None
        self._numbers: list[Decimal] | None = None
        self._objs: list[Any] | None = None

    @property
    def unit(self) -> Unit:
        return self._unit

    def __len__(self) -> int:
        return len(self._timestamps)

    # ------------------------------------------------------------------
    # Unit
    # ------------------------------------------------------------------

    def set_unit(self, unit: Unit | str) -> CjtsdBuilder:
        new_unit = normalize_unit(unit)
        if self._timestamps and new_unit is not self._unit:
            logger.warning(
                "Unit changed from %s to %s after %d points; earlier points are not rescaled",
                self._unit.name,
                new_unit.name,
                len(self._timestamps),
            )
        self._unit = new_unit
        return self

    def set_unit_to_minutes(self) -> CjtsdBuilder:
        return self.set_unit(Unit.MINUTES)

    def set_unit_to_seconds(self) -> CjtsdBuilder:
        return self.set_unit(Unit.SECONDS)

    def set_unit_to_millis(self) -> CjtsdBuilder:
        return self.set_unit(Unit.MILLISECONDS)

    # ------------------------------------------------------------------
    # Points
    # ------------------------------------------------------------------

    def _tick_micros(self) -> int:
        return unit_millis(self._unit) * 1000

    def _timestamp_ticks(self, timestamp: TimestampLike) -> Ticks:
        if isinstance(timestamp, datetime):
            if timestamp.tzinfo is None:
                timestamp = timestamp.replace(tzinfo=UTC)
            micros = (timestamp - EPOCH) // _MICROSECOND
            return Ticks(_trunc_div(micros, self._tick_micros()))
        return Ticks(int(timestamp))

    def _duration_ticks(self, duration: DurationLike) -> Ticks:
        if isinstance(duration, timedelta):
            ticks = _trunc_div(duration // _MICROSECOND, self._tick_micros())
        else:
            ticks = int(duration)
        if ticks < 0:
            raise InvalidDurationError(f"Duration must not be negative, got {duration!r}")
        return Ticks(ticks)

    def add(self, timestamp: TimestampLike, duration: DurationLike | None = None) -> CjtsdBuilder:
        """
        Append a data point.

        Args:
            timestamp (datetime | int): Start instant, or ticks since the epoch in the
                builder's unit. Naive datetimes are taken as UTC.
            duration (timedelta | int | None): Span of the point, or ticks in the
                builder's unit. None reuses the previous duration.

        Returns:
            CjtsdBuilder: self, for chaining.

        Raises:
            MissingDurationError: If this is the first point and duration is None.
            InvalidDurationError: If the duration is negative.

        Notes:
            Datetimes and timedeltas are divided by the unit length and truncated toward
            zero, so sub-unit precision is lost.
        """
        if not self._timestamps and duration is None:
            raise MissingDurationError("Duration must be specified for the first data point")

        ts = self._timestamp_ticks(timestamp)
        if duration is None:
            self._timestamps.append(ts)
            self._durations.append(REUSE_DURATION)
            return self

        d = self._duration_ticks(duration)
        self._timestamps.append(ts)
        n = self._last_specified
        if n >= 0 and d == self._durations[n]:
            self._durations.append(REUSE_DURATION)
        else:
            self._last_specified = len(self._durations)
            self._durations.append(d)
        return self

    # ------------------------------------------------------------------
    # Metrics
    # ------------------------------------------------------------------

    def add_count(self, count: int) -> CjtsdBuilder:
        """Append a count; non-integral values raise InvalidMetricError."""
        value = _to_count(count)
        if self._counts is None:
            self._counts = []
        self._counts.append(value)
        return self

    def add_sum(self, value: DecimalLike) -> CjtsdBuilder:
        if self._sums is None:
            self._sums = []
        self._sums.append(_to_decimal(value))
        return self

    def add_avg(self, value: DecimalLike) -> CjtsdBuilder:
        if self._avgs is None:
            self._avgs = []
        self._avgs.append(_to_decimal(value))
        return self

    def add_min(self, value: DecimalLike) -> CjtsdBuilder:
        if self._mins is None:
            self._mins = []
        self._mins.append(_to_decimal(value))
        return self

    def add_max(self, value: DecimalLike) -> CjtsdBuilder:
        if self._maxs is None:
            self._maxs = []
        self._maxs.append(_to_decimal(value))
        return self

    def add_number(self, value: DecimalLike) -> CjtsdBuilder:
        if self._numbers is None:
            self._numbers = []
        self._numbers.append(_to_decimal(value))
        return self

    def add_obj(self, obj: Any) -> CjtsdBuilder:
        if self._objs is None:
            self._objs = []
        self._objs.append(obj)
        return self

    # ------------------------------------------------------------------
    # Build
    # ------------------------------------------------------------------

    def _compact_durations(self) -> list[int]:
        durations = self._durations
        n = self._last_specified
        if 0 <= n < len(durations) - 1:
            del durations[n + 1 :]
        # Reads durations[i - 1] as rewritten by the previous iteration.
        for i in range(1, len(durations)):
            prev = durations[i - 1]
            if durations[i] == REUSE_DURATION and prev < LITERAL_DURATION_LIMIT:
                durations[i] = prev
        return durations

    def build(self) -> ColumnarRecord:
        """
        Finalize into a ColumnarRecord.

        The buffers are moved into the record without copying; the builder starts
        over with empty buffers (same unit) afterwards.
        """
        record = ColumnarRecord.model_construct(
            unit=unit_to_code(self._unit),
            timestamps=self._timestamps,
            durations=self._compact_durations(),
            counts=self._counts,
            sums=self._sums,
            avgs=self._avgs,
            mins=self._mins,
            maxs=self._maxs,
            numbers=self._numbers,
            objects=self._objs,
        )
        logger.debug(
            "Built CJTSD record: unit=%s points=%d durations=%d",
            self._unit.name,
            len(record.timestamps),
            len(record.durations),
        )
        self._reset()
        return record


def create(unit: Unit | str | None = None, settings: CodecSettings | None = None) -> CjtsdBuilder:
    """Return a new CjtsdBuilder (see CjtsdBuilder for arguments)."""
    return CjtsdBuilder(unit=unit, settings=settings)


_ADDERS: dict[str, str] = {
    "count": "add_count",
    "sum": "add_sum",
    "avg": "add_avg",
    "min": "add_min",
    "max": "add_max",
    "number": "add_number",
    "obj": "add_obj",
}


def encode(
    points: Iterable[DataPoint | RawDataPoint],
    unit: Unit | str | None = None,
    settings: CodecSettings | None = None,
) -> ColumnarRecord:
    """
    Encode expanded points back into a ColumnarRecord.

    Args:
        points: DataPoint or RawDataPoint items (raw points carry milliseconds).
        unit: Target unit; defaults to ``settings.unit``.
        settings: Defaults source.

    Returns:
        ColumnarRecord: Record whose expansion reproduces the points, up to the
        truncation of times to whole units.

    Raises:
        MetricGapError: If a point carries a metric that an earlier point lacked;
            columns may only end early, never skip a point.

    Notes:
        Opaque values may be null, so a None ``obj`` between two objects is kept as a
        null entry; trailing None objects are left out of the column.
    """
    builder = create(unit=unit, settings=settings)
    tick_millis = unit_millis(builder.unit)
    ended: set[str] = set()
    # Opaque values may legitimately be null; pad with None only up to the next object.
    pending_objs = 0

    for i, point in enumerate(points):
        if isinstance(point, RawDataPoint):
            builder.add(_trunc_div(point.timestamp, tick_millis), _trunc_div(point.duration, tick_millis))
        else:
            builder.add(point.timestamp, point.duration)

        if point.obj is None:
            pending_objs += 1
        else:
            for _ in range(pending_objs):
                builder.add_obj(None)
            pending_objs = 0
            builder.add_obj(point.obj)

        for _, attr in METRIC_FIELDS:
            if attr == "obj":
                continue
            value = getattr(point, attr)
            if value is None:
                ended.add(attr)
                continue
            if attr in ended:
                raise MetricGapError(f"Point {i} has {attr!r} but an earlier point does not")
            getattr(builder, _ADDERS[attr])(value)

    return builder.build()
