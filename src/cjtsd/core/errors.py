"""
Core exception types raised by the CJTSD encoder, decoder and unit helpers.

Provides typed exceptions for codec failures:
- MissingDurationError when the first data point is added without a duration.
- InvalidDurationError when a negative duration is passed to the builder.
- InvalidMetricError for non-integral counts and non-finite decimals on the wire.
- UnsupportedUnitError for unit tags/identifiers outside minutes/seconds/millis.
- MetricGapError when ``encode`` meets a metric value after a point lacked it.

Notes:
    - All errors derive from CjtsdError, itself a ValueError: every failure here is a
      caller-input ("invalid argument") error and is never retried.
    - This module uses only the Python standard library and has no side effects.

Examples:
    Catch a missing first duration.

    >>> from cjtsd import create
    >>> from cjtsd.core.errors import MissingDurationError
    >>> try:
    ...     create().add(0)
    ... except MissingDurationError as e:
    ...     msg = str(e)
    >>> "first data point" in msg
    True
"""

from __future__ import annotations

__all__ = [
    "CjtsdError",
    "MissingDurationError",
    "InvalidDurationError",
    "InvalidMetricError",
    "UnsupportedUnitError",
    "MetricGapError",
]


class CjtsdError(ValueError):
    """Base class for codec errors (all are invalid-argument errors)."""


class MissingDurationError(CjtsdError):
    """The first data point was added without a duration."""


class InvalidDurationError(CjtsdError):
    """A duration outside the representable range (negative) was given."""


class UnsupportedUnitError(CjtsdError):
    """Unit tag or identifier is not one of minutes, seconds or milliseconds."""


class InvalidMetricError(CjtsdError):
    """A metric value cannot be represented (non-integral count, non-finite decimal)."""


class MetricGapError(CjtsdError):
    """A metric column would need an interior gap, which the columnar form cannot hold."""
