"""
Lightweight typing aliases used across the codec.

Provides minimal NewTypes and aliases to improve readability and static checks.
This module contains no runtime logic and is zero-IO.

Examples:
    >>> from cjtsd.core.typing import Ticks, JsonDict
    >>> def next_tick(t: Ticks) -> Ticks:
    ...     return Ticks(int(t) + 1)
    >>> next_tick(Ticks(10))
    11
"""

from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, NewType

__all__ = [
    "Ticks",
    "Millis",
    "JsonDict",
    "TimestampLike",
    "DurationLike",
    "DecimalLike",
]

# Integer count of unit ticks (minutes, seconds or milliseconds since the epoch).
Ticks = NewType("Ticks", int)
Millis = NewType("Millis", int)

# Wire-level mapping alias. Kept broad for serde boundaries.
JsonDict = dict[str, Any]

TimestampLike = datetime | int
DurationLike = timedelta | int
DecimalLike = Decimal | int | float | str
