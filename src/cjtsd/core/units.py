"""
Time units of a CJTSD record and helpers to move between units, wire codes and
concrete time spans.

Responsibilities
- Define the Unit enum; each member's serialized value is its wire code.
- Parse wire codes (absent/"m"/"s"/"S") and friendlier identifiers into Unit.
- Provide the scale of one tick in milliseconds and as a timedelta.

Naming
------
| Unit member    | wire code | one tick
|----------------|-----------|-------------------
| MINUTES        | "m"       | 60_000 ms (default, written as an absent tag)
| SECONDS        | "s"       | 1_000 ms
| MILLISECONDS   | "S"       | 1 ms

Examples
--------
>>> from cjtsd.core.units import Unit, unit_from_code, unit_to_code, unit_millis
>>> unit_from_code(None) is Unit.MINUTES
True
>>> unit_to_code(Unit.SECONDS)
's'
>>> unit_millis(unit_from_code("S"))
1
"""

from __future__ import annotations

from datetime import timedelta
from enum import Enum
from typing import Final

from .constants import MILLIS_PER_MINUTE, MILLIS_PER_SECOND
from .errors import UnsupportedUnitError

__all__ = [
    "Unit",
    "DEFAULT_UNIT",
    "unit_from_code",
    "unit_to_code",
    "normalize_unit",
    "unit_millis",
    "unit_timedelta",
]


class Unit(Enum):
    """Time scale applied uniformly to every timestamp and duration of a record."""

    MINUTES = "m"
    SECONDS = "s"
    MILLISECONDS = "S"


DEFAULT_UNIT: Final[Unit] = Unit.MINUTES

_MILLIS: Final[dict[Unit, int]] = {
    Unit.MINUTES: MILLIS_PER_MINUTE,
    Unit.SECONDS: MILLIS_PER_SECOND,
    Unit.MILLISECONDS: 1,
}

# Case-insensitive identifiers accepted by normalize_unit (config files, env vars).
_ALIASES: Final[dict[str, Unit]] = {
    "minute": Unit.MINUTES,
    "minutes": Unit.MINUTES,
    "min": Unit.MINUTES,
    "second": Unit.SECONDS,
    "seconds": Unit.SECONDS,
    "sec": Unit.SECONDS,
    "millis": Unit.MILLISECONDS,
    "millisecond": Unit.MILLISECONDS,
    "milliseconds": Unit.MILLISECONDS,
    "ms": Unit.MILLISECONDS,
}


def unit_from_code(code: str | None) -> Unit:
    """
    Parse a wire unit tag.

    Args:
        code (str | None): Value of the ``u`` field; ``None`` means the default.

    Returns:
        Unit: Parsed unit; ``None`` and ``"m"`` both map to MINUTES.

    Raises:
        UnsupportedUnitError: If the tag is present but unknown. Tags are
            case-sensitive ("s" is seconds, "S" is milliseconds).
    """
    if code is None:
        return DEFAULT_UNIT
    try:
        return Unit(code)
    except ValueError as exc:
        raise UnsupportedUnitError(f"Unit not supported: {code!r}") from exc


def unit_to_code(unit: Unit) -> str | None:
    """
    Wire tag for a unit; MINUTES is the implicit default and maps to ``None``.

    Raises:
        UnsupportedUnitError: If ``unit`` is not a Unit member.
    """
    if not isinstance(unit, Unit):
        raise UnsupportedUnitError(f"Unit not supported: {unit!r}")
    if unit is DEFAULT_UNIT:
        return None
    return unit.value


def normalize_unit(value: Unit | str) -> Unit:
    """
    Coerce a Unit, a wire code or a readable identifier into a Unit.

    Args:
        value (Unit | str): e.g. ``Unit.SECONDS``, ``"s"``, ``"Seconds"``, ``"ms"``.

    Returns:
        Unit: Parsed unit.

    Raises:
        UnsupportedUnitError: If the value is not recognized.

    Notes:
        Exact wire codes are checked first, so ``"S"`` is milliseconds while
        ``"SECONDS"`` is seconds.
    """
    if isinstance(value, Unit):
        return value
    if isinstance(value, str):
        s = value.strip()
        try:
            return Unit(s)
        except ValueError:
            pass
        unit = _ALIASES.get(s.lower())
        if unit is not None:
            return unit
    raise UnsupportedUnitError(f"Unit not supported: {value!r}")


def unit_millis(unit: Unit) -> int:
    """Milliseconds in one tick of ``unit``."""
    try:
        return _MILLIS[unit]
    except KeyError as exc:
        raise UnsupportedUnitError(f"Unit not supported: {unit!r}") from exc


def unit_timedelta(unit: Unit) -> timedelta:
    """One tick of ``unit`` as a timedelta."""
    return timedelta(milliseconds=unit_millis(unit))
