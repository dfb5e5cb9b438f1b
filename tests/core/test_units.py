"""Tests for `cjtsd.core.units` unit parsing and scales."""

from datetime import timedelta

import pytest

from cjtsd.core.errors import UnsupportedUnitError
from cjtsd.core.units import (
    Unit,
    normalize_unit,
    unit_from_code,
    unit_millis,
    unit_timedelta,
    unit_to_code,
)


@pytest.mark.parametrize(
    "code,expected",
    [(None, Unit.MINUTES), ("m", Unit.MINUTES), ("s", Unit.SECONDS), ("S", Unit.MILLISECONDS)],
)
def test_unit_from_code(code: str | None, expected: Unit) -> None:
    assert unit_from_code(code) is expected


@pytest.mark.parametrize("code", ["h", "M", "", "seconds"])
def test_unit_from_code_rejects_unknown(code: str) -> None:
    with pytest.raises(UnsupportedUnitError, match="Unit not supported"):
        unit_from_code(code)


def test_unit_to_code_minutes_is_implicit() -> None:
    assert unit_to_code(Unit.MINUTES) is None
    assert unit_to_code(Unit.SECONDS) == "s"
    assert unit_to_code(Unit.MILLISECONDS) == "S"


def test_unit_to_code_rejects_non_unit() -> None:
    with pytest.raises(UnsupportedUnitError):
        unit_to_code("s")  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "value,expected",
    [
        (Unit.SECONDS, Unit.SECONDS),
        ("S", Unit.MILLISECONDS),
        ("s", Unit.SECONDS),
        ("SECONDS", Unit.SECONDS),
        (" Minutes ", Unit.MINUTES),
        ("ms", Unit.MILLISECONDS),
        ("millis", Unit.MILLISECONDS),
    ],
)
def test_normalize_unit_accepts_codes_and_names(value: Unit | str, expected: Unit) -> None:
    assert normalize_unit(value) is expected


@pytest.mark.parametrize("value", ["hours", "", 5])
def test_normalize_unit_rejects_unknown(value: object) -> None:
    with pytest.raises(UnsupportedUnitError):
        normalize_unit(value)  # type: ignore[arg-type]


def test_unit_scales() -> None:
    assert unit_millis(Unit.MINUTES) == 60_000
    assert unit_millis(Unit.SECONDS) == 1_000
    assert unit_millis(Unit.MILLISECONDS) == 1
    assert unit_timedelta(Unit.MINUTES) == timedelta(minutes=1)
    assert unit_timedelta(Unit.MILLISECONDS) == timedelta(milliseconds=1)


def test_unsupported_unit_is_value_error() -> None:
    # Callers treating codec failures as invalid arguments can catch ValueError.
    with pytest.raises(ValueError):
        unit_from_code("x")
