"""Duration omission, trimming and the sub-100 literal rule of `CjtsdBuilder.build`."""

from datetime import UTC, datetime, timedelta

import pytest

from cjtsd.codec.builder import create
from cjtsd.core.units import Unit


def _durations(unit: Unit, values: list[int | None]) -> list[int]:
    b = create(unit=unit)
    for i, v in enumerate(values):
        b.add(i * 1000, v)
    return b.build().durations


def test_same_duration_collapses_to_single_value() -> None:
    assert _durations(Unit.MILLISECONDS, [500, 500, 500]) == [500]


def test_trailing_reuse_run_is_trimmed() -> None:
    assert _durations(Unit.SECONDS, [500, 500, 500, 100, 100]) == [500, -1, -1, 100]


def test_small_values_are_emitted_literally() -> None:
    assert _durations(Unit.MINUTES, [99, 99, 99, 100]) == [99, 99, 99, 100]


def test_small_values_only_run_is_trimmed_to_one() -> None:
    assert _durations(Unit.SECONDS, [99, 99, 99]) == [99]


@pytest.mark.parametrize(
    "values,expected",
    [
        ([500, None, None], [500]),
        ([500, None, 50, None], [500, -1, 50]),
        ([50, None, None, 200], [50, 50, 50, 200]),
        ([500, 500, 7, 7, 300], [500, -1, 7, 7, 300]),
        ([100, 100, 100, 5], [100, -1, -1, 5]),
        ([0, 0, 1], [0, 0, 1]),
        ([500, 200, 500], [500, 200, 500]),
    ],
)
def test_duration_column_shapes(values: list[int | None], expected: list[int]) -> None:
    assert _durations(Unit.MILLISECONDS, values) == expected


def test_omission_compares_with_last_explicit_duration() -> None:
    # 500 after [500, 200] differs from the last explicit value (200), so it is kept.
    assert _durations(Unit.MILLISECONDS, [500, 200, 200, 500, 500]) == [500, 200, -1, 500]


def test_timedelta_durations_are_scaled_before_omission() -> None:
    start = datetime(2024, 5, 1, tzinfo=UTC)
    step = timedelta(seconds=500)
    rec = (
        create(unit=Unit.SECONDS)
        .add(start + step, step)
        .add(start + 2 * step, step)
        .add(start + 3 * step, step)
        .add(start + 4 * step, timedelta(seconds=100))
        .add(start + 4 * step + timedelta(seconds=100), timedelta(seconds=100))
        .build()
    )
    assert rec.durations == [500, -1, -1, 100]
    assert len(rec.timestamps) == 5


def test_empty_builder_builds_empty_record() -> None:
    rec = create().build()
    assert rec.timestamps == []
    assert rec.durations == []
    assert rec.unit is None
