from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone

import pytest

from src.workplus_analytics.workplus_analytics.common.datetime_utils import (
    coerce_date,
    coerce_datetime,
    coerce_time,
    subtract_months,
)


def _local(instant: datetime) -> datetime:
    return instant.astimezone().replace(tzinfo=None)


def test_naive_strings_keep_wall_clock():
    assert coerce_datetime("2026-03-10T08:30:00") == datetime(2026, 3, 10, 8, 30)
    assert coerce_datetime("2026-03-10") == datetime(2026, 3, 10)


def test_offsets_are_converted_to_local_time():
    utc = datetime(2026, 3, 10, 21, 30, tzinfo=timezone.utc)

    assert coerce_datetime("2026-03-10T21:30:00Z") == _local(utc)
    assert coerce_datetime("2026-03-10T23:30:00+02:00") == _local(utc)
    assert coerce_datetime("2026-03-10T16:30:00-05:00") == _local(utc)


def test_same_instant_from_different_offsets_lands_on_same_day():
    east = coerce_date("2026-03-11T01:00:00+03:00")
    west = coerce_date("2026-03-10T17:00:00-05:00")

    assert east == west


def test_aware_datetime_objects_are_converted():
    aware = datetime(2026, 3, 10, 12, 0, tzinfo=timezone(timedelta(hours=5)))

    result = coerce_datetime(aware)

    assert result.tzinfo is None
    assert result == _local(aware)


@pytest.mark.parametrize("value", [None, "", "yesterday", 42, "2026-13-01"])
def test_unusable_values_are_absent(value):
    assert coerce_datetime(value) is None


def test_coerce_time_formats():
    assert coerce_time("09:15") == time(9, 15)
    assert coerce_time("09:15:30") == time(9, 15, 30)
    assert coerce_time("9am") is None


def test_subtract_months_clamps_to_month_end():
    assert subtract_months(date(2026, 3, 31), 1) == date(2026, 2, 28)
    assert subtract_months(date(2026, 1, 15), 3) == date(2025, 10, 15)
