from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from src.timekeeping.timekeeping.common.manila_time import (
    ManilaWallClock,
    format_manila,
    format_manila_iso,
    from_manila_parts_to_utc,
    get_manila_hours,
    get_manila_minutes,
    is_late_in_manila,
    manila_end_of_day_utc,
    manila_minute_of_day,
    manila_start_of_day_utc,
    parse_manila_local,
    to_instant,
    to_manila,
    to_manila_date_key,
    to_utc_iso,
    utc_midday_iso,
)

UTC = timezone.utc


def test_offset_rolls_over_utc_day_boundary():
    t = datetime(2024, 1, 1, 16, 30, tzinfo=UTC)

    assert to_manila_date_key(t) == "2024-01-02"
    assert get_manila_hours(t) == 0
    assert get_manila_minutes(t) == 30
    assert manila_minute_of_day(t) == 30


@pytest.mark.parametrize(
    "t",
    [
        datetime(2024, 1, 1, 16, 30, tzinfo=UTC),
        datetime(2024, 1, 1, 15, 59, 59, 999000, tzinfo=UTC),
        datetime(2024, 1, 1, 16, 0, tzinfo=UTC),
        datetime(2024, 2, 29, 3, 0, tzinfo=UTC),
        datetime(2023, 12, 31, 23, 59, tzinfo=UTC),
    ],
)
def test_start_and_end_of_day_bracket_the_instant(t):
    start = manila_start_of_day_utc(t)
    end = manila_end_of_day_utc(t)

    assert start <= t <= end
    assert end - start == timedelta(milliseconds=86_399_999)
    assert to_manila_date_key(start) == to_manila_date_key(t) == to_manila_date_key(end)


def test_start_of_day_is_sixteen_hundred_utc_the_day_before():
    assert manila_start_of_day_utc(datetime(2024, 3, 4, 0, 5, tzinfo=UTC)) == datetime(2024, 3, 3, 16, 0, tzinfo=UTC)


@pytest.mark.parametrize(
    "parts",
    [
        (2024, 1, 1, 0, 0),
        (2024, 1, 1, 7, 59),
        (2024, 2, 29, 8, 0),
        (2024, 12, 31, 23, 59),
        (1999, 6, 15, 12, 30),
    ],
)
def test_from_parts_round_trips_through_readers(parts):
    y, mo, d, h, m = parts
    instant = from_manila_parts_to_utc(y, mo, d, h, m)

    assert to_manila_date_key(instant) == f"{y:04d}-{mo:02d}-{d:02d}"
    assert get_manila_hours(instant) == h
    assert get_manila_minutes(instant) == m
    assert to_manila(instant) == ManilaWallClock(y, mo, d, h, m, 0, 0)


def test_from_parts_normalizes_overflow_like_date_utc():
    assert from_manila_parts_to_utc(2024, 1, 32) == from_manila_parts_to_utc(2024, 2, 1)
    assert from_manila_parts_to_utc(2024, 13, 1) == from_manila_parts_to_utc(2025, 1, 1)
    assert from_manila_parts_to_utc(2024, 3, 0) == from_manila_parts_to_utc(2024, 2, 29)
    assert from_manila_parts_to_utc(2024, 3, 4, 24, 0) == from_manila_parts_to_utc(2024, 3, 5, 0, 0)
    assert from_manila_parts_to_utc(2024, 3, 4, 8, 90) == from_manila_parts_to_utc(2024, 3, 4, 9, 30)


def test_from_parts_unrepresentable_returns_none():
    assert from_manila_parts_to_utc(10000, 1, 1) is None


def test_invalid_inputs_return_sentinels():
    assert to_manila_date_key("not a date") == ""
    assert to_manila_date_key(None) == ""
    assert manila_start_of_day_utc("garbage") is None
    assert manila_end_of_day_utc("garbage") is None
    assert get_manila_hours(object()) is None
    assert get_manila_minutes(float("nan")) is None
    assert format_manila_iso("nope") == ""
    assert format_manila("nope") == ""
    assert to_utc_iso("") == ""
    assert is_late_in_manila("nope") is False


def test_accepts_strings_epoch_millis_naive_and_dates():
    assert to_manila_date_key("2024-01-01T16:30:00.000Z") == "2024-01-02"
    assert to_manila_date_key("2024-01-02T00:30:00+08:00") == "2024-01-02"
    assert to_manila_date_key(0) == "1970-01-01"
    assert to_instant(datetime(2024, 1, 1, 16, 30)) == datetime(2024, 1, 1, 16, 30, tzinfo=UTC)
    assert to_instant(date(2024, 3, 4)) == datetime(2024, 3, 4, tzinfo=UTC)
    assert to_instant(True) is None


def test_is_late_in_manila_is_strictly_after_grace():
    assert is_late_in_manila(from_manila_parts_to_utc(2024, 3, 4, 8, 15)) is False
    assert is_late_in_manila(from_manila_parts_to_utc(2024, 3, 4, 8, 16)) is True
    assert is_late_in_manila(from_manila_parts_to_utc(2024, 3, 4, 9, 0)) is True
    assert is_late_in_manila(from_manila_parts_to_utc(2024, 3, 4, 7, 59)) is False
    assert is_late_in_manila(from_manila_parts_to_utc(2024, 3, 4, 9, 5), start_hour=9, grace_minutes=5) is False


def test_format_manila_iso_uses_explicit_offset():
    t = datetime(2024, 3, 4, 0, 5, 7, 45000, tzinfo=UTC)

    assert format_manila_iso(t) == "2024-03-04T08:05:07.045+08:00"
    assert not format_manila_iso(t).endswith("Z")


def test_format_manila_uses_manila_zone():
    t = datetime(2024, 3, 4, 0, 5, tzinfo=UTC)

    assert format_manila(t, "%Y-%m-%d %H:%M") == "2024-03-04 08:05"
    assert format_manila(t) == "Mar 04, 2024, 08:05 AM"


def test_parse_manila_local():
    assert parse_manila_local("2024-03-04T08:05") == datetime(2024, 3, 4, 0, 5, tzinfo=UTC)
    assert parse_manila_local("2024-03-04") == datetime(2024, 3, 3, 16, 0, tzinfo=UTC)
    assert parse_manila_local("2024-xx-04") is None
    assert parse_manila_local("2024-03-04T08") is None


def test_utc_renderings():
    assert to_utc_iso(datetime(2024, 3, 4, 0, 5, tzinfo=UTC)) == "2024-03-04T00:05:00.000Z"
    assert utc_midday_iso(date(2024, 3, 4)) == "2024-03-04T12:00:00.000Z"
