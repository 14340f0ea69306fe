"""Tests for range resolution and the sampling grid."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from gridmix import ranges
from gridmix.ranges import DateRange


@pytest.mark.parametrize(
    "date_range, expected",
    [(DateRange.H24, (24, 15)), (DateRange.H48, (48, 15)), (DateRange.D7, (168, 30))],
)
def test_resolve_range(date_range, expected):
    """Each range maps to its duration and sampling step."""

    assert ranges.resolve_range(date_range) == expected


def test_resolve_range_accepts_strings():
    """String values resolve the same as enum members."""

    assert ranges.resolve_range("7d") == (168, 30)
    assert ranges.resolve_range(" 48H ") == (48, 15)


def test_parse_unknown_range():
    """Unknown ranges should raise a ValueError naming the valid choices."""

    with pytest.raises(ValueError, match="24h, 48h, 7d"):
        DateRange.parse("30d")


@pytest.mark.parametrize("date_range", list(DateRange))
def test_sample_timestamps_cover_window(date_range, now):
    """The grid includes both endpoints and spans exactly the range duration."""

    hours, step = ranges.resolve_range(date_range)

    stamps = ranges.sample_timestamps(date_range, now)

    assert len(stamps) == hours * 60 // step + 1
    assert stamps[-1] == now
    assert stamps[-1] - stamps[0] == timedelta(hours=hours)
    assert all(b - a == timedelta(minutes=step) for a, b in zip(stamps, stamps[1:]))


def test_sample_count():
    """`sample_count` is the index of the terminal sample."""

    assert ranges.sample_count("24h") == 96
    assert ranges.sample_count("48h") == 192
    assert ranges.sample_count("7d") == 336


def test_labels():
    """Ranges carry a display label for the dashboard."""

    assert DateRange.D7.label == "7 days"


def test_sample_timestamps_across_clock_change():
    """A window spanning a DST change still covers exactly 24 elapsed hours."""

    dublin = ZoneInfo("Europe/Dublin")
    # Clocks went forward at 01:00 GMT on 2024-03-31.
    now = datetime(2024, 3, 31, 12, 0, tzinfo=dublin)

    stamps = ranges.sample_timestamps("24h", now)
    utc = [s.astimezone(timezone.utc) for s in stamps]

    assert len(stamps) == 97
    assert stamps[-1] == now
    assert utc[-1] - utc[0] == timedelta(hours=24)
    assert all(b - a == timedelta(minutes=15) for a, b in zip(utc, utc[1:]))
    # Timestamps stay on the local clock: 11:00 GMT the day before.
    assert all(s.tzinfo is dublin for s in stamps)
    assert (stamps[0].hour, stamps[0].minute) == (11, 0)
