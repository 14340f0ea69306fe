"""
gridmix/ranges.py

Range resolution for synthetic series requests.

Responsibilities
----------------
- Define `DateRange`, the three selectable windows (24h, 48h, 7d).
- Map a range to its total duration and sampling step.
- Produce the inclusive timestamp grid covering [now - duration, now].

Conventions
-----------
- Ranges up to 48 hours are sampled every 15 minutes; the 7 day range every
  30 minutes.
- The grid includes both endpoints, so a range always yields
  ``sample_count(range) + 1`` timestamps.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from enum import Enum


class DateRange(str, Enum):
    """Selectable chart window."""

    H24 = "24h"
    H48 = "48h"
    D7 = "7d"

    @property
    def label(self) -> str:
        return RANGE_LABELS[self]

    @classmethod
    def parse(cls, value: str | DateRange) -> DateRange:
        """Return the range for ``value`` ("24h", "48h" or "7d").

        Raises:
            ValueError: If ``value`` is not one of the known ranges.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            known = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown date range {value!r}; expected one of {known}") from None


RANGE_LABELS = {
    DateRange.H24: "24 hours",
    DateRange.H48: "48 hours",
    DateRange.D7: "7 days",
}

# Total hours covered by each range.
RANGE_HOURS = {
    DateRange.H24: 24,
    DateRange.H48: 48,
    DateRange.D7: 24 * 7,
}


def resolve_range(date_range: DateRange | str) -> tuple[int, int]:
    """Return ``(total_hours, step_minutes)`` for a range.

    Args:
        date_range: A `DateRange` or its string value.

    Returns:
        tuple[int, int]: Total hours (24, 48 or 168) and the sampling step in
        minutes (30 for the week view, 15 otherwise).
    """
    hours = RANGE_HOURS[DateRange.parse(date_range)]
    step_minutes = 30 if hours == 24 * 7 else 15
    return hours, step_minutes


def sample_count(date_range: DateRange | str) -> int:
    """Index of the terminal sample (the grid holds one more point than this)."""
    hours, step_minutes = resolve_range(date_range)
    return hours * 60 // step_minutes


def sample_timestamps(date_range: DateRange | str, now: datetime) -> list[datetime]:
    """Build the inclusive sampling grid ending at ``now``.

    Args:
        date_range: Requested window.
        now: Reference instant; the last timestamp equals it exactly. An
            aware value is stepped in elapsed time and the grid is returned
            in its timezone, so hour-of-day follows the local clock.

    Returns:
        list[datetime]: ``sample_count + 1`` timestamps, ascending, spaced by
        the range's step.
    """
    hours, step_minutes = resolve_range(date_range)
    step = timedelta(minutes=step_minutes)
    indices = range(sample_count(date_range) + 1)
    if now.tzinfo is None:
        start = now - timedelta(hours=hours)
        return [start + i * step for i in indices]

    # Step in elapsed time, then return to the caller's zone so clock
    # changes neither shorten nor stretch the window.
    start = now.astimezone(timezone.utc) - timedelta(hours=hours)
    return [(start + i * step).astimezone(now.tzinfo) for i in indices]
