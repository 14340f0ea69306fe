"""
gridmix/run.py

Command-line entry point for generating a series outside the dashboard.

Responsibilities
----------------
- Resolve the provider, range, profile and reference time from CLI flags and
  environment defaults.
- Generate the series, falling back to mock data for unsupported providers.
- Optionally export the joined intensity/mix table to CSV.
- Print a one-line summary of the run.

Conventions
-----------
- ``--now`` accepts any ISO-8601 string; naive values are taken as UTC.
"""

from __future__ import annotations

import argparse
import logging
from datetime import datetime, timezone

from dateutil import parser as dtp

from . import config
from .profiles import PROFILES, get_profile, load_profile_file
from .providers import Provider, fetch_with_fallback
from .ranges import DateRange
from .transform import summarize, to_table

logger = logging.getLogger(__name__)


def iso(dt: datetime) -> str:
    """Return an ISO-8601 string in UTC for a given datetime."""
    return dt.astimezone(timezone.utc).isoformat()


def parse_utc(s: str) -> datetime:
    """Parse an ISO-8601 string as a timezone-aware UTC datetime.

    Naive strings (no offset) are interpreted as UTC rather than local time.
    """
    dt = dtp.isoparse(s)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def run(
    date_range: str = "24h",
    provider: str = "mock",
    profile: str | None = None,
    profile_file: str | None = None,
    now: str | None = None,
    csv_path: str | None = None,
) -> dict:
    """Generate one series and return its summary.

    Args:
        date_range: "24h", "48h" or "7d".
        provider: Provider value or label.
        profile: Optional preset name overriding the provider's profile.
        profile_file: Optional JSON profile for the mock provider; ignored
            when ``profile`` is set or another provider is requested.
        now: Optional ISO-8601 reference time. Defaults to the current time.
        csv_path: If given, write the joined table to this path.

    Returns:
        dict: Summary from `transform.summarize` plus ``provider``,
        ``profile`` and ``fallback`` (the error message, or None).
    """
    selected = None
    if profile:
        selected = get_profile(profile)
    elif profile_file and Provider.parse(provider) is Provider.MOCK:
        selected = load_profile_file(profile_file)

    ref = parse_utc(now) if now else None
    series, error = fetch_with_fallback(provider, date_range, now=ref, profile=selected)

    if csv_path:
        to_table(series).to_csv(csv_path, index_label="timestamp")
        logger.info("wrote %d rows to %s", len(series.mix), csv_path)

    stats = summarize(series)
    for key in ("start", "end"):
        if stats[key] is not None:
            stats[key] = iso(stats[key])
    stats.update(provider=Provider.parse(provider).value, profile=series.profile, fallback=error)
    return stats


def main(argv=None):
    """CLI entry point.

    Args:
        argv: Optional list of CLI arguments (useful for testing).

    Returns:
        int: Exit code (0 on success, including provider fallback).
    """
    parser = argparse.ArgumentParser(description="Generate a synthetic grid mix series")
    parser.add_argument(
        "--range",
        dest="date_range",
        choices=[r.value for r in DateRange],
        default=config.default_range(),
    )
    parser.add_argument(
        "--provider",
        choices=[p.value for p in Provider],
        default=config.default_provider(),
    )
    parser.add_argument("--profile", choices=list(PROFILES), help="Override the provider's profile")
    parser.add_argument("--profile-file", default=config.profile_file(), help="JSON profile")
    parser.add_argument("--now", help="ISO-8601 reference time (default: now)")
    parser.add_argument("--csv", dest="csv_path", help="Write the series to this CSV file")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    config.configure_logging(args.log_level)

    stats = run(
        date_range=args.date_range,
        provider=args.provider,
        profile=args.profile,
        profile_file=args.profile_file,
        now=args.now,
        csv_path=args.csv_path,
    )
    print(f"Done. Stats: {stats}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
