"""
gridmix/transform.py

Shapes consumed by the charts, the CLI and CSV export.

Responsibilities
----------------
- Flatten a `GenerationSeries` into ``{timestamp, value}`` records for the
  intensity chart and per-source records for the mix chart.
- Build pandas DataFrames indexed by timestamp.
- Compute small summary statistics for KPIs.
"""

from __future__ import annotations

from datetime import datetime

import pandas as pd

from .generator import GenerationSeries
from .mix import RENEWABLE_SOURCES, SOURCES

INTENSITY_COLUMN = "carbon_intensity_gco2_kwh"


def intensity_records(series: GenerationSeries) -> list[dict]:
    return [{"timestamp": p.timestamp, "value": p.grams_co2_per_kwh} for p in series.intensity]


def mix_records(series: GenerationSeries) -> list[dict]:
    out = []
    for p in series.mix:
        row = {"timestamp": p.timestamp}
        row.update(p.mix.as_dict())
        out.append(row)
    return out


def to_frames(series: GenerationSeries) -> tuple[pd.DataFrame, pd.DataFrame]:
    """Return ``(intensity_df, mix_df)`` indexed by timestamp.

    Empty series give empty frames that still carry the expected columns, so
    charts can render a "no data" state.
    """
    intensity_df = pd.DataFrame(intensity_records(series), columns=["timestamp", "value"])
    intensity_df = intensity_df.rename(columns={"value": INTENSITY_COLUMN}).set_index("timestamp")

    mix_df = pd.DataFrame(mix_records(series), columns=["timestamp", *SOURCES]).set_index(
        "timestamp"
    )
    return intensity_df, mix_df


def to_table(series: GenerationSeries) -> pd.DataFrame:
    """Join intensity and mix into one frame for export."""
    intensity_df, mix_df = to_frames(series)
    return intensity_df.join(mix_df)


def summarize(series: GenerationSeries) -> dict:
    """Summary statistics over a series.

    Returns:
        dict: ``points``, ``start``, ``end``, ``mean_intensity``,
        ``min_intensity``, ``max_intensity`` and ``mean_renewable_share``.
        Everything but ``points`` is None for an empty series.
    """
    intensity_df, mix_df = to_frames(series)
    if intensity_df.empty:
        return {
            "points": 0,
            "start": None,
            "end": None,
            "mean_intensity": None,
            "min_intensity": None,
            "max_intensity": None,
            "mean_renewable_share": None,
        }

    intensity = intensity_df[INTENSITY_COLUMN]
    # Mean combined wind, solar, hydro and biomass share per sample.
    renewables = mix_df[list(RENEWABLE_SOURCES)].sum(axis=1)
    return {
        "points": len(intensity_df),
        "start": series.intensity[0].timestamp,
        "end": series.intensity[-1].timestamp,
        "mean_intensity": round(float(intensity.mean()), 1),
        "min_intensity": int(intensity.min()),
        "max_intensity": int(intensity.max()),
        "mean_renewable_share": round(float(renewables.mean()), 4),
    }


def format_tick_time(dt: datetime) -> str:
    """Axis tick label, e.g. ``"06:45"``."""
    return dt.strftime("%H:%M")
