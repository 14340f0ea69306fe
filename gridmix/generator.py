"""
gridmix/generator.py

Synthetic generation-mix and carbon-intensity series.

Responsibilities
----------------
- Shape a raw per-source mix for each sample from the hour of day (wind,
  solar, gas) and the sample index (hydro, coal ripples).
- Normalize each raw mix, apply the profile's per-source scale and compute
  its carbon intensity.
- Return both series over one shared timestamp grid.

Conventions
-----------
- Hour of day is read in the timestamp's own timezone; `generate` defaults
  ``now`` to the current UTC instant.
- Output is fully determined by (range, profile, now).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterator
from datetime import datetime, timezone

from pydantic import BaseModel, ConfigDict

from .mix import (
    CarbonIntensityPoint,
    GenerationMixBreakdown,
    GenerationMixPoint,
    compute_intensity,
    normalize_mix,
    rescale_mix,
)
from .profiles import Profile, get_profile
from .ranges import DateRange, sample_count, sample_timestamps

logger = logging.getLogger(__name__)


class GenerationSeries(BaseModel):
    """Intensity and mix series for one request, sharing timestamps."""

    model_config = ConfigDict(frozen=True)

    date_range: DateRange
    profile: str
    intensity: list[CarbonIntensityPoint]
    mix: list[GenerationMixPoint]

    @property
    def timestamps(self) -> list[datetime]:
        return [p.timestamp for p in self.mix]


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def hour_of_day(ts: datetime) -> float:
    return ts.hour + ts.minute / 60


def raw_sample(profile: Profile, ts: datetime, index: int, count: int) -> GenerationMixBreakdown:
    """Compute the unnormalized mix for sample ``index`` of ``count``.

    Args:
        profile: Shaping constants.
        ts: Sample timestamp; only its hour and minute are used.
        index: Position of the sample in ``[0, count]``.
        count: Index of the terminal sample, used for the ripple periods.

    Returns:
        GenerationMixBreakdown: Raw shares. Their total is close to, but not
        guaranteed to be, 1.
    """
    p = profile
    h = hour_of_day(ts)

    # Wind peaks overnight.
    wind = clamp(
        p.wind_base + p.wind_amplitude * math.sin(2 * math.pi * (h - p.wind_phase) / 24),
        p.wind_min,
        p.wind_max,
    )

    # Zero outside 06:00-18:00, bell shaped around solar noon.
    daylight = math.sin(math.pi * (h - 6) / 12) if 6 < h < 18 else 0.0
    solar = clamp(p.solar_coefficient * daylight, 0.0, p.solar_max)

    hydro = p.hydro_base + p.hydro_ripple * math.sin(2 * math.pi * index / (count / p.hydro_cycles))
    coal = p.coal_base + p.coal_ripple * math.sin(2 * math.pi * index / (count / p.coal_cycles))
    biomass = p.biomass

    # Gas balances whatever wind and solar leave over.
    gas = (
        p.gas_base
        + p.gas_amplitude * math.cos(2 * math.pi * h / 24)
        - (wind + solar - p.gas_offset)
    )
    gas = clamp(gas, p.gas_min, p.gas_max)

    imports = clamp(
        1 - (wind + solar + hydro + gas + coal + biomass), p.imports_min, p.imports_max
    )

    return GenerationMixBreakdown(
        wind=wind,
        solar=solar,
        hydro=hydro,
        gas=gas,
        coal=coal,
        biomass=biomass,
        imports=imports,
    )


def iter_raw_series(
    date_range: DateRange | str,
    profile: Profile | str,
    now: datetime,
) -> Iterator[tuple[datetime, GenerationMixBreakdown]]:
    """Yield ``(timestamp, raw_mix)`` pairs across the requested window."""
    profile = get_profile(profile)
    count = sample_count(date_range)
    for i, ts in enumerate(sample_timestamps(date_range, now)):
        yield ts, raw_sample(profile, ts, i, count)


def generate(
    date_range: DateRange | str,
    profile: Profile | str = "mock",
    now: datetime | None = None,
) -> GenerationSeries:
    """Generate the mix and intensity series for a range.

    Each raw sample is normalized to unit sum, reweighted by the profile's
    ``scale`` (and re-normalized) when one is set, then converted to an
    intensity with the fixed emission factors.

    Args:
        date_range: Window to cover, as a `DateRange` or "24h"/"48h"/"7d".
        profile: A `Profile` or the name of a registered preset.
        now: Reference instant for the last sample. Defaults to the current
            UTC time.

    Returns:
        GenerationSeries: Parallel intensity and mix series.
    """
    date_range = DateRange.parse(date_range)
    profile = get_profile(profile)
    if now is None:
        now = datetime.now(timezone.utc)

    intensity: list[CarbonIntensityPoint] = []
    mix_points: list[GenerationMixPoint] = []

    for ts, raw in iter_raw_series(date_range, profile, now):
        mix = normalize_mix(raw)
        if profile.scale:
            mix = rescale_mix(mix, profile.scale)
        intensity.append(
            CarbonIntensityPoint(timestamp=ts, grams_co2_per_kwh=compute_intensity(mix))
        )
        mix_points.append(GenerationMixPoint(timestamp=ts, mix=mix))

    logger.debug(
        "generated series range=%s profile=%s points=%d first_intensity=%s",
        date_range.value,
        profile.name,
        len(mix_points),
        intensity[0].grams_co2_per_kwh if intensity else None,
    )

    return GenerationSeries(
        date_range=date_range,
        profile=profile.name,
        intensity=intensity,
        mix=mix_points,
    )
