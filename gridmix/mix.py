"""
gridmix/mix.py

Generation-mix normalization and carbon-intensity calculation.

Responsibilities
----------------
- Define the seven-source `GenerationMixBreakdown` record and the point types
  emitted by the generator.
- Rescale a raw (unnormalized) mix so its shares sum to 1, substituting a
  fixed fallback distribution when the raw total is zero or negative.
- Compute the weighted carbon intensity of a normalized mix from fixed
  per-source emission factors.
- Apply per-source multiplicative adjustments followed by re-normalization.

Notes
-----
- A degenerate raw mix is not an error: it is replaced by `FALLBACK_MIX`.
- Intensities are rounded half-up to whole gCO2/kWh.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping
from datetime import datetime
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

# Source order used for records, frames and CSV columns.
SOURCES = ("wind", "solar", "hydro", "gas", "coal", "biomass", "imports")
RENEWABLE_SOURCES = ("wind", "solar", "hydro", "biomass")

# Typical Irish grid emission factors (gCO2/kWh). Imports use an average of
# the GB and continental European grids.
EMISSION_FACTORS: Mapping[str, int] = MappingProxyType(
    {
        "wind": 12,
        "solar": 50,
        "hydro": 24,
        "gas": 400,
        "coal": 900,
        "biomass": 230,
        "imports": 300,
    }
)


class GenerationMixBreakdown(BaseModel):
    """Fractional share of output per source at one instant.

    Raw mixes coming out of the generator may sum to anything; mixes returned
    by `normalize_mix` sum to 1 within floating-point tolerance.
    """

    model_config = ConfigDict(frozen=True)

    wind: float = 0.0
    solar: float = 0.0
    hydro: float = 0.0
    gas: float = 0.0
    coal: float = 0.0
    biomass: float = 0.0
    imports: float = 0.0

    @property
    def total(self) -> float:
        return sum(self.as_dict().values())

    @property
    def renewable_share(self) -> float:
        return sum(getattr(self, source) for source in RENEWABLE_SOURCES)

    @property
    def fossil_share(self) -> float:
        return self.gas + self.coal

    def as_dict(self) -> dict[str, float]:
        """Return the shares keyed by source name, in `SOURCES` order."""
        return {source: getattr(self, source) for source in SOURCES}


# Used whenever a raw mix has no positive total.
FALLBACK_MIX = GenerationMixBreakdown(
    wind=0.30,
    solar=0.05,
    hydro=0.05,
    gas=0.45,
    coal=0.05,
    biomass=0.05,
    imports=0.05,
)


class GenerationMixPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    mix: GenerationMixBreakdown


class CarbonIntensityPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    timestamp: datetime
    grams_co2_per_kwh: int = Field(ge=0)


def _as_values(raw: Mapping[str, float] | GenerationMixBreakdown) -> dict[str, float]:
    if isinstance(raw, GenerationMixBreakdown):
        return raw.as_dict()
    # Absent sources count as zero; unknown keys are ignored.
    return {source: float(raw.get(source) or 0.0) for source in SOURCES}


def normalize_mix(raw: Mapping[str, float] | GenerationMixBreakdown) -> GenerationMixBreakdown:
    """Rescale a raw mix so that its seven shares sum to 1.

    Args:
        raw: A `GenerationMixBreakdown` or a mapping of source name to share.
            Missing sources default to 0.

    Returns:
        GenerationMixBreakdown: ``raw / total`` for every source, or
        `FALLBACK_MIX` when ``total <= 0``.
    """
    values = _as_values(raw)
    total = sum(values.values())
    if total <= 0:
        logger.debug("Raw mix total %.6f is not positive; using fallback mix", total)
        return FALLBACK_MIX
    return GenerationMixBreakdown(**{k: v / total for k, v in values.items()})


def compute_intensity(mix: GenerationMixBreakdown) -> int:
    """Return the weighted carbon intensity of a normalized mix in gCO2/kWh.

    The weighted sum ``Σ mix[source] * EMISSION_FACTORS[source]`` is rounded
    half-up to the nearest integer.
    """
    weighted = sum(share * EMISSION_FACTORS[source] for source, share in mix.as_dict().items())
    return math.floor(weighted + 0.5)


def rescale_mix(
    mix: Mapping[str, float] | GenerationMixBreakdown,
    factors: Mapping[str, float],
) -> GenerationMixBreakdown:
    """Scale each share by a per-source factor and re-normalize.

    Scaling breaks the unit-sum invariant, so the result is passed back
    through `normalize_mix`.

    Args:
        mix: Mix to adjust, normally already normalized.
        factors: Multipliers keyed by source name. Sources without a factor
            are left unchanged.

    Returns:
        GenerationMixBreakdown: The adjusted, re-normalized mix.
    """
    values = _as_values(mix)
    scaled = {source: share * factors.get(source, 1.0) for source, share in values.items()}
    return normalize_mix(scaled)
