"""
gridmix/profiles.py

Tuning constants for the synthetic series generator.

Responsibilities
----------------
- Define `Profile`, a validated set of shaping constants for every source.
- Register the named presets: the offline ``mock`` profile, the Irish grid
  ``realistic`` profile and two provider variants of ``mock`` that reweight
  the normalized mix.
- Load custom profiles from JSON files layered over a preset.

Notes
-----
- Per-source ``scale`` factors are applied after normalization and the mix is
  re-normalized, so a variant only changes the relative weight of sources.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from .mix import SOURCES


class Profile(BaseModel):
    """Named set of generator constants.

    Attributes:
        name: Registry key, e.g. ``"mock"``.
        label: Human-readable description.
        wind_*: Baseline, diurnal amplitude, hour of the sine's zero
            crossing and clamp band of the wind share.
        solar_coefficient: Peak share at solar noon before clamping.
        solar_max: Upper clamp for solar.
        hydro_* / coal_*: Baseline plus a sinusoidal ripple completing
            ``*_cycles`` periods across the requested window.
        biomass: Constant biomass share.
        gas_*: Baseline, amplitude, balancing offset and clamp band of the gas
            share, which absorbs wind and solar variation.
        imports_min / imports_max: Clamp band for the residual imports share.
        scale: Optional per-source multipliers applied to the normalized mix.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    label: str = ""

    wind_base: float
    wind_amplitude: float
    wind_phase: float
    wind_min: float
    wind_max: float

    solar_coefficient: float = Field(ge=0)
    solar_max: float = Field(ge=0)

    hydro_base: float
    hydro_ripple: float = Field(ge=0)
    hydro_cycles: float = Field(default=7, gt=0)

    coal_base: float
    coal_ripple: float = Field(ge=0)
    coal_cycles: float = Field(default=3, gt=0)

    biomass: float = Field(ge=0)

    gas_base: float
    gas_amplitude: float
    gas_offset: float = 0.3
    gas_min: float
    gas_max: float

    imports_min: float
    imports_max: float

    scale: Mapping[str, float] = Field(default_factory=dict, validate_default=True)

    @field_validator("scale")
    @classmethod
    def check_scale(cls, v: Mapping[str, float]) -> Mapping[str, float]:
        unknown = set(v) - set(SOURCES)
        if unknown:
            raise ValueError(f"unknown sources in scale: {sorted(unknown)}")
        negative = [k for k, f in v.items() if f < 0]
        if negative:
            raise ValueError(f"scale factors must be non-negative: {sorted(negative)}")
        # Presets are shared across requests, so the factors are read-only.
        return MappingProxyType(dict(v))

    @field_serializer("scale")
    def dump_scale(self, v: Mapping[str, float]) -> dict[str, float]:
        return dict(v)

    @model_validator(mode="after")
    def check_bands(self) -> Profile:
        for prefix in ("wind", "gas", "imports"):
            lo, hi = getattr(self, f"{prefix}_min"), getattr(self, f"{prefix}_max")
            if lo > hi:
                raise ValueError(f"{prefix}_min ({lo}) exceeds {prefix}_max ({hi})")
        if self.wind_min < 0 or self.gas_min < 0 or self.imports_min < 0:
            raise ValueError("clamp bands must be non-negative")
        # Keep the rippled shares non-negative over the whole window.
        if self.hydro_base < self.hydro_ripple:
            raise ValueError("hydro_ripple exceeds hydro_base")
        if self.coal_base < self.coal_ripple:
            raise ValueError("coal_ripple exceeds coal_base")
        return self

    def derive(self, name: str, **overrides: Any) -> Profile:
        """Return a validated copy of this profile under a new name."""
        data = self.model_dump()
        data.update(overrides, name=name)
        return Profile(**data)


MOCK = Profile(
    name="mock",
    label="Mock (offline)",
    wind_base=0.35,
    wind_amplitude=0.2,
    wind_phase=3,
    wind_min=0.1,
    wind_max=0.75,
    solar_coefficient=0.18,
    solar_max=0.25,
    hydro_base=0.05,
    hydro_ripple=0.02,
    coal_base=0.04,
    coal_ripple=0.01,
    biomass=0.05,
    gas_base=0.4,
    gas_amplitude=0.1,
    gas_min=0.05,
    gas_max=0.7,
    imports_min=0.02,
    imports_max=0.2,
)

# Irish grid tuning: windier, lower solar, coal being phased out and fewer
# imports.
REALISTIC = Profile(
    name="realistic",
    label="Irish grid (realistic)",
    wind_base=0.4,
    wind_amplitude=0.3,
    wind_phase=2,
    wind_min=0.1,
    wind_max=0.8,
    solar_coefficient=0.12,
    solar_max=0.15,
    hydro_base=0.08,
    hydro_ripple=0.03,
    coal_base=0.02,
    coal_ripple=0.01,
    biomass=0.06,
    gas_base=0.35,
    gas_amplitude=0.1,
    gas_min=0.05,
    gas_max=0.6,
    imports_min=0.02,
    imports_max=0.15,
)

MOCK_EIRGRID = MOCK.derive(
    "mock-eirgrid",
    label="Mock reweighted towards wind and solar",
    scale={"wind": 1.3, "solar": 1.2, "gas": 0.9, "coal": 0.5, "imports": 0.8},
)

MOCK_ENTSOE = MOCK.derive(
    "mock-entsoe",
    label="Mock reweighted to a continental European mix",
    scale={
        "wind": 1.5,
        "solar": 1.8,
        "hydro": 1.2,
        "gas": 0.7,
        "coal": 0.2,
        "biomass": 1.3,
        "imports": 0.6,
    },
)

PROFILES: Mapping[str, Profile] = MappingProxyType(
    {p.name: p for p in (MOCK, REALISTIC, MOCK_EIRGRID, MOCK_ENTSOE)}
)


def get_profile(profile: str | Profile) -> Profile:
    """Resolve a preset name to its `Profile`; profiles pass through.

    Raises:
        KeyError: If the name is not a registered preset.
    """
    if isinstance(profile, Profile):
        return profile
    try:
        return PROFILES[profile]
    except KeyError:
        raise KeyError(f"Unknown profile {profile!r}; known: {', '.join(PROFILES)}") from None


def load_profile_file(path: str | Path) -> Profile:
    """Load a custom profile from a JSON object.

    The optional ``"base"`` key names the preset to start from (default
    ``"mock"``); every other key overrides a `Profile` field. A missing
    ``"name"`` defaults to the file stem.

    Raises:
        KeyError: If ``base`` is not a registered preset.
        pydantic.ValidationError: If the resulting constants are invalid.
        ValueError: If the file is not a JSON object.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object")

    base = get_profile(data.pop("base", "mock"))
    name = data.pop("name", path.stem)
    return base.derive(name, **data)
