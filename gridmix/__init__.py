"""Synthetic generation-mix and carbon-intensity series for a single grid region."""

from . import config, generator, mix, profiles, providers, ranges, run, transform
from .generator import GenerationSeries, generate
from .providers import Provider, UnsupportedProviderError
from .ranges import DateRange

__all__ = [
    "DateRange",
    "GenerationSeries",
    "Provider",
    "UnsupportedProviderError",
    "config",
    "generate",
    "generator",
    "mix",
    "profiles",
    "providers",
    "ranges",
    "run",
    "transform",
]
