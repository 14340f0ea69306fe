"""
gridmix/providers.py

Data-source selection for the dashboard and CLI.

Responsibilities
----------------
- Define the selectable providers and map each to a generator profile.
- Signal `UnsupportedProviderError` for the ENTSO-E provider, which has no
  implementation, before any data is produced.
- Fall back to the offline mock series when a provider fails, so callers
  always have something to display.

Notes
-----
- The EirGrid provider does not call any API; EirGrid publishes no public
  endpoint, so it is served by the ``realistic`` synthetic profile.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum

from .generator import GenerationSeries, generate
from .profiles import Profile
from .ranges import DateRange

logger = logging.getLogger(__name__)


class Provider(str, Enum):
    MOCK = "mock"
    EIRGRID = "eirgrid"
    ENTSOE = "entsoe"

    @property
    def label(self) -> str:
        return PROVIDER_LABELS[self]

    @classmethod
    def parse(cls, value: str | Provider) -> Provider:
        """Accept either the short value ("mock") or the display label."""
        if isinstance(value, cls):
            return value
        for provider in cls:
            if value in (provider.value, provider.label):
                return provider
        known = ", ".join(p.value for p in cls)
        raise ValueError(f"Unknown provider {value!r}; expected one of {known}")


PROVIDER_LABELS = {
    Provider.MOCK: "Mock (offline)",
    Provider.EIRGRID: "EirGrid (real-time)",
    Provider.ENTSOE: "ENTSO-E (real-time)",
}

# Profile backing each implemented provider.
PROVIDER_PROFILES = {
    Provider.MOCK: "mock",
    Provider.EIRGRID: "realistic",
}


class UnsupportedProviderError(NotImplementedError):
    """Raised when a provider has no data path."""

    def __init__(self, provider: Provider, reason: str = "integration not yet implemented"):
        self.provider = provider
        super().__init__(f"{provider.label}: {reason}")


def describe_provider(provider: Provider | str) -> str:
    """Caption describing where a provider's data comes from."""
    provider = Provider.parse(provider)
    if provider is Provider.MOCK:
        return "Mock (offline) data"
    if provider is Provider.EIRGRID:
        return "Simulated Irish grid data based on EirGrid transparency platform patterns"
    return "ENTSO-E (real-time) data (requires API key)"


def fetch_series(
    provider: Provider | str,
    date_range: DateRange | str,
    now: datetime | None = None,
    profile: Profile | str | None = None,
) -> GenerationSeries:
    """Produce the series for a provider and range.

    Args:
        provider: Provider to serve.
        date_range: Requested window.
        now: Optional reference instant (see `generate`).
        profile: Optional profile overriding the provider's default one.

    Raises:
        UnsupportedProviderError: For ENTSO-E, which requires API access that
            is not implemented. Raised before any generation work.
    """
    provider = Provider.parse(provider)
    if provider not in PROVIDER_PROFILES:
        raise UnsupportedProviderError(provider, "integration requires API key setup")
    return generate(date_range, profile or PROVIDER_PROFILES[provider], now=now)


def fetch_with_fallback(
    provider: Provider | str,
    date_range: DateRange | str,
    now: datetime | None = None,
    profile: Profile | str | None = None,
) -> tuple[GenerationSeries, str | None]:
    """Like `fetch_series`, but fall back to the mock provider on failure.

    Returns:
        tuple[GenerationSeries, str | None]: The series and, when a fallback
        happened, the error message that caused it.
    """
    try:
        return fetch_series(provider, date_range, now=now, profile=profile), None
    except UnsupportedProviderError as exc:
        logger.warning("Provider failed (%s); falling back to mock data", exc)
        return fetch_series(Provider.MOCK, date_range, now=now), str(exc)
