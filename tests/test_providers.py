"""Tests for provider dispatch and the mock fallback."""

from __future__ import annotations

import logging

import pytest

from gridmix import generator, providers
from gridmix.providers import Provider, UnsupportedProviderError


def test_parse_accepts_value_and_label():
    assert Provider.parse("eirgrid") is Provider.EIRGRID
    assert Provider.parse("ENTSO-E (real-time)") is Provider.ENTSOE


def test_parse_unknown():
    with pytest.raises(ValueError, match="mock, eirgrid, entsoe"):
        Provider.parse("nordpool")


def test_mock_uses_mock_profile(now):
    series = providers.fetch_series("mock", "24h", now=now)

    assert series.profile == "mock"
    assert series == generator.generate("24h", "mock", now=now)


def test_eirgrid_uses_realistic_profile(now):
    series = providers.fetch_series(Provider.EIRGRID, "48h", now=now)

    assert series.profile == "realistic"
    assert len(series.mix) == 193


def test_profile_override(now):
    series = providers.fetch_series("mock", "24h", now=now, profile="mock-eirgrid")

    assert series.profile == "mock-eirgrid"


def test_entsoe_fails_before_generating(monkeypatch, now):
    """The unimplemented provider raises without producing any points."""

    calls = []
    monkeypatch.setattr(providers, "generate", lambda *a, **kw: calls.append(a))

    with pytest.raises(UnsupportedProviderError) as exc:
        providers.fetch_series("entsoe", "24h", now=now)

    assert calls == []
    assert exc.value.provider is Provider.ENTSOE
    assert isinstance(exc.value, NotImplementedError)


def test_fallback_returns_mock_series(now, caplog):
    """Unsupported providers fall back to the mock series for the same range."""

    with caplog.at_level(logging.WARNING, logger="gridmix.providers"):
        series, error = providers.fetch_with_fallback("entsoe", "7d", now=now)

    assert series == generator.generate("7d", "mock", now=now)
    assert "ENTSO-E" in error
    assert "falling back to mock" in caplog.text


def test_fallback_not_used_for_supported_provider(now):
    series, error = providers.fetch_with_fallback("eirgrid", "24h", now=now)

    assert error is None
    assert series.profile == "realistic"


def test_describe_provider():
    assert providers.describe_provider("mock") == "Mock (offline) data"
    assert "API key" in providers.describe_provider(Provider.ENTSOE)
