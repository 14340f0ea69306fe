"""Tests covering the CLI and its helpers."""

from __future__ import annotations

import json
from datetime import datetime, timezone

import pandas as pd

from gridmix import run


def test_iso_and_parse_roundtrip():
    """`iso` and `parse_utc` should be inverse helpers for UTC datetimes."""

    dt = datetime(2024, 1, 1, 6, tzinfo=timezone.utc)
    assert run.parse_utc("2024-01-01T06:00:00Z") == dt
    assert run.iso(dt) == "2024-01-01T06:00:00+00:00"


def test_parse_utc_naive_is_utc():
    assert run.parse_utc("2024-01-01T06:00") == datetime(2024, 1, 1, 6, tzinfo=timezone.utc)


def test_run_happy_path():
    stats = run.run(date_range="48h", provider="eirgrid", now="2024-01-10T12:00:00Z")

    assert stats["points"] == 193
    assert stats["end"] == "2024-01-10T12:00:00+00:00"
    assert stats["start"] == "2024-01-08T12:00:00+00:00"
    assert stats["profile"] == "realistic"
    assert stats["provider"] == "eirgrid"
    assert stats["fallback"] is None


def test_run_falls_back_for_entsoe():
    stats = run.run(date_range="24h", provider="entsoe", now="2024-01-10T12:00:00Z")

    assert stats["profile"] == "mock"
    assert stats["provider"] == "entsoe"
    assert "ENTSO-E" in stats["fallback"]


def test_run_profile_file(tmp_path):
    """A JSON profile replaces the provider's preset."""

    path = tmp_path / "calm.json"
    path.write_text(json.dumps({"wind_amplitude": 0.0}))

    stats = run.run(profile_file=str(path), now="2024-01-10T12:00:00Z")

    assert stats["profile"] == "calm"


def test_run_profile_beats_profile_file(tmp_path):
    path = tmp_path / "calm.json"
    path.write_text(json.dumps({}))

    stats = run.run(profile="mock-entsoe", profile_file=str(path), now="2024-01-10T12:00:00Z")

    assert stats["profile"] == "mock-entsoe"


def test_run_writes_csv(tmp_path):
    out = tmp_path / "series.csv"

    run.run(date_range="7d", now="2024-01-10T12:00:00Z", csv_path=str(out))

    df = pd.read_csv(out)
    assert len(df) == 337
    assert list(df.columns)[:2] == ["timestamp", "carbon_intensity_gco2_kwh"]


def test_main_invokes_run(monkeypatch, capsys):
    """The CLI wrapper should invoke `run` and surface summary stats."""

    captured = {}

    def fake_run(**kwargs):
        captured.update(kwargs)
        return {"points": 1}

    monkeypatch.setattr(run, "run", fake_run)
    monkeypatch.setattr(run.config, "configure_logging", lambda level=None: None)

    code = run.main(["--range", "7d", "--provider", "eirgrid"])

    assert code == 0
    assert captured["date_range"] == "7d"
    assert captured["provider"] == "eirgrid"
    assert "Done. Stats" in capsys.readouterr().out


def test_main_uses_env_defaults(monkeypatch, capsys):
    """Defaults come from the environment when flags are omitted."""

    captured = {}
    monkeypatch.setenv("GRIDMIX_DEFAULT_RANGE", "48h")
    monkeypatch.setenv("GRIDMIX_DEFAULT_PROVIDER", "entsoe")
    monkeypatch.delenv("GRIDMIX_PROFILE_FILE", raising=False)
    monkeypatch.setattr(run, "run", lambda **kw: captured.update(kw) or {})
    monkeypatch.setattr(run.config, "configure_logging", lambda level=None: None)

    run.main([])

    assert captured["date_range"] == "48h"
    assert captured["provider"] == "entsoe"
    assert captured["profile_file"] is None


def test_run_profile_file_only_applies_to_mock(tmp_path):
    """Other providers keep their own profile when a JSON profile is set."""

    path = tmp_path / "calm.json"
    path.write_text(json.dumps({"wind_amplitude": 0.0}))

    stats = run.run(provider="eirgrid", profile_file=str(path), now="2024-01-10T12:00:00Z")

    assert stats["profile"] == "realistic"
    assert stats["provider"] == "eirgrid"
