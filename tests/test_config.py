"""Tests for environment-driven configuration."""

from voicenav.config import get_config, reset_config


def test_defaults():
    config = get_config()

    assert config.proximity.radius_meters == 1000.0
    assert config.proximity.max_stops == 5
    assert config.proximity.max_routes == 6
    assert config.proximity.fallback_label == "Unknown location"
    assert config.voice.manual_timeout_seconds == 15.0
    assert config.voice.simulated_confidence == 0.9
    assert config.voice.language == "en-US"
    assert config.catalog.routes_path.name == "routes.csv"
    assert config.catalog.routes_path.parent == config.project_root / "data"


def test_config_is_cached():
    assert get_config() is get_config()


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("VOICENAV_PROXIMITY_RADIUS_METERS", "1500")
    monkeypatch.setenv("VOICENAV_VOICE_MANUAL_TIMEOUT_SECONDS", "20")
    monkeypatch.setenv("VOICENAV_CATALOG_SOURCE", "csv")
    monkeypatch.setenv("VOICENAV_ARRIVALS_SEED", "7")
    reset_config()

    config = get_config()

    assert config.proximity.radius_meters == 1500.0
    assert config.voice.manual_timeout_seconds == 20.0
    assert config.catalog.source == "csv"
    assert config.arrivals.seed == 7
