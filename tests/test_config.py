import dataclasses
import logging

import pytest

from cargo_planner.config import (
    AMADEUS_PRODUCTION_URL,
    AMADEUS_TEST_URL,
    Settings,
    configure_logging,
    load_settings,
)

ENV_VARS = (
    "GOOGLE_MAPS_API_KEY",
    "AMADEUS_CLIENT_ID",
    "AMADEUS_CLIENT_SECRET",
    "AMADEUS_ENV",
    "HTTP_TIMEOUT_SECONDS",
    "AIRPORT_SEARCH_RADIUS_MILES",
    "FLIGHT_SEARCH_DAYS",
    "LOG_LEVEL",
)


def _clear(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_when_environment_is_empty(monkeypatch, tmp_path):
    _clear(monkeypatch)
    settings = load_settings(str(tmp_path / "missing.env"))

    assert settings.amadeus_env == "test"
    assert settings.amadeus_base_url == AMADEUS_TEST_URL
    assert settings.http_timeout_seconds == 20
    assert settings.airport_search_radius_miles == 50.0
    assert settings.flight_search_days == 3
    assert settings.missing() == ["GOOGLE_MAPS_API_KEY", "AMADEUS_CLIENT_ID", "AMADEUS_CLIENT_SECRET"]


def test_values_from_env_file(monkeypatch, tmp_path):
    _clear(monkeypatch)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "GOOGLE_MAPS_API_KEY=maps\n"
        "AMADEUS_CLIENT_ID=id\n"
        "AMADEUS_CLIENT_SECRET=secret\n"
        "AMADEUS_ENV=Production\n"
        "FLIGHT_SEARCH_DAYS=5\n"
        "LOG_LEVEL=debug\n"
    )

    settings = load_settings(str(env_file))

    assert settings.missing() == []
    assert settings.amadeus_base_url == AMADEUS_PRODUCTION_URL
    assert settings.flight_search_days == 5
    assert settings.log_level == "DEBUG"


def test_settings_is_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        Settings().amadeus_env = "production"


def test_configure_logging_sets_root_level(monkeypatch):
    calls = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))

    configure_logging("debug")

    assert calls[0]["level"] == logging.DEBUG
