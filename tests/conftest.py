"""Shared test fixtures."""

import pytest
from fastapi.testclient import TestClient

from kisan_saathi.collections.chat_session import clear_chat_sessions
from kisan_saathi.main import app
from kisan_saathi.models.weather import WeatherReading


@pytest.fixture(autouse=True)
def _no_chat_delay(monkeypatch: pytest.MonkeyPatch) -> None:
    """Answer chat turns immediately and keep data sources on mock."""
    monkeypatch.setattr("kisan_saathi.core.config.settings.CHAT_RESPONSE_DELAY_SECONDS", 0)
    monkeypatch.setattr("kisan_saathi.core.config.settings.WEATHER_SOURCE", "mock")
    monkeypatch.setattr("kisan_saathi.core.config.settings.MARKET_SOURCE", "mock")


@pytest.fixture(autouse=True)
def _fresh_sessions():
    clear_chat_sessions()
    yield
    clear_chat_sessions()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_reading():
    """Build a WeatherReading with neutral defaults, overriding selected fields."""

    def _make(**overrides) -> WeatherReading:
        values = {
            "temperature": 20,
            "description": "clear",
            "humidity": 50,
            "wind_speed": 5,
            "pressure": 1013,
            "visibility": 10,
            "location": "Pune",
        }
        values.update(overrides)
        return WeatherReading(**values)

    return _make
