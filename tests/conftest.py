"""Shared fixtures with sample Open-Meteo API JSON responses."""

from datetime import datetime, timedelta

import pytest

from altus.config import load_config
from altus.models import Location, parse_forecast
from altus.storage import KeyValueStore

# 2026-03-02 is a Monday
START = datetime(2026, 3, 2)


def make_forecast_raw(days: int = 7, codes: dict | None = None, temps: dict | None = None) -> dict:
    """Build a forecast response with days * 24 hourly entries.

    Hourly temperatures default to index / 100 (unique, all below the alert
    threshold) and codes to 3 (overcast). codes and temps override single
    indices.
    """
    hours = days * 24
    times = [(START + timedelta(hours=i)).strftime("%Y-%m-%dT%H:%M") for i in range(hours)]
    temperature = [i / 100 for i in range(hours)]
    weather_code = [3] * hours
    for index, code in (codes or {}).items():
        weather_code[index] = code
    for index, temp in (temps or {}).items():
        temperature[index] = temp
    return {
        "latitude": 48.86,
        "longitude": 2.3399997,
        "timezone": "Europe/Paris",
        "current": {
            "time": "2026-03-02T09:45",
            "temperature_2m": 7.4,
            "relative_humidity_2m": 81,
            "apparent_temperature": 5.1,
            "weather_code": 2,
            "wind_speed_10m": 14.2,
        },
        "hourly": {
            "time": times,
            "temperature_2m": temperature,
            "weather_code": weather_code,
            "precipitation_probability": [10] * hours,
        },
        "daily": {
            "time": [(START + timedelta(days=d)).strftime("%Y-%m-%d") for d in range(days)],
            "weather_code": [61, 3, 2, 1, 0, 80, 95][:days],
            "temperature_2m_max": [12.5 + d for d in range(days)],
            "temperature_2m_min": [3.5 + d for d in range(days)],
        },
    }


@pytest.fixture
def make_payload():
    """Factory building a parsed payload with per-index code and temperature overrides."""

    def _make(days: int = 7, codes: dict | None = None, temps: dict | None = None):
        return parse_forecast(make_forecast_raw(days=days, codes=codes, temps=temps))

    return _make


@pytest.fixture
def forecast_raw():
    """A full 7-day forecast response."""
    return make_forecast_raw()


@pytest.fixture
def payload(forecast_raw):
    return parse_forecast(forecast_raw)


@pytest.fixture
def sample_geocoding_response():
    """Geocoding response for "Lyon" with two candidates, one without admin1."""
    return {
        "results": [
            {
                "id": 2996944,
                "name": "Lyon",
                "latitude": 45.74846,
                "longitude": 4.84671,
                "country": "France",
                "admin1": "Auvergne-Rhône-Alpes",
            },
            {
                "id": 4238741,
                "name": "Lyon",
                "latitude": 40.0,
                "longitude": -91.0,
                "country": "États-Unis",
            },
        ],
        "generationtime_ms": 0.6,
    }


@pytest.fixture
def paris():
    return Location("Paris, Île-de-France, France", 48.85341, 2.3488)


@pytest.fixture
def config():
    return load_config(yaml_path="/nonexistent.yaml", cli_args=[])


@pytest.fixture
def kv_store(tmp_path):
    return KeyValueStore(tmp_path / "storage.json")


@pytest.fixture
def sample_config_yaml(tmp_path):
    """Create a temporary YAML config file."""
    yaml_content = """location:
  city: "Lyon"

api:
  language: "de"
  timeout_seconds: 5

forecast:
  hourly_window: 8
  refresh_seconds: 120

search:
  suggestion_count: 3
  debounce_ms: 150

notifications:
  enabled: false

display:
  width: 800
  height: 240
  fullscreen: true
  theme: dark

storage:
  path: ~/altus-test/storage.json
"""
    config_file = tmp_path / "config.yaml"
    config_file.write_text(yaml_content)
    return str(config_file)
