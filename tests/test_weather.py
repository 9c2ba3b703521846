"""Tests for altus.weather."""

from unittest.mock import MagicMock, patch

import pytest
import requests

from altus.errors import ForecastUnavailable
from altus.models import ForecastPayload
from altus.weather import ForecastFetcher


@pytest.fixture
def fetcher(config):
    return ForecastFetcher(config)


@pytest.fixture
def mock_forecast_response(forecast_raw):
    mock_resp = MagicMock()
    mock_resp.json.return_value = forecast_raw
    mock_resp.raise_for_status.return_value = None
    return mock_resp


class TestFetch:
    @patch("altus.weather.requests.Session.get")
    def test_calls_forecast_url(self, mock_get, fetcher, mock_forecast_response):
        """Verify that the request goes to the forecast endpoint."""
        mock_get.return_value = mock_forecast_response
        fetcher.fetch(48.85, 2.35)
        assert mock_get.call_args[0][0] == "https://api.open-meteo.com/v1/forecast"

    @patch("altus.weather.requests.Session.get")
    def test_query_params(self, mock_get, fetcher, mock_forecast_response):
        """Verify the fixed field lists, automatic timezone and 7-day horizon."""
        mock_get.return_value = mock_forecast_response
        fetcher.fetch(48.85, 2.35)

        params = mock_get.call_args[1]["params"]
        assert params["latitude"] == 48.85
        assert params["longitude"] == 2.35
        assert params["current"] == (
            "temperature_2m,relative_humidity_2m,apparent_temperature,weather_code,wind_speed_10m"
        )
        assert params["hourly"] == "temperature_2m,weather_code,precipitation_probability"
        assert params["daily"] == "weather_code,temperature_2m_max,temperature_2m_min"
        assert params["timezone"] == "auto"
        assert params["forecast_days"] == 7

    @patch("altus.weather.requests.Session.get")
    def test_returns_payload(self, mock_get, fetcher, mock_forecast_response):
        """Verify that the response is parsed into a ForecastPayload."""
        mock_get.return_value = mock_forecast_response
        payload = fetcher.fetch(48.85, 2.35)
        assert isinstance(payload, ForecastPayload)
        assert payload.current.temperature == 7.4
        assert len(payload.hourly) == 168

    @patch("altus.weather.requests.Session.get")
    def test_connection_error(self, mock_get, fetcher):
        """Verify that a connection error surfaces as ForecastUnavailable."""
        mock_get.side_effect = requests.exceptions.ConnectionError("No connection")
        with pytest.raises(ForecastUnavailable) as exc_info:
            fetcher.fetch(48.85, 2.35)
        assert str(exc_info.value) == "Erreur lors de la récupération des données météo"

    @patch("altus.weather.requests.Session.get")
    def test_http_error(self, mock_get, fetcher):
        """Verify that a 400 answer (e.g. invalid coordinates) surfaces as ForecastUnavailable."""
        mock_resp = MagicMock()
        mock_resp.raise_for_status.side_effect = requests.exceptions.HTTPError("400 Bad Request")
        mock_get.return_value = mock_resp
        with pytest.raises(ForecastUnavailable):
            fetcher.fetch(123.0, 2.35)

    @patch("altus.weather.requests.Session.get")
    def test_missing_block(self, mock_get, fetcher, forecast_raw):
        """Verify that a response without an hourly block surfaces as ForecastUnavailable."""
        del forecast_raw["hourly"]
        mock_resp = MagicMock()
        mock_resp.json.return_value = forecast_raw
        mock_resp.raise_for_status.return_value = None
        mock_get.return_value = mock_resp
        with pytest.raises(ForecastUnavailable):
            fetcher.fetch(48.85, 2.35)
