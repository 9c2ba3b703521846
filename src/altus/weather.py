"""Weather client using Open-Meteo API (no API key required)."""

from __future__ import annotations

import logging
import time

import requests

from altus.codes import FORECAST_DAYS
from altus.config import Config
from altus.errors import ForecastUnavailable
from altus.models import ForecastPayload, parse_forecast

logger = logging.getLogger(__name__)

CURRENT_FIELDS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,"
    "weather_code,wind_speed_10m"
)
HOURLY_FIELDS = "temperature_2m,weather_code,precipitation_probability"
DAILY_FIELDS = "weather_code,temperature_2m_max,temperature_2m_min"


class ForecastFetcher:
    """Client for the Open-Meteo forecast API."""

    def __init__(self, config: Config) -> None:
        self.config = config
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def fetch(self, lat: float, lon: float) -> ForecastPayload:
        """Fetch current conditions plus 7 days of hourly and daily data.

        timezone=auto makes the service pick the location's zone, so hourly
        times (and index 24 * d + h) are local hours, not UTC.

        Raises ForecastUnavailable on transport errors, non-2xx answers and
        responses missing one of the current/hourly/daily blocks.
        """
        params = {
            "latitude": lat,
            "longitude": lon,
            "current": CURRENT_FIELDS,
            "hourly": HOURLY_FIELDS,
            "daily": DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": FORECAST_DAYS,
        }
        api = self.config.api
        logger.debug("Fetching forecast for %.4f,%.4f ...", lat, lon)
        t0 = time.time()
        try:
            resp = self.session.get(
                api.weather_url, params=params, timeout=api.timeout_seconds
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.RequestException as exc:
            logger.warning("Forecast request for %.4f,%.4f failed: %s", lat, lon, exc)
            raise ForecastUnavailable() from exc

        try:
            payload = parse_forecast(data)
        except KeyError as exc:
            logger.warning("Forecast response missing block %s", exc)
            raise ForecastUnavailable() from exc

        logger.info(
            "Forecast: %s°C now, %d hourly / %d daily entries (%.1fs)",
            payload.current.temperature, len(payload.hourly),
            len(payload.daily), time.time() - t0,
        )
        return payload
