"""Tests for altus.models."""

import pytest

from altus.models import (
    FavoriteEntry,
    HourSlot,
    Location,
    Theme,
    parse_forecast,
    parse_location,
)


class TestParseLocation:
    """Tests for parse_location() converting geocoding results to Location objects."""

    def test_with_admin_region(self, sample_geocoding_response):
        """Verify that the display name includes the admin1 region when present."""
        loc = parse_location(sample_geocoding_response["results"][0])
        assert loc.display_name == "Lyon, Auvergne-Rhône-Alpes, France"
        assert loc.latitude == pytest.approx(45.74846)
        assert loc.longitude == pytest.approx(4.84671)

    def test_without_admin_region(self, sample_geocoding_response):
        """Verify that a missing admin1 is left out of the display name."""
        loc = parse_location(sample_geocoding_response["results"][1])
        assert loc.display_name == "Lyon, États-Unis"

    def test_empty_admin_region(self):
        """Verify that an empty admin1 string is treated like a missing one."""
        loc = parse_location(
            {"name": "Monaco", "admin1": "", "country": "Monaco", "latitude": 43.7, "longitude": 7.4}
        )
        assert loc.display_name == "Monaco, Monaco"

    def test_location_is_immutable(self, paris):
        """Verify that a Location cannot be modified after creation."""
        with pytest.raises(AttributeError):
            paris.latitude = 0.0

    def test_identity_by_value(self):
        """Verify that two locations with the same fields compare equal."""
        assert Location("A, B", 1.0, 2.0) == Location("A, B", 1.0, 2.0)


class TestParseForecast:
    """Tests for parse_forecast() converting forecast responses to ForecastPayload."""

    def test_current_block(self, forecast_raw):
        """Verify that current conditions map to CurrentConditions fields."""
        payload = parse_forecast(forecast_raw)
        assert payload.current.temperature == 7.4
        assert payload.current.apparent_temperature == 5.1
        assert payload.current.humidity_percent == 81
        assert payload.current.wind_speed == 14.2
        assert payload.current.weather_code == 2

    def test_hourly_lengths(self, forecast_raw):
        """Verify that all hourly sequences share the 7 * 24 length."""
        payload = parse_forecast(forecast_raw)
        hourly = payload.hourly
        assert len(hourly) == 168
        assert len(hourly.temperature) == len(hourly.weather_code) == 168
        assert len(hourly.precipitation_probability) == 168

    def test_daily_block(self, forecast_raw):
        """Verify that daily extremes and codes are parsed per day."""
        payload = parse_forecast(forecast_raw)
        assert len(payload.daily) == 7
        assert payload.daily.time[0] == "2026-03-02"
        assert payload.daily.temperature_max[0] == 12.5
        assert payload.daily.temperature_min[6] == 9.5

    def test_timezone_and_fetch_time(self, forecast_raw):
        """Verify that the resolved timezone and a fetch timestamp are recorded."""
        payload = parse_forecast(forecast_raw)
        assert payload.timezone == "Europe/Paris"
        assert payload.fetch_time > 0

    def test_missing_precipitation_probability(self, forecast_raw):
        """Verify that a missing precipitation series is null-filled to full length."""
        del forecast_raw["hourly"]["precipitation_probability"]
        payload = parse_forecast(forecast_raw)
        assert payload.hourly.precipitation_probability == [None] * 168

    def test_missing_block_raises(self, forecast_raw):
        """Verify that a response without a daily block raises KeyError."""
        del forecast_raw["daily"]
        with pytest.raises(KeyError):
            parse_forecast(forecast_raw)

    def test_does_not_alias_raw_lists(self, forecast_raw):
        """Verify that mutating the raw response does not change the payload."""
        payload = parse_forecast(forecast_raw)
        forecast_raw["hourly"]["temperature_2m"][0] = 99.0
        assert payload.hourly.temperature[0] == 0.0


class TestHourlySeries:
    """Tests for HourlySeries helpers."""

    def test_hour_of(self, payload):
        """Verify that hour_of() returns the local hour of day from the ISO time."""
        assert payload.hourly.hour_of(0) == 0
        assert payload.hourly.hour_of(13) == 13
        assert payload.hourly.hour_of(24 + 5) == 5


class TestHourSlot:
    """Tests for the HourSlot display class."""

    def _slot(self, rain: bool, hot: bool) -> HourSlot:
        return HourSlot(hour=8, temperature=12.0, weather_code=61, is_rain_alert_hour=rain, is_high_temp_alert_hour=hot)

    def test_rain_wins_over_temp(self):
        """Verify that an hour with both alerts is classified as rain."""
        assert self._slot(rain=True, hot=True).alert_class == "rain"

    def test_temp_only(self):
        assert self._slot(rain=False, hot=True).alert_class == "temp"

    def test_no_alert(self):
        assert self._slot(rain=False, hot=False).alert_class == ""


class TestFavoriteEntry:
    """Tests for FavoriteEntry conversions."""

    def test_stored_form(self, paris):
        """Verify the {name, lat, lon} stored shape built from a Location."""
        entry = FavoriteEntry.from_location(paris)
        assert entry.to_dict() == {"name": "Paris, Île-de-France, France", "lat": 48.85341, "lon": 2.3488}

    def test_back_to_location(self, paris):
        """Verify that a stored favorite converts back to the same Location."""
        entry = FavoriteEntry.from_dict({"name": paris.display_name, "lat": "48.85341", "lon": 2.3488})
        assert entry.to_location() == paris


class TestTheme:
    def test_values(self):
        """Verify that the theme values match the stored flag strings."""
        assert Theme("light") is Theme.LIGHT
        assert Theme("dark") is Theme.DARK
