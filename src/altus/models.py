"""Data models for geocoding results and Open-Meteo forecast data."""

from __future__ import annotations

import enum
import time
from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class Location:
    """A resolved place, as returned by the geocoding service.

    The display name is the identity of a location: favorites are keyed by
    it, so two results with the same name, region and country are the same
    location for the application.

    Attributes:
        display_name: "Name, Region, Country", or "Name, Country" when the
            geocoding result carries no first-level admin region.
        latitude: Latitude in decimal degrees.
        longitude: Longitude in decimal degrees.
    """

    display_name: str
    latitude: float
    longitude: float


def parse_location(raw: dict) -> Location:
    """Parse a single geocoding API result into a Location."""
    name = raw.get("name", "")
    admin = raw.get("admin1")
    country = raw.get("country", "")
    # "Lyon, Auvergne-Rhône-Alpes, France"; admin1 is missing for some
    # city-states and small territories.
    display_name = f"{name}, {admin}, {country}" if admin else f"{name}, {country}"
    return Location(
        display_name=display_name,
        latitude=float(raw["latitude"]),
        longitude=float(raw["longitude"]),
    )


@dataclass
class CurrentConditions:
    """Conditions at fetch time. Only meaningful for day 0."""

    temperature: float
    apparent_temperature: float
    humidity_percent: float
    wind_speed: float
    weather_code: int


@dataclass
class HourlySeries:
    """Parallel hourly sequences in location-local time.

    Index 0 is midnight of day 0 and every day occupies 24 consecutive
    entries, so the entry for day d, hour h lives at d * 24 + h.
    """

    time: list[str]
    temperature: list[float]
    weather_code: list[int]
    precipitation_probability: list[int | None]

    def __len__(self) -> int:
        return len(self.time)

    def hour_of(self, index: int) -> int:
        """Local hour of day (0-23) for an entry."""
        return datetime.fromisoformat(self.time[index]).hour


@dataclass
class DailySeries:
    """One entry per forecast day."""

    time: list[str]
    weather_code: list[int]
    temperature_max: list[float]
    temperature_min: list[float]

    def __len__(self) -> int:
        return len(self.time)


@dataclass
class ForecastPayload:
    """Current, hourly and daily blocks of one forecast response.

    Treated as read-only once parsed. fetch_time is the Unix timestamp of
    the request and drives the periodic refresh of the display app.
    """

    current: CurrentConditions
    hourly: HourlySeries
    daily: DailySeries
    timezone: str = ""
    fetch_time: float = 0.0


def parse_forecast(raw: dict) -> ForecastPayload:
    """Parse an Open-Meteo forecast response into a ForecastPayload.

    Raises KeyError if one of the current/hourly/daily blocks is missing.
    """
    cur = raw["current"]
    hourly = raw["hourly"]
    daily = raw["daily"]
    times = hourly.get("time", [])
    return ForecastPayload(
        current=CurrentConditions(
            temperature=cur.get("temperature_2m"),
            apparent_temperature=cur.get("apparent_temperature"),
            humidity_percent=cur.get("relative_humidity_2m"),
            wind_speed=cur.get("wind_speed_10m"),
            weather_code=cur.get("weather_code"),
        ),
        hourly=HourlySeries(
            time=list(times),
            temperature=list(hourly.get("temperature_2m", [])),
            weather_code=list(hourly.get("weather_code", [])),
            # precipitation_probability is null-filled on some models
            precipitation_probability=list(
                hourly.get("precipitation_probability") or [None] * len(times)
            ),
        ),
        daily=DailySeries(
            time=list(daily.get("time", [])),
            weather_code=list(daily.get("weather_code", [])),
            temperature_max=list(daily.get("temperature_2m_max", [])),
            temperature_min=list(daily.get("temperature_2m_min", [])),
        ),
        timezone=raw.get("timezone", ""),
        fetch_time=time.time(),
    )


@dataclass
class DisplaySnapshot:
    """The "current conditions" block shown for the selected day.

    For future days, wind speed and humidity are today's current values: the
    forecast carries no per-day wind or humidity series. approximate is True
    whenever that reuse happened.
    """

    temperature: float
    weather_code: int
    wind_speed: float
    humidity_percent: float
    feels_like: float
    approximate: bool = False


@dataclass
class HourSlot:
    """One entry of the hourly window."""

    hour: int
    temperature: float
    weather_code: int
    is_rain_alert_hour: bool
    is_high_temp_alert_hour: bool

    @property
    def alert_class(self) -> str:
        """Display class of the slot: rain, temp, or empty. Rain wins when both apply."""
        if self.is_rain_alert_hour:
            return "rain"
        if self.is_high_temp_alert_hour:
            return "temp"
        return ""


@dataclass
class AlertResult:
    """Alert decision for the look-ahead horizon of one day.

    Attributes:
        rain_alert: A rain code occurs within the horizon.
        rain_hour_offset: 1-indexed offset of the first rainy hour
            ("in N hours"), or None.
        temp_alert: A temperature above the threshold occurs within the horizon.
        high_temp: The first temperature above the threshold, or None.
    """

    rain_alert: bool = False
    rain_hour_offset: int | None = None
    temp_alert: bool = False
    high_temp: float | None = None


@dataclass
class DaySummary:
    """One button of the day selector."""

    index: int
    label: str
    date_label: str
    weather_code: int
    temperature_max: float
    temperature_min: float


@dataclass
class FavoriteEntry:
    """A persisted favorite city, stored as {name, lat, lon}."""

    name: str
    lat: float
    lon: float

    def to_dict(self) -> dict:
        return {"name": self.name, "lat": self.lat, "lon": self.lon}

    @classmethod
    def from_dict(cls, raw: dict) -> FavoriteEntry:
        return cls(name=raw["name"], lat=float(raw["lat"]), lon=float(raw["lon"]))

    @classmethod
    def from_location(cls, location: Location) -> FavoriteEntry:
        return cls(name=location.display_name, lat=location.latitude, lon=location.longitude)

    def to_location(self) -> Location:
        return Location(display_name=self.name, latitude=self.lat, longitude=self.lon)


class Theme(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass
class ViewState:
    """Presentation-owned state: what is shown and how.

    Passed explicitly to the pure view functions in altus.app instead of
    living in module-level variables.
    """

    location: Location
    payload: ForecastPayload
    day_index: int = 0
    hourly_window: int = 4


@dataclass
class WeatherView:
    """Everything the renderer needs for one frame."""

    location: Location
    day_index: int
    hourly_window: int
    snapshot: DisplaySnapshot
    hours: list[HourSlot]
    alerts: AlertResult
    days: list[DaySummary] = field(default_factory=list)
