"""Alert thresholds and the WMO weather code table.

Open-Meteo reports conditions as WMO weather interpretation codes. Each code
maps to an emoji (CLI and notifications), a category, and a short French label
(PIL renderer, whose fonts carry no emoji glyphs).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

# Drizzle, freezing drizzle, rain, freezing rain, snow, showers, thunderstorm.
RAIN_CODES = frozenset(
    {51, 53, 55, 56, 57, 61, 63, 65, 66, 67, 71, 73, 75, 77, 80, 81, 82, 85, 86, 95, 96, 99}
)
# High-temperature alert fires strictly above this value (°C)
TEMP_THRESHOLD = 10

FORECAST_DAYS = 7
HOURS_PER_DAY = 24
# Local hour sampled for non-today snapshots
MIDDAY_HOUR = 12
# Look-ahead used for alert evaluation, independent of the display window
ALERT_HORIZON_HOURS = 4
# Hourly window lengths offered by the UI toggle
HOURLY_WINDOWS = (4, 8, 12)
DEBOUNCE_SECONDS = 0.3
MIN_SUGGESTION_LENGTH = 2


@dataclass(frozen=True)
class WeatherCode:
    """Display attributes of a single WMO weather code."""

    emoji: str
    category: str
    label: str


WEATHER_CODES: dict[int, WeatherCode] = {
    0: WeatherCode("☀️", "clear", "Dégagé"),
    1: WeatherCode("🌤️", "mainly_clear", "Plutôt dégagé"),
    2: WeatherCode("⛅", "partly_cloudy", "Partiellement nuageux"),
    3: WeatherCode("☁️", "overcast", "Couvert"),
    45: WeatherCode("🌫️", "fog", "Brouillard"),
    48: WeatherCode("🌫️", "fog", "Brouillard givrant"),
    51: WeatherCode("🌦️", "drizzle", "Bruine légère"),
    53: WeatherCode("🌦️", "drizzle", "Bruine"),
    55: WeatherCode("🌧️", "drizzle", "Bruine dense"),
    56: WeatherCode("🌨️", "freezing_drizzle", "Bruine verglaçante"),
    57: WeatherCode("🌨️", "freezing_drizzle", "Bruine verglaçante dense"),
    61: WeatherCode("🌧️", "rain", "Pluie faible"),
    63: WeatherCode("🌧️", "rain", "Pluie"),
    65: WeatherCode("🌧️", "rain", "Forte pluie"),
    66: WeatherCode("🌨️", "freezing_rain", "Pluie verglaçante"),
    67: WeatherCode("🌨️", "freezing_rain", "Forte pluie verglaçante"),
    71: WeatherCode("🌨️", "snow", "Neige faible"),
    73: WeatherCode("🌨️", "snow", "Neige"),
    75: WeatherCode("❄️", "snow", "Forte neige"),
    77: WeatherCode("🌨️", "snow_grains", "Grains de neige"),
    80: WeatherCode("🌦️", "rain_showers", "Averses faibles"),
    81: WeatherCode("🌧️", "rain_showers", "Averses"),
    82: WeatherCode("⛈️", "rain_showers", "Averses violentes"),
    85: WeatherCode("🌨️", "snow_showers", "Averses de neige"),
    86: WeatherCode("❄️", "snow_showers", "Fortes averses de neige"),
    95: WeatherCode("⛈️", "thunderstorm", "Orage"),
    96: WeatherCode("⛈️", "thunderstorm", "Orage avec grêle"),
    99: WeatherCode("⛈️", "thunderstorm", "Orage avec forte grêle"),
}

# Codes the service adds later must still render
DEFAULT_CODE = WEATHER_CODES[1]


def describe(code: int | None) -> WeatherCode:
    """Look up a weather code, falling back to "mainly clear" for unknown codes."""
    if code is None:
        return DEFAULT_CODE
    return WEATHER_CODES.get(int(code), DEFAULT_CODE)


def weather_emoji(code: int | None) -> str:
    return describe(code).emoji


def weather_label(code: int | None) -> str:
    return describe(code).label


def is_rain_code(code: int | None) -> bool:
    """True if the code belongs to the precipitation set that raises a rain alert."""
    return code is not None and int(code) in RAIN_CODES


def is_high_temp(temperature: float | None) -> bool:
    """True if the temperature is strictly above TEMP_THRESHOLD."""
    return temperature is not None and temperature > TEMP_THRESHOLD


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves going up (10.5 -> 11, -2.5 -> -2)."""
    return math.floor(value + 0.5)
