"""Day selection and hourly windowing over a fetched forecast.

All functions here are pure: they read the payload, never mutate it, and keep
no state between calls.
"""

from __future__ import annotations

from datetime import date

from altus.codes import (
    FORECAST_DAYS,
    HOURS_PER_DAY,
    MIDDAY_HOUR,
    is_high_temp,
    is_rain_code,
)
from altus.errors import InsufficientData, InvalidDayIndex
from altus.models import (
    DailySeries,
    DaySummary,
    DisplaySnapshot,
    ForecastPayload,
    HourlySeries,
    HourSlot,
)

# date.weekday(): Monday is 0
DAY_NAMES = ("Lun", "Mar", "Mer", "Jeu", "Ven", "Sam", "Dim")
TODAY_LABEL = "Aujourd'hui"


def day_start_index(day_index: int, forecast_days: int = FORECAST_DAYS) -> int:
    """Hourly-series index of midnight for the given day."""
    if not 0 <= day_index < forecast_days:
        raise InvalidDayIndex(day_index, forecast_days)
    return day_index * HOURS_PER_DAY


def snapshot_for(payload: ForecastPayload, day_index: int) -> DisplaySnapshot:
    """Build the conditions block for the selected day.

    Today shows the current conditions as fetched. Other days sample the
    hourly series at local midday; feels-like is the midday temperature since
    no apparent-temperature series is requested. Wind and humidity have no
    per-day series either and keep today's current values (approximate=True).
    """
    start = day_start_index(day_index)
    current = payload.current

    if day_index == 0:
        return DisplaySnapshot(
            temperature=current.temperature,
            weather_code=current.weather_code,
            wind_speed=current.wind_speed,
            humidity_percent=current.humidity_percent,
            feels_like=current.apparent_temperature,
        )

    hourly = payload.hourly
    midday = start + MIDDAY_HOUR
    if midday >= len(hourly):
        raise InsufficientData(day_index, midday, len(hourly))

    temperature = hourly.temperature[midday]
    return DisplaySnapshot(
        temperature=temperature,
        weather_code=hourly.weather_code[midday],
        wind_speed=current.wind_speed,
        humidity_percent=current.humidity_percent,
        feels_like=temperature,
        approximate=True,
    )


def hourly_slice(hourly: HourlySeries, start_hour: int, count: int) -> list[HourSlot]:
    """Return up to count consecutive hours starting at start_hour.

    Hours beyond the end of the series are dropped, so the result is shorter
    than count near the end of the forecast.
    """
    slots: list[HourSlot] = []
    length = len(hourly)
    for offset in range(count):
        index = start_hour + offset
        if index >= length:
            break
        temperature = hourly.temperature[index]
        code = hourly.weather_code[index]
        slots.append(
            HourSlot(
                hour=hourly.hour_of(index),
                temperature=temperature,
                weather_code=code,
                is_rain_alert_hour=is_rain_code(code),
                is_high_temp_alert_hour=is_high_temp(temperature),
            )
        )
    return slots


def day_summaries(daily: DailySeries, forecast_days: int = FORECAST_DAYS) -> list[DaySummary]:
    """Labels and daily extremes for the day selector."""
    summaries = []
    for i in range(min(forecast_days, len(daily))):
        day = date.fromisoformat(daily.time[i][:10])
        summaries.append(
            DaySummary(
                index=i,
                label=TODAY_LABEL if i == 0 else DAY_NAMES[day.weekday()],
                date_label=f"{day.day}/{day.month}",
                weather_code=daily.weather_code[i],
                temperature_max=daily.temperature_max[i],
                temperature_min=daily.temperature_min[i],
            )
        )
    return summaries
