"""Rain and high-temperature alerts for the next hours of a day."""

from __future__ import annotations

from dataclasses import dataclass

from altus.codes import (
    ALERT_HORIZON_HOURS,
    TEMP_THRESHOLD,
    is_high_temp,
    is_rain_code,
    round_half_up,
)
from altus.models import AlertResult, HourlySeries


@dataclass(frozen=True)
class Notification:
    """An outgoing alert notification.

    The tag combines alert type and city so the notification layer can
    replace an older alert of the same kind instead of stacking them.
    """

    title: str
    body: str
    tag: str


def evaluate(
    hourly: HourlySeries,
    day_start_hour: int,
    horizon_hours: int = ALERT_HORIZON_HOURS,
) -> AlertResult:
    """Scan the first horizon_hours hours from day_start_hour.

    The first rainy hour and the first hour above the temperature threshold
    are recorded; later hours never overwrite them. Both alerts can fire for
    the same hour.
    """
    result = AlertResult()
    length = len(hourly)
    for offset in range(horizon_hours):
        index = day_start_hour + offset
        if index >= length:
            break
        if not result.rain_alert and is_rain_code(hourly.weather_code[index]):
            result.rain_alert = True
            result.rain_hour_offset = offset + 1
        temperature = hourly.temperature[index]
        if not result.temp_alert and is_high_temp(temperature):
            result.temp_alert = True
            result.high_temp = temperature
    return result


def rain_message(hour_offset: int) -> str:
    plural = "s" if hour_offset > 1 else ""
    return f"🌧️ Pluie prévue dans {hour_offset} heure{plural} !"


def temp_message(high_temp: float) -> str:
    return f"🌡️ Température supérieure à {TEMP_THRESHOLD}°C prévue ({round_half_up(high_temp)}°C)"


def build_notifications(city: str, result: AlertResult) -> list[Notification]:
    """Turn an alert decision into notifications, rain first."""
    title = f"Altus - {city}"
    notifications = []
    if result.rain_alert:
        notifications.append(
            Notification(title, rain_message(result.rain_hour_offset), f"weather-rain-{city}")
        )
    if result.temp_alert:
        notifications.append(
            Notification(title, temp_message(result.high_temp), f"weather-temp-{city}")
        )
    return notifications
