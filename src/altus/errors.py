"""Exception types raised by the lookup, fetch, and windowing steps.

The string form of each network error is the user-visible message describing
the step that failed. InsufficientData and InvalidDayIndex are contract
violations between the day selector and the forecast window.
"""

from __future__ import annotations


class AltusError(Exception):
    """Base class for all Altus errors."""


class GeocodingUnavailable(AltusError):
    """The geocoding service could not be reached or answered with an error."""

    def __init__(self, message: str = "Erreur de géocodage") -> None:
        super().__init__(message)


class NoMatch(AltusError):
    """A direct city search returned no location."""

    def __init__(self, query: str, message: str | None = None) -> None:
        self.query = query
        if message is None:
            message = f'Ville "{query}" non trouvée. Vérifiez l\'orthographe.'
        super().__init__(message)


class ForecastUnavailable(AltusError):
    """The forecast service could not be reached or answered with an error."""

    def __init__(
        self,
        message: str = "Erreur lors de la récupération des données météo",
    ) -> None:
        super().__init__(message)


class InsufficientData(AltusError):
    """The hourly series is too short for the requested day."""

    def __init__(self, day_index: int, index: int, length: int) -> None:
        self.day_index = day_index
        self.index = index
        self.length = length
        super().__init__(
            f"No hourly data for day {day_index}: index {index} >= length {length}"
        )


class InvalidDayIndex(AltusError):
    """A day index outside the forecast horizon was requested."""

    def __init__(self, day_index: int, forecast_days: int) -> None:
        self.day_index = day_index
        self.forecast_days = forecast_days
        super().__init__(
            f"Day index {day_index} outside 0..{forecast_days - 1}"
        )
