"""Tests for altus.codes."""

import pytest

from altus.codes import (
    RAIN_CODES,
    TEMP_THRESHOLD,
    WEATHER_CODES,
    describe,
    is_high_temp,
    is_rain_code,
    round_half_up,
    weather_emoji,
    weather_label,
)


class TestRainCodes:
    """Tests for the rain-code set used by alerts."""

    def test_exact_membership(self):
        """Verify the exact set of codes that raise a rain alert."""
        assert RAIN_CODES == {
            51, 53, 55, 56, 57, 61, 63, 65, 66, 67, 71, 73, 75, 77,
            80, 81, 82, 85, 86, 95, 96, 99,
        }

    def test_dry_codes_are_not_rain(self):
        """Verify that clear, cloudy and fog codes never count as rain."""
        for code in (0, 1, 2, 3, 45, 48):
            assert not is_rain_code(code)

    def test_none_is_not_rain(self):
        assert not is_rain_code(None)


class TestHighTemp:
    """Tests for the strict greater-than temperature threshold."""

    def test_threshold_is_ten(self):
        assert TEMP_THRESHOLD == 10

    def test_strictly_greater(self):
        """Verify that exactly 10°C does not trigger and 10.1°C does."""
        assert not is_high_temp(10)
        assert is_high_temp(10.1)

    def test_none(self):
        assert not is_high_temp(None)


class TestDescribe:
    """Tests for the weather-code table and its fallback."""

    def test_known_code(self):
        """Verify the emoji and category of a known code."""
        assert weather_emoji(0) == "☀️"
        assert describe(95).category == "thunderstorm"
        assert weather_label(45) == "Brouillard"

    def test_unknown_code_falls_back(self):
        """Verify that codes missing from the table fall back to "mainly clear"."""
        assert describe(42) == WEATHER_CODES[1]
        assert weather_emoji(42) == "🌤️"

    def test_none_falls_back(self):
        assert describe(None) == WEATHER_CODES[1]

    def test_every_rain_code_has_an_entry(self):
        """Verify that all rain codes are present in the display table."""
        assert RAIN_CODES <= set(WEATHER_CODES)


class TestRoundHalfUp:
    """Tests for round_half_up()."""

    @pytest.mark.parametrize(
        "value,expected",
        [(10.5, 11), (11.5, 12), (10.4, 10), (-2.5, -2), (-2.6, -3), (0.0, 0), (81, 81)],
    )
    def test_values(self, value, expected):
        """Verify that halves round up, unlike round() which rounds them to even."""
        assert round_half_up(value) == expected
