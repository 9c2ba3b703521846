"""Configuration loading: defaults → YAML overlay → argparse overlay."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from altus.codes import HOURLY_WINDOWS


@dataclass
class ApiConfig:
    """Open-Meteo endpoints and request settings.

    Attributes:
        geocoding_url: Geocoding search endpoint (name → coordinates).
        weather_url: Forecast endpoint (coordinates → current/hourly/daily).
        language: Language of place names in geocoding results.
        timeout_seconds: Per-request timeout passed to requests.
    """

    geocoding_url: str = "https://geocoding-api.open-meteo.com/v1/search"
    weather_url: str = "https://api.open-meteo.com/v1/forecast"
    language: str = "fr"
    timeout_seconds: int = 10


@dataclass
class LocationConfig:
    """City loaded at startup. --city overrides it."""

    city: str = "Paris"


@dataclass
class ForecastConfig:
    """Forecast display settings.

    Attributes:
        hourly_window: Number of hours shown in the hourly strip (4, 8 or 12).
        refresh_seconds: Seconds before the display app re-fetches the
            forecast for the current city.
    """

    hourly_window: int = 4
    # 10-minute cache before re-fetching the forecast
    refresh_seconds: int = 600


@dataclass
class SearchConfig:
    """Type-ahead suggestion settings.

    Attributes:
        suggestion_count: Maximum number of suggestions requested per lookup.
        min_query_length: Shorter queries hide the suggestion list instead of
            hitting the geocoding service.
        debounce_ms: Quiet period after the last keystroke before a
            suggestion lookup is sent.
    """

    suggestion_count: int = 5
    min_query_length: int = 2
    debounce_ms: int = 300


@dataclass
class StorageConfig:
    """Location of the key-value file holding favorites and the theme."""

    path: str = field(
        default_factory=lambda: str(Path.home() / ".config" / "altus" / "storage.json")
    )


@dataclass
class NotificationConfig:
    """Alert notifications for today's forecast."""

    enabled: bool = True


@dataclass
class DisplayConfig:
    """Pygame window settings.

    Attributes:
        width: Window width in pixels.
        height: Window height in pixels. Font sizes scale relative to a
            320px base.
        fullscreen: Run Pygame in fullscreen mode.
        fps: Target frames per second for the main loop.
        theme: "light" or "dark" to force a theme, or None to use the
            theme persisted in storage.
    """

    width: int = 960
    height: int = 320
    fullscreen: bool = False
    fps: int = 20
    theme: str | None = None


@dataclass
class FontConfig:
    """Font files, loaded from the project's fonts/ directory."""

    font_bold: str = "JetBrainsMono-Bold.ttf"
    font_regular: str = "JetBrainsMono-Regular.ttf"


@dataclass
class Config:
    """Top-level application configuration.

    Assembled from three layers with increasing priority:
      1. Hardcoded defaults (dataclass field values)
      2. YAML file overlay (config.yaml or --config path)
      3. CLI argument overlay (--city, --hours, etc.)

    Attributes:
        api: Open-Meteo endpoints and timeouts.
        location: Default city.
        forecast: Hourly window and refresh settings.
        search: Suggestion lookup settings.
        storage: Key-value storage location.
        notifications: Alert notification settings.
        display: Pygame window settings.
        fonts: Font files.
        day: CLI-only: day index (0-6) shown first.
        search_query: CLI-only: city to look up and print (--search).
        suggest_query: CLI-only: text to print suggestions for (--suggest).
        list_favorites: CLI-only: print stored favorites and exit.
        render_test: CLI-only: save a test render to assets/ and exit.
        debug: CLI-only: enable debug-level logging.
    """

    api: ApiConfig = field(default_factory=ApiConfig)
    location: LocationConfig = field(default_factory=LocationConfig)
    forecast: ForecastConfig = field(default_factory=ForecastConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    storage: StorageConfig = field(default_factory=StorageConfig)
    notifications: NotificationConfig = field(default_factory=NotificationConfig)
    display: DisplayConfig = field(default_factory=DisplayConfig)
    fonts: FontConfig = field(default_factory=FontConfig)
    # CLI-only flags (not persisted in YAML)
    day: int = 0
    search_query: str | None = None
    suggest_query: str | None = None
    list_favorites: bool = False
    render_test: bool = False
    debug: bool = False


_SECTION_KEYS = {
    "api": ("geocoding_url", "weather_url", "language", "timeout_seconds"),
    "location": ("city",),
    "forecast": ("hourly_window", "refresh_seconds"),
    "search": ("suggestion_count", "min_query_length", "debounce_ms"),
    "storage": ("path",),
    "notifications": ("enabled",),
    "display": ("width", "height", "fullscreen", "fps", "theme"),
    "fonts": ("font_bold", "font_regular"),
}


def _apply_yaml(config: Config, yaml_path: str) -> None:
    """Overlay YAML config values onto the Config object."""
    if not os.path.exists(yaml_path):
        return

    with open(yaml_path, "r") as f:
        data = yaml.safe_load(f)

    if not data:
        return

    for section, keys in _SECTION_KEYS.items():
        values = data.get(section)
        if not values:
            continue
        target = getattr(config, section)
        for key in keys:
            if key in values:
                setattr(target, key, values[key])

    if "path" in (data.get("storage") or {}):
        config.storage.path = os.path.expanduser(str(config.storage.path))


def _build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser.

    All arguments are optional overlays on top of YAML config.
    """
    parser = argparse.ArgumentParser(
        prog="altus",
        description="Météo par ville avec alertes pluie et température",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to YAML config file",
    )
    parser.add_argument(
        "--city",
        type=str,
        help="City shown at startup",
    )
    parser.add_argument(
        "--day",
        type=int,
        choices=range(7),
        help="Day index shown first (0 = today)",
    )
    parser.add_argument(
        "--hours",
        type=int,
        choices=HOURLY_WINDOWS,
        help="Length of the hourly window",
    )
    parser.add_argument(
        "--search",
        type=str,
        help="Look up a city and print its forecast",
    )
    parser.add_argument(
        "--suggest",
        type=str,
        help="Print city suggestions for a partial name",
    )
    parser.add_argument(
        "--favorites",
        action="store_true",
        default=False,
        help="List stored favorite cities",
    )
    parser.add_argument(
        "--render-test",
        action="store_true",
        default=False,
        help="Render a mock forecast to assets/",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        default=None,
        help="Run in fullscreen mode",
    )
    parser.add_argument(
        "--no-notify",
        action="store_true",
        default=False,
        help="Disable alert notifications",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=False,
        help="Enable debug logging",
    )
    return parser


def _apply_args(config: Config, args: argparse.Namespace) -> None:
    """Overlay CLI arguments onto the Config object."""
    if args.city:
        config.location.city = args.city

    if args.day is not None:
        config.day = args.day

    if args.hours is not None:
        config.forecast.hourly_window = args.hours

    if args.fullscreen is True:
        config.display.fullscreen = True

    if args.no_notify:
        config.notifications.enabled = False

    if args.search:
        config.search_query = args.search

    if args.suggest:
        config.suggest_query = args.suggest

    config.list_favorites = args.favorites
    config.render_test = args.render_test
    config.debug = args.debug


def load_config(
    yaml_path: str | None = None,
    cli_args: list[str] | None = None,
) -> Config:
    """Load config: defaults → YAML overlay → argparse overlay.

    Args:
        yaml_path: Path to YAML config file. Defaults to config.yaml in project root.
        cli_args: CLI arguments list. None means use sys.argv.
    """
    config = Config()

    parser = _build_parser()
    args = parser.parse_args(cli_args if cli_args is not None else None)

    # Default YAML path: config.yaml in project root (three levels up from
    # this file). CLI --config overrides.
    if yaml_path is None:
        if args.config:
            yaml_path = args.config
        else:
            yaml_path = os.path.join(
                Path(__file__).resolve().parent.parent.parent, "config.yaml"
            )

    _apply_yaml(config, yaml_path)
    _apply_args(config, args)

    return config
