"""Entry point for altus."""

import logging
import sys

from altus.codes import round_half_up, weather_emoji, weather_label
from altus.config import load_config
from altus.errors import AltusError


def format_view(view) -> list[str]:
    """Plain-text rendering of a WeatherView for terminal output."""
    snap = view.snapshot
    day = view.days[view.day_index] if view.day_index < len(view.days) else None
    day_str = f"{day.label} {day.date_label}" if day else f"Jour {view.day_index}"
    approx = " (approx.)" if snap.approximate else ""
    lines = [
        f"=== {view.location.display_name} - {day_str} ===",
        "",
        f"  {weather_emoji(snap.weather_code)} {round_half_up(snap.temperature)}°C  {weather_label(snap.weather_code)}",
        f"  Ressenti {round_half_up(snap.feels_like)}°C | Vent {round_half_up(snap.wind_speed)} km/h"
        f" | Humidité {round_half_up(snap.humidity_percent)} %{approx}",
        "",
    ]
    for slot in view.hours:
        marker = {"rain": " <- pluie", "temp": " <- chaud"}.get(slot.alert_class, "")
        lines.append(
            f"  {slot.hour:>2}h  {weather_emoji(slot.weather_code)}  {slot.temperature:>5.1f}°C{marker}"
        )
    alerts = view.alerts
    if alerts.rain_alert or alerts.temp_alert:
        lines.append("")
    if alerts.rain_alert:
        lines.append(f"  Alerte pluie dans {alerts.rain_hour_offset} h")
    if alerts.temp_alert:
        lines.append(f"  Alerte température : {round_half_up(alerts.high_temp)}°C")
    return lines


def run_search(config):
    """Look up a city and print the forecast for the selected day."""
    from altus.app import WeatherApp

    app = WeatherApp(config)
    app.set_hourly_window(config.forecast.hourly_window)
    view = app.search(config.search_query)
    if config.day:
        view = app.select_day(config.day)
    print("\n".join(format_view(view)))


def run_suggest(config):
    """Print city suggestions; prints nothing when there are none."""
    from altus.debounce import Debouncer
    from altus.geocoding import GeoResolver
    from altus.suggest import SuggestionBox

    query = config.suggest_query.strip()
    if len(query) < config.search.min_query_length:
        return
    box = SuggestionBox(
        GeoResolver(config),
        Debouncer(config.search.debounce_ms / 1000),
        max_results=config.search.suggestion_count,
        min_length=config.search.min_query_length,
    )
    # One-shot lookup: no keystrokes to debounce
    for i, loc in enumerate(box.fetch(query), 1):
        print(f"  {i}. {loc.display_name}  [{loc.latitude:.4f}, {loc.longitude:.4f}]")


def run_favorites(config):
    """List stored favorite cities."""
    from altus.storage import FavoritesStore, KeyValueStore

    favorites = FavoritesStore(KeyValueStore(config.storage.path)).load()
    if not favorites:
        print("Aucun favori pour le moment")
        return
    for fav in favorites:
        print(f"  {fav.name}  [{fav.lat:.4f}, {fav.lon:.4f}]")


def run_render_test(config):
    """Render a mock forecast in both themes."""
    from altus.models import Theme
    from altus.renderer import run_render_test as _run_render_test

    for theme in (Theme.LIGHT, Theme.DARK):
        print(f"Rendered test output to: {_run_render_test(config, theme)}")


def run_app(config):
    """Run the interactive Pygame application."""
    from altus.app import WeatherDisplayApp

    app = WeatherDisplayApp(config)
    app.run()


def main():
    """CLI entry point for the altus application.

    Loads configuration (defaults -> YAML -> CLI args), sets up logging
    to stderr, then dispatches to one mode based on CLI flags:
      --search:      look up a city and print its forecast
      --suggest:     print city suggestions for a partial name
      --favorites:   list stored favorites
      --render-test: save mock renders to assets/ and exit
      (default):     run the interactive forecast window
    """
    config = load_config()

    # Log to stderr so stdout is clean for --search and --suggest output.
    level = logging.DEBUG if config.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr,
    )

    logger = logging.getLogger(__name__)
    logger.debug("Config loaded: city=%s, debug=%s", config.location.city, config.debug)

    try:
        if config.search_query:
            logger.info("Searching for city: %s", config.search_query)
            run_search(config)
        elif config.suggest_query:
            run_suggest(config)
        elif config.list_favorites:
            run_favorites(config)
        elif config.render_test:
            logger.info("Running render test")
            run_render_test(config)
        else:
            logger.info("Starting display application")
            run_app(config)
    except KeyboardInterrupt:
        print("\nShutting down.")
        sys.exit(0)
    except AltusError as e:
        print(str(e), file=sys.stderr)
        sys.exit(1)
    except Exception as e:
        logger.error("Unexpected error: %s", e, exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
