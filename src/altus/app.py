"""Application controller and the interactive display loop.

build_view() and the state transitions are pure functions over ViewState.
WeatherApp owns the current state and exposes the commands the presentation
layer calls (search, select_city, select_day, set_hourly_window), each
returning the new WeatherView to render. WeatherDisplayApp drives a Pygame
window with keyboard commands on top of WeatherApp.
"""

from __future__ import annotations

import logging
import signal
import time
from dataclasses import replace

from altus.alerts import build_notifications, evaluate
from altus.codes import ALERT_HORIZON_HOURS, HOURLY_WINDOWS
from altus.config import Config
from altus.debounce import Debouncer
from altus.errors import AltusError, NoMatch
from altus.forecast import day_start_index, day_summaries, hourly_slice, snapshot_for
from altus.geocoding import GeoResolver
from altus.models import FavoriteEntry, Location, Theme, ViewState, WeatherView
from altus.notify import Notifier
from altus.storage import FavoritesStore, KeyValueStore, ThemeStore
from altus.suggest import SuggestionBox
from altus.weather import ForecastFetcher

logger = logging.getLogger(__name__)


def build_view(state: ViewState, alert_horizon: int = ALERT_HORIZON_HOURS) -> WeatherView:
    """Derive everything shown for the selected day from the state."""
    start = day_start_index(state.day_index)
    payload = state.payload
    return WeatherView(
        location=state.location,
        day_index=state.day_index,
        hourly_window=state.hourly_window,
        snapshot=snapshot_for(payload, state.day_index),
        hours=hourly_slice(payload.hourly, start, state.hourly_window),
        alerts=evaluate(payload.hourly, start, alert_horizon),
        days=day_summaries(payload.daily),
    )


def select_day(state: ViewState, day_index: int) -> ViewState:
    day_start_index(day_index)
    return replace(state, day_index=day_index)


def set_hourly_window(state: ViewState, count: int) -> ViewState:
    if count < 1:
        raise ValueError(f"Hourly window must be positive, got {count}")
    return replace(state, hourly_window=count)


class WeatherApp:
    """Command/query interface over the lookup, fetch and alert steps.

    Network errors propagate as AltusError subclasses whose message is meant
    for the user; nothing is retried here. Notifications are dispatched only
    when the resulting view is for today (day 0).
    """

    def __init__(
        self,
        config: Config,
        resolver: GeoResolver | None = None,
        fetcher: ForecastFetcher | None = None,
        notifier: Notifier | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self.config = config
        self.resolver = resolver or GeoResolver(config)
        self.fetcher = fetcher or ForecastFetcher(config)
        self.notifier = notifier or Notifier(enabled=config.notifications.enabled)
        store = store or KeyValueStore(config.storage.path)
        self.favorites_store = FavoritesStore(store)
        self.theme_store = ThemeStore(store)
        self.hourly_window = config.forecast.hourly_window
        self.state: ViewState | None = None
        self.view: WeatherView | None = None

    def _publish(self, notify: bool) -> WeatherView:
        self.view = build_view(self.state)
        if notify and self.state.day_index == 0:
            for notification in build_notifications(self.state.location.display_name, self.view.alerts):
                self.notifier.send(notification)
        return self.view

    def search(self, query: str) -> WeatherView:
        """Look up a city by name and show its forecast for today."""
        query = query.strip()
        if not query:
            raise NoMatch(query, "Veuillez entrer un nom de ville.")
        results = self.resolver.resolve(query, 1)
        if not results:
            logger.info("No city found for %r", query)
            raise NoMatch(query)
        return self.select_city(results[0])

    def select_city(self, location: Location) -> WeatherView:
        """Fetch the forecast for a location and show today."""
        logger.info("Loading forecast for %s", location.display_name)
        payload = self.fetcher.fetch(location.latitude, location.longitude)
        self.state = ViewState(
            location=location,
            payload=payload,
            day_index=0,
            hourly_window=self.hourly_window,
        )
        return self._publish(notify=True)

    def select_day(self, day_index: int) -> WeatherView | None:
        """Switch the selected day. Returns None while no city is loaded."""
        if self.state is None:
            return None
        self.state = select_day(self.state, day_index)
        return self._publish(notify=True)

    def set_hourly_window(self, count: int) -> WeatherView | None:
        """Change the number of hours in the hourly strip."""
        if count < 1:
            raise ValueError(f"Hourly window must be positive, got {count}")
        self.hourly_window = count
        if self.state is None:
            return None
        self.state = set_hourly_window(self.state, count)
        return self._publish(notify=False)

    def refresh(self) -> WeatherView | None:
        """Re-fetch the current city, keeping the selected day and window."""
        if self.state is None:
            return None
        location = self.state.location
        payload = self.fetcher.fetch(location.latitude, location.longitude)
        self.state = replace(self.state, payload=payload)
        return self._publish(notify=True)

    # Favorites and theme

    def favorites(self) -> list[FavoriteEntry]:
        return self.favorites_store.load()

    def is_favorite(self) -> bool:
        return self.state is not None and self.favorites_store.contains(
            self.state.location.display_name
        )

    def toggle_favorite(self) -> bool:
        """Add or remove the current city. Returns the new membership."""
        if self.state is None:
            return False
        return self.favorites_store.toggle(self.state.location)

    def remove_favorite(self, name: str) -> None:
        self.favorites_store.remove(name)

    @property
    def theme(self) -> Theme:
        return self.theme_store.get()

    def toggle_theme(self) -> Theme:
        theme = self.theme_store.toggle()
        logger.info("Theme set to %s", theme.value)
        return theme


class WeatherDisplayApp:
    """Interactive forecast window.

    Keys: 1-7 select the day, h cycles the hourly window (4/8/12), f toggles
    the current city as favorite, t toggles the theme, tab cycles through
    favorites, r refreshes, / opens the city search (type, up/down to pick a
    suggestion, return to load, escape to close), escape quits.
    """

    def __init__(self, config: Config, weather: WeatherApp | None = None) -> None:
        """Initialize the display application.

        Pygame is imported lazily through altus.display so the CLI modes
        work without opening a window.

        Args:
            config: Fully assembled application configuration.
            weather: Controller to drive. Defaults to a WeatherApp built
                from config.
        """
        from altus.display import WeatherDisplay
        from altus.renderer import WeatherRenderer

        self.config = config
        self.weather = weather or WeatherApp(config)
        self.renderer = WeatherRenderer(
            width=config.display.width,
            height=config.display.height,
            font_bold=config.fonts.font_bold,
            font_regular=config.fonts.font_regular,
        )
        self.display = WeatherDisplay(
            width=config.display.width,
            height=config.display.height,
            fullscreen=config.display.fullscreen,
        )
        self.suggestions = SuggestionBox(
            self.weather.resolver,
            Debouncer(config.search.debounce_ms / 1000),
            max_results=config.search.suggestion_count,
            min_length=config.search.min_query_length,
        )
        if config.display.theme:
            self.weather.theme_store.set(Theme(config.display.theme))
        self.search_text: str | None = None
        self.selected_suggestion = 0
        self.error: str | None = None
        self.frame_interval = 1.0 / config.display.fps
        self.last_refresh_attempt = 0.0
        self._running = False

    def _run_command(self, fn, *args) -> None:
        """Run a WeatherApp command, turning failures into the on-screen error."""
        try:
            fn(*args)
            self.error = None
        except AltusError as exc:
            logger.warning("%s", exc)
            self.error = str(exc)

    def _refresh_if_stale(self) -> None:
        state = self.weather.state
        if state is None:
            return
        # A failed refresh counts as an attempt; the next one waits a full interval
        last = max(state.payload.fetch_time, self.last_refresh_attempt)
        if time.time() - last < self.config.forecast.refresh_seconds:
            return
        self.last_refresh_attempt = time.time()
        self._run_command(self.weather.refresh)

    def _next_favorite(self) -> None:
        favorites = self.weather.favorites()
        if not favorites:
            return
        names = [f.name for f in favorites]
        current = self.weather.state.location.display_name if self.weather.state else None
        index = (names.index(current) + 1) % len(names) if current in names else 0
        self._run_command(self.weather.select_city, favorites[index].to_location())

    def _cycle_window(self) -> None:
        current = self.weather.hourly_window
        index = HOURLY_WINDOWS.index(current) + 1 if current in HOURLY_WINDOWS else 0
        self.weather.set_hourly_window(HOURLY_WINDOWS[index % len(HOURLY_WINDOWS)])

    def _handle_search_event(self, kind: str, value: str) -> None:
        if kind == "text":
            self.search_text += value
            self.selected_suggestion = 0
            self.suggestions.on_input(self.search_text)
        elif value == "backspace":
            self.search_text = self.search_text[:-1]
            self.selected_suggestion = 0
            self.suggestions.on_input(self.search_text)
        elif value == "escape":
            self._close_search()
        elif value == "down" and self.suggestions.visible:
            self.selected_suggestion = max(
                min(self.selected_suggestion + 1, len(self.suggestions.suggestions) - 1), 0
            )
        elif value == "up":
            self.selected_suggestion = max(self.selected_suggestion - 1, 0)
        elif value in ("return", "enter"):
            location = self.suggestions.select(self.selected_suggestion)
            query = self.search_text
            self._close_search()
            if location is not None:
                self._run_command(self.weather.select_city, location)
            else:
                self._run_command(self.weather.search, query)

    def _close_search(self) -> None:
        self.suggestions.debouncer.cancel()
        self.suggestions.hide()
        self.search_text = None
        self.selected_suggestion = 0

    def _handle_events(self, events: list[tuple[str, str]]) -> None:
        for kind, value in events:
            if self.search_text is not None:
                self._handle_search_event(kind, value)
                continue
            if kind != "key":
                continue
            if value == "escape":
                self._running = False
            elif value in ("1", "2", "3", "4", "5", "6", "7"):
                self._run_command(self.weather.select_day, int(value) - 1)
            elif value == "h":
                self._cycle_window()
            elif value == "f":
                self.weather.toggle_favorite()
            elif value == "t":
                self.weather.toggle_theme()
            elif value == "tab":
                self._next_favorite()
            elif value == "r":
                self._run_command(self.weather.refresh)
            elif value == "/":
                self.search_text = ""
                # The "/" keypress also arrives as text input; drop the
                # rest of this batch so it does not land in the query.
                return

    def _render_frame(self):
        from altus.display import render_error

        if self.weather.view is None and self.error and self.search_text is None:
            # Nothing loaded yet: full-screen error, "/" still opens the search
            return render_error(
                self.error,
                self.config.display.width,
                self.config.display.height,
                self.weather.theme,
            )
        return self.renderer.render(
            self.weather.view,
            theme=self.weather.theme,
            is_favorite=self.weather.is_favorite(),
            search_text=self.search_text,
            suggestions=self.suggestions.suggestions,
            selected_suggestion=self.selected_suggestion,
            error=self.error,
        )

    def _load_initial_city(self) -> None:
        self._run_command(self.weather.search, self.config.location.city)
        if self.weather.state is not None and self.config.day:
            self._run_command(self.weather.select_day, self.config.day)

    def run(self) -> None:
        """Run the main application loop."""
        from altus.display import render_boot_screen

        signal.signal(signal.SIGTERM, lambda *_: setattr(self, "_running", False))
        theme = self.weather.theme
        try:
            logger.info(
                "Starting WeatherDisplayApp for %s, refresh=%ds",
                self.config.location.city, self.config.forecast.refresh_seconds,
            )
            self.display.update(
                render_boot_screen(
                    "Chargement de la météo...",
                    self.config.display.width, self.config.display.height, theme,
                )
            )
            self.display.handle_events()
            self._load_initial_city()

            logger.info("Entering main loop")
            self._running = True
            while self._running:
                events = self.display.handle_events()
                if events is None:
                    break
                self._handle_events(events)
                self._refresh_if_stale()

                self.display.update(self._render_frame())
                time.sleep(self.frame_interval)
        finally:
            self.suggestions.debouncer.cancel()
            self.display.close()
