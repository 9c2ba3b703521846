"""Type-ahead city suggestions."""

from __future__ import annotations

import itertools
import logging
import threading

from altus.codes import MIN_SUGGESTION_LENGTH
from altus.debounce import Debouncer
from altus.errors import GeocodingUnavailable
from altus.geocoding import GeoResolver
from altus.models import Location

logger = logging.getLogger(__name__)


class SuggestionBox:
    """Debounced geocoding lookups for a text input.

    Lookups never produce user-facing errors: no match and geocoding
    failures both just hide the list. Every scheduled lookup gets a
    generation number and only the newest one may publish its results, so a
    slow stale lookup cannot overwrite a newer list.
    """

    def __init__(
        self,
        resolver: GeoResolver,
        debouncer: Debouncer,
        max_results: int = 5,
        min_length: int = MIN_SUGGESTION_LENGTH,
    ) -> None:
        self.resolver = resolver
        self.debouncer = debouncer
        self.max_results = max_results
        self.min_length = min_length
        self.suggestions: list[Location] = []
        self._generation = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    @property
    def visible(self) -> bool:
        return bool(self.suggestions)

    def on_input(self, text: str) -> None:
        """Handle a change of the input text."""
        query = text.strip()
        if len(query) < self.min_length:
            self.debouncer.cancel()
            self.hide()
            return
        with self._lock:
            self._latest = next(self._generation)
            generation = self._latest
        self.debouncer.call(self.fetch, query, generation)

    def fetch(self, query: str, generation: int | None = None) -> list[Location]:
        """Look up suggestions and publish them unless a newer lookup exists."""
        try:
            results = self.resolver.resolve(query, self.max_results)
        except GeocodingUnavailable:
            logger.warning("Suggestion lookup for %r failed", query)
            results = []
        with self._lock:
            if generation is not None and generation != self._latest:
                logger.debug("Dropping stale suggestions for %r", query)
                return results
            self.suggestions = results
        return results

    def hide(self) -> None:
        with self._lock:
            self.suggestions = []

    def select(self, index: int) -> Location | None:
        """Pick a suggestion and hide the list.

        The list may have been replaced by a lookup finishing on the timer
        thread since the index was chosen, so the index is clamped to the
        current list. Returns None when there is nothing to pick.
        """
        with self._lock:
            suggestions = self.suggestions
            self.suggestions = []
        if not suggestions:
            return None
        return suggestions[max(0, min(index, len(suggestions) - 1))]
