"""Flat key-value persistence for favorites and the theme.

Everything lives in one JSON object file mapping string keys to string
values. Structured values (the favorites list) are JSON-encoded strings
inside it. Every write replaces the whole file.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from altus.models import FavoriteEntry, Location, Theme

logger = logging.getLogger(__name__)

STORAGE_KEY_FAVORITES = "altus-favorites"
STORAGE_KEY_THEME = "altus-theme"


class KeyValueStore:
    """String key-value store backed by a JSON file."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            logger.warning("Could not read storage file %s, starting empty", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("Storage file %s does not hold an object, starting empty", self.path)
            return {}
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get(self, key: str, default: str | None = None) -> str | None:
        return self._read().get(key, default)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class FavoritesStore:
    """Favorite cities, unique by name, in insertion order."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def load(self) -> list[FavoriteEntry]:
        stored = self.store.get(STORAGE_KEY_FAVORITES)
        if not stored:
            return []
        try:
            return [FavoriteEntry.from_dict(raw) for raw in json.loads(stored)]
        except (ValueError, KeyError, TypeError):
            logger.warning("Ignoring malformed favorites list in %s", self.store.path)
            return []

    def save(self, entries: list[FavoriteEntry]) -> None:
        payload = json.dumps([e.to_dict() for e in entries], ensure_ascii=False)
        self.store.set(STORAGE_KEY_FAVORITES, payload)

    def contains(self, name: str) -> bool:
        return any(f.name == name for f in self.load())

    def add(self, location: Location) -> None:
        favorites = self.load()
        if any(f.name == location.display_name for f in favorites):
            return
        self.save(favorites + [FavoriteEntry.from_location(location)])

    def remove(self, name: str) -> None:
        self.save([f for f in self.load() if f.name != name])

    def toggle(self, location: Location) -> bool:
        """Add or remove a location. Returns True if it is now a favorite."""
        if self.contains(location.display_name):
            self.remove(location.display_name)
            return False
        self.add(location)
        return True


class ThemeStore:
    """Persisted light/dark theme flag."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get(self) -> Theme:
        # Anything but an explicit "dark" is the light theme
        if self.store.get(STORAGE_KEY_THEME) == Theme.DARK.value:
            return Theme.DARK
        return Theme.LIGHT

    def set(self, theme: Theme) -> None:
        self.store.set(STORAGE_KEY_THEME, Theme(theme).value)

    def toggle(self) -> Theme:
        theme = Theme.LIGHT if self.get() is Theme.DARK else Theme.DARK
        self.set(theme)
        return theme
