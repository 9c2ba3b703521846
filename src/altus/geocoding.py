"""Open-Meteo geocoding client (city name → coordinates)."""

from __future__ import annotations

import logging

import requests

from altus.config import Config
from altus.errors import GeocodingUnavailable
from altus.models import Location, parse_location

logger = logging.getLogger(__name__)


class GeoResolver:
    """Client for the Open-Meteo geocoding search API.

    Public, no API key required. Docs: https://open-meteo.com/en/docs/geocoding-api
    """

    def __init__(self, config: Config) -> None:
        """Initialize the geocoding client.

        Creates a requests.Session for HTTP connection reuse between the
        suggestion lookups fired while the user types and the direct search.

        Args:
            config: Application configuration. Used for the endpoint URL,
                result language and request timeout.
        """
        self.config = config
        self.session = requests.Session()
        self.session.headers.update({"Accept": "application/json"})

    def search(self, query: str, count: int) -> list[dict]:
        """Fetch raw geocoding results.

        GET /v1/search?name={query}&count={count}&language=fr&format=json

        Raises GeocodingUnavailable on transport errors and non-2xx answers.
        """
        api = self.config.api
        try:
            resp = self.session.get(
                api.geocoding_url,
                params={
                    "name": query,
                    "count": count,
                    "language": api.language,
                    "format": "json",
                },
                timeout=api.timeout_seconds,
            )
            resp.raise_for_status()
            data = resp.json()
        except requests.exceptions.RequestException as exc:
            logger.warning("Geocoding request for %r failed: %s", query, exc)
            raise GeocodingUnavailable() from exc
        # No match: the API omits "results" entirely instead of sending [].
        return data.get("results") or []

    def resolve(self, query: str, max_results: int) -> list[Location]:
        """Resolve a place name to candidate locations.

        Results keep the order of the geocoding service. An empty list means
        no match; deciding whether that is worth an error message is up to
        the caller.
        """
        raw_results = self.search(query, max_results)
        locations = [parse_location(raw) for raw in raw_results]
        logger.debug("Geocoding %r: %d result(s)", query, len(locations))
        return locations
