"""Open-Meteo geocoding: city name resolution and autocomplete search."""
import logging
from typing import Any, Dict, List
from openmeteo_client import fetch_json
from weather_data import CitySuggestion, LocationRef
from weather_provider import GeocoderBase, NotFoundError, UpstreamError


class OpenMeteoGeocoder(GeocoderBase):
    """Resolves free-text city names via https://geocoding-api.open-meteo.com."""

    BASE_URL = "https://geocoding-api.open-meteo.com/v1"

    def __init__(self, base_url: str = BASE_URL, timeout: float = 10):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def search_url(self) -> str:
        return f"{self.base_url}/search"

    def _results(self, query: str, count: int) -> List[Dict[str, Any]]:
        data = fetch_json(self.search_url, {"name": query, "count": count}, self.timeout)
        results = data.get("results")
        if results is None:
            return []
        if not isinstance(results, list):
            raise UpstreamError("Response field 'results' is not a list")
        return results

    def resolve(self, query: str) -> LocationRef:
        """
        Resolve a city name to its single best match.

        Takes the provider's first result, same-named cities are not
        disambiguated.

        Raises:
            NotFoundError: If the query is blank or matches no city
            NetworkError: If the API request fails
            UpstreamError: If the match lacks a name or coordinates
        """
        if not query or not query.strip():
            raise NotFoundError("City not found: empty query")

        results = self._results(query, 1)
        if not results:
            logging.warning(f"Geocoding returned no results for {query!r}")
            raise NotFoundError(f"City not found: {query}")

        match = results[0]
        if not isinstance(match, dict):
            raise UpstreamError("Geocoding result is not an object")
        name = match.get("name")
        latitude = match.get("latitude")
        longitude = match.get("longitude")
        if not isinstance(name, str) or not name:
            raise UpstreamError("Geocoding result missing 'name'")
        for key, value in (("latitude", latitude), ("longitude", longitude)):
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise UpstreamError(f"Geocoding result missing '{key}'")

        location = LocationRef(
            name=name,
            country=match.get("country") or "",
            latitude=float(latitude),
            longitude=float(longitude),
        )
        logging.info(f"Resolved {query!r} to {location.name}, {location.country} "
                     f"({location.latitude}, {location.longitude})")
        return location

    def search(self, query: str, limit: int = 5) -> List[CitySuggestion]:
        """
        Return up to ``limit`` (name, country) candidates for autocomplete.

        An empty list is returned for a blank query or when the provider
        has no matches.

        Raises:
            NetworkError: If the API request fails
        """
        if not query or not query.strip():
            return []

        suggestions = []
        for match in self._results(query, limit)[:limit]:
            if not isinstance(match, dict) or not isinstance(match.get("name"), str):
                raise UpstreamError("Geocoding result missing 'name'")
            suggestions.append(CitySuggestion(name=match["name"], country=match.get("country") or ""))
        logging.debug(f"City search {query!r} returned {len(suggestions)} suggestions")
        return suggestions
