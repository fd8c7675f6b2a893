"""Weather service - city lookups orchestrated over a geocoder and a provider."""
import itertools
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional
from weather_provider import GeocoderBase, WeatherProviderBase, WeatherProviderError
from weather_data import CitySuggestion, CurrentConditions, ForecastSeries, WeatherReport


class WeatherService:
    """
    Entry points for city weather lookups.

    Every call is an independent round trip: the city is geocoded again and
    nothing is cached, retried or substituted on failure.
    """

    def __init__(self, geocoder: GeocoderBase, provider: WeatherProviderBase):
        """
        Initialize weather service.

        Args:
            geocoder: Resolves city names to coordinates
            provider: Fetches weather for resolved coordinates
        """
        self.geocoder = geocoder
        self.provider = provider

    def get_current_weather(self, city: str) -> CurrentConditions:
        """
        Geocode ``city`` then fetch its current conditions.

        Raises:
            WeatherProviderError: NotFoundError, NetworkError or UpstreamError
        """
        location = self.geocoder.resolve(city)
        return self.provider.get_current(location)

    def get_forecast_weather(self, city: str) -> ForecastSeries:
        """
        Geocode ``city`` then fetch its daily forecast.

        Raises:
            WeatherProviderError: NotFoundError, NetworkError or UpstreamError
        """
        location = self.geocoder.resolve(city)
        return self.provider.get_forecast(location)

    def search_cities(self, query: str) -> List[CitySuggestion]:
        """Autocomplete candidates for ``query``, at most five."""
        return self.geocoder.search(query)

    def get_report(self, city: str) -> WeatherReport:
        """
        Fetch current conditions and forecast concurrently.

        The city is geocoded once and both fetches share the result. The
        first failure is raised after both fetches finish.
        """
        location = self.geocoder.resolve(city)
        logging.info(f"Fetching current conditions and forecast for {location.name}")
        with ThreadPoolExecutor(max_workers=2) as pool:
            current_future = pool.submit(self.provider.get_current, location)
            forecast_future = pool.submit(self.provider.get_forecast, location)
            current = current_future.result()
            forecast = forecast_future.result()
        return WeatherReport(current=current, forecast=forecast)


class WeatherDashboard:
    """
    Holds the report currently on display.

    A refresh replaces the report only when it succeeds and is still the
    most recently issued lookup. Older lookups that complete late are
    discarded, and failures leave the previous report in place.
    """

    def __init__(self, service: WeatherService):
        self.service = service
        self.report: Optional[WeatherReport] = None
        self.city: Optional[str] = None
        self._sequence = itertools.count(1)
        self._latest = 0
        self._lock = threading.Lock()

    def refresh(self, city: str) -> Optional[WeatherReport]:
        """
        Look up ``city`` and display it if no newer lookup started meanwhile.

        Returns:
            The fetched report, or None when it was superseded (whether it
            succeeded or failed)

        Raises:
            WeatherProviderError: If the newest lookup fails (display is unchanged)
        """
        with self._lock:
            ticket = next(self._sequence)
            self._latest = ticket

        try:
            report = self.service.get_report(city)
        except WeatherProviderError as e:
            with self._lock:
                superseded = ticket != self._latest
            if superseded:
                logging.info(f"Ignoring failure of superseded lookup for {city!r}: {e}")
                return None
            logging.warning(f"Lookup for {city!r} failed, keeping previous report: {e}")
            raise

        with self._lock:
            if ticket != self._latest:
                logging.info(f"Discarding stale result for {city!r} (lookup {ticket} < {self._latest})")
                return None
            self.report = report
            self.city = city
        logging.info(f"Dashboard updated for {city!r}")
        return report
