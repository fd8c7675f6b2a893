"""Weather provider abstraction - allows swapping different weather APIs."""
from abc import ABC, abstractmethod
from typing import List, Optional
from weather_data import CitySuggestion, CurrentConditions, ForecastSeries, LocationRef


class WeatherProviderError(Exception):
    """Base exception for every failure raised by a provider or geocoder."""
    pass


class NotFoundError(WeatherProviderError):
    """Raised when geocoding returns no candidate for a query."""
    pass


class NetworkError(WeatherProviderError):
    """Raised on transport failure or a non-2xx HTTP response."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UpstreamError(WeatherProviderError):
    """Raised when a 2xx response is missing or has malformed expected fields."""
    pass


class WeatherProviderBase(ABC):
    """Abstract base class for weather data providers."""

    @abstractmethod
    def get_current(self, location: LocationRef) -> CurrentConditions:
        """
        Fetch current conditions for a resolved location.

        Raises:
            NetworkError: If the request does not complete successfully
            UpstreamError: If the payload is structurally incomplete
        """
        pass

    @abstractmethod
    def get_forecast(self, location: LocationRef) -> ForecastSeries:
        """
        Fetch the daily forecast for a resolved location.

        Raises:
            NetworkError: If the request does not complete successfully
            UpstreamError: If the payload is structurally incomplete
        """
        pass


class GeocoderBase(ABC):
    """Abstract base class for city name resolution."""

    @abstractmethod
    def resolve(self, query: str) -> LocationRef:
        """Resolve a free-text city name to its best match."""
        pass

    @abstractmethod
    def search(self, query: str, limit: int = 5) -> List[CitySuggestion]:
        """Return up to ``limit`` candidate cities for autocomplete."""
        pass
