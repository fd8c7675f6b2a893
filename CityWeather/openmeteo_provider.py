"""Open-Meteo forecast API provider implementation."""
import logging
from openmeteo_client import fetch_json
from weather_normalizer import MAX_FORECAST_DAYS, parse_current, parse_forecast
from weather_data import CurrentConditions, ForecastSeries, LocationRef
from weather_provider import WeatherProviderBase

CURRENT_FIELDS = (
    "temperature_2m,relative_humidity_2m,apparent_temperature,is_day,precipitation,rain,"
    "weather_code,surface_pressure,wind_speed_10m,wind_direction_10m,visibility"
)
CURRENT_DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,apparent_temperature_max,"
    "apparent_temperature_min,sunrise,sunset,uv_index_max,relative_humidity_2m_max"
)
FORECAST_DAILY_FIELDS = (
    "weather_code,temperature_2m_max,temperature_2m_min,apparent_temperature_max,"
    "apparent_temperature_min,sunrise,sunset,relative_humidity_2m_max"
)


class OpenMeteoProvider(WeatherProviderBase):
    """
    Weather provider using the Open-Meteo forecast API.

    Free and keyless: https://open-meteo.com/en/docs
    """

    BASE_URL = "https://api.open-meteo.com/v1"

    def __init__(self, base_url: str = BASE_URL, timeout: float = 10):
        """
        Initialize Open-Meteo provider.

        Args:
            base_url: API root, the "/forecast" endpoint is appended
            timeout: HTTP request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    @property
    def forecast_url(self) -> str:
        return f"{self.base_url}/forecast"

    def get_current(self, location: LocationRef) -> CurrentConditions:
        """
        Fetch current conditions plus today's daily extremes in one request.

        Returns:
            CurrentConditions: Current weather information

        Raises:
            NetworkError: If the API request fails
            UpstreamError: If the response is missing expected fields
        """
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "current": CURRENT_FIELDS,
            "daily": CURRENT_DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": 1,
        }
        data = fetch_json(self.forecast_url, params, self.timeout)
        conditions = parse_current(data, location)
        logging.info(
            f"Successfully parsed current weather for {location.name}: "
            f"{conditions.temp}°C, {conditions.condition.main}"
        )
        return conditions

    def get_forecast(self, location: LocationRef) -> ForecastSeries:
        """
        Fetch the daily forecast.

        Returns:
            ForecastSeries: At most five days, oldest first

        Raises:
            NetworkError: If the API request fails
            UpstreamError: If the response is missing expected fields
        """
        params = {
            "latitude": location.latitude,
            "longitude": location.longitude,
            "daily": FORECAST_DAILY_FIELDS,
            "timezone": "auto",
            "forecast_days": MAX_FORECAST_DAYS,
        }
        data = fetch_json(self.forecast_url, params, self.timeout)
        series = parse_forecast(data, location)
        logging.info(f"Successfully parsed {len(series)} forecast days for {location.name}")
        return series
