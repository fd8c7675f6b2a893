"""Weather domain model - pure data structures independent of any API."""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True)
class LocationRef:
    """Canonical location resolved once per lookup."""
    name: str
    country: str
    latitude: float
    longitude: float


@dataclass
class ConditionDescriptor:
    """Condition summary mimicking the older OpenWeatherMap 'weather' entry."""
    id: int  # legacy-compatible bucket or raw code, see normalizer
    main: str  # e.g., "Clear", "Partly Cloudy", "Rain"
    description: str  # main lowercased
    icon: str  # e.g., "10d", "01n"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "main": self.main,
            "description": self.description,
            "icon": self.icon,
        }


@dataclass
class CurrentConditions:
    """Current conditions for one location."""
    temp: float
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: float
    pressure: float  # hPa
    wind_speed: float
    wind_deg: float
    name: str
    country: str
    dt: int  # observation time, UNIX timestamp (UTC)
    sunrise: int
    sunset: int
    condition: ConditionDescriptor
    visibility: float = 10000  # meters

    def to_dict(self) -> Dict[str, Any]:
        """Legacy nested shape: main / weather[] / wind / sys."""
        return {
            "main": {
                "temp": self.temp,
                "feels_like": self.feels_like,
                "temp_min": self.temp_min,
                "temp_max": self.temp_max,
                "humidity": self.humidity,
                "pressure": self.pressure,
            },
            "weather": [self.condition.to_dict()],
            "wind": {"speed": self.wind_speed, "deg": self.wind_deg},
            "name": self.name,
            "dt": self.dt,
            "sys": {
                "country": self.country,
                "sunrise": self.sunrise,
                "sunset": self.sunset,
            },
            "visibility": self.visibility,
        }


@dataclass
class ForecastEntry:
    """One forecast day."""
    dt: int
    temp: float  # mean of the daily min/max
    feels_like: float
    temp_min: float
    temp_max: float
    humidity: float
    condition: ConditionDescriptor
    dt_txt: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dt": self.dt,
            "main": {
                "temp": self.temp,
                "feels_like": self.feels_like,
                "temp_min": self.temp_min,
                "temp_max": self.temp_max,
                "humidity": self.humidity,
            },
            "weather": [self.condition.to_dict()],
            "dt_txt": self.dt_txt,
        }


@dataclass
class ForecastSeries:
    """Chronological daily forecast sharing one location."""
    location: LocationRef
    entries: List[ForecastEntry] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.entries)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "list": [entry.to_dict() for entry in self.entries],
            "city": {"name": self.location.name, "country": self.location.country},
        }


@dataclass(frozen=True)
class CitySuggestion:
    """Autocomplete candidate."""
    name: str
    country: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "country": self.country}


@dataclass
class WeatherReport:
    """Current conditions and forecast fetched by one dashboard lookup."""
    current: CurrentConditions
    forecast: ForecastSeries

    def to_dict(self) -> Dict[str, Any]:
        return {"current": self.current.to_dict(), "forecast": self.forecast.to_dict()}
