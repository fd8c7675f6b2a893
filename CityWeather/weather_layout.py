"""Text rendering for weather reports - pure functions for testability."""
from datetime import datetime, timezone, tzinfo
from typing import List, Optional
from weather_data import CitySuggestion, CurrentConditions, ForecastSeries

COMPASS_POINTS = ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]


def celsius_to_fahrenheit(celsius: float) -> float:
    return celsius * 9 / 5 + 32


def format_temperature(temp_c: float, units: str = "metric") -> str:
    """
    Format a Celsius reading for display.

    Args:
        temp_c: Temperature in Celsius
        units: "metric" for °C or "imperial" for °F

    Returns:
        Rounded temperature with its unit (e.g., "21°C", "70°F")
    """
    if units == "imperial":
        return f"{round(celsius_to_fahrenheit(temp_c))}°F"
    return f"{round(temp_c)}°C"


def format_date(timestamp: int, tz: Optional[tzinfo] = None) -> str:
    """Short weekday date, e.g. "Mon, Jan 1". Local time unless ``tz`` is given."""
    date = datetime.fromtimestamp(timestamp, tz)
    return f"{date:%a}, {date:%b} {date.day}"


def format_time(timestamp: int, tz: Optional[tzinfo] = None) -> str:
    """12-hour clock time, e.g. "02:30 PM"."""
    return datetime.fromtimestamp(timestamp, tz).strftime("%I:%M %p")


def wind_direction(degrees: float) -> str:
    """
    Get 8-point compass direction for a wind bearing.

    Args:
        degrees: Bearing the wind blows from, 0-360

    Returns:
        Compass point (e.g., "N", "SW")
    """
    return COMPASS_POINTS[round(degrees / 45) % 8]


def render_current(weather: CurrentConditions, units: str = "metric",
                   tz: Optional[tzinfo] = None) -> List[str]:
    """
    Build display lines for current conditions.

    Args:
        weather: Current conditions to display
        units: "metric" or "imperial"
        tz: Timezone for sunrise/sunset (local time when None)

    Returns:
        Lines of text, headline first
    """
    location = f"{weather.name}, {weather.country}" if weather.country else weather.name
    condition = weather.condition
    return [
        f"{location} - {format_date(weather.dt, tz)}",
        f"{format_temperature(weather.temp, units)} {condition.main} [{condition.icon}]",
        f"Feels like {format_temperature(weather.feels_like, units)}  "
        f"Low {format_temperature(weather.temp_min, units)}  "
        f"High {format_temperature(weather.temp_max, units)}",
        f"Humidity {round(weather.humidity)}%  Pressure {round(weather.pressure)} hPa",
        f"Wind {weather.wind_speed:.1f} km/h {wind_direction(weather.wind_deg)}  "
        f"Visibility {weather.visibility / 1000:.1f} km",
        f"Sunrise {format_time(weather.sunrise, tz)}  Sunset {format_time(weather.sunset, tz)}",
    ]


def render_forecast(forecast: ForecastSeries, units: str = "metric") -> List[str]:
    """
    Build one line per forecast day under a heading.

    Forecast days are calendar dates stored as midnight UTC, so they are
    always labelled in UTC whatever the local timezone.
    """
    lines = [f"{len(forecast)}-day forecast for {forecast.location.name}"]
    for entry in forecast.entries:
        lines.append(
            f"{format_date(entry.dt, timezone.utc):<12}"
            f"{format_temperature(entry.temp_min, units):>6} / {format_temperature(entry.temp_max, units):<6}"
            f" {entry.condition.main} ({round(entry.humidity)}%)"
        )
    return lines


def render_suggestions(suggestions: List[CitySuggestion]) -> List[str]:
    if not suggestions:
        return ["No matching cities"]
    return [f"{s.name}, {s.country}" if s.country else s.name for s in suggestions]
