"""Transform raw Open-Meteo payloads into the stable domain shapes.

Open-Meteo reports "current" and "daily" blocks as parallel arrays keyed by
variable name. Nothing here trusts that shape: every field read is checked
first and a missing or non-numeric value raises UpstreamError naming it.
"""
import logging
import math
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List
from weather_codes import describe, legacy_condition_id
from weather_data import CurrentConditions, ForecastEntry, ForecastSeries, LocationRef
from weather_provider import UpstreamError

DEFAULT_VISIBILITY_M = 10000
MAX_FORECAST_DAYS = 5


def _is_number(value: Any) -> bool:
    # bool is an int subclass; NaN and Infinity are accepted by json decoding
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return isinstance(value, int) or math.isfinite(value)


def _block(payload: Dict[str, Any], name: str) -> Dict[str, Any]:
    block = payload.get(name)
    if not isinstance(block, dict):
        raise UpstreamError(f"Response missing '{name}' block")
    return block


def _number(block: Dict[str, Any], block_name: str, key: str) -> float:
    value = block.get(key)
    if not _is_number(value):
        raise UpstreamError(f"Response field '{block_name}.{key}' missing or not numeric: {value!r}")
    return value


def _series(block: Dict[str, Any], block_name: str, key: str, length: int) -> List[Any]:
    values = block.get(key)
    if not isinstance(values, list) or len(values) < length:
        raise UpstreamError(f"Response field '{block_name}.{key}' missing or shorter than {length}")
    return values


def _series_number(values: List[Any], block_name: str, key: str, index: int) -> float:
    value = values[index]
    if not _is_number(value):
        raise UpstreamError(f"Response field '{block_name}.{key}[{index}]' not numeric: {value!r}")
    return value


def _utc_offset(payload: Dict[str, Any]) -> int:
    offset = payload.get("utc_offset_seconds", 0)
    if not _is_number(offset):
        raise UpstreamError(f"Response field 'utc_offset_seconds' not numeric: {offset!r}")
    return int(offset)


def to_epoch(value: Any, utc_offset_seconds: int = 0, field_name: str = "time") -> int:
    """
    Convert an Open-Meteo time string to a UNIX timestamp.

    Date-time strings ("2024-05-01T14:15") are location-local and shifted by
    ``utc_offset_seconds``. Date-only strings ("2024-05-01") are read as
    midnight UTC.
    """
    if not isinstance(value, str):
        raise UpstreamError(f"Response field '{field_name}' is not a time string: {value!r}")
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise UpstreamError(f"Response field '{field_name}' has invalid time {value!r}") from e

    if parsed.tzinfo is not None:
        return int(parsed.timestamp())
    if "T" not in value:
        return int(parsed.replace(tzinfo=timezone.utc).timestamp())
    local_tz = timezone(timedelta(seconds=utc_offset_seconds))
    return int(parsed.replace(tzinfo=local_tz).timestamp())


def to_iso_utc(timestamp_epoch: int) -> str:
    """Render a UNIX timestamp as a UTC ISO 8601 string."""
    return datetime.fromtimestamp(timestamp_epoch, tz=timezone.utc).isoformat()


def parse_current(payload: Dict[str, Any], location: LocationRef) -> CurrentConditions:
    """
    Build CurrentConditions from a current+daily (forecast_days=1) payload.

    The descriptor id uses the legacy OpenWeatherMap buckets.

    Raises:
        UpstreamError: If a required field is missing or malformed
    """
    if not isinstance(payload, dict):
        raise UpstreamError("Response is not a JSON object")
    current = _block(payload, "current")
    daily = _block(payload, "daily")
    offset = _utc_offset(payload)

    code = int(_number(current, "current", "weather_code"))
    is_day = bool(_number(current, "current", "is_day"))

    visibility = current.get("visibility")
    if visibility is None:
        visibility = DEFAULT_VISIBILITY_M
    elif not _is_number(visibility):
        raise UpstreamError(f"Response field 'current.visibility' not numeric: {visibility!r}")

    temp_min = _series(daily, "daily", "temperature_2m_min", 1)
    temp_max = _series(daily, "daily", "temperature_2m_max", 1)
    sunrise = _series(daily, "daily", "sunrise", 1)
    sunset = _series(daily, "daily", "sunset", 1)

    conditions = CurrentConditions(
        temp=_number(current, "current", "temperature_2m"),
        feels_like=_number(current, "current", "apparent_temperature"),
        temp_min=_series_number(temp_min, "daily", "temperature_2m_min", 0),
        temp_max=_series_number(temp_max, "daily", "temperature_2m_max", 0),
        humidity=_number(current, "current", "relative_humidity_2m"),
        pressure=_number(current, "current", "surface_pressure"),
        wind_speed=_number(current, "current", "wind_speed_10m"),
        wind_deg=_number(current, "current", "wind_direction_10m"),
        name=location.name,
        country=location.country,
        dt=to_epoch(current.get("time"), offset, "current.time"),
        sunrise=to_epoch(sunrise[0], offset, "daily.sunrise[0]"),
        sunset=to_epoch(sunset[0], offset, "daily.sunset[0]"),
        condition=describe(code, is_day, legacy_condition_id(code)),
        visibility=visibility,
    )
    logging.debug(f"Parsed current conditions for {location.name}: code={code} is_day={is_day}")
    return conditions


def parse_forecast(payload: Dict[str, Any], location: LocationRef,
                   max_days: int = MAX_FORECAST_DAYS) -> ForecastSeries:
    """
    Build a ForecastSeries from a daily payload.

    Keeps the first ``max_days`` provider days in order. Each day's
    temperature and feels-like are the mean of its min/max, the icon assumes
    daytime, and the descriptor id is the raw weather code.

    Raises:
        UpstreamError: If a required field is missing or malformed
    """
    if not isinstance(payload, dict):
        raise UpstreamError("Response is not a JSON object")
    daily = _block(payload, "daily")
    offset = _utc_offset(payload)

    times = _series(daily, "daily", "time", 0)
    days = min(max_days, len(times))
    columns = {
        key: _series(daily, "daily", key, days)
        for key in (
            "weather_code",
            "temperature_2m_min",
            "temperature_2m_max",
            "apparent_temperature_min",
            "apparent_temperature_max",
            "relative_humidity_2m_max",
        )
    }

    def value(key: str, index: int) -> float:
        return _series_number(columns[key], "daily", key, index)

    entries = []
    for i in range(days):
        code = int(value("weather_code", i))
        temp_min = value("temperature_2m_min", i)
        temp_max = value("temperature_2m_max", i)
        dt = to_epoch(times[i], offset, f"daily.time[{i}]")
        entries.append(ForecastEntry(
            dt=dt,
            temp=(temp_min + temp_max) / 2,
            feels_like=(value("apparent_temperature_min", i) + value("apparent_temperature_max", i)) / 2,
            temp_min=temp_min,
            temp_max=temp_max,
            humidity=value("relative_humidity_2m_max", i),
            condition=describe(code, True, code),
            dt_txt=to_iso_utc(dt),
        ))

    logging.debug(f"Parsed {len(entries)} forecast days for {location.name}")
    return ForecastSeries(location=location, entries=entries)
