"""Tests for response normalization."""
import copy
import pytest
from weather_normalizer import parse_current, parse_forecast, to_epoch, to_iso_utc
from weather_data import CurrentConditions, ForecastSeries, LocationRef
from weather_provider import UpstreamError


@pytest.fixture
def location():
    return LocationRef(name="London", country="United Kingdom", latitude=51.50853, longitude=-0.12574)


@pytest.fixture
def current_payload():
    """Sample Open-Meteo current+daily response (forecast_days=1)."""
    return {
        "latitude": 51.5,
        "longitude": -0.120000124,
        "utc_offset_seconds": 3600,
        "timezone": "Europe/London",
        "current": {
            "time": "2024-05-01T14:15",
            "interval": 900,
            "temperature_2m": 17.3,
            "relative_humidity_2m": 62,
            "apparent_temperature": 16.1,
            "is_day": 1,
            "precipitation": 0.4,
            "rain": 0.4,
            "weather_code": 61,
            "surface_pressure": 1008.2,
            "wind_speed_10m": 14.8,
            "wind_direction_10m": 225,
            "visibility": 24140,
        },
        "daily": {
            "time": ["2024-05-01"],
            "weather_code": [61],
            "temperature_2m_max": [18.9],
            "temperature_2m_min": [9.4],
            "apparent_temperature_max": [17.2],
            "apparent_temperature_min": [7.0],
            "sunrise": ["2024-05-01T05:58"],
            "sunset": ["2024-05-01T20:21"],
            "uv_index_max": [4.1],
            "relative_humidity_2m_max": [88],
        },
    }


@pytest.fixture
def forecast_payload():
    """Sample Open-Meteo daily response (forecast_days=5)."""
    return {
        "utc_offset_seconds": 3600,
        "daily": {
            "time": ["2024-05-01", "2024-05-02", "2024-05-03", "2024-05-04", "2024-05-05"],
            "weather_code": [61, 3, 0, 71, 95],
            "temperature_2m_max": [20, 16.0, 21.4, 3.0, 25.0],
            "temperature_2m_min": [10, 8.0, 11.0, -1.0, 15.0],
            "apparent_temperature_max": [19.0, 14.0, 20.0, 0.0, 26.0],
            "apparent_temperature_min": [9.0, 6.0, 10.0, -5.0, 14.0],
            "sunrise": ["2024-05-01T05:58"] * 5,
            "sunset": ["2024-05-01T20:21"] * 5,
            "relative_humidity_2m_max": [88, 75, 60, 95, 70],
        },
    }


def test_parse_current_success(current_payload, location):
    """Current and today's daily block combine into one record."""
    weather = parse_current(current_payload, location)

    assert isinstance(weather, CurrentConditions)
    assert weather.temp == 17.3
    assert weather.feels_like == 16.1
    assert weather.temp_min == 9.4
    assert weather.temp_max == 18.9
    assert weather.humidity == 62
    assert weather.pressure == 1008.2
    assert weather.wind_speed == 14.8
    assert weather.wind_deg == 225
    assert weather.visibility == 24140
    assert weather.name == "London"
    assert weather.country == "United Kingdom"
    assert weather.dt == 1714569300
    assert weather.sunrise == 1714539480
    assert weather.sunset == 1714591260


def test_parse_current_rain_by_day(current_payload, location):
    condition = parse_current(current_payload, location).condition

    assert condition.main == "Rain"
    assert condition.description == "rain"
    assert condition.icon == "10d"
    assert condition.id == 500


def test_parse_current_night_icon(current_payload, location):
    current_payload["current"]["is_day"] = 0
    current_payload["current"]["weather_code"] = 0

    condition = parse_current(current_payload, location).condition

    assert condition.icon == "01n"
    assert condition.id == 800
    assert condition.main == "Clear"


def test_parse_current_uses_legacy_id_buckets(current_payload, location):
    """Legacy ids do not follow the category boundaries."""
    current_payload["current"]["weather_code"] = 45
    assert parse_current(current_payload, location).condition.id == 700

    current_payload["current"]["weather_code"] = 73
    condition = parse_current(current_payload, location).condition
    assert condition.id == 300
    assert condition.main == "Snow"


@pytest.mark.parametrize("visibility", [None, "missing"])
def test_parse_current_default_visibility(current_payload, location, visibility):
    if visibility == "missing":
        del current_payload["current"]["visibility"]
    else:
        current_payload["current"]["visibility"] = visibility

    assert parse_current(current_payload, location).visibility == 10000


def test_parse_current_without_utc_offset(current_payload, location):
    del current_payload["utc_offset_seconds"]

    weather = parse_current(current_payload, location)

    assert weather.dt == 1714569300 + 3600


@pytest.mark.parametrize("block", ["current", "daily"])
def test_parse_current_missing_block(current_payload, location, block):
    del current_payload[block]

    with pytest.raises(UpstreamError) as exc_info:
        parse_current(current_payload, location)

    assert f"missing '{block}' block" in str(exc_info.value)


@pytest.mark.parametrize("key", [
    "temperature_2m",
    "apparent_temperature",
    "relative_humidity_2m",
    "surface_pressure",
    "wind_speed_10m",
    "wind_direction_10m",
    "weather_code",
    "is_day",
])
def test_parse_current_missing_current_field(current_payload, location, key):
    del current_payload["current"][key]

    with pytest.raises(UpstreamError) as exc_info:
        parse_current(current_payload, location)

    assert f"current.{key}" in str(exc_info.value)


def test_parse_current_null_reading(current_payload, location):
    current_payload["current"]["temperature_2m"] = None

    with pytest.raises(UpstreamError):
        parse_current(current_payload, location)


def test_parse_current_empty_daily_series(current_payload, location):
    current_payload["daily"]["temperature_2m_min"] = []

    with pytest.raises(UpstreamError) as exc_info:
        parse_current(current_payload, location)

    assert "daily.temperature_2m_min" in str(exc_info.value)


def test_parse_current_bad_time(current_payload, location):
    current_payload["current"]["time"] = "yesterday"

    with pytest.raises(UpstreamError) as exc_info:
        parse_current(current_payload, location)

    assert "current.time" in str(exc_info.value)


def test_parse_current_not_a_dict(location):
    with pytest.raises(UpstreamError):
        parse_current(["not", "a", "dict"], location)


def test_parse_forecast_success(forecast_payload, location):
    series = parse_forecast(forecast_payload, location)

    assert isinstance(series, ForecastSeries)
    assert len(series) == 5
    assert series.location == location
    assert [e.dt for e in series.entries] == sorted(e.dt for e in series.entries)
    assert series.entries[0].dt == 1714521600
    assert series.entries[4].dt == 1714867200
    assert series.entries[0].dt_txt == "2024-05-01T00:00:00+00:00"


def test_parse_forecast_mean_temperature(forecast_payload, location):
    """Daily min 10 / max 20 gives exactly 15."""
    entry = parse_forecast(forecast_payload, location).entries[0]

    assert entry.temp == 15
    assert entry.feels_like == 14.0
    assert entry.temp_min == 10
    assert entry.temp_max == 20
    assert entry.humidity == 88


def test_parse_forecast_uses_raw_code_and_day_icons(forecast_payload, location):
    entries = parse_forecast(forecast_payload, location).entries

    assert [e.condition.id for e in entries] == [61, 3, 0, 71, 95]
    assert [e.condition.main for e in entries] == ["Rain", "Cloudy", "Clear", "Snow", "Thunderstorm"]
    assert [e.condition.icon for e in entries] == ["10d", "04d", "01d", "13d", "11d"]


def test_parse_forecast_truncates_to_five_days(forecast_payload, location):
    daily = forecast_payload["daily"]
    for key, values in daily.items():
        daily[key] = values + values[:2]
    daily["time"] = daily["time"][:5] + ["2024-05-06", "2024-05-07"]

    series = parse_forecast(forecast_payload, location)

    assert len(series) == 5
    assert series.entries[-1].dt == 1714867200


def test_parse_forecast_fewer_days(forecast_payload, location):
    daily = forecast_payload["daily"]
    for key in daily:
        daily[key] = daily[key][:3]

    assert len(parse_forecast(forecast_payload, location)) == 3


def test_parse_forecast_empty_daily(forecast_payload, location):
    daily = forecast_payload["daily"]
    for key in daily:
        daily[key] = []

    series = parse_forecast(forecast_payload, location)

    assert len(series) == 0


def test_parse_forecast_short_column(forecast_payload, location):
    forecast_payload["daily"]["relative_humidity_2m_max"] = [88, 75]

    with pytest.raises(UpstreamError) as exc_info:
        parse_forecast(forecast_payload, location)

    assert "daily.relative_humidity_2m_max" in str(exc_info.value)


def test_parse_forecast_null_value(forecast_payload, location):
    forecast_payload["daily"]["weather_code"][2] = None

    with pytest.raises(UpstreamError) as exc_info:
        parse_forecast(forecast_payload, location)

    assert "daily.weather_code[2]" in str(exc_info.value)


def test_parse_forecast_missing_daily(location):
    with pytest.raises(UpstreamError):
        parse_forecast({"current": {}}, location)


def test_parse_forecast_does_not_mutate_payload(forecast_payload, location):
    before = copy.deepcopy(forecast_payload)
    parse_forecast(forecast_payload, location)
    assert forecast_payload == before


def test_to_epoch_date_only_is_utc_midnight():
    assert to_epoch("2024-05-01", utc_offset_seconds=7200) == 1714521600


def test_to_epoch_applies_offset():
    assert to_epoch("2024-05-01T02:00", utc_offset_seconds=7200) == 1714521600


def test_to_epoch_rejects_non_string():
    with pytest.raises(UpstreamError):
        to_epoch(1714521600)


def test_to_iso_utc():
    assert to_iso_utc(1714521600) == "2024-05-01T00:00:00+00:00"


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), float("-inf")])
def test_parse_current_non_finite_weather_code(current_payload, location, bad):
    current_payload["current"]["weather_code"] = bad

    with pytest.raises(UpstreamError) as exc_info:
        parse_current(current_payload, location)

    assert "current.weather_code" in str(exc_info.value)


@pytest.mark.parametrize("bad", [float("nan"), float("inf")])
def test_parse_forecast_non_finite_weather_code(forecast_payload, location, bad):
    forecast_payload["daily"]["weather_code"][1] = bad

    with pytest.raises(UpstreamError) as exc_info:
        parse_forecast(forecast_payload, location)

    assert "daily.weather_code[1]" in str(exc_info.value)


def test_parse_current_non_finite_visibility(current_payload, location):
    current_payload["current"]["visibility"] = float("nan")

    with pytest.raises(UpstreamError):
        parse_current(current_payload, location)
