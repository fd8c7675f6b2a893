"""Open-Meteo weather code mappings - pure functions for testability."""
from enum import Enum
from weather_data import ConditionDescriptor


class Condition(str, Enum):
    """Condition categories derived from Open-Meteo (WMO) weather codes."""
    CLEAR = "Clear"
    MAINLY_CLEAR = "Mainly Clear"
    PARTLY_CLOUDY = "Partly Cloudy"
    CLOUDY = "Cloudy"
    FOG = "Fog"
    DRIZZLE = "Drizzle"
    RAIN = "Rain"
    SNOW = "Snow"
    THUNDERSTORM = "Thunderstorm"


# (upper bound exclusive, category), checked in order after the exact codes
_CONDITION_RANGES = (
    (50, Condition.FOG),
    (60, Condition.DRIZZLE),
    (70, Condition.RAIN),
    (80, Condition.SNOW),
    (100, Condition.THUNDERSTORM),
)

_EXACT_CONDITIONS = {
    0: Condition.CLEAR,
    1: Condition.MAINLY_CLEAR,
    2: Condition.PARTLY_CLOUDY,
    3: Condition.CLOUDY,
}

_ICON_RANGES = (
    (50, "50"),  # mist
    (60, "09"),  # drizzle uses the shower icon
    (70, "10"),
    (80, "13"),
    (100, "11"),
)

# Buckets mimicking OpenWeatherMap condition ids. These do not line up with
# _CONDITION_RANGES (60-69 lands in the snow bucket) and must stay separate.
_LEGACY_ID_BUCKETS = (
    (3, 800),
    (50, 700),
    (70, 600),
    (80, 300),
    (100, 500),
)


def classify(code: int) -> Condition:
    """
    Map a weather code to its condition category.

    Codes outside 0-99 fall back to Clear without raising.

    Args:
        code: Open-Meteo weather code

    Returns:
        Condition category
    """
    if code in _EXACT_CONDITIONS:
        return _EXACT_CONDITIONS[code]
    if code < 4:
        return Condition.CLEAR
    for upper, condition in _CONDITION_RANGES:
        if code < upper:
            return condition
    return Condition.CLEAR


def icon_for(code: int, is_day: bool) -> str:
    """
    Map a weather code to an OpenWeatherMap style icon token.

    Unknown codes always get "01d", even at night.

    Args:
        code: Open-Meteo weather code
        is_day: Whether the sun is up at the location

    Returns:
        Two digit icon number plus "d" or "n" (e.g., "10n")
    """
    suffix = "d" if is_day else "n"
    if code == 0:
        return f"01{suffix}"
    if 1 <= code <= 3:
        return f"0{1 + code}{suffix}"
    if code >= 4:
        for upper, number in _ICON_RANGES:
            if code < upper:
                return f"{number}{suffix}"
    return "01d"


def legacy_condition_id(code: int) -> int:
    """Bucket a weather code into an OpenWeatherMap condition id (default 800)."""
    for upper, condition_id in _LEGACY_ID_BUCKETS:
        if code < upper:
            return condition_id
    return 800


def describe(code: int, is_day: bool, condition_id: int) -> ConditionDescriptor:
    """Build the descriptor for a weather code with a caller-chosen id."""
    condition = classify(code)
    return ConditionDescriptor(
        id=condition_id,
        main=condition.value,
        description=condition.value.lower(),
        icon=icon_for(code, is_day),
    )
