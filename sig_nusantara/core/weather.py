"""Weather formatting - Pure functions.

This module maps OpenWeatherMap "current weather" payloads onto map
features, and builds synthetic stand-in features when live data is not
available. Randomness and the clock are passed in, so every function
here is deterministic given its arguments.
"""

import math
import random
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any

from sig_nusantara.core.cities import CityRegistryEntry
from sig_nusantara.core.feature import (
    CATEGORY_WEATHER,
    PLACEHOLDER,
    PROVENANCE_OPENWEATHER,
    PROVENANCE_OPENWEATHER_FALLBACK,
    Feature,
    FeatureCollection,
)


# Western Indonesia Time (UTC+7)
WIB = timezone(timedelta(hours=7), name="WIB")

DEFAULT_ICON = "ℹ️"

CONDITION_ICONS: dict[str, str] = {
    "clear": "☀️",
    "clouds": "☁️",
    "drizzle": "🌦️",
    "rain": "🌧️",
    "thunderstorm": "⛈️",
    "snow": "❄️",
    "mist": "🌫️",
    "fog": "🌫️",
    "haze": "🌫️",
    "smoke": "🌫️",
    "dust": "🌫️",
    "sand": "🌫️",
    "ash": "🌋",
    "squall": "💨",
    "tornado": "🌪️",
}


@dataclass(frozen=True)
class WeatherOption:
    """A canned condition used for synthetic data."""
    description: str
    main: str
    icon: str


FALLBACK_CONDITIONS: tuple[WeatherOption, ...] = (
    WeatherOption("cerah", "Clear", "☀️"),
    WeatherOption("berawan", "Clouds", "☁️"),
    WeatherOption("hujan ringan", "Drizzle", "🌦️"),
    WeatherOption("berawan sebagian", "Clouds", "⛅"),
    WeatherOption("cerah berawan", "Clear", "🌤️"),
    WeatherOption("kabut", "Mist", "🌫️"),
)

# Synthetic value ranges (inclusive)
FALLBACK_TEMPERATURE_RANGE = (26, 33)
FALLBACK_HUMIDITY_RANGE = (65, 89)
FALLBACK_PRESSURE_RANGE = (1005, 1024)
FALLBACK_WIND_RANGE = (1.0, 5.0)
FALLBACK_FEELS_LIKE_OFFSET = (0, 2)


def get_condition_icon(main: str | None) -> str:
    """Get an icon for an OpenWeatherMap condition keyword.

    Pure function. Unknown keywords get the generic information icon.
    """
    normalized = (main or "").strip().lower()
    return CONDITION_ICONS.get(normalized, DEFAULT_ICON)


def to_number(value: Any) -> float:
    """Coerce a payload value to float, NaN if absent or not numeric."""
    if value is None or isinstance(value, bool):
        return math.nan
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return math.nan


def format_rounded(value: Any, unit: str) -> str:
    """Format a value rounded to an integer, or the placeholder.

    Rounds half up (27.5 -> 28), unlike the builtin round().
    """
    number = to_number(value)
    if not math.isfinite(number):
        return PLACEHOLDER
    return f"{math.floor(number + 0.5)}{unit}"


def format_wind_speed(value: Any) -> str:
    number = to_number(value)
    if not math.isfinite(number):
        return PLACEHOLDER
    return f"{number:.1f} m/s"


def format_timestamp(moment: datetime, tz: timezone = WIB) -> str:
    """Format a datetime the way Indonesian locales display it.

    Example: ``19/10/2026, 14.05.09``
    """
    return moment.astimezone(tz).strftime("%d/%m/%Y, %H.%M.%S")


def observation_time(dt: Any, now: datetime, tz: timezone = WIB) -> datetime:
    """Resolve the provider's Unix timestamp, falling back to ``now``.

    Only a zero or missing ``dt`` means "no timestamp"; negative values are
    real (pre-1970) instants. Instants that cannot be shown in ``tz`` fall
    back to ``now`` as well.
    """
    seconds = to_number(dt)
    if not math.isfinite(seconds) or seconds == 0:
        return now
    try:
        moment = datetime.fromtimestamp(seconds, tz=timezone.utc)
        moment.astimezone(tz)
    except (OverflowError, OSError, ValueError):
        return now
    return moment


def _section(payload: dict[str, Any], key: str) -> dict[str, Any]:
    value = payload.get(key)
    return value if isinstance(value, dict) else {}


def _first_condition(payload: dict[str, Any]) -> dict[str, Any]:
    conditions = payload.get("weather")
    if isinstance(conditions, list) and conditions and isinstance(conditions[0], dict):
        return conditions[0]
    return {}


def build_weather_feature(
    city: CityRegistryEntry,
    payload: dict[str, Any],
    now: datetime,
    tz: timezone = WIB,
) -> Feature:
    """Map a successful OpenWeatherMap response to a Feature.

    Pure function.

    Args:
        city: Registry entry the request was made for
        payload: Decoded "current weather" JSON object
        now: Time to show if the payload has no ``dt``
        tz: Display timezone

    Returns:
        Feature tagged with live provenance
    """
    condition = _first_condition(payload)
    main = condition.get("main") or "-"
    description = condition.get("description") or main
    readings = _section(payload, "main")
    wind = _section(payload, "wind")

    return Feature(
        position=city.position,
        category=CATEGORY_WEATHER,
        attributes={
            "name": str(payload.get("name") or city.name),
            "province": city.province,
            "condition": str(description),
            "condition_main": str(main),
            "icon": get_condition_icon(str(main)),
            "temperature": format_rounded(readings.get("temp"), "°C"),
            "feels_like": format_rounded(readings.get("feels_like"), "°C"),
            "humidity": format_rounded(readings.get("humidity"), "%"),
            "pressure": format_rounded(readings.get("pressure"), " hPa"),
            "wind_speed": format_wind_speed(wind.get("speed")),
            "timestamp": format_timestamp(observation_time(payload.get("dt"), now, tz), tz),
        },
        provenance=PROVENANCE_OPENWEATHER,
    )


def build_fallback_feature(
    city: CityRegistryEntry,
    rng: random.Random,
    now: datetime,
    tz: timezone = WIB,
) -> Feature:
    """Build a synthetic but plausible weather Feature for a city.

    Args:
        city: Registry entry to stand in for
        rng: Random source
        now: Time shown as the observation timestamp
        tz: Display timezone

    Returns:
        Feature tagged with fallback provenance
    """
    temperature = rng.randint(*FALLBACK_TEMPERATURE_RANGE)
    humidity = rng.randint(*FALLBACK_HUMIDITY_RANGE)
    wind_speed = rng.uniform(*FALLBACK_WIND_RANGE)
    pressure = rng.randint(*FALLBACK_PRESSURE_RANGE)
    option = rng.choice(FALLBACK_CONDITIONS)
    feels_like = temperature + rng.randint(*FALLBACK_FEELS_LIKE_OFFSET)

    return Feature(
        position=city.position,
        category=CATEGORY_WEATHER,
        attributes={
            "name": city.name,
            "province": city.province,
            "condition": option.description,
            "condition_main": option.main,
            "icon": option.icon,
            "temperature": f"{temperature}°C",
            "feels_like": f"{feels_like}°C",
            "humidity": f"{humidity}%",
            "pressure": f"{pressure} hPa",
            "wind_speed": f"{wind_speed:.1f} m/s",
            "timestamp": format_timestamp(now, tz),
        },
        provenance=PROVENANCE_OPENWEATHER_FALLBACK,
    )


def build_fallback_collection(
    cities: tuple[CityRegistryEntry, ...],
    rng: random.Random,
    now: datetime,
    tz: timezone = WIB,
) -> FeatureCollection:
    """Build an all-synthetic collection, one feature per city."""
    return FeatureCollection.of(
        build_fallback_feature(city, rng, now, tz) for city in cities
    )
