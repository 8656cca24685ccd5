"""Display aggregates - Pure functions.

Small helpers the map front end uses for markers and the info panel.
"""

from dataclasses import dataclass

from sig_nusantara.core.feature import CATEGORY_WEATHER, Feature, FeatureCollection
from sig_nusantara.core.seismic import parse_magnitude


STRONG_MAGNITUDE_THRESHOLD = 5.0

STRONG_EARTHQUAKE_COLOR = "#dc2626"  # red-600
MODERATE_EARTHQUAKE_COLOR = "#fbbf24"  # amber-400
WEATHER_COLOR = "#3b82f6"  # blue-500


@dataclass(frozen=True)
class MapSummary:
    """Counts shown in the info panel.

    Attributes:
        total_earthquakes: Number of earthquake markers
        total_weather: Number of weather markers
        total_provinces: Distinct provinces covered by weather markers
        weather_fallbacks: Weather markers carrying synthetic data
    """
    total_earthquakes: int
    total_weather: int
    total_provinces: int
    weather_fallbacks: int


def magnitude_color(magnitude: float | None) -> str:
    """Get the marker color for an earthquake magnitude.

    Pure function. Unparseable magnitudes are drawn as moderate.
    """
    if magnitude is not None and magnitude >= STRONG_MAGNITUDE_THRESHOLD:
        return STRONG_EARTHQUAKE_COLOR
    return MODERATE_EARTHQUAKE_COLOR


def marker_color(feature: Feature) -> str:
    """Get the marker color for any feature."""
    if feature.category == CATEGORY_WEATHER:
        return WEATHER_COLOR
    return magnitude_color(parse_magnitude(feature.attributes.get("magnitude", "")))


def count_provinces(weather: FeatureCollection) -> int:
    """Count distinct non-empty province names."""
    provinces = {
        f.attributes.get("province", "")
        for f in weather
    }
    provinces.discard("")
    return len(provinces)


def summarize(
    earthquakes: FeatureCollection,
    weather: FeatureCollection,
) -> MapSummary:
    """Compute info panel counts.

    Pure function.
    """
    return MapSummary(
        total_earthquakes=len(earthquakes),
        total_weather=len(weather),
        total_provinces=count_provinces(weather),
        weather_fallbacks=weather.fallback_count,
    )
