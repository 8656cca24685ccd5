"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- BMKG earthquake parsing and coordinate validation
- OpenWeatherMap payload formatting and synthetic fallback data
- Display aggregates (marker colors, counts)
- Configuration models and validation

All functions here are deterministic and have no I/O.
"""

from sig_nusantara.core.cities import CITY_REGISTRY, CityRegistryEntry
from sig_nusantara.core.feature import Feature, FeatureCollection
from sig_nusantara.core.seismic import parse_event, parse_events
from sig_nusantara.core.summary import MapSummary, marker_color, summarize
from sig_nusantara.core.weather import build_fallback_feature, build_weather_feature

__all__ = [
    # Features
    "Feature",
    "FeatureCollection",
    # Cities
    "CITY_REGISTRY",
    "CityRegistryEntry",
    # Seismic
    "parse_event",
    "parse_events",
    # Weather
    "build_weather_feature",
    "build_fallback_feature",
    # Summary
    "MapSummary",
    "marker_color",
    "summarize",
]
