"""Orchestrator - Wires Functional Core and Imperative Shell.

This module runs the seismic and weather normalizers side by side and
hands their results to the map front end. The two feeds are never mixed;
they meet only in the returned MapData.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from sig_nusantara.core.config import Config
from sig_nusantara.core.feature import FeatureCollection
from sig_nusantara.core.summary import MapSummary, summarize
from sig_nusantara.seismic_normalizer import SeismicNormalizer
from sig_nusantara.shell.config_loader import resolve_api_key
from sig_nusantara.shell.response_cache import ResponseCache
from sig_nusantara.weather_normalizer import WeatherNormalizer


logger = logging.getLogger(__name__)


@dataclass
class MapData:
    """Everything the map needs for one render cycle.

    Attributes:
        earthquakes: Significant earthquakes from BMKG
        weather: Current weather per registry city
        fetched_at: When the fetch cycle started (UTC)
    """
    earthquakes: FeatureCollection
    weather: FeatureCollection
    fetched_at: datetime

    @property
    def summary(self) -> MapSummary:
        """Info panel counts."""
        return summarize(self.earthquakes, self.weather)

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the JSON response."""
        summary = self.summary
        return {
            "earthquakes": self.earthquakes.to_geojson(),
            "weather": self.weather.to_geojson(),
            "summary": {
                "total_earthquakes": summary.total_earthquakes,
                "total_weather": summary.total_weather,
                "total_provinces": summary.total_provinces,
                "weather_fallbacks": summary.weather_fallbacks,
            },
            "fetched_at": self.fetched_at.isoformat(),
        }


class Orchestrator:
    """Coordinates the two feeds.

    This class wires together:
    - Seismic normalizer (BMKG earthquakes)
    - Weather normalizer (OpenWeatherMap per city)
    """

    def __init__(
        self,
        config: Config | None = None,
        seismic: SeismicNormalizer | None = None,
        weather: WeatherNormalizer | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        """Initialize orchestrator with configuration.

        Args:
            config: Application configuration
            seismic: Seismic normalizer (created if not provided)
            weather: Weather normalizer (created if not provided)
            cache: Response cache for both feeds; pass the same one across
                requests to honor the revalidation periods
        """
        self.config = config or Config()
        self.seismic = seismic or SeismicNormalizer(self.config.seismic, cache=cache)
        self.weather = weather or WeatherNormalizer(
            self.config.weather,
            api_key=resolve_api_key(self.config.weather.api_key),
            cities=self.config.cities,
            cache=cache,
        )

    def fetch_map_data(self) -> MapData:
        """Fetch both feeds concurrently.

        Both normalizers never raise, so neither branch can fail the other.

        Returns:
            MapData with both collections
        """
        fetched_at = datetime.now(timezone.utc)

        with ThreadPoolExecutor(max_workers=2) as executor:
            earthquakes_future = executor.submit(self.seismic.fetch_significant_seismic_events)
            weather_future = executor.submit(self.weather.fetch_current_weather)

            earthquakes = earthquakes_future.result()
            weather = weather_future.result()

        logger.info(
            "Map data ready: %d earthquakes, %d weather stations (%d fallback)",
            len(earthquakes),
            len(weather),
            weather.fallback_count,
        )

        return MapData(
            earthquakes=earthquakes,
            weather=weather,
            fetched_at=fetched_at,
        )
