"""Weather Normalizer - Wires OpenWeatherMap client and core formatting.

Always returns one feature per registry city, in registry order. Cities
whose request fails get synthetic data; a rejected API key switches the
whole batch to synthetic data.
"""

import logging
import random
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable

from sig_nusantara.core.cities import CITY_REGISTRY, CityRegistryEntry
from sig_nusantara.core.config import WeatherConfig
from sig_nusantara.core.feature import Feature, FeatureCollection
from sig_nusantara.core.weather import (
    WIB,
    build_fallback_collection,
    build_fallback_feature,
    build_weather_feature,
)
from sig_nusantara.shell.config_loader import resolve_api_key
from sig_nusantara.shell.openweather_client import OpenWeatherClient
from sig_nusantara.shell.response_cache import ResponseCache


logger = logging.getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeatherNormalizer:
    """Produces weather features for the city registry."""

    def __init__(
        self,
        config: WeatherConfig | None = None,
        api_key: str | None = None,
        cities: tuple[CityRegistryEntry, ...] = CITY_REGISTRY,
        client: OpenWeatherClient | None = None,
        rng: random.Random | None = None,
        clock: Callable[[], datetime] = _utcnow,
        tz: timezone = WIB,
        cache: ResponseCache | None = None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            config: OpenWeatherMap settings (defaults if not provided)
            api_key: Resolved API key; None or empty means fallback only
            cities: Cities to report on, in output order
            client: OpenWeatherMap client (created from config if not provided)
            rng: Random source for synthetic data
            clock: Current time source
            tz: Display timezone for timestamps
            cache: Response cache shared with other clients (optional)
        """
        self.config = config or WeatherConfig()
        self.api_key = api_key
        self.cities = cities
        self.rng = rng or random.Random()
        self.clock = clock
        self.tz = tz
        self._client = client
        self._cache = cache

    @property
    def client(self) -> OpenWeatherClient:
        """Lazy initialization of the OpenWeatherMap client."""
        if self._client is None:
            self._client = OpenWeatherClient(
                api_key=self.api_key or "",
                base_url=self.config.api_url,
                units=self.config.units,
                lang=self.config.lang,
                timeout=self.config.timeout_seconds,
                revalidate_seconds=self.config.revalidate_seconds,
                cache=self._cache,
            )
        return self._client

    def _fallback(self, city: CityRegistryEntry, now: datetime) -> Feature:
        return build_fallback_feature(city, self.rng, now, self.tz)

    def _fallback_collection(self, now: datetime) -> FeatureCollection:
        return build_fallback_collection(self.cities, self.rng, now, self.tz)

    def _fetch_city(self, city: CityRegistryEntry, now: datetime) -> Feature | None:
        """Fetch and format weather for one city.

        Returns:
            Live or synthetic Feature, or None if the API key was rejected
        """
        try:
            response = self.client.fetch_current(city.latitude, city.longitude)
        except Exception as e:
            logger.warning("Failed to fetch weather for %s, using fallback data: %s", city.name, e)
            return self._fallback(city, now)

        if response.unauthorized:
            return None

        if not response.success or response.payload is None:
            logger.warning(
                "Failed to fetch weather for %s (%d), using fallback data: %s",
                city.name,
                response.status_code,
                response.error,
            )
            return self._fallback(city, now)

        try:
            return build_weather_feature(city, response.payload, now, self.tz)
        except Exception as e:
            logger.warning("Malformed weather payload for %s, using fallback data: %s", city.name, e)
            return self._fallback(city, now)

    def _fetch_sequential(self, now: datetime) -> FeatureCollection | None:
        features = []
        for city in self.cities:
            feature = self._fetch_city(city, now)
            if feature is None:
                return None
            features.append(feature)
        return FeatureCollection.of(features)

    def _fetch_parallel(self, now: datetime) -> FeatureCollection | None:
        rejected = threading.Event()

        def task(city: CityRegistryEntry) -> Feature | None:
            if rejected.is_set():
                return None
            feature = self._fetch_city(city, now)
            if feature is None:
                rejected.set()
            return feature

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            results = list(executor.map(task, self.cities))

        if rejected.is_set():
            return None
        return FeatureCollection.of(f for f in results if f is not None)

    def fetch_current_weather(self) -> FeatureCollection:
        """Fetch current weather for every registry city.

        Never raises.

        Returns:
            Exactly one feature per city, in registry order
        """
        now = self.clock()

        if not self.api_key:
            logger.warning("OpenWeatherMap API key is missing. Returning fallback weather data.")
            return self._fallback_collection(now)

        if self.config.max_workers > 1:
            collection = self._fetch_parallel(now)
        else:
            collection = self._fetch_sequential(now)

        if collection is None:
            logger.warning("OpenWeatherMap API key rejected. Returning fallback weather data.")
            return self._fallback_collection(now)

        logger.info(
            "Fetched weather for %d cities (%d fallback)",
            len(collection),
            collection.fallback_count,
        )
        return collection


def fetch_current_weather(
    config: WeatherConfig | None = None,
    cities: tuple[CityRegistryEntry, ...] = CITY_REGISTRY,
) -> FeatureCollection:
    """Fetch current weather with a default client and resolved API key."""
    config = config or WeatherConfig()
    api_key = resolve_api_key(config.api_key)
    return WeatherNormalizer(config, api_key=api_key, cities=cities).fetch_current_weather()
