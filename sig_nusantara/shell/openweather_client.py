"""OpenWeatherMap Client - Imperative Shell.

This module handles HTTP communication with the OpenWeatherMap
current weather API. All I/O is contained here; formatting is in the
core module.
"""

import logging
from dataclasses import dataclass
from typing import Any

import requests

from sig_nusantara.core.config import OPENWEATHER_URL
from sig_nusantara.shell.response_cache import ResponseCache, make_key


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 10

# Weather responses are treated as fresh for this long (seconds)
DEFAULT_REVALIDATE_SECONDS = 600

# Status codes meaning the API key itself was rejected
AUTH_FAILURE_CODES = frozenset({401, 403})


@dataclass
class WeatherResponse:
    """Response from the current weather endpoint.

    Attributes:
        success: Whether a usable payload was received
        status_code: HTTP status code (0 if no response)
        payload: Decoded JSON object on success
        error: Error message if failed
    """
    success: bool
    status_code: int
    payload: dict[str, Any] | None = None
    error: str | None = None

    @property
    def unauthorized(self) -> bool:
        """True if the provider rejected the API key."""
        return self.status_code in AUTH_FAILURE_CODES


class OpenWeatherClient:
    """Client for fetching current weather from OpenWeatherMap.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = OPENWEATHER_URL,
        units: str = "metric",
        lang: str = "id",
        timeout: float = DEFAULT_TIMEOUT,
        revalidate_seconds: int = DEFAULT_REVALIDATE_SECONDS,
        cache: ResponseCache | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize OpenWeatherMap client.

        Args:
            api_key: OpenWeatherMap API key (appid)
            base_url: Current weather endpoint
            units: Unit system ("metric" for Celsius and m/s)
            lang: Language for condition descriptions
            timeout: Request timeout in seconds
            revalidate_seconds: Cache lifetime for fetched payloads
            cache: Response cache (a private one is created if not provided)
            session: HTTP session (module-level requests if not provided)
        """
        self.api_key = api_key
        self.base_url = base_url
        self.units = units
        self.lang = lang
        self.timeout = timeout
        self.revalidate_seconds = revalidate_seconds
        self.cache = cache if cache is not None else ResponseCache()
        self._http = session or requests

    def _build_params(self, latitude: float, longitude: float) -> dict[str, str]:
        """Build query parameters for a current weather request."""
        return {
            "lat": str(latitude),
            "lon": str(longitude),
            "appid": self.api_key,
            "units": self.units,
            "lang": self.lang,
        }

    def fetch_current(self, latitude: float, longitude: float) -> WeatherResponse:
        """Fetch current weather for a coordinate.

        This method performs HTTP I/O. It never raises.

        Args:
            latitude: Location latitude
            longitude: Location longitude

        Returns:
            WeatherResponse indicating success or failure
        """
        params = self._build_params(latitude, longitude)
        key = make_key(self.base_url, params)

        cached = self.cache.get(key)
        if cached is not None:
            return WeatherResponse(success=True, status_code=200, payload=cached)

        try:
            response = self._http.get(
                self.base_url,
                params=params,
                timeout=self.timeout,
            )
        except requests.Timeout:
            logger.error("OpenWeatherMap request timed out for %s,%s", latitude, longitude)
            return WeatherResponse(
                success=False,
                status_code=0,
                error="Request timed out",
            )
        except requests.RequestException as e:
            logger.error("OpenWeatherMap request failed: %s", str(e))
            return WeatherResponse(
                success=False,
                status_code=0,
                error=str(e),
            )

        if response.status_code != 200:
            error_text = response.text
            logger.warning(
                "OpenWeatherMap returned non-200: %d - %s",
                response.status_code,
                error_text,
            )
            return WeatherResponse(
                success=False,
                status_code=response.status_code,
                error=error_text,
            )

        try:
            data = response.json()
        except ValueError as e:
            logger.warning("OpenWeatherMap returned invalid JSON: %s", str(e))
            return WeatherResponse(
                success=False,
                status_code=response.status_code,
                error=f"Invalid JSON: {e}",
            )

        if not isinstance(data, dict):
            return WeatherResponse(
                success=False,
                status_code=response.status_code,
                error=f"Unexpected payload type: {type(data).__name__}",
            )

        self.cache.set(key, data, self.revalidate_seconds)
        return WeatherResponse(
            success=True,
            status_code=response.status_code,
            payload=data,
        )
