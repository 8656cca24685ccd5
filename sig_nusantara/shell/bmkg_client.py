"""BMKG API Client - Imperative Shell.

This module handles HTTP communication with the BMKG earthquake feeds.
All I/O is contained here; parsing is in the core module.
"""

import logging
from typing import Any

import requests

from sig_nusantara.core.config import BMKG_LATEST_URL, BMKG_SIGNIFICANT_URL
from sig_nusantara.shell.response_cache import ResponseCache, make_key


logger = logging.getLogger(__name__)


# Default timeout for API requests (seconds)
DEFAULT_TIMEOUT = 10

# BMKG feeds are treated as fresh for this long (seconds)
DEFAULT_REVALIDATE_SECONDS = 300


class BMKGClient:
    """Client for fetching earthquake data from BMKG.

    This is part of the imperative shell - it handles HTTP I/O.
    """

    def __init__(
        self,
        significant_url: str = BMKG_SIGNIFICANT_URL,
        latest_url: str = BMKG_LATEST_URL,
        timeout: float = DEFAULT_TIMEOUT,
        revalidate_seconds: int = DEFAULT_REVALIDATE_SECONDS,
        cache: ResponseCache | None = None,
        session: requests.Session | None = None,
    ) -> None:
        """Initialize BMKG client.

        Args:
            significant_url: Significant (M5+) events feed URL
            latest_url: Latest event feed URL
            timeout: Request timeout in seconds
            revalidate_seconds: Cache lifetime for fetched payloads
            cache: Response cache (a private one is created if not provided)
            session: HTTP session (module-level requests if not provided)
        """
        self.significant_url = significant_url
        self.latest_url = latest_url
        self.timeout = timeout
        self.revalidate_seconds = revalidate_seconds
        self.cache = cache if cache is not None else ResponseCache()
        self._http = session or requests

    def _get_json(self, url: str) -> Any:
        """GET a feed and decode its JSON body.

        This method performs HTTP I/O.

        Raises:
            requests.RequestException: If the request fails or returns non-2xx
            ValueError: If the body is not valid JSON
        """
        key = make_key(url)
        cached = self.cache.get(key)
        if cached is not None:
            logger.debug("Using cached BMKG response for %s", url)
            return cached

        logger.info("Fetching earthquakes from BMKG", extra={"url": url})

        response = self._http.get(url, timeout=self.timeout)
        response.raise_for_status()

        data = response.json()
        self.cache.set(key, data, self.revalidate_seconds)
        return data

    def fetch_significant(self) -> Any:
        """Fetch the significant earthquakes feed.

        Returns:
            Raw decoded JSON from BMKG

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the body is not valid JSON
        """
        return self._get_json(self.significant_url)

    def fetch_latest(self) -> Any:
        """Fetch the latest earthquake feed.

        Returns:
            Raw decoded JSON from BMKG

        Raises:
            requests.RequestException: If the request fails
            ValueError: If the body is not valid JSON
        """
        return self._get_json(self.latest_url)
