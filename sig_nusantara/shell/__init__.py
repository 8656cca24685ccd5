"""Imperative Shell - I/O and side effects.

This module contains all code that interacts with external systems:
- BMKG earthquake feed client (HTTP)
- OpenWeatherMap client (HTTP)
- Response cache for revalidation periods
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from sig_nusantara.shell.bmkg_client import BMKGClient
from sig_nusantara.shell.openweather_client import OpenWeatherClient, WeatherResponse
from sig_nusantara.shell.response_cache import ResponseCache
from sig_nusantara.shell.config_loader import load_config, resolve_api_key

__all__ = [
    "BMKGClient",
    "OpenWeatherClient",
    "WeatherResponse",
    "ResponseCache",
    "load_config",
    "resolve_api_key",
]
