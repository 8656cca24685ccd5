"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

Models (Config, SeismicConfig, WeatherConfig) are defined in
sig_nusantara/core/config.py to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Optional

import yaml

from sig_nusantara.core.cities import CITY_REGISTRY, CityRegistryEntry
from sig_nusantara.core.config import Config, SeismicConfig, WeatherConfig


logger = logging.getLogger(__name__)


# Environment variables checked for the weather API key, in order
API_KEY_ENV_VAR = "OPENWEATHER_API_KEY"
PUBLIC_API_KEY_ENV_VAR = "PUBLIC_OPENWEATHER_KEY"

# Last-resort key baked into the build; empty means "no key"
DEFAULT_OPENWEATHER_API_KEY = ""

DEFAULT_CONFIG_PATH = "config/config.yaml"


def _resolve_value(value: Any) -> Any:
    """Resolve a value that may be a ``${VAR}`` environment placeholder.

    Args:
        value: Value to resolve

    Returns:
        Resolved value, or the original if it is not a placeholder or the
        variable is unset
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def _parse_seismic(data: dict[str, Any]) -> SeismicConfig:
    """Parse BMKG settings from config data."""
    defaults = SeismicConfig()
    return SeismicConfig(
        significant_url=_resolve_value(data.get("significant_url", defaults.significant_url)),
        latest_url=_resolve_value(data.get("latest_url", defaults.latest_url)),
        max_events=int(data.get("max_events", defaults.max_events)),
        revalidate_seconds=int(data.get("revalidate_seconds", defaults.revalidate_seconds)),
        timeout_seconds=float(data.get("timeout_seconds", defaults.timeout_seconds)),
    )


def _parse_weather(data: dict[str, Any]) -> WeatherConfig:
    """Parse OpenWeatherMap settings from config data."""
    defaults = WeatherConfig()
    api_key = _resolve_value(data.get("api_key"))
    if isinstance(api_key, str) and api_key.startswith("${"):
        # Unresolved placeholder is not a usable key
        api_key = None

    return WeatherConfig(
        api_url=_resolve_value(data.get("api_url", defaults.api_url)),
        api_key=api_key or None,
        units=data.get("units", defaults.units),
        lang=data.get("lang", defaults.lang),
        revalidate_seconds=int(data.get("revalidate_seconds", defaults.revalidate_seconds)),
        timeout_seconds=float(data.get("timeout_seconds", defaults.timeout_seconds)),
        max_workers=int(data.get("max_workers", defaults.max_workers)),
    )


def _parse_city(data: dict[str, Any]) -> CityRegistryEntry:
    """Parse a city registry entry from config data."""
    return CityRegistryEntry(
        province=data["province"],
        name=data["name"],
        latitude=float(data["latitude"]),
        longitude=float(data["longitude"]),
    )


def load_config_from_dict(data: dict[str, Any]) -> Config:
    """Load configuration from a dictionary.

    This is a pure-ish function (only env var expansion has side effects).

    Args:
        data: Configuration dictionary

    Returns:
        Parsed Config object
    """
    cities = CITY_REGISTRY
    if data.get("cities"):
        cities = tuple(_parse_city(c) for c in data["cities"])

    return Config(
        seismic=_parse_seismic(data.get("seismic") or {}),
        weather=_parse_weather(data.get("weather") or {}),
        cities=cities,
    )


def load_config(config_path: str | Path | None = None) -> Config:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed Config object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return Config()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return Config()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: %d cities, weather workers=%d",
        len(config.cities),
        config.weather.max_workers,
    )

    return config


def _from_env(name: str) -> Callable[[], Optional[str]]:
    return lambda: os.environ.get(name)


def resolve_api_key(configured: Optional[str] = None) -> Optional[str]:
    """Resolve the OpenWeatherMap API key.

    Lookups run in order and the first non-empty value wins:

    1. ``OPENWEATHER_API_KEY`` environment variable
    2. ``PUBLIC_OPENWEATHER_KEY`` environment variable
    3. ``weather.api_key`` from the config file
    4. ``DEFAULT_OPENWEATHER_API_KEY``

    Args:
        configured: Key from the config file (optional)

    Returns:
        The API key, or None if no lookup produced one
    """
    lookups: list[Callable[[], Optional[str]]] = [
        _from_env(API_KEY_ENV_VAR),
        _from_env(PUBLIC_API_KEY_ENV_VAR),
        lambda: configured,
        lambda: DEFAULT_OPENWEATHER_API_KEY,
    ]

    for lookup in lookups:
        value = lookup()
        if value and value.strip():
            return value.strip()

    return None
