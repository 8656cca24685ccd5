"""Cloud Function Entry Point.

This module provides the entry point for Google Cloud Functions.
It's a thin wrapper that loads configuration and invokes the orchestrator.
"""

import logging
import os
import json
from typing import Any

import functions_framework
from flask import Request

from sig_nusantara.core.config import validate_config
from sig_nusantara.orchestrator import Orchestrator
from sig_nusantara.shell.config_loader import load_config, resolve_api_key
from sig_nusantara.shell.response_cache import ResponseCache


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Upstream responses, kept for the life of the function instance
_response_cache = ResponseCache()


def _get_config():
    """Load configuration from file, warning about anything suspicious."""
    config = load_config()

    result = validate_config(config, resolve_api_key(config.weather.api_key))
    for error in result.errors:
        if error.severity == "warning":
            logger.warning("Config %s: %s", error.field, error.message)
        else:
            logger.error("Config %s: %s", error.field, error.message)

    return config


@functions_framework.http
def map_data(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point.

    Serves earthquake and weather GeoJSON for the map front end.

    Args:
        request: Flask request object (not used, but required by framework)

    Returns:
        Tuple of (response dict, HTTP status code)
    """
    logger.info("Fetching map data")

    try:
        config = _get_config()

        orchestrator = Orchestrator(config, cache=_response_cache)
        data = orchestrator.fetch_map_data()

        response = data.to_dict()
        response["status"] = "success"

        logger.info(
            "Completed: %d earthquakes, %d weather stations",
            len(data.earthquakes),
            len(data.weather),
        )

        return response, 200

    except Exception as e:
        logger.exception("Unexpected error while fetching map data")
        return {
            "status": "error",
            "message": str(e),
        }, 500


# For local testing
if __name__ == "__main__":
    print("Fetching map data locally...")

    class MockRequest:
        pass

    response, status = map_data(MockRequest())
    print(f"\nResponse ({status}):")
    print(json.dumps(response, indent=2, ensure_ascii=False))
