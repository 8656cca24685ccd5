"""Seismic Normalizer - Wires BMKG client and core parsing.

Fails closed: any fetch or parse failure yields an empty collection, so
the map always renders.
"""

import logging

from sig_nusantara.core.config import SeismicConfig
from sig_nusantara.core.feature import FeatureCollection
from sig_nusantara.core.seismic import parse_events
from sig_nusantara.shell.bmkg_client import BMKGClient
from sig_nusantara.shell.response_cache import ResponseCache


logger = logging.getLogger(__name__)


class SeismicNormalizer:
    """Produces earthquake features from BMKG feeds."""

    def __init__(
        self,
        config: SeismicConfig | None = None,
        client: BMKGClient | None = None,
        cache: ResponseCache | None = None,
    ) -> None:
        """Initialize the normalizer.

        Args:
            config: BMKG settings (defaults if not provided)
            client: BMKG client (created from config if not provided)
            cache: Response cache shared with other clients (optional)
        """
        self.config = config or SeismicConfig()
        self.client = client or BMKGClient(
            significant_url=self.config.significant_url,
            latest_url=self.config.latest_url,
            timeout=self.config.timeout_seconds,
            revalidate_seconds=self.config.revalidate_seconds,
            cache=cache,
        )

    def fetch_significant_seismic_events(self) -> FeatureCollection:
        """Fetch up to ``max_events`` recent significant earthquakes.

        Never raises.

        Returns:
            Accepted events in feed order, or an empty collection on failure
        """
        try:
            payload = self.client.fetch_significant()
            collection = parse_events(payload, limit=self.config.max_events)
        except Exception as e:
            logger.error("Failed to fetch BMKG significant earthquakes: %s", e)
            return FeatureCollection()

        logger.info("Fetched %d significant earthquakes from BMKG", len(collection))
        return collection

    def fetch_latest_seismic_event(self) -> FeatureCollection:
        """Fetch the single most recent earthquake.

        Never raises.

        Returns:
            Collection with zero or one event
        """
        try:
            payload = self.client.fetch_latest()
            collection = parse_events(payload, limit=1)
        except Exception as e:
            logger.error("Failed to fetch BMKG latest earthquake: %s", e)
            return FeatureCollection()

        return collection


def fetch_significant_seismic_events(config: SeismicConfig | None = None) -> FeatureCollection:
    """Fetch significant earthquakes with a default client."""
    return SeismicNormalizer(config).fetch_significant_seismic_events()


def fetch_latest_seismic_event(config: SeismicConfig | None = None) -> FeatureCollection:
    """Fetch the latest earthquake with a default client."""
    return SeismicNormalizer(config).fetch_latest_seismic_event()
