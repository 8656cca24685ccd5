"""Tests for the Seismic Normalizer.

Covers the fail-closed contract: every failure mode yields an empty
collection rather than an exception.
"""

from unittest.mock import Mock

import requests
import responses

from sig_nusantara.core.config import SeismicConfig
from sig_nusantara.core.feature import PROVENANCE_BMKG
from sig_nusantara.seismic_normalizer import SeismicNormalizer
from sig_nusantara.shell.bmkg_client import BMKGClient
from sig_nusantara.shell.response_cache import ResponseCache


SIGNIFICANT_URL = "https://bmkg.test/gempaterkini.json"
LATEST_URL = "https://bmkg.test/autogempa.json"


def make_event(wilayah, lintang="6.62 LS", bujur="127.52 BT", **extra):
    event = {
        "Tanggal": "19 Okt 2026",
        "Jam": "10:15:42 WIB",
        "Lintang": lintang,
        "Bujur": bujur,
        "Magnitude": "5.4",
        "Kedalaman": "10 km",
        "Wilayah": wilayah,
        "Potensi": "Tidak berpotensi tsunami",
    }
    event.update(extra)
    return event


def make_normalizer(config=None):
    config = config or SeismicConfig(significant_url=SIGNIFICANT_URL, latest_url=LATEST_URL)
    client = BMKGClient(
        significant_url=config.significant_url,
        latest_url=config.latest_url,
        cache=ResponseCache(),
    )
    return SeismicNormalizer(config, client=client)


class TestFetchSignificantSeismicEvents:
    """Tests for SeismicNormalizer.fetch_significant_seismic_events()."""

    @responses.activate
    def test_returns_accepted_events_in_order(self):
        payload = {"Infogempa": {"gempa": [
            make_event("A", lintang="1.10 LU"),
            make_event("B", lintang="0 LS"),
            make_event("C", bujur="99.9 BB"),
        ]}}
        responses.add(responses.GET, SIGNIFICANT_URL, json=payload, status=200)

        result = make_normalizer().fetch_significant_seismic_events()

        assert [f.attributes["location"] for f in result] == ["A", "C"]
        assert result[0].position == (127.52, 1.10)
        assert result[1].position == (-99.9, -6.62)
        assert all(f.provenance == PROVENANCE_BMKG for f in result)

    @responses.activate
    def test_hemisphere_round_trip(self):
        payload = {"Infogempa": {"gempa": [make_event("Laut Banda")]}}
        responses.add(responses.GET, SIGNIFICANT_URL, json=payload, status=200)

        result = make_normalizer().fetch_significant_seismic_events()

        assert result[0].position == (127.52, -6.62)

    @responses.activate
    def test_respects_configured_cap(self):
        payload = {"Infogempa": {"gempa": [make_event(str(i)) for i in range(10)]}}
        responses.add(responses.GET, SIGNIFICANT_URL, json=payload, status=200)
        config = SeismicConfig(
            significant_url=SIGNIFICANT_URL,
            latest_url=LATEST_URL,
            max_events=3,
        )

        result = make_normalizer(config).fetch_significant_seismic_events()

        assert len(result) == 3

    @responses.activate
    def test_http_error_returns_empty(self):
        responses.add(responses.GET, SIGNIFICANT_URL, status=500)

        result = make_normalizer().fetch_significant_seismic_events()

        assert len(result) == 0

    @responses.activate
    def test_network_error_returns_empty(self):
        responses.add(responses.GET, SIGNIFICANT_URL, body=requests.ConnectionError("down"))

        result = make_normalizer().fetch_significant_seismic_events()

        assert len(result) == 0

    @responses.activate
    def test_malformed_json_returns_empty(self):
        responses.add(responses.GET, SIGNIFICANT_URL, body="{not json", status=200)

        result = make_normalizer().fetch_significant_seismic_events()

        assert len(result) == 0

    @responses.activate
    def test_wrong_envelope_returns_empty(self):
        responses.add(responses.GET, SIGNIFICANT_URL, json={"data": []}, status=200)

        result = make_normalizer().fetch_significant_seismic_events()

        assert len(result) == 0

    def test_unexpected_client_exception_returns_empty(self):
        client = Mock()
        client.fetch_significant.side_effect = RuntimeError("boom")

        result = SeismicNormalizer(client=client).fetch_significant_seismic_events()

        assert len(result) == 0


class TestFetchLatestSeismicEvent:
    """Tests for SeismicNormalizer.fetch_latest_seismic_event()."""

    @responses.activate
    def test_single_object_envelope(self):
        event = {
            "Tanggal": "19 Okt 2026",
            "Jam": "09:00:00 WIB",
            "Coordinates": "-1.63,127.52",
            "Magnitude": "4.1",
            "Kedalaman": "12 km",
            "Wilayah": "Halmahera",
        }
        responses.add(responses.GET, LATEST_URL, json={"Infogempa": {"gempa": event}}, status=200)

        result = make_normalizer().fetch_latest_seismic_event()

        assert len(result) == 1
        assert result[0].position == (127.52, -1.63)
        assert result[0].attributes["potential"] == "Tidak berpotensi tsunami"

    @responses.activate
    def test_failure_returns_empty(self):
        responses.add(responses.GET, LATEST_URL, status=404)

        result = make_normalizer().fetch_latest_seismic_event()

        assert len(result) == 0
