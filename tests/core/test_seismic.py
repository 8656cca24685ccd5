"""Unit tests for BMKG earthquake parsing.

These tests exercise pure functions:
- No mocks needed
- Fast, deterministic execution
- Simple assertions on pure functions
"""

import math

import pytest

from sig_nusantara.core.feature import CATEGORY_EARTHQUAKE, PLACEHOLDER, PROVENANCE_BMKG
from sig_nusantara.core.seismic import (
    MAX_EVENTS,
    NO_TSUNAMI_POTENTIAL,
    extract_events,
    is_valid_coordinate,
    parse_decimal_pair,
    parse_event,
    parse_events,
    parse_latitude,
    parse_longitude,
    parse_magnitude,
)


# Sample BMKG significant-event record
SAMPLE_EVENT = {
    "Tanggal": "19 Okt 2026",
    "Jam": "10:15:42 WIB",
    "DateTime": "2026-10-19T03:15:42+00:00",
    "Coordinates": "-6.62,127.52",
    "Lintang": "6.62 LS",
    "Bujur": "127.52 BT",
    "Magnitude": "5.4",
    "Kedalaman": "10 km",
    "Wilayah": "Laut Banda",
    "Potensi": "Tidak berpotensi tsunami",
}


def make_event(**overrides):
    event = dict(SAMPLE_EVENT)
    event.update(overrides)
    return event


def make_payload(events):
    return {"Infogempa": {"gempa": events}}


class TestParseCoordinates:
    """Tests for hemisphere-coded coordinate parsing."""

    def test_south_latitude_is_negative(self):
        assert parse_latitude("6.62 LS") == -6.62

    def test_north_latitude_is_positive(self):
        assert parse_latitude("3.21 LU") == 3.21

    def test_east_longitude_is_positive(self):
        assert parse_longitude("127.52 BT") == 127.52

    def test_west_longitude_is_negative(self):
        assert parse_longitude("12.5 BB") == -12.5

    def test_accepts_comma_decimal_separator(self):
        assert parse_latitude("6,62 LS") == -6.62
        assert parse_longitude("127,52 BT") == 127.52

    def test_accepts_missing_space(self):
        assert parse_latitude("1.5LU") == 1.5

    def test_unmatched_text_parses_to_zero(self):
        assert parse_latitude("somewhere") == 0.0
        assert parse_longitude("6.62 LS") == 0.0

    def test_non_string_parses_to_zero(self):
        assert parse_latitude(None) == 0.0
        assert parse_longitude(127.5) == 0.0

    def test_malformed_number_is_nan(self):
        assert math.isnan(parse_latitude("1.2.3 LU"))


class TestParseDecimalPair:
    """Tests for the latest-event Coordinates field."""

    def test_parses_signed_pair(self):
        assert parse_decimal_pair("-1.63,127.52") == (-1.63, 127.52)

    def test_bad_pair_is_nan(self):
        lat, lon = parse_decimal_pair("-1.63")
        assert math.isnan(lat) and math.isnan(lon)

    def test_non_numeric_part_is_nan(self):
        lat, lon = parse_decimal_pair("abc,127.52")
        assert math.isnan(lat)
        assert lon == 127.52


class TestIsValidCoordinate:
    """Tests for is_valid_coordinate()."""

    def test_accepts_regular_coordinates(self):
        assert is_valid_coordinate(-6.62, 127.52) is True

    def test_rejects_nan(self):
        assert is_valid_coordinate(math.nan, 127.52) is False

    def test_rejects_infinity(self):
        assert is_valid_coordinate(-6.62, math.inf) is False

    def test_rejects_zero_latitude(self):
        assert is_valid_coordinate(0.0, 127.52) is False

    def test_rejects_zero_longitude(self):
        assert is_valid_coordinate(-6.62, 0.0) is False

    def test_genuine_equator_reading_is_dropped(self):
        """Zero doubles as the 'unparseable' marker, so a real 0 deg
        reading is rejected as well. Documented behavior, not a bug fix."""
        assert is_valid_coordinate(0.0, 0.0) is False


class TestExtractEvents:
    """Tests for envelope unwrapping."""

    def test_wraps_single_object(self):
        assert extract_events(make_payload(SAMPLE_EVENT)) == [SAMPLE_EVENT]

    def test_passes_list_through(self):
        events = [SAMPLE_EVENT, make_event(Wilayah="Other")]
        assert extract_events(make_payload(events)) == events

    def test_keeps_non_object_entries(self):
        assert extract_events(make_payload([SAMPLE_EVENT, "junk", 3])) == [SAMPLE_EVENT, "junk", 3]

    def test_null_events_is_empty(self):
        assert extract_events(make_payload(None)) == []

    def test_missing_envelope_raises(self):
        with pytest.raises(ValueError):
            extract_events({"something": "else"})

    def test_non_dict_payload_raises(self):
        with pytest.raises(ValueError):
            extract_events(["not", "an", "object"])

    def test_wrong_inner_type_raises(self):
        with pytest.raises(ValueError):
            extract_events(make_payload("text"))


class TestParseEvent:
    """Tests for parse_event() pure function."""

    def test_parses_valid_event(self):
        feature = parse_event(SAMPLE_EVENT)

        assert feature is not None
        assert feature.position == (127.52, -6.62)
        assert feature.category == CATEGORY_EARTHQUAKE
        assert feature.provenance == PROVENANCE_BMKG
        assert feature.attributes == {
            "type": "Gempa Bumi",
            "location": "Laut Banda",
            "magnitude": "5.4",
            "depth": "10 km",
            "time": "19 Okt 2026 10:15:42 WIB",
            "potential": "Tidak berpotensi tsunami",
        }

    def test_position_is_longitude_then_latitude(self):
        feature = parse_event(make_event(Lintang="6.62 LS", Bujur="127.52 BT"))

        assert feature is not None
        assert feature.longitude == 127.52
        assert feature.latitude == -6.62

    def test_defaults_missing_potential(self):
        event = make_event()
        del event["Potensi"]

        feature = parse_event(event)

        assert feature is not None
        assert feature.attributes["potential"] == NO_TSUNAMI_POTENTIAL

    def test_empty_potential_gets_default(self):
        feature = parse_event(make_event(Potensi=""))

        assert feature is not None
        assert feature.attributes["potential"] == NO_TSUNAMI_POTENTIAL

    def test_missing_text_fields_use_placeholder(self):
        event = make_event()
        del event["Wilayah"]
        del event["Magnitude"]

        feature = parse_event(event)

        assert feature is not None
        assert feature.attributes["location"] == PLACEHOLDER
        assert feature.attributes["magnitude"] == PLACEHOLDER

    def test_rejects_zero_latitude(self):
        assert parse_event(make_event(Lintang="0.00 LU")) is None

    def test_rejects_unparseable_longitude(self):
        assert parse_event(make_event(Bujur="unknown")) is None

    def test_rejects_missing_coordinates(self):
        event = make_event()
        del event["Lintang"]
        del event["Bujur"]
        del event["Coordinates"]

        assert parse_event(event) is None

    def test_uses_coordinates_field_without_lintang_bujur(self):
        event = make_event(Coordinates="-1.63,127.52")
        del event["Lintang"]
        del event["Bujur"]

        feature = parse_event(event)

        assert feature is not None
        assert feature.position == (127.52, -1.63)

    def test_magnitude_kept_as_provided(self):
        feature = parse_event(make_event(Magnitude="6,1"))

        assert feature is not None
        assert feature.attributes["magnitude"] == "6,1"


class TestParseEvents:
    """Tests for parse_events() pure function."""

    def test_keeps_upstream_order(self):
        events = [
            make_event(Wilayah="A", Lintang="1.0 LU"),
            make_event(Wilayah="B", Lintang="2.0 LU"),
            make_event(Wilayah="C", Lintang="3.0 LS"),
        ]

        result = parse_events(make_payload(events))

        assert [f.attributes["location"] for f in result] == ["A", "B", "C"]
        assert [f.latitude for f in result] == [1.0, 2.0, -3.0]

    def test_drops_invalid_records_only(self):
        events = [
            make_event(Wilayah="A"),
            make_event(Wilayah="bad", Lintang="0 LS"),
            make_event(Wilayah="C"),
        ]

        result = parse_events(make_payload(events))

        assert len(result) == 2
        assert [f.attributes["location"] for f in result] == ["A", "C"]
        assert all(f.position != (0.0, 0.0) for f in result)

    def test_caps_at_max_events(self):
        events = [make_event(Wilayah=str(i)) for i in range(MAX_EVENTS + 5)]

        result = parse_events(make_payload(events))

        assert len(result) == MAX_EVENTS
        assert result[0].attributes["location"] == "0"
        assert result[MAX_EVENTS - 1].attributes["location"] == str(MAX_EVENTS - 1)

    def test_cap_applies_before_rejection(self):
        """The cap counts raw records, so rejected ones still use a slot."""
        events = [make_event(Lintang="0 LU")] + [make_event() for _ in range(MAX_EVENTS)]

        result = parse_events(make_payload(events))

        assert len(result) == MAX_EVENTS - 1

    def test_non_object_entries_count_toward_cap(self):
        events = [None, "junk"] + [make_event(Wilayah=str(i)) for i in range(MAX_EVENTS)]

        result = parse_events(make_payload(events))

        assert len(result) == MAX_EVENTS - 2
        assert result[-1].attributes["location"] == str(MAX_EVENTS - 3)

    def test_no_limit(self):
        events = [make_event() for _ in range(MAX_EVENTS + 1)]

        result = parse_events(make_payload(events), limit=None)

        assert len(result) == MAX_EVENTS + 1

    def test_single_object_payload(self):
        result = parse_events(make_payload(SAMPLE_EVENT))

        assert len(result) == 1

    def test_duplicate_positions_are_kept(self):
        result = parse_events(make_payload([SAMPLE_EVENT, SAMPLE_EVENT]))

        assert len(result) == 2
        assert result[0].position == result[1].position


class TestParseMagnitude:
    """Tests for parse_magnitude()."""

    def test_parses_dot_decimal(self):
        assert parse_magnitude("5.4") == 5.4

    def test_parses_comma_decimal(self):
        assert parse_magnitude("5,4") == 5.4

    def test_placeholder_is_none(self):
        assert parse_magnitude(PLACEHOLDER) is None

    def test_nan_is_none(self):
        assert parse_magnitude("nan") is None
