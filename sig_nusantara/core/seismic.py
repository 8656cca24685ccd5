"""BMKG earthquake parsing - Pure functions.

This module turns raw BMKG event records into map features.
All functions are pure with no side effects.

BMKG encodes coordinates as text with an Indonesian hemisphere suffix,
e.g. ``"6.62 LS"`` (6.62 degrees south) and ``"127.52 BT"`` (127.52
degrees east). Some records use ``,`` as the decimal separator.
"""

import math
import re
from typing import Any

from sig_nusantara.core.feature import (
    CATEGORY_EARTHQUAKE,
    PLACEHOLDER,
    PROVENANCE_BMKG,
    Feature,
    FeatureCollection,
)


# Maximum number of events taken from the significant-events feed
MAX_EVENTS = 20

EVENT_TYPE_LABEL = "Gempa Bumi"
NO_TSUNAMI_POTENTIAL = "Tidak berpotensi tsunami"

_LATITUDE_PATTERN = re.compile(r"([\d.]+)\s*(LU|LS)")
_LONGITUDE_PATTERN = re.compile(r"([\d.]+)\s*(BT|BB)")

# Hemisphere codes that flip the sign (south latitude, west longitude)
_NEGATIVE_HEMISPHERES = frozenset({"LS", "BB"})


def parse_hemisphere_coordinate(text: Any, pattern: re.Pattern[str]) -> float:
    """Parse a ``"<value> <hemisphere>"`` coordinate.

    Pure function.

    Args:
        text: Raw coordinate text from BMKG
        pattern: Compiled pattern capturing (value, hemisphere code)

    Returns:
        Signed coordinate, or 0.0 if the text does not match. A value that
        matches but is not a number (e.g. ``"1.2.3"``) yields NaN.
    """
    if not isinstance(text, str):
        return 0.0

    match = pattern.search(text.replace(",", ".", 1))
    if match is None:
        return 0.0

    try:
        value = float(match.group(1))
    except ValueError:
        return math.nan

    if match.group(2) in _NEGATIVE_HEMISPHERES:
        value = -value
    return value


def parse_latitude(text: Any) -> float:
    """Parse BMKG ``Lintang`` text (LU = north, LS = south)."""
    return parse_hemisphere_coordinate(text, _LATITUDE_PATTERN)


def parse_longitude(text: Any) -> float:
    """Parse BMKG ``Bujur`` text (BT = east, BB = west)."""
    return parse_hemisphere_coordinate(text, _LONGITUDE_PATTERN)


def parse_decimal_pair(text: Any) -> tuple[float, float]:
    """Parse a ``"<lat>,<lon>"`` pair in signed decimal degrees.

    Used by the latest-event feed's ``Coordinates`` field.

    Returns:
        (latitude, longitude); NaN for any part that fails to parse
    """
    if not isinstance(text, str):
        return (math.nan, math.nan)

    parts = text.split(",")
    if len(parts) != 2:
        return (math.nan, math.nan)

    values = []
    for part in parts:
        try:
            values.append(float(part.strip()))
        except ValueError:
            values.append(math.nan)
    return (values[0], values[1])


def is_valid_coordinate(latitude: float, longitude: float) -> bool:
    """Check that both coordinates are finite and non-zero.

    Pure function. Exact zero is how an unparseable coordinate comes out
    of :func:`parse_hemisphere_coordinate`, so a genuine 0° reading is
    rejected too.
    """
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        return False
    return latitude != 0 and longitude != 0


def extract_events(payload: Any) -> list[Any]:
    """Unwrap the ``Infogempa.gempa`` envelope.

    Pure function. BMKG returns either a single event object or a list.
    List entries are returned as-is, including non-object ones.

    Raises:
        ValueError: If the envelope is missing or has the wrong shape
    """
    if not isinstance(payload, dict):
        raise ValueError("BMKG payload is not a JSON object")

    info = payload.get("Infogempa")
    if not isinstance(info, dict) or "gempa" not in info:
        raise ValueError("BMKG payload missing Infogempa.gempa")

    events = info["gempa"]
    if events is None:
        return []
    if isinstance(events, dict):
        return [events]
    if isinstance(events, list):
        return list(events)

    raise ValueError(f"Unexpected Infogempa.gempa type: {type(events).__name__}")


def _text(event: dict[str, Any], key: str, default: str = PLACEHOLDER) -> str:
    value = event.get(key)
    if value is None or value == "":
        return default
    return str(value)


def _event_coordinates(event: dict[str, Any]) -> tuple[float, float]:
    """Return (latitude, longitude) from Lintang/Bujur, else Coordinates."""
    if "Lintang" in event or "Bujur" in event:
        return parse_latitude(event.get("Lintang")), parse_longitude(event.get("Bujur"))
    return parse_decimal_pair(event.get("Coordinates"))


def parse_event(event: dict[str, Any]) -> Feature | None:
    """Parse a single BMKG event into a Feature.

    Pure function: returns None if the coordinates are invalid.

    Args:
        event: Raw event record from BMKG

    Returns:
        Feature or None if the record is rejected
    """
    latitude, longitude = _event_coordinates(event)
    if not is_valid_coordinate(latitude, longitude):
        return None

    date = _text(event, "Tanggal", "")
    clock = _text(event, "Jam", "")
    when = f"{date} {clock}".strip() or PLACEHOLDER

    return Feature(
        position=(longitude, latitude),
        category=CATEGORY_EARTHQUAKE,
        attributes={
            "type": EVENT_TYPE_LABEL,
            "location": _text(event, "Wilayah"),
            "magnitude": _text(event, "Magnitude"),
            "depth": _text(event, "Kedalaman"),
            "time": when,
            "potential": _text(event, "Potensi", NO_TSUNAMI_POTENTIAL),
        },
        provenance=PROVENANCE_BMKG,
    )


def parse_events(
    payload: Any,
    limit: int | None = MAX_EVENTS,
) -> FeatureCollection:
    """Parse a BMKG feed response into a FeatureCollection.

    Pure function: drops rejected records, keeps upstream order.

    Args:
        payload: Decoded JSON from a BMKG feed
        limit: Maximum number of raw records to consider (None for all)

    Returns:
        FeatureCollection of accepted events

    Raises:
        ValueError: If the envelope is malformed
    """
    events = extract_events(payload)
    if limit is not None:
        events = events[:limit]

    features = []
    for event in events:
        if not isinstance(event, dict):
            continue
        feature = parse_event(event)
        if feature is not None:
            features.append(feature)

    return FeatureCollection.of(features)


def parse_magnitude(value: str) -> float | None:
    """Parse a magnitude display string back to a number.

    Returns:
        Magnitude or None if not numeric
    """
    try:
        magnitude = float(value.replace(",", "."))
    except (AttributeError, ValueError):
        return None
    return magnitude if math.isfinite(magnitude) else None
