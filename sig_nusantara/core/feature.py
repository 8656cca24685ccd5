"""Geospatial feature models - Pure data structures.

Both normalizers emit the same record shape so the map front end can
treat earthquakes and weather stations uniformly. All values in
``attributes`` are pre-formatted display strings.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable, Iterator


CATEGORY_EARTHQUAKE = "earthquake"
CATEGORY_WEATHER = "weather"

PROVENANCE_BMKG = "BMKG"
PROVENANCE_OPENWEATHER = "OpenWeatherMap"
PROVENANCE_OPENWEATHER_FALLBACK = "OpenWeatherMap (fallback)"

FALLBACK_PROVENANCES = frozenset({PROVENANCE_OPENWEATHER_FALLBACK})

# Rendered in place of any missing or non-numeric value
PLACEHOLDER = "–"


@dataclass(frozen=True)
class Feature:
    """Immutable map feature.

    Attributes:
        position: (longitude, latitude) in WGS84 degrees
        category: Origin tag (earthquake or weather)
        attributes: Display-ready field values
        provenance: Data origin (live upstream or synthetic fallback)
    """
    position: tuple[float, float]
    category: str
    attributes: dict[str, str] = field(default_factory=dict, hash=False)
    provenance: str = ""

    @property
    def longitude(self) -> float:
        return self.position[0]

    @property
    def latitude(self) -> float:
        return self.position[1]

    @property
    def is_fallback(self) -> bool:
        """True if this feature carries synthetic data."""
        return self.provenance in FALLBACK_PROVENANCES

    def to_geojson(self) -> dict[str, Any]:
        """Convert to a GeoJSON Point feature."""
        properties: dict[str, Any] = dict(self.attributes)
        properties["category"] = self.category
        properties["source"] = self.provenance
        return {
            "type": "Feature",
            "geometry": {
                "type": "Point",
                "coordinates": [self.longitude, self.latitude],
            },
            "properties": properties,
        }


@dataclass(frozen=True)
class FeatureCollection:
    """Ordered, immutable sequence of features.

    Order follows the source iteration order. Duplicate positions are legal.
    """
    features: tuple[Feature, ...] = ()

    @classmethod
    def of(cls, features: Iterable[Feature]) -> "FeatureCollection":
        return cls(features=tuple(features))

    def __len__(self) -> int:
        return len(self.features)

    def __iter__(self) -> Iterator[Feature]:
        return iter(self.features)

    def __getitem__(self, index: int) -> Feature:
        return self.features[index]

    @property
    def fallback_count(self) -> int:
        return sum(1 for f in self.features if f.is_fallback)

    def to_geojson(self) -> dict[str, Any]:
        """Convert to a GeoJSON FeatureCollection dict."""
        return {
            "type": "FeatureCollection",
            "features": [f.to_geojson() for f in self.features],
        }
