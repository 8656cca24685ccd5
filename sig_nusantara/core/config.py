"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

from dataclasses import dataclass, field

from sig_nusantara.core.cities import CITY_REGISTRY, CityRegistryEntry
from sig_nusantara.core.seismic import MAX_EVENTS


BMKG_SIGNIFICANT_URL = "https://data.bmkg.go.id/DataMKG/TEWS/gempaterkini.json"
BMKG_LATEST_URL = "https://data.bmkg.go.id/DataMKG/TEWS/autogempa.json"
OPENWEATHER_URL = "https://api.openweathermap.org/data/2.5/weather"


@dataclass
class SeismicConfig:
    """BMKG feed settings.

    Attributes:
        significant_url: Significant (M5+) events feed
        latest_url: Latest single event feed
        max_events: Cap on records taken from the significant feed
        revalidate_seconds: How long a fetched response stays fresh
        timeout_seconds: HTTP request timeout
    """
    significant_url: str = BMKG_SIGNIFICANT_URL
    latest_url: str = BMKG_LATEST_URL
    max_events: int = MAX_EVENTS
    revalidate_seconds: int = 300
    timeout_seconds: float = 10


@dataclass
class WeatherConfig:
    """OpenWeatherMap settings.

    Attributes:
        api_url: Current weather endpoint
        api_key: Credential from the config file (env vars take precedence)
        units: Unit system requested from the provider
        lang: Language for condition descriptions
        revalidate_seconds: How long a fetched response stays fresh
        timeout_seconds: HTTP request timeout
        max_workers: Concurrent city requests (1 = sequential)
    """
    api_url: str = OPENWEATHER_URL
    api_key: str | None = None
    units: str = "metric"
    lang: str = "id"
    revalidate_seconds: int = 600
    timeout_seconds: float = 10
    max_workers: int = 1


@dataclass
class Config:
    """Application configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        seismic: BMKG feed settings
        weather: OpenWeatherMap settings
        cities: Cities to show weather for, in display order
    """
    seismic: SeismicConfig = field(default_factory=SeismicConfig)
    weather: WeatherConfig = field(default_factory=WeatherConfig)
    cities: tuple[CityRegistryEntry, ...] = CITY_REGISTRY


@dataclass
class ValidationError:
    """A configuration validation error.

    Attributes:
        field: The field that has an error
        message: Human-readable error description
        severity: 'error' or 'warning'
    """
    field: str
    message: str
    severity: str = "error"


@dataclass
class ValidationResult:
    """Result of validating configuration.

    Attributes:
        valid: True if no errors (warnings are OK)
        errors: List of validation errors/warnings
    """
    valid: bool
    errors: list[ValidationError] = field(default_factory=list)

    @property
    def warnings(self) -> list[ValidationError]:
        """Get only warnings."""
        return [e for e in self.errors if e.severity == "warning"]

    @property
    def critical_errors(self) -> list[ValidationError]:
        """Get only critical errors."""
        return [e for e in self.errors if e.severity == "error"]


def validate_coordinates(lat: float | None, lon: float | None, field_name: str) -> list[ValidationError]:
    """Validate latitude/longitude coordinates.

    Pure function.

    Args:
        lat: Latitude value
        lon: Longitude value
        field_name: Name of the field for error messages

    Returns:
        List of validation errors (empty if valid)
    """
    if lat is None or lon is None:
        return [ValidationError(
            field=field_name,
            message="Coordinates are undefined",
        )]

    errors = []

    if not -90 <= lat <= 90:
        errors.append(ValidationError(
            field=field_name,
            message=f"Latitude {lat} out of range [-90, 90]",
        ))

    if not -180 <= lon <= 180:
        errors.append(ValidationError(
            field=field_name,
            message=f"Longitude {lon} out of range [-180, 180]",
        ))

    return errors


def validate_registry(cities: tuple[CityRegistryEntry, ...]) -> list[ValidationError]:
    """Validate the city registry.

    Pure function. Every province must appear once, with defined coordinates.

    Args:
        cities: Registry entries

    Returns:
        List of validation errors (empty if valid)
    """
    errors: list[ValidationError] = []

    if not cities:
        errors.append(ValidationError(
            field="cities",
            message="City registry is empty",
        ))

    seen: set[str] = set()
    for i, city in enumerate(cities):
        errors.extend(validate_coordinates(
            city.latitude, city.longitude,
            f"cities[{i}]",
        ))
        if city.province in seen:
            errors.append(ValidationError(
                field=f"cities[{i}].province",
                message=f"Province '{city.province}' listed more than once",
            ))
        seen.add(city.province)

    return errors


def validate_config(config: Config, api_key: str | None = None) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate
        api_key: Resolved weather credential, if any

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if config.seismic.max_events < 1:
        errors.append(ValidationError(
            field="seismic.max_events",
            message=f"Event cap must be at least 1, got {config.seismic.max_events}",
        ))

    for name, section in (("seismic", config.seismic), ("weather", config.weather)):
        if section.timeout_seconds <= 0:
            errors.append(ValidationError(
                field=f"{name}.timeout_seconds",
                message=f"Timeout must be positive, got {section.timeout_seconds}",
            ))
        if section.revalidate_seconds < 0:
            errors.append(ValidationError(
                field=f"{name}.revalidate_seconds",
                message=f"Revalidation period cannot be negative, got {section.revalidate_seconds}",
            ))

    if config.weather.max_workers < 1:
        errors.append(ValidationError(
            field="weather.max_workers",
            message=f"Worker count must be at least 1, got {config.weather.max_workers}",
        ))

    if not api_key:
        errors.append(ValidationError(
            field="weather.api_key",
            message="No OpenWeatherMap API key; weather will use fallback data",
            severity="warning",
        ))

    errors.extend(validate_registry(config.cities))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
