"""Configuration models - Pure data structures.

These are domain models for configuration. The actual loading
(I/O) is handled by the shell layer.
"""

import math
from dataclasses import dataclass, field

from fault_proximity.core.geo import (
    DEFAULT_RADIUS_KM,
    EARTH_RADIUS_KM,
    MAX_SUPPORTED_RADIUS_KM,
    PREFILTER_BUFFER_DEGREES,
)
from fault_proximity.core.grid import CACHE_GRID_SIZE_DEGREES


# GEM Global Active Faults database (harmonized GeoJSON)
DEFAULT_DATASET_LOCATION = (
    "https://raw.githubusercontent.com/GEMScienceTools/gem-global-active-faults/"
    "master/geojson/gem_active_faults_harmonized.geojson"
)

# Maximum distinct grid cells held in the regional cache
DEFAULT_CACHE_MAX_ENTRIES = 50

# Kilometers per degree of latitude
KM_PER_DEGREE = EARTH_RADIUS_KM * math.pi / 180


@dataclass
class FaultConfig:
    """Fault proximity configuration.

    This is a pure data structure - no I/O or side effects.

    Attributes:
        dataset_location: URL or file path of the fault FeatureCollection
        default_radius_km: Radius used when a query doesn't specify one
        max_radius_km: Largest radius accepted from callers
        grid_size_degrees: Regional cache grid cell size
        cache_max_entries: Maximum distinct cells in the regional cache
        prefilter_buffer_degrees: Bounding-box prefilter half-width
        request_timeout_seconds: HTTP timeout for dataset fetches
    """
    dataset_location: str = DEFAULT_DATASET_LOCATION
    default_radius_km: float = DEFAULT_RADIUS_KM
    max_radius_km: float = MAX_SUPPORTED_RADIUS_KM
    grid_size_degrees: float = CACHE_GRID_SIZE_DEGREES
    cache_max_entries: int = DEFAULT_CACHE_MAX_ENTRIES
    prefilter_buffer_degrees: float = PREFILTER_BUFFER_DEGREES
    request_timeout_seconds: int = 30


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


def _require_positive(value: float, field_name: str) -> list[ValidationError]:
    if value <= 0:
        return [ValidationError(
            field=field_name,
            message=f"Must be positive, got {value}",
        )]
    return []


def validate_config(config: FaultConfig) -> ValidationResult:
    """Validate configuration for errors and warnings.

    Pure function.

    Args:
        config: Configuration to validate

    Returns:
        ValidationResult with any errors/warnings found
    """
    errors: list[ValidationError] = []

    if not config.dataset_location or config.dataset_location.startswith("${"):
        errors.append(ValidationError(
            field="dataset_location",
            message="Dataset location not set (or still contains placeholder)",
        ))

    errors.extend(_require_positive(config.default_radius_km, "default_radius_km"))
    errors.extend(_require_positive(config.max_radius_km, "max_radius_km"))
    errors.extend(_require_positive(config.grid_size_degrees, "grid_size_degrees"))
    errors.extend(_require_positive(config.cache_max_entries, "cache_max_entries"))
    errors.extend(_require_positive(config.prefilter_buffer_degrees, "prefilter_buffer_degrees"))
    errors.extend(_require_positive(config.request_timeout_seconds, "request_timeout_seconds"))

    if config.default_radius_km > config.max_radius_km:
        errors.append(ValidationError(
            field="default_radius_km",
            message=(
                f"default_radius_km ({config.default_radius_km}) > "
                f"max_radius_km ({config.max_radius_km})"
            ),
        ))

    # Prefilter must not discard vertices that are within the largest radius
    max_radius_degrees = config.max_radius_km / KM_PER_DEGREE
    if config.prefilter_buffer_degrees <= max_radius_degrees:
        errors.append(ValidationError(
            field="prefilter_buffer_degrees",
            message=(
                f"Prefilter buffer {config.prefilter_buffer_degrees} deg does not cover "
                f"max_radius_km {config.max_radius_km} (~{max_radius_degrees:.2f} deg)"
            ),
        ))

    if config.grid_size_degrees > 1.0:
        errors.append(ValidationError(
            field="grid_size_degrees",
            message=f"Grid size {config.grid_size_degrees} deg makes cached results coarse",
            severity="warning",
        ))

    has_critical = any(e.severity == "error" for e in errors)

    return ValidationResult(
        valid=not has_critical,
        errors=errors,
    )
