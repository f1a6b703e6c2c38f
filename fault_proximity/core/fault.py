"""Fault data models and parsing - Pure functions.

This module handles parsing a GeoJSON FeatureCollection of active faults
into typed FaultFeature objects. All functions are pure with no side effects.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from fault_proximity.core.errors import DatasetFormatError


LINE_STRING = "LineString"


@dataclass(frozen=True)
class FaultFeature:
    """Immutable fault line.

    Attributes:
        geometry_type: GeoJSON geometry type (only "LineString" is queried)
        coordinates: Raw coordinate entries in (longitude, latitude) order.
            Malformed entries are kept and skipped at evaluation time.
        properties: Fault attributes (name, slip_type, net_slip_rate, catalog_name, ...),
            read-only when parsed from a dataset
        feature_id: GeoJSON feature id, if present
    """
    geometry_type: str | None
    coordinates: tuple[Any, ...] = ()
    properties: Mapping[str, Any] = field(default_factory=dict, hash=False)
    feature_id: str | int | None = None

    @property
    def name(self) -> str | None:
        """Return the fault name property, if any."""
        return self.properties.get("name")

    @property
    def is_line_string(self) -> bool:
        """Return True if this feature can be evaluated for proximity."""
        return self.geometry_type == LINE_STRING

    def to_geojson(self) -> dict[str, Any]:
        """Render the fault back into a GeoJSON Feature dict."""
        feature: dict[str, Any] = {
            "type": "Feature",
            "properties": dict(self.properties),
            "geometry": {
                "type": self.geometry_type,
                "coordinates": [
                    list(c) if isinstance(c, (list, tuple)) else c
                    for c in self.coordinates
                ],
            },
        }
        if self.feature_id is not None:
            feature["id"] = self.feature_id
        return feature


# Full dataset, in original feature order
FaultDataset = tuple[FaultFeature, ...]


def parse_fault_feature(feature: Any) -> FaultFeature | None:
    """Parse a single GeoJSON feature into a FaultFeature.

    Pure function. Heterogeneous features (points, polygons, missing
    geometry) are still parsed; the query path decides what to skip.

    Args:
        feature: GeoJSON feature dict

    Returns:
        FaultFeature or None if the feature is not a dict
    """
    if not isinstance(feature, dict):
        return None

    geometry = feature.get("geometry")
    if not isinstance(geometry, dict):
        geometry = {}

    props = feature.get("properties")
    if not isinstance(props, dict):
        props = {}

    coords = geometry.get("coordinates")
    if isinstance(coords, (list, tuple)):
        coordinates = tuple(
            tuple(c) if isinstance(c, list) else c
            for c in coords
        )
    else:
        coordinates = ()

    geometry_type = geometry.get("type")

    return FaultFeature(
        geometry_type=geometry_type if isinstance(geometry_type, str) else None,
        coordinates=coordinates,
        properties=MappingProxyType(dict(props)),
        feature_id=feature.get("id"),
    )


def parse_fault_dataset(geojson: Any) -> FaultDataset:
    """Parse a GeoJSON FeatureCollection into a FaultDataset.

    Pure function.

    Args:
        geojson: Decoded fault-feature-collection payload

    Returns:
        Tuple of FaultFeature objects in original order

    Raises:
        DatasetFormatError: If the payload lacks a "features" list
    """
    if not isinstance(geojson, dict):
        raise DatasetFormatError(
            f"Invalid fault data structure: expected object, got {type(geojson).__name__}"
        )

    features = geojson.get("features")
    if not isinstance(features, list):
        raise DatasetFormatError("Invalid fault data structure: missing 'features' list")

    faults = []
    for feature in features:
        fault = parse_fault_feature(feature)
        if fault is not None:
            faults.append(fault)

    return tuple(faults)


def to_feature_collection(faults: list[FaultFeature] | tuple[FaultFeature, ...]) -> dict[str, Any]:
    """Render faults as a GeoJSON FeatureCollection.

    Pure function.
    """
    return {
        "type": "FeatureCollection",
        "features": [f.to_geojson() for f in faults],
    }
