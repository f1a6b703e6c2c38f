"""Geographic calculations - Pure functions.

This module provides the great-circle distance primitive and the fault
distance evaluator used by proximity queries.
All functions are pure with no side effects.
"""

import math
from numbers import Real
from typing import Any, Callable, Iterable

from fault_proximity.core.fault import FaultFeature


# Earth's radius in kilometers
EARTH_RADIUS_KM = 6371.0

# Vertices further than this (in either axis) are never distance-checked.
# ~333 km at the equator.
PREFILTER_BUFFER_DEGREES = 3.0

# Largest radius the prefilter buffer covers without dropping in-radius vertices
MAX_SUPPORTED_RADIUS_KM = 200.0

# Default query radius for fault visibility
DEFAULT_RADIUS_KM = 200.0

DistanceFn = Callable[[float, float, float, float], float]


def calculate_distance(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
) -> float:
    """Calculate distance between two points using Haversine formula.

    Pure function.

    Args:
        lat1: Latitude of first point
        lon1: Longitude of first point
        lat2: Latitude of second point
        lon2: Longitude of second point

    Returns:
        Distance in kilometers
    """
    # Convert to radians
    lat1_rad = math.radians(lat1)
    lat2_rad = math.radians(lat2)
    delta_lat = math.radians(lat2 - lat1)
    delta_lon = math.radians(lon2 - lon1)

    # Haversine formula
    a = (
        math.sin(delta_lat / 2) ** 2
        + math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(delta_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))

    return EARTH_RADIUS_KM * c


def _is_number(value: Any) -> bool:
    """Check for a real number, excluding bools."""
    return isinstance(value, Real) and not isinstance(value, bool)


def parse_vertex(coord: Any) -> tuple[float, float] | None:
    """Extract (latitude, longitude) from a GeoJSON coordinate entry.

    Pure function.

    Args:
        coord: Coordinate entry in (longitude, latitude[, ...]) order

    Returns:
        (latitude, longitude) tuple, or None if the entry is malformed
    """
    if not isinstance(coord, (list, tuple)) or len(coord) < 2:
        return None

    lng, lat = coord[0], coord[1]
    if not (_is_number(lat) and _is_number(lng)):
        return None

    return (float(lat), float(lng))


def is_within_prefilter(
    query_lat: float,
    query_lng: float,
    lat: float,
    lng: float,
    buffer_degrees: float = PREFILTER_BUFFER_DEGREES,
) -> bool:
    """Cheap bounding-box check around the query point.

    Pure function.
    """
    return (
        abs(query_lat - lat) <= buffer_degrees
        and abs(query_lng - lng) <= buffer_degrees
    )


def calculate_fault_distance(
    query_lat: float,
    query_lng: float,
    coordinates: Any,
    buffer_degrees: float = PREFILTER_BUFFER_DEGREES,
    distance_fn: DistanceFn = calculate_distance,
) -> float:
    """Calculate the minimum distance from a point to a fault's vertices.

    Pure function. Vertices outside the bounding-box prefilter are skipped
    without calling distance_fn. Malformed coordinate entries are skipped.

    Args:
        query_lat: Query point latitude
        query_lng: Query point longitude
        coordinates: Fault coordinate sequence in (longitude, latitude) order
        buffer_degrees: Prefilter half-width in degrees
        distance_fn: Great-circle distance primitive

    Returns:
        Distance in kilometers, or math.inf if no vertex passes the prefilter
    """
    if not isinstance(coordinates, (list, tuple)):
        return math.inf

    min_distance = math.inf

    for coord in coordinates:
        vertex = parse_vertex(coord)
        if vertex is None:
            continue

        lat, lng = vertex
        if not is_within_prefilter(query_lat, query_lng, lat, lng, buffer_degrees):
            continue

        distance = distance_fn(query_lat, query_lng, lat, lng)
        if distance < min_distance:
            min_distance = distance

    return min_distance


def is_fault_within_radius(
    fault: FaultFeature,
    query_lat: float,
    query_lng: float,
    radius_km: float,
    buffer_degrees: float = PREFILTER_BUFFER_DEGREES,
) -> bool:
    """Check if a LineString fault has a vertex within radius of a point.

    Pure function. Non-LineString features are never within radius.
    """
    if not fault.is_line_string:
        return False

    distance = calculate_fault_distance(
        query_lat,
        query_lng,
        fault.coordinates,
        buffer_degrees=buffer_degrees,
    )
    return distance <= radius_km


def filter_faults_by_proximity(
    faults: Iterable[FaultFeature],
    query_lat: float,
    query_lng: float,
    radius_km: float,
    buffer_degrees: float = PREFILTER_BUFFER_DEGREES,
) -> tuple[FaultFeature, ...]:
    """Filter faults to those within a radius, preserving dataset order.

    Pure function.
    """
    return tuple(
        f for f in faults
        if is_fault_within_radius(f, query_lat, query_lng, radius_km, buffer_degrees)
    )


def rank_faults_by_distance(
    faults: Iterable[FaultFeature],
    query_lat: float,
    query_lng: float,
    buffer_degrees: float = PREFILTER_BUFFER_DEGREES,
) -> list[tuple[FaultFeature, float]]:
    """Pair faults with their distance to a point, nearest first.

    Pure function. The sort is stable, so equidistant faults keep dataset order.

    Args:
        faults: Faults to rank
        query_lat: Query point latitude
        query_lng: Query point longitude
        buffer_degrees: Prefilter half-width in degrees

    Returns:
        List of (fault, distance_km) tuples, sorted by distance
    """
    ranked = [
        (
            f,
            calculate_fault_distance(
                query_lat, query_lng, f.coordinates, buffer_degrees=buffer_degrees,
            ),
        )
        for f in faults
    ]
    return sorted(ranked, key=lambda x: x[1])
