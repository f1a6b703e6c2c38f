"""Grid quantization for regional caching - Pure functions."""

import math
from dataclasses import dataclass


# 0.5 degree grid (~55 km at the equator)
CACHE_GRID_SIZE_DEGREES = 0.5


@dataclass(frozen=True)
class GridCacheKey:
    """Quantized (latitude, longitude, radius) cache key.

    Attributes:
        grid_lat: Latitude floored to the grid cell
        grid_lng: Longitude floored to the grid cell
        radius_km: Query radius, unquantized
    """
    grid_lat: float
    grid_lng: float
    radius_km: float

    def __str__(self) -> str:
        return f"{self.grid_lat},{self.grid_lng},{self.radius_km}"


def snap_to_grid(value: float, grid_size: float = CACHE_GRID_SIZE_DEGREES) -> float:
    """Floor a coordinate to the south/west edge of its grid cell."""
    return math.floor(value / grid_size) * grid_size


def make_cache_key(
    lat: float,
    lng: float,
    radius_km: float,
    grid_size: float = CACHE_GRID_SIZE_DEGREES,
) -> GridCacheKey:
    """Build the regional cache key for a query.

    Pure function. Queries in the same cell with the same radius share a key.

    Args:
        lat: Query latitude
        lng: Query longitude
        radius_km: Query radius in kilometers
        grid_size: Grid cell size in degrees

    Returns:
        GridCacheKey for the query's cell
    """
    return GridCacheKey(
        grid_lat=snap_to_grid(lat, grid_size),
        grid_lng=snap_to_grid(lng, grid_size),
        radius_km=float(radius_km),
    )
