"""Functional Core - Pure functions with no side effects.

This module contains all business logic as pure functions:
- Fault dataset parsing
- Great-circle distance and fault distance evaluation
- Grid quantization for regional cache keys
- Fault presentation formatting

All functions here are deterministic and have no I/O.
"""

from fault_proximity.core.errors import (
    DatasetFormatError,
    DatasetLoadError,
    FaultDataError,
)
from fault_proximity.core.fault import FaultFeature, parse_fault_dataset
from fault_proximity.core.geo import calculate_distance, calculate_fault_distance
from fault_proximity.core.grid import GridCacheKey, make_cache_key
from fault_proximity.core.formatter import (
    FaultDisplayInfo,
    describe,
    format_slip_rate,
    get_fault_type_color,
)

__all__ = [
    # Errors
    "FaultDataError",
    "DatasetLoadError",
    "DatasetFormatError",
    # Fault
    "FaultFeature",
    "parse_fault_dataset",
    # Geo
    "calculate_distance",
    "calculate_fault_distance",
    # Grid
    "GridCacheKey",
    "make_cache_key",
    # Formatter
    "FaultDisplayInfo",
    "describe",
    "format_slip_rate",
    "get_fault_type_color",
]
