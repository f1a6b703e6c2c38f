"""Fault proximity engine.

Finds tectonic fault lines near a point from a large GeoJSON
line-feature dataset, and formats them for display.
"""

from fault_proximity.core.errors import DatasetFormatError, DatasetLoadError
from fault_proximity.core.fault import FaultFeature
from fault_proximity.core.formatter import describe, get_fault_type_color
from fault_proximity.orchestrator import FaultProximityService

__all__ = [
    "DatasetFormatError",
    "DatasetLoadError",
    "FaultFeature",
    "FaultProximityService",
    "describe",
    "get_fault_type_color",
]
