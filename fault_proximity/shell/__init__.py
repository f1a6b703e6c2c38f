"""Imperative Shell - I/O and shared state.

This module contains all code that interacts with external systems or
holds process-lifetime state:
- Fault data client (HTTP / file)
- Fault dataset loader (memoized, load-coalescing)
- Regional fault cache (bounded, grid-keyed)
- Configuration loading (environment/files)

Keep this layer thin and simple. All business logic should be in core.
"""

from fault_proximity.shell.fault_data_client import FaultDataClient
from fault_proximity.shell.dataset_loader import FaultDatasetLoader
from fault_proximity.shell.regional_cache import CacheStats, RegionalFaultCache
from fault_proximity.shell.config_loader import load_config, load_config_from_env

__all__ = [
    "FaultDataClient",
    "FaultDatasetLoader",
    "CacheStats",
    "RegionalFaultCache",
    "load_config",
    "load_config_from_env",
]
