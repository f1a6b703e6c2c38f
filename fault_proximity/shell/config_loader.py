"""Configuration Loader - Imperative Shell.

This module handles loading configuration from YAML files and
environment variables. All I/O is contained here.

The FaultConfig model is defined in fault_proximity/core/config.py
to avoid information leakage between layers.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from fault_proximity.core.config import FaultConfig


logger = logging.getLogger(__name__)


def _resolve_value(value: Any) -> Any:
    """Resolve a ${VAR} placeholder from the environment.

    Non-string values and plain strings are returned unchanged. Unset
    variables leave the placeholder in place (validation flags it).

    Args:
        value: Value to resolve

    Returns:
        Resolved value
    """
    if not isinstance(value, str):
        return value

    if value.startswith("${") and value.endswith("}"):
        var_name = value[2:-1]
        env_value = os.environ.get(var_name)
        if env_value:
            return env_value
        logger.warning("Environment variable %s not set", var_name)

    return value


def load_config_from_dict(data: dict[str, Any]) -> FaultConfig:
    """Load configuration from a dictionary.

    Accepts either a top-level mapping or one nested under a "faults" key.

    Args:
        data: Configuration dictionary

    Returns:
        Parsed FaultConfig object
    """
    section = data.get("faults", data)
    defaults = FaultConfig()

    def get(key: str, default: Any) -> Any:
        return _resolve_value(section.get(key, default))

    return FaultConfig(
        dataset_location=str(get("dataset_location", defaults.dataset_location)),
        default_radius_km=float(get("default_radius_km", defaults.default_radius_km)),
        max_radius_km=float(get("max_radius_km", defaults.max_radius_km)),
        grid_size_degrees=float(get("grid_size_degrees", defaults.grid_size_degrees)),
        cache_max_entries=int(get("cache_max_entries", defaults.cache_max_entries)),
        prefilter_buffer_degrees=float(
            get("prefilter_buffer_degrees", defaults.prefilter_buffer_degrees)
        ),
        request_timeout_seconds=int(
            get("request_timeout_seconds", defaults.request_timeout_seconds)
        ),
    )


def load_config(config_path: str | Path | None = None) -> FaultConfig:
    """Load configuration from a YAML file.

    This method performs file I/O.

    Args:
        config_path: Path to YAML config file.
                    If None, uses CONFIG_PATH env var or default.

    Returns:
        Parsed FaultConfig object

    Raises:
        yaml.YAMLError: If config file is invalid YAML
    """
    if config_path is None:
        config_path = os.environ.get("CONFIG_PATH", "config/config.yaml")

    path = Path(config_path)

    logger.info("Loading configuration from %s", path)

    if not path.exists():
        logger.warning("Config file not found: %s, using defaults", path)
        return FaultConfig()

    with open(path, "r") as f:
        data = yaml.safe_load(f)

    if data is None:
        logger.warning("Config file is empty, using defaults")
        return FaultConfig()

    config = load_config_from_dict(data)

    logger.info(
        "Loaded config: dataset=%s, radius=%.0fkm, cache=%d cells",
        config.dataset_location,
        config.default_radius_km,
        config.cache_max_entries,
    )

    return config


def load_config_from_env() -> FaultConfig:
    """Load configuration from environment variables.

    Useful for simple deployments without a YAML file.

    Environment variables:
        FAULT_DATASET_URL: URL or path of the fault FeatureCollection
        FAULT_RADIUS_KM: Default query radius
        FAULT_CACHE_MAX_ENTRIES: Regional cache capacity
        FAULT_GRID_SIZE_DEGREES: Regional cache grid cell size

    Returns:
        FaultConfig object from environment
    """
    defaults = FaultConfig()

    return FaultConfig(
        dataset_location=os.environ.get("FAULT_DATASET_URL", defaults.dataset_location),
        default_radius_km=float(
            os.environ.get("FAULT_RADIUS_KM", str(defaults.default_radius_km))
        ),
        cache_max_entries=int(
            os.environ.get("FAULT_CACHE_MAX_ENTRIES", str(defaults.cache_max_entries))
        ),
        grid_size_degrees=float(
            os.environ.get("FAULT_GRID_SIZE_DEGREES", str(defaults.grid_size_degrees))
        ),
    )
