"""Cloud Function Entry Point.

This module provides the entry point for Google Cloud Functions.
It's a thin wrapper that loads configuration and queries the
fault proximity service.
"""

import logging
import os
from typing import Any

import functions_framework
from flask import Request

from fault_proximity.core.config import FaultConfig, validate_config
from fault_proximity.core.fault import to_feature_collection
from fault_proximity.orchestrator import FaultProximityService
from fault_proximity.shell.config_loader import load_config, load_config_from_env


# Configure logging
log_level = os.environ.get("LOG_LEVEL", "INFO").upper()
logging.basicConfig(
    level=getattr(logging, log_level, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# Lives for the lifetime of the function instance
_service: FaultProximityService | None = None


def _get_config() -> FaultConfig:
    """Load configuration from file or environment."""
    config_path = os.environ.get("CONFIG_PATH")

    if config_path:
        return load_config(config_path)
    elif os.environ.get("FAULT_DATASET_URL"):
        return load_config_from_env()
    else:
        return load_config()


def _get_service() -> FaultProximityService:
    """Get or create the fault proximity service."""
    global _service
    if _service is None:
        config = _get_config()

        result = validate_config(config)
        for error in result.errors:
            logger.warning("Config %s: %s: %s", error.severity, error.field, error.message)
        if not result.valid:
            raise ValueError("Invalid fault configuration")

        _service = FaultProximityService.from_config(config)
    return _service


def _parse_float(value: str | None) -> float | None:
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


@functions_framework.http
def nearby_faults(request: Request) -> tuple[dict[str, Any], int]:
    """HTTP Cloud Function entry point.

    Query parameters: latitude, longitude, radius (km, optional).

    Args:
        request: Flask request object

    Returns:
        Tuple of (GeoJSON FeatureCollection or error dict, HTTP status code)
    """
    try:
        service = _get_service()
    except Exception as e:
        logger.exception("Failed to initialize fault proximity service")
        return {"status": "error", "message": str(e)}, 500

    latitude = _parse_float(request.args.get("latitude"))
    longitude = _parse_float(request.args.get("longitude"))
    radius_arg = request.args.get("radius")
    radius = (
        service.config.default_radius_km if radius_arg is None
        else _parse_float(radius_arg)
    )

    if latitude is None or longitude is None or radius is None:
        return {
            "status": "error",
            "message": "Missing or invalid latitude, longitude, or radius parameters.",
        }, 400

    if not -90 <= latitude <= 90 or not -180 <= longitude <= 180:
        return {"status": "error", "message": "Coordinates out of range."}, 400

    if not 0 < radius <= service.config.max_radius_km:
        return {
            "status": "error",
            "message": f"Radius must be in (0, {service.config.max_radius_km:g}] km.",
        }, 400

    faults = service.find_nearby_faults(latitude, longitude, radius)
    return to_feature_collection(faults), 200
