"""Fault API - FastAPI service for nearby fault lookups.

Serves fault proximity queries and fault display metadata.
The fault dataset and regional cache live for the lifetime of the process.
"""

import logging
import os
from datetime import datetime, timezone
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from fault_proximity.core.config import validate_config
from fault_proximity.core.formatter import (
    DEFAULT_FAULT_COLOR,
    FAULT_TYPE_COLORS,
    describe,
)
from fault_proximity.orchestrator import FaultProximityService
from fault_proximity.shell.config_loader import load_config, load_config_from_env

logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())
logger = logging.getLogger(__name__)

app = FastAPI(
    title="Fault API",
    description="Nearby active fault lookups for earthquake pages",
    version="1.0.0",
)

# CORS configuration
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://localhost:5173",
    ],
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["*"],
)


# ===== Data Models =====

class CacheStatsResponse(BaseModel):
    size: int
    max_entries: int
    hits: int
    misses: int
    dataset_loaded: bool


# ===== Service =====

_service: FaultProximityService | None = None


def _get_service() -> FaultProximityService:
    """Get or create the fault proximity service."""
    global _service
    if _service is None:
        if os.environ.get("FAULT_DATASET_URL") and not os.environ.get("CONFIG_PATH"):
            config = load_config_from_env()
        else:
            config = load_config()

        result = validate_config(config)
        for error in result.errors:
            logger.warning("Config %s: %s: %s", error.severity, error.field, error.message)
        if not result.valid:
            raise HTTPException(status_code=500, detail="Fault service misconfigured")

        _service = FaultProximityService.from_config(config)
        logger.info("Fault proximity service initialized for %s", config.dataset_location)
    return _service


def set_service(service: FaultProximityService | None) -> None:
    """Replace the process-wide service (tests and embedding)."""
    global _service
    _service = service


# ===== Helper Functions =====

def _fault_to_dict(fault, distance_km: float) -> dict[str, Any]:
    """Convert a fault to API response format."""
    feature = fault.to_geojson()
    feature["display"] = describe(fault).to_dict()
    feature["distance_km"] = round(distance_km, 2)
    return feature


# ===== Public Endpoints =====
# Plain `def` endpoints run on the threadpool, so the first-load wait
# doesn't block the event loop.

@app.get("/api-nearby-faults")
def get_nearby_faults(
    latitude: float = Query(..., ge=-90, le=90),
    longitude: float = Query(..., ge=-180, le=180),
    radius: float | None = Query(default=None, gt=0),
):
    """Get fault lines within a radius (km) of a point, nearest first."""
    service = _get_service()
    radius_km = radius if radius is not None else service.config.default_radius_km
    if radius_km > service.config.max_radius_km:
        raise HTTPException(
            status_code=422,
            detail=f"radius must be at most {service.config.max_radius_km} km",
        )

    ranked = service.find_nearby_faults_with_distance(latitude, longitude, radius_km)

    return {
        "type": "FeatureCollection",
        "features": [_fault_to_dict(f, d) for f, d in ranked],
        "count": len(ranked),
        "center": {"lat": latitude, "lng": longitude},
        "radius_km": radius_km,
        "fetched_at": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api-fault-colors")
async def get_fault_colors():
    """List display colors by slip type."""
    return {
        "colors": FAULT_TYPE_COLORS,
        "default": DEFAULT_FAULT_COLOR,
    }


@app.get("/api-fault-cache-stats", response_model=CacheStatsResponse)
def get_fault_cache_stats():
    """Regional cache statistics for the running instance."""
    stats = _get_service().cache_stats()
    return CacheStatsResponse(
        size=stats.size,
        max_entries=stats.max_entries,
        hits=stats.hits,
        misses=stats.misses,
        dataset_loaded=stats.dataset_loaded,
    )


@app.get("/health")
async def health_check():
    """Health check endpoint for Cloud Run."""
    return {"status": "healthy"}
