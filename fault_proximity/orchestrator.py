"""Orchestrator - Wires Functional Core and Imperative Shell.

This module coordinates nearby-fault queries: regional cache lookup,
dataset loading, proximity filtering (pure core), and cache insertion.
Proximity lookups are best-effort: dataset failures are logged and
reported, and callers get an empty result.
"""

import logging
from dataclasses import replace
from typing import Callable

from fault_proximity.core.config import FaultConfig
from fault_proximity.core.errors import FaultDataError
from fault_proximity.core.fault import FaultFeature
from fault_proximity.core.geo import (
    DEFAULT_RADIUS_KM,
    filter_faults_by_proximity,
    rank_faults_by_distance,
)
from fault_proximity.core.grid import make_cache_key
from fault_proximity.shell.dataset_loader import FaultDatasetLoader
from fault_proximity.shell.fault_data_client import FaultDataClient
from fault_proximity.shell.regional_cache import CacheStats, RegionalFaultCache


logger = logging.getLogger(__name__)


ErrorReporter = Callable[[Exception], None]


class FaultProximityService:
    """Finds fault lines near a point.

    This class wires together:
    - Fault dataset loader (fetches the dataset once)
    - Core functions (distance evaluation, grid keys)
    - Regional fault cache (avoids repeated full-dataset scans)
    """

    def __init__(
        self,
        loader: FaultDatasetLoader,
        cache: RegionalFaultCache | None = None,
        config: FaultConfig | None = None,
        error_reporter: ErrorReporter | None = None,
    ) -> None:
        """Initialize the service.

        Args:
            loader: Fault dataset loader
            cache: Regional cache (created from config if not provided)
            config: Query configuration (defaults if not provided)
            error_reporter: Called with each dataset-level failure
        """
        self.config = config or FaultConfig()
        self.loader = loader
        if cache is None:
            cache = RegionalFaultCache(self.config.cache_max_entries)
        self.cache = cache
        self.error_reporter = error_reporter

    @classmethod
    def from_config(
        cls,
        config: FaultConfig,
        error_reporter: ErrorReporter | None = None,
    ) -> "FaultProximityService":
        """Build a service with a loader and cache for the given config."""
        client = FaultDataClient(timeout=config.request_timeout_seconds)
        loader = FaultDatasetLoader(config.dataset_location, client=client)
        return cls(loader, config=config, error_reporter=error_reporter)

    def _report(self, error: Exception) -> None:
        if self.error_reporter is None:
            return
        try:
            self.error_reporter(error)
        except Exception:
            logger.exception("Error reporter failed")

    def find_nearby_faults(
        self,
        lat: float,
        lng: float,
        radius_km: float = DEFAULT_RADIUS_KM,
    ) -> tuple[FaultFeature, ...]:
        """Find LineString faults with a vertex within radius of a point.

        Args:
            lat: Query latitude
            lng: Query longitude
            radius_km: Search radius in kilometers

        Returns:
            Nearby faults in dataset order (empty if the dataset is unavailable)
        """
        key = make_cache_key(lat, lng, radius_km, self.config.grid_size_degrees)

        cached = self.cache.get(key)
        if cached is not None:
            logger.debug(
                "Cache hit: %d faults within %skm of %s, %s",
                len(cached), radius_km, lat, lng,
            )
            return cached

        try:
            dataset = self.loader.load()
        except FaultDataError as e:
            logger.error("Error loading fault data: %s", e)
            self._report(e)
            return ()
        except Exception as e:
            logger.exception("Unexpected error loading fault data: %s", e)
            self._report(e)
            return ()

        nearby = filter_faults_by_proximity(
            dataset,
            lat,
            lng,
            radius_km,
            buffer_degrees=self.config.prefilter_buffer_degrees,
        )

        self.cache.put(key, nearby)

        logger.info(
            "Found %d faults within %skm of %s, %s",
            len(nearby), radius_km, lat, lng,
        )
        return nearby

    def find_nearby_faults_with_distance(
        self,
        lat: float,
        lng: float,
        radius_km: float = DEFAULT_RADIUS_KM,
    ) -> list[tuple[FaultFeature, float]]:
        """Find nearby faults paired with their distance, nearest first."""
        nearby = self.find_nearby_faults(lat, lng, radius_km)
        return rank_faults_by_distance(
            nearby,
            lat,
            lng,
            buffer_degrees=self.config.prefilter_buffer_degrees,
        )

    def clear_cache(self) -> None:
        """Empty the regional cache. Results are unaffected, only speed."""
        self.cache.clear()
        logger.info("Regional fault cache cleared")

    def cache_stats(self) -> CacheStats:
        """Return regional cache statistics."""
        return replace(self.cache.stats(), dataset_loaded=self.loader.is_loaded)
