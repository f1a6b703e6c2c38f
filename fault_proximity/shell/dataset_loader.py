"""Fault Dataset Loader - Imperative Shell.

Loads the fault dataset once per process. Concurrent callers that arrive
while a load is in flight wait on the same pending Future instead of
issuing a second fetch. A failed load clears the pending state so the
next call retries from scratch.
"""

import logging
import threading
from concurrent.futures import Future

from fault_proximity.core.fault import FaultDataset, parse_fault_dataset
from fault_proximity.shell.fault_data_client import FaultDataClient


logger = logging.getLogger(__name__)


class FaultDatasetLoader:
    """Memoizing, load-coalescing loader for the fault dataset."""

    def __init__(
        self,
        location: str,
        client: FaultDataClient | None = None,
    ) -> None:
        """Initialize the loader.

        Args:
            location: URL or path of the fault FeatureCollection
            client: Resource fetcher (created if not provided)
        """
        self.location = location
        self.client = client or FaultDataClient()
        self._lock = threading.Lock()
        self._dataset: FaultDataset | None = None
        self._pending: Future | None = None

    @property
    def is_loaded(self) -> bool:
        """True once a dataset has been loaded successfully."""
        return self._dataset is not None

    def load(self) -> FaultDataset:
        """Return the fault dataset, loading it on first use.

        Returns:
            Parsed fault dataset

        Raises:
            DatasetLoadError: If the resource is unreachable
            DatasetFormatError: If the payload is not a feature collection
        """
        with self._lock:
            if self._dataset is not None:
                return self._dataset

            if self._pending is not None:
                pending = self._pending
                owner = False
            else:
                pending = self._pending = Future()
                owner = True

        if not owner:
            logger.debug("Waiting on in-flight fault data load")
            return pending.result()

        try:
            raw = self.client.fetch_feature_collection(self.location)
            dataset = parse_fault_dataset(raw)
        except BaseException as e:
            with self._lock:
                self._pending = None
            pending.set_exception(e)
            logger.error("Failed to load fault data from %s: %s", self.location, e)
            raise

        with self._lock:
            self._dataset = dataset
            self._pending = None
        pending.set_result(dataset)

        logger.info("Loaded %d fault features from %s", len(dataset), self.location)
        return dataset

    def invalidate(self) -> None:
        """Drop the cached dataset so the next load() fetches again."""
        with self._lock:
            self._dataset = None
        logger.info("Fault dataset invalidated")
