"""Fault Data Client - Imperative Shell.

This module retrieves the raw fault FeatureCollection payload, either over
HTTP or from a local file. All I/O is contained here; parsing is in the
core module.
"""

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlparse

import requests

from fault_proximity.core.errors import DatasetFormatError, DatasetLoadError


logger = logging.getLogger(__name__)


# Default timeout for dataset requests (seconds)
DEFAULT_TIMEOUT = 30


class FaultDataClient:
    """Client for fetching the fault-feature-collection payload.

    This is part of the imperative shell - it handles HTTP and file I/O.
    """

    def __init__(self, timeout: int = DEFAULT_TIMEOUT) -> None:
        """Initialize fault data client.

        Args:
            timeout: Request timeout in seconds
        """
        self.timeout = timeout

    def fetch_feature_collection(self, location: str) -> Any:
        """Fetch and decode the fault payload.

        This method performs I/O.

        Args:
            location: http(s) URL, file:// URL, or local path

        Returns:
            Decoded JSON payload

        Raises:
            DatasetLoadError: If the resource is unreachable
            DatasetFormatError: If the payload is not valid UTF-8 JSON
        """
        scheme = urlparse(location).scheme.lower()
        if scheme in ("http", "https"):
            return self._fetch_url(location)
        if scheme == "file":
            return self._read_file(Path(unquote(urlparse(location).path)))
        return self._read_file(Path(location))

    def _fetch_url(self, url: str) -> Any:
        logger.info("Fetching fault data from %s", url)

        try:
            response = requests.get(url, timeout=self.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DatasetLoadError(f"Failed to load fault data from {url}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise DatasetFormatError(f"Fault data from {url} is not valid JSON: {e}") from e

        logger.info("Fetched fault data from %s (%d bytes)", url, len(response.content))
        return data

    def _read_file(self, path: Path) -> Any:
        logger.info("Loading fault data from %s", path)

        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise DatasetLoadError(f"Failed to load fault data from {path}: {e}") from e

        try:
            return json.loads(content)
        except ValueError as e:
            raise DatasetFormatError(f"Fault data in {path} is not valid JSON: {e}") from e
