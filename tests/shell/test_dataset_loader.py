"""Tests for the fault dataset loader.

Uses a mocked fault data client to avoid network calls.
"""

import threading

import pytest
from unittest.mock import Mock

from fault_proximity.core.errors import DatasetFormatError, DatasetLoadError
from fault_proximity.shell.dataset_loader import FaultDatasetLoader


LOCATION = "https://example.com/faults.geojson"

SAMPLE_GEOJSON = {
    "type": "FeatureCollection",
    "features": [
        {
            "type": "Feature",
            "properties": {"name": "Fault A"},
            "geometry": {"type": "LineString", "coordinates": [[-122.0, 37.0], [-122.1, 37.1]]},
        },
    ],
}


@pytest.fixture
def mock_client():
    client = Mock()
    client.fetch_feature_collection.return_value = SAMPLE_GEOJSON
    return client


class TestFaultDatasetLoader:
    """Tests for FaultDatasetLoader.load()."""

    def test_loads_and_parses(self, mock_client):
        loader = FaultDatasetLoader(LOCATION, client=mock_client)

        dataset = loader.load()

        assert len(dataset) == 1
        assert dataset[0].name == "Fault A"
        mock_client.fetch_feature_collection.assert_called_once_with(LOCATION)

    def test_memoizes_dataset(self, mock_client):
        """Subsequent calls return the cached dataset without fetching."""
        loader = FaultDatasetLoader(LOCATION, client=mock_client)

        first = loader.load()
        second = loader.load()

        assert first is second
        assert mock_client.fetch_feature_collection.call_count == 1
        assert loader.is_loaded is True

    def test_load_error_propagates(self, mock_client):
        mock_client.fetch_feature_collection.side_effect = DatasetLoadError("unreachable")
        loader = FaultDatasetLoader(LOCATION, client=mock_client)

        with pytest.raises(DatasetLoadError):
            loader.load()
        assert loader.is_loaded is False

    def test_format_error_on_bad_payload(self, mock_client):
        mock_client.fetch_feature_collection.return_value = {"type": "FeatureCollection"}
        loader = FaultDatasetLoader(LOCATION, client=mock_client)

        with pytest.raises(DatasetFormatError):
            loader.load()

    def test_failure_does_not_poison_cache(self, mock_client):
        """After a failed load the next call fetches again."""
        mock_client.fetch_feature_collection.side_effect = [
            DatasetLoadError("unreachable"),
            SAMPLE_GEOJSON,
        ]
        loader = FaultDatasetLoader(LOCATION, client=mock_client)

        with pytest.raises(DatasetLoadError):
            loader.load()
        dataset = loader.load()

        assert len(dataset) == 1
        assert mock_client.fetch_feature_collection.call_count == 2

    def test_interrupted_load_can_be_retried(self, mock_client):
        """A BaseException from the fetch still releases the in-flight load."""

        class Interrupted(BaseException):
            pass

        mock_client.fetch_feature_collection.side_effect = [Interrupted(), SAMPLE_GEOJSON]
        loader = FaultDatasetLoader(LOCATION, client=mock_client)
        results = []

        with pytest.raises(Interrupted):
            loader.load()

        retry = threading.Thread(target=lambda: results.append(loader.load()))
        retry.start()
        retry.join(timeout=5)

        assert not retry.is_alive()
        assert len(results[0]) == 1
        assert mock_client.fetch_feature_collection.call_count == 2

    def test_invalidate_forces_reload(self, mock_client):
        loader = FaultDatasetLoader(LOCATION, client=mock_client)
        loader.load()

        loader.invalidate()
        loader.load()

        assert mock_client.fetch_feature_collection.call_count == 2


class TestFaultDatasetLoaderConcurrency:
    """Concurrent callers share a single in-flight load."""

    def _blocking_client(self, payload=SAMPLE_GEOJSON, error=None):
        started = threading.Event()
        release = threading.Event()

        def fetch(location):
            started.set()
            release.wait(timeout=5)
            if error is not None:
                raise error
            return payload

        client = Mock()
        client.fetch_feature_collection.side_effect = fetch
        return client, started, release

    def _run(self, loader, results, errors):
        try:
            results.append(loader.load())
        except Exception as e:
            errors.append(e)

    def test_concurrent_loads_fetch_once(self):
        client, started, release = self._blocking_client()
        loader = FaultDatasetLoader(LOCATION, client=client)
        results, errors = [], []

        first = threading.Thread(target=self._run, args=(loader, results, errors))
        first.start()
        assert started.wait(timeout=5)

        others = [
            threading.Thread(target=self._run, args=(loader, results, errors))
            for _ in range(4)
        ]
        for t in others:
            t.start()
        release.set()
        for t in [first, *others]:
            t.join(timeout=5)

        assert errors == []
        assert len(results) == 5
        assert all(r is results[0] for r in results)
        assert client.fetch_feature_collection.call_count == 1

    def test_waiters_see_failure_then_retry_succeeds(self):
        client, started, release = self._blocking_client(error=DatasetLoadError("down"))
        loader = FaultDatasetLoader(LOCATION, client=client)
        results, errors = [], []

        first = threading.Thread(target=self._run, args=(loader, results, errors))
        first.start()
        assert started.wait(timeout=5)
        second = threading.Thread(target=self._run, args=(loader, results, errors))
        second.start()
        release.set()
        first.join(timeout=5)
        second.join(timeout=5)

        assert results == []
        assert all(isinstance(e, DatasetLoadError) for e in errors)
        assert len(errors) == 2

        client.fetch_feature_collection.side_effect = None
        client.fetch_feature_collection.return_value = SAMPLE_GEOJSON
        assert len(loader.load()) == 1
