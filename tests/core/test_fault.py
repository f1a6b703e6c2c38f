"""Unit tests for fault parsing.

Pure function tests - no mocks needed.
"""

import pytest

from fault_proximity.core.errors import DatasetFormatError
from fault_proximity.core.fault import (
    FaultFeature,
    parse_fault_dataset,
    parse_fault_feature,
    to_feature_collection,
)


@pytest.fixture
def sample_feature():
    """Create a sample GeoJSON fault feature."""
    return {
        "type": "Feature",
        "id": 42,
        "properties": {
            "name": "Hayward Fault",
            "slip_type": "Dextral",
            "net_slip_rate": "(9.0,7.0,11.0)",
            "catalog_name": "USGS",
        },
        "geometry": {
            "type": "LineString",
            "coordinates": [[-122.0, 37.0], [-122.5, 37.5]],
        },
    }


class TestParseFaultFeature:
    """Tests for parse_fault_feature()."""

    def test_parses_valid_feature(self, sample_feature):
        fault = parse_fault_feature(sample_feature)

        assert fault.geometry_type == "LineString"
        assert fault.coordinates == ((-122.0, 37.0), (-122.5, 37.5))
        assert fault.name == "Hayward Fault"
        assert fault.feature_id == 42
        assert fault.is_line_string is True

    def test_keeps_malformed_coordinates(self):
        """Malformed entries are kept for the evaluator to skip."""
        fault = parse_fault_feature({
            "geometry": {"type": "LineString", "coordinates": [[None, None], [-122.0, 37.0]]},
        })

        assert fault.coordinates == ((None, None), (-122.0, 37.0))

    def test_missing_geometry(self):
        fault = parse_fault_feature({"properties": {"name": "X"}})

        assert fault.geometry_type is None
        assert fault.coordinates == ()
        assert fault.is_line_string is False

    def test_missing_properties(self):
        fault = parse_fault_feature({"geometry": {"type": "LineString", "coordinates": []}})
        assert fault.properties == {}

    def test_non_dict_returns_none(self):
        assert parse_fault_feature("not a feature") is None
        assert parse_fault_feature(None) is None

    def test_copies_properties(self, sample_feature):
        """Mutating the source dict doesn't change the parsed fault."""
        fault = parse_fault_feature(sample_feature)
        sample_feature["properties"]["name"] = "Changed"

        assert fault.name == "Hayward Fault"

    def test_properties_are_read_only(self, sample_feature):
        fault = parse_fault_feature(sample_feature)

        with pytest.raises(TypeError):
            fault.properties["name"] = "Changed"
        assert fault.to_geojson()["properties"]["name"] == "Hayward Fault"


class TestParseFaultDataset:
    """Tests for parse_fault_dataset()."""

    def test_parses_feature_collection(self, sample_feature):
        dataset = parse_fault_dataset({
            "type": "FeatureCollection",
            "features": [sample_feature, "junk", sample_feature],
        })

        assert isinstance(dataset, tuple)
        assert len(dataset) == 2
        assert all(isinstance(f, FaultFeature) for f in dataset)

    def test_empty_features_is_valid(self):
        assert parse_fault_dataset({"features": []}) == ()

    def test_missing_features_raises(self):
        with pytest.raises(DatasetFormatError):
            parse_fault_dataset({"type": "FeatureCollection"})

    def test_features_not_list_raises(self):
        with pytest.raises(DatasetFormatError):
            parse_fault_dataset({"features": {"a": 1}})

    def test_non_object_raises(self):
        with pytest.raises(DatasetFormatError):
            parse_fault_dataset([1, 2, 3])


class TestToFeatureCollection:
    """Tests for GeoJSON rendering."""

    def test_round_trips_feature_shape(self, sample_feature):
        fault = parse_fault_feature(sample_feature)

        collection = to_feature_collection([fault])

        assert collection["type"] == "FeatureCollection"
        feature = collection["features"][0]
        assert feature["id"] == 42
        assert feature["geometry"]["type"] == "LineString"
        assert feature["geometry"]["coordinates"] == [[-122.0, 37.0], [-122.5, 37.5]]
        assert feature["properties"]["name"] == "Hayward Fault"

    def test_empty(self):
        assert to_feature_collection(()) == {"type": "FeatureCollection", "features": []}
