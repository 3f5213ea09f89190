import json

import pytest

from geopaths.model import Path, PathCollection, Point
from geopaths.serialization import (
    FormatError,
    STORAGE_KEY,
    deserialize_from_storage,
    export_structured,
    export_tabular,
    serialize_for_storage,
    structured_export_file,
    tabular_export_file,
)


@pytest.fixture
def collection():
    return PathCollection((
        Path("Han river", (Point(37.5642135, 127.0016985), Point(37.55, 126.99)), 0),
        Path("Empty", (), 3),
        Path("경로 A", (Point(-33.8688, 151.2093),), 7),
    ))


def test_storage_key():
    assert STORAGE_KEY == "paths"


def test_storage_round_trip(collection):
    assert deserialize_from_storage(serialize_for_storage(collection)) == collection


def test_structured_export_round_trip(collection):
    assert deserialize_from_storage(export_structured(collection)) == collection


def test_storage_layout(collection):
    data = json.loads(serialize_for_storage(collection))
    assert data[0] == {
        "name": "Han river",
        "points": [{"lat": 37.5642135, "lng": 127.0016985}, {"lat": 37.55, "lng": 126.99}],
        "counter": 0,
    }
    assert data[1]["points"] == []
    assert data[2]["counter"] == 7


def test_non_ascii_names_are_kept_readable(collection):
    assert "경로 A" in export_structured(collection)


def test_tabular_export_exact_output():
    collection = PathCollection((Path("A", (Point(1.0, 2.0), Point(3.0, 4.0)), 0),))
    assert export_tabular(collection) == "datatype;x;y\nA;1.0;2.0\nA;3.0;4.0"


def test_tabular_export_puts_latitude_in_x(collection):
    lines = export_tabular(collection).split("\n")
    assert lines[1] == "Han river;37.5642135;127.0016985"


def test_tabular_export_skips_empty_paths(collection):
    lines = export_tabular(collection).split("\n")
    assert lines[0] == "datatype;x;y"
    assert len(lines) == 1 + 3
    assert not any(line.startswith("Empty;") for line in lines)


def test_tabular_export_header_only():
    assert export_tabular(PathCollection.default("A")) == "datatype;x;y"


def test_export_files(collection):
    structured = structured_export_file(collection)
    tabular = tabular_export_file(collection)
    assert structured.filename == "paths.json"
    assert tabular.filename == "paths.csv"
    assert tabular.content == export_tabular(collection)


def test_missing_data_means_first_run():
    assert deserialize_from_storage(None) is None


def test_integer_coordinates_are_accepted():
    raw = '[{"name": "A", "points": [{"lat": 1, "lng": 2}], "counter": 0}]'
    collection = deserialize_from_storage(raw)
    assert collection[0].points == (Point(1.0, 2.0),)
    assert isinstance(collection[0].points[0].lat, float)


@pytest.mark.parametrize("raw", [
    "",
    "not json",
    "{",
    "null",
    "{}",
    "[]",
    '"paths"',
    '[1, 2]',
    '[{"points": [], "counter": 0}]',
    '[{"name": "A", "counter": 0}]',
    '[{"name": "A", "points": []}]',
    '[{"name": 5, "points": [], "counter": 0}]',
    '[{"name": "A", "points": {}, "counter": 0}]',
    '[{"name": "A", "points": [], "counter": "0"}]',
    '[{"name": "A", "points": [], "counter": true}]',
    '[{"name": "A", "points": [], "counter": 1.5}]',
    '[{"name": "A", "points": [[1, 2]], "counter": 0}]',
    '[{"name": "A", "points": [{"lat": 1}], "counter": 0}]',
    '[{"name": "A", "points": [{"lat": "1", "lng": 2}], "counter": 0}]',
    '[{"name": "A", "points": [{"lat": true, "lng": 2}], "counter": 0}]',
    '[{"name": "A", "points": [{"lat": NaN, "lng": 2}], "counter": 0}]',
    '[{"name": "A", "points": [], "counter": 0}, {"name": "B", "points": [], "counter": 0}]',
    pytest.param("[" * 100000 + "]" * 100000, id="deeply-nested"),
])
def test_malformed_input_raises_format_error(raw):
    with pytest.raises(FormatError):
        deserialize_from_storage(raw)


def test_format_error_is_a_value_error():
    assert issubclass(FormatError, ValueError)


@pytest.mark.parametrize("point", [
    Point(float("inf"), 2.0),
    Point(1.0, float("-inf")),
    Point(float("nan"), 2.0),
])
def test_non_finite_coordinates_are_not_encoded(point):
    collection = PathCollection((Path("A", (point,), 0),))
    with pytest.raises(FormatError):
        serialize_for_storage(collection)
    with pytest.raises(FormatError):
        export_structured(collection)
