import pytest

from geopaths.edit import default_name, is_name_taken
from geopaths.edit import naming
from geopaths.model import PathCollection


def test_default_name_on_empty_set():
    assert default_name([]) == "Unnamed path 1"


def test_default_name_skips_taken_slots():
    assert default_name({"Unnamed path 1", "Unnamed path 2"}) == "Unnamed path 3"


def test_default_name_fills_lowest_gap():
    assert default_name({"Unnamed path 2"}) == "Unnamed path 1"
    assert default_name({"Unnamed path 1", "Unnamed path 3"}) == "Unnamed path 2"


def test_default_name_ignores_unrelated_names():
    assert default_name(["Route 66", "Unnamed path"]) == "Unnamed path 1"


@pytest.mark.parametrize("existing", [
    [],
    ["Unnamed path 1"],
    ["Unnamed path 1", "Unnamed path 2", "Unnamed path 4"],
    ["Unnamed path 5", "x"],
])
def test_default_name_never_collides(existing):
    assert default_name(existing) not in existing


def test_rename_allows_duplicate_names():
    # Known quirk: creation guarantees unique names, rename does not
    collection = PathCollection.default("A")
    collection = collection.append(collection.create_path("B"))
    renamed = naming.rename(collection, 1, "A")
    assert renamed.names() == ["A", "A"]


def test_is_name_taken_excludes_own_index():
    collection = PathCollection.default("A")
    collection = collection.append(collection.create_path("B"))
    assert is_name_taken(collection, "A") is True
    assert is_name_taken(collection, "A", exclude_index=0) is False
    assert is_name_taken(collection, "C") is False
