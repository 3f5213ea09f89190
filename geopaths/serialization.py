"""
Serialization and export of path collections.

Wire format (storage and paths.json):
[
  {
    "name": "Unnamed path 1",
    "points": [{"lat": 37.56, "lng": 127.0}],
    "counter": 0
  }
]

"counter" carries Path.color_key; the key name matches data written by
earlier versions of the editor, so existing browser storage keeps loading.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from geopaths.model import Path, PathCollection, Point

logger = logging.getLogger(__name__)

STORAGE_KEY = "paths"
STRUCTURED_EXPORT_FILENAME = "paths.json"
TABULAR_EXPORT_FILENAME = "paths.csv"
TABULAR_HEADER = "datatype;x;y"
TABULAR_DELIMITER = ";"


class FormatError(ValueError):
    """Stored or imported data does not describe a valid path collection."""


@dataclass(frozen=True)
class ExportFile:
    """A downloadable artifact."""
    filename: str
    content: str
    media_type: str = "text/plain"


# --- Encoding ---

def path_to_dict(path: Path) -> Dict[str, Any]:
    return {
        "name": path.name,
        "points": [{"lat": p.lat, "lng": p.lng} for p in path.points],
        "counter": path.color_key,
    }


def collection_to_list(collection: PathCollection) -> List[Dict[str, Any]]:
    return [path_to_dict(path) for path in collection]


def _dumps(collection: PathCollection, **kwargs) -> str:
    # NaN/Infinity would be written but never read back
    try:
        return json.dumps(collection_to_list(collection), ensure_ascii=False, allow_nan=False, **kwargs)
    except ValueError as e:
        raise FormatError(f"Paths hold a non-finite coordinate: {e}") from e


def serialize_for_storage(collection: PathCollection) -> str:
    """
    Compact, lossless JSON encoding of the whole collection.

    Raises:
        FormatError: if a coordinate is NaN or infinite
    """
    return _dumps(collection, separators=(",", ":"))


def export_structured(collection: PathCollection) -> str:
    """Readable JSON dump; loads back through deserialize_from_storage."""
    return _dumps(collection, indent=2)


def export_tabular(collection: PathCollection) -> str:
    """
    One "name;x;y" line per point under a "datatype;x;y" header.

    x holds the latitude and y the longitude. Consumers of existing exports
    rely on this column order.
    """
    lines = [TABULAR_HEADER]
    for path in collection:
        for point in path.points:
            lines.append(TABULAR_DELIMITER.join([path.name, repr(point.lat), repr(point.lng)]))
    return "\n".join(lines)


def structured_export_file(collection: PathCollection) -> ExportFile:
    return ExportFile(STRUCTURED_EXPORT_FILENAME, export_structured(collection), "application/json")


def tabular_export_file(collection: PathCollection) -> ExportFile:
    return ExportFile(TABULAR_EXPORT_FILENAME, export_tabular(collection), "text/csv")


# --- Decoding ---

def _coordinate(value: Any, field: str, where: str) -> float:
    # bool is an int subclass; true/false are not coordinates
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise FormatError(f"{where}: '{field}' must be a number, got {value!r}")
    value = float(value)
    if not math.isfinite(value):
        raise FormatError(f"{where}: '{field}' must be finite, got {value!r}")
    return value


def point_from_dict(data: Any, where: str) -> Point:
    if not isinstance(data, dict):
        raise FormatError(f"{where}: point must be an object, got {type(data).__name__}")
    for key in ("lat", "lng"):
        if key not in data:
            raise FormatError(f"{where}: point is missing '{key}'")
    return Point(lat=_coordinate(data["lat"], "lat", where), lng=_coordinate(data["lng"], "lng", where))


def path_from_dict(data: Any, position: int) -> Path:
    where = f"path #{position}"
    if not isinstance(data, dict):
        raise FormatError(f"{where}: must be an object, got {type(data).__name__}")
    for key in ("name", "points", "counter"):
        if key not in data:
            raise FormatError(f"{where}: missing '{key}'")

    name = data["name"]
    if not isinstance(name, str):
        raise FormatError(f"{where}: 'name' must be a string")

    counter = data["counter"]
    if isinstance(counter, bool) or not isinstance(counter, int):
        raise FormatError(f"{where}: 'counter' must be an integer")

    raw_points = data["points"]
    if not isinstance(raw_points, list):
        raise FormatError(f"{where}: 'points' must be a list")
    points = tuple(
        point_from_dict(p, f"{where} point #{i}") for i, p in enumerate(raw_points)
    )
    return Path(name=name, points=points, color_key=counter)


def collection_from_list(data: Any) -> PathCollection:
    if not isinstance(data, list):
        raise FormatError(f"Expected a list of paths, got {type(data).__name__}")
    if not data:
        raise FormatError("Stored collection holds no paths")

    paths = tuple(path_from_dict(item, i) for i, item in enumerate(data))

    keys = [p.color_key for p in paths]
    if len(set(keys)) != len(keys):
        raise FormatError(f"Duplicate color counters in stored paths: {keys}")
    return PathCollection(paths)


def deserialize_from_storage(raw: Optional[str]) -> Optional[PathCollection]:
    """
    Decode a stored collection.

    Returns:
        None when nothing was stored yet (first run)

    Raises:
        FormatError: if the payload is not a valid collection
    """
    if raw is None:
        return None
    if not isinstance(raw, str):
        raise FormatError(f"Stored value must be text, got {type(raw).__name__}")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise FormatError(f"Stored paths are not valid JSON: {e}") from e
    except RecursionError as e:
        raise FormatError("Stored paths are nested too deeply to decode") from e
    return collection_from_list(data)
