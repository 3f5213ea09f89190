"""
Path Collection - the authoritative data model for GeoPaths.

All types here are immutable. Every mutation returns a new PathCollection so
the session can swap its reference as a whole and nobody ever observes a
half-applied change.
"""

from dataclasses import dataclass, field, replace
from typing import Iterator, List, Optional, Tuple


class InvariantViolation(Exception):
    """Raised when an operation would break a collection invariant."""
    def __init__(self, message: str, operation: str = ""):
        self.operation = operation
        super().__init__(message)


@dataclass(frozen=True)
class Point:
    """A geographic coordinate. Equality is structural."""
    lat: float
    lng: float


@dataclass(frozen=True)
class Path:
    """A named, ordered sequence of points drawn as one polyline."""
    name: str
    points: Tuple[Point, ...] = ()
    color_key: int = 0

    def with_points(self, points) -> "Path":
        return replace(self, points=tuple(points))

    def with_name(self, name: str) -> "Path":
        return replace(self, name=name)


@dataclass(frozen=True)
class PathCollection:
    """
    Ordered, immutable sequence of paths.

    Invariants kept by the operations below:
    - remove() refuses to drop the last remaining path
    - create_path() hands out color keys strictly increasing in creation order
    """
    paths: Tuple[Path, ...] = field(default_factory=tuple)

    @classmethod
    def default(cls, name: str) -> "PathCollection":
        """A fresh collection holding a single empty path."""
        empty = cls()
        return empty.append(empty.create_path(name))

    # --- Read access ---

    def __len__(self) -> int:
        return len(self.paths)

    def __iter__(self) -> Iterator[Path]:
        return iter(self.paths)

    def __getitem__(self, index: int) -> Path:
        return self.paths[index]

    def names(self) -> List[str]:
        return [p.name for p in self.paths]

    def color_keys(self) -> List[int]:
        return [p.color_key for p in self.paths]

    def next_color_key(self) -> int:
        if not self.paths:
            return 0
        return max(self.color_keys()) + 1

    # --- Mutations (copy-on-write) ---

    def create_path(self, name: str) -> Path:
        """Build a new empty path with the next color key. Does not insert it."""
        return Path(name=name, points=(), color_key=self.next_color_key())

    def append(self, path: Path) -> "PathCollection":
        return PathCollection(self.paths + (path,))

    def remove(self, index: int) -> Tuple["PathCollection", str]:
        """
        Remove the path at index.

        Returns:
            (new collection, name of the removed path)

        Raises:
            InvariantViolation: if only one path is left
            IndexError: if index is out of range
        """
        if len(self.paths) == 1:
            raise InvariantViolation(
                "At least one path must exist", operation="remove"
            )
        self._check_index(index)
        removed = self.paths[index]
        remaining = self.paths[:index] + self.paths[index + 1:]
        return PathCollection(remaining), removed.name

    def rename(self, index: int, new_name: str) -> "PathCollection":
        """Replace the name at index. Uniqueness is the caller's business."""
        self._check_index(index)
        return self.replace_path(index, self.paths[index].with_name(new_name))

    def replace_path(self, index: int, path: Path) -> "PathCollection":
        self._check_index(index)
        paths = list(self.paths)
        paths[index] = path
        return PathCollection(tuple(paths))

    def _check_index(self, index: Optional[int]) -> None:
        if index is None or not 0 <= index < len(self.paths):
            raise IndexError(f"Path index {index} out of range (0..{len(self.paths) - 1})")
