"""
Selection Tracker - which path receives point edits.
"""

import logging

logger = logging.getLogger(__name__)


def on_remove(removed_index: int, current_index: int, new_length: int) -> int:
    """
    Selection after the path at removed_index was dropped.

    Removing the selected path moves the selection to the previous one (or
    keeps 0 when the first path was removed). Removing any other path leaves
    the index alone, clamped to the shortened collection.
    """
    if removed_index == current_index and current_index > 0:
        return current_index - 1
    if new_length > 0 and current_index > new_length - 1:
        return new_length - 1
    return current_index


class SelectionTracker:
    """Holds the active path index and keeps it valid across removals."""

    def __init__(self, index: int = 0):
        self._index = index

    @property
    def index(self) -> int:
        return self._index

    def select(self, index: int, length: int) -> int:
        if not 0 <= index < length:
            raise IndexError(f"Cannot select path {index}: collection has {length} paths")
        self._index = index
        return self._index

    def on_remove(self, removed_index: int, new_length: int) -> int:
        previous = self._index
        self._index = on_remove(removed_index, previous, new_length)
        if self._index != previous:
            logger.debug(f"Selection moved {previous} -> {self._index} after removing {removed_index}")
        return self._index

    def reset(self) -> None:
        self._index = 0
