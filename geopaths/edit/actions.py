"""
Point Editor - applies point insert/remove to the selected path.

Each function takes the current EditState and returns a collection. When the
editor is in moving mode, or there is nothing to remove, the very same
collection object is returned so callers can tell nothing happened.
"""

import logging

from geopaths.model import PathCollection, Point
from geopaths.edit.controller import EditState, InsertionEnd

logger = logging.getLogger(__name__)


def insert_point(collection: PathCollection, selected_index: int, point: Point,
                 insertion_end: InsertionEnd) -> PathCollection:
    """Append (BACK) or prepend (FRONT) point to the selected path. Duplicates are kept."""
    path = collection[selected_index]
    if insertion_end == InsertionEnd.BACK:
        points = path.points + (point,)
    else:
        points = (point,) + path.points
    return collection.replace_path(selected_index, path.with_points(points))


def remove_last_edited(collection: PathCollection, selected_index: int,
                       insertion_end: InsertionEnd) -> PathCollection:
    """Drop the last (BACK) or first (FRONT) point. No-op on an empty path."""
    path = collection[selected_index]
    if not path.points:
        return collection
    if insertion_end == InsertionEnd.BACK:
        points = path.points[:-1]
    else:
        points = path.points[1:]
    return collection.replace_path(selected_index, path.with_points(points))


class PointEditor:
    """Mode-gated wrapper used by the session for map clicks."""

    def insert_point(self, collection: PathCollection, selected_index: int,
                     point: Point, state: EditState) -> PathCollection:
        if not state.is_editing:
            logger.debug("Ignoring point insert while moving")
            return collection
        return insert_point(collection, selected_index, point, state.insertion_end)

    def remove_last_edited(self, collection: PathCollection, selected_index: int,
                           state: EditState) -> PathCollection:
        if not state.is_editing:
            logger.debug("Ignoring point removal while moving")
            return collection
        return remove_last_edited(collection, selected_index, state.insertion_end)
