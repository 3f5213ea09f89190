"""
Path editing system for GeoPaths.

This package provides the point editing model behind the map:
- ModeController: moving/editing mode and insertion end
- PointEditor: point insert/remove on the selected path
- naming: collision-free default names and renames
- SelectionTracker: the active path index
- handlers: leaflet event wiring for app.py

Usage:
    from geopaths.edit import ModeController, PointEditor, SelectionTracker
    from geopaths.edit.handlers import setup_map_handlers
"""

from geopaths.edit.constants import (
    DEFAULT_NAME_PREFIX,
    CURSOR_DECIMALS,
)
from geopaths.edit.controller import EditState, InsertionEnd, Mode, ModeController
from geopaths.edit.actions import PointEditor, insert_point, remove_last_edited
from geopaths.edit.naming import default_name, is_name_taken
from geopaths.edit.selection import SelectionTracker
from geopaths.edit.handlers import point_from_event_args, setup_map_handlers

__all__ = [
    'EditState',
    'InsertionEnd',
    'Mode',
    'ModeController',
    'PointEditor',
    'insert_point',
    'remove_last_edited',
    'default_name',
    'is_name_taken',
    'SelectionTracker',
    'point_from_event_args',
    'setup_map_handlers',
    'DEFAULT_NAME_PREFIX',
    'CURSOR_DECIMALS',
]
