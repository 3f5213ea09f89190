"""
Edit Handlers - map event handlers for app.py

This module extracts the leaflet event handling from app.py so the main
application file stays focused on layout.
"""

import logging
import math
from typing import Any, Callable, Optional

from geopaths.model import Point
from geopaths.edit.constants import (
    MAP_CLICK_EVENT,
    MAP_MOUSE_MOVE_EVENT,
    MAP_RIGHT_CLICK_EVENT,
)

logger = logging.getLogger(__name__)


def point_from_event_args(raw: Any) -> Optional[Point]:
    """
    Extract a Point from a map event payload.

    Accepts:
    - leaflet events: {'latlng': {'lat': .., 'lng': ..}, ...}
    - bare coordinates: {'lat': .., 'lng': ..}
    - sequences: [lat, lng]
    Returns None for anything else.
    """
    if hasattr(raw, 'args'):
        raw = raw.args

    if isinstance(raw, dict):
        if isinstance(raw.get('latlng'), dict):
            raw = raw['latlng']
        lat, lng = raw.get('lat'), raw.get('lng')
    elif isinstance(raw, (list, tuple)) and len(raw) >= 2:
        lat, lng = raw[0], raw[1]
    else:
        return None

    if isinstance(lat, bool) or isinstance(lng, bool):
        return None
    try:
        lat, lng = float(lat), float(lng)
    except (TypeError, ValueError):
        return None
    # "inf" and "nan" parse as floats but are not places on the map
    if not (math.isfinite(lat) and math.isfinite(lng)):
        return None
    return Point(lat=lat, lng=lng)


def setup_map_handlers(leaflet, session, refresh_paths: Callable[[], None],
                       refresh_cursor: Callable[[], None]):
    """
    Subscribe the session to map events.

    Args:
        leaflet: ui.leaflet element
        session: EditorSession receiving the events
        refresh_paths: Redraw paths and the path list
        refresh_cursor: Redraw the cursor readout

    Returns:
        Dict with the handler functions (useful for tests)
    """

    def handle_click(event):
        point = point_from_event_args(event)
        if point is None:
            logger.debug(f"Ignoring click without coordinates: {getattr(event, 'args', event)!r}")
            return
        if session.on_primary_click(point):
            refresh_paths()

    def handle_right_click(event):
        if session.on_secondary_click():
            refresh_paths()

    def handle_mouse_move(event):
        point = point_from_event_args(event)
        if point is None:
            return
        session.on_pointer_move(point)
        refresh_cursor()

    leaflet.on(MAP_CLICK_EVENT, handle_click)
    leaflet.on(MAP_RIGHT_CLICK_EVENT, handle_right_click)
    leaflet.on(MAP_MOUSE_MOVE_EVENT, handle_mouse_move)

    return {
        'click': handle_click,
        'right_click': handle_right_click,
        'mouse_move': handle_mouse_move,
    }
