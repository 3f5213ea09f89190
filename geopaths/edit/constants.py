"""
Shared constants for the path editing system.
"""

# Default names are "Unnamed path 1", "Unnamed path 2", ...
DEFAULT_NAME_PREFIX = "Unnamed path"
DEFAULT_NAME_START = 1

# Leaflet events the map handlers subscribe to
MAP_CLICK_EVENT = "map-click"
MAP_RIGHT_CLICK_EVENT = "map-contextmenu"
MAP_MOUSE_MOVE_EVENT = "map-mousemove"

# Decimal places shown in the cursor readout
CURSOR_DECIMALS = 2
