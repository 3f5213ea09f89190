"""
Mode Controller - single source of truth for interaction state.

Two independent toggles:
- mode: MOVING (clicks pan the map) or EDITING (clicks add/remove points)
- insertion_end: BACK or FRONT, the end of the selected path that receives
  new points and loses removed ones

Neither toggle ever changes on its own; only explicit user commands flip them.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Union

from geopaths.model import Point


class Mode(str, Enum):
    MOVING = "moving"
    EDITING = "editing"


class InsertionEnd(str, Enum):
    FRONT = "front"
    BACK = "back"


@dataclass(frozen=True)
class EditState:
    """Immutable snapshot of current edit state."""
    mode: Mode = Mode.MOVING
    insertion_end: InsertionEnd = InsertionEnd.BACK
    cursor_position: Optional[Point] = None

    @property
    def is_editing(self) -> bool:
        return self.mode is Mode.EDITING


class ModeController:
    """Tracks mode and insertion end, and gates the point editor."""

    def __init__(self):
        self._state = EditState()
        self._on_state_change: Optional[Callable[[EditState], None]] = None

    @property
    def state(self) -> EditState:
        return self._state

    @property
    def is_editing(self) -> bool:
        return self._state.is_editing

    def set_on_state_change(self, callback: Callable[[EditState], None]):
        self._on_state_change = callback

    def enter_moving(self) -> EditState:
        return self._update(mode=Mode.MOVING)

    def enter_editing(self) -> EditState:
        return self._update(mode=Mode.EDITING)

    def set_insertion_end(self, end: Union[InsertionEnd, str]) -> EditState:
        return self._update(insertion_end=InsertionEnd(end))

    def set_cursor_position(self, point: Point) -> EditState:
        # Pointer moves are frequent; they don't notify listeners
        self._state = replace(self._state, cursor_position=point)
        return self._state

    def clear_cursor_position(self) -> EditState:
        self._state = replace(self._state, cursor_position=None)
        return self._state

    def _update(self, **changes) -> EditState:
        new_state = replace(self._state, **changes)
        if new_state != self._state:
            self._state = new_state
            self._notify_change()
        return self._state

    def _notify_change(self):
        if self._on_state_change:
            self._on_state_change(self._state)
