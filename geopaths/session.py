"""
Editor Session - the command interface the UI shell talks to.

One EditorSession exists per browser client. It owns the only live
PathCollection and swaps it as a whole on every mutation, so anything reading
`session.paths` always sees a complete collection.

User feedback goes through an optional notifier callback receiving
(message, level), where level is one of the ui.notify types:
'positive', 'negative', 'warning', 'info'.
"""

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Union

from geopaths.model import InvariantViolation, Path, PathCollection, Point
from geopaths.edit import naming
from geopaths.edit.actions import PointEditor
from geopaths.edit.constants import CURSOR_DECIMALS
from geopaths.edit.controller import EditState, InsertionEnd, Mode, ModeController
from geopaths.edit.selection import SelectionTracker
from geopaths.serialization import (
    STORAGE_KEY,
    ExportFile,
    FormatError,
    deserialize_from_storage,
    serialize_for_storage,
    structured_export_file,
    tabular_export_file,
)
from geopaths.storage.protocol import KeyValueStore

logger = logging.getLogger(__name__)

Notifier = Callable[[str, str], None]


@dataclass(frozen=True)
class PathSummary:
    """What the path list panel needs to draw one entry."""
    index: int
    name: str
    color_key: int
    point_count: int
    selected: bool


class EditorSession:
    """Owns the path collection, edit state and selection for one client."""

    def __init__(self, collection: Optional[PathCollection] = None,
                 store: Optional[KeyValueStore] = None,
                 notifier: Optional[Notifier] = None):
        if collection is None or len(collection) == 0:
            collection = PathCollection.default(naming.default_name([]))
        self._collection = collection
        self._store = store
        self._notifier = notifier
        self._pending_rename: Optional[str] = None
        self._on_change: Optional[Callable[[], None]] = None

        self.modes = ModeController()
        self.selection = SelectionTracker()
        self.point_editor = PointEditor()

    @classmethod
    def load(cls, store: KeyValueStore, notifier: Optional[Notifier] = None) -> "EditorSession":
        """
        Start a session from durable storage.

        Nothing stored means a first run; unreadable data is discarded. Both
        start with a single default path.
        """
        session = cls(store=store, notifier=notifier)
        session.reload()
        return session

    def reload(self) -> PathCollection:
        """Replace the live collection with what the store holds."""
        collection = None
        if self._store is not None:
            try:
                collection = deserialize_from_storage(self._store.get(STORAGE_KEY))
            except FormatError as e:
                logger.warning(f"Discarding stored paths from {self._store.description}: {e}")
                self._notify("Saved paths could not be read. Starting with a new path.", "warning")

        if collection is None:
            collection = PathCollection.default(naming.default_name([]))
        else:
            logger.info(f"Loaded {len(collection)} paths from {self._store.description}")

        self._collection = collection
        self.selection.reset()
        self._pending_rename = None
        self._changed()
        return collection

    # --- Wiring ---

    def set_on_change(self, callback: Optional[Callable[[], None]]):
        """Called after the collection or the selection changed."""
        self._on_change = callback

    def _notify(self, message: str, level: str = "info"):
        if self._notifier:
            self._notifier(message, level)

    def _changed(self):
        if self._on_change:
            self._on_change()

    # --- Read-only state ---

    @property
    def paths(self) -> PathCollection:
        return self._collection

    @property
    def store(self) -> Optional[KeyValueStore]:
        return self._store

    @property
    def selected_index(self) -> int:
        return self.selection.index

    @property
    def selected_path(self) -> Path:
        return self._collection[self.selection.index]

    @property
    def edit_state(self) -> EditState:
        return self.modes.state

    @property
    def mode(self) -> Mode:
        return self.modes.state.mode

    @property
    def insertion_end(self) -> InsertionEnd:
        return self.modes.state.insertion_end

    @property
    def cursor_position(self) -> Optional[Point]:
        return self.modes.state.cursor_position

    @property
    def pending_rename(self) -> Optional[str]:
        """Name shown in the open rename dialog, None when it is closed."""
        return self._pending_rename

    def path_summaries(self) -> List[PathSummary]:
        return [
            PathSummary(
                index=i,
                name=path.name,
                color_key=path.color_key,
                point_count=len(path.points),
                selected=(i == self.selection.index),
            )
            for i, path in enumerate(self._collection)
        ]

    def cursor_label(self) -> Optional[str]:
        point = self.cursor_position
        if point is None:
            return None
        return f"Lat {point.lat:.{CURSOR_DECIMALS}f}, Lng {point.lng:.{CURSOR_DECIMALS}f}"

    # --- Map input ---

    def on_primary_click(self, point: Point) -> bool:
        """Add a point to the selected path. Returns True if anything changed."""
        updated = self.point_editor.insert_point(
            self._collection, self.selection.index, point, self.modes.state
        )
        return self._swap(updated)

    def on_secondary_click(self) -> bool:
        """Remove a point from the active end of the selected path."""
        updated = self.point_editor.remove_last_edited(
            self._collection, self.selection.index, self.modes.state
        )
        return self._swap(updated)

    def on_pointer_move(self, point: Point) -> None:
        self.modes.set_cursor_position(point)

    def _swap(self, updated: PathCollection) -> bool:
        if updated is self._collection:
            return False
        self._collection = updated
        self._changed()
        return True

    # --- Mode commands ---

    def enter_moving(self) -> EditState:
        return self.modes.enter_moving()

    def enter_editing(self) -> EditState:
        return self.modes.enter_editing()

    def set_insertion_end(self, end: Union[InsertionEnd, str]) -> EditState:
        return self.modes.set_insertion_end(end)

    # --- Path commands ---

    def select_path(self, index: int) -> bool:
        try:
            self.selection.select(index, len(self._collection))
        except IndexError as e:
            logger.warning(str(e))
            self._notify("That path no longer exists.", "warning")
            return False
        self._changed()
        return True

    def add_path(self) -> Path:
        name = naming.default_name(self._collection.names())
        path = self._collection.create_path(name)
        self._collection = self._collection.append(path)
        logger.info(f"Added path {name!r} (color key {path.color_key})")
        self._notify(f'Added "{name}".', "positive")
        self._changed()
        return path

    def remove_selected_path(self) -> bool:
        index = self.selection.index
        try:
            collection, name = self._collection.remove(index)
        except InvariantViolation as e:
            logger.info(f"Refused to remove path {index}: {e}")
            self._notify("Cannot remove the path. At least one path must exist.", "negative")
            return False

        self._collection = collection
        self.selection.on_remove(index, len(collection))
        logger.info(f"Removed path {name!r}")
        self._notify(f'Removed path "{name}".', "positive")
        self._changed()
        return True

    def open_rename(self) -> str:
        """Start a rename of the selected path; returns the name to prefill."""
        self._pending_rename = self.selected_path.name
        return self._pending_rename

    def confirm_rename(self, name: str) -> bool:
        if self._pending_rename is None:
            logger.debug("confirm_rename without an open rename dialog")
            return False

        index = self.selection.index
        old_name = self._collection[index].name
        self._collection = naming.rename(self._collection, index, name)
        self._pending_rename = None
        logger.info(f"Renamed path {old_name!r} -> {name!r}")
        self._notify(f'Renamed "{old_name}" to "{name}".', "positive")
        self._changed()
        return True

    def cancel_rename(self) -> None:
        self._pending_rename = None

    # --- Persistence / export ---

    def save_to_storage(self) -> bool:
        if self._store is None:
            logger.warning("save_to_storage called without a store")
            self._notify("No storage is configured.", "warning")
            return False
        try:
            payload = serialize_for_storage(self._collection)
        except FormatError as e:
            # Writing it would replace the last good save with data that cannot load
            logger.error(f"Refused to save paths: {e}")
            self._notify("Could not save your work: a point has an invalid coordinate.", "negative")
            return False
        try:
            self._store.set(STORAGE_KEY, payload)
        except OSError as e:
            logger.error(f"Failed to save paths to {self._store.description}: {e}")
            self._notify(f"Could not save your work: {e}", "negative")
            return False

        logger.info(f"Saved {len(self._collection)} paths to {self._store.description}")
        self._notify(f"Saved your work to {self._store.description}.", "positive")
        return True

    def export_structured(self) -> Optional[ExportFile]:
        """paths.json download, or None if the paths cannot be encoded."""
        try:
            return structured_export_file(self._collection)
        except FormatError as e:
            logger.error(f"Refused to export paths: {e}")
            self._notify("Could not export: a point has an invalid coordinate.", "negative")
            return None

    def export_tabular(self) -> ExportFile:
        return tabular_export_file(self._collection)
