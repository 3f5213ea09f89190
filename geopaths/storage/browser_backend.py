"""
Mapping-based storage backends.

- UserStorageStore: NiceGUI's per-browser app.storage.user, persisted by
  NiceGUI on the server and keyed by the browser session cookie
- MemoryStore: plain dict, nothing survives the process
"""

import logging
from typing import MutableMapping, Optional

logger = logging.getLogger(__name__)


class MappingStore:
    """KeyValueStore over any MutableMapping."""

    def __init__(self, mapping: MutableMapping):
        self._mapping = mapping

    @property
    def backend_type(self) -> str:
        return "mapping"

    @property
    def description(self) -> str:
        return "storage"

    def get(self, key: str) -> Optional[str]:
        return self._mapping.get(key)

    def set(self, key: str, value: str) -> None:
        self._mapping[key] = value

    def delete(self, key: str) -> None:
        self._mapping.pop(key, None)


class MemoryStore(MappingStore):
    """Ephemeral store for tests and throwaway sessions."""

    def __init__(self, initial: Optional[dict] = None):
        super().__init__(dict(initial or {}))

    @property
    def backend_type(self) -> str:
        return "memory"

    @property
    def description(self) -> str:
        return "memory (not persisted)"


class UserStorageStore(MappingStore):
    """
    Per-browser storage backed by NiceGUI's app.storage.user.

    Must be created inside a page handler, where app.storage.user is bound to
    the requesting browser. Tests pass a plain dict instead.
    """

    def __init__(self, mapping: Optional[MutableMapping] = None):
        if mapping is None:
            from nicegui import app
            mapping = app.storage.user
        super().__init__(mapping)

    @property
    def backend_type(self) -> str:
        return "browser"

    @property
    def description(self) -> str:
        return "browser storage"
