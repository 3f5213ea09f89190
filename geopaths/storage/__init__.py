"""
Storage backend abstraction for GeoPaths.

Supports multiple storage backends:
- UserStorageStore: NiceGUI per-browser storage (default)
- JsonFileStore: a JSON file next to the application
- MemoryStore: in-process only
"""

from geopaths.storage.protocol import KeyValueStore
from geopaths.storage.browser_backend import MemoryStore, UserStorageStore
from geopaths.storage.file_backend import JsonFileStore
from geopaths.storage.factory import create_store

__all__ = [
    'KeyValueStore',
    'MemoryStore',
    'UserStorageStore',
    'JsonFileStore',
    'create_store',
]
