"""
Backend Factory for GeoPaths.

Creates the storage backend named in configuration.
"""

import logging
from pathlib import Path
from typing import MutableMapping, Optional, Union

from geopaths.storage.browser_backend import MemoryStore, UserStorageStore
from geopaths.storage.file_backend import JsonFileStore
from geopaths.storage.protocol import KeyValueStore

logger = logging.getLogger(__name__)

# Default backend type
DEFAULT_BACKEND = "browser"

BACKEND_TYPES = ("browser", "file", "memory")


def create_store(
    backend_type: Optional[str] = None,
    file_path: Optional[Union[str, Path]] = None,
    user_storage: Optional[MutableMapping] = None,
) -> KeyValueStore:
    """
    Create a storage backend instance.

    Args:
        backend_type: 'browser', 'file' or 'memory' (defaults to configuration)
        file_path: JSON file for the 'file' backend (defaults to configuration)
        user_storage: Mapping to use instead of app.storage.user

    Returns:
        KeyValueStore instance
    """
    if backend_type is None:
        from geopaths.config import get_storage_backend
        backend_type = get_storage_backend()

    backend_type = (backend_type or DEFAULT_BACKEND).strip().lower()
    if backend_type not in BACKEND_TYPES:
        logger.warning(f"Unknown storage backend {backend_type!r}, using {DEFAULT_BACKEND!r}")
        backend_type = DEFAULT_BACKEND

    if backend_type == "file":
        if file_path is None:
            from geopaths.config import get_storage_file
            file_path = get_storage_file()
        return JsonFileStore(file_path)
    elif backend_type == "memory":
        return MemoryStore()
    else:
        return UserStorageStore(user_storage)
