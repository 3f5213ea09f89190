"""
File-based Storage Backend for GeoPaths.

All keys live in one JSON object on disk:
    {"paths": "<serialized collection>"}

Useful for single-user desktop runs where the data should sit next to the
application rather than in the per-browser store.
"""

import json
import logging
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class JsonFileStore:
    """Local JSON file storage backend."""

    def __init__(self, file_path: Union[str, Path]):
        self.file_path = Path(file_path)

    @property
    def backend_type(self) -> str:
        return "file"

    @property
    def description(self) -> str:
        return str(self.file_path)

    def _load(self) -> Dict[str, str]:
        if not self.file_path.exists():
            return {}
        try:
            with open(self.file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (ValueError, OSError) as e:
            # ValueError covers bad JSON and bytes that are not UTF-8
            logger.warning(f"Failed to read store file {self.file_path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring store file {self.file_path}: root is not an object")
            return {}
        return data

    def _save(self, data: Dict[str, str]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        # Write a sibling file, then swap it in
        tmp_path = self.file_path.with_suffix(self.file_path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)
        tmp_path.replace(self.file_path)

    def get(self, key: str) -> Optional[str]:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = value
        self._save(data)
        logger.debug(f"Wrote key {key!r} to {self.file_path}")

    def delete(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)
