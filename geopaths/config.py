"""
Configuration management for GeoPaths.

Handles persistent configuration including:
- Storage backend selection (browser, file, memory)
- Initial map view (center and zoom)
- Server settings (port, storage secret, log level)

Config is stored in config.json in the project root, next to app.py.
Every setting can be overridden with a GEOPATHS_<NAME> environment variable
(a .env file is loaded by app.py on startup).
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Tuple

logger = logging.getLogger(__name__)

ENV_PREFIX = "GEOPATHS_"

# Seoul city hall, the view the editor opens on
DEFAULT_MAP_CENTER = (37.5642135, 127.0016985)

DEFAULTS = {
    "storage_backend": "browser",
    "storage_file": None,  # resolved lazily to db/paths_store.json
    "map_center": list(DEFAULT_MAP_CENTER),
    "map_zoom": 11,
    "port": 8081,
    "storage_secret": "geopaths_secret_key",
    "log_level": "INFO",
}

# config.json and db/ sit in the project root, beside app.py
PROJECT_DIR = Path(__file__).resolve().parent.parent


def get_config_path() -> Path:
    return PROJECT_DIR / "config.json"


def get_db_dir() -> Path:
    """Default home of the file storage backend."""
    return PROJECT_DIR / "db"


def load_config() -> dict:
    """Load configuration from config.json."""
    config_path = get_config_path()
    if config_path.exists():
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
                if isinstance(data, dict):
                    return data
                logger.warning(f"Ignoring {config_path}: expected a JSON object")
        except (ValueError, OSError) as e:
            logger.warning(f"Failed to load config from {config_path}: {e}")
    return {}


def save_config(config: dict) -> None:
    """Save configuration to config.json."""
    config_path = get_config_path()
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config, f, indent=2)


def get_setting(name: str, default: Any = None) -> Any:
    """
    Get a configuration value.

    Priority:
    1. Environment variable GEOPATHS_<NAME>
    2. Stored in config.json
    3. Built-in default
    """
    env_value = os.environ.get(f"{ENV_PREFIX}{name.upper()}")
    if env_value:
        return env_value

    config = load_config()
    if name in config:
        return config[name]

    if default is not None:
        return default
    return DEFAULTS.get(name)


def get_storage_backend() -> str:
    return str(get_setting("storage_backend")).strip().lower()


def get_storage_file() -> str:
    """Location of the JSON file used by the 'file' storage backend."""
    value = get_setting("storage_file")
    if value:
        return str(value)
    return str(get_db_dir() / "paths_store.json")


def get_map_center() -> Tuple[float, float]:
    """
    Initial map center as (lat, lng).

    Accepts a [lat, lng] list from config.json or a "lat,lng" string from the
    environment. Falls back to the default on anything unparseable.
    """
    value = get_setting("map_center")
    try:
        if isinstance(value, str):
            value = [part.strip() for part in value.split(",")]
        lat, lng = (float(v) for v in value)
    except (TypeError, ValueError) as e:
        logger.warning(f"Invalid map_center {value!r}, using default: {e}")
        return DEFAULT_MAP_CENTER
    if not (-90.0 <= lat <= 90.0 and -180.0 <= lng <= 180.0):
        logger.warning(f"map_center {value!r} out of range, using default")
        return DEFAULT_MAP_CENTER
    return lat, lng


def get_map_zoom() -> int:
    value = get_setting("map_zoom")
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid map_zoom {value!r}, using default")
        return DEFAULTS["map_zoom"]


def get_port() -> int:
    value = get_setting("port")
    try:
        return int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid port {value!r}, using default")
        return DEFAULTS["port"]


def get_storage_secret() -> str:
    return str(get_setting("storage_secret"))


LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


def get_log_level() -> str:
    value = str(get_setting("log_level")).strip().upper()
    if value not in LOG_LEVELS:
        logger.warning(f"Invalid log_level {value!r}, using default")
        return DEFAULTS["log_level"]
    return value


def set_setting(name: str, value: Optional[Any]) -> None:
    """Persist a single setting to config.json (None removes it)."""
    config = load_config()
    if value is None:
        config.pop(name, None)
    else:
        config[name] = value
    save_config(config)
