"""Tracker configuration management."""

import os
from functools import lru_cache
from pathlib import Path

from .schemas import TrackerConfig
from .utils import load_json_safe

CONFIG_FILE = 'tracker_config.json'
DATA_DIR_ENV = 'PADEL_DATA_DIR'


def default_data_dir() -> Path:
    """Data directory from $PADEL_DATA_DIR, or ./data."""
    return Path(os.environ.get(DATA_DIR_ENV, 'data'))


@lru_cache(maxsize=4)
def get_config(data_dir: Path | None = None) -> TrackerConfig:
    """
    Load tracker configuration from <data_dir>/tracker_config.json.

    A missing or invalid file gives the default configuration. The data
    directory itself is chosen by the caller, never by the file.

    Configuration is cached after first load.

    Returns:
        TrackerConfig object with validated settings

    Example:
        from padel.config import get_config
        config = get_config()
        print(f"Exports go to: {config.export_dir}")
    """
    data_dir = Path(data_dir) if data_dir is not None else default_data_dir()
    config = load_json_safe(data_dir / CONFIG_FILE, default=None, schema=TrackerConfig)
    if config is None:
        config = TrackerConfig()
    return config


def clear_config_cache() -> None:
    """
    Clear the configuration cache.

    Use this if the config file is modified during runtime
    and you need to reload it.
    """
    get_config.cache_clear()
