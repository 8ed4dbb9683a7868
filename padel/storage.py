"""Key-value storage adapters.

The tracker persists each top-level collection as one serialized string under
its own key. Adapters never raise: a failed read returns None and a failed
write returns False, after logging a warning.
"""

import logging
import re
from pathlib import Path
from typing import Optional, Protocol

from .utils import write_text_atomic

logger = logging.getLogger('padel.storage')


class Storage(Protocol):
    """String key -> string value store."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> bool:
        ...


class MemoryStorage:
    """Dict-backed storage, for tests and scripting."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.values: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True


class JsonFileStorage:
    """
    One file per key inside a data directory.

    Key 'padel:players' is stored as <data_dir>/padel_players.json. Writes
    replace the file atomically, so a failed write leaves the previous
    collection intact.
    """

    def __init__(self, data_dir: Path | str):
        self.data_dir = Path(data_dir)

    def path_for(self, key: str) -> Path:
        """File path backing a key."""
        safe = re.sub(r'[^A-Za-z0-9_-]+', '_', key)
        return self.data_dir / f'{safe}.json'

    def get(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        if not path.exists():
            logger.debug(f'No stored value for {key} ({path})')
            return None
        try:
            return path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f'Failed to read {key} from {path}: {e}')
            return None

    def set(self, key: str, value: str) -> bool:
        path = self.path_for(key)
        try:
            write_text_atomic(path, value)
        except OSError as e:
            logger.warning(f'Failed to save {key} to {path}: {e}')
            return False
        logger.debug(f'Saved {key} to {path}')
        return True
