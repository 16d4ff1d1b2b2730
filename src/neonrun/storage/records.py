"""
Persistent high-water marks.

The game reads best score and best distance once at startup and writes
them only when a run beats them. A missing or damaged store reads as 0.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional
import json
import logging

logger = logging.getLogger(__name__)

HIGH_SCORE_KEY = "highScore"
HIGH_DISTANCE_KEY = "highDistance"


class RecordStore(ABC):
    """Integer key-value store."""

    @abstractmethod
    def get(self, key: str) -> Optional[int]:
        """Stored value, or None when absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: int) -> None:
        ...


def read_record(store: RecordStore, key: str) -> int:
    """Read a record, treating absent or negative values as 0."""
    value = store.get(key)
    if value is None or value < 0:
        return 0
    return value


def _coerce(key: str, raw: object) -> Optional[int]:
    # bool is an int subclass; a stored true/false is not a record
    if isinstance(raw, bool):
        raw = None
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float) and raw.is_integer():
        return int(raw)
    if isinstance(raw, str):
        try:
            return int(raw)
        except ValueError:
            pass
    if raw is not None:
        logger.warning(f"Ignoring non-integer record {key}={raw!r}")
    return None


class MemoryRecordStore(RecordStore):
    """In-process store, used for tests and throwaway sessions."""

    def __init__(self, initial: Optional[Dict[str, int]] = None) -> None:
        self._values: Dict[str, int] = dict(initial or {})

    def get(self, key: str) -> Optional[int]:
        return self._values.get(key)

    def set(self, key: str, value: int) -> None:
        self._values[key] = int(value)

    def as_dict(self) -> Dict[str, int]:
        return dict(self._values)


class JsonRecordStore(RecordStore):
    """Records kept in a small JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._values: Dict[str, object] = {}
        self._load()

    def _load(self) -> None:
        """Load data from file."""
        if not self.path.exists():
            logger.info(f"No records yet at {self.path}")
            return

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to load records from {self.path}: {e}")
            return

        if not isinstance(data, dict):
            logger.warning(f"Ignoring records file {self.path}: expected an object")
            return

        self._values = data
        logger.info(f"Loaded {len(self._values)} records")

    def _save(self) -> None:
        """Save data to file."""
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(self._values, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save records: {e}")

    def get(self, key: str) -> Optional[int]:
        return _coerce(key, self._values.get(key))

    def set(self, key: str, value: int) -> None:
        self._values[key] = int(value)
        self._save()
