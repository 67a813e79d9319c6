"""Key/value storage backing the documentation store.

``MemoryStorage`` lives as long as the store (a session); ``JSONFileStorage``
writes every change to a JSON file so values survive restarts.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

logger = logging.getLogger(__name__)


class MemoryStorage:
    """Session-scoped storage."""

    def __init__(self):
        self._data: Dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def update(self, values: Dict[str, Any]) -> None:
        """Write several keys as one change."""
        self._data.update(values)

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def __contains__(self, key: str) -> bool:
        return key in self._data


class JSONFileStorage(MemoryStorage):
    """Storage persisted to a JSON file after every change."""

    def __init__(self, path: Union[str, Path]):
        super().__init__()
        self.path = Path(path)
        self._load()

    def _load(self) -> None:
        if not self.path.exists():
            return
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable store file {self.path}: {e}")
            return
        if isinstance(data, dict):
            self._data = data
        else:
            logger.warning(f"Ignoring store file {self.path}: expected a JSON object")

    def _commit(self, data: Dict[str, Any]) -> None:
        """Write ``data`` to disk, then make it the in-memory state.

        An ``OSError`` while writing leaves both the file and memory unchanged.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        tmp_path.replace(self.path)
        self._data = data

    def set(self, key: str, value: Any) -> None:
        self._commit({**self._data, key: value})

    def update(self, values: Dict[str, Any]) -> None:
        self._commit({**self._data, **values})

    def remove(self, key: str) -> None:
        data = dict(self._data)
        data.pop(key, None)
        self._commit(data)
