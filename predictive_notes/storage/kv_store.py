# kv_store.py - key-value persistence for notes and preferences

# - JsonFileStore keeps every key in a single JSON document on disk
# - MemoryStore is the in-process variant used by tests and throwaway sessions
# - both raise StorageError; callers log it and carry on with defaults

from __future__ import annotations
import copy
import json
import os
import tempfile
from typing import Any, Dict

from predictive_notes.errors import StorageError
from predictive_notes.utils.logger_utils import Log


class MemoryStore:
    """Dict-backed store. Values are deep-copied in and out like a real store."""

    def __init__(self, initial: Dict[str, Any] = None):
        self._data: Dict[str, Any] = copy.deepcopy(initial or {})

    def load(self, key: str, default: Any = None) -> Any:
        if key not in self._data:
            return copy.deepcopy(default)
        return copy.deepcopy(self._data[key])

    def save(self, key: str, value: Any) -> bool:
        self._data[key] = copy.deepcopy(value)
        return True


class JsonFileStore:
    """
    Whole-file JSON store.
    Args:
        path: JSON file holding {key: value}. Created on first save.
    """

    def __init__(self, path: str):
        self.path = path

    def _read_all(self) -> Dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StorageError(f"cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StorageError(f"{self.path} does not hold a JSON object")
        return data

    def load(self, key: str, default: Any = None) -> Any:
        data = self._read_all()
        if key not in data:
            return copy.deepcopy(default)
        return data[key]

    def save(self, key: str, value: Any) -> bool:
        data = self._read_all()
        data[key] = value
        folder = os.path.dirname(os.path.abspath(self.path))
        tmp = None
        try:
            os.makedirs(folder, exist_ok=True)
            # write to a temp file then rename so a crash never truncates the store
            fd, tmp = tempfile.mkstemp(dir=folder, prefix=".store-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            os.replace(tmp, self.path)
        except (OSError, TypeError, ValueError) as e:
            if tmp and os.path.exists(tmp):
                os.remove(tmp)
            raise StorageError(f"cannot write {self.path}: {e}") from e
        Log.debug(f"[JsonFileStore] saved '{key}'")
        return True
