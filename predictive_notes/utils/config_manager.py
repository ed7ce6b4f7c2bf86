# config_manager.py - JSON config manager

import json
import os
from typing import Any, Dict, Optional

from predictive_notes.errors import ConfigError
from predictive_notes.utils.logger_utils import Log

DEFAULTS: Dict[str, Any] = {
    "debounce_ms": 500,  # quiet period before rebuild/persist
    "ngram_order": 2,
    "prediction_policy": "max_frequency",
    "smoothing_k": 1.0,  # laplace constant
    "title_max_length": 75,
    "store_path": os.path.join("data", "notes_store.json"),
    "log_path": os.path.join("logs", "predictive_notes.log"),
}

POLICIES = ("max_frequency", "laplace")


class Config:
    def __init__(self, path: str = "config.json", autosave: bool = True):
        self.path = path
        self.autosave = autosave
        self.data: Dict[str, Any] = dict(DEFAULTS)
        self._load()

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    stored = json.load(f)
            except (OSError, ValueError) as e:
                Log.warning(f"[Config] unreadable {self.path}, using defaults: {e}")
                return
            if not isinstance(stored, dict):
                Log.warning(f"[Config] {self.path} is not a JSON object, using defaults")
                return
            for k, v in stored.items():
                if k not in self.data:
                    continue
                try:
                    self.data[k] = self._coerce(k, v)
                except ConfigError as e:
                    Log.warning(f"[Config] {e}; keeping default {DEFAULTS[k]!r}")
        elif self.autosave:
            self.save()

    def save(self):
        folder = os.path.dirname(self.path)
        if folder:
            os.makedirs(folder, exist_ok=True)
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key: str, default: Optional[Any] = None) -> Any:
        return self.data.get(key, default)

    def __getitem__(self, key: str) -> Any:
        return self.data[key]

    @staticmethod
    def _coerce(key: str, val: Any) -> Any:
        """Convert val to the type of the default; ConfigError when it can't be."""
        kind = type(DEFAULTS[key])
        try:
            if kind is bool and isinstance(val, str):
                val = val.strip().lower() in ("1", "true", "yes", "on")
            else:
                val = kind(val)
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Bad value for {key}: {val!r}") from e
        if key == "prediction_policy" and val not in POLICIES:
            raise ConfigError(f"prediction_policy must be one of {', '.join(POLICIES)}")
        if key == "ngram_order" and val != 2:
            raise ConfigError("ngram_order: only bigram models (2) are supported")
        return val

    def set(self, key: str, val: Any) -> None:
        if key not in self.data:
            raise ConfigError(f"No such option: {key}")
        self.data[key] = self._coerce(key, val)
        if self.autosave:
            self.save()

    def show(self):
        for k, v in self.data.items():
            print(f"{k:18} = {v}")
