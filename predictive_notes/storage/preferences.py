# preferences.py
# User preference flags, stored under the "preferences" key as
#   {name: {"type": "checkbox" | "select", "status": value}}

from __future__ import annotations
import copy
from dataclasses import dataclass, replace
from typing import Any, Dict

from predictive_notes.core.editing_assist import AssistFlags
from predictive_notes.core.protocols import KeyValueStore
from predictive_notes.errors import StorageError
from predictive_notes.utils.logger_utils import Log

PREFERENCES_KEY = "preferences"

SORT_ORDERS = ("modified", "created", "title")

PREFERENCE_DEFAULTS: Dict[str, Dict[str, Any]] = {
    "spellcheck": {"type": "checkbox", "status": False},
    "autoClosure": {"type": "checkbox", "status": True},
    "autoList": {"type": "checkbox", "status": True},
    "predictive": {"type": "checkbox", "status": True},
    "sorting": {"type": "select", "status": "modified"},
}

# kept and shown for other surfaces; the terminal editor has no spell checker
STORED_ONLY = frozenset({"spellcheck"})

# stored name -> Preferences attribute
_FIELDS = {
    "spellcheck": "spellcheck",
    "autoClosure": "auto_closure",
    "autoList": "auto_list",
    "predictive": "predictive",
    "sorting": "sorting",
}


@dataclass(frozen=True)
class Preferences:
    spellcheck: bool = False
    auto_closure: bool = True
    auto_list: bool = True
    predictive: bool = True
    sorting: str = "modified"

    @classmethod
    def from_stored(cls, stored: Any) -> "Preferences":
        """Read the stored mapping; missing or malformed entries keep their default."""
        prefs = cls()
        if not isinstance(stored, dict):
            return prefs
        values = {}
        for name, attr in _FIELDS.items():
            entry = stored.get(name)
            if not isinstance(entry, dict) or "status" not in entry:
                continue
            status = entry["status"]
            if attr == "sorting":
                if status in SORT_ORDERS:
                    values[attr] = status
            elif isinstance(status, bool):
                values[attr] = status
        return replace(prefs, **values)

    def to_stored(self) -> Dict[str, Dict[str, Any]]:
        stored = copy.deepcopy(PREFERENCE_DEFAULTS)
        for name, attr in _FIELDS.items():
            stored[name]["status"] = getattr(self, attr)
        return stored

    @property
    def flags(self) -> AssistFlags:
        return AssistFlags(
            predictive=self.predictive,
            auto_closure=self.auto_closure,
            auto_list=self.auto_list,
        )


def load_preferences(store: KeyValueStore) -> Preferences:
    """Load preferences; a failing store yields the defaults."""
    try:
        stored = store.load(PREFERENCES_KEY, copy.deepcopy(PREFERENCE_DEFAULTS))
    except StorageError as e:
        Log.error(f"[Preferences] load failed, using defaults: {e}")
        return Preferences()
    return Preferences.from_stored(stored)


def set_preference(store: KeyValueStore, name: str, value: Any) -> Preferences:
    """
    Update one stored preference and persist it.
    Raises KeyError for unknown names, ValueError for bad values and
    StorageError when the store rejects the save.
    """
    if name not in _FIELDS:
        raise KeyError(name)
    kind = PREFERENCE_DEFAULTS[name]["type"]
    if kind == "checkbox":
        if isinstance(value, str):
            value = value.strip().lower() in ("1", "true", "yes", "on")
        value = bool(value)
    elif value not in SORT_ORDERS:
        raise ValueError(f"sorting must be one of {', '.join(SORT_ORDERS)}")

    prefs = replace(load_preferences(store), **{_FIELDS[name]: value})
    store.save(PREFERENCES_KEY, prefs.to_stored())
    Log.info(f"[Preferences] {name} = {value}")
    return prefs


def toggle_preference(store: KeyValueStore, name: str) -> Preferences:
    if PREFERENCE_DEFAULTS.get(name, {}).get("type") != "checkbox":
        raise KeyError(name)
    current = getattr(load_preferences(store), _FIELDS[name])
    return set_preference(store, name, not current)
