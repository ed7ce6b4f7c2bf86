# predictive_notes/storage/__init__.py
# key-value stores plus the note and preference records kept in them

from .kv_store import JsonFileStore, MemoryStore
from .notes import Note, NoteStore, derive_title, export_filename, new_note_id, sorted_notes
from .preferences import Preferences, load_preferences, set_preference, toggle_preference

__all__ = [
    "JsonFileStore",
    "MemoryStore",
    "Note",
    "NoteStore",
    "derive_title",
    "export_filename",
    "new_note_id",
    "sorted_notes",
    "Preferences",
    "load_preferences",
    "set_preference",
    "toggle_preference",
]
