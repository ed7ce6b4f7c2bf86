# notes.py
# Note records kept under the "notes" key of a KeyValueStore.
# Newest notes are kept at the front of the stored list.

from __future__ import annotations
import re
import uuid
from dataclasses import asdict, dataclass, replace
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from predictive_notes.core.protocols import KeyValueStore
from predictive_notes.errors import StorageError
from predictive_notes.utils.logger_utils import Log

NOTES_KEY = "notes"
TITLE_MAX_LENGTH = 75


def new_note_id() -> str:
    return uuid.uuid4().hex


def now_iso() -> str:
    return datetime.now().isoformat(timespec="seconds")


def derive_title(text: str, limit: int = TITLE_MAX_LENGTH) -> str:
    """First line of the trimmed text, cut to `limit` chars and right-trimmed."""
    first = text.strip().split("\n")[0]
    return first[:limit].rstrip()


def _as_caret(value) -> int:
    """Stored caret offset; anything unusable becomes 0."""
    try:
        return max(0, int(value or 0))
    except (TypeError, ValueError):
        return 0


@dataclass(frozen=True)
class Note:
    id: str
    title: str
    created: str
    modified: str
    text: str = ""
    caret: int = 0

    @classmethod
    def from_dict(cls, raw: dict) -> "Note":
        return cls(
            id=str(raw.get("id", "")),
            title=str(raw.get("title", "")),
            created=str(raw.get("created", "")),
            modified=str(raw.get("modified", raw.get("created", ""))),
            text=str(raw.get("text", "")),
            caret=_as_caret(raw.get("caret")),
        )

    def to_dict(self) -> dict:
        return asdict(self)


def _parse_time(value: str) -> datetime:
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return datetime.min


def sorted_notes(notes: Iterable[Note], by: str = "modified") -> List[Note]:
    """title: A-Z ignoring case; modified/created: newest first."""
    notes = list(notes)
    if by == "title":
        return sorted(notes, key=lambda n: n.title.upper())
    if by in ("modified", "created"):
        return sorted(notes, key=lambda n: _parse_time(getattr(n, by)), reverse=True)
    raise ValueError(f"unknown sort order: {by}")


def export_filename(note: Note) -> str:
    """e.g. 'Shopping_list_03_14_2024' for a note created on 2024-03-14."""
    title = re.sub(r"\s+", "_", note.title) or "Untitled"
    created = _parse_time(note.created)
    if created == datetime.min:
        return title
    return f"{title}_{created.strftime('%m_%d_%Y')}"


class NoteStore:
    """
    CRUD over the stored note list.
    Public API:
      all(), find(id), upsert(id, text, caret), create(text, source_url),
      delete(id), purge_empty(), search(query)
    Reads swallow StorageError (logged, empty list); writes raise it.
    """

    def __init__(
        self,
        store: KeyValueStore,
        title_max_length: int = TITLE_MAX_LENGTH,
        clock: Callable[[], str] = now_iso,
    ):
        self.store = store
        self.title_max_length = title_max_length
        self._clock = clock

    # Reading ---------------------------------------------------------------
    def all(self) -> List[Note]:
        try:
            raw = self.store.load(NOTES_KEY, [])
        except StorageError as e:
            Log.error(f"[NoteStore] load failed: {e}")
            return []
        if not isinstance(raw, list):
            Log.warning("[NoteStore] stored notes are not a list; ignoring")
            return []
        return [Note.from_dict(n) for n in raw if isinstance(n, dict)]

    def find(self, note_id: Optional[str]) -> Optional[Note]:
        if not note_id:
            return None
        return next((n for n in self.all() if n.id == note_id), None)

    def search(self, query: str) -> List[Note]:
        q = query.lower()
        return [n for n in self.all() if q in n.text.lower()]

    # Writing ---------------------------------------------------------------
    def _write(self, notes: List[Note]) -> None:
        self.store.save(NOTES_KEY, [n.to_dict() for n in notes])

    def upsert(self, note_id: str, text: str, caret: int) -> Note:
        """Update text/caret/title of an existing note or add it at the front."""
        notes = self.all()
        stamp = self._clock()
        title = derive_title(text, self.title_max_length)

        for i, existing in enumerate(notes):
            if existing.id == note_id:
                note = replace(existing, text=text, caret=caret, modified=stamp, title=title)
                notes[i] = note
                break
        else:
            note = Note(id=note_id, title=title, created=stamp, modified=stamp,
                        text=text, caret=caret)
            notes.insert(0, note)

        self._write(notes)
        return note

    def create(self, text: str, source_url: Optional[str] = None) -> Optional[Note]:
        """New note from a text selection; the source page is appended when known."""
        if not text:
            return None
        if source_url:
            text += f"\n\n— {source_url}"
        note = self.upsert(new_note_id(), text, len(text))
        Log.info(f"[NoteStore] created note {note.id}")
        return note

    def delete(self, note_id: str) -> bool:
        notes = self.all()
        kept = [n for n in notes if n.id != note_id]
        if len(kept) == len(notes):
            return False
        self._write(kept)
        Log.info(f"[NoteStore] deleted note {note_id}")
        return True

    def purge_empty(self) -> int:
        """Drop notes whose text is only whitespace; returns how many went."""
        notes = self.all()
        kept = [n for n in notes if n.text.strip()]
        removed = len(notes) - len(kept)
        if removed:
            self._write(kept)
        return removed
