# editing_session.py
# Per-note editing context.
# One EditingSession is created for each open note and passed to every handler;
# it owns the preferences, the published model, the pending suggestion and the
# two debounce timers (model rebuild and note persistence).
# ----------------------------------------------------------------------

from __future__ import annotations
import random
from typing import Any, Dict, Optional

from predictive_notes.core.editing_assist import (
    Command,
    ContextMenu,
    EditingAssist,
    EditOutcome,
    Tab,
)
from predictive_notes.core.ngram_model import Model
from predictive_notes.core.predictor import PredictionPolicy
from predictive_notes.core.protocols import ComputeHost, KeyValueStore
from predictive_notes.core.text_buffer import TextBuffer
from predictive_notes.errors import StorageError
from predictive_notes.session.debounce import Debouncer, Scheduler
from predictive_notes.session.refresh import LocalComputeHost, ModelRefreshDriver
from predictive_notes.storage.notes import NOTES_KEY, Note, NoteStore, derive_title, new_note_id
from predictive_notes.storage.preferences import PREFERENCES_KEY, Preferences, load_preferences
from predictive_notes.utils.config_manager import DEFAULTS, Config
from predictive_notes.utils.logger_utils import Log

UNTITLED = "Untitled note"

# store keys other writers (the CLI, a second editor) may change under us
WATCHED_KEYS = (NOTES_KEY, PREFERENCES_KEY)


class EditingSession:
    """
    Context object threaded through every editor handler.

    Public API:
      load() -> TextBuffer
      on_input(buffer) -> suggestion string
      on_key(buffer, command) -> EditOutcome
      on_context_menu(buffer) -> EditOutcome
      on_storage_changed(changes, focused) -> Optional[Note]
      poll_storage(focused) -> Optional[Note]
      close(buffer)
    """

    def __init__(
        self,
        store: KeyValueStore,
        note_id: Optional[str] = None,
        config: Optional[Config] = None,
        host: Optional[ComputeHost] = None,
        scheduler: Optional[Scheduler] = None,
        rng: Optional[random.Random] = None,
    ):
        settings: Dict[str, Any] = dict(DEFAULTS)
        if config is not None:
            settings.update(config.data)

        self.store = store
        self.note_id = note_id or new_note_id()
        self.notes = NoteStore(store, title_max_length=int(settings["title_max_length"]))
        self.preferences = Preferences()
        self.policy = PredictionPolicy(settings["prediction_policy"])
        self.smoothing_k = float(settings["smoothing_k"])
        self.rng = rng or random.Random()
        self.assist = EditingAssist()
        self.driver = ModelRefreshDriver(host or LocalComputeHost(int(settings["ngram_order"])))
        self.suggestion = ""
        self.title = UNTITLED
        self._seen: Dict[str, Any] = {}

        delay = max(0.0, float(settings["debounce_ms"])) / 1000.0
        self.model_timer = Debouncer(delay, self.driver.refresh, scheduler, name="model")
        self.save_timer = Debouncer(delay, self.persist, scheduler, name="persist")

    # Lifecycle -----------------------------------------------------------
    @property
    def model(self) -> Optional[Model]:
        return self.driver.model

    def load(self) -> TextBuffer:
        """Load preferences and this session's note; storage errors fall back to defaults."""
        self.preferences = load_preferences(self.store)
        note = self.notes.find(self.note_id)
        if note is None:
            self.title = UNTITLED
            buffer = TextBuffer()
        else:
            self.title = note.title or UNTITLED
            buffer = TextBuffer.at(note.text, note.caret)
        self._seen = self.storage_snapshot()
        Log.info(f"[Session] opened note {self.note_id} ({len(buffer.text)} chars)")
        self.model_timer.trigger(buffer.text)
        return buffer

    def close(self, buffer: Optional[TextBuffer] = None) -> None:
        """Cancel both timers; persist the final buffer when one is given."""
        self.model_timer.cancel()
        self.save_timer.cancel()
        if buffer is not None:
            self.persist(buffer.text, buffer.caret)

    # Handlers --------------------------------------------------------------
    def on_input(self, buffer: TextBuffer) -> str:
        """Called after every text change: recompute the suggestion, restart both timers."""
        self.suggestion = self.assist.suggest(
            buffer, self.model, self.preferences.flags, self.policy, self.rng, self.smoothing_k
        )
        self.model_timer.trigger(buffer.text)
        self.save_timer.trigger(buffer.text, buffer.caret)
        return self.suggestion

    def on_key(self, buffer: TextBuffer, command: Command) -> EditOutcome:
        outcome = self.assist.handle(buffer, command, self.suggestion, self.preferences.flags)
        if outcome.handled and isinstance(command, Tab):
            # accepted, or a tab was typed; either way the old suggestion is spent
            self.suggestion = ""
        return outcome

    def on_context_menu(self, buffer: TextBuffer) -> EditOutcome:
        return self.on_key(buffer, ContextMenu())

    # Persistence ---------------------------------------------------------
    def persist(self, text: str, caret: int) -> Optional[Note]:
        try:
            note = self.notes.upsert(self.note_id, text, caret)
        except StorageError as e:
            Log.error(f"[Session] save of note {self.note_id} dropped: {e}")
            return None
        self._seen[NOTES_KEY] = self.storage_snapshot()[NOTES_KEY]
        self.title = (note.title if text else "") or UNTITLED
        return note

    def reload_preferences(self) -> Preferences:
        self.preferences = load_preferences(self.store)
        if not self.preferences.predictive:
            self.suggestion = ""
        return self.preferences

    def storage_snapshot(self) -> Dict[str, Any]:
        """Current stored value of every watched key; unreadable keys keep the last value seen."""
        snapshot = {}
        for key in WATCHED_KEYS:
            try:
                snapshot[key] = self.store.load(key)
            except StorageError as e:
                Log.warning(f"[Session] cannot read '{key}' for change sync: {e}")
                snapshot[key] = self._seen.get(key)
        return snapshot

    def poll_storage(self, focused: bool = True) -> Optional[Note]:
        """
        Diff the watched keys against the last snapshot and feed any
        differences to on_storage_changed. Writes made by persist() are
        already in the snapshot, so only other writers show up here.
        """
        current = self.storage_snapshot()
        changes = {
            key: {"old": self._seen.get(key), "new": value}
            for key, value in current.items()
            if value != self._seen.get(key)
        }
        self._seen = current
        if not changes:
            return None
        Log.debug(f"[Session] external change to {', '.join(changes)}")
        return self.on_storage_changed(changes, focused)

    def on_storage_changed(self, changes: Dict[str, Any], focused: bool = True) -> Optional[Note]:
        """
        React to writes made by another surface.
        changes: {key: {"old": value, "new": value}}
        Returns this session's note when its text changed while the editor was unfocused.
        """
        if PREFERENCES_KEY in changes:
            self.reload_preferences()

        if NOTES_KEY not in changes or focused:
            return None
        change = changes[NOTES_KEY] or {}
        new = {n.get("id"): n for n in change.get("new") or [] if isinstance(n, dict)}
        old = {n.get("id"): n for n in change.get("old") or [] if isinstance(n, dict)}
        raw = new.get(self.note_id)
        if raw is None:
            return None
        previous = old.get(self.note_id)
        if previous is not None and previous.get("text") == raw.get("text"):
            return None
        note = Note.from_dict(raw)
        self.title = note.title or derive_title(note.text) or UNTITLED
        return note
