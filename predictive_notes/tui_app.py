# tui_app.py - Predictive Notes editor
# -------------------------------------------------------
# Terminal note editor wrapping an EditingSession.
# Features:
#  - next-word suggestion drawn right after the caret, TAB accepts it
#  - bracket/quote auto-closure and list continuation on Enter
#  - right click on a URL selects it
#  - debounced autosave and model rebuilds (never block typing)
#  - picks up preference and note changes written by other processes
# -------------------------------------------------------

from __future__ import annotations
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header, Static, TextArea
from textual.widgets.text_area import Selection

from predictive_notes.core.closure import TRIGGER_CHARS
from predictive_notes.core.editing_assist import Command, Enter, Tab, TypeChar
from predictive_notes.core.text_buffer import TextBuffer, caret_location, offset_of
from predictive_notes.session.editing_session import EditingSession
from predictive_notes.storage.kv_store import JsonFileStore
from predictive_notes.utils.config_manager import Config
from predictive_notes.utils.logger_utils import Log

RIGHT_BUTTON = 3
# how often the store is checked for writes made by the CLI or another editor
STORAGE_POLL_SECONDS = 1.0


def command_for_key(key: str, character: Optional[str]) -> Optional[Command]:
    """Map a Textual key event onto an editing command (None = not ours)."""
    if key == "tab":
        return Tab()
    if key == "shift+tab":
        return Tab(shift=True)
    if key == "enter":
        return Enter()
    if character and character in TRIGGER_CHARS:
        return TypeChar(character)
    return None


class NoteEditor(TextArea):
    """
    TextArea that offers each key to the EditingSession first.
    Handled keys are applied here and the default TextArea handling is skipped.
    """

    def __init__(self, session: EditingSession, text: str = "", **kwargs):
        super().__init__(text, **kwargs)
        self.session = session

    def snapshot(self) -> TextBuffer:
        text = self.text
        start = offset_of(text, *self.selection.start)
        end = offset_of(text, *self.selection.end)
        return TextBuffer(text, start, end)

    def apply(self, buffer: TextBuffer) -> None:
        if buffer.text != self.text:
            self.replace(buffer.text, (0, 0), self.document.end)
        self.selection = Selection(
            caret_location(buffer.text, buffer.selection_start),
            caret_location(buffer.text, buffer.selection_end),
        )

    def _on_key(self, event: events.Key) -> None:
        command = command_for_key(event.key, event.character)
        if command is None:
            return
        outcome = self.session.on_key(self.snapshot(), command)
        if not outcome.handled:
            return
        event.prevent_default()
        event.stop()
        self.apply(outcome.buffer)

    def on_click(self, event: events.Click) -> None:
        if event.button != RIGHT_BUTTON:
            return
        outcome = self.session.on_context_menu(self.snapshot())
        if outcome.handled:
            self.apply(outcome.buffer)


class PredictionLabel(Static):
    """Greyed-out suggestion text floating next to the caret."""

    def show(self, suggestion: str) -> None:
        self.update(suggestion)
        self.display = bool(suggestion)


# Main Application -----------------------------------------------------------------
class NotesApp(App):
    """
    Architecture:
     - key events -> NoteEditor -> EditingSession (closure/list/tab)
     - TextArea.Changed -> session.on_input (suggestion + debounced rebuild/save)
     - suggestion -> PredictionLabel positioned from the cursor
    """
    CSS_PATH = "tui_style.css"
    TITLE = "Predictive Notes"

    BINDINGS = [
        ("ctrl+s", "save_note", "Save"),
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(self, session: EditingSession):
        super().__init__()
        self.session = session
        self._editor: Optional[NoteEditor] = None

    def compose(self) -> ComposeResult:
        yield Header()
        self._editor = NoteEditor(self.session, id="editor", tab_behavior="indent")
        yield self._editor
        yield PredictionLabel("", id="prediction")
        yield Footer()

    def on_mount(self) -> None:
        # load inside the running loop so the debounce timers can schedule
        buffer = self.session.load()
        self.editor.apply(buffer)
        self.editor.focus()
        self.query_one(PredictionLabel).show("")
        self.sub_title = self.session.title
        self.set_interval(STORAGE_POLL_SECONDS, self.sync_storage)

    @property
    def editor(self) -> NoteEditor:
        return self._editor

    def on_text_area_changed(self, event: TextArea.Changed) -> None:
        suggestion = self.session.on_input(self.editor.snapshot())
        self.query_one(PredictionLabel).show(suggestion)
        self._position_prediction()
        self.sub_title = self.session.title

    def on_resize(self, event: events.Resize) -> None:
        if self.session.suggestion:
            self._position_prediction()

    def _position_prediction(self) -> None:
        if not self.session.suggestion:
            return
        x, y = self.editor.cursor_screen_offset
        self.query_one(PredictionLabel).styles.offset = (x, y)

    def sync_storage(self) -> None:
        """Apply preference changes, and note edits made elsewhere while unfocused."""
        note = self.session.poll_storage(focused=self.editor.has_focus)
        if note is not None and note.text != self.editor.text:
            self.editor.apply(TextBuffer.at(note.text, note.caret))
        if not self.session.suggestion:
            self.query_one(PredictionLabel).show("")
        self.sub_title = self.session.title

    # Actions ----------------------------------------------------------------------
    def action_save_note(self) -> None:
        snap = self.editor.snapshot()
        self.session.save_timer.cancel()
        if self.session.persist(snap.text, snap.caret) is not None:
            self.notify("Saved")
        else:
            self.notify("Save failed, see log", severity="error")

    def on_unmount(self) -> None:
        if self._editor is not None:
            self.session.close(self._editor.snapshot())


def run_editor(note_id: Optional[str] = None, config: Optional[Config] = None) -> None:
    """Open a note (or a fresh one) in the terminal editor."""
    cfg = config or Config()
    Log.configure(path=cfg["log_path"], echo=False)
    store = JsonFileStore(cfg["store_path"])
    session = EditingSession(store, note_id=note_id, config=cfg)
    NotesApp(session).run()


if __name__ == "__main__":
    run_editor()
