# editing_assist.py
# Keystroke state machine for the note editor.
#
# The editor turns raw key events into one of a closed set of commands
# (Tab, TypeChar, Enter, ContextMenu). EditingAssist.handle matches on the
# command and returns an EditOutcome; handled=False means the surface
# should run its default key behaviour.
# The only state carried between keystrokes is the pending suggestion
# string and the preference flags, both passed in by the session.
# ---------------------------------------------------------------------

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import urlsplit

from predictive_notes.core.auto_list import handle_enter
from predictive_notes.core.closure import TRIGGER_CHARS, handle_auto_closure
from predictive_notes.core.ngram_model import Model
from predictive_notes.core.predictor import SMOOTHING_K, PredictionPolicy, predict
from predictive_notes.core.text_buffer import TextBuffer


# Commands ----------------------------------------------------------------
@dataclass(frozen=True)
class Tab:
    shift: bool = False


@dataclass(frozen=True)
class TypeChar:
    char: str


@dataclass(frozen=True)
class Enter:
    pass


@dataclass(frozen=True)
class ContextMenu:
    pass


Command = Union[Tab, TypeChar, Enter, ContextMenu]


@dataclass(frozen=True)
class AssistFlags:
    """Preference switches that gate which handlers run."""
    predictive: bool = True
    auto_closure: bool = True
    auto_list: bool = True


@dataclass(frozen=True)
class EditOutcome:
    buffer: TextBuffer
    handled: bool


def is_valid_url(s: str) -> bool:
    """Absolute URL check: a scheme plus a host or a path."""
    if not s or any(ch.isspace() for ch in s):
        return False
    try:
        parts = urlsplit(s)
    except ValueError:
        return False
    if not parts.scheme or not parts.scheme[0].isalpha():
        return False
    return bool(parts.netloc or parts.path)


class EditingAssist:
    """
    Stateless dispatcher over editing commands.

    Public API:
      handle(buffer, command, suggestion="", flags=AssistFlags()) -> EditOutcome
      suggest(buffer, model, flags, policy, rng) -> str
    """

    def handle(
        self,
        buffer: TextBuffer,
        command: Command,
        suggestion: str = "",
        flags: AssistFlags = AssistFlags(),
    ) -> EditOutcome:
        match command:
            case Tab(shift=shift):
                return EditOutcome(self._tab(buffer, shift, suggestion), True)
            case TypeChar(char=char) if flags.auto_closure and char in TRIGGER_CHARS:
                return self._result(buffer, handle_auto_closure(buffer, char))
            case TypeChar():
                return EditOutcome(buffer, False)
            case Enter() if flags.auto_list:
                return self._result(buffer, handle_enter(buffer))
            case Enter():
                return EditOutcome(buffer, False)
            case ContextMenu():
                return self._context_menu(buffer)
            case _:
                raise TypeError(f"unknown editing command: {command!r}")

    @staticmethod
    def _result(buffer: TextBuffer, edited: Optional[TextBuffer]) -> EditOutcome:
        if edited is None:
            return EditOutcome(buffer, False)
        return EditOutcome(edited, True)

    # Tab ------------------------------------------------------------------
    @staticmethod
    def _tab(buffer: TextBuffer, shift: bool, suggestion: str) -> TextBuffer:
        if suggestion:
            return buffer.insert(suggestion)
        if shift:
            if buffer.prev_char == "\t":
                return buffer.delete_backward(1)
            return buffer
        return buffer.insert("\t")

    # Context menu ---------------------------------------------------------
    @staticmethod
    def _context_menu(buffer: TextBuffer) -> EditOutcome:
        if buffer.has_selection:
            return EditOutcome(buffer, False)
        span = buffer.current_word()
        if not is_valid_url(span.word):
            return EditOutcome(buffer, False)
        return EditOutcome(buffer.select(span.start, span.end), True)

    # Predictive suggestion -----------------------------------------------
    @staticmethod
    def suggest(
        buffer: TextBuffer,
        model: Optional[Model],
        flags: AssistFlags = AssistFlags(),
        policy: PredictionPolicy = PredictionPolicy.MAX_FREQUENCY,
        rng: Optional[random.Random] = None,
        k: float = SMOOTHING_K,
    ) -> str:
        """
        Text to show after the caret, e.g. " cat", or "" for no suggestion.
        Only offered when the caret sits at the end of its line.
        """
        if not flags.predictive or not model:
            return ""
        if buffer.has_selection or not buffer.is_caret_at_end_of_line():
            return ""
        found = predict(buffer.current_word().word, model, policy=policy, rng=rng, k=k)
        if not found:
            return ""
        return f" {found[0].word}"
