# closure.py
# Bracket and quote auto-closure.

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Tuple

from predictive_notes.core.text_buffer import TextBuffer
from predictive_notes.core.tokenizer import has_word_char

BRACKET = "bracket"
QUOTE = "quote"


@dataclass(frozen=True)
class Pair:
    open: str
    close: str
    kind: str


PAIRS: Tuple[Pair, ...] = (
    Pair("(", ")", BRACKET),
    Pair("{", "}", BRACKET),
    Pair("[", "]", BRACKET),
    Pair("«", "»", BRACKET),
    Pair("‹", "›", BRACKET),
    Pair("'", "'", QUOTE),
    Pair("`", "`", QUOTE),
    Pair('"', '"', QUOTE),
)

TRIGGER_CHARS = frozenset(p.open for p in PAIRS) | frozenset(p.close for p in PAIRS)


def find_open(char: str) -> Optional[Pair]:
    return next((p for p in PAIRS if p.open == char), None)


def find_close(char: str) -> Optional[Pair]:
    """Bracket whose closing char is `char`. Quotes open and close with the same
    char, so typing one always goes through the open path."""
    return next((p for p in PAIRS if p.kind == BRACKET and p.close == char), None)


def _has_unmatched_open(line: str, pair: Pair) -> bool:
    return line.count(pair.open) > line.count(pair.close)


def handle_auto_closure(buffer: TextBuffer, char: str) -> Optional[TextBuffer]:
    """
    Return the edited buffer, or None when the key should insert normally.
    """
    opener = find_open(char)
    closer = find_close(char)

    if opener is not None:
        if (
            opener.kind == QUOTE
            and not buffer.has_selection
            and buffer.next_char != opener.close
            and (has_word_char(buffer.prev_char) or has_word_char(buffer.next_char))
        ):
            # caret touching a word, e.g. the apostrophe in "don't"
            return None

        if buffer.has_selection:
            return buffer.insert(opener.open, buffer.selected_text, opener.close).move_caret(-1)
        if buffer.next_char == opener.close:
            return buffer.move_caret(1)
        return buffer.insert(opener.open, opener.close).move_caret(-1)

    if closer is not None:
        if (
            not buffer.has_selection
            and buffer.next_char == closer.close
            and _has_unmatched_open(buffer.line_before_caret(), closer)
        ):
            return buffer.move_caret(1)

    return None
