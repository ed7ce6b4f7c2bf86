# text_buffer.py
# Immutable text + selection snapshot used by the editing assist.
# Every edit returns a new TextBuffer; offsets are always clamped to the text.

from __future__ import annotations
from dataclasses import dataclass, replace
from typing import NamedTuple, Tuple


class WordSpan(NamedTuple):
    """Non-whitespace run around the caret: text[start:end] == word."""
    start: int
    end: int
    word: str


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


@dataclass(frozen=True)
class TextBuffer:
    text: str = ""
    selection_start: int = 0
    selection_end: int = 0

    def __post_init__(self):
        # out-of-range geometry is clamped, never raised
        size = len(self.text)
        start = _clamp(int(self.selection_start), 0, size)
        end = _clamp(int(self.selection_end), 0, size)
        if end < start:
            start, end = end, start
        object.__setattr__(self, "selection_start", start)
        object.__setattr__(self, "selection_end", end)

    @classmethod
    def at(cls, text: str, caret: int) -> "TextBuffer":
        return cls(text, caret, caret)

    # Queries ----------------------------------------------------------------
    @property
    def caret(self) -> int:
        return self.selection_end

    @property
    def has_selection(self) -> bool:
        return self.selection_start != self.selection_end

    @property
    def selected_text(self) -> str:
        return self.text[self.selection_start:self.selection_end]

    @property
    def next_char(self) -> str:
        return self.text[self.selection_end:self.selection_end + 1]

    @property
    def prev_char(self) -> str:
        if self.selection_start == 0:
            return ""
        return self.text[self.selection_start - 1]

    def line_bounds(self) -> Tuple[int, int]:
        """Start and end offsets of the line holding the selection start."""
        start = self.text.rfind("\n", 0, self.selection_start) + 1
        end = self.text.find("\n", self.selection_start)
        if end == -1:
            end = len(self.text)
        return start, end

    def current_line(self) -> str:
        start, end = self.line_bounds()
        return self.text[start:end]

    def line_before_caret(self) -> str:
        start, _ = self.line_bounds()
        return self.text[start:self.selection_start]

    def is_caret_at_end_of_line(self) -> bool:
        _, end = self.line_bounds()
        return self.selection_start == end

    def current_word(self) -> WordSpan:
        """
        Scan left from the selection start and right from the selection end
        across non-whitespace characters.
        """
        start = self.selection_start
        while start > 0 and not self.text[start - 1].isspace():
            start -= 1
        end = self.selection_end
        while end < len(self.text) and not self.text[end].isspace():
            end += 1
        return WordSpan(start, end, self.text[start:end].strip())

    # Edits ------------------------------------------------------------------
    def insert(self, *pieces: str) -> "TextBuffer":
        """Replace the selection with the pieces and collapse the caret after them."""
        chunk = "".join(pieces)
        text = self.text[:self.selection_start] + chunk + self.text[self.selection_end:]
        caret = self.selection_start + len(chunk)
        return TextBuffer(text, caret, caret)

    def delete_backward(self, times: int = 1) -> "TextBuffer":
        """Delete the selection, or one character before the caret, `times` times."""
        buf = self
        for _ in range(max(0, times)):
            if buf.has_selection:
                buf = buf.insert("")
            elif buf.selection_start > 0:
                pos = buf.selection_start - 1
                buf = TextBuffer(buf.text[:pos] + buf.text[pos + 1:], pos, pos)
        return buf

    def move_caret(self, n: int) -> "TextBuffer":
        """Collapse the selection at selection_end + n."""
        pos = self.selection_end + n
        return replace(self, selection_start=pos, selection_end=pos)

    def select(self, start: int, end: int) -> "TextBuffer":
        return replace(self, selection_start=start, selection_end=end)


def caret_location(text: str, offset: int) -> Tuple[int, int]:
    """(row, column) of an offset; used to place the suggestion next to the caret."""
    offset = _clamp(offset, 0, len(text))
    row = text.count("\n", 0, offset)
    col = offset - (text.rfind("\n", 0, offset) + 1)
    return row, col


def offset_of(text: str, row: int, column: int) -> int:
    """Inverse of caret_location; rows/columns past the end are clamped."""
    lines = text.split("\n")
    row = _clamp(row, 0, len(lines) - 1)
    offset = sum(len(line) + 1 for line in lines[:row])
    return offset + _clamp(column, 0, len(lines[row]))
