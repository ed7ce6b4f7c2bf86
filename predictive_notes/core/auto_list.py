# auto_list.py
# Continue checklists, bullet lists and numbered lists on Enter.
#
# Each pattern captures:
#   1: the full marker including its trailing space (deleted on an empty item)
#   2: the marker itself, with indentation, reused on the next line
#   3: the item content typed so far

from __future__ import annotations
import re
from typing import Optional

from predictive_notes.core.text_buffer import TextBuffer

CL_REGEX = re.compile(r"^(([ \t]*[-*+] \[[ xX]\])\s)(.*)$")
UL_REGEX = re.compile(r"^(([ \t]*[-*+])\s)(.*)$")
OL_REGEX = re.compile(r"^(([ \t]*\d+)\.\s)(.*)$")

_CHECKED = re.compile(r"\[[xX]\]")
_NUMBER = re.compile(r"\d+")


def next_marker(line: str) -> Optional[tuple]:
    """
    Classify a line. Returns (kind, full_marker, next_marker, content) or None.
    kind is "cl", "ul" or "ol".
    """
    for kind, pattern in (("cl", CL_REGEX), ("ul", UL_REGEX), ("ol", OL_REGEX)):
        match = pattern.match(line)
        if not match:
            continue
        full, marker, content = match.group(1), match.group(2), match.group(3)
        if kind == "cl":
            marker = _CHECKED.sub("[ ]", marker)
            following = marker + " "
        elif kind == "ol":
            following = _NUMBER.sub(lambda m: str(int(m.group()) + 1), marker, count=1) + ". "
        else:
            following = marker + " "
        return kind, full, following, content
    return None


def handle_enter(buffer: TextBuffer) -> Optional[TextBuffer]:
    """Return the edited buffer, or None to let Enter insert a plain newline."""
    if buffer.has_selection:
        return None
    found = next_marker(buffer.line_before_caret())
    if found is None:
        return None

    _, full, following, content = found
    if content:
        return buffer.insert("\n", following)
    # empty item ends the list
    return buffer.delete_backward(len(full))
