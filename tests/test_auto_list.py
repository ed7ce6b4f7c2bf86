import pytest

from predictive_notes.core.auto_list import handle_enter, next_marker
from predictive_notes.core.text_buffer import TextBuffer


def enter(text, caret=None):
    return handle_enter(TextBuffer.at(text, len(text) if caret is None else caret))


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1. item", "1. item\n2. "),
        ("9. last", "9. last\n10. "),
        ("- point", "- point\n- "),
        ("* point", "* point\n* "),
        ("  + nested", "  + nested\n  + "),
        ("- [x] done", "- [x] done\n- [ ] "),
        ("- [ ] todo", "- [ ] todo\n- [ ] "),
        ("\t3. tabbed", "\t3. tabbed\n\t4. "),
    ],
)
def test_list_continues(line, expected):
    out = enter(line)
    assert out.text == expected
    assert out.caret == len(expected)


@pytest.mark.parametrize("line", ["1. ", "- ", "* ", "- [ ] ", "- [x] ", "  12. "])
def test_empty_item_removes_marker(line):
    assert enter(line) == TextBuffer.at("", 0)


def test_only_current_line_is_considered():
    out = enter("intro\n1. a")
    assert out.text == "intro\n1. a\n2. "
    assert enter("1. a\nplain") is None


def test_empty_item_on_later_line_keeps_earlier_lines():
    assert enter("1. a\n2. ") == TextBuffer.at("1. a\n", 5)


def test_non_list_lines_fall_through():
    assert enter("plain text") is None
    assert enter("") is None
    assert enter("-dash") is None
    assert enter("1.5 ratio") is None


def test_selection_falls_through():
    assert handle_enter(TextBuffer("1. item", 3, 7)) is None


def test_checklist_takes_priority():
    kind, full, following, content = next_marker("- [x] ship it")
    assert (kind, full, following, content) == ("cl", "- [x] ", "- [ ] ", "ship it")
    assert next_marker("- item")[0] == "ul"
    assert next_marker("2. item")[0] == "ol"
    assert next_marker("nothing") is None
