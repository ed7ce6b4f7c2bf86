import pytest

from predictive_notes.core.editing_assist import (
    AssistFlags,
    ContextMenu,
    EditingAssist,
    Enter,
    Tab,
    TypeChar,
    is_valid_url,
)
from predictive_notes.core.ngram_model import build_from_text
from predictive_notes.core.text_buffer import TextBuffer

SAMPLE = "the cat sat on the mat the cat ran"


@pytest.fixture
def assist():
    return EditingAssist()


def test_tab_accepts_pending_suggestion(assist):
    out = assist.handle(TextBuffer.at("the", 3), Tab(), suggestion=" cat")
    assert out.handled
    assert out.buffer == TextBuffer.at("the cat", 7)


def test_tab_inserts_tab_without_suggestion(assist):
    out = assist.handle(TextBuffer.at("x", 1), Tab())
    assert out.buffer == TextBuffer.at("x\t", 2)


def test_shift_tab_outdents(assist):
    out = assist.handle(TextBuffer.at("\tx", 1), Tab(shift=True))
    assert out.handled
    assert out.buffer == TextBuffer.at("x", 0)


def test_shift_tab_without_tab_before_caret_does_nothing(assist):
    buf = TextBuffer.at("ab", 1)
    out = assist.handle(buf, Tab(shift=True))
    assert out.handled
    assert out.buffer == buf


def test_shift_tab_prefers_accepting_suggestion(assist):
    out = assist.handle(TextBuffer.at("\t", 1), Tab(shift=True), suggestion=" go")
    assert out.buffer.text == "\t go"


def test_auto_closure_gated_by_flag(assist):
    buf = TextBuffer.at("", 0)
    assert assist.handle(buf, TypeChar("(")).buffer == TextBuffer.at("()", 1)
    off = assist.handle(buf, TypeChar("("), flags=AssistFlags(auto_closure=False))
    assert not off.handled
    assert off.buffer == buf


def test_plain_characters_are_not_handled(assist):
    buf = TextBuffer.at("ab", 2)
    assert not assist.handle(buf, TypeChar("c")).handled


def test_enter_list_gated_by_flag(assist):
    buf = TextBuffer.at("1. item", 7)
    assert assist.handle(buf, Enter()).buffer.text == "1. item\n2. "
    assert not assist.handle(buf, Enter(), flags=AssistFlags(auto_list=False)).handled
    assert not assist.handle(TextBuffer.at("text", 4), Enter()).handled


def test_context_menu_selects_url(assist):
    text = "see https://example.com/docs for more"
    out = assist.handle(TextBuffer.at(text, 10), ContextMenu())
    assert out.handled
    assert out.buffer.selected_text == "https://example.com/docs"


def test_context_menu_ignores_plain_words_and_selections(assist):
    assert not assist.handle(TextBuffer.at("plain words", 3), ContextMenu()).handled
    buf = TextBuffer("see https://example.com x", 0, 3)
    assert not assist.handle(buf, ContextMenu()).handled


def test_unknown_command_rejected(assist):
    with pytest.raises(TypeError):
        assist.handle(TextBuffer(), "tab")


@pytest.mark.parametrize(
    "value, ok",
    [
        ("https://example.com", True),
        ("http://localhost:8000/x?y=1", True),
        ("mailto:someone@example.com", True),
        ("file:///tmp/notes.txt", True),
        ("example.com", False),
        ("not a url", False),
        ("://missing", False),
        ("", False),
    ],
)
def test_is_valid_url(value, ok):
    assert is_valid_url(value) is ok


def test_suggest_for_word_at_end_of_line():
    model = build_from_text(SAMPLE)
    text = SAMPLE + "\nThe"
    assert EditingAssist.suggest(TextBuffer.at(text, len(text)), model) == " cat"


def test_suggest_nothing_mid_line_or_when_disabled():
    model = build_from_text(SAMPLE)
    mid = TextBuffer.at("the end", 3)
    assert EditingAssist.suggest(mid, model) == ""
    end = TextBuffer.at("the", 3)
    assert EditingAssist.suggest(end, model, AssistFlags(predictive=False)) == ""
    assert EditingAssist.suggest(end, None) == ""
    assert EditingAssist.suggest(TextBuffer.at("the ", 4), model) == ""
    assert EditingAssist.suggest(TextBuffer.at("dog", 3), model) == ""
