from predictive_notes.core.tokenizer import has_word_char, tokenize


def test_tokenize_keeps_apostrophes_and_hyphens():
    assert tokenize("Don't over-think it, ok?") == ["Don't", "over-think", "it", "ok"]


def test_tokenize_splits_on_whitespace_and_punctuation():
    assert tokenize("one\ttwo\nthree...four") == ["one", "two", "three", "four"]


def test_tokenize_empty_inputs():
    assert tokenize("") == []
    assert tokenize("  ... !! ") == []


def test_has_word_char():
    assert has_word_char("abc")
    assert has_word_char("(x")
    assert not has_word_char("((")
    assert not has_word_char("")
