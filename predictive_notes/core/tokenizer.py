# tokenizer.py
# word-boundary tokenizer shared by the model builder and the editing assist

from __future__ import annotations
import re
from typing import List

# letters, digits, underscore, apostrophe and hyphen (keeps contractions)
WORD_PATTERN = re.compile(r"[\w'-]+")


def tokenize(text: str) -> List[str]:
    """
    Return every maximal word run in left-to-right order.
    An empty list means no model can be built from this text.
    """
    if not text:
        return []
    return WORD_PATTERN.findall(text)


def has_word_char(s: str) -> bool:
    """True when s contains at least one word-constituent character."""
    return bool(s) and WORD_PATTERN.search(s) is not None
