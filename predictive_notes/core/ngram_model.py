# ngram_model.py
# Bigram frequency model built from a single note snapshot.
# prefix (lower-cased) -> ordered list of Candidate(word, count, prefix)

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from predictive_notes.core.tokenizer import tokenize
from predictive_notes.utils.logger_utils import Log

DEFAULT_ORDER = 2


@dataclass(frozen=True)
class Candidate:
    """One observed continuation of a prefix."""
    word: str
    count: int
    prefix: str


Model = Dict[str, List[Candidate]]


def count_grams(tokens: Sequence[str], n: int = DEFAULT_ORDER) -> Counter:
    """
    Count every overlapping window of n tokens.
    Keys are the exact surface tuples, so "The cat" and "the cat" are separate grams.
    Counter keeps first-seen order.
    """
    freqs: Counter = Counter()
    for i in range(len(tokens) - n + 1):
        freqs[tuple(tokens[i:i + n])] += 1
    return freqs


def build(tokens: Sequence[str], n: int = DEFAULT_ORDER) -> Optional[Model]:
    """
    Build a prefix -> candidates table.

    Returns None when fewer than n tokens exist (model unavailable).
    The returned dict is complete and never touched again, so callers can
    publish it by swapping a reference.
    """
    if n != DEFAULT_ORDER:
        raise ValueError(f"only bigram models are supported (n={DEFAULT_ORDER})")
    if not tokens or len(tokens) < n:
        return None

    freqs = count_grams(tokens, n)

    model: Model = {}
    for gram, count in freqs.items():
        prefix, word = gram
        model.setdefault(prefix.lower(), []).append(
            Candidate(word=word, count=count, prefix=prefix)
        )
    return model


def build_from_text(text: str, n: int = DEFAULT_ORDER) -> Optional[Model]:
    """Tokenize a snapshot and build its model, timing the work."""
    with Log.time_block("[NGramModel] build"):
        tokens = tokenize(text)
        model = build(tokens, n)
    if model is None:
        Log.debug(f"[NGramModel] unavailable ({len(tokens)} tokens)")
    else:
        Log.debug(f"[NGramModel] {len(model)} prefixes from {len(tokens)} tokens")
    return model


def model_size(model: Optional[Model]) -> Tuple[int, int]:
    """(number of prefixes, number of candidate entries)."""
    if not model:
        return 0, 0
    return len(model), sum(len(v) for v in model.values())
