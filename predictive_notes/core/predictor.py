# predictor.py
# Picks a single next-word suggestion for a prefix from a bigram Model.
#
# Two sampling policies exist; a session uses exactly one of them:
#   MAX_FREQUENCY - highest count wins, ties broken uniformly at random
#   LAPLACE       - weighted draw from add-k smoothed probabilities
# ---------------------------------------------------------------------

from __future__ import annotations
import enum
import random
from typing import List, Optional, Sequence

from predictive_notes.core.ngram_model import Candidate, Model

SMOOTHING_K = 1.0


class PredictionPolicy(str, enum.Enum):
    MAX_FREQUENCY = "max_frequency"
    LAPLACE = "laplace"


def _candidates_for(prefix: str, model: Optional[Model]) -> List[Candidate]:
    if not model or not prefix:
        return []
    return model.get(prefix.lower(), [])


def _pick_max_frequency(candidates: Sequence[Candidate], rng) -> Candidate:
    top = max(c.count for c in candidates)
    tied = [c for c in candidates if c.count == top]
    return tied[rng.randrange(len(tied))]


def laplace_probabilities(candidates: Sequence[Candidate], k: float = SMOOTHING_K) -> List[float]:
    """
    p(word) = (count + k) / (total + k * m)
    m counts candidate entries, so the distribution sums to 1 (up to rounding).
    """
    if not candidates:
        return []
    total = sum(c.count for c in candidates)
    m = len(candidates)
    denom = total + k * m
    return [(c.count + k) / denom for c in candidates]


def _pick_laplace(candidates: Sequence[Candidate], rng, k: float) -> Candidate:
    r = rng.random()
    cumulative = 0.0
    for cand, p in zip(candidates, laplace_probabilities(candidates, k)):
        cumulative += p
        if cumulative > r:
            return cand
    # rounding left the running sum at or below r
    return _pick_max_frequency(candidates, rng)


def predict(
    prefix: str,
    model: Optional[Model],
    policy: PredictionPolicy = PredictionPolicy.MAX_FREQUENCY,
    rng: Optional[random.Random] = None,
    k: float = SMOOTHING_K,
) -> List[Candidate]:
    """
    Return [] or a one-element list with the suggested continuation.
    The returned candidate carries the queried prefix, not the stored one.
    """
    candidates = _candidates_for(prefix, model)
    if not candidates:
        return []

    rng = rng or random
    if PredictionPolicy(policy) is PredictionPolicy.LAPLACE:
        chosen = _pick_laplace(candidates, rng, k)
    else:
        chosen = _pick_max_frequency(candidates, rng)
    return [Candidate(word=chosen.word, count=chosen.count, prefix=prefix)]
