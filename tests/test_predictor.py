import random

import pytest

from predictive_notes.core.ngram_model import Candidate, build_from_text
from predictive_notes.core.predictor import (
    PredictionPolicy,
    laplace_probabilities,
    predict,
)

SAMPLE = "the cat sat on the mat the cat ran"


class FixedRng:
    """random() always returns r; randrange picks the first index."""

    def __init__(self, r):
        self.r = r

    def random(self):
        return self.r

    def randrange(self, n):
        return 0


@pytest.mark.parametrize("policy", list(PredictionPolicy))
def test_absent_prefix_gives_nothing(policy):
    model = build_from_text(SAMPLE)
    assert predict("dog", model, policy=policy) == []
    assert predict("", model, policy=policy) == []
    assert predict("the", None, policy=policy) == []
    assert predict("the", {}, policy=policy) == []


def test_max_frequency_is_deterministic_without_ties():
    model = build_from_text(SAMPLE)
    for seed in range(20):
        out = predict("the", model, rng=random.Random(seed))
        assert out == [Candidate("cat", 2, "the")]


def test_lookup_ignores_case_and_echoes_query_prefix():
    model = build_from_text(SAMPLE)
    assert predict("THE", model) == [Candidate("cat", 2, "THE")]


def test_max_frequency_ties_only_among_maximum():
    model = {"go": [Candidate("a", 2, "go"), Candidate("b", 2, "go"), Candidate("c", 1, "go")]}
    picks = {predict("go", model, rng=random.Random(seed))[0].word for seed in range(200)}
    assert picks == {"a", "b"}


def test_laplace_probabilities_are_positive_and_sum_to_one():
    cands = [Candidate("a", 5, "x"), Candidate("b", 1, "x"), Candidate("c", 1, "x")]
    probs = laplace_probabilities(cands)
    assert all(p > 0 for p in probs)
    assert sum(probs) <= 1.0 + 1e-12
    assert probs == pytest.approx([6 / 10, 2 / 10, 2 / 10])


def test_laplace_dominant_count_approaches_one():
    cands = [Candidate("big", 100000, "x"), Candidate("small", 1, "x")]
    assert laplace_probabilities(cands)[0] > 0.9999


def test_laplace_walks_cumulative_distribution():
    model = {"x": [Candidate("a", 1, "x"), Candidate("b", 1, "x")]}
    lap = PredictionPolicy.LAPLACE
    assert predict("x", model, policy=lap, rng=FixedRng(0.0))[0].word == "a"
    assert predict("x", model, policy=lap, rng=FixedRng(0.49))[0].word == "a"
    assert predict("x", model, policy=lap, rng=FixedRng(0.51))[0].word == "b"


def test_laplace_falls_back_to_max_frequency_on_drift():
    model = {"x": [Candidate("a", 1, "x"), Candidate("b", 3, "x")]}
    out = predict("x", model, policy=PredictionPolicy.LAPLACE, rng=FixedRng(2.0))
    assert out == [Candidate("b", 3, "x")]


def test_laplace_sampling_frequencies():
    model = build_from_text(SAMPLE)
    rng = random.Random(7)
    words = [predict("the", model, policy="laplace", rng=rng)[0].word for _ in range(3000)]
    # p(cat) = 3/5, p(mat) = 2/5
    assert 0.55 < words.count("cat") / len(words) < 0.65
