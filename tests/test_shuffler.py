from __future__ import annotations

from collections import Counter
from itertools import permutations
import random

from swipe_quiz.core.services.shuffler import shuffle


def test_shuffle_is_a_permutation():
    rng = random.Random(7)
    for size in range(0, 12):
        items = [i % 4 for i in range(size)]
        shuffled = shuffle(items, rng)
        assert len(shuffled) == len(items)
        assert Counter(shuffled) == Counter(items)


def test_shuffle_does_not_mutate_input():
    items = [1, 2, 3, 4, 5]
    shuffle(items, random.Random(1))
    assert items == [1, 2, 3, 4, 5]


def test_shuffle_is_reproducible_with_seed():
    items = list(range(20))
    assert shuffle(items, random.Random(99)) == shuffle(items, random.Random(99))


def test_shuffle_handles_empty_and_single_item():
    assert shuffle([], random.Random(0)) == []
    assert shuffle(["only"], random.Random(0)) == ["only"]


def test_shuffle_without_rng_uses_fresh_source():
    items = list(range(10))
    assert sorted(shuffle(items)) == items


def test_shuffle_permutations_are_uniform():
    rng = random.Random(2024)
    trials = 6000
    counts = Counter(tuple(shuffle("abc", rng)) for _ in range(trials))
    assert set(counts) == set(permutations("abc"))

    expected = trials / 6
    chi_square = sum((observed - expected) ** 2 / expected for observed in counts.values())
    # 5 degrees of freedom, p = 0.001
    assert chi_square < 20.52
