"""Randomized presentation order for quiz questions."""

from __future__ import annotations

import random
from typing import Sequence, TypeVar

T = TypeVar("T")


def shuffle(items: Sequence[T], rng: random.Random | None = None) -> list[T]:
    """Return a Fisher-Yates shuffled copy of ``items``.

    The input sequence is left untouched. Pass a seeded ``random.Random`` to
    get a reproducible order.
    """
    rng = rng or random.Random()
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled
