"""Service for turning a swipe record into a ranked language match list."""

from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Sequence

from swipe_quiz.constants.quiz_constants import STAR_SWIPE_MULTIPLIER, TOP_MATCH_LIMIT
from swipe_quiz.core.models import Language, RankedMatch, SessionRecord


@dataclass(slots=True)
class RawScore:
    """Unnormalized affinity of one language for one session."""

    language_id: str
    value: float


def compute_raw_score(
    language: Language,
    record: SessionRecord,
    star_multiplier: float = STAR_SWIPE_MULTIPLIER,
) -> float:
    """Accumulate accept, star and reject contributions, clamped at zero."""
    total = 0.0
    for trait in record.accepted:
        total += language.trait_score(trait)
    for trait in record.starred:
        total += language.trait_score(trait) * star_multiplier
    for trait in record.rejected:
        total -= language.trait_score(trait)
    return max(0.0, total)


def score(
    record: SessionRecord,
    languages: Sequence[Language],
    limit: int = TOP_MATCH_LIMIT,
    star_multiplier: float = STAR_SWIPE_MULTIPLIER,
) -> list[RankedMatch]:
    """Return the top ``limit`` languages with percentages relative to each other.

    Ties keep catalog order. When every finalist scores zero, each gets 0%.
    """
    raw_scores = [
        RawScore(language_id=language.id, value=compute_raw_score(language, record, star_multiplier))
        for language in languages
    ]
    # sorted() is stable, so equal scores keep their catalog position.
    finalists = sorted(raw_scores, key=lambda entry: -entry.value)[:limit]
    total = sum(entry.value for entry in finalists)

    return [
        RankedMatch(language_id=entry.language_id, percentage=_percentage(entry.value, total))
        for entry in finalists
    ]


def _percentage(value: float, total: float) -> int:
    if total <= 0:
        return 0
    # Round half up; round() would apply banker's rounding.
    return int(math.floor(value / total * 100 + 0.5))
