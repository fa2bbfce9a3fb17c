"""Service for a single quiz run: card order, swipe recording and scoring."""

from __future__ import annotations

import logging
import random
from typing import Sequence

from swipe_quiz.constants.quiz_constants import STAR_SWIPE_MULTIPLIER, TOP_MATCH_LIMIT
from swipe_quiz.core.models import (
    Language,
    Question,
    RankedMatch,
    SessionRecord,
    SessionState,
    SwipeDirection,
)
from swipe_quiz.core.services.scorer import score
from swipe_quiz.core.services.shuffler import shuffle

logger = logging.getLogger(__name__)


class QuizSessionError(RuntimeError):
    """Base class for invalid operations on a quiz session."""


class SessionStateError(QuizSessionError):
    """Raised when an operation does not fit the current session state."""


class IncompleteSessionError(QuizSessionError):
    """Raised when scoring is requested before every question was swiped."""

    def __init__(self, answered: int, total: int) -> None:
        super().__init__(f"Quiz is incomplete: {answered} of {total} questions answered.")
        self.answered = answered
        self.total = total


def record_swipe(record: SessionRecord, question: Question, direction: SwipeDirection) -> None:
    """Append the question's trait to the list matching ``direction``."""
    if direction is SwipeDirection.ACCEPT:
        record.accepted.append(question.trait)
    elif direction is SwipeDirection.REJECT:
        record.rejected.append(question.trait)
    elif direction is SwipeDirection.STAR:
        record.starred.append(question.trait)
    else:  # pragma: no cover - enum is exhaustive
        raise ValueError(f"Unsupported swipe direction: {direction!r}")


class QuizSession:
    """Owns the shuffled cards and the swipe record of one quiz run."""

    def __init__(
        self,
        questions: Sequence[Question],
        known_traits: set[str] | frozenset[str] | None = None,
    ) -> None:
        self._source_questions: list[Question] = list(questions)
        self._known_traits = known_traits
        self._questions: list[Question] = []
        self._position: int = 0
        self._record = SessionRecord()
        self._state = SessionState.IDLE
        self._results: list[RankedMatch] | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    def start(self, rng: random.Random | None = None) -> list[Question]:
        """Shuffle the cards and move to IN_PROGRESS."""
        if self._state is not SessionState.IDLE:
            raise SessionStateError("Quiz session has already been started.")
        self._questions = shuffle(self._source_questions, rng)
        self._position = 0
        self._state = SessionState.IN_PROGRESS
        return list(self._questions)

    def get_questions(self) -> list[Question]:
        """Return the cards in presentation order."""
        return list(self._questions)

    def current_question(self) -> Question | None:
        if self._state is not SessionState.IN_PROGRESS:
            return None
        if self._position >= len(self._questions):
            return None
        return self._questions[self._position]

    def answered_count(self) -> int:
        return self._position

    def total_count(self) -> int:
        return len(self._source_questions)

    def remaining_count(self) -> int:
        return max(0, len(self._questions) - self._position)

    def is_complete(self) -> bool:
        return self._state is not SessionState.IDLE and self.remaining_count() == 0

    def get_record(self) -> SessionRecord:
        return self._record

    def record_swipe(
        self,
        direction: SwipeDirection | str,
        question_id: int | None = None,
    ) -> Question:
        """Record a swipe on the current card and advance to the next one.

        ``question_id`` guards against stale or repeated swipes from the display;
        it must name the current card when given.
        """
        resolved = SwipeDirection.parse(direction)
        if self._state is not SessionState.IN_PROGRESS:
            raise SessionStateError("Swipes are only accepted while the quiz is in progress.")

        question = self.current_question()
        if question is None:
            raise SessionStateError("All questions have already been answered.")
        if question_id is not None and question_id != question.id:
            raise SessionStateError(
                f"Question {question_id} is not the current card (expected {question.id})."
            )

        if self._known_traits is not None and question.trait not in self._known_traits:
            logger.debug("Trait '%s' is not scored by any language; it contributes 0", question.trait)

        record_swipe(self._record, question, resolved)
        self._position += 1
        return question

    def finish(
        self,
        languages: Sequence[Language],
        limit: int = TOP_MATCH_LIMIT,
        star_multiplier: float = STAR_SWIPE_MULTIPLIER,
    ) -> list[RankedMatch]:
        """Score the completed session once and move to FINISHED."""
        if self._state is SessionState.FINISHED:
            raise SessionStateError("Quiz session has already finished.")
        if self._state is SessionState.IDLE or not self.is_complete():
            raise IncompleteSessionError(self.answered_count(), self.total_count())

        self._results = score(self._record, languages, limit=limit, star_multiplier=star_multiplier)
        self._state = SessionState.FINISHED
        return list(self._results)

    def get_results(self) -> list[RankedMatch] | None:
        if self._results is None:
            return None
        return list(self._results)
