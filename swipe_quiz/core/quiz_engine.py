"""Business logic for running quiz sessions, shared between callers and the API."""

from __future__ import annotations

from collections import OrderedDict
from dataclasses import dataclass
import logging
import random
from threading import Lock
from uuid import uuid4

from swipe_quiz.constants.quiz_constants import (
    MAX_ACTIVE_SESSIONS,
    STAR_SWIPE_MULTIPLIER,
    TOP_MATCH_LIMIT,
)
from swipe_quiz.core.models import Language, Question, RankedMatch, SessionState, SwipeDirection
from swipe_quiz.core.services.catalog_repository import CatalogRepository
from swipe_quiz.core.services.quiz_session import QuizSession

logger = logging.getLogger(__name__)


class UnknownSessionError(KeyError):
    """Raised when a session id does not belong to a live quiz."""


@dataclass(slots=True)
class QuizProgress:
    """Snapshot of how far a session has come."""

    answered: int
    total: int
    state: SessionState


@dataclass(slots=True)
class DisplayMatch:
    """A ranked match joined with the full language details."""

    language: Language
    percentage: int


class QuizEngine:
    """Facade over the catalog and the live quiz sessions."""

    def __init__(
        self,
        catalog: CatalogRepository,
        seed: int | None = None,
        limit: int = TOP_MATCH_LIMIT,
        star_multiplier: float = STAR_SWIPE_MULTIPLIER,
        max_sessions: int = MAX_ACTIVE_SESSIONS,
    ) -> None:
        if max_sessions <= 0:
            raise ValueError("max_sessions must be a positive integer.")
        self._lock = Lock()
        self._catalog = catalog
        self._rng = random.Random(seed)
        self._limit = limit
        self._star_multiplier = star_multiplier
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, QuizSession] = OrderedDict()

    # --- Catalog ---

    def get_catalog(self) -> CatalogRepository:
        return self._catalog

    def get_language(self, language_id: str) -> Language:
        return self._catalog.get_language(language_id)

    # --- Session lifecycle ---

    def start_quiz(self, seed: int | None = None) -> str:
        """Create a fresh session with newly shuffled cards and return its id."""
        with self._lock:
            session = QuizSession(self._catalog.get_questions(), self._catalog.known_traits())
            rng = random.Random(seed) if seed is not None else self._rng
            session.start(rng)
            session_id = uuid4().hex
            self._sessions[session_id] = session
            self._evict_stale_sessions()
            logger.info("Started quiz session %s with %d questions", session_id, session.total_count())
            return session_id

    def abandon_quiz(self, session_id: str) -> None:
        with self._lock:
            if self._sessions.pop(session_id, None) is not None:
                logger.info("Abandoned quiz session %s", session_id)

    def has_session(self, session_id: str | None) -> bool:
        if not session_id:
            return False
        with self._lock:
            return session_id in self._sessions

    def get_active_session_count(self) -> int:
        with self._lock:
            return len(self._sessions)

    # --- Swiping ---

    def get_current_question(self, session_id: str) -> Question | None:
        with self._lock:
            return self._get_session(session_id).current_question()

    def get_progress(self, session_id: str) -> QuizProgress:
        with self._lock:
            session = self._get_session(session_id)
            return QuizProgress(
                answered=session.answered_count(),
                total=session.total_count(),
                state=session.state,
            )

    def record_swipe(
        self,
        session_id: str,
        direction: SwipeDirection | str,
        question_id: int | None = None,
    ) -> Question:
        with self._lock:
            return self._get_session(session_id).record_swipe(direction, question_id)

    # --- Scoring ---

    def finish(self, session_id: str) -> list[RankedMatch]:
        """Score a completed session. Raises IncompleteSessionError otherwise."""
        with self._lock:
            session = self._get_session(session_id)
            results = session.finish(
                self._catalog.get_languages(),
                limit=self._limit,
                star_multiplier=self._star_multiplier,
            )
            logger.info(
                "Finished quiz session %s: %s",
                session_id,
                ", ".join(f"{match.language_id}={match.percentage}%" for match in results) or "no languages",
            )
            return results

    def get_results(self, session_id: str) -> list[RankedMatch] | None:
        with self._lock:
            return self._get_session(session_id).get_results()

    def get_display_results(self, session_id: str) -> list[DisplayMatch]:
        """Finished results with language details, dropping 0% entries."""
        results = self.get_results(session_id) or []
        return [
            DisplayMatch(language=self._catalog.get_language(match.language_id), percentage=match.percentage)
            for match in results
            if match.percentage > 0
        ]

    def _get_session(self, session_id: str) -> QuizSession:
        session = self._sessions.get(session_id)
        if session is None:
            raise UnknownSessionError(f"Unknown quiz session: {session_id}")
        return session

    def _evict_stale_sessions(self) -> None:
        while len(self._sessions) > self._max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("Evicted quiz session %s (session limit reached)", evicted_id)
