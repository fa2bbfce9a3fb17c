"""Service holding the read-only language and question catalog."""

from __future__ import annotations

import logging
from typing import Mapping, Sequence

from swipe_quiz.core.models import Language, Question

logger = logging.getLogger(__name__)


class CatalogRepository:
    """Validated, immutable view over languages, questions and trait labels."""

    def __init__(
        self,
        languages: Sequence[Language],
        questions: Sequence[Question],
        trait_labels: Mapping[str, str] | None = None,
    ) -> None:
        self._languages: tuple[Language, ...] = tuple(languages)
        self._questions: tuple[Question, ...] = tuple(questions)
        self._trait_labels: dict[str, str] = dict(trait_labels or {})
        self._languages_by_id: dict[str, Language] = {}
        for language in self._languages:
            if language.id in self._languages_by_id:
                raise ValueError(f"Duplicate language id: {language.id}")
            self._languages_by_id[language.id] = language
        self._validate_questions()
        self._known_traits = frozenset(
            trait for language in self._languages for trait in language.traits
        )
        for question in self._questions:
            if question.trait not in self._known_traits:
                logger.warning(
                    "Question %s uses trait '%s' that no language scores", question.id, question.trait
                )

    def get_languages(self) -> list[Language]:
        return list(self._languages)

    def get_questions(self) -> list[Question]:
        return list(self._questions)

    def get_language(self, language_id: str) -> Language:
        try:
            return self._languages_by_id[language_id]
        except KeyError:
            raise KeyError(f"Unknown language id: {language_id}") from None

    def has_language(self, language_id: str) -> bool:
        return language_id in self._languages_by_id

    def known_traits(self) -> frozenset[str]:
        """Traits scored by at least one language."""
        return self._known_traits

    def trait_label(self, trait: str) -> str:
        """Human readable label for a trait, falling back to the trait name."""
        return self._trait_labels.get(trait, trait)

    def get_question_count(self) -> int:
        return len(self._questions)

    def _validate_questions(self) -> None:
        seen: set[int] = set()
        for question in self._questions:
            if question.id in seen:
                raise ValueError(f"Duplicate question id: {question.id}")
            if not question.trait.strip():
                raise ValueError(f"Question {question.id} must reference a trait.")
            seen.add(question.id)
