from __future__ import annotations

import pytest

from swipe_quiz.core.models import Language, Question
from swipe_quiz.core.quiz_engine import QuizEngine
from swipe_quiz.core.services.catalog_repository import CatalogRepository


def make_language(language_id: str, **traits: int) -> Language:
    return Language(
        id=language_id,
        name=language_id.upper(),
        description=f"{language_id} description",
        url=f"https://example.com/{language_id}",
        traits=traits,
    )


@pytest.fixture
def abc_languages() -> list[Language]:
    return [make_language("A", x=4), make_language("B", x=2), make_language("C", x=0)]


@pytest.fixture
def questions() -> list[Question]:
    return [
        Question(id=1, text="Do you like **x**?", trait="x", icon_name="web"),
        Question(id=2, text="Do you like y?", trait="y", icon_name="brain"),
        Question(id=3, text="Do you like x again?", trait="x", icon_name="chip"),
    ]


@pytest.fixture
def catalog(questions: list[Question]) -> CatalogRepository:
    languages = [
        make_language("A", x=4, y=1),
        make_language("B", x=2, y=5),
        make_language("C", x=0, y=0),
        make_language("D", x=1, y=1),
    ]
    return CatalogRepository(languages, questions, {"x": "Trait X"})


@pytest.fixture
def engine(catalog: CatalogRepository) -> QuizEngine:
    return QuizEngine(catalog=catalog, seed=1234)
