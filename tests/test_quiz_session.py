from __future__ import annotations

import random

import pytest

from swipe_quiz.core.models import Question, RankedMatch, SessionRecord, SessionState, SwipeDirection
from swipe_quiz.core.services.quiz_session import (
    IncompleteSessionError,
    QuizSession,
    SessionStateError,
    record_swipe,
)

from conftest import make_language


def test_record_swipe_appends_trait_to_matching_list():
    record = SessionRecord()
    question = Question(id=1, text="?", trait="web")
    record_swipe(record, question, SwipeDirection.ACCEPT)
    record_swipe(record, question, SwipeDirection.STAR)
    record_swipe(record, question, SwipeDirection.REJECT)
    record_swipe(record, question, SwipeDirection.ACCEPT)
    assert record.accepted == ["web", "web"]
    assert record.starred == ["web"]
    assert record.rejected == ["web"]
    assert record.swipe_count() == 4


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("accept", SwipeDirection.ACCEPT),
        ("RIGHT", SwipeDirection.ACCEPT),
        ("no", SwipeDirection.REJECT),
        ("left", SwipeDirection.REJECT),
        (" star ", SwipeDirection.STAR),
        ("top", SwipeDirection.STAR),
        (SwipeDirection.REJECT, SwipeDirection.REJECT),
    ],
)
def test_direction_parsing(raw, expected):
    assert SwipeDirection.parse(raw) is expected


def test_direction_parsing_rejects_unknown_values():
    with pytest.raises(ValueError):
        SwipeDirection.parse("sideways")


def test_session_walks_through_every_question(questions, abc_languages):
    session = QuizSession(questions)
    assert session.state is SessionState.IDLE
    assert session.current_question() is None

    order = session.start(random.Random(5))
    assert session.state is SessionState.IN_PROGRESS
    assert sorted(q.id for q in order) == [1, 2, 3]

    for question in order:
        assert session.current_question() == question
        session.record_swipe("accept", question_id=question.id)

    assert session.is_complete()
    assert session.current_question() is None
    assert session.get_record().accepted == [q.trait for q in order]

    results = session.finish(abc_languages)
    assert session.state is SessionState.FINISHED
    assert results == [RankedMatch("A", 67), RankedMatch("B", 33), RankedMatch("C", 0)]
    assert session.get_results() == results


def test_finish_before_all_questions_raises_incomplete(questions, abc_languages):
    session = QuizSession(questions)
    session.start(random.Random(1))
    session.record_swipe(SwipeDirection.ACCEPT)
    session.record_swipe(SwipeDirection.REJECT)

    with pytest.raises(IncompleteSessionError) as excinfo:
        session.finish(abc_languages)

    assert excinfo.value.answered == 2
    assert excinfo.value.total == 3
    assert session.state is SessionState.IN_PROGRESS
    assert session.get_results() is None


def test_finish_before_start_raises_incomplete(questions, abc_languages):
    with pytest.raises(IncompleteSessionError):
        QuizSession(questions).finish(abc_languages)


def test_swipe_before_start_is_rejected(questions):
    with pytest.raises(SessionStateError):
        QuizSession(questions).record_swipe("accept")


def test_swipe_after_last_question_is_rejected(questions):
    session = QuizSession(questions)
    session.start(random.Random(2))
    for _ in questions:
        session.record_swipe("reject")
    with pytest.raises(SessionStateError):
        session.record_swipe("reject")


def test_stale_question_id_is_rejected(questions):
    session = QuizSession(questions)
    first = session.start(random.Random(3))[0]
    session.record_swipe("accept", question_id=first.id)
    with pytest.raises(SessionStateError):
        session.record_swipe("accept", question_id=first.id)
    assert session.answered_count() == 1


def test_finished_session_is_terminal(questions, abc_languages):
    session = QuizSession(questions)
    session.start(random.Random(4))
    for _ in questions:
        session.record_swipe("star")
    session.finish(abc_languages)

    with pytest.raises(SessionStateError):
        session.finish(abc_languages)
    with pytest.raises(SessionStateError):
        session.record_swipe("accept")
    with pytest.raises(SessionStateError):
        session.start()


def test_invalid_direction_does_not_advance(questions):
    session = QuizSession(questions)
    session.start(random.Random(6))
    with pytest.raises(ValueError):
        session.record_swipe("maybe")
    assert session.answered_count() == 0


def test_unknown_trait_is_recorded_and_scores_zero():
    questions = [Question(id=1, text="?", trait="telepathy")]
    session = QuizSession(questions, known_traits=frozenset({"x"}))
    session.start(random.Random(0))
    session.record_swipe("accept")
    assert session.get_record().accepted == ["telepathy"]
    assert session.finish([make_language("A", x=3)]) == [RankedMatch("A", 0)]


def test_same_seed_gives_same_order(questions):
    first = QuizSession(questions).start(random.Random(42))
    second = QuizSession(questions).start(random.Random(42))
    assert first == second
