from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from vocab_quiz.quizzer.models import (
    QuizAnswer,
    QuizIndexError,
    QuizMode,
    QuizQuestion,
    QuizSession,
    round_half_up,
)
from vocab_quiz.quizzer.session import (
    advance,
    record_answer,
    record_rating,
    start_session,
    summarize_session,
)

from fixtures import make_entry

START = datetime(2024, 5, 1, 9, 0, tzinfo=timezone.utc)


def _question(idx: int, correct_index: int = 0) -> QuizQuestion:
    entry = make_entry(f"q{idx}", term=f"term{idx}", meaning=f"mean{idx}")
    choices = [f"other{idx}-{n}" for n in range(3)]
    choices.insert(correct_index, entry.meaning)
    return QuizQuestion(
        entry=entry,
        mode=QuizMode.TERM_TO_MEANING,
        choices=tuple(choices),
        correct_index=correct_index,
    )


def _at(seconds: float) -> datetime:
    return START + timedelta(seconds=seconds)


def test_summary_for_three_answers():
    session = start_session(
        [_question(0), _question(1, 2), _question(2, 1)], started_at=START
    )
    record_answer(session, 0, answered_at=_at(0))
    advance(session)
    record_answer(session, 2, answered_at=_at(5))
    advance(session)
    record_answer(session, 3, answered_at=_at(9))
    advance(session)

    result = summarize_session(session)

    assert result.total_questions == 3
    assert result.correct_count == 2
    assert result.incorrect_count == 1
    assert result.accuracy == 67
    assert result.duration == 9
    assert len(result.mistakes) == 1
    mistake = result.mistakes[0]
    assert mistake.question is session.questions[2]
    assert mistake.selected_answer == "other2-2"


def test_summary_without_answers_uses_now_for_duration():
    session = start_session([_question(0)], started_at=START)

    result = summarize_session(session, now=_at(42.4))

    assert result.accuracy == 0
    assert result.correct_count == 0
    assert result.incorrect_count == 0
    assert result.mistakes == ()
    assert result.duration == 42
    assert result.total_questions == 1


def test_summary_of_empty_session():
    session = start_session([], started_at=START)
    result = summarize_session(session, now=START)
    assert result.total_questions == 0
    assert result.accuracy == 0
    assert result.duration == 0


def test_accuracy_rounds_half_up():
    questions = [_question(i) for i in range(8)]
    session = start_session(questions, started_at=START)
    for idx in range(8):
        record_answer(session, 0 if idx == 0 else 1, answered_at=_at(idx))
        advance(session)

    result = summarize_session(session)

    assert result.correct_count == 1
    assert result.accuracy == 13
    assert len(result.mistakes) == result.incorrect_count == 7
    for mistake in result.mistakes:
        assert mistake.selected_answer == mistake.question.choices[1]


def test_duration_rounds_half_up():
    session = start_session([_question(0)], started_at=START)
    record_answer(session, 0, answered_at=_at(2.5))
    assert summarize_session(session).duration == 3
    assert round_half_up(0.5) == 1
    assert round_half_up(66.666) == 67


def test_record_answer_rejects_out_of_range_indices():
    session = start_session([_question(0)], started_at=START)

    with pytest.raises(QuizIndexError):
        record_answer(session, 4, answered_at=START)
    with pytest.raises(QuizIndexError):
        record_answer(session, -1, answered_at=START)
    with pytest.raises(QuizIndexError):
        record_answer(session, 0, answered_at=START, question_index=3)
    assert session.answers == []


def test_summary_rejects_corrupt_answers():
    session = QuizSession(
        questions=(_question(0),),
        started_at=START,
        answers=[QuizAnswer(question_index=5, selected_index=0,
                            answered_at=START)],
    )
    with pytest.raises(QuizIndexError):
        summarize_session(session)


def test_record_rating_marks_again_incorrect():
    session = start_session([_question(0, 1), _question(1)], started_at=START)

    good = record_rating(session, "good", answered_at=_at(1))
    advance(session)
    again = record_rating(session, "again", answered_at=_at(4))

    assert good.selected_index == 1
    assert session.is_correct(good) is True
    assert session.is_correct(again) is False
    result = summarize_session(session)
    assert result.accuracy == 50
    assert result.mistakes[0].selected_answer == "mean1"


def test_record_rating_validates_input():
    session = start_session([_question(0)], started_at=START)
    with pytest.raises(ValueError):
        record_rating(session, "meh")  # type: ignore[arg-type]
    advance(session)
    with pytest.raises(QuizIndexError):
        record_rating(session, "good")


def test_advance_stops_at_end():
    session = start_session([_question(0), _question(1)], started_at=START)
    assert session.current is session.questions[0]
    assert advance(session) is True
    assert advance(session) is False
    assert session.current is None
    assert advance(session) is False
    assert session.current_index == 2


def test_question_rejects_invalid_correct_index():
    entry = make_entry("x")
    with pytest.raises(ValueError):
        QuizQuestion(entry, QuizMode.TERM_TO_MEANING, ("a",), 1)
    with pytest.raises(ValueError):
        QuizQuestion(entry, QuizMode.TERM_TO_MEANING, (), 0)


def test_entry_rejects_negative_review_count():
    with pytest.raises(ValueError):
        make_entry("x", review_count=-1)
