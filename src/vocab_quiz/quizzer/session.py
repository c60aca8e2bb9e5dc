"""Quiz session lifecycle helpers and result aggregation.

A session is created from a finalized question list, grows by appending
answers, and is reduced to an immutable :class:`QuizResult` once the caller
is done with it. Transitions between ready/playing/feedback/finished are the
caller's responsibility; these helpers only keep the recorded data
consistent.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from .models import (
    SRS_RATINGS,
    QuizAnswer,
    QuizIndexError,
    QuizMistake,
    QuizQuestion,
    QuizResult,
    QuizSession,
    SRSRating,
    ensure_aware,
    round_half_up,
    utcnow,
)

logger = logging.getLogger(__name__)


def start_session(
    questions: Sequence[QuizQuestion],
    *,
    started_at: Optional[datetime] = None,
) -> QuizSession:
    """Create a session positioned on the first question."""

    return QuizSession(
        questions=tuple(questions),
        started_at=started_at or utcnow(),
    )


def record_answer(
    session: QuizSession,
    selected_index: int,
    *,
    answered_at: Optional[datetime] = None,
    question_index: Optional[int] = None,
) -> QuizAnswer:
    """Append an answer for ``question_index`` (default: current question).

    Raises :class:`QuizIndexError` when either index is out of range.
    """

    index = session.current_index if question_index is None else question_index
    answer = QuizAnswer(
        question_index=index,
        selected_index=selected_index,
        answered_at=answered_at or utcnow(),
    )
    session.question_for(answer).choice_at(selected_index)
    session.answers.append(answer)
    logger.debug(
        "Recorded answer",
        extra={
            "question_index": index,
            "selected_index": selected_index,
            "correct": session.is_correct(answer),
        },
    )
    return answer


def record_rating(
    session: QuizSession,
    rating: SRSRating,
    *,
    answered_at: Optional[datetime] = None,
) -> QuizAnswer:
    """Append a self-rated (recall mode) answer for the current question.

    The correct choice is recorded as selected; the answer counts as correct
    unless the rating is ``"again"``.
    """

    if rating not in SRS_RATINGS:
        raise ValueError(f"Unknown SRS rating '{rating}'.")
    if session.current is None:
        raise QuizIndexError(
            f"No question at index {session.current_index}."
        )
    answer = QuizAnswer(
        question_index=session.current_index,
        selected_index=session.current.correct_index,
        answered_at=answered_at or utcnow(),
        rating=rating,
    )
    session.answers.append(answer)
    logger.debug(
        "Recorded rating",
        extra={"question_index": answer.question_index, "rating": rating},
    )
    return answer


def advance(session: QuizSession) -> bool:
    """Move to the next question; return ``True`` while questions remain."""

    if session.current_index < session.total_questions:
        session.current_index += 1
    return session.current_index < session.total_questions


def summarize_session(
    session: QuizSession, *, now: Optional[datetime] = None
) -> QuizResult:
    """Reduce ``session`` into a :class:`QuizResult`.

    Accuracy is an integer percentage of answered questions (0 when nothing
    was answered). Duration runs from ``started_at`` to the last answer, or
    to ``now`` while no answer exists, so an open session keeps growing.
    """

    answers = session.answers
    outcomes = [session.is_correct(answer) for answer in answers]
    correct = sum(1 for ok in outcomes if ok)
    incorrect = len(answers) - correct
    accuracy = round_half_up(correct / len(answers) * 100) if answers else 0

    if answers:
        end = answers[-1].answered_at
    else:
        end = ensure_aware(now) if now is not None else utcnow()
    duration = round_half_up((end - session.started_at).total_seconds())

    mistakes = tuple(
        QuizMistake(
            question=session.question_for(answer),
            selected_answer=session.question_for(answer).choice_at(
                answer.selected_index
            ),
        )
        for answer, ok in zip(answers, outcomes)
        if not ok
    )

    result = QuizResult(
        total_questions=session.total_questions,
        correct_count=correct,
        incorrect_count=incorrect,
        accuracy=accuracy,
        duration=duration,
        mistakes=mistakes,
    )
    logger.debug(
        "quiz.summary",
        extra={
            "total": result.total_questions,
            "correct": result.correct_count,
            "accuracy": result.accuracy,
            "duration": result.duration,
        },
    )
    return result
