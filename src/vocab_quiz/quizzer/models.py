"""Vocabulary and quiz data structures shared across the quizzer package."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Literal, Optional

SRSRating = Literal["again", "hard", "good", "easy"]
SRS_RATINGS: tuple[SRSRating, ...] = ("again", "hard", "good", "easy")


class QuizIndexError(IndexError):
    """Raised when an answer references a question or choice that does not
    exist. This signals caller misuse, not a data condition."""


class QuizMode(str, Enum):
    TERM_TO_MEANING = "term-to-meaning"
    MEANING_TO_TERM = "meaning-to-term"

    @property
    def prompt_field(self) -> str:
        return "term" if self is QuizMode.TERM_TO_MEANING else "meaning"

    @property
    def answer_field(self) -> str:
        return "meaning" if self is QuizMode.TERM_TO_MEANING else "term"


class QuizInputMode(str, Enum):
    CHOICE = "choice"
    RECALL = "recall"


class QuizStatus(str, Enum):
    READY = "ready"
    PLAYING = "playing"
    FEEDBACK = "feedback"
    FINISHED = "finished"


def ensure_aware(value: datetime) -> datetime:
    """Treat naive datetimes as UTC."""

    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""

    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class VocabularyEntry:
    """A vocabulary record as supplied by the vocabulary store."""

    id: str
    term: str
    meaning: str
    example: Optional[str] = None
    last_reviewed_at: Optional[datetime] = None
    review_count: int = 0
    ease_factor: Optional[float] = None
    interval: Optional[int] = None
    next_review_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    tags: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.review_count < 0:
            raise ValueError(
                f"review_count must be >= 0 (entry {self.id!r})"
            )
        for name in ("last_reviewed_at", "next_review_at", "created_at"):
            value = getattr(self, name)
            if value is not None:
                object.__setattr__(self, name, ensure_aware(value))


@dataclass(frozen=True)
class QuizQuestion:
    """A multiple-choice question built from one vocabulary entry."""

    entry: VocabularyEntry
    mode: QuizMode
    choices: tuple[str, ...]
    correct_index: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "choices", tuple(self.choices))
        if not self.choices:
            raise ValueError("A question needs at least one choice.")
        if not 0 <= self.correct_index < len(self.choices):
            raise ValueError(
                "correct_index {0} outside 0..{1}".format(
                    self.correct_index, len(self.choices) - 1
                )
            )

    @property
    def prompt(self) -> str:
        return getattr(self.entry, self.mode.prompt_field)

    @property
    def correct_answer(self) -> str:
        return self.choices[self.correct_index]

    def choice_at(self, index: int) -> str:
        if not 0 <= index < len(self.choices):
            raise QuizIndexError(
                "selected_index {0} outside 0..{1} for {2!r}".format(
                    index, len(self.choices) - 1, self.entry.id
                )
            )
        return self.choices[index]

    def is_correct(self, selected_index: int) -> bool:
        self.choice_at(selected_index)
        return selected_index == self.correct_index


@dataclass(frozen=True)
class QuizAnswer:
    """One recorded answer. Correctness is derived, never stored."""

    question_index: int
    selected_index: int
    answered_at: datetime
    rating: Optional[SRSRating] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "answered_at", ensure_aware(self.answered_at))


@dataclass
class QuizSession:
    """State of one quiz run, owned by a single caller."""

    questions: tuple[QuizQuestion, ...]
    started_at: datetime
    current_index: int = 0
    answers: list[QuizAnswer] = field(default_factory=list)

    def __post_init__(self) -> None:
        self.questions = tuple(self.questions)
        self.started_at = ensure_aware(self.started_at)

    @property
    def total_questions(self) -> int:
        return len(self.questions)

    @property
    def current(self) -> QuizQuestion | None:
        if self.current_index >= len(self.questions):
            return None
        return self.questions[self.current_index]

    def question_for(self, answer: QuizAnswer) -> QuizQuestion:
        if not 0 <= answer.question_index < len(self.questions):
            raise QuizIndexError(
                "question_index {0} outside 0..{1}".format(
                    answer.question_index, len(self.questions) - 1
                )
            )
        return self.questions[answer.question_index]

    def is_correct(self, answer: QuizAnswer) -> bool:
        question = self.question_for(answer)
        if answer.rating is not None:
            question.choice_at(answer.selected_index)
            return answer.rating != "again"
        return question.is_correct(answer.selected_index)


@dataclass(frozen=True)
class QuizMistake:
    question: QuizQuestion
    selected_answer: str


@dataclass(frozen=True)
class QuizResult:
    """Immutable summary of a finished (or still running) session."""

    total_questions: int
    correct_count: int
    incorrect_count: int
    accuracy: int
    duration: int
    mistakes: tuple[QuizMistake, ...] = ()
