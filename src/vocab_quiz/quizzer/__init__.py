from ._main import build_arg_parser, main
from .models import (
    QuizAnswer,
    QuizIndexError,
    QuizInputMode,
    QuizMistake,
    QuizMode,
    QuizQuestion,
    QuizResult,
    QuizSession,
    QuizStatus,
    SRSRating,
    VocabularyEntry,
)
from .manager import (
    GeneratedChoices,
    create_questions,
    generate_choices,
    score_priority,
    select_questions,
    shuffle,
)
from .session import (
    advance,
    record_answer,
    record_rating,
    start_session,
    summarize_session,
)
from .srs import (
    SRSUpdate,
    calculate_srs,
    format_interval,
    is_due_for_review,
    next_review_preview,
    sort_by_review_priority,
)
from .utils import (
    DeckFormatError,
    load_deck,
    load_session,
    read_jsonl,
    write_jsonl,
    write_session,
)

__all__ = [
    "build_arg_parser",
    "main",
    "QuizAnswer",
    "QuizIndexError",
    "QuizInputMode",
    "QuizMistake",
    "QuizMode",
    "QuizQuestion",
    "QuizResult",
    "QuizSession",
    "QuizStatus",
    "SRSRating",
    "VocabularyEntry",
    "GeneratedChoices",
    "create_questions",
    "generate_choices",
    "score_priority",
    "select_questions",
    "shuffle",
    "advance",
    "record_answer",
    "record_rating",
    "start_session",
    "summarize_session",
    "SRSUpdate",
    "calculate_srs",
    "format_interval",
    "is_due_for_review",
    "next_review_preview",
    "sort_by_review_priority",
    "DeckFormatError",
    "load_deck",
    "load_session",
    "read_jsonl",
    "write_jsonl",
    "write_session",
]
