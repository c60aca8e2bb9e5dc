from .selection import (
    NEVER_REVIEWED_DAYS,
    PRIORITY_NOISE,
    score_priority,
    select_questions,
)
from .choices import MAX_DISTRACTORS, GeneratedChoices, generate_choices, shuffle
from .questions import create_questions

__all__ = [
    "NEVER_REVIEWED_DAYS",
    "PRIORITY_NOISE",
    "score_priority",
    "select_questions",
    "MAX_DISTRACTORS",
    "GeneratedChoices",
    "generate_choices",
    "shuffle",
    "create_questions",
]
