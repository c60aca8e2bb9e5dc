"""Answer-choice construction for multiple-choice questions."""

from __future__ import annotations

import random
from typing import List, NamedTuple, Optional, Sequence, TypeVar

from ..models import QuizMode, VocabularyEntry

T = TypeVar("T")

MAX_DISTRACTORS = 3


class GeneratedChoices(NamedTuple):
    choices: List[str]
    correct_index: int


def shuffle(
    items: Sequence[T], *, rng: Optional[random.Random] = None
) -> List[T]:
    """Return a uniformly shuffled copy of ``items`` (Fisher-Yates)."""
    rng = rng or random.Random()
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = rng.randrange(i + 1)
        result[i], result[j] = result[j], result[i]
    return result


def generate_choices(
    correct: VocabularyEntry,
    vocabulary: Sequence[VocabularyEntry],
    mode: QuizMode,
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> GeneratedChoices:
    """Build shuffled choices for ``correct`` with up to three distractors.

    Distractors are drawn without replacement from every other entry (by
    id). Small vocabularies produce fewer choices. Distractor texts equal to
    the correct answer are kept, in which case ``correct_index`` points at
    the first matching position.
    """
    rng = rng or random.Random(seed)
    field = QuizMode(mode).answer_field
    answer = getattr(correct, field)

    pool = [entry for entry in vocabulary if entry.id != correct.id]
    picked = rng.sample(pool, min(MAX_DISTRACTORS, len(pool)))
    distractors = [getattr(entry, field) for entry in picked]

    shuffled = shuffle([answer, *distractors], rng=rng)
    return GeneratedChoices(shuffled, shuffled.index(answer))
