import random
from typing import List, Optional, Sequence

from ..models import QuizMode, QuizQuestion, VocabularyEntry
from .choices import generate_choices


def create_questions(
    selected: Sequence[VocabularyEntry],
    vocabulary: Sequence[VocabularyEntry],
    mode: QuizMode = QuizMode.TERM_TO_MEANING,
    *,
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> List[QuizQuestion]:
    """Build one question per selected entry, keeping selection order.

    The whole ``vocabulary`` serves as the distractor universe.
    """
    rng = rng or random.Random(seed)
    mode = QuizMode(mode)
    questions: List[QuizQuestion] = []
    for entry in selected:
        choices, correct_index = generate_choices(
            entry, vocabulary, mode, rng=rng
        )
        questions.append(
            QuizQuestion(
                entry=entry,
                mode=mode,
                choices=tuple(choices),
                correct_index=correct_index,
            )
        )
    return questions
