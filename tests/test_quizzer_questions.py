from __future__ import annotations

import random

from vocab_quiz.quizzer.manager.questions import create_questions
from vocab_quiz.quizzer.models import QuizMode, QuizQuestion

from fixtures import make_vocabulary


def test_create_questions_preserves_selection_order():
    vocab = make_vocabulary(6)
    selected = [vocab[4], vocab[0], vocab[2]]

    questions = create_questions(
        selected, vocab, QuizMode.MEANING_TO_TERM, rng=random.Random(2)
    )

    assert [q.entry.id for q in questions] == ["w4", "w0", "w2"]
    for question, entry in zip(questions, selected):
        assert isinstance(question, QuizQuestion)
        assert question.mode is QuizMode.MEANING_TO_TERM
        assert question.prompt == entry.meaning
        assert question.correct_answer == entry.term
        assert len(question.choices) == 4


def test_create_questions_draws_distractors_from_full_vocabulary():
    vocab = make_vocabulary(5)
    selected = [vocab[0]]
    seen: set[str] = set()
    for seed in range(30):
        (question,) = create_questions(selected, vocab, seed=seed)
        seen.update(question.choices)
    assert seen == {e.meaning for e in vocab}


def test_create_questions_defaults_to_term_to_meaning():
    vocab = make_vocabulary(3)
    (question,) = create_questions(vocab[:1], vocab, seed=0)
    assert question.mode is QuizMode.TERM_TO_MEANING
    assert question.prompt == vocab[0].term


def test_create_questions_empty_selection():
    assert create_questions([], make_vocabulary(3)) == []
