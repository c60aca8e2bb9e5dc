"""Rich renderers for question plans, quiz results and SRS previews."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Optional

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..models import (
    SRS_RATINGS,
    QuizInputMode,
    QuizQuestion,
    QuizResult,
    VocabularyEntry,
)
from ..srs import next_review_preview


def _choice_labels(question: QuizQuestion) -> Text:
    text = Text()
    for idx, choice in enumerate(question.choices):
        if idx:
            text.append("  ")
        label = f"{chr(ord('A') + idx)}. {choice}"
        if idx == question.correct_index:
            text.append(label, style="bold green")
        else:
            text.append(label)
    return text


def render_plan(
    console: Console,
    questions: Sequence[QuizQuestion],
    *,
    input_mode: QuizInputMode = QuizInputMode.CHOICE,
) -> None:
    if not questions:
        console.print("[yellow]No questions selected.[/]")
        return
    table = Table(
        title=f"Quiz plan ({len(questions)} questions)",
        caption=f"Input mode: {QuizInputMode(input_mode).value}",
        box=box.SIMPLE,
        expand=True,
    )
    table.add_column("#", justify="right")
    table.add_column("Prompt", overflow="fold")
    table.add_column("Choices", overflow="fold")
    table.add_column("Reviews", justify="right")
    for idx, question in enumerate(questions, start=1):
        table.add_row(
            str(idx),
            Text(question.prompt),
            _choice_labels(question),
            str(question.entry.review_count),
        )
    console.print(table)


def render_result(console: Console, result: QuizResult) -> None:
    console.print()
    console.rule(Text("Quiz Summary", style="bold magenta"))

    overview = Table(
        show_header=False,
        box=box.MINIMAL_DOUBLE_HEAD,
        expand=False,
    )
    overview.add_column("Metric", style="bold")
    overview.add_column("Value", justify="right")
    overview.add_row("Total questions", str(result.total_questions))
    overview.add_row("Correct", str(result.correct_count))
    overview.add_row("Incorrect", str(result.incorrect_count))
    overview.add_row("Accuracy", f"{result.accuracy}%")
    overview.add_row("Duration", _format_duration(result.duration))
    console.print(overview)

    if not result.mistakes:
        return
    mistakes = Table(title="Mistakes", box=box.SIMPLE, expand=True)
    mistakes.add_column("Prompt", overflow="fold")
    mistakes.add_column("Your answer", style="red")
    mistakes.add_column("Correct answer", style="green")
    for mistake in result.mistakes:
        question = mistake.question
        mistakes.add_row(
            Text(question.prompt),
            Text(mistake.selected_answer),
            Text(question.correct_answer),
        )
    console.print(mistakes)


def render_preview(
    console: Console,
    entries: Sequence[VocabularyEntry],
    *,
    now: Optional[datetime] = None,
) -> None:
    table = Table(title="Next review intervals", box=box.SIMPLE)
    table.add_column("Term")
    for rating in SRS_RATINGS:
        table.add_column(rating.capitalize(), justify="right")
    for entry in entries:
        preview = next_review_preview(entry, now=now)
        table.add_row(Text(entry.term), *(preview[r] for r in SRS_RATINGS))
    console.print(table)


def _format_duration(seconds: int) -> str:
    minutes, secs = divmod(max(0, seconds), 60)
    if minutes:
        return f"{minutes}m {secs:02d}s"
    return f"{secs}s"
