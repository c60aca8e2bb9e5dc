import argparse
import logging
import random
from pathlib import Path
from typing import Optional, Sequence

from rich.console import Console

from ..core import (
    QuizConfig,
    TomlConfigError,
    WorkspaceError,
    configure_logger,
    ensure_workspace,
    find_config_path,
    load_config,
    write_toml_template,
    CONFIG_FILENAME,
)
from .manager import create_questions, select_questions
from .models import QuizIndexError, QuizInputMode, QuizMode, QuizResult
from .session import start_session, summarize_session
from .utils import (
    DeckFormatError,
    load_deck,
    load_session,
    question_to_dict,
    write_session,
)
from .view import render_plan, render_preview, render_result

logger = logging.getLogger("vocab_quiz.cli")


def _setup(args: argparse.Namespace) -> QuizConfig:
    cfg_path = find_config_path(getattr(args, "config", None))
    cfg = load_config(cfg_path)
    layout = ensure_workspace()
    configure_logger(
        log_dir=layout.path_for("logs"),
        level=cfg.log_level,
        verbose=bool(args.verbose) or cfg.verbose,
    )
    logger.debug(
        "Loaded configuration",
        extra={"config": str(cfg_path) if cfg_path else "defaults"},
    )
    return cfg


def _cmd_init(args: argparse.Namespace, console: Console) -> int:
    layout = ensure_workspace()
    path = layout.path_for("config") / CONFIG_FILENAME
    write_toml_template(path, overwrite=bool(args.force))
    console.print(f"Created template {path}")
    return 0


def _cmd_plan(
    args: argparse.Namespace, cfg: QuizConfig, console: Console
) -> int:
    deck_path = Path(args.deck).expanduser()
    if not deck_path.exists():
        console.print(f"[red]Deck not found: {deck_path}[/]")
        return 1
    vocabulary = load_deck(deck_path)
    if not vocabulary:
        console.print("[yellow]Vocabulary deck is empty.[/]")
        return 1
    count = args.count if args.count is not None else cfg.question_count
    mode = QuizMode(args.mode or cfg.mode)
    input_mode = QuizInputMode(args.input_mode or cfg.input_mode)
    rng = random.Random(args.seed)

    selected = select_questions(
        vocabulary, count, rng=rng, noise_scale=cfg.noise_scale
    )
    questions = create_questions(selected, vocabulary, mode, rng=rng)
    logger.info(
        "Planned quiz",
        extra={
            "deck": deck_path,
            "requested": count,
            "planned": len(questions),
            "mode": mode.value,
            "input_mode": input_mode.value,
        },
    )
    if args.json:
        console.print_json(
            data=[question_to_dict(question) for question in questions]
        )
    else:
        render_plan(console, questions, input_mode=input_mode)
    if args.output:
        out = Path(args.output).expanduser()
        write_session(out, start_session(questions), input_mode=input_mode)
        console.print(f"Wrote session -> {out}")
    return 0 if questions else 1


def _result_to_dict(result: QuizResult) -> dict:
    return {
        "total_questions": result.total_questions,
        "correct_count": result.correct_count,
        "incorrect_count": result.incorrect_count,
        "accuracy": result.accuracy,
        "duration": result.duration,
        "mistakes": [
            {
                "id": m.question.entry.id,
                "prompt": m.question.prompt,
                "selected_answer": m.selected_answer,
                "correct_answer": m.question.correct_answer,
            }
            for m in result.mistakes
        ],
    }


def _cmd_report(args: argparse.Namespace, console: Console) -> int:
    session_path = Path(args.session).expanduser()
    if not session_path.exists():
        console.print(f"[red]Session not found: {session_path}[/]")
        return 1
    session = load_session(session_path)
    result = summarize_session(session)
    logger.info(
        "Summarized session",
        extra={"session": session_path, "accuracy": result.accuracy},
    )
    if args.json:
        console.print_json(data=_result_to_dict(result))
    else:
        render_result(console, result)
    return 0


def _cmd_preview(args: argparse.Namespace, console: Console) -> int:
    deck_path = Path(args.deck).expanduser()
    if not deck_path.exists():
        console.print(f"[red]Deck not found: {deck_path}[/]")
        return 1
    entries = load_deck(deck_path)
    if args.ids:
        wanted = set(args.ids)
        entries = [e for e in entries if e.id in wanted]
    if not entries:
        console.print("[yellow]No matching vocabulary entries.[/]")
        return 1
    render_preview(console, entries)
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="vocab-quiz",
        description="Plan and score vocabulary quizzes",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument("--config", help="Path to quiz.toml")
    p.add_argument(
        "-v", "--verbose", action="store_true", help="Log to the console"
    )
    sub = p.add_subparsers(dest="command", required=True)

    sp_init = sub.add_parser("init", help="Write a quiz.toml template")
    sp_init.add_argument("--force", action="store_true")

    sp_plan = sub.add_parser(
        "plan", help="Select entries and build multiple-choice questions"
    )
    sp_plan.add_argument("deck", help="Vocabulary deck (JSONL)")
    sp_plan.add_argument("--count", type=int)
    sp_plan.add_argument(
        "--mode", choices=[m.value for m in QuizMode], default=None
    )
    sp_plan.add_argument(
        "--input-mode",
        choices=[m.value for m in QuizInputMode],
        default=None,
        help="How answers will be collected (default: from config)",
    )
    sp_plan.add_argument("--seed", type=int)
    sp_plan.add_argument("--output", help="Write a new session JSON here")
    sp_plan.add_argument("--json", action="store_true")

    sp_report = sub.add_parser("report", help="Summarize a recorded session")
    sp_report.add_argument("session", help="Session JSON file")
    sp_report.add_argument("--json", action="store_true")

    sp_preview = sub.add_parser(
        "preview", help="Show next review intervals per rating"
    )
    sp_preview.add_argument("deck", help="Vocabulary deck (JSONL)")
    sp_preview.add_argument("--id", dest="ids", action="append")
    return p


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    console: Optional[Console] = None,
) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    console = console or Console()
    try:
        if args.command == "init":
            return _cmd_init(args, console)
        cfg = _setup(args)
        if args.command == "plan":
            return _cmd_plan(args, cfg, console)
        if args.command == "report":
            return _cmd_report(args, console)
        if args.command == "preview":
            return _cmd_preview(args, console)
    except (
        TomlConfigError,
        WorkspaceError,
        DeckFormatError,
        QuizIndexError,
    ) as exc:
        logger.error("Command failed: %s", exc)
        console.print(f"Error: {exc}", style="red", markup=False)
        return 2
    parser.print_help()  # pragma: no cover - argparse enforces a command
    return 2


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":  # pragma: no cover - module CLI guard
    run()
