from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path

from rich.console import Console

from vocab_quiz.core import logging as core_logging


def _handlers(logger: logging.Logger, marker: str):
    return [h for h in logger.handlers if getattr(h, marker, False)]


def test_configure_logger_writes_json(tmp_path):
    logger, log_path = core_logging.configure_logger(
        "vocab_quiz.test_json", log_dir=tmp_path / "logs", level="INFO"
    )

    logger.debug("hidden")
    logger.info(
        "planned",
        extra={
            "deck": Path("deck.jsonl"),
            "when": datetime(2024, 1, 1, tzinfo=timezone.utc),
            "ids": ("a", "b"),
        },
    )
    try:
        raise ValueError("boom")
    except ValueError:
        logger.exception("failed")
    for handler in logger.handlers:
        handler.flush()

    lines = log_path.read_text(encoding="utf-8").strip().splitlines()
    assert len(lines) == 2
    first = json.loads(lines[0])
    assert first["message"] == "planned"
    assert first["extra"] == {
        "deck": "deck.jsonl",
        "when": "2024-01-01T00:00:00+00:00",
        "ids": ["a", "b"],
    }
    assert "ValueError" in json.loads(lines[1])["exception"]


def test_configure_logger_reuses_handlers(tmp_path):
    name = "vocab_quiz.test_reuse"
    logger, _ = core_logging.configure_logger(name, log_dir=tmp_path / "a")
    core_logging.configure_logger(name, log_dir=tmp_path / "a")
    assert len(_handlers(logger, "_vocab_quiz_file")) == 1

    _, moved = core_logging.configure_logger(name, log_dir=tmp_path / "b")
    assert len(_handlers(logger, "_vocab_quiz_file")) == 1
    assert moved == tmp_path / "b" / "test_reuse.log"


def test_verbose_adds_and_removes_console_handler(tmp_path):
    console = Console(record=True, width=120)
    name = "vocab_quiz.test_verbose"
    logger, _ = core_logging.configure_logger(
        name, log_dir=tmp_path, verbose=True, console=console
    )
    assert len(_handlers(logger, "_vocab_quiz_console")) == 1

    logger.debug("console message")
    assert "console message" in console.export_text()

    core_logging.configure_logger(name, log_dir=tmp_path, verbose=False)
    assert _handlers(logger, "_vocab_quiz_console") == []


def test_unknown_level_falls_back_to_info(tmp_path):
    logger, _ = core_logging.configure_logger(
        "vocab_quiz.test_level", log_dir=tmp_path, level="chatty"
    )
    (handler,) = _handlers(logger, "_vocab_quiz_file")
    assert handler.level == logging.INFO
