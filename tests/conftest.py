from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Iterator

import pytest

TESTS_DIR = Path(__file__).resolve().parent
ROOT = TESTS_DIR.parent
for extra in (TESTS_DIR, ROOT / "src"):
    path_str = str(extra)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from vocab_quiz.core.logging import LOGGER_NAME  # noqa: E402


@pytest.fixture(autouse=True)
def _close_package_log_handlers() -> Iterator[None]:
    """Keep file handlers from leaking between tmp directories."""

    yield
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
