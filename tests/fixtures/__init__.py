"""Shared testing fixtures for the vocab_quiz test suite."""

from .vocabulary import make_entry, make_vocabulary, write_deck  # noqa: F401

__all__ = [
    "make_entry",
    "make_vocabulary",
    "write_deck",
]
