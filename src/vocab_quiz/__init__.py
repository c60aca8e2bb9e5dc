"""Vocabulary quiz planning and scoring."""

__version__ = "0.1.0"
