"""Utilities: configuration constants, errors, evaluator, session, database."""

from .constants import ERROR_ANSWER, HISTORY_LIMIT

__all__ = ["ERROR_ANSWER", "HISTORY_LIMIT"]
