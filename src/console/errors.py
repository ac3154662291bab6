"""Exception types for the trueskill console."""

from __future__ import annotations


class ConsoleError(Exception):
    """Base class for errors raised by the console itself."""


class ValidationError(ConsoleError):
    """Operator input was rejected before any network call was made.

    The message is shown to the operator as-is, so keep it short and
    actionable.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message
