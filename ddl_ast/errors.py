"""Exceptions raised while parsing DDL text."""

from __future__ import annotations


class ParseError(Exception):
    """Raised when DDL parsing fails."""

    def __init__(self, message, position=None, context=None):
        super().__init__(message)
        self.message = message
        self._position = position
        self._context = context

    @property
    def position(self) -> int | None:
        """Offset into the normalized input where the failure was detected."""
        return self._position

    @property
    def context(self) -> str | None:
        return self._context


class NoMatch(ParseError):
    """An expected piece of text was not found at the cursor."""


class LiteralNotFound(NoMatch):
    pass


class DelimiterNotFound(NoMatch):
    pass


class NotAnIdentifier(NoMatch):
    pass


class NotANumber(NoMatch):
    pass


class StatementUnrecognized(ParseError):
    """Recorded when a statement could not be parsed and was skipped.

    The message is the skipped text prefixed with ``-->``.
    """

    def __init__(self, skipped: str, position=None):
        super().__init__("-->" + skipped, position=position)
        self.skipped = skipped
