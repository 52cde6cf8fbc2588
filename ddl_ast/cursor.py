"""Text cursor for hand-written DDL parsing.

The cursor wraps the text still to be parsed. Whitespace is insignificant
before anything that is consumed, and consumed text is returned trimmed.
"""

from __future__ import annotations

import dataclasses
import re

from .ast_nodes import QualifiedName
from .dictionary import DictionaryRules, parse_dictionary
from .errors import (
    DelimiterNotFound,
    LiteralNotFound,
    NotAnIdentifier,
    NotANumber,
)

_DISCARDED = re.compile(r"\r")
_REPEATED_WHITESPACE = re.compile(r"[ \t]+")
_WHITESPACE = re.compile(r"\s*")
_NEWLINES = re.compile(r"\s*\n\s*")

_IDENTIFIER = re.compile(r"\w+")
_NUMBER = re.compile(r"\d+(?:\.\d+)?")


def normalize(text: str) -> str:
    """Drop carriage returns and collapse runs of spaces and tabs."""
    text = _DISCARDED.sub("", text)
    return _REPEATED_WHITESPACE.sub(" ", text)


def trim(text: str) -> str:
    """Strip surrounding whitespace and fold line breaks into single spaces."""
    return _NEWLINES.sub(" ", text.strip())


class Cursor:
    def __init__(self, text: str):
        self.text = normalize(text)
        self.pos = 0

    def __len__(self) -> int:
        return self.remaining

    def __repr__(self) -> str:
        return f"<Cursor pos={self.pos} {self.context!r}>"

    @property
    def remaining(self) -> int:
        return len(self.text) - self.pos

    @property
    def context(self) -> str:
        return self.peek(20) + "[...]"

    def peek(self, amount: int) -> str:
        """Return up to ``amount`` characters without consuming them."""
        return self.text[self.pos : self.pos + max(amount, 0)]

    def skip_whitespace(self) -> None:
        self.pos = _WHITESPACE.match(self.text, self.pos).end()

    def at_end(self) -> bool:
        """True when nothing but whitespace is left."""
        self.skip_whitespace()
        return self.pos >= len(self.text)

    # --- Literals ---

    def try_consume(self, literal: str) -> bool:
        """Consume ``literal`` if the text starts with it. Never raises."""
        self.skip_whitespace()
        if not self.text.startswith(literal, self.pos):
            return False
        self.pos += len(literal)
        return True

    def consume(self, literal: str) -> str:
        if not self.try_consume(literal):
            self._error(LiteralNotFound, f"could not consume {literal!r}")
        return literal.strip()

    def consume_up_to(self, delimiter: str, include: bool = False) -> str:
        """Consume and return everything before ``delimiter``.

        With ``include`` the delimiter itself is consumed too, unless it is a
        newline.
        """
        end = self.text.find(delimiter, self.pos)
        if end == -1:
            self._error(
                DelimiterNotFound, f"could not consume up to {delimiter!r}"
            )
        consumed = self.text[self.pos : end]
        self.pos = end
        if include and delimiter != "\n":
            self.pos += len(delimiter)
        return trim(consumed)

    def consume_rest(self) -> str:
        consumed = self.text[self.pos :]
        self.pos = len(self.text)
        return trim(consumed)

    # --- Identifiers and numbers ---

    def consume_identifier(self) -> str:
        self.skip_whitespace()
        m = _IDENTIFIER.match(self.text, self.pos)
        if not m:
            self._error(NotAnIdentifier, "could not consume identifier")
        self.pos = m.end()
        return m.group(0)

    def consume_qualified_name(self) -> QualifiedName:
        """Consume ``name`` or ``scope.name``."""
        first = self.consume_identifier()
        after_first = self.pos
        if self.try_consume("."):
            self.skip_whitespace()
            m = _IDENTIFIER.match(self.text, self.pos)
            if m:
                self.pos = m.end()
                return QualifiedName(name=m.group(0), scope=first)
        self.pos = after_first
        return QualifiedName(name=first)

    def try_consume_qualified_name(self) -> QualifiedName | None:
        self.skip_whitespace()
        if not _IDENTIFIER.match(self.text, self.pos):
            return None
        return self.consume_qualified_name()

    def consume_number(self) -> str:
        self.skip_whitespace()
        m = _NUMBER.match(self.text, self.pos)
        if not m:
            self._error(NotANumber, "could not consume number")
        self.pos = m.end()
        return m.group(0)

    # --- Parameter dictionaries ---

    def consume_dictionary(
        self, rules: DictionaryRules | None = None, **options
    ) -> dict[str, str]:
        """Consume key/value parameters up to the rules' terminator.

        Keyword ``options`` override individual fields of ``rules``, e.g.
        ``cursor.consume_dictionary(separator=",")``.
        """
        rules = rules or DictionaryRules()
        if options:
            rules = dataclasses.replace(rules, **options)
        raw = self.consume_up_to(rules.terminator, include=True)
        return parse_dictionary(raw, rules)

    def _error(self, exc_class, msg: str):
        raise exc_class(f"{msg} at {self.context}", position=self.pos, context=self.context)
