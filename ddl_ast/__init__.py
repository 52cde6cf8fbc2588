"""Parse DDL scripts into a queryable AST, skipping statements that fail."""

from .parser import DDLParser, parse, parse_ast
from .errors import (
    DelimiterNotFound,
    LiteralNotFound,
    NoMatch,
    NotAnIdentifier,
    NotANumber,
    ParseError,
    StatementUnrecognized,
)

__all__ = [
    "DDLParser",
    "parse",
    "parse_ast",
    "ParseError",
    "NoMatch",
    "LiteralNotFound",
    "DelimiterNotFound",
    "NotAnIdentifier",
    "NotANumber",
    "StatementUnrecognized",
]
