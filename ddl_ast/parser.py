"""Recursive descent parser for DDL scripts.

A script is a sequence of ``--`` line comments and ``;`` terminated
statements. Statements that cannot be parsed are skipped up to the next
``;`` and recorded as errors, so one bad statement never stops the rest of
the script from being parsed.
"""

from __future__ import annotations

import logging
from typing import Mapping

from . import ast_nodes as ast
from .cursor import Cursor
from .dictionary import STATEMENT_RULES, DictionaryRules
from .errors import (
    DelimiterNotFound,
    LiteralNotFound,
    NoMatch,
    ParseError,
    StatementUnrecognized,
)

logger = logging.getLogger(__name__)


def parse_ast(ddl: str) -> list[ast.Statement]:
    """Parse a DDL script and return its statements as dataclass nodes.

    Errors are skipped and logged; use ``DDLParser`` to inspect them.
    """
    parser = DDLParser()
    parser.parse(ddl)
    return parser.statements


def parse(ddl: str) -> dict:
    """Parse a DDL script and return statements and errors as a dict."""
    parser = DDLParser()
    parser.parse(ddl)
    return {
        "statements": [stmt.to_dict() for stmt in parser.statements],
        "errors": [str(error) for error in parser.errors],
    }


class DDLParser:
    def __init__(self, rules: Mapping[str, DictionaryRules] | None = None):
        self.rules = dict(STATEMENT_RULES)
        for name, rule_set in (rules or {}).items():
            if name not in self.rules:
                raise ValueError(f"Unknown dictionary rule set: {name!r}")
            self.rules[name] = rule_set
        self.statements: list[ast.Statement] = []
        self.errors: list[StatementUnrecognized] = []
        self.cursor: Cursor | None = None

    def parse(self, ddl: str) -> bool:
        """Parse ``ddl`` into ``self.statements`` and ``self.errors``.

        Returns True when every statement was recognized.
        """
        self.cursor = Cursor(ddl)
        self.statements = []
        self.errors = []

        while not self.cursor.at_end():
            logger.debug(
                "%d characters remaining: %r [...]",
                self.cursor.remaining,
                self.cursor.peek(50),
            )
            try:
                if self._parse_comment() or self._parse_statement():
                    continue
                self._recover(None)
            except ParseError as e:
                self._recover(e)

        return not self.errors

    def _recover(self, cause: ParseError | None):
        """Skip up to and including the next ``;`` and record the skipped text."""
        position = self.cursor.pos
        try:
            skipped = self.cursor.consume_up_to(";", include=True)
        except DelimiterNotFound:
            skipped = self.cursor.consume_rest()
        error = StatementUnrecognized(skipped, position=position)
        error.__cause__ = cause
        logger.warning(
            "Skipped unrecognized statement at %d: %r (%s)",
            position,
            skipped,
            cause or "no statement matched",
        )
        self.errors.append(error)

    # --- Token helpers ---

    def _keyword(self, word: str) -> bool:
        """Consume ``word`` followed by a space or a newline."""
        return self.cursor.try_consume(word + " ") or self.cursor.try_consume(
            word + "\n"
        )

    def _error(self, msg: str):
        raise NoMatch(
            f"{msg} at {self.cursor.context}",
            position=self.cursor.pos,
            context=self.cursor.context,
        )

    def _parenthesized(self) -> str:
        """Consume ``( ... )`` and return the raw text between the parentheses."""
        self.cursor.consume("(")
        text = self.cursor.consume_up_to(")")
        self.cursor.consume(")")
        return text

    # --- Comments ---

    def _parse_comment(self) -> bool:
        if not self.cursor.try_consume("--"):
            return False
        try:
            body = self.cursor.consume_up_to("\n")
        except DelimiterNotFound:
            body = self.cursor.consume_rest()
        self.statements.append(ast.Comment(body=body))
        return True

    # --- Statements ---

    def _parse_statement(self) -> bool:
        return (
            self._parse_create_statement()
            or self._parse_alter_statement()
            or self._parse_set_statement()
        )

    def _parse_create_statement(self) -> bool:
        if not self._keyword("CREATE"):
            return False
        stmt = (
            self._parse_create_database()
            or self._parse_create_tablespace()
            or self._parse_create_table()
            or self._parse_create_index()
            or self._parse_create_view()
        )
        if stmt is None:
            self._error("Expected DATABASE, TABLESPACE, TABLE, INDEX or VIEW")
        self.statements.append(stmt)
        return True

    def _parse_create_database(self) -> ast.CreateDatabase | None:
        if not self._keyword("DATABASE"):
            return None
        name = self.cursor.consume_qualified_name()
        parameters = self.cursor.consume_dictionary(self.rules["database"])
        return ast.CreateDatabase(name=name, parameters=parameters)

    def _parse_create_tablespace(self) -> ast.CreateTablespace | None:
        if not self._keyword("TABLESPACE"):
            return None
        name = self.cursor.consume_qualified_name()
        self.cursor.consume("IN")
        database = self.cursor.consume_qualified_name()
        parameters = self.cursor.consume_dictionary(self.rules["tablespace"])
        return ast.CreateTablespace(name=name, database=database, parameters=parameters)

    def _parse_create_table(self) -> ast.CreateTable | None:
        if not self._keyword("TABLE"):
            return None
        name = self.cursor.consume_qualified_name()
        self.cursor.consume("(")

        fields: list[ast.Field] = []
        constraints: list[ast.AnyConstraint] = []
        while True:
            constraint = self._parse_constraint()
            if constraint is not None:
                constraints.append(constraint)
            else:
                fld = self._parse_field()
                if fld is None:
                    break
                fields.append(fld)
            self.cursor.try_consume(",")

        self.cursor.consume(")")
        self.cursor.consume("IN")
        database = self.cursor.consume_qualified_name()
        parameters = self.cursor.consume_dictionary(self.rules["table"])
        return ast.CreateTable(
            name=name,
            database=database,
            fields=fields,
            constraints=constraints,
            parameters=parameters,
        )

    # --- Constraints ---

    def _parse_constraint(self) -> ast.AnyConstraint | None:
        if not self._keyword("CONSTRAINT"):
            return None
        name = self.cursor.consume_qualified_name()
        constraint = (
            self._parse_primary_key(name)
            or self._parse_foreign_key(name)
            or self._parse_check(name)
        )
        if constraint is None:
            self._error("Expected PRIMARY KEY, FOREIGN KEY or CHECK")
        return constraint

    def _parse_primary_key(self, name: ast.QualifiedName) -> ast.Constraint | None:
        if not self._keyword("PRIMARY KEY"):
            return None
        fields = self._parenthesized()
        return ast.Constraint(name=name, parameters={"PRIMARY_KEY": fields})

    def _parse_foreign_key(
        self, name: ast.QualifiedName
    ) -> ast.ForeignKeyConstraint | None:
        if not self._keyword("FOREIGN KEY"):
            return None
        keys = self._parenthesized().replace(" ", "")
        self.cursor.consume("REFERENCES")
        table = self.cursor.consume_qualified_name()
        references = self._parenthesized().replace(" ", "")

        parameters = self.cursor.consume_dictionary(self.rules["foreign_key"])
        parameters["KEYS"] = keys
        parameters["REFERENCES"] = references
        return ast.ForeignKeyConstraint(name=name, table=table, parameters=parameters)

    def _parse_check(self, name: ast.QualifiedName) -> ast.CheckConstraint | None:
        if not self._keyword("CHECK"):
            return None
        rules = self._parenthesized()
        return ast.CheckConstraint(field=name, rules=rules)

    # --- Fields ---

    def _parse_field(self) -> ast.Field | None:
        # No identifier here means no more fields.
        name = self.cursor.try_consume_qualified_name()
        if name is None:
            return None
        type_ = self._parse_type()

        parameters: dict[str, str] = {}
        constraints: list[ast.AnyConstraint] = []
        while True:
            constraint = self._parse_constraint()
            if constraint is not None:
                constraints.append(constraint)
            elif not self._parse_field_parameter(parameters):
                break

        return ast.Field(
            name=name, type=type_, parameters=parameters, constraints=constraints
        )

    def _parse_type(self) -> str:
        """Parse ``NAME``, ``NAME(n)`` or ``NAME(n,m)``."""
        type_ = self.cursor.consume_identifier()
        if not self.cursor.try_consume("("):
            return type_
        size = [self.cursor.consume_number()]
        if self.cursor.try_consume(","):
            size.append(self.cursor.consume_number())
        self.cursor.consume(")")
        return f"{type_}({','.join(size)})"

    def _parse_field_parameter(self, parameters: dict[str, str]) -> bool:
        if self.cursor.try_consume("NOT NULL"):
            parameters["NULL"] = "False"
        elif self.cursor.try_consume("FOR"):
            parameters["FOR"] = self.cursor.consume_identifier() + "_DATA"
            self.cursor.consume("DATA")
        elif self.cursor.try_consume("WITH DEFAULT"):
            literal = self._parse_string_literal()
            parameters["DEFAULT"] = "True" if literal is None else literal
        else:
            return False
        return True

    def _parse_string_literal(self) -> str | None:
        if not self.cursor.try_consume("'"):
            return None
        literal = self.cursor.consume_up_to("'")
        self.cursor.consume("'")
        return literal

    # --- Indexes and views ---

    def _parse_create_index(self) -> ast.CreateIndex | None:
        unique = self._keyword("UNIQUE")
        if not self._keyword("INDEX"):
            if unique:
                raise LiteralNotFound(
                    f"could not consume 'INDEX' at {self.cursor.context}",
                    position=self.cursor.pos,
                    context=self.cursor.context,
                )
            return None
        name = self.cursor.consume_qualified_name()
        self.cursor.consume("ON")
        table = self.cursor.consume_qualified_name()
        fields = self._parenthesized()

        parameters = self.cursor.consume_dictionary(self.rules["index"])
        parameters["UNIQUE"] = str(unique)
        return ast.CreateIndex(
            name=name, table=table, fields=fields, parameters=parameters
        )

    def _parse_create_view(self) -> ast.CreateView | None:
        if not self._keyword("VIEW"):
            return None
        name = self.cursor.consume_qualified_name()
        self.cursor.consume("AS")
        definition = self.cursor.consume_up_to(";", include=True)
        return ast.CreateView(name=name, definition=definition)

    # --- ALTER ---

    def _parse_alter_statement(self) -> bool:
        if not self._keyword("ALTER"):
            return False
        if not self._keyword("TABLE"):
            self._error("Expected TABLE")
        table = self.cursor.consume_qualified_name()
        if not self._keyword("ADD"):
            self._error("Expected ADD")
        constraint = self._parse_constraint()
        if constraint is None:
            self._error("Expected CONSTRAINT")
        # a foreign key's parameter list already consumed the terminator
        self.cursor.try_consume(";")
        self.statements.append(
            ast.AlterTableAddConstraint(table=table, constraint=constraint)
        )
        return True

    # --- SET ---

    def _parse_set_statement(self) -> bool:
        if not self._keyword("SET"):
            return False
        variable = self.cursor.consume_up_to("=")
        self.cursor.consume("=")
        value = self.cursor.consume_up_to(";", include=True)
        self.statements.append(ast.SetParameter(variable=variable, value=value))
        return True
