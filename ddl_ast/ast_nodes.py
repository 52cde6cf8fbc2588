"""AST node dataclasses for DDL statements.

Each node renders to a compact canonical string with ``str()``, which is
what the tests compare against, and to a plain dict with ``to_dict()``.

Nodes are frozen. Those holding parameter dicts or lists of children are
unhashable; ``QualifiedName`` and the leaf statements can be used as keys.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Union


def _render_parameters(parameters: dict[str, str]) -> str:
    return ",".join(f"{k}={v}" for k, v in parameters.items())


# --- Names ---


@dataclass(frozen=True)
class QualifiedName:
    """An identifier with an optional scope, e.g. ``SCHEMA1.TABLE1``."""
    name: str
    scope: str | None = None

    def __str__(self) -> str:
        if self.scope:
            return f"{self.scope}.{self.name}"
        return self.name

    def to_dict(self) -> dict:
        return {"scope": self.scope, "name": self.name}


# --- Constraints ---


@dataclass(frozen=True)
class Constraint:
    name: QualifiedName
    parameters: dict[str, str] = field(default_factory=dict)

    __hash__ = None  # unhashable: holds a dict

    def __str__(self) -> str:
        return f"{self.name}{{{_render_parameters(self.parameters)}}}"

    def to_dict(self) -> dict:
        return {
            "type": "constraint",
            "name": self.name.to_dict(),
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class ForeignKeyConstraint:
    name: QualifiedName
    table: QualifiedName  # referenced table
    parameters: dict[str, str] = field(default_factory=dict)

    __hash__ = None

    def __str__(self) -> str:
        return (
            f"{self.name} ON {self.table}"
            f"{{{_render_parameters(self.parameters)}}}"
        )

    def to_dict(self) -> dict:
        return {
            "type": "foreign_key",
            "name": self.name.to_dict(),
            "table": self.table.to_dict(),
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class CheckConstraint:
    field: QualifiedName
    rules: str  # raw boolean expression

    @property
    def name(self) -> QualifiedName:
        return self.field

    def __str__(self) -> str:
        return f"check:{self.field}:={self.rules}"

    def to_dict(self) -> dict:
        return {
            "type": "check",
            "field": self.field.to_dict(),
            "rules": self.rules,
        }


AnyConstraint = Union[Constraint, ForeignKeyConstraint, CheckConstraint]


# --- Table fields ---


@dataclass(frozen=True)
class Field:
    name: QualifiedName
    type: str  # e.g. "DECIMAL(4,5)"
    parameters: dict[str, str] = field(default_factory=dict)
    constraints: list[AnyConstraint] = field(default_factory=list)

    __hash__ = None

    def __str__(self) -> str:
        text = f"{self.name}:{self.type}{{{_render_parameters(self.parameters)}}}"
        if self.constraints:
            text += "<" + ";".join(str(c) for c in self.constraints) + ">"
        return text

    def to_dict(self) -> dict:
        return {
            "name": self.name.to_dict(),
            "type": self.type,
            "parameters": dict(self.parameters),
            "constraints": [c.to_dict() for c in self.constraints],
        }


# --- Statements ---


@dataclass(frozen=True)
class Comment:
    body: str

    def __str__(self) -> str:
        return f"comment({self.body})"

    def to_dict(self) -> dict:
        return {"type": "comment", "body": self.body}


@dataclass(frozen=True)
class CreateDatabase:
    name: QualifiedName
    parameters: dict[str, str] = field(default_factory=dict)

    __hash__ = None

    @property
    def simple_name(self) -> str:
        return self.name.name

    def __str__(self) -> str:
        return f"database({self.name}){{{_render_parameters(self.parameters)}}}"

    def to_dict(self) -> dict:
        return {
            "type": "create_database",
            "name": self.name.to_dict(),
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class CreateTablespace:
    name: QualifiedName
    database: QualifiedName
    parameters: dict[str, str] = field(default_factory=dict)

    __hash__ = None

    @property
    def simple_name(self) -> str:
        return self.name.name

    def __str__(self) -> str:
        return (
            f"tablespace({self.name} in {self.database})"
            f"{{{_render_parameters(self.parameters)}}}"
        )

    def to_dict(self) -> dict:
        return {
            "type": "create_tablespace",
            "name": self.name.to_dict(),
            "database": self.database.to_dict(),
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class CreateTable:
    name: QualifiedName
    database: QualifiedName
    fields: list[Field] = field(default_factory=list)
    constraints: list[AnyConstraint] = field(default_factory=list)
    parameters: dict[str, str] = field(default_factory=dict)

    __hash__ = None

    @property
    def simple_name(self) -> str:
        return self.name.name

    def __str__(self) -> str:
        text = f"table({self.name} in {self.database})"
        text += "[" + ",".join(str(f) for f in self.fields) + "]"
        if self.constraints:
            text += "<" + ",".join(str(c) for c in self.constraints) + ">"
        if self.parameters:
            text += "{" + _render_parameters(self.parameters) + "}"
        return text

    def to_dict(self) -> dict:
        return {
            "type": "create_table",
            "name": self.name.to_dict(),
            "database": self.database.to_dict(),
            "fields": [f.to_dict() for f in self.fields],
            "constraints": [c.to_dict() for c in self.constraints],
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class CreateIndex:
    name: QualifiedName
    table: QualifiedName
    fields: str  # raw field list, e.g. "Field1 ASC"
    parameters: dict[str, str] = field(default_factory=dict)

    __hash__ = None

    @property
    def simple_name(self) -> str:
        return self.name.name

    @property
    def unique(self) -> bool:
        return self.parameters.get("UNIQUE") == "True"

    def __str__(self) -> str:
        return (
            f"index({self.name} on {self.table}[{self.fields}])"
            f"{{{_render_parameters(self.parameters)}}}"
        )

    def to_dict(self) -> dict:
        return {
            "type": "create_index",
            "name": self.name.to_dict(),
            "table": self.table.to_dict(),
            "fields": self.fields,
            "parameters": dict(self.parameters),
        }


@dataclass(frozen=True)
class CreateView:
    name: QualifiedName
    definition: str  # raw SQL text

    @property
    def simple_name(self) -> str:
        return self.name.name

    def __str__(self) -> str:
        return f"view({self.name})[{self.definition}]"

    def to_dict(self) -> dict:
        return {
            "type": "create_view",
            "name": self.name.to_dict(),
            "definition": self.definition,
        }


@dataclass(frozen=True)
class SetParameter:
    variable: str
    value: str

    def __str__(self) -> str:
        return f"param({self.variable}={self.value})"

    def to_dict(self) -> dict:
        return {"type": "set_parameter", "variable": self.variable, "value": self.value}


@dataclass(frozen=True)
class AlterTableAddConstraint:
    table: QualifiedName
    constraint: AnyConstraint

    __hash__ = None

    def __str__(self) -> str:
        return f"alter({self.table}:{self.constraint})"

    def to_dict(self) -> dict:
        return {
            "type": "alter_table_add_constraint",
            "table": self.table.to_dict(),
            "constraint": self.constraint.to_dict(),
        }


Statement = Union[
    Comment,
    CreateDatabase,
    CreateTablespace,
    CreateTable,
    CreateIndex,
    CreateView,
    SetParameter,
    AlterTableAddConstraint,
]
