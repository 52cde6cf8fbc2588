"""
Tests for AST node rendering:
  - str() canonical forms
  - to_dict()
  - convenience properties
"""

import dataclasses

import pytest

from ddl_ast.ast_nodes import (
    AlterTableAddConstraint,
    CheckConstraint,
    Comment,
    Constraint,
    CreateDatabase,
    CreateIndex,
    CreateTable,
    CreateTablespace,
    CreateView,
    Field,
    ForeignKeyConstraint,
    QualifiedName,
    SetParameter,
)


PARAMS = {"p1": "v1", "p2": "v2", "p3": "v3"}


def qn(name, scope=None):
    return QualifiedName(name=name, scope=scope)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TestRendering:
    def test_comment(self):
        assert str(Comment(body="123")) == "comment(123)"

    def test_create_database(self):
        assert (
            str(CreateDatabase(name=qn("123"), parameters=PARAMS))
            == "database(123){p1=v1,p2=v2,p3=v3}"
        )

    def test_create_tablespace(self):
        stmt = CreateTablespace(name=qn("123"), database=qn("456"), parameters=PARAMS)
        assert str(stmt) == "tablespace(123 in 456){p1=v1,p2=v2,p3=v3}"

    def test_field(self):
        fld = Field(name=qn("Field1"), type="Type1", parameters=PARAMS)
        assert str(fld) == "Field1:Type1{p1=v1,p2=v2,p3=v3}"

    def test_field_without_parameters(self):
        assert str(Field(name=qn("F4"), type="T4")) == "F4:T4{}"

    def test_field_with_constraints(self):
        fld = Field(
            name=qn("F1"),
            type="T1",
            constraints=[
                CheckConstraint(field=qn("F1"), rules="F1 > 0"),
                Constraint(name=qn("PK"), parameters={"PRIMARY_KEY": "F1"}),
            ],
        )
        assert str(fld) == "F1:T1{}<check:F1:=F1 > 0;PK{PRIMARY_KEY=F1}>"

    def test_create_table(self):
        stmt = CreateTable(
            name=qn("Table1"),
            database=qn("Database1"),
            fields=[
                Field(name=qn("Field1"), type="Type1", parameters=PARAMS),
                Field(name=qn("Field2"), type="Type2", parameters={"p4": "v4"}),
            ],
            constraints=[Constraint(name=qn("Constraint1"), parameters=PARAMS)],
            parameters={"p1": "v1"},
        )
        assert str(stmt) == (
            "table(Table1 in Database1)"
            "[Field1:Type1{p1=v1,p2=v2,p3=v3},Field2:Type2{p4=v4}]"
            "<Constraint1{p1=v1,p2=v2,p3=v3}>{p1=v1}"
        )

    def test_create_table_omits_empty_sections(self):
        stmt = CreateTable(name=qn("T"), database=qn("D"))
        assert str(stmt) == "table(T in D)[]"

    def test_create_index(self):
        stmt = CreateIndex(
            name=qn("Index1"), table=qn("Table1"), fields="F1,F2,F3", parameters=PARAMS
        )
        assert str(stmt) == "index(Index1 on Table1[F1,F2,F3]){p1=v1,p2=v2,p3=v3}"

    def test_create_view(self):
        stmt = CreateView(name=qn("View1"), definition="SELECT * FROM Table1")
        assert str(stmt) == "view(View1)[SELECT * FROM Table1]"

    def test_set_parameter(self):
        stmt = SetParameter(variable="Variable1", value="Value1")
        assert str(stmt) == "param(Variable1=Value1)"

    def test_foreign_key(self):
        fk = ForeignKeyConstraint(
            name=qn("FK1"), table=qn("T2", "S1"), parameters={"KEYS": "A,B"}
        )
        assert str(fk) == "FK1 ON S1.T2{KEYS=A,B}"

    def test_alter_table(self):
        stmt = AlterTableAddConstraint(
            table=qn("Table1"),
            constraint=Constraint(name=qn("PK"), parameters={"PRIMARY_KEY": "F1"}),
        )
        assert str(stmt) == "alter(Table1:PK{PRIMARY_KEY=F1})"

    def test_check_constraint(self):
        rules = "Field1 = '0' OR Field1 = '1'"
        check = CheckConstraint(field=qn("Field1"), rules=rules)
        assert str(check) == "check:Field1:=" + rules

    def test_fully_qualified_name(self):
        assert str(qn("Name1", "Scope1")) == "Scope1.Name1"

    def test_simple_qualified_name(self):
        assert str(qn("Name1")) == "Name1"


# ---------------------------------------------------------------------------
# Properties and immutability
# ---------------------------------------------------------------------------


class TestProperties:
    def test_simple_name(self):
        index = CreateIndex(
            name=qn("Index1", "S1"), table=qn("Table1"), fields="F1", parameters={}
        )
        assert index.simple_name == "Index1"

    def test_unique(self):
        make = lambda value: CreateIndex(
            name=qn("I"), table=qn("T"), fields="F", parameters={"UNIQUE": value}
        )
        assert make("True").unique
        assert not make("False").unique

    def test_check_constraint_name(self):
        assert CheckConstraint(field=qn("F1"), rules="x").name == qn("F1")

    def test_nodes_are_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Comment(body="x").body = "y"

    @pytest.mark.parametrize(
        "node",
        [
            Constraint(name=qn("PK")),
            ForeignKeyConstraint(name=qn("FK"), table=qn("T")),
            Field(name=qn("F"), type="T"),
            CreateDatabase(name=qn("D")),
            CreateTablespace(name=qn("TS"), database=qn("D")),
            CreateTable(name=qn("T"), database=qn("D")),
            CreateIndex(name=qn("I"), table=qn("T"), fields="F"),
            AlterTableAddConstraint(
                table=qn("T"), constraint=CheckConstraint(field=qn("F"), rules="x")
            ),
        ],
    )
    def test_container_nodes_are_unhashable(self, node):
        with pytest.raises(TypeError, match="unhashable"):
            hash(node)

    def test_leaf_nodes_are_hashable(self):
        assert {qn("A", "S"), qn("A", "S")} == {qn("A", "S")}
        assert hash(Comment(body="x")) == hash(Comment(body="x"))
        assert isinstance(hash(SetParameter(variable="A", value="1")), int)
        assert CheckConstraint(field=qn("F"), rules="x") in {
            CheckConstraint(field=qn("F"), rules="x")
        }


# ---------------------------------------------------------------------------
# to_dict()
# ---------------------------------------------------------------------------


class TestToDict:
    def test_create_table(self):
        stmt = CreateTable(
            name=qn("T", "S"),
            database=qn("D"),
            fields=[Field(name=qn("F"), type="INTEGER", parameters={"NULL": "False"})],
        )
        assert stmt.to_dict() == {
            "type": "create_table",
            "name": {"scope": "S", "name": "T"},
            "database": {"scope": None, "name": "D"},
            "fields": [
                {
                    "name": {"scope": None, "name": "F"},
                    "type": "INTEGER",
                    "parameters": {"NULL": "False"},
                    "constraints": [],
                }
            ],
            "constraints": [],
            "parameters": {},
        }

    def test_alter_table(self):
        stmt = AlterTableAddConstraint(
            table=qn("T"), constraint=CheckConstraint(field=qn("F"), rules="F > 1")
        )
        assert stmt.to_dict() == {
            "type": "alter_table_add_constraint",
            "table": {"scope": None, "name": "T"},
            "constraint": {
                "type": "check",
                "field": {"scope": None, "name": "F"},
                "rules": "F > 1",
            },
        }
