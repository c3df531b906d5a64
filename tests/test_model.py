"""Tests for the schema model types."""

import pytest
from pydantic import ValidationError

from schema_codegen.core.model import Column, ForeignKey, QualifiedName


def test_qualified_name_accepts_schema_alias():
    name = QualifiedName(name="users", schema="public", catalog="db")

    assert name.schema_ == "public"
    assert name.model_dump(by_alias=True) == {
        "name": "users",
        "schema": "public",
        "catalog": "db",
    }


def test_qualified_name_requires_name():
    with pytest.raises(ValidationError):
        QualifiedName(name="", schema="public")


def test_qualified_name_is_frozen():
    name = QualifiedName(name="users")

    with pytest.raises(ValidationError):
        name.catalog = "db"  # type: ignore[misc]


def test_qualified_name_formatting():
    name = QualifiedName(name="users", schema="public", catalog="db")

    assert name.dotted() == "public.users"
    assert str(name) == "db.public.users"
    assert QualifiedName(name="users").dotted() == "users"


def test_foreign_key_rejects_mismatched_column_counts():
    table = QualifiedName(name="orders")
    other = QualifiedName(name="customers")

    with pytest.raises(ValidationError, match="as many referencing columns"):
        ForeignKey(
            referencing_table=table,
            referencing_columns=(
                Column(name="a", table=table),
                Column(name="b", table=table),
            ),
            referenced_table=other,
            referenced_columns=(Column(name="id", table=other),),
        )


def test_qualified_names_are_hashable():
    first = QualifiedName(name="users", schema="public")
    second = QualifiedName(name="users", schema="public")

    assert {first: 1}[second] == 1
