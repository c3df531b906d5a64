"""Immutable snapshot of an introspected database schema.

Every entity is a frozen pydantic model. Nothing is changed in place: the
fixers in :mod:`schema_codegen.fixing` build new values with
``model_copy(update=...)``.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class QualifiedName(BaseModel):
    """A table identifier paired with its enclosing catalog and schema.

    ``schema`` is stored as ``schema_`` because pydantic reserves the plain
    attribute name; it is accepted and serialized under ``schema``.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    name: str = Field(..., min_length=1, description="Unqualified object name")
    schema_: str | None = Field(None, alias="schema", description="Schema name")
    catalog: str | None = Field(None, description="Catalog name")

    def dotted(self) -> str:
        """Return ``schema.name`` (or just ``name``) as used by SQLAlchemy targets."""
        if self.schema_:
            return f"{self.schema_}.{self.name}"
        return self.name

    def __str__(self) -> str:
        parts = [p for p in (self.catalog, self.schema_, self.name) if p]
        return ".".join(parts)


class Column(BaseModel):
    """A column belonging to exactly one table."""

    model_config = ConfigDict(frozen=True)

    name: str
    table: QualifiedName
    type: str = "NULL"
    nullable: bool = True
    default: str | None = None
    autoincrement: bool = False
    comment: str | None = None


class PrimaryKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    table: QualifiedName
    columns: tuple[Column, ...] = ()


class ForeignKey(BaseModel):
    """Reference from columns of one table to columns of another (or the same) table."""

    model_config = ConfigDict(frozen=True)

    name: str | None = None
    referencing_table: QualifiedName
    referencing_columns: tuple[Column, ...]
    referenced_table: QualifiedName
    referenced_columns: tuple[Column, ...]
    on_update: str | None = None
    on_delete: str | None = None

    @model_validator(mode="after")
    def validate_column_pairs(self) -> ForeignKey:
        """Both column sequences must pair up positionally."""
        if len(self.referencing_columns) != len(self.referenced_columns):
            raise ValueError(
                "Foreign key must have as many referencing columns as referenced "
                f"columns ({len(self.referencing_columns)} != "
                f"{len(self.referenced_columns)})"
            )
        return self


class Index(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str | None = None
    table: QualifiedName
    columns: tuple[Column, ...] = ()
    unique: bool = False


class Table(BaseModel):
    """A table and everything nested under it.

    Columns, the primary key and indices carry this table's ``name`` as their
    own ``table`` field.
    """

    model_config = ConfigDict(frozen=True)

    name: QualifiedName
    columns: tuple[Column, ...] = ()
    primary_key: PrimaryKey | None = None
    foreign_keys: tuple[ForeignKey, ...] = ()
    indices: tuple[Index, ...] = ()
    comment: str | None = None


class Model(BaseModel):
    """Root snapshot exchanged between introspection, fixing and generation."""

    model_config = ConfigDict(frozen=True)

    tables: tuple[Table, ...] = ()
