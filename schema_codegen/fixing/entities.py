"""Per-entity fixers that keep table references consistent after a rename."""

from __future__ import annotations

from schema_codegen.core.model import (
    Column,
    ForeignKey,
    Index,
    PrimaryKey,
    QualifiedName,
    Table,
)
from schema_codegen.fixing.names import fix_name


def fix_column(column: Column, corrected_table_name: QualifiedName) -> Column:
    """Point a column at its table's already-corrected name."""
    return column.model_copy(update={"table": corrected_table_name})


def fix_foreign_key(fk: ForeignKey) -> ForeignKey:
    """Correct both sides of a foreign key independently.

    Each side may name a different table, so each gets its own corrected name
    and its columns are re-pointed at that name.
    """
    referenced_table = fix_name(fk.referenced_table)
    referencing_table = fix_name(fk.referencing_table)
    return fk.model_copy(
        update={
            "referenced_table": referenced_table,
            "referenced_columns": tuple(
                fix_column(col, referenced_table) for col in fk.referenced_columns
            ),
            "referencing_table": referencing_table,
            "referencing_columns": tuple(
                fix_column(col, referencing_table) for col in fk.referencing_columns
            ),
        }
    )


def fix_primary_key(pk: PrimaryKey, new_name: QualifiedName) -> PrimaryKey:
    return pk.model_copy(
        update={
            "table": new_name,
            "columns": tuple(fix_column(col, new_name) for col in pk.columns),
        }
    )


def fix_index(index: Index, new_name: QualifiedName) -> Index:
    return index.model_copy(
        update={
            "table": new_name,
            "columns": tuple(fix_column(col, new_name) for col in index.columns),
        }
    )


def fix_table(table: Table) -> Table:
    """Correct a table's name and restore every nested reference to it.

    The table's own name is corrected first since columns, the primary key and
    indices all take it. Foreign keys correct their own references.
    """
    new_name = fix_name(table.name)
    primary_key = table.primary_key
    if primary_key is not None:
        primary_key = fix_primary_key(primary_key, new_name)

    return table.model_copy(
        update={
            "name": new_name,
            "columns": tuple(fix_column(col, new_name) for col in table.columns),
            "primary_key": primary_key,
            "foreign_keys": tuple(fix_foreign_key(fk) for fk in table.foreign_keys),
            "indices": tuple(fix_index(idx, new_name) for idx in table.indices),
        }
    )
