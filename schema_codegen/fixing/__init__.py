"""Catalog/schema correction of introspected models."""

from schema_codegen.fixing.entities import (
    fix_column,
    fix_foreign_key,
    fix_index,
    fix_primary_key,
    fix_table,
)
from schema_codegen.fixing.names import fix_name
from schema_codegen.fixing.schema import SchemaFixer, fix_schema

__all__ = [
    "SchemaFixer",
    "fix_column",
    "fix_foreign_key",
    "fix_index",
    "fix_name",
    "fix_primary_key",
    "fix_schema",
    "fix_table",
]
