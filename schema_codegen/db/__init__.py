"""Database access."""

from schema_codegen.db.database import Database

__all__ = ["Database"]
