"""Named database configuration resolution."""

from schema_codegen.config.database_config import DatabaseConfig

__all__ = ["DatabaseConfig"]
