"""Schema introspection from live database connections."""

from schema_codegen.introspection.extractor import create_model

__all__ = ["create_model"]
