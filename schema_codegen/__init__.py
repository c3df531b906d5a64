"""
Schema Code Generator

A Python package for generating SQLAlchemy table definitions from a live
database, correcting the catalog/schema naming of introspected tables on the way.
"""

from schema_codegen.cli.generator import CodeGenerator

__all__ = ["CodeGenerator"]
