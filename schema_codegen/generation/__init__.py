"""Source code generation from corrected schema models."""

from schema_codegen.generation.source_generator import SourceCodeGenerator

__all__ = ["SourceCodeGenerator"]
