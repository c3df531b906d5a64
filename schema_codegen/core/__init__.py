"""Core data models and shared types."""

from schema_codegen.core.config import settings
from schema_codegen.core.exceptions import (
    CodegenError,
    ConfigurationError,
    DatabaseConnectionError,
    DriverResolutionError,
    ExtractionError,
    GenerationError,
)
from schema_codegen.core.model import (
    Column,
    ForeignKey,
    Index,
    Model,
    PrimaryKey,
    QualifiedName,
    Table,
)
from schema_codegen.core.schemas import ValidationResult

__all__ = [
    "Column",
    "ForeignKey",
    "Index",
    "Model",
    "PrimaryKey",
    "QualifiedName",
    "Table",
    "ValidationResult",
    "CodegenError",
    "ConfigurationError",
    "DriverResolutionError",
    "DatabaseConnectionError",
    "ExtractionError",
    "GenerationError",
    "settings",
]
