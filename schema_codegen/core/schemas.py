"""Pydantic models for type-safe parsing of configuration sections."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .constants import DEFAULT_OUTPUT_DIR


class CodegenSection(BaseModel):
    """The ``codegen`` block of a database configuration section."""

    model_config = ConfigDict(populate_by_name=True)

    package: str = Field(..., min_length=1, description="Target package name")
    output_dir: str = Field(
        DEFAULT_OUTPUT_DIR, alias="outputDir", description="Default output directory"
    )

    @field_validator("package")
    @classmethod
    def validate_package(cls, v: str) -> str:
        """Validate dotted package name format."""
        if not all(part.isidentifier() for part in v.split(".")):
            raise ValueError("Package must be a dotted sequence of Python identifiers")
        return v


class ConnectionSection(BaseModel):
    """The ``db`` block of a database configuration section."""

    model_config = ConfigDict(populate_by_name=True)

    url: str = Field(..., min_length=1, description="SQLAlchemy database URL")
    dbapi_driver: str | None = Field(
        None, alias="dbapiDriver", description="DBAPI module used by the dialect"
    )
    user: str | None = None
    password: str | None = None
    keep_alive: bool = Field(True, alias="keepAliveConnection")


class ValidationResult(BaseModel):
    """Result of configuration validation with type safety."""

    is_valid: bool = Field(..., description="Whether the section passed validation")
    errors: list[str] = Field(
        default_factory=list, description="Validation error messages"
    )
    warnings: list[str] = Field(
        default_factory=list, description="Validation warning messages"
    )

    def add_error(self, message: str) -> None:
        """Add an error message to the validation result."""
        self.errors.append(message)
        self.is_valid = False

    def add_warning(self, message: str) -> None:
        """Add a warning message to the validation result."""
        self.warnings.append(message)
