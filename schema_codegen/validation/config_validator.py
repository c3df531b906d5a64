"""Database configuration section validation against a JSON Schema."""

from __future__ import annotations

from typing import Any

from jsonschema import Draft7Validator

from schema_codegen.core.schemas import ValidationResult
from schema_codegen.drivers.registry import DriverRegistry

DATABASE_CONFIG_SCHEMA: dict[str, Any] = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "title": "Database configuration section",
    "type": "object",
    "properties": {
        "driver": {"type": "string", "minLength": 1},
        "db": {
            "type": "object",
            "properties": {
                "url": {"type": "string", "minLength": 1},
                "dbapiDriver": {"type": ["string", "null"]},
                "user": {"type": ["string", "null"]},
                "password": {"type": ["string", "null"]},
                "keepAliveConnection": {"type": "boolean"},
            },
            "required": ["url"],
        },
        "codegen": {
            "type": "object",
            "properties": {
                "package": {"type": "string", "minLength": 1},
                "outputDir": {"type": "string", "minLength": 1},
            },
        },
    },
    "required": ["driver", "db"],
}


class ConfigValidator:
    """Validates database configuration sections.

    Structural checks come from JSON Schema Draft 7; the driver identifier is
    additionally checked against the driver registry.
    """

    def __init__(self, registry: DriverRegistry) -> None:
        self.registry = registry
        self.validator = Draft7Validator(DATABASE_CONFIG_SCHEMA)

    def validate_section(self, section: Any) -> ValidationResult:
        """Validate a configuration section.

        Args:
            section: Parsed JSON value found at the configuration path

        Returns:
            ValidationResult with validation status and any errors/warnings
        """
        result = ValidationResult(is_valid=True)

        for error in sorted(self.validator.iter_errors(section), key=str):
            location = ".".join(str(p) for p in error.absolute_path) or "<root>"
            result.add_error(f"{location}: {error.message}")

        if not isinstance(section, dict):
            return result

        driver = section.get("driver")
        if isinstance(driver, str) and driver and driver not in self.registry:
            result.add_error(
                f"driver: unknown driver '{driver}' "
                f"(known: {', '.join(self.registry.identifiers())})"
            )

        codegen = section.get("codegen")
        if isinstance(codegen, dict) and "outputDir" not in codegen:
            result.add_warning("codegen.outputDir not set, defaulting to '.'")

        return result
