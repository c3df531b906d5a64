"""Custom exception classes for the schema code generator."""

from __future__ import annotations


class CodegenError(Exception):
    """Base exception for code generation errors.

    All custom exceptions in the schema code generator inherit from this class.
    """

    pass


class ConfigurationError(CodegenError):
    """Error in application configuration.

    Raised when required configuration values are missing or invalid, such as
    an absent ``codegen.package`` key or an unknown driver identifier. Always
    raised before any database resource is acquired.

    Args:
        variable_name: The name of the configuration variable that caused the error
        message: Optional custom error message
    """

    def __init__(self, variable_name: str, message: str | None = None) -> None:
        self.variable_name = variable_name
        if message is None:
            message = f"Required configuration variable '{variable_name}' is not set"
        super().__init__(message)


class DriverResolutionError(ConfigurationError):
    """Error when a driver identifier is not present in the driver registry.

    Args:
        identifier: The driver identifier that could not be resolved
        known: Identifiers that are registered
    """

    def __init__(self, identifier: str, known: list[str]) -> None:
        self.identifier = identifier
        self.known = known
        super().__init__(
            "driver",
            f"Unknown driver '{identifier}'. Known drivers: {', '.join(known)}",
        )


class DatabaseConnectionError(CodegenError):
    """Error opening or using the database connection.

    Args:
        url: Connection URL with the password masked
        cause: The underlying driver exception
    """

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Failed to connect to '{url}': {cause}")


class ExtractionError(CodegenError):
    """Error during schema introspection.

    Raised when reading the structural metadata of the database fails or when
    the extraction does not finish within the configured timeout.
    """

    pass


class GenerationError(CodegenError):
    """Error writing generated source files.

    Args:
        path: The file or directory that could not be written
        cause: The underlying exception
    """

    def __init__(self, path: str, cause: Exception) -> None:
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write generated sources to {path}: {cause}")
