"""Database configuration resolved from a config URI."""

from __future__ import annotations

import json
from functools import cached_property
from pathlib import Path
from typing import Any
from urllib.parse import unquote, urlsplit

from pydantic import ValidationError

from schema_codegen.core.config import settings
from schema_codegen.core.constants import CODEGEN_PACKAGE_KEY
from schema_codegen.core.exceptions import ConfigurationError
from schema_codegen.core.schemas import CodegenSection, ConnectionSection
from schema_codegen.db.database import Database
from schema_codegen.drivers import DatabaseProfile, DriverEntry
from schema_codegen.drivers.registry import DriverRegistry, driver_registry
from schema_codegen.logger import logger
from schema_codegen.validation.config_validator import ConfigValidator


class DatabaseConfig:
    """A database configuration section plus the ``codegen`` settings next to it.

    A section looks like::

        {
          "driver": "postgresql",
          "db": {"url": "postgresql://localhost/test", "user": "app"},
          "codegen": {"package": "app.models", "outputDir": "generated"}
        }

    The database itself is only opened when :attr:`db` is first accessed.
    """

    def __init__(
        self,
        section: Any,
        origin: str = "<config>",
        registry: DriverRegistry = driver_registry,
    ) -> None:
        """Initialize the configuration from a parsed section.

        Args:
            section: Parsed JSON value of the section
            origin: Where the section came from, used in error messages
            registry: Registry the driver identifier is resolved against

        Raises:
            ConfigurationError: If the section is invalid or lacks ``codegen.package``
        """
        self.origin = origin
        result = ConfigValidator(registry).validate_section(section)
        for warning in result.warnings:
            logger.warning("%s: %s", origin, warning)
        if not result.is_valid:
            raise ConfigurationError(
                origin,
                f"Invalid database configuration in {origin}: "
                + "; ".join(result.errors),
            )

        self.driver_entry: DriverEntry = registry.resolve(section["driver"])
        if _lookup(section, CODEGEN_PACKAGE_KEY) is None:
            raise ConfigurationError(variable_name=CODEGEN_PACKAGE_KEY)
        try:
            self.codegen = CodegenSection.model_validate(section["codegen"])
            self.connection = ConnectionSection.model_validate(section["db"])
        except ValidationError as e:
            raise ConfigurationError(
                origin, f"Invalid database configuration in {origin}: {e}"
            ) from e

    @classmethod
    def for_uri(
        cls, uri: str, registry: DriverRegistry = driver_registry
    ) -> DatabaseConfig:
        """Load the configuration a URI points to.

        The URI path names a JSON file; the fragment, if any, is a dotted path
        to the section inside it. A URI that is only a fragment (``#mydb``)
        reads the section from the default config file.

        Args:
            uri: Config URI, e.g. ``file:///etc/app.json#databases.main``
            registry: Registry the driver identifier is resolved against

        Raises:
            ConfigurationError: If the file or section cannot be read
        """
        parts = urlsplit(uri)
        if parts.scheme not in ("", "file"):
            raise ConfigurationError(
                "configURI", f"Unsupported config URI scheme '{parts.scheme}'"
            )
        path = Path(unquote(parts.path)) if parts.path else settings.default_config_file

        try:
            with open(path, encoding="utf-8") as f:
                document = json.load(f)
        except FileNotFoundError as e:
            raise ConfigurationError(
                str(path), f"Config file not found: {path}"
            ) from e
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                str(path), f"Invalid JSON in config file {path}: {e}"
            ) from e

        section = document
        if parts.fragment:
            section = _lookup(document, parts.fragment)
            if section is None:
                raise ConfigurationError(
                    parts.fragment,
                    f"Config section '{parts.fragment}' not found in {path}",
                )

        origin = f"{path}#{parts.fragment}" if parts.fragment else str(path)
        logger.debug("Loaded database configuration from %s", origin)
        return cls(section, origin=origin, registry=registry)

    @property
    def package(self) -> str:
        return self.codegen.package

    @property
    def output_dir(self) -> str:
        return self.codegen.output_dir

    @property
    def driver_name(self) -> str:
        return self.driver_entry.qualified_name

    @property
    def driver_is_object(self) -> bool:
        return self.driver_entry.singleton

    @property
    def driver_expression(self) -> str:
        """Expression referencing the driver in generated code."""
        return self.driver_entry.expression

    @cached_property
    def profile(self) -> DatabaseProfile:
        return self.driver_entry.instance()

    @cached_property
    def db(self) -> Database:
        return self.profile.create_database(
            self.connection.url,
            dbapi_driver=self.connection.dbapi_driver,
            user=self.connection.user,
            password=self.connection.password,
            keep_alive=self.connection.keep_alive,
        )


def _lookup(document: Any, dotted_path: str) -> Any:
    current = document
    for key in dotted_path.split("."):
        if not isinstance(current, dict) or key not in current:
            return None
        current = current[key]
    return current
