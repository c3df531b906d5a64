"""Main class that orchestrates introspection, correction and generation."""

from __future__ import annotations

import sys
from pathlib import Path

from schema_codegen.cli.arguments import (
    USAGE,
    ConfigInvocation,
    DriverInvocation,
    parse_arguments,
)
from schema_codegen.config.database_config import DatabaseConfig
from schema_codegen.core.config import settings
from schema_codegen.core.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    ExtractionError,
    GenerationError,
)
from schema_codegen.db.database import Database
from schema_codegen.drivers import DatabaseProfile
from schema_codegen.drivers.registry import DriverRegistry, driver_registry
from schema_codegen.fixing.schema import SchemaFixer
from schema_codegen.generation.interfaces import ISourceWriterFactory
from schema_codegen.generation.source_generator import SourceCodeGenerator
from schema_codegen.logger import logger, setup_logger


class CodeGenerator:
    """Main class that orchestrates the code generation process.

    Both configuration styles, explicit driver parameters and a named config
    section, end up in the same sequence: open the database, extract the
    model, fix it, write sources, close the database.
    """

    def __init__(
        self,
        registry: DriverRegistry = driver_registry,
        fixer: SchemaFixer | None = None,
        writer_factory: ISourceWriterFactory = SourceCodeGenerator,
        extraction_timeout: float | None = settings.extraction_timeout,
    ) -> None:
        """Initialize the code generator.

        Args:
            registry: Registry driver identifiers are resolved against
            fixer: Schema fixer applied to every extracted model
            writer_factory: Builds the source writer for a corrected model
            extraction_timeout: Seconds to wait for extraction; None waits forever
        """
        self.registry = registry
        self.fixer = fixer if fixer is not None else SchemaFixer()
        self.writer_factory = writer_factory
        self.extraction_timeout = extraction_timeout

    def run(self, argv: list[str]) -> None:
        """Run the generator for command-line arguments.

        Raises:
            SystemExit: Always, with the exit code for the outcome
        """
        invocation = parse_arguments(argv)
        if invocation is None:
            print(USAGE)
            sys.exit(settings.exit_codes.error_usage)

        try:
            setup_logger()
            generated_files = self.execute(invocation)
            logger.info(
                "Generation completed successfully! Wrote %d file(s).",
                len(generated_files),
            )
        except ConfigurationError as e:
            logger.error("Configuration error: %s", e, exc_info=True)
            sys.exit(settings.exit_codes.error_configuration)
        except DatabaseConnectionError as e:
            logger.error("Connection error: %s", e, exc_info=True)
            sys.exit(settings.exit_codes.error_connection)
        except ExtractionError as e:
            logger.error("Schema extraction error: %s", e, exc_info=True)
            sys.exit(settings.exit_codes.error_extraction)
        except GenerationError as e:
            logger.error("Source generation error: %s", e, exc_info=True)
            sys.exit(settings.exit_codes.error_generation)
        except Exception:
            logger.exception("Unexpected error occurred")
            sys.exit(settings.exit_codes.error_unexpected)
        sys.exit(settings.exit_codes.success)

    def execute(self, invocation: ConfigInvocation | DriverInvocation) -> list[Path]:
        """Run one parsed invocation, raising instead of exiting."""
        if isinstance(invocation, ConfigInvocation):
            return self.run_with_config(invocation.uri, invocation.output_dir)
        return self.run_with_driver(
            invocation.driver,
            invocation.dbapi_driver,
            invocation.url,
            invocation.output_dir,
            invocation.package,
            invocation.user,
            invocation.password,
        )

    def run_with_driver(
        self,
        driver: str,
        dbapi_driver: str,
        url: str,
        output_dir: str,
        package: str,
        user: str | None = None,
        password: str | None = None,
    ) -> list[Path]:
        """Generate sources from explicitly given connection parameters.

        Args:
            driver: Registered driver identifier or qualified name
            dbapi_driver: DBAPI module used by the dialect
            url: SQLAlchemy database URL
            output_dir: Place where the package folder structure is put
            package: Package the generated code is placed in
            user: Database user name
            password: Database password

        Returns:
            List of paths that were written

        Raises:
            ConfigurationError: If the driver is unknown; nothing is opened
        """
        entry = self.registry.resolve(driver)
        profile = entry.instance()
        db = profile.create_database(
            url,
            dbapi_driver=dbapi_driver,
            user=user,
            password=password,
            keep_alive=True,
        )
        return self._generate(db, profile, entry.expression, output_dir, package)

    def run_with_config(self, uri: str, output_dir: str | None = None) -> list[Path]:
        """Generate sources from the configuration section a URI points to.

        Args:
            uri: Config URI, optionally with a fragment naming a nested section
            output_dir: Overrides ``codegen.outputDir`` when given

        Returns:
            List of paths that were written

        Raises:
            ConfigurationError: If the configuration is invalid; nothing is opened
        """
        dc = DatabaseConfig.for_uri(uri, registry=self.registry)
        out = output_dir if output_dir is not None else dc.output_dir
        return self._generate(dc.db, dc.profile, dc.driver_expression, out, dc.package)

    def _generate(
        self,
        db: Database,
        profile: DatabaseProfile,
        driver_expression: str,
        output_dir: str,
        package: str,
    ) -> list[Path]:
        with db:
            logger.info("Extracting schema model from %s", db.masked_url)
            model = db.run(profile.create_model(), timeout=self.extraction_timeout)
            fixed = self.fixer.fix(model)
            logger.info("Generating package %s in %s", package, output_dir)
            writer = self.writer_factory(fixed)
            return writer.write_to_file(driver_expression, output_dir, package)


def main() -> None:
    """Console script entry point."""
    CodeGenerator().run(sys.argv[1:])
