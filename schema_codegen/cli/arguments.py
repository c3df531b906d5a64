"""Positional command-line arguments of the code generator."""

from __future__ import annotations

from pydantic import BaseModel

USAGE = """
Usage:
  schema-codegen configURI [outputDir]
  schema-codegen driver dbapiDriver url outputDir pkg [user password]

Options:
  configURI: A URI pointing to a JSON database config file (a fragment is
    resolved as a dotted path in the config), or just a fragment used as a
    path in application.json in the working directory
  driver: Registered driver identifier or qualified name, e.g. "postgresql"
  dbapiDriver: DBAPI module used by the dialect, e.g. "psycopg2"
  url: SQLAlchemy database URL, e.g. "postgresql://localhost/test"
  outputDir: Place where the package folder structure should be put
  pkg: Python package the generated code should be placed in
  user: database connection user name
  password: database connection password

When using a config file, in addition to the "driver" and "db" entries you can
set "codegen.package" and "codegen.outputDir". The latter can be overridden on
the command line.
""".strip()


class ConfigInvocation(BaseModel):
    """Run against a named configuration section."""

    uri: str
    output_dir: str | None = None


class DriverInvocation(BaseModel):
    """Run against explicitly given driver and connection parameters."""

    driver: str
    dbapi_driver: str
    url: str
    output_dir: str
    package: str
    user: str | None = None
    password: str | None = None


def parse_arguments(argv: list[str]) -> ConfigInvocation | DriverInvocation | None:
    """Map positional arguments onto an invocation by their count.

    Returns:
        The invocation, or ``None`` when the arity matches no form
    """
    match argv:
        case [uri]:
            return ConfigInvocation(uri=uri)
        case [uri, output_dir]:
            return ConfigInvocation(uri=uri, output_dir=output_dir)
        case [driver, dbapi_driver, url, output_dir, package]:
            return DriverInvocation(
                driver=driver,
                dbapi_driver=dbapi_driver,
                url=url,
                output_dir=output_dir,
                package=package,
            )
        case [driver, dbapi_driver, url, output_dir, package, user, password]:
            return DriverInvocation(
                driver=driver,
                dbapi_driver=dbapi_driver,
                url=url,
                output_dir=output_dir,
                package=package,
                user=user,
                password=password,
            )
        case _:
            return None
