"""Database profiles: how to open and introspect each supported backend."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Callable

from sqlalchemy.engine import Connection

from schema_codegen.core.constants import SYSTEM_SCHEMAS
from schema_codegen.core.model import Model
from schema_codegen.db.database import Database
from schema_codegen.introspection.extractor import create_model


class DatabaseProfile:
    """Backend-neutral profile; accepts any URL SQLAlchemy can open.

    Subclasses pin the backend and adjust which schemas are skipped and which
    catalog name is recorded on introspected names.
    """

    backend: str | None = None
    excluded_schemas: frozenset[str] = SYSTEM_SCHEMAS

    def create_database(
        self,
        url: str,
        dbapi_driver: str | None = None,
        user: str | None = None,
        password: str | None = None,
        keep_alive: bool = False,
    ) -> Database:
        return Database.for_url(
            url,
            dbapi_driver=dbapi_driver,
            user=user,
            password=password,
            keep_alive=keep_alive,
            expected_backend=self.backend,
        )

    def catalog_name(self, connection: Connection) -> str | None:
        return connection.engine.url.database

    def create_model(
        self, schemas: Iterable[str] | None = None
    ) -> Callable[[Connection], Model]:
        """Return an action that extracts the full model from a connection."""

        def action(connection: Connection) -> Model:
            return create_model(
                connection,
                schemas=schemas,
                catalog=self.catalog_name(connection),
                excluded_schemas=self.excluded_schemas,
            )

        return action

    def __repr__(self) -> str:
        return f"{type(self).__name__}(backend={self.backend!r})"


class GenericProfile(DatabaseProfile):
    pass


class SQLiteProfile(DatabaseProfile):
    backend = "sqlite"

    def catalog_name(self, connection: Connection) -> str | None:
        # The URL database is a file path, not a catalog.
        return None


class PostgreSQLProfile(DatabaseProfile):
    backend = "postgresql"
    excluded_schemas = SYSTEM_SCHEMAS | {"pg_toast"}


class MySQLProfile(DatabaseProfile):
    backend = "mysql"
    excluded_schemas = SYSTEM_SCHEMAS | {"mysql", "performance_schema"}


class MSSQLProfile(DatabaseProfile):
    backend = "mssql"
    excluded_schemas = SYSTEM_SCHEMAS | {"guest", "db_owner", "db_accessadmin"}


class OracleProfile(DatabaseProfile):
    backend = "oracle"
    excluded_schemas = SYSTEM_SCHEMAS | {"system", "xdb", "outln"}


sqlite = SQLiteProfile()
postgresql = PostgreSQLProfile()
mysql = MySQLProfile()
mssql = MSSQLProfile()
oracle = OracleProfile()
