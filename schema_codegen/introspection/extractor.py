"""Read a schema model from a live connection with the SQLAlchemy inspector."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from sqlalchemy import inspect
from sqlalchemy.engine import Connection
from sqlalchemy.engine.reflection import Inspector
from sqlalchemy.exc import CompileError, SQLAlchemyError

from schema_codegen.core.constants import SYSTEM_SCHEMAS
from schema_codegen.core.exceptions import ExtractionError
from schema_codegen.core.model import (
    Column,
    ForeignKey,
    Index,
    Model,
    PrimaryKey,
    QualifiedName,
    Table,
)
from schema_codegen.logger import logger


def create_model(
    connection: Connection,
    schemas: Iterable[str] | None = None,
    catalog: str | None = None,
    excluded_schemas: frozenset[str] = SYSTEM_SCHEMAS,
) -> Model:
    """Fetch tables, columns, keys and indices in a single inspector pass.

    Args:
        connection: Open connection; every query runs on it
        schemas: Schemas to read; all non-system schemas when omitted
        catalog: Catalog recorded on every qualified name
        excluded_schemas: Lower-cased schema names skipped when listing schemas

    Returns:
        Model with tables ordered by schema, then by table name

    Raises:
        ExtractionError: If any inspector query fails
    """
    try:
        reader = _ModelReader(inspect(connection), catalog)
        return reader.read(schemas, excluded_schemas)
    except SQLAlchemyError as e:
        raise ExtractionError(f"Failed to introspect database schema: {e}") from e


class _ModelReader:
    def __init__(self, inspector: Inspector, catalog: str | None) -> None:
        self.inspector = inspector
        self.catalog = catalog
        self.default_schema = inspector.default_schema_name
        self.columns: dict[QualifiedName, dict[str, Column]] = {}

    def read(
        self, schemas: Iterable[str] | None, excluded_schemas: frozenset[str]
    ) -> Model:
        if schemas is None:
            schemas = [
                s
                for s in self.inspector.get_schema_names()
                if s.lower() not in excluded_schemas
            ]
        else:
            schemas = list(schemas)

        # Columns of every table first, so foreign keys can reference them.
        names: list[QualifiedName] = []
        for schema in schemas:
            table_names = self.inspector.get_table_names(
                schema=self._query_schema(schema)
            )
            for table_name in sorted(table_names):
                name = QualifiedName(
                    name=table_name, schema=schema, catalog=self.catalog
                )
                self.columns[name] = self._read_columns(name)
                names.append(name)

        tables = tuple(self._read_table(name) for name in names)
        logger.info(
            "Introspected %d table(s) from %d schema(s)", len(tables), len(schemas)
        )
        return Model(tables=tables)

    def _query_schema(self, schema: str | None) -> str | None:
        if schema is None or schema == self.default_schema:
            return None
        return schema

    def _read_columns(self, name: QualifiedName) -> dict[str, Column]:
        columns: dict[str, Column] = {}
        query_schema = self._query_schema(name.schema_)
        for col in self.inspector.get_columns(name.name, schema=query_schema):
            default = col.get("default")
            columns[col["name"]] = Column(
                name=col["name"],
                table=name,
                type=_format_type(col["type"]),
                nullable=col.get("nullable", True),
                default=str(default) if default is not None else None,
                autoincrement=col.get("autoincrement") is True,
                comment=col.get("comment"),
            )
        return columns

    def _column(self, table: QualifiedName, column_name: str) -> Column:
        column = self.columns.get(table, {}).get(column_name)
        if column is None:
            logger.debug("Column %s not found on %s, using a stub", column_name, table)
            column = Column(name=column_name, table=table)
        return column

    def _read_table(self, name: QualifiedName) -> Table:
        query_schema = self._query_schema(name.schema_)

        primary_key = None
        pk = self.inspector.get_pk_constraint(name.name, schema=query_schema)
        if pk and pk.get("constrained_columns"):
            primary_key = PrimaryKey(
                name=pk.get("name"),
                table=name,
                columns=tuple(self._column(name, c) for c in pk["constrained_columns"]),
            )

        foreign_keys = tuple(
            self._foreign_key(name, fk)
            for fk in self.inspector.get_foreign_keys(name.name, schema=query_schema)
        )

        indices = []
        for idx in self.inspector.get_indexes(name.name, schema=query_schema):
            # Expression indexes report None for their computed members.
            column_names = [c for c in idx.get("column_names", []) if c is not None]
            if not column_names:
                logger.debug(
                    "Skipping expression index %s on %s", idx.get("name"), name
                )
                continue
            indices.append(
                Index(
                    name=idx.get("name"),
                    table=name,
                    columns=tuple(self._column(name, c) for c in column_names),
                    unique=bool(idx.get("unique", False)),
                )
            )

        return Table(
            name=name,
            columns=tuple(self.columns[name].values()),
            primary_key=primary_key,
            foreign_keys=foreign_keys,
            indices=tuple(indices),
            comment=self._table_comment(name.name, query_schema),
        )

    def _foreign_key(self, name: QualifiedName, fk: dict[str, Any]) -> ForeignKey:
        referenced = QualifiedName(
            name=fk["referred_table"],
            schema=fk.get("referred_schema") or self.default_schema or name.schema_,
            catalog=self.catalog,
        )
        options = fk.get("options") or {}
        return ForeignKey(
            name=fk.get("name"),
            referencing_table=name,
            referencing_columns=tuple(
                self._column(name, c) for c in fk["constrained_columns"]
            ),
            referenced_table=referenced,
            referenced_columns=tuple(
                self._column(referenced, c) for c in fk["referred_columns"]
            ),
            on_update=options.get("onupdate"),
            on_delete=options.get("ondelete"),
        )

    def _table_comment(self, table_name: str, schema: str | None) -> str | None:
        try:
            comment = self.inspector.get_table_comment(table_name, schema=schema)
        except NotImplementedError:
            return None
        return comment.get("text")


def _format_type(col_type: Any) -> str:
    try:
        return str(col_type)
    except CompileError:
        return type(col_type).__name__.upper()
