"""Shared test fixtures and configuration."""

import json
import shutil
import tempfile
from pathlib import Path
from typing import Any, Callable

import pytest
import sqlalchemy as sa

from schema_codegen.core.model import (
    Column,
    ForeignKey,
    Index,
    Model,
    PrimaryKey,
    QualifiedName,
    Table,
)
from schema_codegen.drivers.profiles import DatabaseProfile
from schema_codegen.drivers.registry import DriverRegistry


class ModelTestHelper:
    """Helper class for building schema models in tests."""

    @staticmethod
    def name(
        name: str, schema: str | None = "public", catalog: str | None = "db"
    ) -> QualifiedName:
        return QualifiedName(name=name, schema=schema, catalog=catalog)

    @staticmethod
    def table(
        name: QualifiedName,
        column_names: list[str],
        pk: list[str] | None = None,
        indices: dict[str, list[str]] | None = None,
        foreign_keys: list[ForeignKey] | None = None,
    ) -> Table:
        """Create a table whose nested entities all point at ``name``."""
        columns = {c: Column(name=c, table=name, type="INTEGER") for c in column_names}
        primary_key = None
        if pk:
            primary_key = PrimaryKey(
                name=f"pk_{name.name}",
                table=name,
                columns=tuple(columns[c] for c in pk),
            )
        return Table(
            name=name,
            columns=tuple(columns.values()),
            primary_key=primary_key,
            foreign_keys=tuple(foreign_keys or ()),
            indices=tuple(
                Index(name=idx, table=name, columns=tuple(columns[c] for c in cols))
                for idx, cols in (indices or {}).items()
            ),
        )

    @staticmethod
    def foreign_key(
        referencing: QualifiedName,
        referencing_columns: list[str],
        referenced: QualifiedName,
        referenced_columns: list[str],
    ) -> ForeignKey:
        return ForeignKey(
            name=f"fk_{referencing.name}_{referenced.name}",
            referencing_table=referencing,
            referencing_columns=tuple(
                Column(name=c, table=referencing) for c in referencing_columns
            ),
            referenced_table=referenced,
            referenced_columns=tuple(
                Column(name=c, table=referenced) for c in referenced_columns
            ),
        )


@pytest.fixture
def model_helper():
    """Provide model helper for tests."""
    return ModelTestHelper()


@pytest.fixture
def self_referencing_model(model_helper):
    """Table ``T`` in catalog ``db``, schema ``public``, referencing itself."""
    name = model_helper.name("T")
    fk = model_helper.foreign_key(name, ["id"], name, ["id"])
    return Model(tables=(model_helper.table(name, ["id"], foreign_keys=[fk]),))


@pytest.fixture
def shop_model(model_helper):
    """Customers and orders tables in separate schemas, linked by a key."""
    customers = model_helper.name("customers", schema="crm", catalog="shop")
    orders = model_helper.name("orders", schema="sales", catalog="shop")
    fk = model_helper.foreign_key(orders, ["customer_id"], customers, ["id"])
    return Model(
        tables=(
            model_helper.table(customers, ["id", "email"], pk=["id"]),
            model_helper.table(
                orders,
                ["id", "customer_id"],
                pk=["id"],
                indices={"ix_orders_customer": ["customer_id"]},
                foreign_keys=[fk],
            ),
        )
    )


@pytest.fixture
def temp_output_dir():
    """Create a temporary output directory."""
    temp_dir = Path(tempfile.mkdtemp())
    yield temp_dir
    shutil.rmtree(temp_dir)


@pytest.fixture
def sqlite_db(tmp_path):
    """Create an SQLite file database with users/orders tables."""
    db_path = tmp_path / "shop.db"
    engine = sa.create_engine(f"sqlite:///{db_path}")
    metadata = sa.MetaData()
    sa.Table(
        "users",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("email", sa.String(120), nullable=False),
        sa.Index("ix_users_email", "email", unique=True),
    )
    sa.Table(
        "orders",
        metadata,
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("user_id", sa.Integer, sa.ForeignKey("users.id"), nullable=False),
        sa.Column("parent_id", sa.Integer, sa.ForeignKey("orders.id")),
        sa.Column("total", sa.Numeric(10, 2)),
    )
    metadata.create_all(engine)
    engine.dispose()
    return db_path


@pytest.fixture
def write_config(tmp_path) -> Callable[[dict[str, Any]], Path]:
    """Write a JSON config document and return its path."""

    def _write(document: dict[str, Any], filename: str = "application.json") -> Path:
        path = tmp_path / filename
        path.write_text(json.dumps(document, indent=2), encoding="utf-8")
        return path

    return _write


class FakeDatabase:
    """Database stand-in that records how often it was closed."""

    masked_url = "fake://db"

    def __init__(self, model: Model | None = None, error: Exception | None = None):
        self.model = model if model is not None else Model()
        self.error = error
        self.close_calls = 0
        self.timeouts: list[float | None] = []

    def run(self, action, timeout=None):
        self.timeouts.append(timeout)
        if self.error is not None:
            raise self.error
        return action(self)

    def close(self) -> None:
        self.close_calls += 1

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


class FakeProfile(DatabaseProfile):
    """Profile handing out a prepared FakeDatabase."""

    def __init__(self, database: FakeDatabase) -> None:
        self.database = database
        self.create_database_calls: list[dict[str, Any]] = []

    def create_database(self, url, **kwargs):
        self.create_database_calls.append({"url": url, **kwargs})
        return self.database

    def create_model(self, schemas=None):
        return lambda connection: connection.model


@pytest.fixture
def fake_registry():
    """Registry with a single singleton driver ``fake`` and its FakeDatabase."""

    def _build(database: FakeDatabase) -> tuple[DriverRegistry, FakeProfile]:
        profile = FakeProfile(database)
        registry = DriverRegistry()
        registry.register("fake", lambda: profile, "tests.conftest.fake_profile")
        return registry, profile

    return _build


@pytest.fixture
def fake_database():
    """Factory for FakeDatabase instances."""
    return FakeDatabase
