"""Tests for the pipeline orchestrator."""

from unittest.mock import Mock

import pytest

from schema_codegen.cli.generator import CodeGenerator
from schema_codegen.core.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    ExtractionError,
    GenerationError,
)
from schema_codegen.core.model import QualifiedName
from schema_codegen.fixing import SchemaFixer, fix_schema


def make_writer_factory(error: Exception | None = None):
    writer = Mock()
    writer.write_to_file.return_value = []
    if error is not None:
        writer.write_to_file.side_effect = error
    factory = Mock(return_value=writer)
    return factory, writer


class TestRunWithDriver:
    """Test the explicit-parameter style."""

    def test_pipeline_fixes_model_and_writes(
        self, fake_database, fake_registry, shop_model
    ):
        database = fake_database(model=shop_model)
        registry, profile = fake_registry(database)
        factory, writer = make_writer_factory()

        CodeGenerator(registry=registry, writer_factory=factory).run_with_driver(
            "fake", "psycopg2", "fake://db", "out", "app.models", "app", "secret"
        )

        (call,) = profile.create_database_calls
        assert call == {
            "url": "fake://db",
            "dbapi_driver": "psycopg2",
            "user": "app",
            "password": "secret",
            "keep_alive": True,
        }
        factory.assert_called_once_with(fix_schema(shop_model))
        writer.write_to_file.assert_called_once_with(
            "tests.conftest.fake_profile", "out", "app.models"
        )
        assert database.close_calls == 1

    def test_unknown_driver_aborts_before_connecting(
        self, fake_database, fake_registry
    ):
        database = fake_database()
        registry, profile = fake_registry(database)
        factory, _ = make_writer_factory()

        with pytest.raises(ConfigurationError):
            CodeGenerator(registry=registry, writer_factory=factory).run_with_driver(
                "unknown", "x", "fake://db", "out", "app"
            )

        assert profile.create_database_calls == []
        factory.assert_not_called()

    def test_extraction_failure_closes_once(self, fake_database, fake_registry):
        database = fake_database(error=ExtractionError("query failed"))
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory()

        with pytest.raises(ExtractionError):
            CodeGenerator(registry=registry, writer_factory=factory).run_with_driver(
                "fake", "x", "fake://db", "out", "app"
            )

        assert database.close_calls == 1
        factory.assert_not_called()

    def test_connection_failure_closes_once(self, fake_database, fake_registry):
        database = fake_database(
            error=DatabaseConnectionError("fake://db", OSError("refused"))
        )
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory()

        with pytest.raises(DatabaseConnectionError):
            CodeGenerator(registry=registry, writer_factory=factory).run_with_driver(
                "fake", "x", "fake://db", "out", "app"
            )

        assert database.close_calls == 1

    def test_generation_failure_closes_once(
        self, fake_database, fake_registry, shop_model
    ):
        database = fake_database(model=shop_model)
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory(
            GenerationError("out", PermissionError("denied"))
        )

        with pytest.raises(GenerationError):
            CodeGenerator(registry=registry, writer_factory=factory).run_with_driver(
                "fake", "x", "fake://db", "out", "app"
            )

        assert database.close_calls == 1

    def test_extraction_timeout_is_passed_to_database(
        self, fake_database, fake_registry
    ):
        database = fake_database()
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory()

        CodeGenerator(
            registry=registry, writer_factory=factory, extraction_timeout=12.5
        ).run_with_driver("fake", "x", "fake://db", "out", "app")

        assert database.timeouts == [12.5]

    def test_default_wait_is_unbounded(self, fake_database, fake_registry):
        database = fake_database()
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory()

        CodeGenerator(registry=registry, writer_factory=factory).run_with_driver(
            "fake", "x", "fake://db", "out", "app"
        )

        assert database.timeouts == [None]

    def test_disabled_swap_writes_model_as_introspected(
        self, fake_database, fake_registry, self_referencing_model
    ):
        database = fake_database(model=self_referencing_model)
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory()

        CodeGenerator(
            registry=registry,
            writer_factory=factory,
            fixer=SchemaFixer(swap_catalog_schema=False),
        ).run_with_driver("fake", "x", "fake://db", "out", "app")

        (model,), _ = factory.call_args
        assert model.tables[0].name == QualifiedName(
            name="T", schema="public", catalog="db"
        )


class TestRunWithConfig:
    """Test the named-configuration style."""

    @pytest.fixture
    def config_uri(self, write_config):
        path = write_config(
            {
                "mydb": {
                    "driver": "fake",
                    "db": {"url": "fake://db"},
                    "codegen": {"package": "app.models", "outputDir": "from-config"},
                }
            }
        )
        return f"{path}#mydb"

    def test_explicit_output_dir_wins(self, fake_database, fake_registry, config_uri):
        database = fake_database()
        registry, _ = fake_registry(database)
        factory, writer = make_writer_factory()

        CodeGenerator(registry=registry, writer_factory=factory).run_with_config(
            config_uri, "from-argument"
        )

        writer.write_to_file.assert_called_once_with(
            "tests.conftest.fake_profile", "from-argument", "app.models"
        )
        assert database.close_calls == 1

    def test_config_output_dir_used_without_argument(
        self, fake_database, fake_registry, config_uri
    ):
        database = fake_database()
        registry, _ = fake_registry(database)
        factory, writer = make_writer_factory()

        CodeGenerator(registry=registry, writer_factory=factory).run_with_config(
            config_uri
        )

        writer.write_to_file.assert_called_once_with(
            "tests.conftest.fake_profile", "from-config", "app.models"
        )

    def test_missing_package_aborts_before_connecting(
        self, fake_database, fake_registry, write_config
    ):
        path = write_config({"driver": "fake", "db": {"url": "fake://db"}})
        database = fake_database()
        registry, profile = fake_registry(database)

        with pytest.raises(ConfigurationError) as exc_info:
            CodeGenerator(registry=registry).run_with_config(str(path))

        assert exc_info.value.variable_name == "codegen.package"
        assert profile.create_database_calls == []
        assert database.close_calls == 0

    def test_extraction_failure_closes_once(
        self, fake_database, fake_registry, config_uri
    ):
        database = fake_database(error=ExtractionError("query failed"))
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory()

        with pytest.raises(ExtractionError):
            CodeGenerator(registry=registry, writer_factory=factory).run_with_config(
                config_uri
            )

        assert database.close_calls == 1

    def test_generation_failure_closes_once(
        self, fake_database, fake_registry, config_uri, shop_model
    ):
        database = fake_database(model=shop_model)
        registry, _ = fake_registry(database)
        factory, _ = make_writer_factory(
            GenerationError("out", PermissionError("denied"))
        )

        with pytest.raises(GenerationError):
            CodeGenerator(registry=registry, writer_factory=factory).run_with_config(
                config_uri
            )

        assert database.close_calls == 1
