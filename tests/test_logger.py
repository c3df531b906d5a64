"""Tests for logging setup."""

import logging

from schema_codegen.core.config import settings
from schema_codegen.logger import logger, setup_logger
from schema_codegen.logger.logger import load_logging_config


def test_config_uses_settings_level(monkeypatch):
    monkeypatch.setattr(settings, "log_level", "warning")

    config = load_logging_config()

    assert config["loggers"]["SchemaCodegen"]["level"] == "WARNING"


def test_explicit_level_wins():
    config = load_logging_config("debug")

    assert config["loggers"]["SchemaCodegen"]["level"] == "DEBUG"


def test_setup_can_be_repeated():
    setup_logger("DEBUG")
    setup_logger("ERROR")

    assert logger.level == logging.ERROR
    assert not logger.propagate
    (handler,) = logger.handlers
    assert handler.name == "queue_handler"
