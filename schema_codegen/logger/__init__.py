"""Centralized logging configuration for the schema code generator.

This module provides a configured logger instance that can be imported and used
throughout the application. The logger is configured with a queued stderr
handler using settings from logging_config.json.

Usage:
    from schema_codegen.logger import logger

    logger.info("This is an info message")
    logger.error("This is an error message")
    logger.debug("This is a debug message")
"""

from .logger import logger, setup_logger

__all__ = ["logger", "setup_logger"]
