import atexit
import json
import logging
import logging.config
from logging.handlers import QueueListener
from pathlib import Path

from schema_codegen.core.config import settings

LOGGER_NAME = "SchemaCodegen"
CONFIG_FILE = Path(__file__).parent / "logging_config.json"

logger = logging.getLogger(LOGGER_NAME)

_listener: QueueListener | None = None


def load_logging_config(level: str | None = None) -> dict:
    """Read the bundled dictConfig document with the logger level applied."""
    with open(CONFIG_FILE, encoding="utf-8") as f:
        config = json.load(f)
    config["loggers"][LOGGER_NAME]["level"] = (level or settings.log_level).upper()
    return config


def setup_logger(level: str | None = None) -> None:
    """Configure the ``SchemaCodegen`` logger and start its queue listener.

    Calling it again replaces the previous configuration; the listener of the
    earlier call is stopped first so only one drains the queue.

    Args:
        level: Logger level name; ``settings.log_level`` when omitted
    """
    global _listener
    if _listener is not None:
        _listener.stop()
        _listener = None

    logging.config.dictConfig(load_logging_config(level))
    queue_handler = logging.getHandlerByName("queue_handler")
    listener = getattr(queue_handler, "listener", None)
    if listener is not None:
        listener.start()
        _listener = listener


@atexit.register
def _stop_listener() -> None:
    if _listener is not None:
        _listener.stop()
