"""Scoped access to a database through a SQLAlchemy engine."""

from __future__ import annotations

import threading
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Callable, TypeVar

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Connection, Engine, make_url
from sqlalchemy.exc import ArgumentError, DBAPIError, NoSuchModuleError
from sqlalchemy.pool import StaticPool

from schema_codegen.core.exceptions import (
    ConfigurationError,
    DatabaseConnectionError,
    ExtractionError,
)
from schema_codegen.logger import logger

T = TypeVar("T")


class Database:
    """A database handle that runs actions on one pinned connection.

    Each action runs on a daemon worker thread and is awaited by the caller,
    optionally with a timeout. A worker left behind by a timeout never keeps
    the process alive. The handle owns its engine and must be closed;
    it is a context manager and ``close`` may be called any number of times.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize the database handle.

        Args:
            engine: Engine the handle takes ownership of
        """
        self.engine = engine
        self._closed = False

    @classmethod
    def for_url(
        cls,
        url: str,
        dbapi_driver: str | None = None,
        user: str | None = None,
        password: str | None = None,
        keep_alive: bool = False,
        expected_backend: str | None = None,
    ) -> Database:
        """Create a handle for a database URL without connecting yet.

        Args:
            url: SQLAlchemy database URL, e.g. ``postgresql://localhost/test``
            dbapi_driver: DBAPI module for the dialect, e.g. ``psycopg2``
            user: User name overriding the one in the URL
            password: Password overriding the one in the URL
            keep_alive: Keep one connection open for the lifetime of the handle
            expected_backend: Backend name the URL must use, if any

        Raises:
            ConfigurationError: If the URL cannot be parsed or names another backend
            DatabaseConnectionError: If the dialect or DBAPI module is not available
        """
        sa_url = _build_url(url, dbapi_driver, user, password)
        backend = sa_url.get_backend_name()
        if expected_backend is not None and backend != expected_backend:
            raise ConfigurationError(
                "url",
                f"Driver '{expected_backend}' cannot open '{backend}' URLs",
            )

        kwargs: dict = {}
        if keep_alive:
            kwargs["poolclass"] = StaticPool
        if backend == "sqlite":
            # The worker thread is not the thread that created the engine.
            kwargs["connect_args"] = {"check_same_thread": False}

        masked = sa_url.render_as_string(hide_password=True)
        try:
            engine = create_engine(sa_url, **kwargs)
        except (NoSuchModuleError, ImportError) as e:
            raise DatabaseConnectionError(masked, e) from e
        logger.debug("Created engine for %s (keep_alive=%s)", masked, keep_alive)
        return cls(engine)

    @property
    def masked_url(self) -> str:
        return self.engine.url.render_as_string(hide_password=True)

    def run(self, action: Callable[[Connection], T], timeout: float | None = None) -> T:
        """Run an action on a pinned connection and wait for its result.

        Args:
            action: Callable receiving the connection for its whole duration
            timeout: Seconds to wait; ``None`` waits forever

        Returns:
            Whatever the action returns

        Raises:
            DatabaseConnectionError: If no connection can be opened
            ExtractionError: If the action does not finish within the timeout
        """
        if self._closed:
            raise DatabaseConnectionError(
                self.masked_url, RuntimeError("database handle is closed")
            )
        future: Future[T] = Future()
        worker = threading.Thread(
            target=self._run_pinned,
            args=(action, future),
            name="schema-codegen-db",
            daemon=True,
        )
        worker.start()
        try:
            return future.result(timeout=timeout)
        except FuturesTimeoutError as e:
            raise ExtractionError(
                f"Schema extraction did not finish within {timeout} second(s)"
            ) from e

    def _run_pinned(
        self, action: Callable[[Connection], T], future: Future[T]
    ) -> None:
        if not future.set_running_or_notify_cancel():
            return
        try:
            future.set_result(self._call_pinned(action))
        except BaseException as e:
            future.set_exception(e)

    def _call_pinned(self, action: Callable[[Connection], T]) -> T:
        try:
            connection = self.engine.connect()
        except DBAPIError as e:
            raise DatabaseConnectionError(self.masked_url, e) from e
        logger.debug("Opened pinned connection to %s", self.masked_url)
        with connection:
            return action(connection)

    def close(self) -> None:
        """Dispose the engine; later runs are refused."""
        if self._closed:
            return
        self._closed = True
        self.engine.dispose()
        logger.debug("Closed database %s", self.masked_url)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _build_url(
    url: str, dbapi_driver: str | None, user: str | None, password: str | None
) -> URL:
    try:
        sa_url = make_url(url)
    except ArgumentError as e:
        raise ConfigurationError("url", f"Invalid database URL '{url}': {e}") from e

    if dbapi_driver:
        sa_url = sa_url.set(drivername=f"{sa_url.get_backend_name()}+{dbapi_driver}")
    if user is not None:
        sa_url = sa_url.set(username=user)
    if password is not None:
        sa_url = sa_url.set(password=password)
    return sa_url
