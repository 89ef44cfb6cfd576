"""Engine construction and the SQL transaction provider."""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

import structlog
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Connection, Engine, make_url
from sqlalchemy.exc import SQLAlchemyError

from storefront.domain.gateway.errors import GatewayError
from storefront.store.exceptions import DatabaseConnectionError
from storefront.store.transaction import TransactionProvider, TransactionScope

logger = structlog.get_logger(__name__)

WRITE_OPTION = "storefront_write"


def create_database_engine(database_url: str, echo: bool = False) -> Engine:
    """Build the process-wide engine (and its connection pool)."""
    url = make_url(database_url)
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, echo=echo, pool_pre_ping=True)
    if engine.dialect.name == "sqlite":
        _configure_sqlite(engine)
    logger.debug("engine_created", backend=engine.dialect.name)
    return engine


def _configure_sqlite(engine: Engine) -> None:
    # pysqlite defers BEGIN until the first write and breaks SAVEPOINT;
    # let SQLAlchemy emit BEGIN itself.  Foreign keys are off by default.
    # Write scopes begin IMMEDIATE: a deferred reader cannot upgrade to the
    # write lock while another writer waits on it.
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):  # type: ignore[no-untyped-def]
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):  # type: ignore[no-untyped-def]
        if conn.get_execution_options().get(WRITE_OPTION):
            conn.exec_driver_sql("BEGIN IMMEDIATE")
        else:
            conn.exec_driver_sql("BEGIN")


class SqlTransactionScope(TransactionScope):
    """One pooled connection with one open transaction."""

    def __init__(self, connection: Connection, write: bool = False) -> None:
        self._connection = connection
        if write:
            connection.execution_options(**{WRITE_OPTION: True})
        self._transaction = connection.begin()

    @property
    def connection(self) -> Connection:
        return self._connection

    def commit(self) -> None:
        try:
            self._transaction.commit()
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError("Could not commit transaction") from exc

    def rollback(self) -> None:
        try:
            if self._transaction.is_active:
                self._transaction.rollback()
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError("Could not roll back transaction") from exc

    def close(self) -> None:
        try:
            self._connection.close()
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError("Could not release connection") from exc

    @contextmanager
    def savepoint(self) -> Iterator[None]:
        try:
            nested = self._connection.begin_nested()
        except SQLAlchemyError as exc:
            raise GatewayError("Could not create savepoint") from exc
        with nested:
            yield


class SqlTransactionProvider(TransactionProvider):

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def open(self, write: bool = False) -> SqlTransactionScope:
        try:
            connection = self._engine.connect()
        except SQLAlchemyError as exc:
            raise DatabaseConnectionError("Failed to get connection") from exc
        try:
            return SqlTransactionScope(connection, write)
        except SQLAlchemyError as exc:
            connection.close()
            raise DatabaseConnectionError("Failed to begin transaction") from exc
