"""Transaction scopes: one database session per logical operation.

Stores never talk to a connection pool directly.  They ask a
TransactionProvider for a scope, run every gateway call of the
operation on ``scope.connection`` and let ``transactional()`` decide
between commit and rollback.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from typing import Any

import structlog

from storefront.store.exceptions import DatabaseConnectionError

logger = structlog.get_logger(__name__)


class TransactionScope(ABC):
    """An exclusive database session with explicit commit/rollback/close."""

    @property
    @abstractmethod
    def connection(self) -> Any:
        """The handle gateways execute statements on."""

    @abstractmethod
    def commit(self) -> None:
        """Make every write of this scope durable."""

    @abstractmethod
    def rollback(self) -> None:
        """Discard every uncommitted write of this scope."""

    @abstractmethod
    def close(self) -> None:
        """Release the underlying session. Uncommitted writes are discarded."""

    @abstractmethod
    def savepoint(self) -> AbstractContextManager[None]:
        """Nested rollback point: writes inside are undone if the block raises."""

    def __enter__(self) -> TransactionScope:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class TransactionProvider(ABC):

    @abstractmethod
    def open(self, write: bool = False) -> TransactionScope:
        """Acquire a new scope.

        A ``write`` scope holds the database write lock from its first
        statement; concurrent write scopes wait for each other.

        Raises DatabaseConnectionError if no session can be acquired.
        """


@contextmanager
def transactional(provider: TransactionProvider) -> Iterator[TransactionScope]:
    """Run a block as one transaction.

    Commits if the block completes.  If the block (or the commit) raises,
    the scope is rolled back *before* the exception leaves this function.
    The scope is closed on every path, including a failing rollback.
    """
    scope = provider.open(write=True)
    try:
        yield scope
        scope.commit()
    except BaseException as exc:
        try:
            scope.rollback()
        except DatabaseConnectionError:
            logger.warning("rollback_failed", error=str(exc), exc_info=True)
        else:
            logger.info("transaction_rolled_back", error_type=type(exc).__name__)
        raise
    finally:
        scope.close()


@contextmanager
def read_scope(provider: TransactionProvider) -> Iterator[TransactionScope]:
    """Open a scope for reads only; it is released however the block exits."""
    scope = provider.open()
    try:
        yield scope
    finally:
        scope.close()
