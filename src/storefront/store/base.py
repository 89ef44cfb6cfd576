"""Plumbing shared by every store: cached reads through a fresh scope."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

from storefront.domain.gateway.errors import GatewayError
from storefront.store.cache import ApplicationCache
from storefront.store.exceptions import StoreError
from storefront.store.transaction import TransactionProvider, read_scope

T = TypeVar("T")


class BaseStore:

    def __init__(self, transactions: TransactionProvider, cache: ApplicationCache) -> None:
        self._transactions = transactions
        self._cache = cache

    def _cached_read(
        self,
        key: str,
        read: Callable[[Any], T],
        on_error: Callable[[], StoreError],
    ) -> T:
        """Return ``key`` from the cache, or run ``read(connection)`` and cache it.

        A scope is only opened on a miss.  Gateway failures become
        ``on_error()``; connection failures surface as
        DatabaseConnectionError.  Neither populates the cache.
        """

        def load() -> T:
            with read_scope(self._transactions) as scope:
                return read(scope.connection)

        try:
            return self._cache.get_or_load(key, load)
        except GatewayError as exc:
            raise on_error() from exc
