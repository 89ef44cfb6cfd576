"""Category store: transactions and caching around the category gateway.

Duplicate-name checks belong to the calling service; by the time a
category reaches ``create_category`` it is assumed valid.
"""

from __future__ import annotations

from uuid import UUID

import structlog

from storefront.domain.exceptions import CategoryNotFoundError
from storefront.domain.gateway.category_gateway import CategoryGateway
from storefront.domain.gateway.errors import GatewayError
from storefront.domain.model.category import Category
from storefront.store.base import BaseStore
from storefront.store.cache import ApplicationCache
from storefront.store.exceptions import (
    CategoryCountError,
    CategoryCreationError,
    CategoryDeleteError,
    CategoryRetrievalError,
    CategorySearchError,
    CategoryUpdateError,
)
from storefront.store.product_store import PRODUCT_PREFIX
from storefront.store.transaction import TransactionProvider, transactional

logger = structlog.get_logger(__name__)

CATEGORY_PREFIX = "category:"


class CategoryStore(BaseStore):

    def __init__(
        self,
        transactions: TransactionProvider,
        cache: ApplicationCache,
        category_gateway: CategoryGateway,
    ) -> None:
        super().__init__(transactions, cache)
        self._gateway = category_gateway

    # --- Writes ---------------------------------------------------------------

    def create_category(self, category: Category) -> Category:
        try:
            with transactional(self._transactions) as scope:
                self._gateway.save(scope.connection, category)
        except GatewayError as exc:
            raise CategoryCreationError(category.name) from exc

        self._cache.invalidate_by_prefix(CATEGORY_PREFIX)
        logger.info("category_created", category_id=str(category.id), name=category.name)
        return category

    def update_category(self, category: Category) -> Category:
        try:
            with transactional(self._transactions) as scope:
                if not self._gateway.update(scope.connection, category):
                    raise CategoryNotFoundError(str(category.id))
        except GatewayError as exc:
            raise CategoryUpdateError(str(category.id)) from exc

        self._cache.invalidate_by_prefix(CATEGORY_PREFIX)
        return category

    def delete_category(self, category_id: UUID) -> None:
        try:
            with transactional(self._transactions) as scope:
                if not self._gateway.delete_by_id(scope.connection, category_id):
                    raise CategoryNotFoundError(str(category_id))
        except GatewayError as exc:
            raise CategoryDeleteError(str(category_id)) from exc

        self._cache.invalidate_by_prefix(CATEGORY_PREFIX)
        # Its products lose the category (ON DELETE SET NULL).
        self._cache.invalidate_by_prefix(PRODUCT_PREFIX)
        logger.info("category_deleted", category_id=str(category_id))

    # --- Reads ----------------------------------------------------------------

    def get_category(self, category_id: UUID) -> Category | None:
        return self._cached_read(
            f"{CATEGORY_PREFIX}id:{category_id}",
            lambda conn: self._gateway.find_by_id(conn, category_id),
            lambda: CategoryRetrievalError(str(category_id)),
        )

    def get_category_by_name(self, name: str) -> Category | None:
        return self._cached_read(
            f"{CATEGORY_PREFIX}name:{name.strip().lower()}",
            lambda conn: self._gateway.find_by_name(conn, name.strip()),
            lambda: CategoryRetrievalError(name),
        )

    def find_all(self, limit: int, offset: int) -> list[Category]:
        return self._cached_read(
            f"{CATEGORY_PREFIX}all:{limit}:{offset}",
            lambda conn: self._gateway.find_all(conn, limit, offset),
            lambda: CategoryRetrievalError("all"),
        )

    def search_by_name(self, query: str, limit: int, offset: int) -> list[Category]:
        return self._cached_read(
            f"{CATEGORY_PREFIX}search:{query}:{limit}:{offset}",
            lambda conn: self._gateway.search_by_name(conn, query, limit, offset),
            lambda: CategorySearchError(query),
        )

    def count(self) -> int:
        return self._cached_read(
            f"{CATEGORY_PREFIX}count",
            self._gateway.count_all,
            lambda: CategoryCountError("all"),
        )

    def count_by_name(self, query: str) -> int:
        return self._cached_read(
            f"{CATEGORY_PREFIX}count:{query}",
            lambda conn: self._gateway.count_by_name(conn, query),
            lambda: CategoryCountError(query),
        )
