"""Product store: transactions and caching around the product gateway.

Every product write invalidates the whole ``product:`` family, so no
product entry survives a committed write.
"""

from __future__ import annotations

from uuid import UUID

import structlog

from storefront.domain.exceptions import InsufficientStockError, ProductNotFoundError
from storefront.domain.gateway.errors import GatewayError
from storefront.domain.gateway.product_gateway import ProductGateway
from storefront.domain.model.product import Product
from storefront.domain.model.product_filter import ProductFilter
from storefront.domain.model.value_objects import Quantity
from storefront.store.base import BaseStore
from storefront.store.cache import ApplicationCache
from storefront.store.exceptions import (
    ProductCountError,
    ProductCreationError,
    ProductDeleteError,
    ProductRetrievalError,
    ProductSearchError,
    ProductUpdateError,
)
from storefront.store.review_store import invalidate_product_reviews
from storefront.store.transaction import TransactionProvider, transactional

logger = structlog.get_logger(__name__)

PRODUCT_PREFIX = "product:"
PRODUCT_ALL_PREFIX = "product:all:"
PRODUCT_SEARCH_PREFIX = "product:search:"
PRODUCT_COUNT_PREFIX = "product:count:"
PRODUCT_NAME_PREFIX = "product:name:"


def product_key(product_id: UUID) -> str:
    return f"{PRODUCT_PREFIX}id:{product_id}"


class ProductStore(BaseStore):

    def __init__(
        self,
        transactions: TransactionProvider,
        cache: ApplicationCache,
        product_gateway: ProductGateway,
    ) -> None:
        super().__init__(transactions, cache)
        self._gateway = product_gateway

    # --- Writes ---------------------------------------------------------------

    def create_product(self, product: Product) -> Product:
        try:
            with transactional(self._transactions) as scope:
                self._gateway.save(scope.connection, product)
        except GatewayError as exc:
            raise ProductCreationError(product.name) from exc

        self._invalidate_all()
        logger.info("product_created", product_id=str(product.id), name=product.name)
        return product

    def update_product(self, product: Product) -> Product:
        try:
            with transactional(self._transactions) as scope:
                if not self._gateway.update(scope.connection, product):
                    raise ProductNotFoundError(str(product.id))
        except GatewayError as exc:
            raise ProductUpdateError(str(product.id)) from exc

        self._invalidate_all()
        return product

    def delete_product(self, product_id: UUID) -> None:
        try:
            with transactional(self._transactions) as scope:
                if not self._gateway.delete_by_id(scope.connection, product_id):
                    raise ProductNotFoundError(str(product_id))
        except GatewayError as exc:
            raise ProductDeleteError(str(product_id)) from exc

        self._invalidate_all()
        # Reviews go with the product (ON DELETE CASCADE).
        invalidate_product_reviews(self._cache, product_id)
        logger.info("product_deleted", product_id=str(product_id))

    def reduce_stock(self, product_id: UUID, quantity: int) -> None:
        """Take ``quantity`` units out of stock, or fail without touching it."""
        qty = Quantity(quantity)
        try:
            with transactional(self._transactions) as scope:
                if not self._gateway.reduce_stock(scope.connection, product_id, qty.value):
                    raise InsufficientStockError(str(product_id), qty.value)
        except GatewayError as exc:
            raise ProductUpdateError(str(product_id)) from exc

        self._invalidate_all()

    def increase_stock(self, product_id: UUID, quantity: int) -> None:
        """Put ``quantity`` units back into stock.

        Unconditional: restocking never depends on what is already there.
        """
        qty = Quantity(quantity)
        try:
            with transactional(self._transactions) as scope:
                if not self._gateway.increase_stock(scope.connection, product_id, qty.value):
                    raise ProductNotFoundError(str(product_id))
        except GatewayError as exc:
            raise ProductUpdateError(str(product_id)) from exc

        self._invalidate_all()
        logger.info("product_restocked", product_id=str(product_id), quantity=qty.value)

    # --- Reads ----------------------------------------------------------------

    def get_product(self, product_id: UUID) -> Product | None:
        return self._cached_read(
            product_key(product_id),
            lambda conn: self._gateway.find_by_id(conn, product_id),
            lambda: ProductRetrievalError(str(product_id)),
        )

    def get_product_by_name(self, name: str) -> Product | None:
        return self._cached_read(
            f"{PRODUCT_NAME_PREFIX}{name.strip().lower()}",
            lambda conn: self._gateway.find_by_name(conn, name.strip()),
            lambda: ProductRetrievalError(name),
        )

    def get_all_products(self, limit: int, offset: int) -> list[Product]:
        return self._cached_read(
            f"{PRODUCT_ALL_PREFIX}{limit}:{offset}",
            lambda conn: self._gateway.find_all(conn, limit, offset),
            lambda: ProductRetrievalError("all"),
        )

    def count_all(self) -> int:
        return self._cached_read(
            f"{PRODUCT_COUNT_PREFIX}all",
            self._gateway.count_all,
            lambda: ProductCountError("all"),
        )

    def search_products(self, product_filter: ProductFilter, limit: int, offset: int) -> list[Product]:
        return self._cached_read(
            f"{PRODUCT_SEARCH_PREFIX}{product_filter.cache_key()}:{limit}:{offset}",
            lambda conn: self._gateway.find_filtered(conn, product_filter, limit, offset),
            lambda: ProductSearchError(product_filter.cache_key()),
        )

    def count_products_by_filter(self, product_filter: ProductFilter) -> int:
        return self._cached_read(
            f"{PRODUCT_COUNT_PREFIX}{product_filter.cache_key()}",
            lambda conn: self._gateway.count_filtered(conn, product_filter),
            lambda: ProductCountError(product_filter.cache_key()),
        )

    def _invalidate_all(self) -> None:
        self._cache.invalidate_by_prefix(PRODUCT_PREFIX)
