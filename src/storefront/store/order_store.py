"""Order store: atomic order placement.

``place_order`` is the one operation in the system where concurrent
callers compete for the same rows.  It runs every step inside a single
transaction:

    begin -> resolve product -> validate stock -> conditional decrement
          -> resolve or create customer -> price -> save order -> commit
          -> invalidate caches

and ends either Committed (caches invalidated) or RolledBack (database
and cache untouched).  The conditional decrement at the storage layer is
what prevents overselling; the stock check before it only fails fast.
There is no retry loop here; retrying is the caller's decision.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID

import structlog

from storefront.domain.exceptions import InsufficientStockError, ProductNotFoundError
from storefront.domain.gateway.customer_gateway import CustomerGateway
from storefront.domain.gateway.errors import ConstraintViolationError, GatewayError
from storefront.domain.gateway.order_gateway import OrderGateway
from storefront.domain.gateway.product_gateway import ProductGateway
from storefront.domain.model.customer import Customer, CustomerDetails, normalize_email
from storefront.domain.model.order import Order, OrderRequest
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Quantity
from storefront.store.base import BaseStore
from storefront.store.cache import ApplicationCache
from storefront.store.customer_store import customer_email_key, customer_id_key
from storefront.store.exceptions import (
    OrderCountError,
    OrderPlacementError,
    OrderRetrievalError,
)
from storefront.store.product_store import (
    PRODUCT_ALL_PREFIX,
    PRODUCT_COUNT_PREFIX,
    PRODUCT_NAME_PREFIX,
    PRODUCT_SEARCH_PREFIX,
    product_key,
)
from storefront.store.transaction import TransactionProvider, TransactionScope, transactional

logger = structlog.get_logger(__name__)

ORDER_PREFIX = "order:"
ORDER_ALL_PREFIX = "order:all:"
ORDER_COUNT_PREFIX = "order:count"


class OrderStore(BaseStore):

    def __init__(
        self,
        transactions: TransactionProvider,
        cache: ApplicationCache,
        customer_gateway: CustomerGateway,
        product_gateway: ProductGateway,
        order_gateway: OrderGateway,
    ) -> None:
        super().__init__(transactions, cache)
        self._customers = customer_gateway
        self._products = product_gateway
        self._orders = order_gateway

    def place_order(self, request: OrderRequest, details: CustomerDetails) -> Order:
        """Place an order for ``request.quantity`` units of one product.

        Raises:
            ValidationError: bad quantity, email or shipping data.
            ProductNotFoundError: the product does not exist.
            InsufficientStockError: too little stock, either as read or at
                the moment of the conditional decrement.
            OrderPlacementError: a gateway call failed.
            DatabaseConnectionError: no transaction could be opened.

        Every failure is rolled back before it is raised and leaves the
        cache exactly as it was.
        """
        quantity = Quantity(request.quantity)
        email = normalize_email(details.email)
        details.validate()
        request.validate()
        product_id = request.product_id

        try:
            with transactional(self._transactions) as scope:
                conn = scope.connection

                product = self._resolve_product(conn, product_id)
                if quantity.value > product.stock_quantity:
                    raise InsufficientStockError(
                        str(product_id), quantity.value, product.stock_quantity
                    )

                # The cached stock above may be stale; this is the real check.
                if not self._products.reduce_stock(conn, product_id, quantity.value):
                    self._reject_decrement(conn, product_id, quantity.value)

                customer, created = self._resolve_customer(scope, email, details)

                # Priced from the product read above, never re-read.
                order = Order.place(customer.id, product, quantity, request)
                self._orders.save(conn, order)
        except InsufficientStockError as exc:
            logger.warning(
                "order_rejected",
                reason="insufficient_stock",
                product_id=str(product_id),
                requested=exc.requested,
            )
            raise
        except GatewayError as exc:
            logger.error("order_placement_failed", product_id=str(product_id), error=str(exc))
            raise OrderPlacementError(str(product_id)) from exc

        self._invalidate(product_id, customer if created else None)
        logger.info(
            "order_placed",
            order_id=str(order.id),
            product_id=str(product_id),
            quantity=quantity.value,
            total=str(order.total_amount),
            new_customer=created,
        )
        return order

    # --- Reads ----------------------------------------------------------------

    def get_order(self, order_id: UUID) -> Order | None:
        return self._cached_read(
            f"{ORDER_PREFIX}id:{order_id}",
            lambda conn: self._orders.find_by_id(conn, order_id),
            lambda: OrderRetrievalError(str(order_id)),
        )

    def get_all_orders(self, limit: int, offset: int) -> list[Order]:
        return self._cached_read(
            f"{ORDER_ALL_PREFIX}{limit}:{offset}",
            lambda conn: self._orders.find_all(conn, limit, offset),
            lambda: OrderRetrievalError("all"),
        )

    def count_all(self) -> int:
        return self._cached_read(
            ORDER_COUNT_PREFIX,
            self._orders.count_all,
            lambda: OrderCountError("all"),
        )

    # --- Placement steps --------------------------------------------------------

    def _resolve_product(self, conn: Any, product_id: UUID) -> Product:
        # Cache lookup only: a placement that rolls back must not add entries.
        product = self._cache.get(product_key(product_id))
        if product is None:
            product = self._products.find_by_id(conn, product_id)
        if product is None:
            raise ProductNotFoundError(str(product_id))
        return product

    def _reject_decrement(self, conn: Any, product_id: UUID, requested: int) -> None:
        """Explain a zero-row decrement: the product is gone, or stock is short."""
        current = self._products.find_by_id(conn, product_id)
        if current is None:
            raise ProductNotFoundError(str(product_id))
        raise InsufficientStockError(str(product_id), requested, current.stock_quantity)

    def _resolve_customer(
        self,
        scope: TransactionScope,
        email: str,
        details: CustomerDetails,
    ) -> tuple[Customer, bool]:
        """Find the customer for ``email`` or create one in this transaction.

        Returns the customer and whether it was created here.  Storage
        enforces one row per email; losing that race to a concurrent
        placement is resolved by re-reading the winner's row.
        """
        conn = scope.connection
        customer = self._cache.get(customer_email_key(email))
        if customer is None:
            customer = self._customers.find_by_email(conn, email)
        if customer is not None:
            return customer, False

        customer = Customer.create(details)
        try:
            with scope.savepoint():
                self._customers.save(conn, customer)
        except ConstraintViolationError:
            existing = self._customers.find_by_email(conn, email)
            if existing is None:
                raise
            logger.info("customer_already_exists", email=email)
            return existing, False
        return customer, True

    def _invalidate(self, product_id: UUID, new_customer: Customer | None) -> None:
        self._cache.invalidate(product_key(product_id))
        self._cache.invalidate_by_prefix(PRODUCT_ALL_PREFIX)
        self._cache.invalidate_by_prefix(PRODUCT_SEARCH_PREFIX)
        self._cache.invalidate_by_prefix(PRODUCT_COUNT_PREFIX)
        self._cache.invalidate_by_prefix(PRODUCT_NAME_PREFIX)
        self._cache.invalidate_by_prefix(ORDER_ALL_PREFIX)
        self._cache.invalidate_by_prefix(ORDER_COUNT_PREFIX)
        if new_customer is not None:
            self._cache.invalidate(customer_email_key(new_customer.email))
            self._cache.invalidate(customer_id_key(new_customer.id))
