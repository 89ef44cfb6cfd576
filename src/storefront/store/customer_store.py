"""Customer store.

Customers are mostly created implicitly by order placement (see
OrderStore); this store serves lookups and explicit contact updates.
"""

from __future__ import annotations

from collections.abc import Iterable
from uuid import UUID

from storefront.domain.exceptions import CustomerNotFoundError
from storefront.domain.gateway.customer_gateway import CustomerGateway
from storefront.domain.gateway.errors import GatewayError
from storefront.domain.model.customer import Customer, normalize_email
from storefront.store.base import BaseStore
from storefront.store.cache import ApplicationCache
from storefront.store.exceptions import (
    CustomerCreationError,
    CustomerRetrievalError,
    CustomerUpdateError,
)
from storefront.store.transaction import TransactionProvider, transactional

CUSTOMER_PREFIX = "customer:"


def customer_email_key(email: str) -> str:
    return f"{CUSTOMER_PREFIX}email:{normalize_email(email)}"


def customer_id_key(customer_id: UUID) -> str:
    return f"{CUSTOMER_PREFIX}id:{customer_id}"


class CustomerStore(BaseStore):

    def __init__(
        self,
        transactions: TransactionProvider,
        cache: ApplicationCache,
        customer_gateway: CustomerGateway,
    ) -> None:
        super().__init__(transactions, cache)
        self._gateway = customer_gateway

    def find_by_email(self, email: str) -> Customer | None:
        normalized = normalize_email(email)
        return self._cached_read(
            customer_email_key(normalized),
            lambda conn: self._gateway.find_by_email(conn, normalized),
            lambda: CustomerRetrievalError(normalized),
        )

    def find_by_id(self, customer_id: UUID) -> Customer | None:
        return self._cached_read(
            customer_id_key(customer_id),
            lambda conn: self._gateway.find_by_id(conn, customer_id),
            lambda: CustomerRetrievalError(str(customer_id)),
        )

    def find_by_ids(self, customer_ids: Iterable[UUID]) -> list[Customer]:
        """Batch lookup; the key is the sorted id list, not a hash of it."""
        ids = sorted(set(customer_ids), key=str)
        if not ids:
            return []
        joined = ",".join(str(customer_id) for customer_id in ids)
        return self._cached_read(
            f"{CUSTOMER_PREFIX}ids:{joined}",
            lambda conn: self._gateway.find_by_ids(conn, ids),
            lambda: CustomerRetrievalError(joined),
        )

    def create_customer(self, customer: Customer) -> Customer:
        try:
            with transactional(self._transactions) as scope:
                self._gateway.save(scope.connection, customer)
        except GatewayError as exc:
            raise CustomerCreationError(customer.email) from exc

        self._cache.invalidate_by_prefix(CUSTOMER_PREFIX)
        return customer

    def update_customer(self, customer: Customer) -> Customer:
        try:
            with transactional(self._transactions) as scope:
                if not self._gateway.update(scope.connection, customer):
                    raise CustomerNotFoundError(str(customer.id))
        except GatewayError as exc:
            raise CustomerUpdateError(str(customer.id)) from exc

        self._cache.invalidate_by_prefix(CUSTOMER_PREFIX)
        return customer
