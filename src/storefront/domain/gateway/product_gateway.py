"""Abstract gateway for the Product aggregate.

Defined in the domain layer so stores never depend on infrastructure.
Every method receives an already-open connection from a transaction
scope and must never open, commit or close one itself.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from storefront.domain.model.product import Product
from storefront.domain.model.product_filter import ProductFilter


class ProductGateway(ABC):

    @abstractmethod
    def find_by_id(self, conn: Any, product_id: UUID) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def find_by_name(self, conn: Any, name: str) -> Product | None:
        """Return a product by its exact name (case-insensitive), or None."""

    @abstractmethod
    def find_all(self, conn: Any, limit: int, offset: int) -> list[Product]:
        """Return one page of products ordered by name."""

    @abstractmethod
    def count_all(self, conn: Any) -> int:
        """Return the number of products in the catalog."""

    @abstractmethod
    def find_filtered(
        self, conn: Any, product_filter: ProductFilter, limit: int, offset: int
    ) -> list[Product]:
        """Return one page of products matching the filter, ordered by name."""

    @abstractmethod
    def count_filtered(self, conn: Any, product_filter: ProductFilter) -> int:
        """Return the number of products matching the filter."""

    @abstractmethod
    def save(self, conn: Any, product: Product) -> None:
        """Insert a new product."""

    @abstractmethod
    def update(self, conn: Any, product: Product) -> bool:
        """Overwrite name, description, price and category. False if no such row.

        Stock is left alone; only reduce_stock and increase_stock change it.
        """

    @abstractmethod
    def delete_by_id(self, conn: Any, product_id: UUID) -> bool:
        """Delete a product. False if no such row."""

    @abstractmethod
    def reduce_stock(self, conn: Any, product_id: UUID, quantity: int) -> bool:
        """Subtract ``quantity`` only if at least that much is in stock.

        Must be a single conditional statement at the storage layer.
        Returns False (never raises) when no row satisfied the condition.
        """

    @abstractmethod
    def increase_stock(self, conn: Any, product_id: UUID, quantity: int) -> bool:
        """Add ``quantity`` to the stock. False if no such row."""
