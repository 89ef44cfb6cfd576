"""Abstract gateway for the Order aggregate. Orders are never deleted."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from storefront.domain.model.order import Order


class OrderGateway(ABC):

    @abstractmethod
    def find_by_id(self, conn: Any, order_id: UUID) -> Order | None:
        """Return an order with its line items, or None."""

    @abstractmethod
    def find_all(self, conn: Any, limit: int, offset: int) -> list[Order]:
        """Return one page of orders, newest first."""

    @abstractmethod
    def count_all(self, conn: Any) -> int:
        """Return the number of orders."""

    @abstractmethod
    def save(self, conn: Any, order: Order) -> None:
        """Insert the order row and its line items."""
