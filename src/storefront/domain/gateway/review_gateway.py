"""Abstract gateway for the Review aggregate. Reviews are never deleted."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from storefront.domain.model.review import Review


class ReviewGateway(ABC):

    @abstractmethod
    def find_by_product(self, conn: Any, product_id: UUID, limit: int, offset: int) -> list[Review]:
        """Return one page of a product's reviews, newest first."""

    @abstractmethod
    def count_by_product(self, conn: Any, product_id: UUID) -> int:
        """Return the number of reviews for a product."""

    @abstractmethod
    def save(self, conn: Any, review: Review) -> None:
        """Insert a new review."""
