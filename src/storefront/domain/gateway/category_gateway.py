"""Abstract gateway for the Category aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any
from uuid import UUID

from storefront.domain.model.category import Category


class CategoryGateway(ABC):

    @abstractmethod
    def find_by_id(self, conn: Any, category_id: UUID) -> Category | None:
        """Return a category by its ID, or None."""

    @abstractmethod
    def find_by_name(self, conn: Any, name: str) -> Category | None:
        """Return a category by its exact name (case-insensitive), or None."""

    @abstractmethod
    def find_all(self, conn: Any, limit: int, offset: int) -> list[Category]:
        """Return one page of categories ordered by name."""

    @abstractmethod
    def count_all(self, conn: Any) -> int:
        """Return the number of categories."""

    @abstractmethod
    def search_by_name(self, conn: Any, query: str, limit: int, offset: int) -> list[Category]:
        """Return one page of categories whose name contains ``query``."""

    @abstractmethod
    def count_by_name(self, conn: Any, query: str) -> int:
        """Return the number of categories whose name contains ``query``."""

    @abstractmethod
    def save(self, conn: Any, category: Category) -> None:
        """Insert a new category."""

    @abstractmethod
    def update(self, conn: Any, category: Category) -> bool:
        """Overwrite a category. False if no such row."""

    @abstractmethod
    def delete_by_id(self, conn: Any, category_id: UUID) -> bool:
        """Delete a category. False if no such row."""
