"""Application service: Create Category use case."""

from __future__ import annotations

from storefront.application.dto import CategoryDTO, category_to_dto
from storefront.domain.exceptions import DuplicateEntityError
from storefront.domain.model.category import Category
from storefront.store.category_store import CategoryStore


class CreateCategoryHandler:

    def __init__(self, category_store: CategoryStore) -> None:
        self._category_store = category_store

    def handle(self, name: str, description: str = "") -> CategoryDTO:
        """Add a category. Names are unique (case-insensitive)."""
        category = Category.create(name, description)

        # Duplicate detection happens here, before the store write.
        if self._category_store.get_category_by_name(category.name) is not None:
            raise DuplicateEntityError(f"Category '{category.name}' already exists")

        self._category_store.create_category(category)
        return category_to_dto(category)
