"""Application service: Delete Category use case."""

from __future__ import annotations

from storefront.application.parsing import parse_id
from storefront.store.category_store import CategoryStore


class DeleteCategoryHandler:

    def __init__(self, category_store: CategoryStore) -> None:
        self._category_store = category_store

    def handle(self, category_id: str) -> None:
        """Remove a category. Its products stay, uncategorized."""
        self._category_store.delete_category(parse_id(category_id, "category"))
