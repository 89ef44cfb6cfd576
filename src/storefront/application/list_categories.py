"""Application service: List Categories use case (query)."""

from __future__ import annotations

from storefront.application.dto import CategoryPageDTO, category_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.store.category_store import CategoryStore


class ListCategoriesHandler:

    def __init__(self, category_store: CategoryStore) -> None:
        self._category_store = category_store

    def handle(self, query: str | None = None, limit: int = 20, offset: int = 0) -> CategoryPageDTO:
        if limit < 1 or offset < 0:
            raise ValidationError("Limit must be positive and offset non-negative")

        if query and query.strip():
            q = query.strip()
            categories = self._category_store.search_by_name(q, limit, offset)
            total = self._category_store.count_by_name(q)
        else:
            categories = self._category_store.find_all(limit, offset)
            total = self._category_store.count()

        return CategoryPageDTO(items=[category_to_dto(c) for c in categories], total=total)
