"""Application service: Update Category use case."""

from __future__ import annotations

import dataclasses

from storefront.application.dto import CategoryDTO, category_to_dto
from storefront.application.parsing import parse_id
from storefront.domain.exceptions import CategoryNotFoundError, DuplicateEntityError, ValidationError
from storefront.store.category_store import CategoryStore


class UpdateCategoryHandler:

    def __init__(self, category_store: CategoryStore) -> None:
        self._category_store = category_store

    def handle(
        self,
        category_id: str,
        name: str | None = None,
        description: str | None = None,
    ) -> CategoryDTO:
        """Rename and/or redescribe a category.

        A new name may not belong to another category; keeping the
        current name (in any case) is allowed.
        """
        if name is None and description is None:
            raise ValidationError("Nothing to update")

        cid = parse_id(category_id, "category")
        cached = self._category_store.get_category(cid)
        if cached is None:
            raise CategoryNotFoundError(category_id)
        category = dataclasses.replace(cached)

        if name is not None:
            category.rename(name)
            holder = self._category_store.get_category_by_name(category.name)
            if holder is not None and holder.id != category.id:
                raise DuplicateEntityError(f"Category '{category.name}' already exists")
        if description is not None:
            category.describe(description)

        self._category_store.update_category(category)
        return category_to_dto(category)
