"""Application service: Update Product use case."""

from __future__ import annotations

import dataclasses

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.application.parsing import parse_id
from storefront.domain.exceptions import CategoryNotFoundError, ProductNotFoundError, ValidationError
from storefront.domain.model.value_objects import Money
from storefront.store.category_store import CategoryStore
from storefront.store.product_store import ProductStore


class UpdateProductHandler:

    def __init__(self, product_store: ProductStore, category_store: CategoryStore) -> None:
        self._product_store = product_store
        self._category_store = category_store

    def handle(
        self,
        product_id: str,
        price: str | None = None,
        description: str | None = None,
        category_name: str | None = None,
    ) -> ProductDTO:
        """Change a product's price, description and/or category.

        Existing orders keep the total they were placed with.
        """
        if price is None and description is None and category_name is None:
            raise ValidationError("Nothing to update")

        pid = parse_id(product_id, "product")
        cached = self._product_store.get_product(pid)
        if cached is None:
            raise ProductNotFoundError(product_id)

        # The cached instance is shared; mutate a copy so a failed write
        # cannot leave a half-updated product in the cache.
        product = dataclasses.replace(cached)

        category_id = None
        if category_name is not None:
            category = self._category_store.get_category_by_name(category_name)
            if category is None:
                raise CategoryNotFoundError(category_name)
            category_id = category.id

        if price is not None:
            product.update_price(Money.of(price))
        if description is not None or category_id is not None:
            product.update_details(description=description, category_id=category_id)

        self._product_store.update_product(product)
        return product_to_dto(product)
