"""Application service: Search Products use case (query)."""

from __future__ import annotations

from storefront.application.dto import ProductPageDTO, product_to_dto
from storefront.domain.exceptions import CategoryNotFoundError, ValidationError
from storefront.domain.model.product_filter import ProductFilter
from storefront.store.category_store import CategoryStore
from storefront.store.product_store import ProductStore


class SearchProductsHandler:

    def __init__(self, product_store: ProductStore, category_store: CategoryStore) -> None:
        self._product_store = product_store
        self._category_store = category_store

    def handle(
        self,
        name: str | None = None,
        category_name: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> ProductPageDTO:
        """One page of products matching the name fragment and/or category."""
        if page < 1 or page_size < 1:
            raise ValidationError("Page and page size must be positive")

        category_id = None
        if category_name:
            category = self._category_store.get_category_by_name(category_name)
            if category is None:
                raise CategoryNotFoundError(category_name)
            category_id = category.id

        product_filter = ProductFilter(name=name, category_id=category_id)
        offset = (page - 1) * page_size
        products = self._product_store.search_products(product_filter, page_size, offset)
        total = self._product_store.count_products_by_filter(product_filter)

        return ProductPageDTO(
            items=[product_to_dto(p) for p in products],
            total=total,
            page=page,
            page_size=page_size,
        )
