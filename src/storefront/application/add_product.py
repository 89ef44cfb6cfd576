"""Application service: Add Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.domain.exceptions import CategoryNotFoundError, DuplicateEntityError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.store.category_store import CategoryStore
from storefront.store.product_store import ProductStore


class AddProductHandler:

    def __init__(self, product_store: ProductStore, category_store: CategoryStore) -> None:
        self._product_store = product_store
        self._category_store = category_store

    def handle(
        self,
        name: str,
        price: str,
        stock_quantity: int = 0,
        description: str = "",
        category_name: str | None = None,
    ) -> ProductDTO:
        """Add a new product to the catalog."""
        category_id = None
        if category_name:
            category = self._category_store.get_category_by_name(category_name)
            if category is None:
                raise CategoryNotFoundError(category_name)
            category_id = category.id

        product = Product.create(
            name=name,
            price=Money.of(price),
            stock_quantity=stock_quantity,
            description=description,
            category_id=category_id,
        )
        if self._product_store.get_product_by_name(product.name) is not None:
            raise DuplicateEntityError(f"Product '{product.name}' already exists")

        self._product_store.create_product(product)
        return product_to_dto(product)
