"""Application service: Restock Product use case."""

from __future__ import annotations

from storefront.application.dto import ProductDTO, product_to_dto
from storefront.application.parsing import parse_id
from storefront.domain.exceptions import ProductNotFoundError
from storefront.store.product_store import ProductStore


class RestockProductHandler:

    def __init__(self, product_store: ProductStore) -> None:
        self._product_store = product_store

    def handle(self, product_id: str, quantity: int) -> ProductDTO:
        pid = parse_id(product_id, "product")
        self._product_store.increase_stock(pid, quantity)

        product = self._product_store.get_product(pid)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product_to_dto(product)
