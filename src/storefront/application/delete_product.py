"""Application service: Delete Product use case."""

from __future__ import annotations

from storefront.application.parsing import parse_id
from storefront.store.product_store import ProductStore


class DeleteProductHandler:

    def __init__(self, product_store: ProductStore) -> None:
        self._product_store = product_store

    def handle(self, product_id: str) -> None:
        """Remove a product. Placed orders keep their line-item snapshot."""
        self._product_store.delete_product(parse_id(product_id, "product"))
