"""Application service: Purchase History use case (query)."""

from __future__ import annotations

from storefront.application.dto import OrderHistoryDTO, order_to_dto
from storefront.domain.exceptions import ValidationError
from storefront.store.customer_store import CustomerStore
from storefront.store.order_store import OrderStore


class PurchaseHistoryHandler:

    def __init__(self, order_store: OrderStore, customer_store: CustomerStore) -> None:
        self._order_store = order_store
        self._customer_store = customer_store

    def handle(self, limit: int, offset: int = 0) -> OrderHistoryDTO:
        if limit < 1 or offset < 0:
            raise ValidationError("Limit must be positive and offset non-negative")

        orders = self._order_store.get_all_orders(limit, offset)

        # One batch lookup for the page's customers instead of one per order.
        customer_ids = {o.customer_id for o in orders if o.customer_id is not None}
        emails = {c.id: c.email for c in self._customer_store.find_by_ids(customer_ids)}

        return OrderHistoryDTO(
            orders=[order_to_dto(o, emails.get(o.customer_id)) for o in orders],
            total=self._order_store.count_all(),
        )
