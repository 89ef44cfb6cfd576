"""Application service: Place Order use case.

Thin on purpose: everything that must be atomic (stock, customer,
order row) happens inside ``OrderStore.place_order``.
"""

from __future__ import annotations

from storefront.application.dto import OrderDTO, PurchaseSpec, order_to_dto
from storefront.application.parsing import parse_id
from storefront.domain.model.customer import CustomerDetails, normalize_email
from storefront.domain.model.order import OrderRequest
from storefront.store.order_store import OrderStore


class PlaceOrderHandler:

    def __init__(self, order_store: OrderStore) -> None:
        self._order_store = order_store

    def handle(self, spec: PurchaseSpec) -> OrderDTO:
        request = OrderRequest(
            product_id=parse_id(spec.product_id, "product"),
            quantity=spec.quantity,
            shipping_country=spec.country,
            shipping_city=spec.city,
            shipping_postal_code=spec.postal_code,
        )
        details = CustomerDetails(
            first_name=spec.first_name,
            last_name=spec.last_name,
            email=spec.email,
            phone=spec.phone,
        )

        order = self._order_store.place_order(request, details)
        return order_to_dto(order, normalize_email(spec.email))
