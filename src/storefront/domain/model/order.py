"""Order aggregate.

An order is immutable once placed. Its total is computed exactly once,
from the product price in effect at placement time.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, Quantity


@dataclass(frozen=True)
class OrderRequest:
    """Input: which product, how many, and where to ship it."""

    product_id: UUID
    quantity: int
    shipping_country: str
    shipping_city: str
    shipping_postal_code: str

    def validate(self) -> None:
        for label, value in (
            ("country", self.shipping_country),
            ("city", self.shipping_city),
            ("postal code", self.shipping_postal_code),
        ):
            if not value or not value.strip():
                raise ValidationError(f"Shipping {label} is required")


@dataclass(frozen=True)
class OrderLineItem:
    """Captures the price snapshot of a product at placement time."""

    product_id: UUID
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at placement time

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class Order:
    """Aggregate root for purchases.

    Use ``Order.place()`` for new orders.  The constructor stays simple so
    gateways can reconstitute persisted orders without re-validating.
    """

    id: UUID
    customer_id: UUID | None
    total_amount: Money
    shipping_country: str
    shipping_city: str
    shipping_postal_code: str
    items: tuple[OrderLineItem, ...] = ()
    order_date: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def place(
        customer_id: UUID,
        product: Product,
        quantity: Quantity,
        request: OrderRequest,
    ) -> Order:
        """Build a new single-product order priced at ``product.price``."""
        request.validate()

        line = OrderLineItem(
            product_id=product.id,
            product_name=product.name,
            quantity=quantity,
            unit_price=product.price,
        )
        return Order(
            id=uuid.uuid4(),
            customer_id=customer_id,
            total_amount=line.line_total,
            shipping_country=request.shipping_country.strip(),
            shipping_city=request.shipping_city.strip(),
            shipping_postal_code=request.shipping_postal_code.strip(),
            items=(line,),
        )
