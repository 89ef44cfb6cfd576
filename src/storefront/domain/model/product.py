"""Product aggregate.

Products live independently of orders. Price, description, category and
stock change over a product's lifetime; orders capture the price at
placement time so later changes never reach them.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Product:
    """A product in the catalog.

    Invariants:
    - ``stock_quantity`` is never negative
    - ``price`` is never negative (enforced by Money)
    """

    id: UUID
    name: str
    description: str
    price: Money
    stock_quantity: int
    category_id: UUID | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(
        name: str,
        price: Money,
        stock_quantity: int = 0,
        description: str = "",
        category_id: UUID | None = None,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock_quantity < 0:
            raise ValidationError("Stock quantity cannot be negative")
        now = _now()
        return Product(
            id=uuid.uuid4(),
            name=name.strip(),
            description=description.strip(),
            price=price,
            stock_quantity=stock_quantity,
            category_id=category_id,
            created_at=now,
            updated_at=now,
        )

    def update_price(self, new_price: Money) -> None:
        """Change the product price.

        Existing orders are unaffected: they store their own total.
        """
        self.price = new_price
        self.touch()

    def update_details(
        self,
        description: str | None = None,
        category_id: UUID | None = None,
    ) -> None:
        if description is not None:
            self.description = description.strip()
        if category_id is not None:
            self.category_id = category_id
        self.touch()

    def touch(self) -> None:
        self.updated_at = _now()
