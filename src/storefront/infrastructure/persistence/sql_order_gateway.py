"""SQLAlchemy Core implementation of OrderGateway."""

from __future__ import annotations

import uuid
from collections import defaultdict
from collections.abc import Mapping, Sequence
from typing import Any
from uuid import UUID

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection

from storefront.domain.gateway.order_gateway import OrderGateway
from storefront.domain.model.order import Order, OrderLineItem
from storefront.domain.model.value_objects import Money, Quantity
from storefront.infrastructure.persistence.errors import translate_errors
from storefront.infrastructure.persistence.schema import as_utc, order_item, orders


class SqlOrderGateway(OrderGateway):

    def find_by_id(self, conn: Connection, order_id: UUID) -> Order | None:
        with translate_errors(f"Failed to find order {order_id}"):
            row = conn.execute(
                select(orders).where(orders.c.order_id == order_id)
            ).mappings().first()
            if row is None:
                return None
            items = self._load_items(conn, [order_id])
        return self._to_domain(row, items[order_id])

    def find_all(self, conn: Connection, limit: int, offset: int) -> list[Order]:
        stmt = (
            select(orders)
            .order_by(orders.c.order_date.desc(), orders.c.order_id)
            .limit(limit)
            .offset(offset)
        )
        with translate_errors("Failed to load orders"):
            rows = conn.execute(stmt).mappings().all()
            # One query for every page's items, not one per order.
            items = self._load_items(conn, [row["order_id"] for row in rows])
        return [self._to_domain(row, items[row["order_id"]]) for row in rows]

    def count_all(self, conn: Connection) -> int:
        with translate_errors("Failed to count orders"):
            return conn.execute(select(func.count()).select_from(orders)).scalar_one()

    def save(self, conn: Connection, order: Order) -> None:
        with translate_errors(f"Error saving order {order.id}"):
            conn.execute(
                insert(orders).values(
                    order_id=order.id,
                    customer_id=order.customer_id,
                    order_date=order.order_date,
                    total_amount=order.total_amount.amount,
                    shipping_country=order.shipping_country,
                    shipping_city=order.shipping_city,
                    shipping_postal_code=order.shipping_postal_code,
                )
            )
            if order.items:
                conn.execute(
                    insert(order_item),
                    [
                        {
                            "order_item_id": uuid.uuid4(),
                            "order_id": order.id,
                            "product_id": item.product_id,
                            "product_name": item.product_name,
                            "quantity": item.quantity.value,
                            "price_at_purchase": item.unit_price.amount,
                        }
                        for item in order.items
                    ],
                )

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _load_items(conn: Connection, order_ids: Sequence[UUID]) -> dict[UUID, list[OrderLineItem]]:
        grouped: dict[UUID, list[OrderLineItem]] = defaultdict(list)
        if not order_ids:
            return grouped
        rows = conn.execute(
            select(order_item)
            .where(order_item.c.order_id.in_(order_ids))
            .order_by(order_item.c.product_name)
        ).mappings().all()
        for row in rows:
            grouped[row["order_id"]].append(
                OrderLineItem(
                    product_id=row["product_id"],
                    product_name=row["product_name"],
                    quantity=Quantity(row["quantity"]),
                    unit_price=Money.of(row["price_at_purchase"]),
                )
            )
        return grouped

    @staticmethod
    def _to_domain(row: Mapping[str, Any], items: list[OrderLineItem]) -> Order:
        return Order(
            id=row["order_id"],
            customer_id=row["customer_id"],
            total_amount=Money.of(row["total_amount"]),
            shipping_country=row["shipping_country"],
            shipping_city=row["shipping_city"],
            shipping_postal_code=row["shipping_postal_code"],
            items=tuple(items),
            order_date=as_utc(row["order_date"]),
        )
