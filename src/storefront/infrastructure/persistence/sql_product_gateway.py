"""SQLAlchemy Core implementation of ProductGateway."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timezone
from typing import Any
from uuid import UUID

from sqlalchemy import Select, delete, func, insert, select, update
from sqlalchemy.engine import Connection

from storefront.domain.gateway.product_gateway import ProductGateway
from storefront.domain.model.product import Product
from storefront.domain.model.product_filter import ProductFilter
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.persistence.errors import translate_errors
from storefront.infrastructure.persistence.schema import as_utc, product


class SqlProductGateway(ProductGateway):

    # --- Reads ----------------------------------------------------------------

    def find_by_id(self, conn: Connection, product_id: UUID) -> Product | None:
        with translate_errors(f"Failed to find product {product_id}"):
            row = conn.execute(
                select(product).where(product.c.product_id == product_id)
            ).mappings().first()
        return self._to_domain(row) if row else None

    def find_by_name(self, conn: Connection, name: str) -> Product | None:
        with translate_errors(f"Failed to find product named {name!r}"):
            row = conn.execute(
                select(product).where(func.lower(product.c.name) == name.lower())
            ).mappings().first()
        return self._to_domain(row) if row else None

    def find_all(self, conn: Connection, limit: int, offset: int) -> list[Product]:
        stmt = select(product).order_by(product.c.name).limit(limit).offset(offset)
        with translate_errors("Failed to load all products"):
            rows = conn.execute(stmt).mappings().all()
        return [self._to_domain(row) for row in rows]

    def count_all(self, conn: Connection) -> int:
        with translate_errors("Failed to get product count"):
            return conn.execute(select(func.count()).select_from(product)).scalar_one()

    def find_filtered(
        self, conn: Connection, product_filter: ProductFilter, limit: int, offset: int
    ) -> list[Product]:
        stmt = (
            self._apply_filter(select(product), product_filter)
            .order_by(product.c.name)
            .limit(limit)
            .offset(offset)
        )
        with translate_errors("Failed to fetch products"):
            rows = conn.execute(stmt).mappings().all()
        return [self._to_domain(row) for row in rows]

    def count_filtered(self, conn: Connection, product_filter: ProductFilter) -> int:
        stmt = self._apply_filter(select(func.count()).select_from(product), product_filter)
        with translate_errors("Failed to count products"):
            return conn.execute(stmt).scalar_one()

    # --- Writes ---------------------------------------------------------------

    def save(self, conn: Connection, item: Product) -> None:
        with translate_errors("Error saving product"):
            conn.execute(insert(product).values(product_id=item.id, **self._to_row(item)))

    def update(self, conn: Connection, item: Product) -> bool:
        stmt = (
            update(product)
            .where(product.c.product_id == item.id)
            .values(
                name=item.name,
                description=item.description,
                price=item.price.amount,
                category_id=item.category_id,
                updated_at=item.updated_at,
            )
        )
        with translate_errors("Error updating product"):
            return conn.execute(stmt).rowcount > 0

    def delete_by_id(self, conn: Connection, product_id: UUID) -> bool:
        with translate_errors(f"Error deleting product {product_id}"):
            result = conn.execute(delete(product).where(product.c.product_id == product_id))
        return result.rowcount > 0

    def reduce_stock(self, conn: Connection, product_id: UUID, quantity: int) -> bool:
        # Single compare-and-update: the WHERE clause is the stock check.
        stmt = (
            update(product)
            .where(product.c.product_id == product_id)
            .where(product.c.stock_quantity >= quantity)
            .values(
                stock_quantity=product.c.stock_quantity - quantity,
                updated_at=datetime.now(timezone.utc),
            )
        )
        with translate_errors(f"Failed to update stock for product {product_id}"):
            return conn.execute(stmt).rowcount == 1

    def increase_stock(self, conn: Connection, product_id: UUID, quantity: int) -> bool:
        stmt = (
            update(product)
            .where(product.c.product_id == product_id)
            .values(
                stock_quantity=product.c.stock_quantity + quantity,
                updated_at=datetime.now(timezone.utc),
            )
        )
        with translate_errors(f"Failed to increase stock for product {product_id}"):
            return conn.execute(stmt).rowcount == 1

    # --- Mapping --------------------------------------------------------------

    @staticmethod
    def _apply_filter(stmt: Select[Any], product_filter: ProductFilter) -> Select[Any]:
        if product_filter.has_name:
            stmt = stmt.where(
                func.lower(product.c.name).contains(
                    product_filter.name_pattern.lower(), autoescape=True
                )
            )
        if product_filter.has_category:
            stmt = stmt.where(product.c.category_id == product_filter.category_id)
        return stmt

    @staticmethod
    def _to_row(item: Product) -> dict[str, Any]:
        return {
            "name": item.name,
            "description": item.description,
            "price": item.price.amount,
            "stock_quantity": item.stock_quantity,
            "category_id": item.category_id,
            "created_at": item.created_at,
            "updated_at": item.updated_at,
        }

    @staticmethod
    def _to_domain(row: Mapping[str, Any]) -> Product:
        return Product(
            id=row["product_id"],
            name=row["name"],
            description=row["description"],
            price=Money.of(row["price"]),
            stock_quantity=row["stock_quantity"],
            category_id=row["category_id"],
            created_at=as_utc(row["created_at"]),
            updated_at=as_utc(row["updated_at"]),
        )
