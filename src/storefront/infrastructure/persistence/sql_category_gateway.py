"""SQLAlchemy Core implementation of CategoryGateway."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.engine import Connection

from storefront.domain.gateway.category_gateway import CategoryGateway
from storefront.domain.model.category import Category
from storefront.infrastructure.persistence.errors import translate_errors
from storefront.infrastructure.persistence.schema import as_utc, category


class SqlCategoryGateway(CategoryGateway):

    def find_by_id(self, conn: Connection, category_id: UUID) -> Category | None:
        with translate_errors(f"Failed to find category {category_id}"):
            row = conn.execute(
                select(category).where(category.c.category_id == category_id)
            ).mappings().first()
        return self._to_domain(row) if row else None

    def find_by_name(self, conn: Connection, name: str) -> Category | None:
        with translate_errors(f"Failed to find category named {name!r}"):
            row = conn.execute(
                select(category).where(func.lower(category.c.name) == name.lower())
            ).mappings().first()
        return self._to_domain(row) if row else None

    def find_all(self, conn: Connection, limit: int, offset: int) -> list[Category]:
        stmt = select(category).order_by(category.c.name).limit(limit).offset(offset)
        with translate_errors("Failed to load categories"):
            rows = conn.execute(stmt).mappings().all()
        return [self._to_domain(row) for row in rows]

    def count_all(self, conn: Connection) -> int:
        with translate_errors("Failed to count categories"):
            return conn.execute(select(func.count()).select_from(category)).scalar_one()

    def search_by_name(self, conn: Connection, query: str, limit: int, offset: int) -> list[Category]:
        stmt = (
            select(category)
            .where(func.lower(category.c.name).contains(query.lower(), autoescape=True))
            .order_by(category.c.name)
            .limit(limit)
            .offset(offset)
        )
        with translate_errors(f"Failed to search categories for {query!r}"):
            rows = conn.execute(stmt).mappings().all()
        return [self._to_domain(row) for row in rows]

    def count_by_name(self, conn: Connection, query: str) -> int:
        stmt = (
            select(func.count())
            .select_from(category)
            .where(func.lower(category.c.name).contains(query.lower(), autoescape=True))
        )
        with translate_errors(f"Failed to count categories for {query!r}"):
            return conn.execute(stmt).scalar_one()

    def save(self, conn: Connection, item: Category) -> None:
        with translate_errors(f"Error saving category {item.name!r}"):
            conn.execute(
                insert(category).values(
                    category_id=item.id,
                    name=item.name,
                    description=item.description,
                    created_at=item.created_at,
                    updated_at=item.updated_at,
                )
            )

    def update(self, conn: Connection, item: Category) -> bool:
        stmt = (
            update(category)
            .where(category.c.category_id == item.id)
            .values(name=item.name, description=item.description, updated_at=item.updated_at)
        )
        with translate_errors(f"Error updating category {item.id}"):
            return conn.execute(stmt).rowcount > 0

    def delete_by_id(self, conn: Connection, category_id: UUID) -> bool:
        with translate_errors(f"Error deleting category {category_id}"):
            result = conn.execute(delete(category).where(category.c.category_id == category_id))
        return result.rowcount > 0

    @staticmethod
    def _to_domain(row: Mapping[str, Any]) -> Category:
        return Category(
            id=row["category_id"],
            name=row["name"],
            description=row["description"],
            created_at=as_utc(row["created_at"]),
            updated_at=as_utc(row["updated_at"]),
        )
