"""SQLAlchemy Core implementation of ReviewGateway."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from uuid import UUID

from sqlalchemy import func, insert, select
from sqlalchemy.engine import Connection

from storefront.domain.gateway.review_gateway import ReviewGateway
from storefront.domain.model.review import Review
from storefront.infrastructure.persistence.errors import translate_errors
from storefront.infrastructure.persistence.schema import as_utc, review


class SqlReviewGateway(ReviewGateway):

    def find_by_product(
        self, conn: Connection, product_id: UUID, limit: int, offset: int
    ) -> list[Review]:
        stmt = (
            select(review)
            .where(review.c.product_id == product_id)
            .order_by(review.c.created_at.desc())
            .limit(limit)
            .offset(offset)
        )
        with translate_errors(f"Failed to load reviews for product {product_id}"):
            rows = conn.execute(stmt).mappings().all()
        return [self._to_domain(row) for row in rows]

    def count_by_product(self, conn: Connection, product_id: UUID) -> int:
        stmt = select(func.count()).select_from(review).where(review.c.product_id == product_id)
        with translate_errors(f"Failed to count reviews for product {product_id}"):
            return conn.execute(stmt).scalar_one()

    def save(self, conn: Connection, item: Review) -> None:
        with translate_errors(f"Error saving review for product {item.product_id}"):
            conn.execute(
                insert(review).values(
                    review_id=item.id,
                    product_id=item.product_id,
                    customer_id=item.customer_id,
                    rating=item.rating,
                    comment=item.comment,
                    created_at=item.created_at,
                )
            )

    @staticmethod
    def _to_domain(row: Mapping[str, Any]) -> Review:
        return Review(
            id=row["review_id"],
            product_id=row["product_id"],
            customer_id=row["customer_id"],
            rating=row["rating"],
            comment=row["comment"],
            created_at=as_utc(row["created_at"]),
        )
