"""Review store. Reviews are append-only; invalidation is per product."""

from __future__ import annotations

from uuid import UUID

import structlog

from storefront.domain.gateway.errors import GatewayError
from storefront.domain.gateway.review_gateway import ReviewGateway
from storefront.domain.model.review import Review
from storefront.store.base import BaseStore
from storefront.store.cache import ApplicationCache
from storefront.store.exceptions import (
    ReviewCountError,
    ReviewCreationError,
    ReviewRetrievalError,
)
from storefront.store.transaction import TransactionProvider, transactional

logger = structlog.get_logger(__name__)

REVIEW_PREFIX = "review:"


def invalidate_product_reviews(cache: ApplicationCache, product_id: UUID) -> None:
    # Trailing ":" so one product's prefix never matches another id.
    cache.invalidate_by_prefix(f"{REVIEW_PREFIX}product:{product_id}:")
    cache.invalidate(f"{REVIEW_PREFIX}count:{product_id}")


class ReviewStore(BaseStore):

    def __init__(
        self,
        transactions: TransactionProvider,
        cache: ApplicationCache,
        review_gateway: ReviewGateway,
    ) -> None:
        super().__init__(transactions, cache)
        self._gateway = review_gateway

    def create_review(self, review: Review) -> Review:
        try:
            with transactional(self._transactions) as scope:
                self._gateway.save(scope.connection, review)
        except GatewayError as exc:
            raise ReviewCreationError(str(review.product_id)) from exc

        invalidate_product_reviews(self._cache, review.product_id)
        logger.info("review_created", product_id=str(review.product_id), rating=review.rating)
        return review

    def get_reviews_by_product(self, product_id: UUID, limit: int, offset: int) -> list[Review]:
        return self._cached_read(
            f"{REVIEW_PREFIX}product:{product_id}:{limit}:{offset}",
            lambda conn: self._gateway.find_by_product(conn, product_id, limit, offset),
            lambda: ReviewRetrievalError(str(product_id)),
        )

    def count_reviews_by_product(self, product_id: UUID) -> int:
        return self._cached_read(
            f"{REVIEW_PREFIX}count:{product_id}",
            lambda conn: self._gateway.count_by_product(conn, product_id),
            lambda: ReviewCountError(str(product_id)),
        )
