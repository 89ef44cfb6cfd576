"""Application services: Add Review and Show Reviews use cases."""

from __future__ import annotations

from storefront.application.dto import ReviewDTO, ReviewPageDTO, review_to_dto
from storefront.application.parsing import parse_id
from storefront.domain.exceptions import CustomerNotFoundError, ProductNotFoundError
from storefront.domain.model.review import Review
from storefront.store.customer_store import CustomerStore
from storefront.store.product_store import ProductStore
from storefront.store.review_store import ReviewStore


class AddReviewHandler:

    def __init__(
        self,
        review_store: ReviewStore,
        product_store: ProductStore,
        customer_store: CustomerStore,
    ) -> None:
        self._review_store = review_store
        self._product_store = product_store
        self._customer_store = customer_store

    def handle(
        self,
        product_id: str,
        rating: int,
        comment: str = "",
        customer_email: str | None = None,
    ) -> ReviewDTO:
        pid = parse_id(product_id, "product")
        if self._product_store.get_product(pid) is None:
            raise ProductNotFoundError(product_id)

        customer_id = None
        if customer_email:
            customer = self._customer_store.find_by_email(customer_email)
            if customer is None:
                raise CustomerNotFoundError(customer_email)
            customer_id = customer.id

        review = Review.create(pid, rating, comment, customer_id=customer_id)
        self._review_store.create_review(review)
        return review_to_dto(review)


class ShowReviewsHandler:

    def __init__(self, review_store: ReviewStore) -> None:
        self._review_store = review_store

    def handle(self, product_id: str, limit: int = 20, offset: int = 0) -> ReviewPageDTO:
        pid = parse_id(product_id, "product")
        reviews = self._review_store.get_reviews_by_product(pid, limit, offset)
        return ReviewPageDTO(
            reviews=[review_to_dto(r) for r in reviews],
            total=self._review_store.count_reviews_by_product(pid),
        )
