"""Review aggregate. Reviews are immutable once created."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from storefront.domain.exceptions import ValidationError

MIN_RATING = 1
MAX_RATING = 5


@dataclass(frozen=True)
class Review:
    id: UUID
    product_id: UUID
    customer_id: UUID | None
    rating: int
    comment: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        product_id: UUID,
        rating: int,
        comment: str = "",
        customer_id: UUID | None = None,
    ) -> Review:
        if isinstance(rating, bool) or not isinstance(rating, int):
            raise ValidationError(f"Rating must be an integer, got {type(rating).__name__}")
        if not MIN_RATING <= rating <= MAX_RATING:
            raise ValidationError(
                f"Rating must be between {MIN_RATING} and {MAX_RATING}, got {rating}"
            )
        return Review(
            id=uuid.uuid4(),
            product_id=product_id,
            customer_id=customer_id,
            rating=rating,
            comment=(comment or "").strip(),
        )
