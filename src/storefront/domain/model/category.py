"""Category aggregate."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from storefront.domain.exceptions import ValidationError


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Category:
    """A named grouping of products. Names are unique."""

    id: UUID
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(name: str, description: str = "") -> Category:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        now = _now()
        return Category(
            id=uuid.uuid4(),
            name=name.strip(),
            description=description.strip(),
            created_at=now,
            updated_at=now,
        )

    def rename(self, name: str) -> None:
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        self.name = name.strip()
        self.updated_at = _now()

    def describe(self, description: str) -> None:
        self.description = description.strip()
        self.updated_at = _now()
