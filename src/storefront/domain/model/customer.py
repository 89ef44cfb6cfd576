"""Customer aggregate.

Customers are identified by email for order association: placing two
orders with the same email must resolve to one customer row.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from uuid import UUID

from storefront.domain.exceptions import ValidationError


def normalize_email(email: str) -> str:
    """Canonical form of an email used as the customer's natural key."""
    normalized = (email or "").strip().lower()
    if "@" not in normalized or normalized.startswith("@") or normalized.endswith("@"):
        raise ValidationError(f"Invalid email address: {email!r}")
    return normalized


@dataclass(frozen=True)
class CustomerDetails:
    """Input: who is buying, as typed at checkout."""

    first_name: str
    last_name: str
    email: str
    phone: str = ""

    def validate(self) -> None:
        if not self.first_name or not self.first_name.strip():
            raise ValidationError("Customer first name is required")
        if not self.last_name or not self.last_name.strip():
            raise ValidationError("Customer last name is required")


@dataclass
class Customer:
    """A purchaser.

    Only the name and phone may change after creation; ``email`` and
    ``created_at`` are fixed.
    """

    id: UUID
    first_name: str
    last_name: str
    email: str
    phone: str = ""
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(details: CustomerDetails) -> Customer:
        details.validate()
        return Customer(
            id=uuid.uuid4(),
            first_name=details.first_name.strip(),
            last_name=details.last_name.strip(),
            email=normalize_email(details.email),
            phone=(details.phone or "").strip(),
        )

    def update_contact(
        self,
        first_name: str | None = None,
        last_name: str | None = None,
        phone: str | None = None,
    ) -> None:
        if first_name is not None:
            if not first_name.strip():
                raise ValidationError("Customer first name is required")
            self.first_name = first_name.strip()
        if last_name is not None:
            if not last_name.strip():
                raise ValidationError("Customer last name is required")
            self.last_name = last_name.strip()
        if phone is not None:
            self.phone = phone.strip()

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
