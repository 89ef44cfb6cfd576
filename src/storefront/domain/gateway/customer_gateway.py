"""Abstract gateway for the Customer aggregate.

Storage enforces uniqueness of ``email``: a second ``save`` for the same
email raises ConstraintViolationError.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from typing import Any
from uuid import UUID

from storefront.domain.model.customer import Customer


class CustomerGateway(ABC):

    @abstractmethod
    def find_by_id(self, conn: Any, customer_id: UUID) -> Customer | None:
        """Return a customer by ID, or None."""

    @abstractmethod
    def find_by_email(self, conn: Any, email: str) -> Customer | None:
        """Return a customer by normalized email, or None."""

    @abstractmethod
    def find_by_ids(self, conn: Any, customer_ids: Iterable[UUID]) -> list[Customer]:
        """Return every customer whose ID is in ``customer_ids``."""

    @abstractmethod
    def save(self, conn: Any, customer: Customer) -> None:
        """Insert a new customer."""

    @abstractmethod
    def update(self, conn: Any, customer: Customer) -> bool:
        """Overwrite name and phone. False if no such row."""
