"""Domain-level exceptions.

Every failure the storefront can report is a subclass of DomainException
and carries an ``ErrorKind`` so callers (the CLI, business services) can
dispatch on the kind of failure without knowing every concrete class.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    CONNECTION = "connection"
    NOT_FOUND = "not_found"
    INSUFFICIENT_STOCK = "insufficient_stock"
    DUPLICATE = "duplicate"
    PERSISTENCE = "persistence"
    RETRIEVAL = "retrieval"
    VALIDATION = "validation"


class DomainException(Exception):
    """Base class for all domain errors."""

    kind: ErrorKind = ErrorKind.VALIDATION


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""

    kind = ErrorKind.NOT_FOUND
    entity = "Entity"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"{self.entity} not found: '{identifier}'")


class ProductNotFoundError(EntityNotFoundError):
    entity = "Product"


class CategoryNotFoundError(EntityNotFoundError):
    entity = "Category"


class CustomerNotFoundError(EntityNotFoundError):
    entity = "Customer"


class DuplicateEntityError(DomainException):
    """A name or email collides with an existing entity."""

    kind = ErrorKind.DUPLICATE


class InsufficientStockError(DomainException):
    """Not enough stock to satisfy a request.

    Raised both when the requested quantity exceeds the stock read by the
    store and when the conditional decrement finds that stock has since
    run out.  Callers may retry the whole operation.
    """

    kind = ErrorKind.INSUFFICIENT_STOCK

    def __init__(self, product_id: str, requested: int, available: int | None = None) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        if available is None:
            message = f"Insufficient stock for product '{product_id}' (need {requested})"
        else:
            message = (
                f"Insufficient stock for product '{product_id}' "
                f"(need {requested}, have {available} available)"
            )
        super().__init__(message)
