"""Store-level exceptions.

Gateway failures are translated into these after the transaction has
been rolled back.  Each carries the identifying field of the entity the
operation was about (a name, an id, ``"all"`` for listings).
"""

from __future__ import annotations

from storefront.domain.exceptions import DomainException, ErrorKind


class StoreError(DomainException):
    """Base class for store failures."""

    kind = ErrorKind.PERSISTENCE
    entity = "entity"
    action = "process"

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"Failed to {self.action} {self.entity} '{identifier}'")


class DatabaseConnectionError(StoreError):
    """A transaction scope could not be acquired, committed or released."""

    kind = ErrorKind.CONNECTION

    def __init__(self, message: str) -> None:
        self.identifier = ""
        DomainException.__init__(self, message)


# --- Writes (always rolled back before being raised) -------------------------


class PersistenceError(StoreError):
    kind = ErrorKind.PERSISTENCE


class CreationError(PersistenceError):
    action = "create"


class UpdateError(PersistenceError):
    action = "update"


class DeleteError(PersistenceError):
    action = "delete"


class CategoryCreationError(CreationError):
    entity = "category"


class CategoryUpdateError(UpdateError):
    entity = "category"


class CategoryDeleteError(DeleteError):
    entity = "category"


class ProductCreationError(CreationError):
    entity = "product"


class ProductUpdateError(UpdateError):
    entity = "product"


class ProductDeleteError(DeleteError):
    entity = "product"


class CustomerCreationError(CreationError):
    entity = "customer"


class CustomerUpdateError(UpdateError):
    entity = "customer"


class ReviewCreationError(CreationError):
    entity = "review for product"


class OrderPlacementError(PersistenceError):
    entity = "order for product"
    action = "place"


# --- Reads ---------------------------------------------------------------------


class RetrievalError(StoreError):
    kind = ErrorKind.RETRIEVAL
    action = "retrieve"


class SearchError(RetrievalError):
    action = "search"


class CountError(RetrievalError):
    action = "count"


class CategoryRetrievalError(RetrievalError):
    entity = "category"


class CategorySearchError(SearchError):
    entity = "categories"


class CategoryCountError(CountError):
    entity = "categories"


class ProductRetrievalError(RetrievalError):
    entity = "product"


class ProductSearchError(SearchError):
    entity = "products"


class ProductCountError(CountError):
    entity = "products"


class CustomerRetrievalError(RetrievalError):
    entity = "customer"


class ReviewRetrievalError(RetrievalError):
    entity = "reviews for product"


class ReviewCountError(CountError):
    entity = "reviews for product"


class OrderRetrievalError(RetrievalError):
    entity = "order"


class OrderCountError(CountError):
    entity = "orders"
