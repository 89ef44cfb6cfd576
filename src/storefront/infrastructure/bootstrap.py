"""Composition root: wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  One ``Container`` per
process: the engine (connection pool) and the cache are shared by every
store it builds.
"""

from __future__ import annotations

from dataclasses import dataclass

from sqlalchemy.engine import Engine

from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.database import (
    SqlTransactionProvider,
    create_database_engine,
)
from storefront.infrastructure.persistence.schema import create_schema
from storefront.infrastructure.persistence.sql_category_gateway import SqlCategoryGateway
from storefront.infrastructure.persistence.sql_customer_gateway import SqlCustomerGateway
from storefront.infrastructure.persistence.sql_order_gateway import SqlOrderGateway
from storefront.infrastructure.persistence.sql_product_gateway import SqlProductGateway
from storefront.infrastructure.persistence.sql_review_gateway import SqlReviewGateway
from storefront.store.cache import ApplicationCache
from storefront.store.category_store import CategoryStore
from storefront.store.customer_store import CustomerStore
from storefront.store.order_store import OrderStore
from storefront.store.product_store import ProductStore
from storefront.store.review_store import ReviewStore


@dataclass
class Container:
    settings: Settings
    engine: Engine
    cache: ApplicationCache
    category_store: CategoryStore
    customer_store: CustomerStore
    product_store: ProductStore
    order_store: OrderStore
    review_store: ReviewStore

    def init_schema(self) -> None:
        create_schema(self.engine)

    def close(self) -> None:
        self.engine.dispose()


def build_container(settings: Settings | None = None) -> Container:
    settings = settings or Settings()
    engine = create_database_engine(settings.database_url, echo=settings.echo_sql)
    transactions = SqlTransactionProvider(engine)
    cache = ApplicationCache()

    product_gateway = SqlProductGateway()
    customer_gateway = SqlCustomerGateway()

    return Container(
        settings=settings,
        engine=engine,
        cache=cache,
        category_store=CategoryStore(transactions, cache, SqlCategoryGateway()),
        customer_store=CustomerStore(transactions, cache, customer_gateway),
        product_store=ProductStore(transactions, cache, product_gateway),
        order_store=OrderStore(
            transactions,
            cache,
            customer_gateway=customer_gateway,
            product_gateway=product_gateway,
            order_gateway=SqlOrderGateway(),
        ),
        review_store=ReviewStore(transactions, cache, SqlReviewGateway()),
    )
