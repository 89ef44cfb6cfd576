"""Integration tests: stores over the SQL gateways on a SQLite file."""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal
from uuid import uuid4

import pytest
from sqlalchemy import select, update

from storefront.domain.exceptions import InsufficientStockError
from storefront.domain.gateway.errors import GatewayError
from storefront.domain.model.category import Category
from storefront.domain.model.customer import Customer, CustomerDetails
from storefront.domain.model.order import Order, OrderRequest
from storefront.domain.model.product import Product
from storefront.domain.model.product_filter import ProductFilter
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Money
from storefront.infrastructure.bootstrap import build_container
from storefront.infrastructure.config import Settings
from storefront.infrastructure.persistence.database import SqlTransactionProvider
from storefront.infrastructure.persistence.schema import customer, product
from storefront.infrastructure.persistence.sql_customer_gateway import SqlCustomerGateway
from storefront.infrastructure.persistence.sql_order_gateway import SqlOrderGateway
from storefront.infrastructure.persistence.sql_product_gateway import SqlProductGateway
from storefront.store.exceptions import OrderPlacementError
from storefront.store.order_store import OrderStore

ADA = CustomerDetails("Ada", "Lovelace", "ada@example.com")


@pytest.fixture()
def container(tmp_path):
    c = build_container(Settings(database_url=f"sqlite:///{tmp_path / 'shop.db'}"))
    c.init_schema()
    yield c
    c.close()


def _request(product_id, quantity=1):
    return OrderRequest(product_id, quantity, "NL", "Utrecht", "3511 AA")


def _add_lamp(container, stock=5, price="15.00", category_id=None):
    lamp = Product.create("Desk Lamp", Money.of(price), stock_quantity=stock, category_id=category_id)
    container.product_store.create_product(lamp)
    return lamp


def _place_concurrently(container, product_id, quantity, emails):
    barrier = threading.Barrier(len(emails))

    def place(email):
        details = CustomerDetails("Buyer", "Concurrent", email)
        barrier.wait()
        try:
            return container.order_store.place_order(_request(product_id, quantity), details)
        except InsufficientStockError as exc:
            return exc

    with ThreadPoolExecutor(max_workers=len(emails)) as pool:
        return list(pool.map(place, emails))


def _stock(container, product_id):
    with container.engine.connect() as conn:
        return conn.execute(
            select(product.c.stock_quantity).where(product.c.product_id == product_id)
        ).scalar_one()


class TestProductPersistence:

    def test_round_trip(self, container):
        lamp = _add_lamp(container, price="19.99")
        loaded = container.product_store.get_product(lamp.id)

        assert loaded.id == lamp.id
        assert loaded.price == Money.of("19.99")
        assert loaded.price.amount == Decimal("19.99")
        assert loaded.stock_quantity == 5
        assert loaded.created_at.tzinfo is not None

    def test_search_is_case_insensitive_substring(self, container):
        _add_lamp(container)
        container.product_store.create_product(Product.create("Floor LAMP", Money.of("40")))
        container.product_store.create_product(Product.create("Notebook", Money.of("3")))

        found = container.product_store.search_products(ProductFilter(name="lamp"), 10, 0)
        assert [p.name for p in found] == ["Desk Lamp", "Floor LAMP"]
        assert container.product_store.count_products_by_filter(ProductFilter(name="lamp")) == 2

    def test_search_treats_wildcards_literally(self, container):
        container.product_store.create_product(Product.create("100% Cotton Tee", Money.of("9")))
        container.product_store.create_product(Product.create("1000 Piece Puzzle", Money.of("9")))

        found = container.product_store.search_products(ProductFilter(name="100%"), 10, 0)
        assert [p.name for p in found] == ["100% Cotton Tee"]
        underscore = container.product_store.count_products_by_filter(ProductFilter(name="_"))
        assert underscore == 0

    def test_filter_by_category(self, container):
        lighting = Category.create("Lighting")
        container.category_store.create_category(lighting)
        _add_lamp(container, category_id=lighting.id)
        container.product_store.create_product(Product.create("Notebook", Money.of("3")))

        in_category = ProductFilter(category_id=lighting.id)
        assert [p.name for p in container.product_store.search_products(in_category, 10, 0)] == [
            "Desk Lamp"
        ]

    def test_update_never_overwrites_stock(self, container):
        lamp = _add_lamp(container, stock=5)
        stale = container.product_store.get_product(lamp.id)
        container.product_store.reduce_stock(lamp.id, 2)

        stale.update_price(Money.of("12.00"))
        container.product_store.update_product(stale)

        assert _stock(container, lamp.id) == 3
        assert container.product_store.get_product(lamp.id).price == Money.of("12.00")

    def test_conditional_decrement(self, container):
        lamp = _add_lamp(container, stock=2)
        with pytest.raises(InsufficientStockError):
            container.product_store.reduce_stock(lamp.id, 3)
        container.product_store.reduce_stock(lamp.id, 2)
        assert _stock(container, lamp.id) == 0

    def test_deleting_a_category_uncategorizes_its_products(self, container):
        lighting = Category.create("Lighting")
        container.category_store.create_category(lighting)
        lamp = _add_lamp(container, category_id=lighting.id)
        in_lighting = ProductFilter(category_id=lighting.id)
        assert container.product_store.get_product(lamp.id).category_id == lighting.id
        assert len(container.product_store.search_products(in_lighting, 10, 0)) == 1

        container.category_store.delete_category(lighting.id)

        assert container.product_store.get_product(lamp.id).category_id is None
        assert container.product_store.search_products(in_lighting, 10, 0) == []


class TestOrderPlacement:

    def test_places_order_and_persists_everything(self, container):
        lamp = _add_lamp(container, stock=5)
        order = container.order_store.place_order(_request(lamp.id, 2), ADA)

        assert _stock(container, lamp.id) == 3
        loaded = container.order_store.get_order(order.id)
        assert loaded.total_amount == Money.of("30.00")
        assert [(i.product_name, i.quantity.value, i.unit_price) for i in loaded.items] == [
            ("Desk Lamp", 2, Money.of("15.00"))
        ]
        assert container.customer_store.find_by_id(order.customer_id).email == "ada@example.com"

    def test_history_survives_product_deletion(self, container):
        lamp = _add_lamp(container)
        order = container.order_store.place_order(_request(lamp.id), ADA)

        container.product_store.delete_product(lamp.id)

        (listed,) = container.order_store.get_all_orders(10, 0)
        assert listed.id == order.id
        assert listed.items[0].product_name == "Desk Lamp"

    def test_stale_cache_cannot_oversell(self, container):
        lamp = _add_lamp(container, stock=5)
        assert container.product_store.get_product(lamp.id).stock_quantity == 5
        with container.engine.begin() as conn:
            conn.execute(update(product).where(product.c.product_id == lamp.id).values(stock_quantity=1))

        with pytest.raises(InsufficientStockError):
            container.order_store.place_order(_request(lamp.id, 3), ADA)

        assert _stock(container, lamp.id) == 1
        assert container.order_store.count_all() == 0

    def test_failure_after_decrement_rolls_back(self, container):
        class BrokenOrderGateway(SqlOrderGateway):
            def save(self, conn, order):
                raise GatewayError("disk full")

        lamp = _add_lamp(container, stock=5)
        store = OrderStore(
            SqlTransactionProvider(container.engine),
            container.cache,
            customer_gateway=SqlCustomerGateway(),
            product_gateway=SqlProductGateway(),
            order_gateway=BrokenOrderGateway(),
        )

        with pytest.raises(OrderPlacementError):
            store.place_order(_request(lamp.id, 2), ADA)

        assert _stock(container, lamp.id) == 5
        assert container.customer_store.find_by_email("ada@example.com") is None

    def test_duplicate_email_resolved_through_savepoint(self, container):
        lamp = _add_lamp(container, stock=5)
        winner = Customer.create(CustomerDetails("Ada", "Lovelace", "ada@example.com"))
        container.customer_store.create_customer(winner)

        class LaggingCustomerGateway(SqlCustomerGateway):
            """First lookup misses, as if the winner committed just after it."""

            missed = False

            def find_by_email(self, conn, email):
                if not self.missed:
                    self.missed = True
                    return None
                return super().find_by_email(conn, email)

        store = OrderStore(
            SqlTransactionProvider(container.engine),
            container.cache,
            customer_gateway=LaggingCustomerGateway(),
            product_gateway=SqlProductGateway(),
            order_gateway=SqlOrderGateway(),
        )

        order = store.place_order(_request(lamp.id, 1), ADA)

        assert order.customer_id == winner.id
        assert _stock(container, lamp.id) == 4
        with container.engine.connect() as conn:
            assert conn.execute(select(customer.c.customer_id)).scalars().all() == [winner.id]


class TestReviews:

    def test_reviews_newest_first_and_cascade_with_product(self, container):
        lamp = _add_lamp(container)
        container.review_store.create_review(Review.create(lamp.id, 3, "ok"))
        container.review_store.create_review(Review.create(lamp.id, 5, "great"))

        assert container.review_store.count_reviews_by_product(lamp.id) == 2
        assert container.review_store.get_reviews_by_product(lamp.id, 10, 0)[0].comment == "great"

        container.product_store.delete_product(lamp.id)
        assert container.review_store.count_reviews_by_product(lamp.id) == 0

    def test_reviews_of_unknown_product(self, container):
        assert container.review_store.get_reviews_by_product(uuid4(), 10, 0) == []


class TestConcurrentPlacement:
    """Threads race on one product whose row is not in the cache."""

    def test_only_one_of_two_competing_orders_commits(self, container):
        lamp = _add_lamp(container, stock=5)

        results = _place_concurrently(
            container, lamp.id, 3, ["a@example.com", "b@example.com"]
        )

        assert sorted(type(r).__name__ for r in results) == ["InsufficientStockError", "Order"]
        assert _stock(container, lamp.id) == 2
        assert container.order_store.count_all() == 1

    def test_orders_that_fit_in_stock_all_commit(self, container):
        lamp = _add_lamp(container, stock=10)

        results = _place_concurrently(
            container, lamp.id, 3, ["a@example.com", "b@example.com", "c@example.com"]
        )

        assert all(isinstance(r, Order) for r in results)
        assert _stock(container, lamp.id) == 1
        assert container.order_store.count_all() == 3

    def test_first_orders_with_one_email_share_a_customer(self, container):
        lamp = _add_lamp(container, stock=10)

        results = _place_concurrently(container, lamp.id, 1, ["ada@example.com"] * 4)

        assert len({r.customer_id for r in results}) == 1
        with container.engine.connect() as conn:
            assert len(conn.execute(select(customer.c.customer_id)).all()) == 1
