"""Tests for ProductStore: cached reads, blanket invalidation on writes."""

from uuid import uuid4

import pytest

from storefront.domain.exceptions import ErrorKind, InsufficientStockError, ProductNotFoundError
from storefront.domain.model.product import Product
from storefront.domain.model.product_filter import ProductFilter
from storefront.domain.model.value_objects import Money
from storefront.store.exceptions import (
    DatabaseConnectionError,
    ProductCreationError,
    ProductRetrievalError,
    ProductSearchError,
    ProductUpdateError,
)
from tests.fakes import build_fake_storefront


def _setup(*products: Product):
    if not products:
        products = (
            Product.create("Desk Lamp", Money.of("15.00"), stock_quantity=5),
            Product.create("Floor Lamp", Money.of("40.00"), stock_quantity=2),
            Product.create("Notebook", Money.of("3.50"), stock_quantity=100),
        )
    sf = build_fake_storefront(products=list(products))
    return sf, list(products)


class TestProductReads:

    def test_get_product_is_cached(self):
        sf, (lamp, *_) = _setup()
        first = sf.product_store.get_product(lamp.id)
        second = sf.product_store.get_product(lamp.id)

        assert first.name == "Desk Lamp"
        assert second is first
        assert sf.product_gateway.calls["find_by_id"] == 1

    def test_cache_hit_opens_no_scope(self):
        sf, (lamp, *_) = _setup()
        sf.product_store.get_product(lamp.id)
        opened = sf.transactions.opened
        sf.product_store.get_product(lamp.id)
        assert sf.transactions.opened == opened

    def test_missing_product_is_cached_as_absent(self):
        sf, _ = _setup()
        missing = uuid4()
        assert sf.product_store.get_product(missing) is None
        assert sf.product_store.get_product(missing) is None
        assert sf.product_gateway.calls["find_by_id"] == 1

    def test_get_product_by_name_is_case_insensitive(self):
        sf, _ = _setup()
        assert sf.product_store.get_product_by_name("desk lamp").name == "Desk Lamp"

    def test_get_all_products_pages_by_name(self):
        sf, _ = _setup()
        page = sf.product_store.get_all_products(2, 0)
        assert [p.name for p in page] == ["Desk Lamp", "Floor Lamp"]
        assert sf.product_store.count_all() == 3
        assert "product:all:2:0" in sf.cache
        assert "product:count:all" in sf.cache

    def test_search_and_count_are_keyed_by_filter(self):
        sf, _ = _setup()
        lamps = ProductFilter(name="lamp")

        assert [p.name for p in sf.product_store.search_products(lamps, 10, 0)] == [
            "Desk Lamp",
            "Floor Lamp",
        ]
        assert sf.product_store.count_products_by_filter(lamps) == 2
        # Equal filter, served from cache.
        sf.product_store.search_products(ProductFilter(name=" lamp "), 10, 0)
        assert sf.product_gateway.calls["find_filtered"] == 1
        # Different filter, different entry.
        assert sf.product_store.count_products_by_filter(ProductFilter(name="note")) == 1
        assert sf.product_gateway.calls["count_filtered"] == 2

    def test_gateway_failure_becomes_retrieval_error_and_is_not_cached(self):
        sf, (lamp, *_) = _setup()
        sf.product_gateway.failures.add("find_by_id")

        with pytest.raises(ProductRetrievalError) as exc_info:
            sf.product_store.get_product(lamp.id)
        assert exc_info.value.kind is ErrorKind.RETRIEVAL
        assert len(sf.cache) == 0

        sf.product_gateway.failures.clear()
        assert sf.product_store.get_product(lamp.id) is not None

    def test_search_failure_is_a_search_error(self):
        sf, _ = _setup()
        sf.product_gateway.failures.add("find_filtered")
        with pytest.raises(ProductSearchError):
            sf.product_store.search_products(ProductFilter(name="x"), 10, 0)

    def test_connection_failure_surfaces_as_connection_kind(self):
        sf, (lamp, *_) = _setup()
        sf.transactions.fail_open = True
        with pytest.raises(DatabaseConnectionError) as exc_info:
            sf.product_store.get_product(lamp.id)
        assert exc_info.value.kind is ErrorKind.CONNECTION


class TestProductWrites:

    def _warm(self, sf, product):
        sf.product_store.get_product(product.id)
        sf.product_store.get_all_products(20, 0)
        sf.product_store.search_products(ProductFilter(name="lamp"), 20, 0)
        sf.product_store.count_products_by_filter(ProductFilter(name="lamp"))
        sf.cache.get_or_load("order:count", lambda: 0)

    def test_create_invalidates_every_product_entry(self):
        sf, (lamp, *_) = _setup()
        self._warm(sf, lamp)

        sf.product_store.create_product(Product.create("Reading Lamp", Money.of("22")))

        assert sf.cache.keys() == ["order:count"]
        assert sf.product_store.count_products_by_filter(ProductFilter(name="lamp")) == 3
        assert sf.transactions.commits == 1

    def test_update_is_visible_after_commit(self):
        sf, (lamp, *_) = _setup()
        self._warm(sf, lamp)

        changed = sf.product_gateway.find_by_id(None, lamp.id)
        changed.update_price(Money.of("19.00"))
        sf.product_store.update_product(changed)

        assert sf.product_store.get_product(lamp.id).price == Money.of("19.00")

    def test_update_missing_product_is_not_found(self):
        sf, _ = _setup()
        ghost = Product.create("Ghost", Money.of("1"))
        with pytest.raises(ProductNotFoundError):
            sf.product_store.update_product(ghost)
        assert sf.transactions.rollbacks == 1

    def test_failed_write_rolls_back_and_keeps_cache(self):
        sf, (lamp, *_) = _setup()
        self._warm(sf, lamp)
        before = sf.cache.keys()
        sf.product_gateway.failures.add("save")

        with pytest.raises(ProductCreationError) as exc_info:
            sf.product_store.create_product(Product.create("Reading Lamp", Money.of("22")))

        assert exc_info.value.identifier == "Reading Lamp"
        assert exc_info.value.kind is ErrorKind.PERSISTENCE
        assert sf.cache.keys() == before
        assert sf.transactions.rollbacks == 1
        assert sf.transactions.all_closed()

    def test_delete(self):
        sf, (lamp, *_) = _setup()
        sf.product_store.delete_product(lamp.id)
        assert sf.product_store.get_product(lamp.id) is None
        with pytest.raises(ProductNotFoundError):
            sf.product_store.delete_product(lamp.id)


class TestStockAdjustments:

    def test_reduce_stock(self):
        sf, (lamp, *_) = _setup()
        sf.product_store.reduce_stock(lamp.id, 3)
        assert sf.product_store.get_product(lamp.id).stock_quantity == 2

    def test_reduce_to_exactly_zero(self):
        sf, (lamp, *_) = _setup()
        sf.product_store.reduce_stock(lamp.id, 5)
        assert sf.db.products[lamp.id].stock_quantity == 0

    def test_reduce_below_zero_rejected_without_change(self):
        sf, (lamp, *_) = _setup()
        with pytest.raises(InsufficientStockError) as exc_info:
            sf.product_store.reduce_stock(lamp.id, 6)
        assert exc_info.value.kind is ErrorKind.INSUFFICIENT_STOCK
        assert sf.db.products[lamp.id].stock_quantity == 5

    def test_increase_stock_is_unconditional(self):
        sf, (_, floor_lamp, _) = _setup()
        sf.product_store.increase_stock(floor_lamp.id, 10)
        assert sf.product_store.get_product(floor_lamp.id).stock_quantity == 12

    def test_increase_stock_of_missing_product(self):
        sf, _ = _setup()
        with pytest.raises(ProductNotFoundError):
            sf.product_store.increase_stock(uuid4(), 1)

    def test_gateway_failure_during_stock_change(self):
        sf, (lamp, *_) = _setup()
        sf.product_gateway.failures.add("increase_stock")
        with pytest.raises(ProductUpdateError):
            sf.product_store.increase_stock(lamp.id, 1)
