"""Tests for CategoryStore, CustomerStore and ReviewStore."""

from uuid import uuid4

import pytest

from storefront.domain.exceptions import CategoryNotFoundError, CustomerNotFoundError
from storefront.domain.model.category import Category
from storefront.domain.model.customer import Customer, CustomerDetails
from storefront.domain.model.product import Product
from storefront.domain.model.product_filter import ProductFilter
from storefront.domain.model.review import Review
from storefront.domain.model.value_objects import Money
from storefront.store.exceptions import (
    CategoryCountError,
    CategoryCreationError,
    CustomerRetrievalError,
    ReviewCreationError,
)
from tests.fakes import build_fake_storefront


# ── Categories ───────────────────────────────────────────────────────────────


def _category_setup():
    categories = [Category.create("Lighting"), Category.create("Stationery"), Category.create("Desk Light")]
    return build_fake_storefront(categories=categories), categories


class TestCategoryStore:

    def test_reads_are_cached(self):
        sf, (lighting, *_) = _category_setup()
        sf.category_store.get_category(lighting.id)
        sf.category_store.get_category(lighting.id)
        assert sf.category_gateway.calls["find_by_id"] == 1

    def test_lookup_by_name_ignores_case(self):
        sf, (lighting, *_) = _category_setup()
        assert sf.category_store.get_category_by_name("  LIGHTING ").id == lighting.id
        assert "category:name:lighting" in sf.cache

    def test_find_all_and_count(self):
        sf, _ = _category_setup()
        assert [c.name for c in sf.category_store.find_all(2, 0)] == ["Desk Light", "Lighting"]
        assert [c.name for c in sf.category_store.find_all(2, 2)] == ["Stationery"]
        assert sf.category_store.count() == 3

    def test_search_and_count_by_name(self):
        sf, _ = _category_setup()
        assert [c.name for c in sf.category_store.search_by_name("light", 10, 0)] == [
            "Desk Light",
            "Lighting",
        ]
        assert sf.category_store.count_by_name("light") == 2
        assert "category:search:light:10:0" in sf.cache
        assert "category:count:light" in sf.cache

    def test_create_invalidates_category_entries_only(self):
        sf, _ = _category_setup()
        sf.category_store.count()
        sf.category_store.search_by_name("light", 10, 0)
        sf.cache.get_or_load("product:count:all", lambda: 0)

        sf.category_store.create_category(Category.create("Outdoor Lights"))

        assert sf.cache.keys() == ["product:count:all"]
        assert sf.category_store.count() == 4

    def test_duplicate_name_is_a_creation_error(self):
        sf, _ = _category_setup()
        with pytest.raises(CategoryCreationError, match="Failed to create category 'lighting'"):
            sf.category_store.create_category(Category.create("lighting"))
        assert len(sf.db.categories) == 3

    def test_update_and_delete(self):
        sf, (lighting, *_) = _category_setup()
        renamed = sf.category_store.get_category(lighting.id)
        renamed.rename("Lamps")
        sf.category_store.update_category(renamed)
        assert sf.category_store.get_category(lighting.id).name == "Lamps"

        sf.category_store.delete_category(lighting.id)
        assert sf.category_store.get_category(lighting.id) is None

    def test_delete_drops_cached_products_of_the_category(self):
        lighting = Category.create("Lighting")
        lamp = Product.create("Desk Lamp", Money.of("15"), category_id=lighting.id)
        sf = build_fake_storefront(products=[lamp], categories=[lighting])
        in_lighting = ProductFilter(category_id=lighting.id)
        assert sf.product_store.get_product(lamp.id).category_id == lighting.id
        assert len(sf.product_store.search_products(in_lighting, 10, 0)) == 1

        sf.category_store.delete_category(lighting.id)

        assert sf.product_store.get_product(lamp.id).category_id is None
        assert sf.product_store.search_products(in_lighting, 10, 0) == []

    def test_missing_category_write(self):
        sf, _ = _category_setup()
        with pytest.raises(CategoryNotFoundError):
            sf.category_store.delete_category(uuid4())
        with pytest.raises(CategoryNotFoundError):
            sf.category_store.update_category(Category.create("Ghost"))

    def test_count_failure(self):
        sf, _ = _category_setup()
        sf.category_gateway.failures.add("count_all")
        with pytest.raises(CategoryCountError):
            sf.category_store.count()


# ── Customers ────────────────────────────────────────────────────────────────


def _customer_setup():
    ada = Customer.create(CustomerDetails("Ada", "Lovelace", "ada@example.com"))
    grace = Customer.create(CustomerDetails("Grace", "Hopper", "grace@example.com"))
    return build_fake_storefront(customers=[ada, grace]), ada, grace


class TestCustomerStore:

    def test_find_by_email_normalizes_the_key(self):
        sf, ada, _ = _customer_setup()
        assert sf.customer_store.find_by_email(" ADA@example.com").id == ada.id
        assert sf.customer_store.find_by_email("ada@EXAMPLE.com").id == ada.id
        assert sf.customer_gateway.calls["find_by_email"] == 1

    def test_find_by_id(self):
        sf, _, grace = _customer_setup()
        assert sf.customer_store.find_by_id(grace.id).full_name == "Grace Hopper"

    def test_find_by_ids_is_order_independent(self):
        sf, ada, grace = _customer_setup()
        a = sf.customer_store.find_by_ids([ada.id, grace.id])
        b = sf.customer_store.find_by_ids([grace.id, ada.id, ada.id])
        assert {c.id for c in a} == {ada.id, grace.id}
        assert a is b
        assert sf.customer_gateway.calls["find_by_ids"] == 1

    def test_find_by_ids_empty(self):
        sf, _, _ = _customer_setup()
        assert sf.customer_store.find_by_ids([]) == []
        assert sf.transactions.opened == 0

    def test_create_invalidates_negative_lookup(self):
        sf, _, _ = _customer_setup()
        assert sf.customer_store.find_by_email("alan@example.com") is None

        sf.customer_store.create_customer(
            Customer.create(CustomerDetails("Alan", "Turing", "alan@example.com"))
        )

        assert sf.customer_store.find_by_email("alan@example.com") is not None

    def test_update_contact(self):
        sf, ada, _ = _customer_setup()
        customer = sf.customer_store.find_by_id(ada.id)
        customer.update_contact(phone="555")
        sf.customer_store.update_customer(customer)
        assert sf.db.customers[ada.id].phone == "555"

    def test_update_missing_customer(self):
        sf, _, _ = _customer_setup()
        with pytest.raises(CustomerNotFoundError):
            sf.customer_store.update_customer(
                Customer.create(CustomerDetails("No", "Body", "nobody@example.com"))
            )

    def test_retrieval_failure(self):
        sf, ada, _ = _customer_setup()
        sf.customer_gateway.failures.add("find_by_id")
        with pytest.raises(CustomerRetrievalError):
            sf.customer_store.find_by_id(ada.id)


# ── Reviews ──────────────────────────────────────────────────────────────────


def _review_setup():
    lamp = Product.create("Desk Lamp", Money.of("15"))
    pen = Product.create("Pen", Money.of("1"))
    return build_fake_storefront(products=[lamp, pen]), lamp, pen


class TestReviewStore:

    def test_create_invalidates_only_that_products_reviews(self):
        sf, lamp, pen = _review_setup()
        sf.review_store.get_reviews_by_product(lamp.id, 10, 0)
        sf.review_store.count_reviews_by_product(lamp.id)
        sf.review_store.get_reviews_by_product(pen.id, 10, 0)
        sf.review_store.count_reviews_by_product(pen.id)

        sf.review_store.create_review(Review.create(lamp.id, 5, "great"))

        assert sf.cache.keys() == [f"review:count:{pen.id}", f"review:product:{pen.id}:10:0"]
        assert sf.review_store.count_reviews_by_product(lamp.id) == 1
        assert sf.review_store.get_reviews_by_product(lamp.id, 10, 0)[0].comment == "great"

    def test_reviews_are_paged(self):
        sf, lamp, _ = _review_setup()
        for rating in (1, 2, 3):
            sf.review_store.create_review(Review.create(lamp.id, rating))
        assert len(sf.review_store.get_reviews_by_product(lamp.id, 2, 0)) == 2
        assert len(sf.review_store.get_reviews_by_product(lamp.id, 2, 2)) == 1

    def test_creation_failure(self):
        sf, lamp, _ = _review_setup()
        sf.review_gateway.failures.add("save")
        with pytest.raises(ReviewCreationError):
            sf.review_store.create_review(Review.create(lamp.id, 3))
        assert sf.db.reviews == {}
