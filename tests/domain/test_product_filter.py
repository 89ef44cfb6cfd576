"""Unit tests for ProductFilter and its cache key."""

import json
from uuid import uuid4

from storefront.domain.model.product_filter import ProductFilter


class TestProductFilterCriteria:

    def test_empty_filter_matches_everything(self):
        f = ProductFilter()
        assert not f.has_name
        assert not f.has_category
        assert f.name_pattern is None

    def test_blank_name_does_not_filter(self):
        f = ProductFilter(name="   ")
        assert not f.has_name
        assert f.name_pattern is None

    def test_name_pattern_is_trimmed(self):
        assert ProductFilter(name="  lamp ").name_pattern == "lamp"

    def test_category_only(self):
        f = ProductFilter(category_id=uuid4())
        assert f.has_category
        assert not f.has_name


class TestProductFilterCacheKey:

    def test_equal_filters_share_a_key(self):
        cid = uuid4()
        assert (
            ProductFilter(name="lamp", category_id=cid).cache_key()
            == ProductFilter(name=" lamp ", category_id=cid).cache_key()
        )

    def test_blank_name_keys_like_no_name(self):
        assert ProductFilter(name="").cache_key() == ProductFilter().cache_key()

    def test_different_filters_never_share_a_key(self):
        cid = uuid4()
        keys = {
            ProductFilter().cache_key(),
            ProductFilter(name="lamp").cache_key(),
            ProductFilter(name="Lamp").cache_key(),
            ProductFilter(category_id=cid).cache_key(),
            ProductFilter(name="lamp", category_id=cid).cache_key(),
        }
        assert len(keys) == 5

    def test_separator_characters_in_names_stay_unambiguous(self):
        # A name that looks like another filter's serialization.
        tricky = ProductFilter(name='x","name":"y')
        assert tricky.cache_key() != ProductFilter(name="x").cache_key()
        assert json.loads(tricky.cache_key())["name"] == 'x","name":"y'

    def test_key_is_canonical_json(self):
        cid = uuid4()
        key = ProductFilter(name="lamp", category_id=cid).cache_key()
        assert key == f'{{"category_id":"{cid}","name":"lamp"}}'
