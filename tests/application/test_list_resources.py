"""Integration tests for paged listing and single-record lookup."""

import logging

import pytest

from shopcore.application.add_product import AddProductHandler, AddVariantHandler
from shopcore.application.list_resources import ListResourcesHandler
from shopcore.application.resources import ResourceType
from shopcore.application.show_resource import ShowResourceHandler
from shopcore.domain.exceptions import EntityNotFoundError, TransientStoreError, ValidationError
from tests.fakes import FakeRecordStore


def _setup(products: int = 0, fail_on=None) -> tuple[ListResourcesHandler, FakeRecordStore]:
    store = FakeRecordStore(fail_on=fail_on)
    add = AddProductHandler(store)
    for i in range(products):
        add.handle(name=f"Shirt {i:02d}", price="10.00", stock=i)
    return ListResourcesHandler(store), store


class TestListing:

    def test_first_page(self):
        handler, _ = _setup(products=25)
        result = handler.handle(ResourceType.PRODUCTS, page=1, limit=10)
        assert len(result.documents) == 10
        assert result.total == 25
        assert result.meta.total_pages == 3
        assert result.meta.previous_page is None
        assert result.meta.next_page == 2

    def test_middle_page(self):
        handler, _ = _setup(products=25)
        result = handler.handle("products", page=2, limit=10)
        assert result.meta.previous_page == 1
        assert result.meta.next_page == 3

    def test_last_page_is_partial(self):
        handler, _ = _setup(products=25)
        result = handler.handle(ResourceType.PRODUCTS, page=3, limit=10)
        assert len(result.documents) == 5
        assert result.meta.next_page is None

    def test_page_past_the_end_is_empty(self):
        handler, _ = _setup(products=5)
        result = handler.handle(ResourceType.PRODUCTS, page=4, limit=10)
        assert result.documents == []
        assert result.total == 5

    def test_empty_resource(self):
        handler, _ = _setup()
        result = handler.handle(ResourceType.CATEGORIES)
        assert result.total == 0
        assert result.meta.total_pages == 0

    def test_invalid_page_rejected(self):
        handler, _ = _setup(products=1)
        with pytest.raises(ValidationError, match="Page must be"):
            handler.handle(ResourceType.PRODUCTS, page=0)

    def test_limit_over_maximum_rejected(self):
        handler, _ = _setup(products=1)
        with pytest.raises(ValidationError, match="cannot exceed"):
            handler.handle(ResourceType.PRODUCTS, limit=500)

    def test_unknown_resource_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Unknown resource"):
            handler.handle("widgets")


class TestSearchAndFilters:

    def test_search_total_counts_all_matches(self):
        handler, store = _setup(products=15)
        AddProductHandler(store).handle(name="Trousers", price="20.00")

        result = handler.handle(ResourceType.PRODUCTS, page=1, limit=10, search="shirt")

        assert len(result.documents) == 10
        assert result.total == 15
        assert result.meta.total_pages == 2
        assert result.meta.next_page == 2

    def test_blank_search_lists_everything(self):
        handler, _ = _setup(products=3)
        assert handler.handle(ResourceType.PRODUCTS, search="   ").total == 3

    def test_filter_by_parent(self):
        handler, store = _setup()
        shirt = AddProductHandler(store).handle(name="Shirt", price="10")
        other = AddProductHandler(store).handle(name="Cap", price="5")
        variants = AddVariantHandler(store)
        variants.handle(shirt.id, "Large", price="12", sort_order=2)
        variants.handle(shirt.id, "Small", price="9", sort_order=1)
        variants.handle(other.id, "One size", price="5")

        result = handler.handle(ResourceType.VARIANTS, filters={"product_id": shirt.id})

        assert [v.name for v in result.documents] == ["Small", "Large"]

    def test_boolean_filter_is_parsed(self):
        handler, store = _setup(products=2)
        store.update("products", "1", {"is_active": False})
        result = handler.handle(ResourceType.PRODUCTS, filters={"is_active": "false"})
        assert [p.id for p in result.documents] == ["1"]

    def test_unknown_filter_column_rejected(self):
        handler, _ = _setup(products=1)
        with pytest.raises(ValidationError, match="Cannot filter products by 'colour'"):
            handler.handle(ResourceType.PRODUCTS, filters={"colour": "red"})

    def test_invalid_status_filter_rejected(self):
        handler, _ = _setup()
        with pytest.raises(ValidationError, match="Invalid order status"):
            handler.handle(ResourceType.ORDERS, filters={"status": "lost"})


class TestStoreFailures:

    def test_failure_degrades_to_empty_page_and_is_logged(self, caplog):
        handler, _ = _setup(fail_on={("list_page", "products")})
        with caplog.at_level(logging.ERROR):
            result = handler.handle(ResourceType.PRODUCTS, page=2, limit=5, filters={"is_active": True})
        assert result.documents == []
        assert result.total == 0
        assert result.meta.page == 2
        assert result.meta.total_pages == 0
        assert "Listing products failed" in caplog.text
        assert "is_active" in caplog.text

    def test_search_failure_is_logged_with_the_term(self, caplog):
        handler, _ = _setup(fail_on={("search_page", "customers")})
        with caplog.at_level(logging.ERROR):
            result = handler.handle(ResourceType.CUSTOMERS, search="ada")
        assert result.total == 0
        assert "'ada'" in caplog.text

    def test_malformed_row_counts_as_store_failure(self, caplog):
        handler, store = _setup()
        store.insert("products", {"name": "Broken", "price": "not money"})
        with caplog.at_level(logging.ERROR):
            result = handler.handle(ResourceType.PRODUCTS)
        assert result.documents == []
        assert "Malformed products row" in caplog.text


class TestShowResource:

    def test_show_product(self):
        _, store = _setup(products=1)
        product = ShowResourceHandler(store).handle(ResourceType.PRODUCTS, "1")
        assert product.name == "Shirt 00"

    def test_missing_record(self):
        _, store = _setup()
        with pytest.raises(EntityNotFoundError, match="products 'nope' not found"):
            ShowResourceHandler(store).handle(ResourceType.PRODUCTS, "nope")

    def test_malformed_record_raises_store_error(self):
        _, store = _setup()
        store.insert("categories", {"id": "c1"})
        with pytest.raises(TransientStoreError, match="Malformed categories row"):
            ShowResourceHandler(store).handle(ResourceType.CATEGORIES, "c1")
