"""End-to-end tests for the click CLI against a temporary data directory."""

import re

import pytest
from click.testing import CliRunner

from shopcore.infrastructure.cli.main import cli


@pytest.fixture
def run(tmp_path):
    runner = CliRunner()

    def _run(*args: str):
        return runner.invoke(cli, ["--data-dir", str(tmp_path), *args])

    return _run


def _created_id(output: str) -> str:
    return re.search(r"#(\S+)", output).group(1)


def _add_product(run, *extra: str) -> str:
    result = run("products", "add", "--name", "Ankara Shirt", *extra)
    assert result.exit_code == 0, result.output
    return _created_id(result.output)


class TestCatalogCommands:

    def test_add_and_list_products(self, run):
        _add_product(run, "--price", "10", "--price-ngn", "14000")
        result = run("products", "list")
        assert result.exit_code == 0
        assert "Ankara Shirt" in result.output
        assert "$10.00" in result.output
        assert "Page 1/1  (1 total)" in result.output

    def test_add_without_any_price_fails(self, run):
        result = run("products", "add", "--name", "Shirt")
        assert result.exit_code == 1
        assert "A base price or at least one regional price is required" in result.output

    def test_price_uses_country_currency(self, run):
        product_id = _add_product(run, "--price", "10", "--price-ngn", "14000")
        result = run("products", "price", "--id", product_id, "--country", "NG")
        assert result.exit_code == 0
        assert "₦14,000  (regional)" in result.output

    def test_price_converts_base_when_no_regional_price(self, run):
        product_id = _add_product(run, "--price", "10")
        result = run("products", "price", "--id", product_id, "--currency", "ghs")
        assert "₵120.00  (converted)" in result.output

    def test_variant_price_shadows_product(self, run):
        product_id = _add_product(run, "--price", "10")
        added = run("variants", "add", "--product", product_id, "--name", "Large", "--price-ngn", "5000")
        variant_id = _created_id(added.output)
        result = run("products", "price", "--id", product_id, "--variant", variant_id, "--country", "NG")
        assert "Large: ₦5,000  (regional)" in result.output

    def test_update_product(self, run):
        product_id = _add_product(run, "--price", "10")
        result = run("products", "update", "--id", product_id, "--price", "12.50", "--stock", "7")
        assert result.exit_code == 0
        shown = run("products", "show", "--id", product_id)
        assert "$12.50" in shown.output
        assert "Stock:      7" in shown.output

    def test_category_tree_and_delete_guard(self, run):
        category_id = _created_id(run("categories", "add", "--name", "Men").output)
        sub = run("subcategories", "add", "--category", category_id, "--name", "Shirts")
        assert sub.exit_code == 0

        blocked = run("categories", "delete", "--id", category_id)
        assert blocked.exit_code == 1
        assert "still reference it" in blocked.output

    def test_search_and_filters(self, run):
        _add_product(run, "--price", "10")
        run("products", "add", "--name", "Cap", "--price", "5")
        result = run("products", "list", "--search", "shirt")
        assert "(1 total)" in result.output
        bad = run("products", "list", "--filter", "oops")
        assert bad.exit_code == 2

    def test_limit_above_maximum_rejected(self, run):
        result = run("products", "list", "--limit", "500")
        assert result.exit_code == 1
        assert "cannot exceed" in result.output


class TestOrderCommands:

    def _place(self, run, items: str, *extra: str):
        return run(
            "orders", "place",
            "--email", "Ada@Example.com",
            "--name", "Ada Obi",
            "--city", "Lagos",
            "--country", "NG",
            "--items", items,
            "--payment-method", "card",
            *extra,
        )

    def test_place_order_in_local_currency(self, run):
        product_id = _add_product(run, "--price", "10", "--price-ngn", "14000")
        result = self._place(run, f"{product_id}:2")
        assert result.exit_code == 0, result.output
        assert "status=pending" in result.output
        assert "₦28,000" in result.output
        assert "Lagos, NG" in result.output

        customers = run("customers", "list")
        assert "ada@example.com" in customers.output

    def test_order_lifecycle(self, run):
        product_id = _add_product(run, "--price", "10")
        order_id = _created_id(self._place(run, f"{product_id}:1", "--currency", "USD").output)

        listed = run("orders", "list", "--filter", "status=pending")
        assert "(1 total)" in listed.output

        shipped = run("orders", "set-status", "--id", order_id, "--status", "shipped")
        assert shipped.exit_code == 0
        assert "is now shipped" in shipped.output

        shown = run("orders", "show", "--id", order_id)
        assert "status=shipped" in shown.output
        assert "$10.00" in shown.output

    def test_idempotency_key_returns_same_order(self, run):
        product_id = _add_product(run, "--price", "10")
        first = self._place(run, f"{product_id}:1", "--idempotency-key", "k-1")
        second = self._place(run, f"{product_id}:1", "--idempotency-key", "k-1")
        assert _created_id(first.output) == _created_id(second.output)
        assert "(1 total)" in run("orders", "list").output

    def test_unknown_item_fails(self, run):
        result = self._place(run, "missing:1")
        assert result.exit_code == 1
        assert "product_variants 'missing' not found" in result.output

    def test_bad_item_format(self, run):
        result = self._place(run, "no-quantity")
        assert result.exit_code == 2

    def test_orders_cannot_be_deleted(self, run):
        result = run("orders", "delete", "--id", "x")
        assert result.exit_code == 2


def test_data_dir_from_environment(tmp_path):
    result = CliRunner().invoke(
        cli, ["categories", "add", "--name", "Men"], env={"SHOPCORE_DATA_DIR": str(tmp_path)}
    )
    assert result.exit_code == 0
    assert (tmp_path / "categories.json").exists()
