"""Unit tests for currency conversion, price resolution and variant selection."""

import logging
from decimal import Decimal

import pytest

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.catalog import Product, ProductVariant
from shopcore.domain.model.currency import currency_for_country, normalize_currency
from shopcore.domain.model.value_objects import Money
from shopcore.domain.service.currency_converter import CurrencyConverter
from shopcore.domain.service.price_resolver import PriceResolver, PriceSource
from shopcore.domain.service.variant_selection import (
    active_variants,
    default_variant,
    highest_variant_price,
    lowest_variant_price,
    select_listing,
    total_variant_stock,
)


def _product(price: str | None = "10.00", **regional: str) -> Product:
    return Product(
        id="p1",
        name="Ankara Shirt",
        price=Money.of(price) if price is not None else None,
        regional_prices={code: Money.of(amount, code) for code, amount in regional.items()},
        stock=4,
        images=["shirt.jpg"],
    )


def _variant(
    vid: str,
    price: str | None = None,
    sort_order: int = 0,
    is_active: bool = True,
    stock: int = 1,
    **regional: str,
) -> ProductVariant:
    return ProductVariant(
        id=vid,
        name=f"Variant {vid}",
        price=Money.of(price) if price is not None else None,
        regional_prices={code: Money.of(amount, code) for code, amount in regional.items()},
        stock=stock,
        sort_order=sort_order,
        is_active=is_active,
        images=[f"{vid}.jpg"],
        product_id="p1",
    )


# ── Currency table / converter ───────────────────────────────────────────────


class TestCurrencies:

    def test_country_lookup(self):
        assert currency_for_country("ng") == "NGN"
        assert currency_for_country("GH") == "GHS"

    def test_unknown_country_falls_back_to_base(self):
        assert currency_for_country("FR") == "USD"
        assert currency_for_country(None) == "USD"

    def test_normalize(self):
        assert normalize_currency(" ngn ") == "NGN"
        with pytest.raises(ValidationError, match="Unsupported currency"):
            normalize_currency("EUR")


class TestCurrencyConverter:

    def test_usd_to_ngn(self):
        assert CurrencyConverter().convert(Money.of("10"), "NGN") == Money.of("15000", "NGN")

    def test_cross_rate_goes_through_base(self):
        converted = CurrencyConverter().convert(Money.of("1500", "NGN"), "GHS")
        assert converted == Money.of("12", "GHS")

    def test_result_is_rounded_to_minor_units(self):
        converted = CurrencyConverter().convert(Money.of("1000", "NGN"), "USD")
        assert converted.amount == Decimal("0.67")

    def test_explicit_empty_rate_table_is_respected(self):
        with pytest.raises(ValidationError, match="No exchange rate"):
            CurrencyConverter(currencies={}).convert(Money.of("10"), "NGN")

    def test_same_currency_is_returned_unchanged(self):
        money = Money.of("3.333")
        assert CurrencyConverter().convert(money, "USD") is money


# ── PriceResolver ────────────────────────────────────────────────────────────


class TestPriceResolver:

    def test_regional_price_is_used_verbatim(self):
        resolved = PriceResolver().resolve(_product("10.00", NGN="5000"), "NGN")
        assert resolved.money == Money.of("5000", "NGN")
        assert resolved.source is PriceSource.REGIONAL

    def test_base_currency_ignores_regional_prices(self):
        resolved = PriceResolver().resolve(_product("10.00", NGN="5000"), "USD")
        assert resolved.money == Money.of("10.00")
        assert resolved.source is PriceSource.BASE

    def test_missing_regional_price_converts_base(self):
        resolved = PriceResolver().resolve(_product("10.00"), "GHS")
        assert resolved.money == Money.of("120", "GHS")
        assert resolved.source is PriceSource.CONVERTED

    def test_zero_regional_price_counts_as_unset(self):
        resolved = PriceResolver().resolve(_product("10.00", NGN="0"), "NGN")
        assert resolved.source is PriceSource.CONVERTED
        assert resolved.money == Money.of("15000", "NGN")

    def test_no_usable_price_is_flagged_missing(self, caplog):
        item = _product("0")
        with caplog.at_level(logging.WARNING):
            resolved = PriceResolver().resolve(item, "NGN")
        assert resolved.is_missing
        assert resolved.money == Money.zero("NGN")
        assert "No usable price" in caplog.text

    def test_unsupported_currency_rejected(self):
        with pytest.raises(ValidationError):
            PriceResolver().resolve(_product(), "EUR")

    def test_format_price(self):
        resolver = PriceResolver()
        item = _product("10.00", NGN="1500000")
        assert resolver.format_price(item, "NGN") == "₦1,500,000"
        assert resolver.format_price(item, "USD") == "$10.00"

    def test_all_prices_covers_every_currency(self):
        prices = PriceResolver().all_prices(_product("10.00", GHS="99"))
        assert set(prices) == {"USD", "NGN", "GHS"}
        assert prices["GHS"].source is PriceSource.REGIONAL
        assert prices["NGN"].source is PriceSource.CONVERTED


# ── Variant selection ────────────────────────────────────────────────────────


class TestVariantSelection:

    def test_variant_shadows_product_entirely(self):
        product = _product("10.00", NGN="9000")
        variant = _variant("v1", NGN="5000", stock=7)
        listing = select_listing(product, variant, "NGN", PriceResolver())
        assert listing.price.money == Money.of("5000", "NGN")
        assert listing.stock == 7
        assert listing.images == ["v1.jpg"]

    def test_variant_without_price_does_not_borrow_from_product(self):
        product = _product("10.00")
        variant = _variant("v1", price="0", NGN="1")
        listing = select_listing(product, variant, "USD", PriceResolver())
        assert listing.price.is_missing

    def test_no_selection_shows_product(self):
        listing = select_listing(_product("10.00"), None, "USD", PriceResolver())
        assert listing.price.money == Money.of("10.00")
        assert listing.stock == 4

    def test_foreign_variant_rejected(self):
        variant = _variant("v1", price="5")
        variant.product_id = "other"
        with pytest.raises(ValidationError, match="does not belong"):
            select_listing(_product(), variant, "USD", PriceResolver())

    def test_active_variants_sorted_by_position(self):
        variants = [
            _variant("a", price="1", sort_order=2),
            _variant("b", price="1", sort_order=1),
            _variant("c", price="1", sort_order=0, is_active=False),
        ]
        assert [v.id for v in active_variants(variants)] == ["b", "a"]

    def test_default_variant(self):
        assert default_variant([]) is None
        inactive = _variant("a", price="1", is_active=False)
        active = _variant("b", price="1")
        assert default_variant([inactive, active]) is active
        assert default_variant([inactive]) is inactive

    def test_aggregates(self):
        resolver = PriceResolver()
        variants = [
            _variant("a", price="5", stock=2),
            _variant("b", price="20", stock=3),
            _variant("c", price="1", stock=10, is_active=False),
        ]
        assert total_variant_stock(variants) == 15
        assert lowest_variant_price(variants, "USD", resolver) == Money.of("5")
        assert highest_variant_price(variants, "USD", resolver) == Money.of("20")
        assert lowest_variant_price([], "USD", resolver) is None
