"""Catalog aggregates: products, their variants, and the category tree.

A Product and a ProductVariant share the same priced-item shape
(``CatalogItem``): a base price in the fallback currency, optional
explicit regional prices, stock and images.  When a variant is selected
it shadows its parent product entirely (see ``variant_selection``).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.currency import BASE_CURRENCY, REGIONAL_CURRENCIES
from shopcore.domain.model.value_objects import Money


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CatalogItem:
    """Fields common to products and variants.

    ``price`` is the base price and is always in the base currency.
    A zero amount is treated as unset everywhere.
    """

    id: str | None
    name: str
    description: str = ""
    price: Money | None = None
    regional_prices: dict[str, Money] = field(default_factory=dict)
    stock: int = 0
    is_active: bool = True
    sort_order: int = 0
    images: list[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=_now)

    def regional_price(self, currency: str) -> Money | None:
        """Explicit price for *currency*, or None when unset (absent or zero)."""
        money = self.regional_prices.get(currency)
        if money is None or money.is_zero:
            return None
        return money

    @property
    def base_price(self) -> Money | None:
        if self.price is None or self.price.is_zero:
            return None
        return self.price

    @property
    def has_location_specific_pricing(self) -> bool:
        return any(self.regional_price(code) for code in REGIONAL_CURRENCIES)

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    def update_prices(
        self,
        price: Money | None = None,
        regional_prices: dict[str, Money] | None = None,
    ) -> None:
        """Replace the price fields, keeping the at-least-one-price rule."""
        new_price = self.price if price is None else price
        new_regional = self.regional_prices if regional_prices is None else regional_prices
        _check_prices(new_price, new_regional)
        self.price = new_price
        self.regional_prices = dict(new_regional)

    def update_stock(self, stock: int) -> None:
        _check_stock(stock)
        self.stock = stock


@dataclass
class Product(CatalogItem):
    """A product in the catalog."""

    category_id: str | None = None
    subcategory_id: str | None = None

    @staticmethod
    def create(
        name: str,
        price: Money | None = None,
        regional_prices: dict[str, Money] | None = None,
        stock: int = 0,
        description: str = "",
        category_id: str | None = None,
        subcategory_id: str | None = None,
        images: list[str] | None = None,
    ) -> Product:
        """Create a new product, enforcing all invariants."""
        _check_name(name, "Product")
        _check_prices(price, regional_prices or {})
        _check_stock(stock)
        return Product(
            id=None,
            name=name.strip(),
            description=description,
            price=price,
            regional_prices=dict(regional_prices or {}),
            stock=stock,
            images=list(images or []),
            category_id=category_id,
            subcategory_id=subcategory_id,
        )


@dataclass
class ProductVariant(CatalogItem):
    """A purchasable variation (size, colour...) of a product."""

    product_id: str = ""

    @staticmethod
    def create(
        product_id: str,
        name: str,
        price: Money | None = None,
        regional_prices: dict[str, Money] | None = None,
        stock: int = 0,
        sort_order: int = 0,
        is_active: bool = True,
        images: list[str] | None = None,
    ) -> ProductVariant:
        if not product_id:
            raise ValidationError("Variant must reference a product")
        _check_name(name, "Variant")
        _check_prices(price, regional_prices or {})
        _check_stock(stock)
        return ProductVariant(
            id=None,
            name=name.strip(),
            price=price,
            regional_prices=dict(regional_prices or {}),
            stock=stock,
            sort_order=sort_order,
            is_active=is_active,
            images=list(images or []),
            product_id=product_id,
        )


@dataclass
class Category:
    id: str | None
    name: str
    description: str = ""
    created_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(name: str, description: str = "") -> Category:
        _check_name(name, "Category")
        return Category(id=None, name=name.strip(), description=description)


@dataclass
class Subcategory:
    """A category nested under a parent category.

    The parent's existence is checked by the application layer, which is
    the only place that can see the store.
    """

    id: str | None
    name: str
    category_id: str
    description: str = ""
    created_at: datetime = field(default_factory=_now)

    @staticmethod
    def create(name: str, category_id: str, description: str = "") -> Subcategory:
        _check_name(name, "Subcategory")
        if not category_id:
            raise ValidationError("Subcategory must reference a parent category")
        return Subcategory(
            id=None, name=name.strip(), category_id=category_id, description=description
        )


# ---------------------------------------------------------------------------
# Invariant checks
# ---------------------------------------------------------------------------


def _check_name(name: str, kind: str) -> None:
    if not name or not name.strip():
        raise ValidationError(f"{kind} name is required")


def _check_stock(stock: int) -> None:
    if stock < 0:
        raise ValidationError(f"Stock cannot be negative, got {stock}")


def _check_prices(price: Money | None, regional_prices: dict[str, Money]) -> None:
    if price is not None and price.currency != BASE_CURRENCY:
        raise ValidationError(
            f"Base price must be in {BASE_CURRENCY}, got {price.currency}"
        )
    for code, money in regional_prices.items():
        if code not in REGIONAL_CURRENCIES:
            raise ValidationError(f"No regional pricing for currency {code}")
        if money.currency != code:
            raise ValidationError(
                f"Regional price for {code} is expressed in {money.currency}"
            )
    has_base = price is not None and not price.is_zero
    has_regional = any(not m.is_zero for m in regional_prices.values())
    if not (has_base or has_regional):
        raise ValidationError("A base price or at least one regional price is required")
