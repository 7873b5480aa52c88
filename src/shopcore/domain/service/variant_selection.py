"""Domain service: what a shopper sees once a variant is (or is not) selected.

A selected variant shadows its parent product entirely: stock, price and
images all come from the variant.  Without a selection, the product
itself is shown.
"""

from __future__ import annotations

from dataclasses import dataclass

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.catalog import CatalogItem, Product, ProductVariant
from shopcore.domain.model.value_objects import Money
from shopcore.domain.service.price_resolver import PriceResolver, ResolvedPrice


@dataclass(frozen=True)
class Listing:
    item: CatalogItem
    price: ResolvedPrice
    stock: int
    images: list[str]


def effective_item(product: Product, variant: ProductVariant | None = None) -> CatalogItem:
    if variant is None:
        return product
    if variant.product_id != product.id:
        raise ValidationError(
            f"Variant '{variant.id}' does not belong to product '{product.id}'"
        )
    return variant


def select_listing(
    product: Product,
    variant: ProductVariant | None,
    currency: str,
    resolver: PriceResolver,
) -> Listing:
    item = effective_item(product, variant)
    return Listing(
        item=item,
        price=resolver.resolve(item, currency),
        stock=item.stock,
        images=list(item.images),
    )


# --- Variant aggregates -------------------------------------------------------


def active_variants(variants: list[ProductVariant]) -> list[ProductVariant]:
    return sorted((v for v in variants if v.is_active), key=lambda v: v.sort_order)


def default_variant(variants: list[ProductVariant]) -> ProductVariant | None:
    """First active variant, else the first one, else None."""
    if not variants:
        return None
    for variant in variants:
        if variant.is_active:
            return variant
    return variants[0]


def total_variant_stock(variants: list[ProductVariant]) -> int:
    return sum(v.stock for v in variants)


def lowest_variant_price(
    variants: list[ProductVariant], currency: str, resolver: PriceResolver
) -> Money | None:
    prices = _usable_prices(variants, currency, resolver)
    return min(prices, key=lambda m: m.amount) if prices else None


def highest_variant_price(
    variants: list[ProductVariant], currency: str, resolver: PriceResolver
) -> Money | None:
    prices = _usable_prices(variants, currency, resolver)
    return max(prices, key=lambda m: m.amount) if prices else None


def _usable_prices(
    variants: list[ProductVariant], currency: str, resolver: PriceResolver
) -> list[Money]:
    resolved = (resolver.resolve(v, currency) for v in variants if v.is_active)
    return [r.money for r in resolved if not r.is_missing]
