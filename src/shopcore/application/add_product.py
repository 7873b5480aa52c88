"""Application service: Add Product / Add Variant use cases."""

from __future__ import annotations

import logging

from shopcore.application import mappers
from shopcore.application.resources import ResourceType
from shopcore.domain.exceptions import EntityNotFoundError, ValidationError
from shopcore.domain.model.catalog import Product, ProductVariant
from shopcore.domain.model.currency import BASE_CURRENCY
from shopcore.domain.model.value_objects import Money
from shopcore.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)


def parse_prices(
    price: str | None = None,
    price_ngn: str | None = None,
    price_ghs: str | None = None,
) -> tuple[Money | None, dict[str, Money]]:
    """Turn raw form values into a base price and regional prices.

    Blank values are treated as not given.
    """
    base = Money.of(price, BASE_CURRENCY) if _given(price) else None
    regional: dict[str, Money] = {}
    if _given(price_ngn):
        regional["NGN"] = Money.of(price_ngn, "NGN")  # type: ignore[arg-type]
    if _given(price_ghs):
        regional["GHS"] = Money.of(price_ghs, "GHS")  # type: ignore[arg-type]
    return base, regional


def _given(raw: str | None) -> bool:
    return raw is not None and str(raw).strip() != ""


class AddProductHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(
        self,
        name: str,
        price: str | None = None,
        price_ngn: str | None = None,
        price_ghs: str | None = None,
        stock: int = 0,
        description: str = "",
        category_id: str | None = None,
        subcategory_id: str | None = None,
        images: list[str] | None = None,
    ) -> Product:
        """Add a new product to the catalog."""
        self._check_categories(category_id, subcategory_id)

        base, regional = parse_prices(price, price_ngn, price_ghs)
        product = Product.create(
            name=name,
            price=base,
            regional_prices=regional,
            stock=stock,
            description=description,
            category_id=category_id,
            subcategory_id=subcategory_id,
            images=images,
        )
        row = self._store.insert(ResourceType.PRODUCTS.value, mappers.product_to_row(product))
        product.id = row["id"]
        logger.info("Added product %s %r", product.id, product.name)
        return product

    def _check_categories(self, category_id: str | None, subcategory_id: str | None) -> None:
        if category_id and self._store.find_one(
            ResourceType.CATEGORIES.value, {"id": category_id}
        ) is None:
            raise EntityNotFoundError(f"Category '{category_id}' not found")
        if not subcategory_id:
            return
        sub = self._store.find_one(ResourceType.SUBCATEGORIES.value, {"id": subcategory_id})
        if sub is None:
            raise EntityNotFoundError(f"Subcategory '{subcategory_id}' not found")
        if category_id and sub.get("category_id") != category_id:
            raise ValidationError(
                f"Subcategory '{subcategory_id}' does not belong to category '{category_id}'"
            )


class AddVariantHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(
        self,
        product_id: str,
        name: str,
        price: str | None = None,
        price_ngn: str | None = None,
        price_ghs: str | None = None,
        stock: int = 0,
        sort_order: int = 0,
        is_active: bool = True,
        images: list[str] | None = None,
    ) -> ProductVariant:
        """Add a variant under an existing product."""
        if self._store.find_one(ResourceType.PRODUCTS.value, {"id": product_id}) is None:
            raise EntityNotFoundError(f"Product '{product_id}' not found")

        base, regional = parse_prices(price, price_ngn, price_ghs)
        variant = ProductVariant.create(
            product_id=product_id,
            name=name,
            price=base,
            regional_prices=regional,
            stock=stock,
            sort_order=sort_order,
            is_active=is_active,
            images=images,
        )
        row = self._store.insert(ResourceType.VARIANTS.value, mappers.variant_to_row(variant))
        variant.id = row["id"]
        logger.info("Added variant %s %r to product %s", variant.id, variant.name, product_id)
        return variant
