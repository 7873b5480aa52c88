"""Application service: Update Product (or Variant) use case."""

from __future__ import annotations

import logging

from shopcore.application import mappers
from shopcore.application.add_product import parse_prices
from shopcore.application.resources import ResourceType
from shopcore.application.show_resource import ShowResourceHandler
from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.catalog import CatalogItem, ProductVariant
from shopcore.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)

_CATALOG_RESOURCES = (ResourceType.PRODUCTS, ResourceType.VARIANTS)


class UpdateProductHandler:

    def __init__(self, store: RecordStore, resource: ResourceType = ResourceType.PRODUCTS) -> None:
        if resource not in _CATALOG_RESOURCES:
            raise ValidationError(f"{resource.value} are not catalog items")
        self._store = store
        self._resource = resource

    def handle(
        self,
        item_id: str,
        price: str | None = None,
        price_ngn: str | None = None,
        price_ghs: str | None = None,
        stock: int | None = None,
    ) -> CatalogItem:
        """Change the prices and/or stock of a catalog item.

        This does NOT affect any existing orders: their items captured
        a price snapshot at placement time.  A regional price of ``0``
        clears it.
        """
        item: CatalogItem = ShowResourceHandler(self._store).handle(self._resource, item_id)

        base, regional_updates = parse_prices(price, price_ngn, price_ghs)
        regional = dict(item.regional_prices)
        for code, money in regional_updates.items():
            if money.is_zero:
                regional.pop(code, None)
            else:
                regional[code] = money
        item.update_prices(price=base, regional_prices=regional)
        if stock is not None:
            item.update_stock(stock)

        row = (
            mappers.variant_to_row(item)
            if isinstance(item, ProductVariant)
            else mappers.product_to_row(item)  # type: ignore[arg-type]
        )
        patch = {k: v for k, v in row.items() if k not in ("id", "created_at")}
        self._store.update(self._resource.value, item_id, patch)
        logger.info("Updated %s %s", self._resource.value, item_id)
        return item
