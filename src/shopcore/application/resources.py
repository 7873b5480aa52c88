"""Per-resource query strategies.

Every list screen runs the same paged query; resources only differ in
which columns may be filtered on, which column a search term is matched
against, how rows are ordered, and how a row becomes a domain object.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, TypeVar

from shopcore.application import mappers
from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.order import OrderStatus
from shopcore.domain.repository.record_store import Row

T = TypeVar("T")


class ResourceType(Enum):
    PRODUCTS = "products"
    VARIANTS = "product_variants"
    CATEGORIES = "categories"
    SUBCATEGORIES = "subcategories"
    CUSTOMERS = "customers"
    ORDERS = "orders"
    ORDER_ITEMS = "order_items"

    @staticmethod
    def parse(raw: str | ResourceType) -> ResourceType:
        if isinstance(raw, ResourceType):
            return raw
        try:
            return ResourceType(raw)
        except ValueError as exc:
            allowed = ", ".join(r.value for r in ResourceType)
            raise ValidationError(f"Unknown resource {raw!r} (expected one of {allowed})") from exc


def _as_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in ("true", "1", "yes"):
        return True
    if text in ("false", "0", "no"):
        return False
    raise ValidationError(f"Expected a boolean, got {value!r}")


def _as_status(value: Any) -> str:
    if isinstance(value, OrderStatus):
        return value.value
    return OrderStatus.parse(str(value)).value


@dataclass(frozen=True)
class ResourceStrategy(Generic[T]):
    resource: ResourceType
    to_domain: Callable[[Row], T]
    search_field: str = "name"
    # column -> parser applied to the caller's filter value
    filter_fields: dict[str, Callable[[Any], Any]] = field(default_factory=dict)
    order_by: str | None = "created_at"
    descending: bool = True

    @property
    def name(self) -> str:
        return self.resource.value

    def check_filters(self, filters: Row | None) -> Row:
        """Reject unknown filter columns and normalize the values."""
        checked: Row = {}
        for column, value in (filters or {}).items():
            parse = self.filter_fields.get(column)
            if parse is None:
                raise ValidationError(f"Cannot filter {self.name} by '{column}'")
            checked[column] = parse(value)
        return checked


def _strategy(resource: ResourceType, convert: Callable[[Row], T], **kwargs: Any) -> ResourceStrategy[T]:
    return ResourceStrategy(
        resource=resource,
        to_domain=mappers.checked(resource.value, convert),
        **kwargs,
    )


STRATEGIES: dict[ResourceType, ResourceStrategy] = {
    ResourceType.PRODUCTS: _strategy(
        ResourceType.PRODUCTS,
        mappers.product_from_row,
        filter_fields={"category_id": str, "subcategory_id": str, "is_active": _as_bool},
    ),
    ResourceType.VARIANTS: _strategy(
        ResourceType.VARIANTS,
        mappers.variant_from_row,
        filter_fields={"product_id": str, "is_active": _as_bool},
        order_by="sort_order",
        descending=False,
    ),
    ResourceType.CATEGORIES: _strategy(ResourceType.CATEGORIES, mappers.category_from_row),
    ResourceType.SUBCATEGORIES: _strategy(
        ResourceType.SUBCATEGORIES,
        mappers.subcategory_from_row,
        filter_fields={"category_id": str},
    ),
    ResourceType.CUSTOMERS: _strategy(ResourceType.CUSTOMERS, mappers.customer_from_row),
    ResourceType.ORDERS: _strategy(
        ResourceType.ORDERS,
        mappers.order_from_row,
        search_field="id",
        filter_fields={"status": _as_status, "customer_id": str},
    ),
    ResourceType.ORDER_ITEMS: _strategy(
        ResourceType.ORDER_ITEMS,
        mappers.order_item_from_row,
        search_field="product_id",
        filter_fields={"order_id": str},
        order_by=None,
    ),
}


def strategy_for(resource: str | ResourceType) -> ResourceStrategy:
    return STRATEGIES[ResourceType.parse(resource)]
