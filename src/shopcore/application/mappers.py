"""Row <-> domain conversion at the store edge.

Store rows are loosely shaped dicts.  Everything that enters the
application layer goes through one of the ``*_from_row`` functions here,
so required and optional fields are settled in exactly one place.  A row
that cannot be converted is reported as a store failure.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone
from decimal import InvalidOperation
from typing import Any, TypeVar

from shopcore.domain.exceptions import TransientStoreError, ValidationError
from shopcore.domain.model.catalog import CatalogItem, Category, Product, ProductVariant, Subcategory
from shopcore.domain.model.currency import BASE_CURRENCY, REGIONAL_CURRENCIES
from shopcore.domain.model.customer import Customer
from shopcore.domain.model.order import Order, OrderItem, OrderStatus
from shopcore.domain.model.value_objects import Address, Email, Money, Quantity
from shopcore.domain.repository.record_store import Row

T = TypeVar("T")


def checked(resource: str, convert: Callable[[Row], T]) -> Callable[[Row], T]:
    """Wrap *convert* so malformed rows raise TransientStoreError."""

    def _convert(row: Row) -> T:
        try:
            return convert(row)
        except (KeyError, TypeError, ValueError, InvalidOperation, ValidationError) as exc:
            raise TransientStoreError(
                f"Malformed {resource} row (id={row.get('id')!r}): {exc}"
            ) from exc

    return _convert


# --- Field helpers ------------------------------------------------------------


def _money(raw: Any, currency: str) -> Money | None:
    if raw is None or raw == "":
        return None
    return Money.of(raw, currency)


def _money_str(money: Money | None) -> str | None:
    return None if money is None else str(money.amount)


def _dt(raw: Any) -> datetime:
    if not raw:
        return datetime.now(timezone.utc)
    return datetime.fromisoformat(raw)


def _with_id(row: Row, entity_id: str | None) -> Row:
    if entity_id is not None:
        row["id"] = entity_id
    return row


# --- Catalog ------------------------------------------------------------------


def _catalog_fields(row: Row) -> dict[str, Any]:
    regional: dict[str, Money] = {}
    for code in REGIONAL_CURRENCIES:
        money = _money(row.get(f"price_{code.lower()}"), code)
        if money is not None:
            regional[code] = money
    return {
        "id": row["id"],
        "name": row["name"],
        "description": row.get("description") or "",
        "price": _money(row.get("price"), BASE_CURRENCY),
        "regional_prices": regional,
        "stock": int(row.get("stock") or 0),
        "is_active": bool(row.get("is_active", True)),
        "sort_order": int(row.get("sort_order") or 0),
        "images": list(row.get("images") or []),
        "created_at": _dt(row.get("created_at")),
    }


def _catalog_row(item: CatalogItem) -> Row:
    row: Row = {
        "name": item.name,
        "description": item.description,
        "price": _money_str(item.price),
        "stock": item.stock,
        "is_active": item.is_active,
        "sort_order": item.sort_order,
        "images": list(item.images),
        "created_at": item.created_at.isoformat(),
    }
    for code in REGIONAL_CURRENCIES:
        row[f"price_{code.lower()}"] = _money_str(item.regional_prices.get(code))
    return _with_id(row, item.id)


def product_from_row(row: Row) -> Product:
    return Product(
        **_catalog_fields(row),
        category_id=row.get("category_id"),
        subcategory_id=row.get("subcategory_id"),
    )


def product_to_row(product: Product) -> Row:
    row = _catalog_row(product)
    row["category_id"] = product.category_id
    row["subcategory_id"] = product.subcategory_id
    return row


def variant_from_row(row: Row) -> ProductVariant:
    return ProductVariant(**_catalog_fields(row), product_id=row["product_id"])


def variant_to_row(variant: ProductVariant) -> Row:
    row = _catalog_row(variant)
    row["product_id"] = variant.product_id
    return row


def category_from_row(row: Row) -> Category:
    return Category(
        id=row["id"],
        name=row["name"],
        description=row.get("description") or "",
        created_at=_dt(row.get("created_at")),
    )


def category_to_row(category: Category) -> Row:
    row: Row = {
        "name": category.name,
        "description": category.description,
        "created_at": category.created_at.isoformat(),
    }
    return _with_id(row, category.id)


def subcategory_from_row(row: Row) -> Subcategory:
    return Subcategory(
        id=row["id"],
        name=row["name"],
        category_id=row["category_id"],
        description=row.get("description") or "",
        created_at=_dt(row.get("created_at")),
    )


def subcategory_to_row(subcategory: Subcategory) -> Row:
    row: Row = {
        "name": subcategory.name,
        "category_id": subcategory.category_id,
        "description": subcategory.description,
        "created_at": subcategory.created_at.isoformat(),
    }
    return _with_id(row, subcategory.id)


# --- Customers ----------------------------------------------------------------


def customer_from_row(row: Row) -> Customer:
    return Customer(
        id=row["id"],
        email=Email.of(row["email"]),
        name=row.get("name") or "",
        phone=row.get("phone") or "",
        address=Address.from_dict(row.get("address")),
        created_at=_dt(row.get("created_at")),
        updated_at=_dt(row.get("updated_at")),
    )


def customer_to_row(customer: Customer) -> Row:
    row: Row = {
        "email": str(customer.email),
        "name": customer.name,
        "phone": customer.phone,
        "address": customer.address.to_dict(),
        "created_at": customer.created_at.isoformat(),
        "updated_at": customer.updated_at.isoformat(),
    }
    return _with_id(row, customer.id)


# --- Orders -------------------------------------------------------------------


def order_item_from_row(row: Row) -> OrderItem:
    return OrderItem(
        id=row["id"],
        order_id=row["order_id"],
        product_id=row["product_id"],
        variant_id=row.get("variant_id"),
        quantity=Quantity(int(row["quantity"])),
        unit_price=Money.of(row["price"], row.get("currency") or BASE_CURRENCY),
    )


def order_item_to_row(item: OrderItem) -> Row:
    row: Row = {
        "order_id": item.order_id,
        "product_id": item.product_id,
        "variant_id": item.variant_id,
        "quantity": item.quantity.value,
        "price": str(item.unit_price.amount),
        "currency": item.unit_price.currency,
    }
    return _with_id(row, item.id)


def order_from_row(row: Row, item_rows: list[Row] | None = None) -> Order:
    return Order(
        id=row["id"],
        customer_id=row["customer_id"],
        total=Money.of(row["total"], row.get("currency") or BASE_CURRENCY),
        payment_method=row.get("payment_method") or "",
        shipping_address=Address.from_dict(row.get("shipping_address")),
        status=OrderStatus(row.get("status") or OrderStatus.PENDING.value),
        items=[order_item_from_row(r) for r in item_rows or []],
        idempotency_key=row.get("idempotency_key"),
        created_at=_dt(row.get("created_at")),
        updated_at=_dt(row.get("updated_at")),
    )


def order_to_row(order: Order) -> Row:
    """Order columns only; items are stored as rows of their own."""
    row: Row = {
        "customer_id": order.customer_id,
        "total": str(order.total.amount),
        "currency": order.total.currency,
        "status": order.status.value,
        "payment_method": order.payment_method,
        "shipping_address": order.shipping_address.to_dict(),
        "idempotency_key": order.idempotency_key,
        "created_at": order.created_at.isoformat(),
        "updated_at": order.updated_at.isoformat(),
    }
    return _with_id(row, order.id)
