"""Data Transfer Objects: plain containers that cross layer boundaries.

Inputs describe what the checkout flow or an admin asked for; outputs
are display-ready views for the CLI.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from shopcore.domain.model.order import Order
from shopcore.domain.model.value_objects import Address, Money


@dataclass(frozen=True)
class CustomerData:
    """Input: customer details captured at checkout."""

    email: str
    name: str
    phone: str = ""
    address: Address = field(default_factory=Address)


@dataclass(frozen=True)
class CheckoutItemSpec:
    """Input: one line of a checkout, priced at the moment of purchase."""

    product_id: str
    quantity: int
    unit_price: Money
    variant_id: str | None = None


@dataclass(frozen=True)
class CartQuote:
    """Output: a priced cart, ready to hand to order placement."""

    items: list[CheckoutItemSpec]
    total: Money


@dataclass(frozen=True)
class OrderItemDTO:
    product_id: str
    variant_id: str | None
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: str
    customer_id: str
    status: str
    payment_method: str
    shipping_address: str
    items: list[OrderItemDTO]
    total: str
    created_at: str


def to_order_dto(order: Order) -> OrderDTO:
    address = order.shipping_address
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_id=order.customer_id,
        status=order.status.value,
        payment_method=order.payment_method,
        shipping_address=", ".join(
            part
            for part in (address.street, address.city, address.state, address.zip_code, address.country)
            if part
        ),
        items=[
            OrderItemDTO(
                product_id=item.product_id,
                variant_id=item.variant_id,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total),
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M UTC"),
    )
