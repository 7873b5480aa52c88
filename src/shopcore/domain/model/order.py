"""Order aggregate.

An Order owns its items.  Both carry snapshot fields: the shipping
address and every unit price are copied at placement time and never
follow later edits to the customer or the catalog.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from decimal import Decimal
from enum import Enum

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.value_objects import Address, Money, Quantity


class OrderStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (OrderStatus.DELIVERED, OrderStatus.CANCELLED)

    @staticmethod
    def parse(raw: str) -> OrderStatus:
        try:
            return OrderStatus((raw or "").strip().lower())
        except ValueError as exc:
            allowed = "|".join(s.value for s in OrderStatus)
            raise ValidationError(f"Invalid order status {raw!r} (expected {allowed})") from exc


@dataclass(frozen=True)
class OrderItem:
    """One purchased line.  Created once, at placement, never mutated."""

    product_id: str
    quantity: Quantity
    unit_price: Money  # locked at purchase time
    variant_id: str | None = None
    order_id: str | None = None
    id: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def for_order(self, order_id: str) -> OrderItem:
        return replace(self, order_id=order_id)


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
MAX_ORDER_ITEMS = 50
TOTAL_TOLERANCE = Decimal("0.01")


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders; the plain constructor is kept
    simple so persisted orders can be reconstituted without re-validation.
    """

    id: str | None
    customer_id: str
    total: Money
    payment_method: str
    shipping_address: Address
    status: OrderStatus = OrderStatus.PENDING
    items: list[OrderItem] = field(default_factory=list)
    idempotency_key: str | None = None
    created_at: datetime = field(default_factory=_now)
    updated_at: datetime = field(default_factory=_now)

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_id: str,
        items: list[OrderItem],
        total: Money,
        payment_method: str,
        shipping_address: Address,
        idempotency_key: str | None = None,
    ) -> Order:
        """Create a pending order, enforcing all invariants.

        The stated ``total`` must match the sum of the items' line totals
        within ``TOTAL_TOLERANCE``.
        """
        if not customer_id:
            raise ValidationError("Order must reference a customer")
        Order.check_placement(items, total, payment_method)

        return Order(
            id=None,
            customer_id=customer_id,
            total=total,
            payment_method=payment_method.strip(),
            shipping_address=shipping_address,
            items=list(items),
            idempotency_key=idempotency_key,
        )

    @staticmethod
    def check_placement(items: list[OrderItem], total: Money, payment_method: str) -> None:
        """Validate everything about a new order that does not need a customer."""
        if not payment_method or not payment_method.strip():
            raise ValidationError("Payment method is required")
        if not items:
            raise ValidationError("Order must contain at least one item")
        if len(items) > MAX_ORDER_ITEMS:
            raise ValidationError(f"Maximum {MAX_ORDER_ITEMS} items per order")

        items_total = _sum_items(items, total.currency)
        if abs(items_total.amount - total.amount) > TOTAL_TOLERANCE:
            raise ValidationError(
                f"Order total {total} does not match sum of items {items_total}"
            )

    # --- State transitions ----------------------------------------------------

    def change_status(self, new_status: OrderStatus) -> None:
        """Move the order to *new_status*.

        Delivered and cancelled orders are final.
        """
        if self.status.is_terminal:
            raise ValidationError(
                f"Cannot change status of a {self.status.value} order"
            )
        if new_status == self.status:
            raise ValidationError(f"Order is already {self.status.value}")
        self.status = new_status
        self.updated_at = _now()

    # --- Computed properties --------------------------------------------------

    @property
    def items_total(self) -> Money:
        return _sum_items(self.items, self.total.currency)

    @property
    def item_count(self) -> int:
        return sum(item.quantity.value for item in self.items)


def _sum_items(items: list[OrderItem], currency: str) -> Money:
    result = Money.zero(currency)
    for item in items:
        result = result + item.line_total
    return result
