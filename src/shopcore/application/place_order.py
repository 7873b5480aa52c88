"""Application service: Place Order use case (checkout saga).

Turns a checkout into persisted customer, order and order-item rows:

    START -> RESOLVING_CUSTOMER -> CREATING_ORDER -> CREATING_ITEMS -> COMPLETE

with FAILED reachable from every non-terminal state.  Each step finishes
before the next one begins.

Creating the order and creating its items form one unit: if the items
cannot be written, the order row is deleted again, so no order without
items is ever left behind.  Every failure reaches the caller as an
``OrderPlacementError`` whose ``kind`` tells invalid input apart from an
unavailable store.

Placement is not safe to retry blindly.  Callers that may retry (e.g.
after a timeout) should pass an ``idempotency_key``: a placement whose
key was already used returns the order stored the first time, or fails
with a conflict while that first placement is still writing its items.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from enum import Enum

from shopcore.application import mappers
from shopcore.application.customer_resolver import CustomerResolver
from shopcore.application.dto import CheckoutItemSpec, CustomerData
from shopcore.application.notifications import OrderNotifier
from shopcore.application.resources import ResourceType
from shopcore.application.show_resource import ShowResourceHandler
from shopcore.domain.exceptions import (
    STORE_FAILURES,
    ConflictError,
    DomainException,
    PartialFailureError,
    ValidationError,
)
from shopcore.domain.model.customer import Customer
from shopcore.domain.model.order import Order, OrderItem
from shopcore.domain.model.value_objects import Money, Quantity
from shopcore.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)

_ORDERS = ResourceType.ORDERS.value
_ORDER_ITEMS = ResourceType.ORDER_ITEMS.value


class SagaState(Enum):
    START = "start"
    RESOLVING_CUSTOMER = "resolving_customer"
    CREATING_ORDER = "creating_order"
    CREATING_ITEMS = "creating_items"
    COMPLETE = "complete"
    FAILED = "failed"


class PlacementFailure(Enum):
    INVALID_INPUT = "invalid_input"
    CONFLICT = "conflict"
    STORE_UNAVAILABLE = "store_unavailable"
    PARTIAL_FAILURE = "partial_failure"


class OrderPlacementError(DomainException):
    """Order placement failed; nothing partial was surfaced to the caller.

    ``state`` is the step that failed.  ``compensated`` is only False
    when a created order could not be removed again.
    """

    def __init__(
        self,
        message: str,
        kind: PlacementFailure,
        state: SagaState,
        compensated: bool = True,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.state = state
        self.compensated = compensated


class PlaceOrderHandler:

    def __init__(
        self,
        store: RecordStore,
        customer_resolver: CustomerResolver | None = None,
        notifier: OrderNotifier | None = None,
    ) -> None:
        self._store = store
        self._customer_resolver = customer_resolver or CustomerResolver(store)
        self._notifier = notifier

    def handle(
        self,
        customer: CustomerData,
        items: list[CheckoutItemSpec],
        total: Money,
        payment_method: str,
        idempotency_key: str | None = None,
    ) -> Order:
        """Place an order and return it with its persisted items."""
        state = SagaState.START
        try:
            order_items = _build_items(items)
            Order.check_placement(order_items, total, payment_method)

            if idempotency_key:
                replayed = self._find_replay(idempotency_key)
                if replayed is not None:
                    return replayed

            state = self._advance(state, SagaState.RESOLVING_CUSTOMER)
            resolved = self._customer_resolver.resolve_or_create(customer.email, customer)

            state = self._advance(state, SagaState.CREATING_ORDER)
            try:
                order = self._create_order(
                    resolved, order_items, total, payment_method, idempotency_key
                )
            except ConflictError:
                # Another placement with the same key got its order row in first.
                replayed = self._find_replay(idempotency_key) if idempotency_key else None
                if replayed is None:
                    raise
                return replayed

            state = self._advance(state, SagaState.CREATING_ITEMS)
            order.items = self._create_items(order)

            state = self._advance(state, SagaState.COMPLETE)
        except (DomainException, *STORE_FAILURES) as exc:
            raise self._fail(state, exc) from exc

        logger.info(
            "Placed order %s for customer %s (%d items, total %s)",
            order.id,
            resolved.id,
            len(order.items),
            order.total,
        )
        self._notify(order, resolved)
        return order

    # --- Steps ----------------------------------------------------------------

    def _create_order(
        self,
        customer: Customer,
        items: list[OrderItem],
        total: Money,
        payment_method: str,
        idempotency_key: str | None,
    ) -> Order:
        order = Order.create(
            customer_id=customer.id,  # type: ignore[arg-type]
            items=items,
            total=total,
            payment_method=payment_method,
            # Address is immutable, so the order keeps today's value.
            shipping_address=customer.address,
            idempotency_key=idempotency_key,
        )
        row = self._store.insert(_ORDERS, mappers.order_to_row(order))
        order.id = row["id"]
        return order

    def _create_items(self, order: Order) -> list[OrderItem]:
        bound = [item.for_order(order.id) for item in order.items]  # type: ignore[arg-type]
        rows = [mappers.order_item_to_row(item) for item in bound]
        try:
            created = self._store.insert_many(_ORDER_ITEMS, rows)
        except (ConflictError, *STORE_FAILURES) as exc:
            compensated = self._compensate(order.id)  # type: ignore[arg-type]
            raise PartialFailureError(
                f"Order {order.id} was created but its items were not: {exc}",
                compensated=compensated,
            ) from exc
        return [replace(item, id=row["id"]) for item, row in zip(bound, created)]

    def _compensate(self, order_id: str) -> bool:
        """Delete an order whose items could not be written."""
        try:
            self._store.delete(_ORDERS, order_id)
        except STORE_FAILURES as exc:
            logger.critical(
                "Could not remove order %s after item creation failed; "
                "it has no items and must be cleaned up: %s",
                order_id,
                exc,
            )
            return False
        logger.error("Removed order %s after item creation failed", order_id)
        return True

    def _find_replay(self, idempotency_key: str) -> Order | None:
        row = self._store.find_one(_ORDERS, {"idempotency_key": idempotency_key})
        if row is None:
            return None
        order = ShowResourceHandler(self._store).handle(ResourceType.ORDERS, row["id"])
        # An order without items is still being placed, or is about to be removed.
        if not order.items:
            raise ConflictError(
                f"Placement with key {idempotency_key!r} is still in progress"
            )
        logger.warning(
            "Placement with key %r already produced order %s; returning it",
            idempotency_key,
            order.id,
        )
        return order

    def _notify(self, order: Order, customer: Customer) -> None:
        if self._notifier is None:
            return
        try:
            self._notifier.order_placed(order, customer)
        except Exception:
            # The order stands; a lost notification must not undo it.
            logger.exception("Order %s placed but notification failed", order.id)

    # --- State bookkeeping ----------------------------------------------------

    @staticmethod
    def _advance(current: SagaState, target: SagaState) -> SagaState:
        logger.debug("Order placement: %s -> %s", current.value, target.value)
        return target

    @staticmethod
    def _fail(state: SagaState, exc: BaseException) -> OrderPlacementError:
        compensated = True
        if isinstance(exc, PartialFailureError):
            kind = PlacementFailure.PARTIAL_FAILURE
            compensated = exc.compensated
        elif isinstance(exc, ValidationError):
            kind = PlacementFailure.INVALID_INPUT
        elif isinstance(exc, ConflictError):
            kind = PlacementFailure.CONFLICT
        elif isinstance(exc, STORE_FAILURES):
            kind = PlacementFailure.STORE_UNAVAILABLE
        else:
            kind = PlacementFailure.INVALID_INPUT

        logger.error(
            "Order placement failed in %s (%s): %s -> %s",
            state.value,
            kind.value,
            exc,
            SagaState.FAILED.value,
        )
        return OrderPlacementError(
            f"Order placement failed while {state.value.replace('_', ' ')}: {exc}",
            kind=kind,
            state=state,
            compensated=compensated,
        )


def _build_items(specs: list[CheckoutItemSpec]) -> list[OrderItem]:
    items: list[OrderItem] = []
    for spec in specs:
        if not spec.product_id:
            raise ValidationError("Every order item must reference a product")
        items.append(
            OrderItem(
                product_id=spec.product_id,
                variant_id=spec.variant_id,
                quantity=Quantity(spec.quantity),
                unit_price=spec.unit_price,  # <-- price snapshot
            )
        )
    return items
