"""Application service: admin changes to an order's status."""

from __future__ import annotations

import logging

from shopcore.application.resources import ResourceType
from shopcore.application.show_resource import ShowResourceHandler
from shopcore.domain.model.order import Order, OrderStatus
from shopcore.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(self, order_id: str, status: str | OrderStatus) -> Order:
        """Move an order to *status*.

        Items, prices and the shipping address are left untouched.
        """
        new_status = status if isinstance(status, OrderStatus) else OrderStatus.parse(status)
        order: Order = ShowResourceHandler(self._store).handle(ResourceType.ORDERS, order_id)

        previous = order.status
        order.change_status(new_status)
        self._store.update(
            ResourceType.ORDERS.value,
            order_id,
            {"status": order.status.value, "updated_at": order.updated_at.isoformat()},
        )
        logger.info("Order %s: %s -> %s", order_id, previous.value, order.status.value)
        return order
