"""Port for side effects that follow a successfully placed order.

Notifiers run only after an order is complete.  Sending the actual
e-mails is the job of whatever implementation the application wires in.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from shopcore.domain.model.customer import Customer
from shopcore.domain.model.order import Order

logger = logging.getLogger(__name__)


class OrderNotifier(ABC):

    @abstractmethod
    def order_placed(self, order: Order, customer: Customer) -> None:
        """Tell interested parties that *order* was placed."""


class LoggingOrderNotifier(OrderNotifier):
    """Default notifier: records the event in the application log."""

    def order_placed(self, order: Order, customer: Customer) -> None:
        logger.info(
            "Order %s placed by %s: %d unit(s), total %s",
            order.id,
            customer.email,
            order.item_count,
            order.total,
        )
