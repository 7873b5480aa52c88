"""Application service: fetch one record by id (query)."""

from __future__ import annotations

from shopcore.application import mappers
from shopcore.application.resources import ResourceType, strategy_for
from shopcore.domain.exceptions import EntityNotFoundError
from shopcore.domain.model.order import MAX_ORDER_ITEMS, Order
from shopcore.domain.repository.record_store import RecordStore, Row


class ShowResourceHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(self, resource: str | ResourceType, resource_id: str):
        strategy = strategy_for(resource)
        row = self._store.find_one(strategy.name, {"id": resource_id})
        if row is None:
            raise EntityNotFoundError(f"{strategy.name} '{resource_id}' not found")

        # Orders are shown with their items.
        if strategy.resource is ResourceType.ORDERS:
            return self._load_order(row)
        return strategy.to_domain(row)

    def _load_order(self, row: Row) -> Order:
        item_rows, _ = self._store.list_page(
            ResourceType.ORDER_ITEMS.value, {"order_id": row["id"]}, 0, MAX_ORDER_ITEMS
        )
        convert = mappers.checked(
            ResourceType.ORDERS.value, lambda r: mappers.order_from_row(r, item_rows)
        )
        return convert(row)
