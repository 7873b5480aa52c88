"""Application service: admin deletion of catalog records and customers.

A record that others still point at cannot be deleted: a category with
subcategories or products, a product with variants, a customer with
orders.  Orders are never deleted here; they are cancelled instead.
"""

from __future__ import annotations

import logging

from shopcore.application.resources import ResourceType
from shopcore.domain.exceptions import ConflictError, EntityNotFoundError, ValidationError
from shopcore.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)

# resource -> [(dependent resource, column referencing it)]
_DEPENDENTS: dict[ResourceType, list[tuple[ResourceType, str]]] = {
    ResourceType.PRODUCTS: [(ResourceType.VARIANTS, "product_id")],
    ResourceType.VARIANTS: [],
    ResourceType.CATEGORIES: [
        (ResourceType.SUBCATEGORIES, "category_id"),
        (ResourceType.PRODUCTS, "category_id"),
    ],
    ResourceType.SUBCATEGORIES: [(ResourceType.PRODUCTS, "subcategory_id")],
    ResourceType.CUSTOMERS: [(ResourceType.ORDERS, "customer_id")],
}


class DeleteResourceHandler:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def handle(self, resource: str | ResourceType, resource_id: str) -> None:
        resource = ResourceType.parse(resource)
        dependents = _DEPENDENTS.get(resource)
        if dependents is None:
            raise ValidationError(f"{resource.value} cannot be deleted")

        for dependent, column in dependents:
            _, count = self._store.list_page(dependent.value, {column: resource_id}, 0, 1)
            if count:
                raise ConflictError(
                    f"Cannot delete {resource.value} '{resource_id}': "
                    f"{count} {dependent.value} still reference it"
                )

        if not self._store.delete(resource.value, resource_id):
            raise EntityNotFoundError(f"{resource.value} '{resource_id}' not found")
        logger.info("Deleted %s %s", resource.value, resource_id)
