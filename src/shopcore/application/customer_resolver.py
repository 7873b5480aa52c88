"""Application service: idempotent find-or-create of customers by e-mail.

Resolving the same normalized e-mail any number of times yields the same
customer.  An existing customer is returned unchanged; checkout data
never overwrites it.  The create branch goes through the store's
``find_or_insert`` so two simultaneous checkouts with a new e-mail still
end up with a single customer row.
"""

from __future__ import annotations

import logging

from shopcore.application import mappers
from shopcore.application.dto import CustomerData
from shopcore.application.resources import ResourceType
from shopcore.domain.model.customer import Customer
from shopcore.domain.model.value_objects import Email
from shopcore.domain.repository.record_store import RecordStore

logger = logging.getLogger(__name__)

_CUSTOMERS = ResourceType.CUSTOMERS.value
_to_customer = mappers.checked(_CUSTOMERS, mappers.customer_from_row)


class CustomerResolver:

    def __init__(self, store: RecordStore) -> None:
        self._store = store

    def resolve_or_create(self, email: str, candidate: CustomerData) -> Customer:
        normalized = str(Email.of(email))

        row = self._store.find_one(_CUSTOMERS, {"email": normalized})
        if row is not None:
            return _to_customer(row)

        new_customer = Customer.create(
            email=normalized,
            name=candidate.name,
            phone=candidate.phone,
            address=candidate.address,
        )
        row, created = self._store.find_or_insert(
            _CUSTOMERS, "email", normalized, mappers.customer_to_row(new_customer)
        )
        customer = _to_customer(row)
        if created:
            logger.info("Created customer %s for %s", customer.id, normalized)
        else:
            logger.warning(
                "Customer %s for %s was created concurrently; reusing it",
                customer.id,
                normalized,
            )
        return customer
