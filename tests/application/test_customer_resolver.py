"""Integration tests for customer find-or-create."""

import logging
import threading

import pytest

from shopcore.application.customer_resolver import CustomerResolver
from shopcore.application.dto import CustomerData
from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.value_objects import Address
from shopcore.infrastructure.bootstrap import UNIQUE_KEYS
from shopcore.infrastructure.persistence.memory_record_store import InMemoryRecordStore
from tests.fakes import FakeRecordStore


def _data(email: str = "ada@example.com", name: str = "Ada", city: str = "Lagos") -> CustomerData:
    return CustomerData(email=email, name=name, address=Address(city=city))


class TestResolveOrCreate:

    def test_creates_new_customer(self):
        store = FakeRecordStore()
        customer = CustomerResolver(store).resolve_or_create("ada@example.com", _data())
        assert customer.id == "1"
        assert customer.address.city == "Lagos"
        assert len(store.rows("customers")) == 1

    def test_same_email_twice_yields_same_customer(self):
        store = FakeRecordStore()
        resolver = CustomerResolver(store)
        first = resolver.resolve_or_create("ada@example.com", _data())
        second = resolver.resolve_or_create("ada@example.com", _data())
        assert first.id == second.id
        assert len(store.rows("customers")) == 1

    def test_email_is_normalized_before_lookup(self):
        store = FakeRecordStore()
        resolver = CustomerResolver(store)
        first = resolver.resolve_or_create("ada@example.com", _data())
        second = resolver.resolve_or_create("  ADA@Example.COM ", _data())
        assert second.id == first.id
        assert store.rows("customers")[0]["email"] == "ada@example.com"

    def test_existing_customer_is_not_overwritten(self):
        store = FakeRecordStore()
        resolver = CustomerResolver(store)
        resolver.resolve_or_create("ada@example.com", _data(name="Ada", city="Lagos"))
        again = resolver.resolve_or_create("ada@example.com", _data(name="Someone Else", city="Accra"))
        assert again.name == "Ada"
        assert again.address.city == "Lagos"

    def test_blank_email_rejected(self):
        with pytest.raises(ValidationError, match="Email is required"):
            CustomerResolver(FakeRecordStore()).resolve_or_create("  ", _data())

    def test_concurrent_checkouts_create_one_customer(self):
        store = InMemoryRecordStore(unique_keys=UNIQUE_KEYS)
        resolver = CustomerResolver(store)
        ids: list[str] = []
        barrier = threading.Barrier(8)

        def checkout() -> None:
            barrier.wait()
            ids.append(resolver.resolve_or_create("race@example.com", _data("race@example.com")).id)

        threads = [threading.Thread(target=checkout) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(set(ids)) == 1
        assert store.count("customers") == 1


class TestConflictFallback:
    """The generic find_or_insert re-reads when the insert hits a duplicate."""

    def test_lost_race_returns_the_winner(self, caplog):
        store = _RacingStore()
        with caplog.at_level(logging.WARNING):
            customer = CustomerResolver(store).resolve_or_create("ada@example.com", _data())
        assert customer.name == "Winner"
        assert "created concurrently" in caplog.text


class _RacingStore(FakeRecordStore):
    """Simulates another checkout inserting the customer between read and write."""

    def __init__(self) -> None:
        super().__init__()
        self._raced = False

    def find_or_insert(self, resource, key, value, row):
        # Bypass the atomic in-memory override to exercise the generic path.
        return super(InMemoryRecordStore, self).find_or_insert(resource, key, value, row)

    def insert(self, resource, row):
        if resource == "customers" and not self._raced:
            self._raced = True
            super().insert(resource, {**row, "name": "Winner"})
        return super().insert(resource, row)
