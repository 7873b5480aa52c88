"""Composition root: builds the store and the handlers the CLI needs.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

import logging
from pathlib import Path

from shopcore.application.notifications import LoggingOrderNotifier
from shopcore.application.place_order import PlaceOrderHandler
from shopcore.domain.repository.record_store import RecordStore
from shopcore.domain.service.currency_converter import CurrencyConverter
from shopcore.domain.service.price_resolver import PriceResolver
from shopcore.infrastructure.persistence.json_record_store import JsonRecordStore

# Overridden by --data-dir / SHOPCORE_DATA_DIR.
DEFAULT_DATA_DIR = Path("data")

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Columns the store must keep unique.
UNIQUE_KEYS: dict[str, tuple[str, ...]] = {
    "customers": ("email",),
    "orders": ("idempotency_key",),
}


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


def record_store(data_dir: Path = DEFAULT_DATA_DIR) -> JsonRecordStore:
    return JsonRecordStore(data_dir, unique_keys=UNIQUE_KEYS)


def price_resolver() -> PriceResolver:
    return PriceResolver(CurrencyConverter())


def place_order_handler(store: RecordStore) -> PlaceOrderHandler:
    return PlaceOrderHandler(store, notifier=LoggingOrderNotifier())
