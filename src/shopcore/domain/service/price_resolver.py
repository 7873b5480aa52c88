"""Domain service: regional price resolution.

Decides which price a shopper sees for a catalog item in a given
currency.  The fallback chain is:

  1. an explicit regional price for that currency, used verbatim;
  2. the base price, converted from the base currency;
  3. zero, flagged as ``PriceSource.MISSING`` so it is never mistaken
     for a free item.

A zero amount in any price field counts as unset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from shopcore.domain.model.catalog import CatalogItem
from shopcore.domain.model.currency import BASE_CURRENCY, CURRENCIES, currency_info
from shopcore.domain.model.value_objects import Money
from shopcore.domain.service.currency_converter import CurrencyConverter

logger = logging.getLogger(__name__)


class PriceSource(Enum):
    REGIONAL = "regional"
    BASE = "base"
    CONVERTED = "converted"
    MISSING = "missing"


@dataclass(frozen=True)
class ResolvedPrice:
    money: Money
    source: PriceSource

    @property
    def is_missing(self) -> bool:
        return self.source is PriceSource.MISSING


class PriceResolver:

    def __init__(self, converter: CurrencyConverter | None = None) -> None:
        self._converter = converter or CurrencyConverter()

    def resolve(self, item: CatalogItem, currency: str) -> ResolvedPrice:
        currency_info(currency)

        regional = item.regional_price(currency)
        if regional is not None:
            return ResolvedPrice(regional, PriceSource.REGIONAL)

        base = item.base_price
        if base is not None:
            if currency == BASE_CURRENCY:
                return ResolvedPrice(base, PriceSource.BASE)
            return ResolvedPrice(
                self._converter.convert(base, currency), PriceSource.CONVERTED
            )

        logger.warning(
            "No usable price for %s %r (id=%s) in %s; resolving to zero",
            type(item).__name__,
            item.name,
            item.id,
            currency,
        )
        return ResolvedPrice(Money.zero(currency), PriceSource.MISSING)

    def all_prices(self, item: CatalogItem) -> dict[str, ResolvedPrice]:
        """Resolved price of *item* in every supported currency."""
        return {code: self.resolve(item, code) for code in CURRENCIES}

    def format_price(self, item: CatalogItem, currency: str) -> str:
        """Display string for *item*, e.g. ``₦1,500,000`` or ``$10.00``."""
        return str(self.resolve(item, currency).money)
