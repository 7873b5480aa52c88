"""Domain service: currency conversion over the static rate table."""

from __future__ import annotations

from decimal import Decimal

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.currency import CURRENCIES, CurrencyInfo
from shopcore.domain.model.value_objects import Money


class CurrencyConverter:
    """Converts money between supported currencies via the base currency.

    A converter can be given its own rate table; it defaults to the
    module-level one.
    """

    def __init__(self, currencies: dict[str, CurrencyInfo] | None = None) -> None:
        self._currencies = CURRENCIES if currencies is None else currencies

    def rate(self, code: str) -> Decimal:
        info = self._currencies.get(code)
        if info is None:
            raise ValidationError(f"No exchange rate for currency {code!r}")
        return info.exchange_rate

    def convert(self, money: Money, to_currency: str) -> Money:
        """Return *money* expressed in *to_currency*, rounded to minor units."""
        if money.currency == to_currency:
            return money
        base_amount = money.amount / self.rate(money.currency)
        return Money(base_amount * self.rate(to_currency), to_currency).rounded()
