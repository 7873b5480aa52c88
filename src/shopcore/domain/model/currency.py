"""Supported currencies and their static exchange-rate table.

Rates are expressed as units of the currency per one unit of the base
currency (USD).  The table is static on purpose: prices shown in the
admin console and at checkout must be reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from shopcore.domain.exceptions import ValidationError


@dataclass(frozen=True)
class CurrencyInfo:
    code: str
    symbol: str
    name: str
    exchange_rate: Decimal  # units per 1 USD
    display_decimals: int


BASE_CURRENCY = "USD"

CURRENCIES: dict[str, CurrencyInfo] = {
    "USD": CurrencyInfo("USD", "$", "US Dollar", Decimal("1"), 2),
    "NGN": CurrencyInfo("NGN", "₦", "Nigerian Naira", Decimal("1500"), 0),
    "GHS": CurrencyInfo("GHS", "₵", "Ghanaian Cedi", Decimal("12"), 2),
}

# Currencies that may carry an explicit regional price on a catalog item.
REGIONAL_CURRENCIES = ("NGN", "GHS")

_COUNTRY_CURRENCIES = {
    "NG": "NGN",
    "GH": "GHS",
}


def currency_info(code: str) -> CurrencyInfo:
    """Return the table entry for *code*, or raise ValidationError."""
    info = CURRENCIES.get(code)
    if info is None:
        raise ValidationError(
            f"Unsupported currency {code!r} "
            f"(expected one of {', '.join(sorted(CURRENCIES))})"
        )
    return info


def normalize_currency(code: str) -> str:
    """Upper-case and validate a user-supplied currency code."""
    normalized = (code or "").strip().upper()
    currency_info(normalized)
    return normalized


def currency_for_country(country_code: str | None) -> str:
    """Pick the display currency for a visitor's country.

    Unknown or undetected locations fall back to the base currency.
    """
    if not country_code:
        return BASE_CURRENCY
    return _COUNTRY_CURRENCIES.get(country_code.strip().upper(), BASE_CURRENCY)
