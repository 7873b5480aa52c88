"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from shopcore.domain.exceptions import ValidationError
from shopcore.domain.model.value_objects import Address, Email, Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation_defaults_to_usd(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "USD"

    def test_of_factory_from_string(self):
        assert Money.of("25.99", "GHS").amount == Decimal("25.99")

    def test_of_factory_rejects_garbage(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("ten dollars")

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)  # type: ignore[arg-type]

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_unsupported_currency_rejected(self):
        with pytest.raises(ValidationError, match="Unsupported currency"):
            Money(Decimal("10"), "EUR")

    def test_addition_and_multiplication(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money.of("10") + Money.of("5", "NGN")

    def test_subtraction_going_negative_rejected(self):
        with pytest.raises(ValidationError, match="negative amount"):
            Money.of("5") - Money.of("10")

    def test_rounded_is_half_up(self):
        assert Money.of("0.125").rounded().amount == Decimal("0.13")
        assert Money.of("0.124").rounded().amount == Decimal("0.12")

    def test_str_uses_symbol_and_grouping(self):
        assert str(Money.of("10")) == "$10.00"
        assert str(Money.of("1234.5")) == "$1,234.50"
        assert str(Money.of("12.5", "GHS")) == "₵12.50"

    def test_naira_is_shown_without_decimals(self):
        assert str(Money.of("1500000", "NGN")) == "₦1,500,000"
        assert str(Money.of("5000.50", "NGN")) == "₦5,001"

    def test_is_zero(self):
        assert Money.zero("NGN").is_zero
        assert not Money.of("0.01").is_zero


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid(self):
        assert Quantity(5).value == 5

    @pytest.mark.parametrize("bad", [0, -1])
    def test_non_positive_rejected(self, bad):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(bad)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


# ── Email / Address ──────────────────────────────────────────────────────────


class TestEmail:

    def test_of_trims_and_lowercases(self):
        assert Email.of("  Ada@Example.COM ") == Email("ada@example.com")

    def test_blank_rejected(self):
        with pytest.raises(ValidationError, match="Email is required"):
            Email.of("   ")

    def test_malformed_rejected(self):
        with pytest.raises(ValidationError, match="Invalid email"):
            Email.of("not-an-email")

    def test_unnormalized_value_rejected(self):
        with pytest.raises(ValidationError, match="not normalized"):
            Email("Ada@example.com")


class TestAddress:

    def test_from_dict_accepts_camel_case_zip(self):
        address = Address.from_dict({"street": "1 Marina", "zipCode": "100001", "country": "NG"})
        assert address.zip_code == "100001"
        assert address.city == ""

    def test_from_dict_none_is_empty(self):
        assert Address.from_dict(None) == Address()

    def test_to_dict_round_trip(self):
        address = Address("1 Marina", "Lagos", "LA", "100001", "NG")
        assert Address.from_dict(address.to_dict()) == address
