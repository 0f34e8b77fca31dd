"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.value_objects import Money, Quantity


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float_goes_through_str(self):
        # Legacy catalogs stored prices as JSON numbers.
        assert Money.of(149.5).amount == Decimal("149.5")

    def test_of_factory_from_int(self):
        assert Money.of(10).amount == Decimal("10")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    def test_negative_string_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money.of("-0.01")

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            Money.of(True)

    def test_non_finite_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            Money.of("NaN")

    def test_float_amount_rejected_in_constructor(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(10.5)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_is_type_error(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_zero(self):
        assert Money.zero() == Money.of("0")

    def test_str_formats_two_decimals(self):
        assert str(Money.of("2499.99")) == "$2499.99"
        assert str(Money.of("5")) == "$5.00"

    def test_str_rounds_half_up(self):
        assert str(Money.of("0.125")) == "$0.13"

    def test_ordering(self):
        assert Money.of("1") < Money.of("2")

    def test_immutable(self):
        m = Money.of("1")
        with pytest.raises(AttributeError):
            m.amount = Decimal("2")


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_valid(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(-2)

    def test_non_int_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)

    def test_bool_rejected(self):
        with pytest.raises(ValidationError):
            Quantity(True)
