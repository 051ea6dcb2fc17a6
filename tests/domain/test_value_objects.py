"""Unit tests for Value Objects and the role-to-pool mapping."""

from decimal import Decimal

import pytest

from agrimarket.domain.exceptions import InvalidRequest, ValidationError
from agrimarket.domain.model.stock_pool import StockPool, pool_for
from agrimarket.domain.model.user import UserRole
from agrimarket.domain.model.value_objects import Money, Quantity, ShippingAddress
from tests.fakes import ADDRESS


class TestMoney:

    def test_create_from_string(self):
        m = Money.of("15.50")
        assert m.amount == Decimal("15.50")
        assert m.currency == "INR"

    def test_negative_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1.00"))

    def test_float_amount_rejected(self):
        with pytest.raises(ValidationError, match="must be a Decimal"):
            Money(15.0)  # type: ignore[arg-type]

    def test_garbage_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_addition(self):
        assert Money.of("10.00") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication(self):
        assert Money.of("15.00") * 3 == Money.of("45.00")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("15.00") * 1.5  # type: ignore[operator]

    def test_mixed_currency_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "INR") + Money(Decimal("1"), "USD")

    def test_display(self):
        assert str(Money.of("170")) == "Rs. 170.00"


class TestQuantity:

    def test_positive_accepted(self):
        assert Quantity(3).value == 3

    @pytest.mark.parametrize("value", [0, -1])
    def test_non_positive_rejected(self, value):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(value)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(2.5)  # type: ignore[arg-type]

    def test_bool_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(True)


class TestShippingAddress:

    def test_from_dict(self):
        address = ShippingAddress.from_dict(ADDRESS)
        assert address.city == "Nashik"
        assert address.to_dict() == ADDRESS

    def test_missing_address_rejected(self):
        with pytest.raises(InvalidRequest, match="Shipping address is required"):
            ShippingAddress.from_dict(None)

    def test_blank_field_rejected(self):
        with pytest.raises(ValidationError, match="pincode is required"):
            ShippingAddress.from_dict({**ADDRESS, "pincode": "  "})

    def test_missing_field_rejected(self):
        raw = {k: v for k, v in ADDRESS.items() if k != "phone"}
        with pytest.raises(ValidationError, match="phone is required"):
            ShippingAddress.from_dict(raw)


class TestPoolFor:

    def test_industrial_role_draws_industrial_stock(self):
        assert pool_for(UserRole.INDUSTRIAL) == StockPool.INDUSTRIAL

    def test_individual_role_draws_local_stock(self):
        assert pool_for(UserRole.INDIVIDUAL) == StockPool.LOCAL

    def test_any_other_role_draws_local_stock(self):
        assert pool_for(UserRole.FARMER) == StockPool.LOCAL
