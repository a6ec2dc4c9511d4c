"""Unit tests for Money and Quantity."""

from decimal import Decimal

import pytest

from polycommerce.domain.exceptions import ValidationError
from polycommerce.domain.model.value_objects import Money, Quantity


class TestMoney:

    def test_amount_kept_exactly(self):
        price = Money(Decimal("19.9950"), "NZD")
        assert price.amount == Decimal("19.9950")
        assert price.currency == "NZD"

    @pytest.mark.parametrize("raw", ["25.99", 25, Decimal("25.99")])
    def test_of_accepts_str_int_and_decimal(self, raw):
        assert Money.of(raw, "AUD").amount == Decimal(str(raw))

    def test_of_rejects_unparseable_text(self):
        with pytest.raises(ValidationError, match="Invalid money amount: 'twelve'"):
            Money.of("twelve", "NZD")

    def test_zero(self):
        assert Money.zero("AUD") == Money(Decimal("0"), "AUD")

    def test_negative_amount_kept_verbatim(self):
        refund = Money.of("-12.3460", "NZD")
        assert refund.amount == Decimal("-12.3460")
        assert str(refund) == "-12.35 NZD"

    @pytest.mark.parametrize(
        "amount, message",
        [
            (Decimal("NaN"), "must be finite"),
            (Decimal("Infinity"), "must be finite"),
            (10.5, "must be a Decimal, got float"),
        ],
    )
    def test_bad_amounts(self, amount, message):
        with pytest.raises(ValidationError, match=message):
            Money(amount, "NZD")

    @pytest.mark.parametrize("currency", ["", "  "])
    def test_currency_required(self, currency):
        with pytest.raises(ValidationError, match="currency code"):
            Money.zero(currency)

    def test_display_rounds_for_humans_only(self):
        price = Money.of("28.7549", "NZD")
        assert str(price) == "28.75 NZD"
        assert price.amount == Decimal("28.7549")

    def test_equality_includes_currency(self):
        assert Money.of("5", "NZD") != Money.of("5", "AUD")


class TestQuantity:

    def test_single_unit(self):
        assert Quantity(1).value == 1

    def test_return_line_is_negative(self):
        assert Quantity(-3).value == -3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="cannot be zero"):
            Quantity(0)

    @pytest.mark.parametrize("value", [True, 2.0, "2"])
    def test_non_integer_rejected(self, value):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(value)

    def test_str(self):
        assert str(Quantity(7)) == "7"
