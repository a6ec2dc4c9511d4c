"""Amounts and counts carried on imported orders.

Both types are frozen and check themselves on construction, so an order
line with a zero quantity or a total of NaN never reaches a repository.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation

from polycommerce.domain.exceptions import ValidationError


@dataclass(frozen=True)
class Money:
    """An exact amount in a store currency.

    The sales channel has already done all pricing and tax, so amounts are
    kept exactly as submitted (any sign, any number of decimal places) and
    never rounded, converted or combined here.  Refunds and adjustments
    arrive as negative amounts.  ``currency`` is the ISO code of
    the store's primary currency.
    """

    amount: Decimal
    currency: str

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be finite, got {self.amount}")
        if not self.currency or not self.currency.strip():
            raise ValidationError("Money requires a currency code")

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    @classmethod
    def of(cls, amount: str | int | Decimal, currency: str) -> Money:
        """Build from anything ``Decimal`` can parse, without going through float."""
        try:
            value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc
        return cls(value, currency)

    @classmethod
    def zero(cls, currency: str) -> Money:
        return cls(Decimal("0"), currency)


@dataclass(frozen=True)
class Quantity:
    """Units on one order line.

    Negative for a return line, which puts stock back.  Never zero.
    """

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass; reject it explicitly
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(
                f"Quantity must be an integer, got {type(self.value).__name__}"
            )
        if self.value == 0:
            raise ValidationError("Quantity cannot be zero")

    def __str__(self) -> str:
        return str(self.value)
