"""Domain service: Order Number Formatter.

Renders the customer-facing order number from a mask.  The number may
depend on the order's persisted ID, so it can only be generated after the
order row exists.

Supported tokens::

    {ID}    order ID
    {YYYY}  four-digit year of the order's creation date
    {YY}    two-digit year
    {MM}    two-digit month
    {DD}    two-digit day
"""

from __future__ import annotations

from polycommerce.domain.exceptions import ValidationError
from polycommerce.domain.model.order import Order

DEFAULT_MASK = "{ID}"


class OrderNumberFormatter:

    def __init__(self, mask: str = DEFAULT_MASK) -> None:
        if not mask or not mask.strip():
            raise ValidationError("Order number mask cannot be empty")
        self._mask = mask.strip()

    @property
    def mask(self) -> str:
        return self._mask

    def generate(self, order: Order) -> str:
        if order.id is None:
            raise ValidationError("Cannot number an order before it is persisted")

        created = order.created_on
        replacements = {
            "{ID}": str(order.id),
            "{YYYY}": f"{created.year:04d}",
            "{YY}": f"{created.year % 100:02d}",
            "{MM}": f"{created.month:02d}",
            "{DD}": f"{created.day:02d}",
        }
        number = self._mask
        for token, value in replacements.items():
            number = number.replace(token, value)
        return number
