"""Plain containers passed between the adapters and the use cases.

The submission DTOs carry an order exactly as the sales channel sent it,
already decoded by an adapter (HTTP or CLI).  They are deliberately
permissive: presence and status-code checks belong to the OrderAssembler
so every adapter gets the same error messages.
"""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from decimal import Decimal

from polycommerce.domain.exceptions import ErrorKind


@dataclass(frozen=True)
class SubmittedAddress:
    first_name: str | None = None
    last_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    phone_number: str | None = None
    company: str | None = None
    zip_postal_code: str | None = None
    two_letter_country_code: str | None = None


@dataclass(frozen=True)
class SubmittedOrderItem:
    """Input: one sold line, referencing a catalog product by its ID."""

    external_product_id: int
    quantity: int
    unit_price_incl_tax: Decimal = Decimal("0")
    unit_price_excl_tax: Decimal = Decimal("0")
    price_incl_tax: Decimal = Decimal("0")
    price_excl_tax: Decimal = Decimal("0")
    item_weight: Decimal | None = None


@dataclass(frozen=True)
class OrderSubmission:
    """Input: a completed sale as reported by the sales channel."""

    email: str | None = None
    address: SubmittedAddress | None = None
    order_items: list[SubmittedOrderItem] | None = None
    order_subtotal_incl_tax: Decimal = Decimal("0")
    order_subtotal_excl_tax: Decimal = Decimal("0")
    order_shipping_total_incl_tax: Decimal = Decimal("0")
    order_shipping_total_excl_tax: Decimal = Decimal("0")
    order_total: Decimal = Decimal("0")
    payment_status_id: int | None = None
    order_status_id: int | None = None
    payment_method_name: str | None = None
    shipping_method: str | None = None
    notes: list[str] | None = None

    def to_json(self) -> str:
        """Serialize for error logs and error responses."""
        return json.dumps(asdict(self), default=str, sort_keys=True)


@dataclass(frozen=True)
class SideEffectFailure:
    """A best-effort step that failed without aborting the order."""

    step: str
    error: str


@dataclass(frozen=True)
class IngestionResult:
    """Output: the outcome of importing one submission.

    Exactly one of ``order_id`` and ``error_kind`` is set.
    """

    order_id: int | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None
    submission: OrderSubmission | None = None
    side_effect_failures: list[SideEffectFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error_kind is None

    @staticmethod
    def success(
        order_id: int, side_effect_failures: list[SideEffectFailure]
    ) -> IngestionResult:
        return IngestionResult(
            order_id=order_id, side_effect_failures=list(side_effect_failures)
        )

    @staticmethod
    def failure(
        kind: ErrorKind,
        error: str,
        submission: OrderSubmission | None,
        side_effect_failures: list[SideEffectFailure],
    ) -> IngestionResult:
        return IngestionResult(
            error_kind=kind,
            error=error,
            submission=submission,
            side_effect_failures=list(side_effect_failures),
        )


@dataclass(frozen=True)
class ShippedOrderDTO:
    """Output: an order confirmed as shipped."""

    order_id: int
    shipped: bool = True


@dataclass(frozen=True)
class StoreCurrencyDTO:
    currency_code: str


@dataclass(frozen=True)
class OrderItemDTO:
    """Output: a single order line as displayed to an operator."""

    product_id: int
    quantity: int
    unit_price_incl_tax: str
    price_incl_tax: str


@dataclass(frozen=True)
class OrderDTO:
    """Output: an imported order as displayed to an operator."""

    id: int
    custom_order_number: str
    customer_id: int | None
    order_status: str
    payment_status: str
    shipping_status: str
    order_total: str
    items: list[OrderItemDTO]
    notes: list[str]
    created_at: str
