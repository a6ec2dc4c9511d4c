"""Order aggregate: the record of a sale placed through the sales channel.

The host platform stores orders, order items and order notes in separate
tables.  They are modelled here as separate entities linked by
``order_id`` because they are inserted one by one, in a fixed sequence,
by the ingestion handler.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from enum import IntEnum

from polycommerce.domain.exceptions import ValidationError
from polycommerce.domain.model.customer import Address
from polycommerce.domain.model.value_objects import Money, Quantity


class OrderStatus(IntEnum):
    PENDING = 10
    PROCESSING = 20
    COMPLETE = 30
    CANCELLED = 40


class PaymentStatus(IntEnum):
    PENDING = 10
    AUTHORIZED = 20
    PAID = 30
    PARTIALLY_REFUNDED = 35
    REFUNDED = 40
    VOIDED = 50


class ShippingStatus(IntEnum):
    SHIPPING_NOT_REQUIRED = 10
    NOT_YET_SHIPPED = 20
    PARTIALLY_SHIPPED = 25
    SHIPPED = 30
    DELIVERED = 40


def parse_status(enum_cls: type[IntEnum], value: object, label: str) -> IntEnum:
    """Return the member of *enum_cls* with code *value*.

    The sales channel sends raw integer codes; anything outside the closed
    set is rejected before a single row is written.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{label}: {value} not recognised")
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise ValidationError(f"{label}: {value} not recognised") from exc


# Tax is pre-computed by the sales channel; the platform still expects a
# rate summary on every order.
ZERO_TAX_RATES = "0:0;"


@dataclass
class Order:
    """Aggregate root for a sale.

    Totals are copied verbatim from the submission.  Tax, discount and fee
    fields are always zero on this path.  ``custom_order_number`` stays
    empty until the order has a persisted id.
    """

    id: int | None
    store_id: int
    customer_id: int | None
    customer_language_id: int
    customer_currency_code: str
    order_status: OrderStatus
    payment_status: PaymentStatus
    order_subtotal_incl_tax: Money
    order_subtotal_excl_tax: Money
    order_shipping_incl_tax: Money
    order_shipping_excl_tax: Money
    order_total: Money
    billing_address: Address
    shipping_address: Address
    payment_method_system_name: str | None = None
    shipping_method: str | None = None
    shipping_status: ShippingStatus = ShippingStatus.NOT_YET_SHIPPED
    order_guid: uuid.UUID = field(default_factory=uuid.uuid4)
    custom_order_number: str = ""
    order_tax: Decimal = Decimal("0")
    order_discount: Decimal = Decimal("0")
    order_subtotal_discount_incl_tax: Decimal = Decimal("0")
    order_subtotal_discount_excl_tax: Decimal = Decimal("0")
    payment_method_additional_fee_incl_tax: Decimal = Decimal("0")
    payment_method_additional_fee_excl_tax: Decimal = Decimal("0")
    refunded_amount: Decimal = Decimal("0")
    tax_rates: str = ZERO_TAX_RATES
    currency_rate: Decimal = Decimal("1")
    pickup_in_store: bool = False
    customer_ip: str | None = None
    paid_on: datetime | None = None
    created_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def is_shipped(self) -> bool:
        return self.shipping_status > ShippingStatus.NOT_YET_SHIPPED

    def assign_order_number(self, number: str) -> None:
        """Back-fill the customer-facing order number."""
        if self.id is None:
            raise ValidationError("Cannot number an order before it is persisted")
        if not number:
            raise ValidationError("Order number cannot be empty")
        self.custom_order_number = number


@dataclass
class OrderItem:
    """A single line of an order.

    Prices are copied from the submission.  Discounts are always zero and
    download/licence fields are "not applicable" for channel orders.
    """

    id: int | None
    order_id: int | None
    product_id: int
    quantity: Quantity
    unit_price_incl_tax: Money
    unit_price_excl_tax: Money
    price_incl_tax: Money
    price_excl_tax: Money
    item_weight: Decimal | None = None
    order_item_guid: uuid.UUID = field(default_factory=uuid.uuid4)
    attribute_description: str = ""
    discount_amount_incl_tax: Decimal = Decimal("0")
    discount_amount_excl_tax: Decimal = Decimal("0")
    download_count: int = 0
    is_download_activated: bool = False
    license_download_id: int | None = None


@dataclass
class OrderNote:
    id: int | None
    order_id: int
    note: str
    created_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    display_to_customer: bool = False
