"""Maps a channel submission onto the host platform's entity graph.

The assembler is pure: it reads the submission and already-resolved
reference data and returns unsaved entities.  Nothing here touches a
repository, which is what lets the ingestion handler reject a bad
submission before a single row is written.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from polycommerce.application.dto import OrderSubmission, SubmittedOrderItem
from polycommerce.domain.exceptions import ValidationError
from polycommerce.domain.model.customer import Address, Customer
from polycommerce.domain.model.order import (
    Order,
    OrderItem,
    OrderStatus,
    PaymentStatus,
    ShippingStatus,
    parse_status,
)
from polycommerce.domain.model.reference import Country, Currency, Language, Store
from polycommerce.domain.model.value_objects import Money, Quantity
from polycommerce.domain.service.inventory_adjuster import utc_now


@dataclass(frozen=True)
class AssembledOrder:
    """Unsaved entities built from one submission.

    ``items`` still carry the submitted product IDs and no ``order_id``;
    both are settled by the ingestion handler.
    """

    customer: Customer
    order: Order
    items: list[OrderItem]


class OrderAssembler:

    def __init__(self, clock: Callable[[], datetime] = utc_now) -> None:
        self._clock = clock

    # --- Validation -----------------------------------------------------------

    @staticmethod
    def validate(submission: OrderSubmission | None) -> None:
        """Check the submission's shape before any lookup or write.

        Rules run in a fixed order and the first violation wins.  Country
        resolution is the next check and needs the LookupGateway, so the
        handler performs it right after this returns.
        """
        if submission is None:
            raise ValidationError("Order submission is required")

        if submission.address is None:
            raise ValidationError("Address is required")

        if not submission.order_items:
            raise ValidationError("At least one order item is required")

        parse_status(PaymentStatus, submission.payment_status_id, "PaymentStatusId")
        parse_status(OrderStatus, submission.order_status_id, "OrderStatusId")

    # --- Construction ---------------------------------------------------------

    def assemble(
        self,
        submission: OrderSubmission,
        store: Store,
        currency: Currency,
        country: Country,
        language: Language,
    ) -> AssembledOrder:
        """Build the customer, order and order items for *submission*.

        Calls ``validate`` first, so it is safe on unchecked input.
        """
        self.validate(submission)

        now = self._clock()
        code = currency.code

        submitted = submission.address  # type: ignore[union-attr]
        address = Address(
            first_name=submitted.first_name,
            last_name=submitted.last_name,
            address1=submitted.address1,
            address2=submitted.address2,
            city=submitted.city,
            phone_number=submitted.phone_number,
            email=submission.email,
            company=submitted.company,
            zip_postal_code=submitted.zip_postal_code,
            country_id=country.id,
        )
        customer = Customer.create(submission.email, address, now)

        order = Order(
            id=None,
            store_id=store.id,
            customer_id=None,
            customer_language_id=language.id,
            customer_currency_code=code,
            order_status=OrderStatus(submission.order_status_id),
            payment_status=PaymentStatus(submission.payment_status_id),
            order_subtotal_incl_tax=_money(submission.order_subtotal_incl_tax, code),
            order_subtotal_excl_tax=_money(submission.order_subtotal_excl_tax, code),
            order_shipping_incl_tax=_money(submission.order_shipping_total_incl_tax, code),
            order_shipping_excl_tax=_money(submission.order_shipping_total_excl_tax, code),
            order_total=_money(submission.order_total, code),
            billing_address=address.copy(),
            shipping_address=address.copy(),
            payment_method_system_name=submission.payment_method_name,
            shipping_method=submission.shipping_method,
            shipping_status=ShippingStatus.NOT_YET_SHIPPED,
            custom_order_number="",
            created_on=now,
        )

        items = [self._build_item(line, code) for line in submission.order_items or []]
        return AssembledOrder(customer=customer, order=order, items=items)

    @staticmethod
    def _build_item(line: SubmittedOrderItem, currency_code: str) -> OrderItem:
        if isinstance(line.external_product_id, bool) or not isinstance(
            line.external_product_id, int
        ):
            raise ValidationError(
                f"ExternalProductId must be an integer, got {line.external_product_id!r}"
            )
        return OrderItem(
            id=None,
            order_id=None,
            product_id=line.external_product_id,
            quantity=Quantity(line.quantity),
            unit_price_incl_tax=_money(line.unit_price_incl_tax, currency_code),
            unit_price_excl_tax=_money(line.unit_price_excl_tax, currency_code),
            price_incl_tax=_money(line.price_incl_tax, currency_code),
            price_excl_tax=_money(line.price_excl_tax, currency_code),
            item_weight=line.item_weight,
        )


def _money(amount: Decimal | None, currency_code: str) -> Money:
    if amount is None:
        return Money.zero(currency_code)
    return Money.of(amount, currency_code)
