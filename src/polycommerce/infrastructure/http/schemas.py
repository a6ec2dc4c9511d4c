"""Pydantic request/response schemas for the channel API.

These are the sales channel's wire contracts (PascalCase JSON), kept
separate from the application DTOs.  Every field is optional on input so
that presence rules are enforced, with the same messages, by the
OrderAssembler rather than by request parsing.
"""

from __future__ import annotations

from dataclasses import asdict
from decimal import Decimal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_pascal

from polycommerce.application.dto import (
    IngestionResult,
    OrderSubmission,
    ShippedOrderDTO,
    SubmittedAddress,
    SubmittedOrderItem,
)


class ChannelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_pascal, populate_by_name=True)


# ---------------------------------------------------------------------------
# Order submission
# ---------------------------------------------------------------------------
class AddressSchema(ChannelModel):
    first_name: str | None = None
    last_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    phone_number: str | None = None
    company: str | None = None
    zip_postal_code: str | None = None
    two_letter_country_code: str | None = None


class OrderItemSchema(ChannelModel):
    external_product_id: int
    quantity: int
    unit_price_incl_tax: Decimal = Decimal("0")
    unit_price_excl_tax: Decimal = Decimal("0")
    price_incl_tax: Decimal = Decimal("0")
    price_excl_tax: Decimal = Decimal("0")
    item_weight: Decimal | None = None


class OrderSubmissionSchema(ChannelModel):
    email: str | None = None
    address: AddressSchema | None = None
    order_items: list[OrderItemSchema] | None = None
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

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "Email": "jane@example.com",
                    "Address": {
                        "FirstName": "Jane",
                        "LastName": "Doe",
                        "Address1": "1 Queen St",
                        "City": "Auckland",
                        "ZipPostalCode": "1010",
                        "TwoLetterCountryCode": "NZ",
                    },
                    "OrderItems": [
                        {
                            "ExternalProductId": 1,
                            "Quantity": 2,
                            "UnitPriceInclTax": "11.50",
                            "UnitPriceExclTax": "10.00",
                            "PriceInclTax": "23.00",
                            "PriceExclTax": "20.00",
                        }
                    ],
                    "OrderSubtotalInclTax": "23.00",
                    "OrderSubtotalExclTax": "20.00",
                    "OrderShippingTotalInclTax": "5.00",
                    "OrderShippingTotalExclTax": "5.00",
                    "OrderTotal": "28.00",
                    "PaymentStatusId": 30,
                    "OrderStatusId": 20,
                    "PaymentMethodName": "Payments.Channel",
                    "ShippingMethod": "Courier",
                    "Notes": ["Leave at the door"],
                }
            ]
        }
    )

    def to_submission(self) -> OrderSubmission:
        address = None
        if self.address is not None:
            address = SubmittedAddress(**self.address.model_dump())
        items = None
        if self.order_items is not None:
            items = [SubmittedOrderItem(**item.model_dump()) for item in self.order_items]
        fields = self.model_dump(exclude={"address", "order_items"})
        return OrderSubmission(address=address, order_items=items, **fields)

    @staticmethod
    def from_submission(submission: OrderSubmission) -> OrderSubmissionSchema:
        return OrderSubmissionSchema.model_validate(asdict(submission))


class OrderIdResponse(ChannelModel):
    order_id: int


class IngestionErrorResponse(ChannelModel):
    error: str
    error_kind: str
    submission: OrderSubmissionSchema | None = None

    @staticmethod
    def from_result(result: IngestionResult) -> IngestionErrorResponse:
        submission = None
        if result.submission is not None:
            submission = OrderSubmissionSchema.from_submission(result.submission)
        return IngestionErrorResponse(
            error=result.error or "",
            error_kind=result.error_kind.value if result.error_kind else "",
            submission=submission,
        )


# ---------------------------------------------------------------------------
# Shipped orders
# ---------------------------------------------------------------------------
class CheckShippedOrdersRequest(ChannelModel):
    order_ids: list[int] | None = None


class ShippedOrderSchema(ChannelModel):
    order_id: int
    shipped: bool = True

    @staticmethod
    def from_dto(dto: ShippedOrderDTO) -> ShippedOrderSchema:
        return ShippedOrderSchema(order_id=dto.order_id, shipped=dto.shipped)


# ---------------------------------------------------------------------------
# Store currency
# ---------------------------------------------------------------------------
class StoreCurrencyResponse(ChannelModel):
    currency_code: str


class ErrorResponse(ChannelModel):
    error: str
