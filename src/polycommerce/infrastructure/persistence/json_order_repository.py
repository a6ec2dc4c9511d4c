"""JSON-file-backed implementation of OrderRepository.

Orders, order items and order notes live in three files, mirroring the
host platform's three tables.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from dataclasses import asdict
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from polycommerce.domain.exceptions import EntityNotFoundError
from polycommerce.domain.model.customer import Address
from polycommerce.domain.model.order import (
    Order,
    OrderItem,
    OrderNote,
    OrderStatus,
    PaymentStatus,
    ShippingStatus,
)
from polycommerce.domain.model.value_objects import Money, Quantity
from polycommerce.domain.repository.order_repository import OrderRepository
from polycommerce.infrastructure.persistence.json_table import JsonTable

_ZEROED_ORDER_FIELDS = (
    "order_tax",
    "order_discount",
    "order_subtotal_discount_incl_tax",
    "order_subtotal_discount_excl_tax",
    "payment_method_additional_fee_incl_tax",
    "payment_method_additional_fee_excl_tax",
    "refunded_amount",
    "currency_rate",
)

_ORDER_TOTAL_FIELDS = (
    "order_subtotal_incl_tax",
    "order_subtotal_excl_tax",
    "order_shipping_incl_tax",
    "order_shipping_excl_tax",
    "order_total",
)

_ITEM_PRICE_FIELDS = (
    "unit_price_incl_tax",
    "unit_price_excl_tax",
    "price_incl_tax",
    "price_excl_tax",
)


class JsonOrderRepository(OrderRepository):

    def __init__(self, data_dir: Path) -> None:
        self._orders = JsonTable(data_dir / "orders.json")
        self._items = JsonTable(data_dir / "order_items.json")
        self._notes = JsonTable(data_dir / "order_notes.json")

    # --- Orders ---------------------------------------------------------------

    def insert(self, order: Order) -> None:
        raw = self._order_to_raw(order)
        del raw["id"]
        order.id = self._orders.insert(raw)

    def update(self, order: Order) -> None:
        if order.id is None or self._orders.find(order.id) is None:
            raise EntityNotFoundError(f"Order #{order.id} not found")
        self._orders.replace(self._order_to_raw(order))

    def delete(self, order: Order) -> None:
        if order.id is None or not self._orders.delete(order.id):
            raise EntityNotFoundError(f"Order #{order.id} not found")

    def get_by_id(self, order_id: int) -> Order | None:
        raw = self._orders.find(order_id)
        return self._order_to_domain(raw) if raw is not None else None

    def shipped_order_ids(self, order_ids: Iterable[int]) -> list[int]:
        wanted = set(order_ids)
        return [
            raw["id"]
            for raw in self._orders.load()
            if raw["id"] in wanted
            and raw["shipping_status"] > ShippingStatus.NOT_YET_SHIPPED
        ]

    # --- Order items ----------------------------------------------------------

    def insert_item(self, item: OrderItem) -> None:
        raw = self._item_to_raw(item)
        del raw["id"]
        item.id = self._items.insert(raw)

    def items_for_order(self, order_id: int) -> list[OrderItem]:
        return [
            self._item_to_domain(raw)
            for raw in self._items.load()
            if raw["order_id"] == order_id
        ]

    # --- Order notes ----------------------------------------------------------

    def insert_note(self, note: OrderNote) -> None:
        note.id = self._notes.insert(
            {
                "order_id": note.order_id,
                "note": note.note,
                "created_on": note.created_on.isoformat(),
                "display_to_customer": note.display_to_customer,
            }
        )

    def notes_for_order(self, order_id: int) -> list[OrderNote]:
        return [
            OrderNote(
                id=raw["id"],
                order_id=raw["order_id"],
                note=raw["note"],
                created_on=datetime.fromisoformat(raw["created_on"]),
                display_to_customer=raw.get("display_to_customer", False),
            )
            for raw in self._notes.load()
            if raw["order_id"] == order_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _order_to_raw(order: Order) -> dict:
        raw = {
            "id": order.id,
            "order_guid": str(order.order_guid),
            "store_id": order.store_id,
            "customer_id": order.customer_id,
            "customer_language_id": order.customer_language_id,
            "customer_currency_code": order.customer_currency_code,
            "custom_order_number": order.custom_order_number,
            "order_status": int(order.order_status),
            "payment_status": int(order.payment_status),
            "shipping_status": int(order.shipping_status),
            "payment_method_system_name": order.payment_method_system_name,
            "shipping_method": order.shipping_method,
            "tax_rates": order.tax_rates,
            "pickup_in_store": order.pickup_in_store,
            "customer_ip": order.customer_ip,
            "paid_on": order.paid_on.isoformat() if order.paid_on else None,
            "created_on": order.created_on.isoformat(),
            "billing_address": asdict(order.billing_address),
            "shipping_address": asdict(order.shipping_address),
        }
        for name in _ORDER_TOTAL_FIELDS:
            raw[name] = str(getattr(order, name).amount)
        for name in _ZEROED_ORDER_FIELDS:
            raw[name] = str(getattr(order, name))
        return raw

    @staticmethod
    def _order_to_domain(raw: dict) -> Order:
        currency = raw["customer_currency_code"]
        totals = {
            name: Money(Decimal(raw[name]), currency) for name in _ORDER_TOTAL_FIELDS
        }
        zeroed = {name: Decimal(raw[name]) for name in _ZEROED_ORDER_FIELDS}
        return Order(
            id=raw["id"],
            order_guid=uuid.UUID(raw["order_guid"]),
            store_id=raw["store_id"],
            customer_id=raw["customer_id"],
            customer_language_id=raw["customer_language_id"],
            customer_currency_code=currency,
            custom_order_number=raw["custom_order_number"],
            order_status=OrderStatus(raw["order_status"]),
            payment_status=PaymentStatus(raw["payment_status"]),
            shipping_status=ShippingStatus(raw["shipping_status"]),
            payment_method_system_name=raw["payment_method_system_name"],
            shipping_method=raw["shipping_method"],
            tax_rates=raw["tax_rates"],
            pickup_in_store=raw["pickup_in_store"],
            customer_ip=raw["customer_ip"],
            paid_on=datetime.fromisoformat(raw["paid_on"]) if raw["paid_on"] else None,
            created_on=datetime.fromisoformat(raw["created_on"]),
            billing_address=Address(**raw["billing_address"]),
            shipping_address=Address(**raw["shipping_address"]),
            **totals,
            **zeroed,
        )

    @staticmethod
    def _item_to_raw(item: OrderItem) -> dict:
        raw = {
            "id": item.id,
            "order_item_guid": str(item.order_item_guid),
            "order_id": item.order_id,
            "product_id": item.product_id,
            "quantity": item.quantity.value,
            "currency": item.price_incl_tax.currency,
            "item_weight": str(item.item_weight) if item.item_weight is not None else None,
            "attribute_description": item.attribute_description,
            "discount_amount_incl_tax": str(item.discount_amount_incl_tax),
            "discount_amount_excl_tax": str(item.discount_amount_excl_tax),
            "download_count": item.download_count,
            "is_download_activated": item.is_download_activated,
            "license_download_id": item.license_download_id,
        }
        for name in _ITEM_PRICE_FIELDS:
            raw[name] = str(getattr(item, name).amount)
        return raw

    @staticmethod
    def _item_to_domain(raw: dict) -> OrderItem:
        currency = raw["currency"]
        prices = {
            name: Money(Decimal(raw[name]), currency) for name in _ITEM_PRICE_FIELDS
        }
        weight = raw.get("item_weight")
        return OrderItem(
            id=raw["id"],
            order_item_guid=uuid.UUID(raw["order_item_guid"]),
            order_id=raw["order_id"],
            product_id=raw["product_id"],
            quantity=Quantity(raw["quantity"]),
            item_weight=Decimal(weight) if weight is not None else None,
            attribute_description=raw["attribute_description"],
            discount_amount_incl_tax=Decimal(raw["discount_amount_incl_tax"]),
            discount_amount_excl_tax=Decimal(raw["discount_amount_excl_tax"]),
            download_count=raw["download_count"],
            is_download_activated=raw["is_download_activated"],
            license_download_id=raw["license_download_id"],
            **prices,
        )
