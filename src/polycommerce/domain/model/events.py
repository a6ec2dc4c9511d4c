"""Domain events published once an order has been imported."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class OrderPlaced:
    order_id: int
    store_id: int
    customer_id: int
    custom_order_number: str
    order_total: str
    occurred_on: datetime
