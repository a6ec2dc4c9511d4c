"""Product aggregate.

Products belong to the host catalog.  The ingestion flow never creates
them; it only decrements their stock when an order line is imported.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass
class Product:
    """A product in the host catalog.

    ``stock_quantity`` may go negative: the sales channel reports sales that
    already happened, so there is nothing to reject.
    """

    id: int
    name: str
    stock_quantity: int = 0
    updated_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def change_stock(self, delta: int) -> None:
        """Apply a signed stock change without touching ``updated_on``."""
        self.stock_quantity += delta

    def touch(self, now: datetime) -> None:
        self.updated_on = now
