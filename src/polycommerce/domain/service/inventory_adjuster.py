"""Domain service: Inventory Adjuster.

Applies a signed stock change to a product through the repository's
native adjust primitive and then stamps the product's ``updated_on``.
The host platform's primitive does not touch the timestamp itself, so
without the extra save the catalog would never show the product as
modified by a channel sale.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timezone

from polycommerce.domain.exceptions import ValidationError
from polycommerce.domain.model.product import Product
from polycommerce.domain.repository.product_repository import ProductRepository


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class InventoryAdjuster:

    def __init__(
        self,
        product_repo: ProductRepository,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._product_repo = product_repo
        self._clock = clock

    def adjust(self, product: Product, quantity_delta: int) -> None:
        """Apply *quantity_delta* (negative for a sale) and timestamp the product.

        No retries: any repository failure propagates to the caller.
        """
        if quantity_delta == 0:
            raise ValidationError("Inventory adjustment must be non-zero")

        self._product_repo.adjust_inventory(product, quantity_delta)

        product.touch(self._clock())
        self._product_repo.save(product)
