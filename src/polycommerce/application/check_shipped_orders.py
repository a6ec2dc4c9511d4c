"""Application service: Check For Shipped Orders use case (query).

The sales channel polls with a batch of order IDs it has imported and
wants to know which of them have started shipping.  Only confirmed
shipments are reported; an ID that is missing from the answer is simply
"not confirmed shipped", never an error.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from polycommerce.application.dto import ShippedOrderDTO
from polycommerce.domain.exceptions import UnauthorizedError, ValidationError
from polycommerce.domain.repository.lookup_gateway import LookupGateway
from polycommerce.domain.repository.order_repository import OrderRepository

logger = structlog.get_logger(__name__)


class CheckShippedOrdersHandler:

    def __init__(self, lookup: LookupGateway, order_repo: OrderRepository) -> None:
        self._lookup = lookup
        self._order_repo = order_repo

    def handle(self, token: str | None, order_ids: Iterable[int] | None) -> list[ShippedOrderDTO]:
        store = self._lookup.resolve_store(token)
        if store is None:
            raise UnauthorizedError("Store token not recognised")

        requested = _unique(order_ids)
        if not requested:
            raise ValidationError("Expected at least one OrderIds element")

        shipped = self._order_repo.shipped_order_ids(requested)
        logger.debug(
            "Checked shipped orders",
            store_id=store.id,
            requested=len(requested),
            shipped=len(shipped),
        )
        return [ShippedOrderDTO(order_id=order_id) for order_id in shipped]


def _unique(order_ids: Iterable[int] | None) -> list[int]:
    seen: list[int] = []
    for order_id in order_ids or []:
        if isinstance(order_id, bool) or not isinstance(order_id, int):
            raise ValidationError(f"Order ID must be an integer, got {order_id!r}")
        if order_id not in seen:
            seen.append(order_id)
    return seen
