"""Application service: Show Order use case (query)."""

from __future__ import annotations

from polycommerce.application.dto import OrderDTO, OrderItemDTO
from polycommerce.domain.exceptions import EntityNotFoundError
from polycommerce.domain.model.order import Order, OrderItem, OrderNote
from polycommerce.domain.repository.order_repository import OrderRepository


class ShowOrderHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, order_id: int) -> OrderDTO:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        items = self._order_repo.items_for_order(order_id)
        notes = self._order_repo.notes_for_order(order_id)
        return self._to_dto(order, items, notes)

    @staticmethod
    def _to_dto(order: Order, items: list[OrderItem], notes: list[OrderNote]) -> OrderDTO:
        return OrderDTO(
            id=order.id,  # type: ignore[arg-type]
            custom_order_number=order.custom_order_number,
            customer_id=order.customer_id,
            order_status=order.order_status.name,
            payment_status=order.payment_status.name,
            shipping_status=order.shipping_status.name,
            order_total=str(order.order_total),
            items=[
                OrderItemDTO(
                    product_id=item.product_id,
                    quantity=item.quantity.value,
                    unit_price_incl_tax=str(item.unit_price_incl_tax),
                    price_incl_tax=str(item.price_incl_tax),
                )
                for item in items
            ],
            notes=[note.note for note in notes],
            created_at=order.created_on.strftime("%Y-%m-%d %H:%M UTC"),
        )
