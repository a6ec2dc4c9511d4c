"""Abstract repository for orders and the rows that hang off them.

Orders, order items and order notes are separate tables in the host
platform; every method here is a single-row write or a single query.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable

from polycommerce.domain.model.order import Order, OrderItem, OrderNote


class OrderRepository(ABC):

    @abstractmethod
    def insert(self, order: Order) -> None:
        """Persist a new order and assign its ID."""

    @abstractmethod
    def update(self, order: Order) -> None:
        """Persist changes to an existing order."""

    @abstractmethod
    def delete(self, order: Order) -> None:
        """Remove an order row."""

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def shipped_order_ids(self, order_ids: Iterable[int]) -> list[int]:
        """Return the subset of *order_ids* whose shipping has started.

        "Shipped" means a shipping status strictly past NOT_YET_SHIPPED.
        Implementations answer with a single bulk query.
        """

    @abstractmethod
    def insert_item(self, item: OrderItem) -> None:
        """Persist a new order item and assign its ID."""

    @abstractmethod
    def items_for_order(self, order_id: int) -> list[OrderItem]:
        """Return the items of an order in insertion order."""

    @abstractmethod
    def insert_note(self, note: OrderNote) -> None:
        """Persist a new order note and assign its ID."""

    @abstractmethod
    def notes_for_order(self, order_id: int) -> list[OrderNote]:
        """Return the notes of an order in insertion order."""
