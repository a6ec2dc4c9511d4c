"""Abstract repository for Product aggregate.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON, in-memory) live in the
infrastructure layer and in the test fakes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from polycommerce.domain.model.product import Product


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: int) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def adjust_inventory(self, product: Product, quantity_delta: int) -> None:
        """Apply a signed stock change and persist it.

        Mirrors the host platform's native primitive, which leaves the
        product's ``updated_on`` untouched.
        """

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product."""
