"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from polycommerce.domain.exceptions import EntityNotFoundError
from polycommerce.domain.model.product import Product
from polycommerce.domain.repository.product_repository import ProductRepository
from polycommerce.infrastructure.persistence.json_table import JsonTable


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._table = JsonTable(file_path)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: int) -> Product | None:
        raw = self._table.find(product_id)
        return self._to_domain(raw) if raw is not None else None

    def adjust_inventory(self, product: Product, quantity_delta: int) -> None:
        # Applied to the stored row under the table lock; only the stock
        # column changes.
        def apply(raw: dict) -> None:
            raw["stock_quantity"] += quantity_delta

        raw = self._table.update(product.id, apply)
        if raw is None:
            raise EntityNotFoundError(f"Product not found: {product.id}")
        product.stock_quantity = raw["stock_quantity"]

    def save(self, product: Product) -> None:
        """Write *product*.  Stock of an existing row is owned by ``adjust_inventory``."""
        fields = self._to_raw(product)

        def apply(raw: dict) -> None:
            raw.update({k: v for k, v in fields.items() if k != "stock_quantity"})

        if self._table.update(product.id, apply) is None:
            self._table.replace(fields)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "id": product.id,
            "name": product.name,
            "stock_quantity": product.stock_quantity,
            "updated_on": product.updated_on.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["id"],
            name=raw["name"],
            stock_quantity=raw.get("stock_quantity", 0),
            updated_on=datetime.fromisoformat(raw["updated_on"]),
        )
