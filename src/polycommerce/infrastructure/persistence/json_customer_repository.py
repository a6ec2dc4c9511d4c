"""JSON-file-backed implementation of CustomerRepository."""

from __future__ import annotations

from dataclasses import asdict
from datetime import datetime
from pathlib import Path

from polycommerce.domain.exceptions import EntityNotFoundError
from polycommerce.domain.model.customer import Address, Customer, CustomerRole
from polycommerce.domain.repository.customer_repository import CustomerRepository
from polycommerce.infrastructure.persistence.json_table import JsonTable


class JsonCustomerRepository(CustomerRepository):

    def __init__(self, data_dir: Path) -> None:
        self._customers = JsonTable(data_dir / "customers.json")
        self._roles = JsonTable(data_dir / "customer_roles.json")
        self._attributes = JsonTable(data_dir / "generic_attributes.json")

    # --- CustomerRepository interface -----------------------------------------

    def insert(self, customer: Customer) -> None:
        raw = self._to_raw(customer)
        del raw["id"]
        customer.id = self._customers.insert(raw)

    def update(self, customer: Customer) -> None:
        if customer.id is None or self._customers.find(customer.id) is None:
            raise EntityNotFoundError(f"Customer #{customer.id} not found")
        self._customers.replace(self._to_raw(customer))

    def get_by_id(self, customer_id: int) -> Customer | None:
        raw = self._customers.find(customer_id)
        return self._to_domain(raw) if raw is not None else None

    def get_role_by_system_name(self, system_name: str) -> CustomerRole | None:
        for raw in self._roles.load():
            if raw["system_name"] == system_name:
                return CustomerRole(
                    id=raw["id"], name=raw["name"], system_name=raw["system_name"]
                )
        return None

    def save_attribute(self, customer: Customer, key: str, value: str) -> None:
        if customer.id is None:
            raise EntityNotFoundError("Cannot save attributes of an unsaved customer")
        with self._attributes.transaction() as rows:
            for row in rows:
                if row["entity_id"] == customer.id and row["key"] == key:
                    row["value"] = value
                    return
        self._attributes.insert(
            {"key_group": "Customer", "entity_id": customer.id, "key": key, "value": value}
        )

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(customer: Customer) -> dict:
        return {
            "id": customer.id,
            "username": customer.username,
            "email": customer.email,
            "active": customer.active,
            "deleted": customer.deleted,
            "is_system_account": customer.is_system_account,
            "created_on": customer.created_on.isoformat(),
            "last_activity_on": customer.last_activity_on.isoformat(),
            "shipping_address": asdict(customer.shipping_address),
            "role_system_names": list(customer.role_system_names),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Customer:
        return Customer(
            id=raw["id"],
            username=raw["username"],
            email=raw["email"],
            shipping_address=Address(**raw["shipping_address"]),
            active=raw["active"],
            deleted=raw["deleted"],
            is_system_account=raw["is_system_account"],
            created_on=datetime.fromisoformat(raw["created_on"]),
            last_activity_on=datetime.fromisoformat(raw["last_activity_on"]),
            role_system_names=list(raw.get("role_system_names", [])),
        )
