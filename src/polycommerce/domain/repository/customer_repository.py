"""Abstract repository for Customer aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from polycommerce.domain.model.customer import Customer, CustomerRole


class CustomerRepository(ABC):

    @abstractmethod
    def insert(self, customer: Customer) -> None:
        """Persist a new customer and assign its ID."""

    @abstractmethod
    def update(self, customer: Customer) -> None:
        """Persist changes to an existing customer."""

    @abstractmethod
    def get_by_id(self, customer_id: int) -> Customer | None:
        """Return a customer by its ID, or None if not found."""

    @abstractmethod
    def get_role_by_system_name(self, system_name: str) -> CustomerRole | None:
        """Return a customer role by its system name, or None."""

    @abstractmethod
    def save_attribute(self, customer: Customer, key: str, value: str) -> None:
        """Store a generic key/value attribute against a customer."""
