"""Customer aggregate and the Address value it embeds.

A fresh Customer is created for every submission received from the
sales channel.  Once inserted it belongs to the host platform; the
ingestion flow only attaches the guest role and a couple of generic
attributes to it.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone

GUESTS_ROLE = "Guests"


@dataclass
class Address:
    """A postal address.

    Addresses are copied, never shared.  ``copy()`` returns an independent
    instance so the billing and shipping addresses of an order can change
    without affecting each other or the customer.
    """

    first_name: str | None = None
    last_name: str | None = None
    address1: str | None = None
    address2: str | None = None
    city: str | None = None
    phone_number: str | None = None
    email: str | None = None
    company: str | None = None
    zip_postal_code: str | None = None
    country_id: int | None = None

    def copy(self) -> Address:
        return replace(self)


@dataclass(frozen=True)
class CustomerRole:
    id: int
    name: str
    system_name: str


@dataclass
class Customer:
    """Aggregate root for a shopper created by the sales channel.

    Use ``Customer.create()`` for new customers; it applies the fixed
    defaults (active, not deleted, not a system account).
    """

    id: int | None
    username: str | None
    email: str | None
    shipping_address: Address
    active: bool = True
    deleted: bool = False
    is_system_account: bool = False
    created_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    last_activity_on: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    role_system_names: list[str] = field(default_factory=list)

    @staticmethod
    def create(email: str | None, shipping_address: Address, now: datetime) -> Customer:
        return Customer(
            id=None,
            username=email,
            email=email,
            shipping_address=shipping_address,
            active=True,
            deleted=False,
            is_system_account=False,
            created_on=now,
            last_activity_on=now,
        )

    def add_role(self, role: CustomerRole) -> None:
        if role.system_name not in self.role_system_names:
            self.role_system_names.append(role.system_name)

    @property
    def is_guest(self) -> bool:
        return GUESTS_ROLE in self.role_system_names
