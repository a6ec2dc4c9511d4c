"""Unit tests for the Customer aggregate and Address copies."""

from datetime import datetime, timezone

from polycommerce.domain.model.customer import (
    GUESTS_ROLE,
    Address,
    Customer,
    CustomerRole,
)

NOW = datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)


class TestAddressCopy:

    def test_copy_is_equal_but_not_the_same_object(self):
        original = Address(first_name="Aroha", city="Auckland", country_id=1)
        copy = original.copy()
        assert copy == original
        assert copy is not original

    def test_mutating_a_copy_leaves_the_original_alone(self):
        original = Address(first_name="Aroha", city="Auckland", country_id=1)
        copy = original.copy()
        copy.city = "Wellington"
        assert original.city == "Auckland"


class TestCustomerCreate:

    def test_fixed_defaults(self):
        customer = Customer.create("a@example.com", Address(), NOW)
        assert customer.id is None
        assert customer.username == "a@example.com"
        assert customer.email == "a@example.com"
        assert customer.active is True
        assert customer.deleted is False
        assert customer.is_system_account is False
        assert customer.created_on == NOW
        assert customer.last_activity_on == NOW

    def test_add_role_once(self):
        customer = Customer.create("a@example.com", Address(), NOW)
        guests = CustomerRole(id=1, name="Guests", system_name=GUESTS_ROLE)
        customer.add_role(guests)
        customer.add_role(guests)
        assert customer.role_system_names == [GUESTS_ROLE]
        assert customer.is_guest
