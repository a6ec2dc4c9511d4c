"""Tests for the IngestOrderHandler using in-memory fakes."""

from datetime import datetime, timezone
from decimal import Decimal

from polycommerce.application.check_shipped_orders import CheckShippedOrdersHandler
from polycommerce.application.ingest_order import PLACE_ORDER_ACTIVITY, IngestOrderHandler
from polycommerce.domain.exceptions import ErrorKind
from polycommerce.domain.model.customer import GUESTS_ROLE
from polycommerce.domain.model.events import OrderPlaced
from polycommerce.domain.model.order import OrderStatus, PaymentStatus, ShippingStatus
from polycommerce.domain.model.product import Product
from polycommerce.domain.service.order_number_formatter import OrderNumberFormatter
from tests.factories import make_address, make_item, make_submission
from tests.fakes import (
    STORE_TOKEN,
    FakeActivityLog,
    FakeClock,
    FakeCustomerRepository,
    FakeEventPublisher,
    FakeLookupGateway,
    FakeOrderRepository,
    FakeProductRepository,
)

EPOCH = datetime(2000, 1, 1, tzinfo=timezone.utc)


def _setup(formatter=None, roles=None):
    lookup = FakeLookupGateway()
    customers = FakeCustomerRepository(roles=roles)
    orders = FakeOrderRepository()
    products = FakeProductRepository([
        Product(id=1, name="Harakeke kete", stock_quantity=10, updated_on=EPOCH),
        Product(id=2, name="Pounamu pendant", stock_quantity=5, updated_on=EPOCH),
    ])
    activity = FakeActivityLog()
    events = FakeEventPublisher()
    handler = IngestOrderHandler(
        lookup, customers, orders, products, activity, events,
        number_formatter=formatter, clock=FakeClock(),
    )
    return handler, customers, orders, products, activity, events


class TestSuccessfulIngestion:

    def test_returns_order_id(self):
        handler, _, orders, *_ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.ok
        assert result.order_id == 1
        assert result.error_kind is None
        assert result.side_effect_failures == []
        assert orders.get_by_id(1) is not None

    def test_order_fields(self):
        handler, customers, orders, *_ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission())

        order = orders.get_by_id(result.order_id)
        customer = customers.list_all()[0]
        assert order.store_id == 1
        assert order.customer_id == customer.id
        assert order.customer_currency_code == "NZD"
        assert order.customer_language_id == 7
        assert order.order_status is OrderStatus.PROCESSING
        assert order.payment_status is PaymentStatus.PAID
        assert order.shipping_status is ShippingStatus.NOT_YET_SHIPPED
        assert order.order_total.amount == Decimal("28.75")
        assert order.billing_address.country_id == 1

    def test_guest_customer_created(self):
        handler, customers, *_ = _setup()
        handler.handle(STORE_TOKEN, make_submission(email="kiri@example.com"))

        [customer] = customers.list_all()
        assert customer.email == "kiri@example.com"
        assert customer.username == "kiri@example.com"
        assert customer.is_guest
        assert customer.role_system_names == [GUESTS_ROLE]

    def test_customer_name_attributes(self):
        handler, customers, *_ = _setup()
        handler.handle(STORE_TOKEN, make_submission())

        [customer] = customers.list_all()
        assert customers.attributes[customer.id] == {
            "FirstName": "Aroha",
            "LastName": "Ngata",
        }

    def test_blank_names_not_saved(self):
        handler, customers, *_ = _setup()
        submission = make_submission(address=make_address(first_name="", last_name=None))
        handler.handle(STORE_TOKEN, submission)

        assert customers.attributes == {}

    def test_items_linked_to_order(self):
        handler, _, orders, *_ = _setup()
        submission = make_submission(
            order_items=[make_item(product_id=1, quantity=2), make_item(product_id=2, quantity=1)]
        )
        result = handler.handle(STORE_TOKEN, submission)

        items = orders.items_for_order(result.order_id)
        assert [(i.product_id, i.quantity.value) for i in items] == [(1, 2), (2, 1)]

    def test_stock_decremented_and_timestamped(self):
        handler, _, _, products, *_ = _setup()
        submission = make_submission(
            order_items=[make_item(product_id=1, quantity=3), make_item(product_id=2, quantity=1)]
        )
        handler.handle(STORE_TOKEN, submission)

        assert products.get_by_id(1).stock_quantity == 7
        assert products.get_by_id(2).stock_quantity == 4
        assert products.get_by_id(1).updated_on > EPOCH
        assert products.saves == 2

    def test_stock_may_go_negative(self):
        handler, _, _, products, *_ = _setup()
        handler.handle(STORE_TOKEN, make_submission(order_items=[make_item(product_id=2, quantity=8)]))

        assert products.get_by_id(2).stock_quantity == -3

    def test_return_line_restocks(self):
        handler, _, orders, products, *_ = _setup()
        line = make_item(product_id=2, quantity=-2, price_incl_tax=Decimal("-23.00"))
        result = handler.handle(
            STORE_TOKEN, make_submission(order_items=[line], order_total=Decimal("-23.00"))
        )

        assert result.ok
        assert products.get_by_id(2).stock_quantity == 7
        assert orders.get_by_id(result.order_id).order_total.amount == Decimal("-23.00")

    def test_default_order_number_is_id(self):
        handler, _, orders, *_ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission())

        assert orders.get_by_id(result.order_id).custom_order_number == "1"

    def test_custom_order_number_mask(self):
        handler, _, orders, *_ = _setup(formatter=OrderNumberFormatter("PC-{YYYY}-{ID}"))
        result = handler.handle(STORE_TOKEN, make_submission())

        assert orders.get_by_id(result.order_id).custom_order_number == "PC-2024-1"

    def test_notes_added(self):
        handler, _, orders, *_ = _setup()
        result = handler.handle(
            STORE_TOKEN, make_submission(notes=["Gift wrap please", "Leave at door"])
        )

        notes = orders.notes_for_order(result.order_id)
        assert [n.note for n in notes] == ["Gift wrap please", "Leave at door"]
        assert all(n.display_to_customer is False for n in notes)

    def test_no_notes(self):
        handler, _, orders, *_ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission(notes=None))

        assert result.ok
        assert orders.notes_for_order(result.order_id) == []

    def test_activity_logged(self):
        handler, _, _, _, activity, _ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission())

        assert activity.entries == [
            (PLACE_ORDER_ACTIVITY, f"Placed a new order (ID = {result.order_id})", "Order", result.order_id)
        ]

    def test_order_placed_event(self):
        handler, _, _, _, _, events = _setup()
        result = handler.handle(STORE_TOKEN, make_submission())

        [event] = events.events
        assert isinstance(event, OrderPlaced)
        assert event.order_id == result.order_id
        assert event.store_id == 1
        assert event.custom_order_number == "1"
        assert event.order_total == "28.75"

    def test_same_submission_twice_creates_two_orders(self):
        handler, customers, orders, products, *_ = _setup()
        submission = make_submission(order_items=[make_item(product_id=1, quantity=2)])

        first = handler.handle(STORE_TOKEN, submission)
        second = handler.handle(STORE_TOKEN, submission)

        assert first.order_id != second.order_id
        assert len(orders.list_all()) == 2
        assert len(customers.list_all()) == 2
        assert products.get_by_id(1).stock_quantity == 6

    def test_new_order_not_reported_shipped(self):
        handler, _, orders, *_ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission())

        query = CheckShippedOrdersHandler(FakeLookupGateway(), orders)
        assert query.handle(STORE_TOKEN, [result.order_id]) == []


class TestUnauthorized:

    def test_unknown_token(self):
        handler, customers, orders, *_ = _setup()
        result = handler.handle("wrong", make_submission())

        assert not result.ok
        assert result.error_kind is ErrorKind.UNAUTHORIZED
        assert result.order_id is None
        assert customers.list_all() == []
        assert orders.list_all() == []

    def test_missing_token(self):
        handler, *_ = _setup()
        result = handler.handle(None, make_submission())

        assert result.error_kind is ErrorKind.UNAUTHORIZED

    def test_token_checked_before_body(self):
        handler, *_ = _setup()
        result = handler.handle("wrong", None)

        assert result.error_kind is ErrorKind.UNAUTHORIZED


class TestInvalidSubmission:

    def test_missing_submission(self):
        handler, customers, *_ = _setup()
        result = handler.handle(STORE_TOKEN, None)

        assert result.error_kind is ErrorKind.INVALID
        assert result.error == "Order submission is required"
        assert result.submission is None
        assert customers.list_all() == []

    def test_unknown_payment_status_writes_nothing(self):
        handler, customers, orders, products, *_ = _setup()
        submission = make_submission(payment_status_id=99)
        result = handler.handle(STORE_TOKEN, submission)

        assert result.error_kind is ErrorKind.INVALID
        assert result.error == "PaymentStatusId: 99 not recognised"
        assert result.submission == submission
        assert customers.list_all() == []
        assert orders.list_all() == []
        assert products.get_by_id(1).stock_quantity == 10

    def test_unknown_country_writes_nothing(self):
        handler, customers, orders, *_ = _setup()
        submission = make_submission(address=make_address(two_letter_country_code="ZZ"))
        result = handler.handle(STORE_TOKEN, submission)

        assert result.error_kind is ErrorKind.INVALID
        assert "ZZ" in result.error
        assert customers.list_all() == []
        assert orders.list_all() == []

    def test_zero_quantity_writes_nothing(self):
        handler, customers, orders, *_ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission(order_items=[make_item(quantity=0)]))

        assert result.error_kind is ErrorKind.INVALID
        assert customers.list_all() == []
        assert orders.list_all() == []


class TestUnknownProduct:

    def test_order_deleted_but_earlier_effects_remain(self):
        handler, customers, orders, products, activity, events = _setup()
        submission = make_submission(
            order_items=[make_item(product_id=1, quantity=2), make_item(product_id=42, quantity=1)]
        )
        result = handler.handle(STORE_TOKEN, submission)

        assert result.error_kind is ErrorKind.INVALID
        assert result.error == "Product not found: 42"
        assert result.submission == submission
        assert orders.list_all() == []
        assert orders.deleted == [1]
        # Not rolled back
        assert len(customers.list_all()) == 1
        assert products.get_by_id(1).stock_quantity == 8
        assert len(orders.all_items) == 1
        # Nothing announced
        assert activity.entries == []
        assert events.events == []


class TestInternalFailures:

    def test_order_insert_failure(self):
        handler, customers, orders, *_ = _setup()
        orders.fail_insert = True
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.error_kind is ErrorKind.INTERNAL
        assert "StorageFailure" in result.error
        assert orders.deleted == []
        assert len(customers.list_all()) == 1

    def test_unexpected_error_reports_traceback(self):
        handler, _, orders, *_ = _setup()
        orders.fail_update = True
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.error.startswith("Traceback (most recent call last):")
        assert "in update" in result.error
        assert result.error.endswith("StorageFailure: orders table is read-only")

    def test_domain_error_reports_message_only(self):
        handler, *_ = _setup()
        result = handler.handle(STORE_TOKEN, make_submission(order_status_id=1))

        assert result.error == "OrderStatusId: 1 not recognised"

    def test_order_number_update_failure_compensates(self):
        handler, _, orders, products, *_ = _setup()
        orders.fail_update = True
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.error_kind is ErrorKind.INTERNAL
        assert orders.deleted == [1]
        assert orders.list_all() == []
        assert products.get_by_id(1).stock_quantity == 10

    def test_inventory_failure_compensates(self):
        handler, _, orders, products, *_ = _setup()
        products.fail_adjust = True
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.error_kind is ErrorKind.INTERNAL
        assert orders.deleted == [1]

    def test_missing_guest_role(self):
        handler, customers, orders, *_ = _setup(roles=[])
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.error_kind is ErrorKind.INTERNAL
        assert result.error == f"Customer role '{GUESTS_ROLE}' not found"
        assert orders.list_all() == []


class TestBestEffortSteps:

    def test_attribute_failure_keeps_order(self):
        handler, customers, orders, *_ = _setup()
        customers.fail_attributes = True
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.ok
        assert [f.step for f in result.side_effect_failures] == ["customer_attributes"]
        assert orders.get_by_id(result.order_id) is not None

    def test_note_failure_keeps_order(self):
        handler, _, orders, *_ = _setup()
        orders.fail_notes = True
        result = handler.handle(STORE_TOKEN, make_submission(notes=["a", "b"]))

        assert result.ok
        assert [f.step for f in result.side_effect_failures] == ["order_note", "order_note"]
        assert orders.deleted == []

    def test_activity_failure_still_publishes(self):
        handler, _, _, _, activity, events = _setup()
        activity.fail = True
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.ok
        assert [f.step for f in result.side_effect_failures] == ["activity_log"]
        assert len(events.events) == 1

    def test_publish_failure_keeps_order(self):
        handler, _, orders, _, activity, events = _setup()
        events.fail = True
        result = handler.handle(STORE_TOKEN, make_submission())

        assert result.ok
        assert [f.step for f in result.side_effect_failures] == ["publish_order_placed"]
        assert "event bus unavailable" in result.side_effect_failures[0].error
        assert len(activity.entries) == 1
        assert orders.get_by_id(result.order_id) is not None
