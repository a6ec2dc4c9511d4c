"""Application service: Ingest Order use case.

Imports one completed sale from the sales channel.  The host platform
only offers per-row inserts, so the import is a fixed sequence of writes:

1. authenticate the store token
2. resolve the store's primary currency
3. validate the submission and build the entity graph (no writes yet)
4. insert the customer and attach the guest role
5. insert the order
6. back-fill the customer-facing order number
7. per line: insert the order item and decrement the product's stock
8. best-effort: order notes
9. best-effort: activity log entry and ``OrderPlaced`` event

If a required step fails once the order row exists, the order row is
deleted before the error is returned.  Nothing else is rolled back: the
customer, order items already inserted and stock already decremented stay
as they are.
"""

from __future__ import annotations

import traceback
from collections.abc import Callable
from datetime import datetime

import structlog

from polycommerce.application.best_effort import BestEffort
from polycommerce.application.dto import IngestionResult, OrderSubmission
from polycommerce.application.order_assembler import AssembledOrder, OrderAssembler
from polycommerce.domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    ErrorKind,
    UnauthorizedError,
)
from polycommerce.domain.model.customer import GUESTS_ROLE, Customer
from polycommerce.domain.model.events import OrderPlaced
from polycommerce.domain.model.order import Order, OrderItem, OrderNote
from polycommerce.domain.model.reference import SUPPORTED_LANGUAGE, Store
from polycommerce.domain.repository.activity_log import ActivityLog
from polycommerce.domain.repository.customer_repository import CustomerRepository
from polycommerce.domain.repository.event_publisher import EventPublisher
from polycommerce.domain.repository.lookup_gateway import LookupGateway
from polycommerce.domain.repository.order_repository import OrderRepository
from polycommerce.domain.repository.product_repository import ProductRepository
from polycommerce.domain.service.inventory_adjuster import InventoryAdjuster, utc_now
from polycommerce.domain.service.order_number_formatter import OrderNumberFormatter

logger = structlog.get_logger(__name__)

PLACE_ORDER_ACTIVITY = "PublicStore.PlaceOrder"


class IngestOrderHandler:

    def __init__(
        self,
        lookup: LookupGateway,
        customer_repo: CustomerRepository,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        activity_log: ActivityLog,
        event_publisher: EventPublisher,
        number_formatter: OrderNumberFormatter | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self._lookup = lookup
        self._customer_repo = customer_repo
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._activity_log = activity_log
        self._event_publisher = event_publisher
        self._number_formatter = number_formatter or OrderNumberFormatter()
        self._clock = clock
        self._assembler = OrderAssembler(clock)
        self._inventory = InventoryAdjuster(product_repo, clock)

    def handle(self, token: str | None, submission: OrderSubmission | None) -> IngestionResult:
        """Import *submission* for the store identified by *token*.

        Never raises: every failure is reported through the returned
        IngestionResult together with the submission that caused it.
        """
        side_effects = BestEffort()
        order: Order | None = None

        try:
            store = self._authenticate(token)
            assembled = self._assemble(store, submission)

            self._create_customer(assembled.customer, submission, side_effects)

            order = assembled.order
            order.customer_id = assembled.customer.id
            self._order_repo.insert(order)

            order.assign_order_number(self._number_formatter.generate(order))
            self._order_repo.update(order)

            for item in assembled.items:
                self._import_line(order, item)
        except Exception as exc:
            return self._fail(exc, order, submission, side_effects)

        self._add_notes(order, submission, side_effects)
        self._record_placement(order, side_effects)

        logger.info(
            "Order ingested",
            order_id=order.id,
            custom_order_number=order.custom_order_number,
            store_id=order.store_id,
            customer_id=order.customer_id,
            item_count=len(assembled.items),
            side_effect_failures=len(side_effects.failures),
        )
        return IngestionResult.success(order.id, side_effects.failures)  # type: ignore[arg-type]

    # --- Required steps -------------------------------------------------------

    def _authenticate(self, token: str | None) -> Store:
        store = self._lookup.resolve_store(token)
        if store is None:
            raise UnauthorizedError("Store token not recognised")
        return store

    def _assemble(self, store: Store, submission: OrderSubmission | None) -> AssembledOrder:
        currency = self._lookup.resolve_primary_currency(store)

        self._assembler.validate(submission)
        country = self._lookup.resolve_country(
            submission.address.two_letter_country_code  # type: ignore[union-attr]
        )
        language = self._lookup.resolve_language(SUPPORTED_LANGUAGE)

        return self._assembler.assemble(submission, store, currency, country, language)  # type: ignore[arg-type]

    def _create_customer(
        self,
        customer: Customer,
        submission: OrderSubmission | None,
        side_effects: BestEffort,
    ) -> None:
        self._customer_repo.insert(customer)

        guest_role = self._customer_repo.get_role_by_system_name(GUESTS_ROLE)
        if guest_role is None:
            raise DomainException(f"Customer role '{GUESTS_ROLE}' not found")
        customer.add_role(guest_role)
        self._customer_repo.update(customer)

        address = submission.address  # type: ignore[union-attr]
        with side_effects.attempt("customer_attributes", customer_id=customer.id):
            if address.first_name:
                self._customer_repo.save_attribute(customer, "FirstName", address.first_name)
            if address.last_name:
                self._customer_repo.save_attribute(customer, "LastName", address.last_name)

    def _import_line(self, order: Order, item: OrderItem) -> None:
        product = self._product_repo.get_by_id(item.product_id)
        if product is None:
            raise EntityNotFoundError(f"Product not found: {item.product_id}")

        item.order_id = order.id
        item.product_id = product.id
        self._order_repo.insert_item(item)

        self._inventory.adjust(product, -item.quantity.value)

    # --- Best-effort steps ----------------------------------------------------

    def _add_notes(
        self,
        order: Order,
        submission: OrderSubmission | None,
        side_effects: BestEffort,
    ) -> None:
        for text in submission.notes or []:  # type: ignore[union-attr]
            with side_effects.attempt("order_note", order_id=order.id):
                self._order_repo.insert_note(
                    OrderNote(id=None, order_id=order.id, note=text, created_on=self._clock())  # type: ignore[arg-type]
                )

    def _record_placement(self, order: Order, side_effects: BestEffort) -> None:
        with side_effects.attempt("activity_log", order_id=order.id):
            self._activity_log.insert_activity(
                PLACE_ORDER_ACTIVITY,
                f"Placed a new order (ID = {order.id})",
                entity_name="Order",
                entity_id=order.id,
            )

        with side_effects.attempt("publish_order_placed", order_id=order.id):
            self._event_publisher.publish(
                OrderPlaced(
                    order_id=order.id,  # type: ignore[arg-type]
                    store_id=order.store_id,
                    customer_id=order.customer_id,  # type: ignore[arg-type]
                    custom_order_number=order.custom_order_number,
                    order_total=str(order.order_total.amount),
                    occurred_on=self._clock(),
                )
            )

    # --- Failure handling -----------------------------------------------------

    def _fail(
        self,
        exc: Exception,
        order: Order | None,
        submission: OrderSubmission | None,
        side_effects: BestEffort,
    ) -> IngestionResult:
        kind = exc.kind if isinstance(exc, DomainException) else ErrorKind.INTERNAL

        if kind is ErrorKind.UNAUTHORIZED:
            logger.warning("Order ingestion rejected: unknown store token")
            return IngestionResult.failure(kind, str(exc), submission, side_effects.failures)

        logger.error(
            "Error saving channel order",
            error_kind=kind.value,
            error=str(exc),
            submission=submission.to_json() if submission is not None else None,
            exc_info=exc,
        )

        if order is not None and order.id is not None:
            self._compensate(order)

        return IngestionResult.failure(
            kind, _describe(exc), submission, side_effects.failures
        )

    def _compensate(self, order: Order) -> None:
        """Delete the order row written earlier in this import."""
        try:
            self._order_repo.delete(order)
        except Exception:
            logger.exception("Compensation failed: order row left in place", order_id=order.id)
            return
        logger.info("Compensation: order row deleted", order_id=order.id)


def _describe(exc: Exception) -> str:
    """Message for domain errors; the full traceback for anything unexpected."""
    if isinstance(exc, DomainException):
        return str(exc)
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)).rstrip()
