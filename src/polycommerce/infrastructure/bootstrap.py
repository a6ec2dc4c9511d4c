"""Composition root: builds the JSON-backed adapters and the use case handlers.

Adapters (HTTP, CLI) ask this module for ready handlers; nothing else
imports a concrete repository.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from polycommerce.application.check_shipped_orders import CheckShippedOrdersHandler
from polycommerce.application.get_store_currency import GetStoreCurrencyHandler
from polycommerce.application.ingest_order import IngestOrderHandler
from polycommerce.application.show_order import ShowOrderHandler
from polycommerce.domain.model.customer import GUESTS_ROLE
from polycommerce.domain.model.reference import SUPPORTED_LANGUAGE
from polycommerce.domain.service.order_number_formatter import OrderNumberFormatter
from polycommerce.infrastructure.config import Settings, load_settings
from polycommerce.infrastructure.events import InProcessEventPublisher
from polycommerce.infrastructure.persistence.json_activity_log import JsonActivityLog
from polycommerce.infrastructure.persistence.json_customer_repository import (
    JsonCustomerRepository,
)
from polycommerce.infrastructure.persistence.json_lookup_gateway import JsonLookupGateway
from polycommerce.infrastructure.persistence.json_order_repository import (
    JsonOrderRepository,
)
from polycommerce.infrastructure.persistence.json_product_repository import (
    JsonProductRepository,
)


@dataclass(frozen=True)
class Handlers:
    """Every use case, ready to serve a request."""

    ingest_order: IngestOrderHandler
    check_shipped_orders: CheckShippedOrdersHandler
    get_store_currency: GetStoreCurrencyHandler
    show_order: ShowOrderHandler


def lookup_gateway(settings: Settings) -> JsonLookupGateway:
    return JsonLookupGateway(settings.data_dir)


def customer_repository(settings: Settings) -> JsonCustomerRepository:
    return JsonCustomerRepository(settings.data_dir)


def order_repository(settings: Settings) -> JsonOrderRepository:
    return JsonOrderRepository(settings.data_dir)


def product_repository(settings: Settings) -> JsonProductRepository:
    return JsonProductRepository(settings.data_dir / "products.json")


def activity_log(settings: Settings) -> JsonActivityLog:
    return JsonActivityLog(settings.data_dir / "activity_log.json")


def build_handlers(settings: Settings | None = None) -> Handlers:
    settings = settings or load_settings()
    lookup = lookup_gateway(settings)
    orders = order_repository(settings)
    return Handlers(
        ingest_order=IngestOrderHandler(
            lookup=lookup,
            customer_repo=customer_repository(settings),
            order_repo=orders,
            product_repo=product_repository(settings),
            activity_log=activity_log(settings),
            event_publisher=InProcessEventPublisher(),
            number_formatter=OrderNumberFormatter(settings.order_number_mask),
        ),
        check_shipped_orders=CheckShippedOrdersHandler(lookup, orders),
        get_store_currency=GetStoreCurrencyHandler(lookup),
        show_order=ShowOrderHandler(orders),
    )


# --- Reference data -----------------------------------------------------------

_DEFAULT_COUNTRIES = [
    {"id": 1, "name": "United States", "two_letter_iso_code": "US"},
    {"id": 2, "name": "United Kingdom", "two_letter_iso_code": "GB"},
    {"id": 3, "name": "Australia", "two_letter_iso_code": "AU"},
    {"id": 4, "name": "New Zealand", "two_letter_iso_code": "NZ"},
    {"id": 5, "name": "Canada", "two_letter_iso_code": "CA"},
]


def seed_reference_data(
    data_dir: Path,
    store_token: str,
    store_name: str = "Default store",
    currency_code: str = "USD",
    products: list[tuple[int, str, int]] | None = None,
) -> None:
    """Write the rows the host platform would already have.

    Existing files are overwritten, except ``products.json`` which is only
    touched when *products* is given.
    """
    data_dir.mkdir(parents=True, exist_ok=True)
    tables = {
        "stores.json": [
            {"id": 1, "name": store_name, "token": store_token, "primary_currency_id": 1}
        ],
        "currencies.json": [{"id": 1, "code": currency_code.upper(), "name": currency_code.upper()}],
        "countries.json": _DEFAULT_COUNTRIES,
        "languages.json": [{"id": 1, "name": SUPPORTED_LANGUAGE}],
        "customer_roles.json": [{"id": 1, "name": "Guests", "system_name": GUESTS_ROLE}],
    }
    if products is not None:
        tables["products.json"] = [
            {
                "id": product_id,
                "name": name,
                "stock_quantity": stock,
                "updated_on": "2000-01-01T00:00:00+00:00",
            }
            for product_id, name, stock in products
        ]
    for file_name, rows in tables.items():
        (data_dir / file_name).write_text(json.dumps(rows, indent=2) + "\n", encoding="utf-8")
