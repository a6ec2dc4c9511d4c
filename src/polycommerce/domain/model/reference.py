"""Reference data owned by the host platform.

Stores, currencies, countries and languages are read-only to the
ingestion flow.  They are resolved through the LookupGateway and never
written by this package.
"""

from __future__ import annotations

from dataclasses import dataclass

# Customers created by the sales channel are always attached to this
# language.  Resolved by name so a missing row fails loudly.
SUPPORTED_LANGUAGE = "English"


@dataclass(frozen=True)
class Store:
    """A storefront connected to the sales channel."""

    id: int
    name: str
    token: str
    primary_currency_id: int


@dataclass(frozen=True)
class Currency:
    id: int
    code: str
    name: str = ""


@dataclass(frozen=True)
class Country:
    id: int
    name: str
    two_letter_iso_code: str


@dataclass(frozen=True)
class Language:
    id: int
    name: str
