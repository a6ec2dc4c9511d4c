"""Abstract gateway for authentication and reference data.

Store-by-token resolution and the currency, country and language tables
are owned by the host platform.  Injecting them behind one port lets tests
substitute an in-memory fake.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from polycommerce.domain.model.reference import Country, Currency, Language, Store


class LookupGateway(ABC):

    @abstractmethod
    def resolve_store(self, token: str | None) -> Store | None:
        """Return the store the token belongs to, or None if it is unknown."""

    @abstractmethod
    def resolve_primary_currency(self, store: Store) -> Currency:
        """Return the store's primary currency.

        Raises EntityNotFoundError if the currency row is missing.
        """

    @abstractmethod
    def resolve_country(self, two_letter_iso_code: str | None) -> Country:
        """Return a country by ISO code.

        Raises EntityNotFoundError if no country matches.
        """

    @abstractmethod
    def resolve_language(self, name: str) -> Language:
        """Return a language by name.

        Raises EntityNotFoundError if no language matches.
        """
