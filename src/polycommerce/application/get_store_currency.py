"""Application service: Get Store Currency use case (query)."""

from __future__ import annotations

from polycommerce.application.dto import StoreCurrencyDTO
from polycommerce.domain.exceptions import UnauthorizedError
from polycommerce.domain.repository.lookup_gateway import LookupGateway


class GetStoreCurrencyHandler:

    def __init__(self, lookup: LookupGateway) -> None:
        self._lookup = lookup

    def handle(self, token: str | None) -> StoreCurrencyDTO:
        """Return the primary currency the channel must price orders in."""
        store = self._lookup.resolve_store(token)
        if store is None:
            raise UnauthorizedError("Store token not recognised")
        currency = self._lookup.resolve_primary_currency(store)
        return StoreCurrencyDTO(currency_code=currency.code)
