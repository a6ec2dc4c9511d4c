"""JSON-file-backed implementation of LookupGateway."""

from __future__ import annotations

from pathlib import Path

from polycommerce.domain.exceptions import EntityNotFoundError
from polycommerce.domain.model.reference import Country, Currency, Language, Store
from polycommerce.domain.repository.lookup_gateway import LookupGateway
from polycommerce.infrastructure.persistence.json_table import JsonTable


class JsonLookupGateway(LookupGateway):

    def __init__(self, data_dir: Path) -> None:
        self._stores = JsonTable(data_dir / "stores.json")
        self._currencies = JsonTable(data_dir / "currencies.json")
        self._countries = JsonTable(data_dir / "countries.json")
        self._languages = JsonTable(data_dir / "languages.json")

    # --- LookupGateway interface ----------------------------------------------

    def resolve_store(self, token: str | None) -> Store | None:
        if not token or not token.strip():
            return None
        for raw in self._stores.load():
            if raw.get("token") == token:
                return Store(
                    id=raw["id"],
                    name=raw["name"],
                    token=raw["token"],
                    primary_currency_id=raw["primary_currency_id"],
                )
        return None

    def resolve_primary_currency(self, store: Store) -> Currency:
        raw = self._currencies.find(store.primary_currency_id)
        if raw is None:
            raise EntityNotFoundError(
                f"Primary currency #{store.primary_currency_id} of store '{store.name}' not found"
            )
        return Currency(id=raw["id"], code=raw["code"], name=raw.get("name", ""))

    def resolve_country(self, two_letter_iso_code: str | None) -> Country:
        code = (two_letter_iso_code or "").strip().upper()
        for raw in self._countries.load():
            if raw["two_letter_iso_code"].upper() == code:
                return Country(
                    id=raw["id"],
                    name=raw["name"],
                    two_letter_iso_code=raw["two_letter_iso_code"],
                )
        raise EntityNotFoundError(f"Country not found: '{two_letter_iso_code}'")

    def resolve_language(self, name: str) -> Language:
        for raw in self._languages.load():
            if raw["name"] == name:
                return Language(id=raw["id"], name=raw["name"])
        raise EntityNotFoundError(f"Language not found: '{name}'")
