"""CLI commands for the connected store."""

from __future__ import annotations

import click

from polycommerce.domain.exceptions import DomainException
from polycommerce.infrastructure.bootstrap import build_handlers, seed_reference_data
from polycommerce.infrastructure.cli.order_commands import token_option
from polycommerce.infrastructure.config import load_settings


def _parse_product(raw: str) -> tuple[int, str, int]:
    """Parse 'ID:Name:Stock' into a product row."""
    parts = raw.split(":")
    if len(parts) != 3:
        raise click.BadParameter(f"Invalid product '{raw}'. Expected 'ID:Name:Stock'.")
    product_id, name, stock = parts
    try:
        return int(product_id), name.strip(), int(stock)
    except ValueError:
        raise click.BadParameter(f"Invalid product '{raw}'. ID and stock must be integers.")


@click.command("currency")
@token_option
def store_currency(token: str) -> None:
    """Show the store's primary currency."""
    handler = build_handlers().get_store_currency

    try:
        dto = handler.handle(token)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(dto.currency_code)


@click.command("seed")
@click.option("--token", required=True, help="Token the sales channel will send.")
@click.option("--name", "store_name", default="Default store", show_default=True)
@click.option("--currency", default="USD", show_default=True, help="Primary currency code.")
@click.option(
    "--product",
    "products",
    multiple=True,
    help="Catalog product as 'ID:Name:Stock'. Repeatable.",
)
def store_seed(token: str, store_name: str, currency: str, products: tuple[str, ...]) -> None:
    """Write the host platform's reference data to the data directory."""
    settings = load_settings()
    rows = [_parse_product(raw) for raw in products] if products else None
    seed_reference_data(settings.data_dir, token, store_name, currency, rows)
    click.echo(f"Reference data written to {settings.data_dir}")
