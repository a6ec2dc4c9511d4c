import click
import uvicorn

from polycommerce.infrastructure.cli.order_commands import (
    order_add,
    order_shipped,
    order_show,
)
from polycommerce.infrastructure.cli.store_commands import store_currency, store_seed
from polycommerce.infrastructure.config import load_settings
from polycommerce.infrastructure.http.app import create_app
from polycommerce.infrastructure.logging import configure_logging


@click.group()
def cli() -> None:
    """PolyCommerce: import sales channel orders into the store."""
    configure_logging(load_settings())


@cli.group()
def order() -> None:
    """Import and inspect channel orders."""


@cli.group()
def store() -> None:
    """Inspect and seed the connected store."""


@cli.command("serve")
@click.option("--host", default=None, help="Bind address (default from POLYCOMMERCE_HOST).")
@click.option("--port", default=None, type=int, help="Port (default from POLYCOMMERCE_PORT).")
def serve(host: str | None, port: int | None) -> None:
    """Run the HTTP endpoints."""
    settings = load_settings()
    uvicorn.run(
        create_app(settings=settings),
        host=host or settings.host,
        port=port or settings.port,
        log_config=None,
    )


# Register subcommands
order.add_command(order_add)
order.add_command(order_shipped)
order.add_command(order_show)
store.add_command(store_currency)
store.add_command(store_seed)
