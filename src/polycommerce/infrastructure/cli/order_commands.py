"""CLI commands for importing and inspecting channel orders."""

from __future__ import annotations

import json
from pathlib import Path

import click
from pydantic import ValidationError as SchemaValidationError

from polycommerce.application.dto import OrderDTO
from polycommerce.domain.exceptions import DomainException
from polycommerce.infrastructure.bootstrap import build_handlers
from polycommerce.infrastructure.http.schemas import OrderSubmissionSchema

token_option = click.option(
    "--token",
    envvar="POLYCOMMERCE_STORE_TOKEN",
    required=True,
    help="Store token (or set POLYCOMMERCE_STORE_TOKEN).",
)


def _parse_ids(raw: str) -> list[int]:
    """Parse '1,2,3' into a list of order IDs."""
    ids: list[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            ids.append(int(part))
        except ValueError:
            raise click.BadParameter(f"Invalid order ID '{part}'.")
    return ids


@click.command("add")
@token_option
@click.option(
    "--file",
    "file_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="JSON file holding one order submission.",
)
def order_add(token: str, file_path: Path) -> None:
    """Import an order submission from a JSON file."""
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
        submission = OrderSubmissionSchema.model_validate(payload).to_submission()
    except (ValueError, SchemaValidationError) as exc:
        raise click.ClickException(f"Could not read submission: {exc}")

    result = build_handlers().ingest_order.handle(token, submission)

    if not result.ok:
        raise click.ClickException(f"[{result.error_kind.value}] {result.error}")  # type: ignore[union-attr]

    click.echo(f"Order #{result.order_id} imported.")
    for failure in result.side_effect_failures:
        click.echo(f"  warning: {failure.step} failed ({failure.error})")


@click.command("shipped")
@token_option
@click.option("--ids", required=True, help="Order IDs as '1,2,3'.")
def order_shipped(token: str, ids: str) -> None:
    """List which of the given orders have shipped."""
    handler = build_handlers().check_shipped_orders

    try:
        shipped = handler.handle(token, _parse_ids(ids))
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not shipped:
        click.echo("None of the given orders have shipped.")
        return
    for dto in shipped:
        click.echo(f"Order #{dto.order_id} shipped")


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order #{dto.id}  (number={dto.custom_order_number})")
    click.echo(f"Customer: #{dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo(
        f"Status:   {dto.order_status} / payment {dto.payment_status} / shipping {dto.shipping_status}"
    )
    click.echo()
    click.echo(f"  {'Product':<10} {'Qty':>5} {'Unit':>14} {'Line':>14}")
    click.echo(f"  {'-'*46}")
    for item in dto.items:
        click.echo(
            f"  {item.product_id:<10} {item.quantity:>5} "
            f"{item.unit_price_incl_tax:>14} {item.price_incl_tax:>14}"
        )
    click.echo(f"  {'-'*46}")
    click.echo(f"  {'Order Total':<17} {dto.order_total:>29}")
    for note in dto.notes:
        click.echo(f"  note: {note}")


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show an imported order."""
    handler = build_handlers().show_order

    try:
        dto = handler.handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)
