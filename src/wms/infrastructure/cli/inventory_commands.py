"""CLI commands for stock levels."""

from __future__ import annotations

import click

from wms.application.adjust_stock import AdjustStockHandler
from wms.application.show_inventory import ShowInventoryHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import (
    audit_log,
    inventory_ledger,
    product_repository,
    stock_repository,
)


@click.command("adjust")
@click.option("--sku", required=True, help="Product SKU.")
@click.option("--delta", required=True, type=int, help="Signed change, e.g. 50 or -3.")
@click.option("--notes", default=None, help="Reason for the adjustment.")
def inventory_adjust(sku: str, delta: int, notes: str | None) -> None:
    """Apply a signed stock correction."""
    handler = AdjustStockHandler(
        product_repo=product_repository(),
        ledger=inventory_ledger(),
    )

    try:
        line = handler.handle(sku=sku, delta=delta, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Stock for '{line.sku}' is now {line.available}")
    if line.low_stock:
        click.echo(f"Warning: at or below minimum level ({line.minimum_level})")


@click.command("show")
@click.option("--low", "low_only", is_flag=True, default=False, help="Only low-stock products.")
def inventory_show(low_only: bool) -> None:
    """Show current stock levels."""
    handler = ShowInventoryHandler(
        stock_repo=stock_repository(),
        product_repo=product_repository(),
    )
    lines = handler.handle(low_stock_only=low_only)

    if not lines:
        click.echo("No stock records found.")
        return

    click.echo(f"{'SKU':<12} {'Product':<20} {'Available':>10} {'Minimum':>8}")
    click.echo("-" * 53)
    for line in lines:
        flag = "  LOW" if line.low_stock else ""
        click.echo(
            f"{line.sku:<12} {line.product_name:<20} {line.available:>10} "
            f"{line.minimum_level:>8}{flag}"
        )


@click.command("history")
@click.option("--sku", default=None, help="Only movements of this product.")
@click.option("--order", "order_ref", default=None, help="Only movements for this order number.")
def inventory_history(sku: str | None, order_ref: str | None) -> None:
    """Show the stock movement audit trail."""
    entries = audit_log().read_all()

    if sku is not None:
        product = product_repository().get_by_sku(sku)
        if product is None:
            raise click.ClickException(f"Product not found: '{sku}'")
        entries = [e for e in entries if e["product_id"] == product.id]
    if order_ref is not None:
        entries = [e for e in entries if e["order_ref"] == order_ref]

    if not entries:
        click.echo("No stock movements found.")
        return

    click.echo(f"{'When':<26} {'Type':<12} {'Product':<8} {'Qty':>6}  {'Order':<22} Notes")
    click.echo("-" * 90)
    for e in entries:
        click.echo(
            f"{e['created_at'][:19]:<26} {e['type']:<12} {e['product_id']:<8} "
            f"{e['quantity']:>6}  {e['order_ref'] or '':<22} {e['notes'] or ''}"
        )
