"""CLI commands for the Product catalog."""

from __future__ import annotations

import click

from wms.application.add_product import AddProductHandler
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import inventory_ledger, product_repository


@click.command("add")
@click.option("--sku", required=True, help="Unique stock-keeping unit.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Unit price (e.g. 15.00).")
@click.option("--quantity", default=0, type=int, help="Opening stock.")
@click.option("--minimum-level", default=None, type=int, help="Low-stock threshold.")
def product_add(
    sku: str, name: str, price: str, quantity: int, minimum_level: int | None
) -> None:
    """Add a product to the catalog and open its stock record."""
    handler = AddProductHandler(
        product_repo=product_repository(),
        ledger=inventory_ledger(),
    )

    try:
        product = handler.handle(
            sku=sku, name=name, price=price, quantity=quantity, minimum_level=minimum_level
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} {product.sku} '{product.name}' added at {product.price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = product_repository().list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'SKU':<12} {'Name':<20} {'Price':>14}")
    click.echo("-" * 55)
    for p in products:
        click.echo(f"{p.id:<6} {p.sku:<12} {p.name:<20} {str(p.price):>14}")
