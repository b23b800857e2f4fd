"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from wms.application.cancel_order import CancelOrderHandler
from wms.application.create_order import CreateOrderHandler
from wms.application.dto import OrderDTO, OrderItemSpec
from wms.application.show_order import ListOrdersHandler, ShowOrderHandler
from wms.application.update_order_status import UpdateOrderStatusHandler
from wms.domain.exceptions import DomainException
from wms.domain.model.order import OrderStatus, ShippingInfo
from wms.infrastructure.bootstrap import order_reservation_service, product_repository


def _parse_items(raw: str) -> list[OrderItemSpec]:
    """Parse 'SKU-A:3,SKU-B:5' into OrderItemSpec list."""
    specs: list[OrderItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'SKU:Quantity'."
            )
        sku, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(f"Invalid quantity '{qty_str}' for SKU '{sku}'.")
        specs.append(OrderItemSpec(sku=sku.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    click.echo(f"Order {dto.order_number} (#{dto.id})  status={dto.status}")
    click.echo(f"Customer: {dto.customer_id}")
    click.echo(f"Created:  {dto.created_at}")
    if dto.processed_by:
        click.echo(f"Processed by: {dto.processed_by}")
    if dto.shipped_at:
        click.echo(f"Shipped:   {dto.shipped_at}")
    if dto.delivered_at:
        click.echo(f"Delivered: {dto.delivered_at}")
    ship_to = ", ".join(
        part
        for part in (
            dto.shipping_address,
            dto.shipping_postal_code,
            dto.shipping_city,
            dto.shipping_country,
        )
        if part
    )
    if ship_to:
        click.echo(f"Ship to:  {ship_to}")
    if dto.notes:
        click.echo(f"Notes:    {dto.notes}")
    click.echo()
    click.echo(f"  {'SKU':<12} {'Product':<20} {'Qty':>5} {'Price':>14} {'Total':>14}")
    click.echo(f"  {'-'*69}")
    for item in dto.items:
        click.echo(
            f"  {item.sku:<12} {item.product_name:<20} {item.quantity:>5} "
            f"{item.unit_price:>14} {item.line_total:>14}"
        )
    click.echo(f"  {'-'*69}")
    click.echo(f"  {'Order Total':<40} {dto.total:>28}")


@click.command("create")
@click.option("--customer", required=True, help="Customer user ID.")
@click.option("--items", required=True, help="Items as 'SKU:Qty,SKU:Qty'.")
@click.option("--address", default=None, help="Shipping address (defaults to customer's).")
@click.option("--city", default=None)
@click.option("--postal-code", default=None)
@click.option("--country", default=None)
@click.option("--phone", default=None)
@click.option("--notes", default=None)
def order_create(
    customer: str,
    items: str,
    address: str | None,
    city: str | None,
    postal_code: str | None,
    country: str | None,
    phone: str | None,
    notes: str | None,
) -> None:
    """Create an order, reserving stock for every line."""
    specs = _parse_items(items)
    handler = CreateOrderHandler(
        order_service=order_reservation_service(),
        product_repo=product_repository(),
    )
    shipping = ShippingInfo(
        address=address, city=city, postal_code=postal_code, country=country, phone=phone
    )

    try:
        dto = handler.handle(
            customer_id=customer, item_specs=specs, shipping=shipping, notes=notes
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} created - stock reserved.")
    click.echo()
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", type=int, default=None, help="Order ID.")
@click.option("--number", "order_number", default=None, help="Order number.")
def order_show(order_id: int | None, order_number: str | None) -> None:
    """Show details of an existing order."""
    handler = ShowOrderHandler(order_service=order_reservation_service())

    try:
        dto = handler.handle(order_id=order_id, order_number=order_number)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option(
    "--status",
    default=None,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
)
@click.option("--customer", default=None, help="Customer user ID.")
def order_list(status: str | None, customer: str | None) -> None:
    """List orders, optionally by status or customer."""
    handler = ListOrdersHandler(order_service=order_reservation_service())

    try:
        dtos = handler.handle(status=status, customer_id=customer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not dtos:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Number':<22} {'Customer':<10} {'Status':<20} {'Total':>14}")
    click.echo("-" * 76)
    for dto in dtos:
        click.echo(
            f"{dto.id:<6} {dto.order_number:<22} {dto.customer_id:<10} "
            f"{dto.status:<20} {dto.total:>14}"
        )


@click.command("status")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option(
    "--to",
    "target",
    required=True,
    type=click.Choice([s.value for s in OrderStatus], case_sensitive=False),
    help="Target status.",
)
@click.option("--actor", default=None, help="Acting operator's user ID.")
@click.option("--notes", default=None)
def order_status(order_id: int, target: str, actor: str | None, notes: str | None) -> None:
    """Move an order along its status graph."""
    handler = UpdateOrderStatusHandler(order_service=order_reservation_service())

    try:
        dto = handler.handle(order_id, target, actor_id=actor, notes=notes)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} is now {dto.status}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
@click.option("--reason", default=None, help="Cancellation reason.")
@click.option("--actor", default=None, help="Acting user ID.")
def order_cancel(order_id: int, reason: str | None, actor: str | None) -> None:
    """Cancel an order (returns its reserved stock)."""
    handler = CancelOrderHandler(order_service=order_reservation_service())

    try:
        dto = handler.handle(order_id, reason=reason, actor_id=actor)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order {dto.order_number} cancelled.")
