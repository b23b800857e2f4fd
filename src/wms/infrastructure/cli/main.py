import click

from wms.infrastructure.cli.inventory_commands import (
    inventory_adjust,
    inventory_history,
    inventory_show,
)
from wms.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_list,
    order_show,
    order_status,
)
from wms.infrastructure.cli.product_commands import product_add, product_list
from wms.infrastructure.cli.user_commands import user_add, user_list
from wms.infrastructure.config import get_settings
from wms.infrastructure.logging_config import configure_logging


@click.group()
def cli() -> None:
    """WMS — Warehouse order & inventory core"""
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)


@cli.group()
def order() -> None:
    """Manage orders."""


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def inventory() -> None:
    """Inspect and adjust stock."""


@cli.group()
def user() -> None:
    """Manage customers and staff."""


# Register subcommands
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_list)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_history)
inventory.add_command(inventory_show)
user.add_command(user_add)
user.add_command(user_list)
