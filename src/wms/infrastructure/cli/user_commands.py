"""CLI commands for users."""

from __future__ import annotations

import click

from wms.application.add_user import AddUserHandler
from wms.domain.exceptions import DomainException
from wms.domain.model.user import Role
from wms.infrastructure.bootstrap import user_repository


@click.command("add")
@click.option("--name", "full_name", required=True, help="Full name.")
@click.option("--email", required=True)
@click.option(
    "--role",
    default=Role.CUSTOMER.value,
    type=click.Choice([r.value for r in Role], case_sensitive=False),
)
@click.option("--address", default=None)
@click.option("--city", default=None)
@click.option("--postal-code", default=None)
@click.option("--country", default=None)
@click.option("--phone", default=None)
def user_add(
    full_name: str,
    email: str,
    role: str,
    address: str | None,
    city: str | None,
    postal_code: str | None,
    country: str | None,
    phone: str | None,
) -> None:
    """Register a customer or staff member."""
    handler = AddUserHandler(user_repo=user_repository())

    try:
        user = handler.handle(
            full_name=full_name,
            email=email,
            role=role,
            address=address,
            city=city,
            postal_code=postal_code,
            country=country,
            phone=phone,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User #{user.id} '{user.full_name}' added as {user.role.value}")


@click.command("list")
def user_list() -> None:
    """List all users."""
    users = user_repository().list_all()

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Email':<28} {'Role':<20}")
    click.echo("-" * 80)
    for u in users:
        click.echo(f"{u.id:<6} {u.full_name:<24} {u.email:<28} {u.role.value:<20}")
