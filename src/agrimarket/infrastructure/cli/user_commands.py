"""CLI commands for seeding users."""

from __future__ import annotations

import click

from agrimarket.domain.exceptions import DomainException
from agrimarket.infrastructure.bootstrap import container


@click.command("add")
@click.option("--name", required=True, help="Display name.")
@click.option("--email", required=True, help="E-mail address.")
@click.option(
    "--role",
    required=True,
    type=click.Choice(["farmer", "individual", "industrial"]),
    help="Marketplace role.",
)
def user_add(name: str, email: str, role: str) -> None:
    """Register a user."""
    try:
        user = container().register_user().handle(name=name, email=email, role=role)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"User {user.id} '{user.name}' registered as {user.role.value}")


@click.command("list")
def user_list() -> None:
    """List registered users."""
    users = container().user_repo.list_all()

    if not users:
        click.echo("No users found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Role':<12} {'Email'}")
    click.echo("-" * 60)
    for u in users:
        click.echo(f"{u.id:<6} {u.name:<20} {u.role.value:<12} {u.email}")
