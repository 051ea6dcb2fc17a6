"""CLI commands for the Product aggregate and its stock pools."""

from __future__ import annotations

import click

from agrimarket.domain.exceptions import DomainException
from agrimarket.domain.model.product import UNITS
from agrimarket.infrastructure.bootstrap import container


@click.command("add")
@click.option("--as", "actor_id", required=True, help="Farmer's user ID.")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Price per unit (e.g. 42.50).")
@click.option("--unit", required=True, type=click.Choice(UNITS), help="Selling unit.")
@click.option("--local", "local_stock", default=0, type=int, help="Local market stock.")
@click.option("--industrial", "industrial_stock", default=0, type=int, help="Industrial stock.")
def product_add(
    actor_id: str,
    name: str,
    price: str,
    unit: str,
    local_stock: int,
    industrial_stock: int,
) -> None:
    """Add a new product to the catalog."""
    app = container()

    try:
        farmer = app.authenticate(actor_id)
        product = app.add_product().handle(
            farmer=farmer,
            name=name,
            price=price,
            unit=unit,
            local_stock=local_stock,
            industrial_stock=industrial_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Product #{product.id} '{product.name}' added at Rs. {product.price_per_unit}/{product.unit}"
    )


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    products = container().product_repo.list_all()

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<20} {'Farmer':<8} {'Price':>10} {'Local':>8} {'Industrial':>11}")
    click.echo("-" * 68)
    for p in products:
        click.echo(
            f"{p.id:<6} {p.name:<20} {p.farmer_id:<8} {p.price_per_unit.amount:>10.2f} "
            f"{p.local_stock:>8} {p.industrial_stock:>11}"
        )


@click.command("stock")
@click.option("--as", "actor_id", required=True, help="Owning farmer's user ID.")
@click.option("--id", "product_id", required=True, help="Product ID.")
@click.option("--local", "local_stock", default=None, type=int, help="New local stock.")
@click.option("--industrial", "industrial_stock", default=None, type=int, help="New industrial stock.")
def product_stock(
    actor_id: str,
    product_id: str,
    local_stock: int | None,
    industrial_stock: int | None,
) -> None:
    """Set a product's local/industrial stock allocation."""
    app = container()

    try:
        farmer = app.authenticate(actor_id)
        product = app.set_stock().handle(
            product_id,
            farmer,
            local_stock=local_stock,
            industrial_stock=industrial_stock,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Stock for '{product.name}' set to local={product.local_stock}, "
        f"industrial={product.industrial_stock}"
    )
