"""CLI commands for the Order aggregate."""

from __future__ import annotations

import click

from agrimarket.application.dto import CheckoutItemSpec, OrderDTO
from agrimarket.domain.exceptions import DomainException
from agrimarket.infrastructure.bootstrap import container


def _parse_items(raw: str) -> list[CheckoutItemSpec]:
    """Parse '1:3,2:5' (product ID:quantity) into CheckoutItemSpec list."""
    specs: list[CheckoutItemSpec] = []
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid item format '{pair}'. Expected 'ProductId:Quantity'."
            )
        product_id, qty_str = pair.rsplit(":", 1)
        try:
            qty = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{product_id}'."
            )
        specs.append(CheckoutItemSpec(product_id=product_id.strip(), quantity=qty))
    return specs


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status}, payment={dto.payment_method})")
    click.echo(f"Buyer:   {dto.buyer_id}")
    click.echo(f"Created: {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<20} {'Qty':>8} {'Pool':>11} {'Rate':>10} {'Subtotal':>10}")
    click.echo(f"  {'-'*63}")
    for item in dto.items:
        qty = f"{item.quantity} {item.unit}"
        click.echo(
            f"  {item.product_name:<20} {qty:>8} {item.stock_pool:>11} "
            f"{item.price_per_unit:>10} {item.subtotal:>10}"
        )
    click.echo(f"  {'-'*63}")
    click.echo(f"  {'Order Total':<20} {'Rs. ' + dto.total_amount:>43}")


@click.command("place")
@click.option("--as", "actor_id", required=True, help="Buyer's user ID.")
@click.option("--items", required=True, help="Items as 'ProductId:Qty,ProductId:Qty'.")
@click.option("--street", required=True)
@click.option("--city", required=True)
@click.option("--state", required=True)
@click.option("--pincode", required=True)
@click.option("--phone", required=True)
@click.option(
    "--payment",
    type=click.Choice(["cod", "online", "bank_transfer"]),
    default=None,
    help="Payment method (default: cod).",
)
@click.option("--notes", default=None, help="Delivery notes.")
def order_place(
    actor_id: str,
    items: str,
    street: str,
    city: str,
    state: str,
    pincode: str,
    phone: str,
    payment: str | None,
    notes: str | None,
) -> None:
    """Place an order (reserves stock)."""
    specs = _parse_items(items)
    app = container()

    try:
        buyer = app.authenticate(actor_id)
        dto = app.place_order().handle(
            buyer=buyer,
            item_specs=specs,
            shipping_address={
                "street": street,
                "city": city,
                "state": state,
                "pincode": pincode,
                "phone": phone,
            },
            payment_method=payment,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo("Order placed successfully")
    _display_order(dto)


@click.command("status")
@click.option("--as", "actor_id", required=True, help="Farmer's user ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--to", "new_status", required=True, help="New status.")
def order_status(actor_id: str, order_id: int, new_status: str) -> None:
    """Advance (or cancel) an order along the status pipeline."""
    app = container()

    try:
        actor = app.authenticate(actor_id)
        dto = app.update_order_status().handle(order_id, actor, new_status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} is now {dto.status}.")


@click.command("show")
@click.option("--as", "actor_id", required=True, help="Viewer's user ID.")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(actor_id: str, order_id: int) -> None:
    """Show details of an existing order."""
    app = container()

    try:
        viewer = app.authenticate(actor_id)
        dto = app.show_order().handle(order_id, viewer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("mine")
@click.option("--as", "actor_id", required=True, help="Buyer's user ID.")
def order_mine(actor_id: str) -> None:
    """List the orders a buyer has placed, newest first."""
    app = container()

    try:
        buyer = app.authenticate(actor_id)
        orders = app.list_buyer_orders().handle(buyer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("farmer")
@click.option("--as", "actor_id", required=True, help="Farmer's user ID.")
def order_farmer(actor_id: str) -> None:
    """List orders containing the farmer's products, newest first."""
    app = container()

    try:
        farmer = app.authenticate(actor_id)
        orders = app.list_farmer_orders().handle(farmer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_summary(orders)


@click.command("receipt")
@click.option("--as", "actor_id", required=True, help="Viewer's user ID.")
@click.option("--id", "order_id", required=True, type=int, help="Delivered order ID.")
def order_receipt(actor_id: str, order_id: int) -> None:
    """Print the receipt of a delivered order."""
    app = container()

    try:
        viewer = app.authenticate(actor_id)
        text = app.render_receipt().handle(order_id, viewer)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(text, nl=False)


def _display_summary(orders: list[OrderDTO]) -> None:
    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Status':<12} {'Items':>6} {'Total':>14} {'Created':<26}")
    click.echo("-" * 68)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.status:<12} {len(o.items):>6} "
            f"{'Rs. ' + o.total_amount:>14} {o.created_at:<26}"
        )
