import click

from agrimarket.infrastructure.cli.order_commands import (
    order_farmer,
    order_mine,
    order_place,
    order_receipt,
    order_show,
    order_status,
)
from agrimarket.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_stock,
)
from agrimarket.infrastructure.cli.user_commands import user_add, user_list


@click.group()
def cli() -> None:
    """AgriMarket: farm-to-buyer ordering"""


@cli.group()
def order() -> None:
    """Place and track orders."""


@cli.group()
def product() -> None:
    """Manage products and stock."""


@cli.group()
def user() -> None:
    """Manage users."""


# Register subcommands
order.add_command(order_farmer)
order.add_command(order_mine)
order.add_command(order_place)
order.add_command(order_receipt)
order.add_command(order_show)
order.add_command(order_status)
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_stock)
user.add_command(user_add)
user.add_command(user_list)
