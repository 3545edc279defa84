import click

from rentals.infrastructure.cli.availability_commands import availability_show
from rentals.infrastructure.cli.inventory_commands import (
    inventory_add_color,
    inventory_add_size,
    inventory_adjust,
    inventory_bundle,
    inventory_describe,
    inventory_show,
)
from rentals.infrastructure.cli.order_commands import (
    order_cancel,
    order_create,
    order_day,
    order_deliver,
    order_list,
    order_pickup,
    order_show,
)
from rentals.infrastructure.cli.product_commands import (
    product_add,
    product_list,
    product_price,
)
from rentals.infrastructure.cli.salon_commands import (
    salon_cancel,
    salon_complete,
    salon_create,
    salon_list,
)
from rentals.infrastructure.cli.stats_commands import stats_dashboard, stats_period
from rentals.infrastructure.logging_config import setup_logging
from rentals.infrastructure.settings import get_settings


@click.group()
def cli() -> None:
    """Rentals: furniture and salon bookings"""
    setup_logging(get_settings().log_level)


@cli.group()
def product() -> None:
    """Manage the product catalog."""


@cli.group()
def inventory() -> None:
    """Manage stock, colours, sizes and bundles."""


@cli.group()
def order() -> None:
    """Manage rental orders."""


@cli.group()
def availability() -> None:
    """Check free furniture on a date."""


@cli.group()
def salon() -> None:
    """Manage salon bookings."""


@cli.group()
def stats() -> None:
    """Business statistics."""


# Register subcommands
product.add_command(product_add)
product.add_command(product_list)
product.add_command(product_price)
inventory.add_command(inventory_add_color)
inventory.add_command(inventory_add_size)
inventory.add_command(inventory_adjust)
inventory.add_command(inventory_bundle)
inventory.add_command(inventory_describe)
inventory.add_command(inventory_show)
order.add_command(order_cancel)
order.add_command(order_create)
order.add_command(order_day)
order.add_command(order_deliver)
order.add_command(order_list)
order.add_command(order_pickup)
order.add_command(order_show)
availability.add_command(availability_show)
salon.add_command(salon_cancel)
salon.add_command(salon_complete)
salon.add_command(salon_create)
salon.add_command(salon_list)
stats.add_command(stats_dashboard)
stats.add_command(stats_period)
