"""CLI commands for the product catalog."""

from __future__ import annotations

import click

from rentals.application.add_product import AddProductHandler
from rentals.application.update_prices import UpdatePricesHandler
from rentals.domain.exceptions import DomainException
from rentals.domain.model.product import ColorSlot
from rentals.infrastructure.bootstrap import build_backend


@click.command("add")
@click.option("--name", required=True, help="Product name.")
@click.option("--price", required=True, help="Rental price (e.g. 15.00).")
@click.option("--stock", default=0, type=int, help="Pieces owned.")
@click.option("--category", default="general", help="Catalog category.")
@click.option("--colors", "has_colors", is_flag=True, help="Stock is kept per colour.")
@click.option("--sizes", "has_sizes", is_flag=True, help="Priced per size.")
@click.option("--bundle", "is_bundle", is_flag=True, help="A package of other products.")
@click.option(
    "--color-slot",
    type=click.Choice([slot.value for slot in ColorSlot]),
    default=ColorSlot.PRIMARY.value,
    help="Which colour of a bundle line this product takes.",
)
def product_add(
    name: str,
    price: str,
    stock: int,
    category: str,
    has_colors: bool,
    has_sizes: bool,
    is_bundle: bool,
    color_slot: str,
) -> None:
    """Add a new product to the catalog."""
    try:
        handler = AddProductHandler(product_repo=build_backend().products)
        product = handler.handle(
            name=name,
            price=price,
            stock=stock,
            category=category,
            has_colors=has_colors,
            has_sizes=has_sizes,
            is_bundle=is_bundle,
            color_slot=ColorSlot(color_slot),
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Product #{product.id} '{product.name}' added at {product.rental_price}")


@click.command("list")
def product_list() -> None:
    """List all products in the catalog."""
    try:
        products = build_backend().products.list_all()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not products:
        click.echo("No products found.")
        return

    click.echo(f"{'ID':<6} {'Name':<24} {'Category':<14} {'Price':>10}")
    click.echo("-" * 57)
    for p in products:
        name = f"{p.name} (paquete)" if p.is_bundle else p.name
        click.echo(f"{p.id:<6} {name:<24} {p.category:<14} {str(p.rental_price):>10}")


@click.command("price")
@click.option(
    "--set",
    "entries",
    required=True,
    multiple=True,
    help="New price as 'ProductID=Price'; repeat for several products.",
)
def product_price(entries: tuple[str, ...]) -> None:
    """Update rental prices in bulk."""
    prices: dict[str, str] = {}
    for entry in entries:
        if "=" not in entry:
            raise click.BadParameter(
                f"Invalid entry '{entry}'. Expected 'ProductID=Price'."
            )
        product_id, price = entry.split("=", 1)
        prices[product_id.strip()] = price.strip()

    try:
        result = UpdatePricesHandler(product_repo=build_backend().products).handle(prices)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    for product_id in result.updated:
        click.echo(f"Product #{product_id} price updated to ${prices[product_id]}")
    for product_id, reason in result.failed.items():
        click.echo(f"Product #{product_id} not updated: {reason}", err=True)
    if result.failed:
        raise click.ClickException(f"{len(result.failed)} price(s) not updated")
