"""CLI commands for stock, variants and bundle contents."""

from __future__ import annotations

import click

from rentals.application.add_variant import AddColorVariantHandler, AddSizeVariantHandler
from rentals.application.adjust_stock import AdjustStockHandler, StockAction
from rentals.application.describe_bundle import DescribeBundleHandler
from rentals.application.set_bundle_components import SetBundleComponentsHandler
from rentals.application.show_inventory import ShowInventoryHandler, total_pieces
from rentals.domain.exceptions import DomainException, EntityNotFoundError
from rentals.infrastructure.bootstrap import build_backend


def _parse_components(raw: str) -> dict[str, int]:
    """Parse 'Silla:10,Tablón:1' into {name: qty}."""
    result: dict[str, int] = {}
    for pair in raw.split(","):
        pair = pair.strip()
        if ":" not in pair:
            raise click.BadParameter(
                f"Invalid component '{pair}'. Expected 'ProductName:Quantity'."
            )
        name, qty_str = pair.rsplit(":", 1)
        try:
            result[name.strip()] = int(qty_str)
        except ValueError:
            raise click.BadParameter(
                f"Invalid quantity '{qty_str}' for product '{name}'."
            )
    return result


@click.command("show")
def inventory_show() -> None:
    """Show stock for every product."""
    try:
        lines = ShowInventoryHandler(product_repo=build_backend().products).handle()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo("No products found.")
        return

    click.echo(f"{'Product':<24} {'Price':>10} {'Stock':>8}")
    click.echo("-" * 44)
    for line in lines:
        stock = "-" if line.is_bundle else str(line.stock)
        click.echo(f"{line.product_name:<24} {line.price:>10} {stock:>8}")
        for color, pieces in line.colors:
            click.echo(f"    {color:<20} {'':>10} {pieces:>8}")
        for size, price in line.sizes:
            click.echo(f"    {size:<20} {price:>10}")
    click.echo("-" * 44)
    click.echo(f"{'Total pieces':<35} {total_pieces(lines):>8}")


@click.command("adjust")
@click.option("--product", required=True, help="Product name.")
@click.option(
    "--action",
    type=click.Choice([a.value for a in StockAction]),
    default=StockAction.ADD.value,
    help="Add to, remove from or set the stock.",
)
@click.option("--quantity", required=True, type=int, help="Pieces.")
@click.option("--color", default=None, help="Colour, for colour-bearing products.")
def inventory_adjust(product: str, action: str, quantity: int, color: str | None) -> None:
    """Change the stock of a product or one of its colours."""
    try:
        handler = AdjustStockHandler(product_repo=build_backend().products)
        level = handler.handle(
            product_name=product,
            action=StockAction(action),
            quantity=quantity,
            color=color,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    label = f"{product} ({color})" if color else product
    click.echo(f"Stock of '{label}' is now {level}")


@click.command("add-color")
@click.option("--product", required=True, help="Product name.")
@click.option("--color", required=True, help="Colour name.")
@click.option("--stock", default=0, type=int, help="Pieces in this colour.")
def inventory_add_color(product: str, color: str, stock: int) -> None:
    """Register a colour of a colour-bearing product."""
    try:
        handler = AddColorVariantHandler(product_repo=build_backend().products)
        variant = handler.handle(product_name=product, color=color, stock=stock)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Colour '{variant.color}' added to '{product}' with {variant.stock_available} pieces")


@click.command("add-size")
@click.option("--product", required=True, help="Product name.")
@click.option("--size", required=True, help="Size name.")
@click.option("--price", required=True, help="Rental price of this size.")
def inventory_add_size(product: str, size: str, price: str) -> None:
    """Register a size of a sized product."""
    try:
        handler = AddSizeVariantHandler(product_repo=build_backend().products)
        variant = handler.handle(product_name=product, size=size, price=price)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Size '{variant.size}' added to '{product}' at {variant.rental_price}")


@click.command("bundle")
@click.option("--name", required=True, help="Bundle name.")
@click.option("--components", required=True, help="Contents as 'Product:Qty,Product:Qty'.")
def inventory_bundle(name: str, components: str) -> None:
    """Set what a bundle contains."""
    contents = _parse_components(components)
    try:
        handler = SetBundleComponentsHandler(product_repo=build_backend().products)
        saved = handler.handle(bundle_name=name, components=contents)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Bundle '{name}' now holds {len(saved)} products")


@click.command("describe")
@click.option("--name", required=True, help="Bundle name.")
def inventory_describe(name: str) -> None:
    """Describe what a bundle contains."""
    try:
        products = build_backend().products
        bundle = products.get_by_name(name)
        if bundle is None:
            raise EntityNotFoundError(f"Product not found: '{name}'")
        description = DescribeBundleHandler(product_repo=products).handle(bundle.id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(description or f"'{bundle.name}' has no components")
