"""CLI commands for furniture orders."""

from __future__ import annotations

from datetime import date, datetime, time

import click

from rentals.application.add_order_item import AddOrderItemHandler
from rentals.application.create_order import CreateOrderHandler
from rentals.application.dto import OrderDetails, OrderDTO
from rentals.application.list_orders import ListOrdersHandler
from rentals.application.order_draft import OrderDraft
from rentals.application.show_day import ShowDayHandler
from rentals.application.show_order import ShowOrderHandler
from rentals.application.update_order_status import UpdateOrderStatusHandler
from rentals.domain.exceptions import DomainException
from rentals.domain.model.product import ColorSlot
from rentals.infrastructure.bootstrap import build_backend

# Option keys accepted after an item, e.g. "Paquete:2;tablecloth=Rojo;bow=Dorado".
_ITEM_OPTIONS = {
    "color": ColorSlot.PRIMARY,
    "tablecloth": ColorSlot.TABLECLOTH,
    "bow": ColorSlot.BOW,
}


def _parse_item(raw: str) -> tuple[str, int, dict[ColorSlot, str], str | None]:
    """Parse 'Silla:10;color=Blanco;size=Grande'."""
    head, *options = [part.strip() for part in raw.split(";")]
    if ":" not in head:
        raise click.BadParameter(
            f"Invalid item format '{head}'. Expected 'ProductName:Quantity'."
        )
    name, qty_str = head.rsplit(":", 1)
    try:
        qty = int(qty_str)
    except ValueError:
        raise click.BadParameter(f"Invalid quantity '{qty_str}' for product '{name}'.")

    colors: dict[ColorSlot, str] = {}
    size = None
    for option in options:
        key, _, value = option.partition("=")
        key = key.strip().lower()
        if key == "size":
            size = value.strip()
        elif key in _ITEM_OPTIONS:
            colors[_ITEM_OPTIONS[key]] = value.strip()
        else:
            raise click.BadParameter(f"Unknown item option '{key}'.")
    return name.strip(), qty, colors, size


def _parse_time(raw: str) -> time:
    try:
        return datetime.strptime(raw, "%H:%M").time()
    except ValueError:
        raise click.BadParameter(f"Invalid time '{raw}'. Expected HH:MM.")


def _display_order(dto: OrderDTO) -> None:
    """Shared formatting for displaying an order."""
    click.echo(f"Order #{dto.id}  (status={dto.status})")
    click.echo(f"Customer: {dto.customer_name}")
    click.echo(f"Event:    {dto.event_date} {dto.event_time} at {dto.venue}")
    click.echo(f"Created:  {dto.created_at}")
    click.echo()
    click.echo(f"  {'Product':<24} {'Qty':>5} {'Price':>10} {'Total':>12}")
    click.echo(f"  {'-'*54}")
    for item in dto.items:
        click.echo(
            f"  {item.product_name:<24} {item.quantity:>5} {item.unit_price:>10} {item.line_total:>12}"
        )
        if item.details:
            click.echo(f"    {item.details}")
    click.echo(f"  {'-'*54}")
    click.echo(f"  {'Pieces':<31} {dto.pieces:>23}")
    click.echo(f"  {'Order Total':<31} {dto.total:>23}")
    if dto.paid:
        click.echo(f"  {'Paid':<31} {'yes':>23}")
    else:
        click.echo(f"  {'Deposit':<31} {dto.deposit:>23}")
        click.echo(f"  {'Balance due':<31} {dto.balance_due:>23}")


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--date", "event_date", required=True, type=click.DateTime(["%Y-%m-%d"]), help="Event date (YYYY-MM-DD).")
@click.option("--time", "event_time", required=True, help="Event time (HH:MM).")
@click.option(
    "--item",
    "items",
    required=True,
    multiple=True,
    help="Item as 'Product:Qty[;color=X][;size=Y][;tablecloth=X][;bow=Y]'; repeatable.",
)
@click.option("--venue", default=None, help="Venue (default 'Otro lugar').")
@click.option("--venue-details", default=None, help="Address or directions.")
@click.option("--phone", default=None, help="Customer phone.")
@click.option("--comments", default=None, help="Free-form notes.")
@click.option("--paid", is_flag=True, help="Paid in full.")
@click.option("--deposit", default=None, help="Deposit received (e.g. 500.00).")
def order_create(
    customer: str,
    event_date: datetime,
    event_time: str,
    items: tuple[str, ...],
    venue: str | None,
    venue_details: str | None,
    phone: str | None,
    comments: str | None,
    paid: bool,
    deposit: str | None,
) -> None:
    """Create a new rental order."""
    parsed = [_parse_item(raw) for raw in items]
    details = OrderDetails(
        customer_name=customer,
        event_date=event_date.date(),
        event_time=_parse_time(event_time),
        venue=venue,
        venue_details=venue_details,
        customer_phone=phone,
        comments=comments,
        paid=paid,
        deposit=deposit,
    )

    try:
        backend = build_backend()
        draft = OrderDraft()
        add_item = AddOrderItemHandler(product_repo=backend.products)
        for name, qty, colors, size in parsed:
            add_item.handle(draft, name, qty, colors=colors, size=size)
        handler = CreateOrderHandler(
            order_repo=backend.orders,
            product_repo=backend.products,
        )
        dto = handler.handle(draft, details)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{dto.id} created")
    _display_order(dto)


@click.command("show")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to display.")
def order_show(order_id: int) -> None:
    """Show details of an existing order."""
    try:
        dto = ShowOrderHandler(order_repo=build_backend().orders).handle(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    _display_order(dto)


@click.command("list")
@click.option("--status", default=None, help="Only orders in this status (e.g. proximo).")
def order_list(status: str | None) -> None:
    """List orders, latest event first."""
    try:
        orders = ListOrdersHandler(order_repo=build_backend().orders).handle(status)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not orders:
        click.echo("No orders found.")
        return

    click.echo(f"{'ID':<6} {'Date':<11} {'Time':<6} {'Customer':<24} {'Status':<11} {'Total':>12}")
    click.echo("-" * 75)
    for o in orders:
        click.echo(
            f"{o.id:<6} {o.event_date:<11} {o.event_time:<6} {o.customer_name:<24} {o.status:<11} {o.total:>12}"
        )


@click.command("day")
@click.option("--date", "day", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Date (default today).")
def order_day(day: datetime | None) -> None:
    """List everything booked on one date."""
    target = day.date() if day else date.today()
    try:
        backend = build_backend()
        lines = ShowDayHandler(order_repo=backend.orders, salon_repo=backend.salon).handle(target)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not lines:
        click.echo(f"Nothing booked on {target}.")
        return

    for line in sorted(lines, key=lambda l: l.time):
        click.echo(f"{line.time}  [{line.kind}] {line.customer_name}: {line.description} ({line.status})")


@click.command("deliver")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--by", "person", required=True, help="Who delivered the furniture.")
def order_deliver(order_id: int, person: str) -> None:
    """Record that an order was delivered."""
    try:
        UpdateOrderStatusHandler(order_repo=build_backend().orders).mark_delivered(order_id, person)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} delivered by {person}.")


@click.command("pickup")
@click.option("--id", "order_id", required=True, type=int, help="Order ID.")
@click.option("--by", "person", required=True, help="Who picked the furniture up.")
def order_pickup(order_id: int, person: str) -> None:
    """Record that an order's furniture was picked up (releases it)."""
    try:
        UpdateOrderStatusHandler(order_repo=build_backend().orders).mark_picked_up(order_id, person)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} picked up by {person}.")


@click.command("cancel")
@click.option("--id", "order_id", required=True, type=int, help="Order ID to cancel.")
def order_cancel(order_id: int) -> None:
    """Cancel an order (releases its furniture)."""
    try:
        UpdateOrderStatusHandler(order_repo=build_backend().orders).cancel(order_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Order #{order_id} cancelled.")
