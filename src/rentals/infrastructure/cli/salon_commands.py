"""CLI commands for salon bookings."""

from __future__ import annotations

from datetime import datetime

import click

from rentals.application.salon_events import (
    CreateSalonEventHandler,
    ListSalonEventsHandler,
    UpdateSalonEventStatusHandler,
)
from rentals.domain.exceptions import DomainException
from rentals.infrastructure.bootstrap import build_backend


@click.command("create")
@click.option("--customer", required=True, help="Customer name.")
@click.option("--date", "event_date", required=True, type=click.DateTime(["%Y-%m-%d"]), help="Event date (YYYY-MM-DD).")
@click.option("--time", "start_time", required=True, type=click.DateTime(["%H:%M"]), help="Start time (HH:MM).")
@click.option("--price", default=None, help="Price (default 5,000.00).")
@click.option("--phone", default=None, help="Customer phone.")
@click.option("--type", "event_type", default=None, help="Kind of event (e.g. XV años).")
@click.option("--guests", default=None, type=int, help="Expected guests.")
@click.option("--paid", is_flag=True, help="Paid in full.")
@click.option("--deposit", default=None, help="Deposit received.")
@click.option("--conditions", default=None, help="Agreed conditions.")
@click.option("--notes", default=None, help="Free-form notes.")
def salon_create(
    customer: str,
    event_date: datetime,
    start_time: datetime,
    price: str | None,
    phone: str | None,
    event_type: str | None,
    guests: int | None,
    paid: bool,
    deposit: str | None,
    conditions: str | None,
    notes: str | None,
) -> None:
    """Book the salon for an event."""
    try:
        handler = CreateSalonEventHandler(salon_repo=build_backend().salon)
        dto = handler.handle(
            customer_name=customer,
            event_date=event_date.date(),
            start_time=start_time.time(),
            price=price,
            customer_phone=phone,
            event_type=event_type,
            guests=guests,
            paid=paid,
            deposit=deposit,
            conditions=conditions,
            notes=notes,
        )
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(
        f"Salon event #{dto.id} booked for {dto.customer_name} on {dto.event_date} "
        f"{dto.start_time} ({dto.price}, balance {dto.balance_due})"
    )


@click.command("list")
@click.option("--status", default=None, help="Only events in this status.")
@click.option("--search", default=None, help="Match customer name or event type.")
def salon_list(status: str | None, search: str | None) -> None:
    """List salon bookings, latest first."""
    try:
        events = ListSalonEventsHandler(salon_repo=build_backend().salon).handle(status, search)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not events:
        click.echo("No salon events found.")
        return

    click.echo(f"{'ID':<6} {'Date':<11} {'Time':<6} {'Customer':<24} {'Type':<14} {'Status':<11} {'Price':>11}")
    click.echo("-" * 87)
    for e in events:
        click.echo(
            f"{e.id:<6} {e.event_date:<11} {e.start_time:<6} {e.customer_name:<24} "
            f"{e.event_type:<14} {e.status:<11} {e.price:>11}"
        )


@click.command("complete")
@click.option("--id", "event_id", required=True, type=int, help="Salon event ID.")
def salon_complete(event_id: int) -> None:
    """Mark a salon event as held."""
    try:
        UpdateSalonEventStatusHandler(salon_repo=build_backend().salon).complete(event_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Salon event #{event_id} completed.")


@click.command("cancel")
@click.option("--id", "event_id", required=True, type=int, help="Salon event ID.")
def salon_cancel(event_id: int) -> None:
    """Cancel a salon event."""
    try:
        UpdateSalonEventStatusHandler(salon_repo=build_backend().salon).cancel(event_id)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Salon event #{event_id} cancelled.")
