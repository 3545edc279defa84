"""CLI command for the availability report."""

from __future__ import annotations

from datetime import date, datetime

import click

from rentals.application.show_availability import ShowAvailabilityHandler
from rentals.domain.exceptions import DomainException
from rentals.infrastructure.bootstrap import build_backend
from rentals.infrastructure.settings import get_settings


@click.command("show")
@click.option("--date", "day", type=click.DateTime(["%Y-%m-%d"]), default=None, help="Date (default today).")
def availability_show(day: datetime | None) -> None:
    """Show how many pieces of each product are free on a date."""
    target = day.date() if day else date.today()
    settings = get_settings()

    try:
        backend = build_backend(settings)
        handler = ShowAvailabilityHandler(
            product_repo=backend.products,
            order_repo=backend.orders,
            fail_open=settings.fail_open,
            priority=settings.display_order,
        )
        report = handler.handle(target)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if report.degraded:
        click.echo(
            "WARNING: existing orders could not be read; figures below are NOT checked.",
            err=True,
        )

    click.echo(f"Availability for {report.date}")
    click.echo(f"{'Product':<24} {'Total':>7} {'In use':>7} {'Free':>7} {'%':>6}")
    click.echo("-" * 55)
    for snap in report.snapshots:
        click.echo(
            f"{snap.product_name:<24} {snap.total:>7} {snap.in_use:>7} "
            f"{snap.available:>7} {snap.percent_available:>5.0f}%"
        )
        for usage in snap.colors:
            label = usage.color or "(sin color)"
            if not usage.registered:
                label += " *"
            free = max(0, usage.total - usage.in_use)
            click.echo(f"    {label:<20} {usage.total:>7} {usage.in_use:>7} {free:>7}")
