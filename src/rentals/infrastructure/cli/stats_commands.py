"""CLI commands for business statistics."""

from __future__ import annotations

from datetime import date, datetime

import click

from rentals.application.show_statistics import DashboardHandler, StatisticsHandler
from rentals.domain.exceptions import DomainException
from rentals.domain.service.statistics_service import RankingEntry
from rentals.infrastructure.bootstrap import build_backend


def _ranking(title: str, entries: list[RankingEntry], show_pieces: bool = False) -> None:
    click.echo()
    click.echo(title)
    if not entries:
        click.echo("  (none)")
        return
    for position, entry in enumerate(entries, start=1):
        extra = f" {entry.pieces:>6} pcs" if show_pieces else ""
        click.echo(
            f"  {position}. {entry.name:<24} {entry.bookings:>4} {str(entry.revenue):>12}{extra}"
        )


@click.command("period")
@click.option("--from", "start", required=True, type=click.DateTime(["%Y-%m-%d"]), help="First day.")
@click.option("--to", "end", required=True, type=click.DateTime(["%Y-%m-%d"]), help="Last day.")
def stats_period(start: datetime, end: datetime) -> None:
    """Bookings, revenue and rankings for a period."""
    try:
        backend = build_backend()
        handler = StatisticsHandler(order_repo=backend.orders, salon_repo=backend.salon)
        stats = handler.handle(start.date(), end.date())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Period {stats.start} to {stats.end}")
    click.echo(f"  Bookings:       {stats.total_bookings}")
    click.echo(f"  Revenue:        {stats.revenue}")
    click.echo(f"  Average ticket: {stats.average_ticket}")
    click.echo(f"  Growth:         {stats.growth_rate:+.1f}% (previous period: {stats.previous_bookings})")
    _ranking("Top venues", stats.top_venues)
    _ranking("Top customers", stats.top_customers)
    _ranking("Top items", stats.top_items, show_pieces=True)


@click.command("dashboard")
def stats_dashboard() -> None:
    """This month at a glance."""
    try:
        backend = build_backend()
        handler = DashboardHandler(
            order_repo=backend.orders,
            salon_repo=backend.salon,
            product_repo=backend.products,
        )
        summary = handler.handle(date.today())
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Bookings this month:  {summary.month_bookings}")
    click.echo(f"Revenue this month:   {summary.month_revenue}")
    click.echo(f"Pieces in inventory:  {summary.inventory_pieces}")
    click.echo(f"Upcoming (7 days):    {summary.upcoming_bookings}")
