"""Domain service: business statistics over a period.

Bookings are furniture orders plus salon events. Cancelled bookings are
left out of every figure.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date, timedelta

from rentals.domain.model.order import Order, OrderStatus
from rentals.domain.model.salon_event import SalonEvent, SalonEventStatus
from rentals.domain.model.value_objects import Money

TOP_N = 5
NO_VENUE = "Sin especificar"


@dataclass(frozen=True)
class RankingEntry:
    name: str
    bookings: int
    revenue: Money
    pieces: int = 0


@dataclass(frozen=True)
class PeriodStatistics:
    start: date
    end: date
    total_bookings: int
    revenue: Money
    average_ticket: Money
    previous_bookings: int
    growth_rate: float  # percent versus the previous period
    top_venues: list[RankingEntry]
    top_customers: list[RankingEntry]
    top_items: list[RankingEntry]


@dataclass(frozen=True)
class DashboardSummary:
    month_bookings: int
    month_revenue: Money
    inventory_pieces: int
    upcoming_bookings: int


def previous_period(start: date, end: date) -> tuple[date, date]:
    """The window of equal length that ends the day before *start*."""
    length = (end - start).days + 1
    previous_end = start - timedelta(days=1)
    return previous_end - timedelta(days=length - 1), previous_end


def growth_rate(current: int, previous: int) -> float:
    if previous <= 0:
        return 0.0
    return (current - previous) / previous * 100


class StatisticsService:

    def summarize(
        self,
        start: date,
        end: date,
        orders: Sequence[Order],
        events: Sequence[SalonEvent],
        previous_orders: Sequence[Order],
        previous_events: Sequence[SalonEvent],
    ) -> PeriodStatistics:
        orders = _active_orders(orders)
        events = _active_events(events)
        total = len(orders) + len(events)
        revenue = _revenue(orders, events)
        previous = len(_active_orders(previous_orders)) + len(_active_events(previous_events))

        return PeriodStatistics(
            start=start,
            end=end,
            total_bookings=total,
            revenue=revenue,
            average_ticket=revenue / total if total else Money.zero(),
            previous_bookings=previous,
            growth_rate=growth_rate(total, previous),
            top_venues=self._rank_venues(orders),
            top_customers=self._rank_customers(orders, events),
            top_items=self._rank_items(orders),
        )

    def dashboard(
        self,
        month_orders: Sequence[Order],
        month_events: Sequence[SalonEvent],
        upcoming_orders: Sequence[Order],
        upcoming_events: Sequence[SalonEvent],
        inventory_pieces: int,
    ) -> DashboardSummary:
        month_orders = _active_orders(month_orders)
        month_events = _active_events(month_events)
        return DashboardSummary(
            month_bookings=len(month_orders) + len(month_events),
            month_revenue=_revenue(month_orders, month_events),
            inventory_pieces=inventory_pieces,
            upcoming_bookings=(
                sum(1 for o in upcoming_orders if o.holds_inventory)
                + len(_active_events(upcoming_events))
            ),
        )

    # --- Rankings -------------------------------------------------------------

    @staticmethod
    def _rank_venues(orders: Sequence[Order]) -> list[RankingEntry]:
        tally: dict[str, list] = {}
        for order in orders:
            entry = tally.setdefault(order.venue or NO_VENUE, [0, Money.zero()])
            entry[0] += 1
            entry[1] = entry[1] + order.total
        return _top(RankingEntry(name, n, revenue) for name, (n, revenue) in tally.items())

    @staticmethod
    def _rank_customers(
        orders: Sequence[Order], events: Sequence[SalonEvent]
    ) -> list[RankingEntry]:
        tally: dict[str, list] = {}
        bookings = [(o.customer_name, o.total) for o in orders]
        bookings += [(e.customer_name, e.price) for e in events]
        for name, amount in bookings:
            entry = tally.setdefault(name, [0, Money.zero()])
            entry[0] += 1
            entry[1] = entry[1] + amount
        return _top(RankingEntry(name, n, revenue) for name, (n, revenue) in tally.items())

    @staticmethod
    def _rank_items(orders: Sequence[Order]) -> list[RankingEntry]:
        tally: dict[str, list] = {}
        for order in orders:
            for item in order.visible_items:
                entry = tally.setdefault(item.product_name, [0, Money.zero(), 0])
                entry[0] += 1
                entry[1] = entry[1] + item.line_total
                entry[2] += item.quantity.value
        return _top(
            RankingEntry(name, n, revenue, pieces)
            for name, (n, revenue, pieces) in tally.items()
        )


def _active_orders(orders: Sequence[Order]) -> list[Order]:
    return [o for o in orders if o.status != OrderStatus.CANCELLED]


def _active_events(events: Sequence[SalonEvent]) -> list[SalonEvent]:
    return [e for e in events if e.status != SalonEventStatus.CANCELLED]


def _revenue(orders: Sequence[Order], events: Sequence[SalonEvent]) -> Money:
    result = Money.zero()
    for order in orders:
        result = result + order.total
    for event in events:
        result = result + event.price
    return result


def _top(entries) -> list[RankingEntry]:
    # sorted() is stable: ties keep first-seen order
    return sorted(entries, key=lambda e: e.bookings, reverse=True)[:TOP_N]
