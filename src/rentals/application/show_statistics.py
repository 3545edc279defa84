"""Application services: period statistics and the dashboard (queries)."""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from rentals.domain.exceptions import ValidationError
from rentals.domain.repository.order_repository import OrderRepository
from rentals.domain.repository.product_repository import ProductRepository
from rentals.domain.repository.salon_event_repository import SalonEventRepository
from rentals.domain.service.statistics_service import (
    DashboardSummary,
    PeriodStatistics,
    StatisticsService,
    previous_period,
)

UPCOMING_WINDOW_DAYS = 7


class StatisticsHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        salon_repo: SalonEventRepository,
    ) -> None:
        self._order_repo = order_repo
        self._salon_repo = salon_repo
        self._service = StatisticsService()

    def handle(self, start: date, end: date) -> PeriodStatistics:
        if end < start:
            raise ValidationError("The period ends before it starts")

        prev_start, prev_end = previous_period(start, end)
        return self._service.summarize(
            start=start,
            end=end,
            orders=self._order_repo.list_between(start, end),
            events=self._salon_repo.list_between(start, end),
            previous_orders=self._order_repo.list_between(prev_start, prev_end),
            previous_events=self._salon_repo.list_between(prev_start, prev_end),
        )


class DashboardHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        salon_repo: SalonEventRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._salon_repo = salon_repo
        self._product_repo = product_repo
        self._service = StatisticsService()

    def handle(self, today: date) -> DashboardSummary:
        month_start = today.replace(day=1)
        month_end = today.replace(day=calendar.monthrange(today.year, today.month)[1])
        window_end = today + timedelta(days=UPCOMING_WINDOW_DAYS)

        return self._service.dashboard(
            month_orders=self._order_repo.list_between(month_start, month_end),
            month_events=self._salon_repo.list_between(month_start, month_end),
            upcoming_orders=self._order_repo.list_between(today, window_end),
            upcoming_events=self._salon_repo.list_between(today, window_end),
            inventory_pieces=self._inventory_pieces(),
        )

    def _inventory_pieces(self) -> int:
        pieces = 0
        for product in self._product_repo.list_all():
            if product.is_bundle:
                continue
            if product.has_colors:
                pieces += sum(
                    v.stock_available
                    for v in self._product_repo.list_color_variants(product.id)
                )
            else:
                pieces += product.stock_total
        return pieces
