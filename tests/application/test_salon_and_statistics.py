"""Integration tests for salon bookings, period statistics and the dashboard."""

from datetime import date, time

import pytest

from rentals.application.salon_events import (
    CreateSalonEventHandler,
    ListSalonEventsHandler,
    UpdateSalonEventStatusHandler,
)
from rentals.application.show_statistics import DashboardHandler, StatisticsHandler
from rentals.domain.exceptions import EntityNotFoundError, ValidationError
from rentals.domain.model.order import Order, OrderLineItem
from rentals.domain.model.product import ColorVariant, Product
from rentals.domain.model.value_objects import Money, Quantity
from tests.fakes import (
    FakeOrderRepository,
    FakeProductRepository,
    FakeSalonEventRepository,
)


def _order(day: date, total: str = "100") -> Order:
    return Order(
        id=None,
        customer_name="Ana",
        event_date=day,
        event_time=time(17, 0),
        items=[OrderLineItem("1", "Silla", Quantity(1), Money.of(total))],
    )


class TestSalonEvents:

    def test_create_with_default_price(self):
        repo = FakeSalonEventRepository()
        dto = CreateSalonEventHandler(repo).handle(
            customer_name="Rosa",
            event_date=date(2025, 7, 5),
            start_time=time(18, 0),
            event_type="XV años",
            guests=120,
            deposit="2000",
        )
        assert dto.id == 1
        assert dto.price == "$5,000.00"
        assert dto.balance_due == "$3,000.00"
        assert dto.status == "confirmado"

    def test_missing_start_time_rejected(self):
        with pytest.raises(ValidationError, match="Start time is required"):
            CreateSalonEventHandler(FakeSalonEventRepository()).handle(
                customer_name="Rosa", event_date=date(2025, 7, 5), start_time=None
            )

    def test_list_filters(self):
        repo = FakeSalonEventRepository()
        create = CreateSalonEventHandler(repo)
        create.handle("Rosa", date(2025, 7, 5), time(18, 0), event_type="Boda")
        create.handle("Luis", date(2025, 7, 12), time(18, 0), event_type="XV años")
        UpdateSalonEventStatusHandler(repo).cancel(2)

        listing = ListSalonEventsHandler(repo)
        assert [e.customer_name for e in listing.handle()] == ["Luis", "Rosa"]
        assert [e.customer_name for e in listing.handle(status="confirmado")] == ["Rosa"]
        assert [e.customer_name for e in listing.handle(search="xv")] == ["Luis"]

    def test_complete_missing_event(self):
        with pytest.raises(EntityNotFoundError, match="#5"):
            UpdateSalonEventStatusHandler(FakeSalonEventRepository()).complete(5)


class TestStatistics:

    def test_period_with_growth(self):
        orders = FakeOrderRepository(
            [
                _order(date(2025, 6, 3), "200"),
                _order(date(2025, 6, 20), "400"),
                _order(date(2025, 5, 15), "100"),
            ]
        )
        stats = StatisticsHandler(orders, FakeSalonEventRepository()).handle(
            date(2025, 6, 1), date(2025, 6, 30)
        )
        assert stats.total_bookings == 2
        assert stats.revenue == Money.of("600")
        assert stats.previous_bookings == 1
        assert stats.growth_rate == pytest.approx(100.0)

    def test_inverted_period_rejected(self):
        handler = StatisticsHandler(FakeOrderRepository(), FakeSalonEventRepository())
        with pytest.raises(ValidationError, match="ends before it starts"):
            handler.handle(date(2025, 6, 30), date(2025, 6, 1))

    def test_dashboard(self):
        orders = FakeOrderRepository(
            [
                _order(date(2025, 6, 3), "200"),
                _order(date(2025, 6, 18), "400"),
                _order(date(2025, 7, 1), "100"),
            ]
        )
        products = FakeProductRepository(
            products=[
                Product(id="1", name="Silla", rental_price=Money.of("15"), stock_total=100),
                Product(id="3", name="Mantel", rental_price=Money.of("40"), has_colors=True),
                Product(id="9", name="Juego", rental_price=Money.of("300"), is_bundle=True),
            ],
            colors=[ColorVariant(id="c1", product_id="3", color="Blanco", stock_available=30)],
        )
        summary = DashboardHandler(orders, FakeSalonEventRepository(), products).handle(
            date(2025, 6, 15)
        )
        assert summary.month_bookings == 2
        assert summary.month_revenue == Money.of("600")
        assert summary.inventory_pieces == 130
        assert summary.upcoming_bookings == 1
