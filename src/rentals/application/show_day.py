"""Application service: Show Day use case (query).

Everything booked on one date: furniture orders and salon events.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from rentals.domain.repository.order_repository import OrderRepository
from rentals.domain.repository.salon_event_repository import SalonEventRepository


@dataclass(frozen=True)
class BookingLineDTO:
    kind: str  # "mobiliario" or "salon"
    customer_name: str
    time: str
    description: str
    status: str


class ShowDayHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        salon_repo: SalonEventRepository,
    ) -> None:
        self._order_repo = order_repo
        self._salon_repo = salon_repo

    def handle(self, day: date) -> list[BookingLineDTO]:
        lines = [
            BookingLineDTO(
                kind="mobiliario",
                customer_name=order.customer_name,
                time=order.event_time.strftime("%H:%M"),
                description=", ".join(
                    f"{item.quantity} {item.product_name}" for item in order.visible_items
                ) or "Mobiliario",
                status=order.status.value,
            )
            for order in self._order_repo.list_for_date(day)
        ]
        lines += [
            BookingLineDTO(
                kind="salon",
                customer_name=event.customer_name,
                time=event.start_time.strftime("%H:%M"),
                description="Evento en Salón"
                + (f" - {event.event_type}" if event.event_type else ""),
                status=event.status.value,
            )
            for event in self._salon_repo.list_between(day, day)
        ]
        return lines
