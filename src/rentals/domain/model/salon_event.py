"""SalonEvent aggregate — a booking of the party salon.

Salon bookings do not consume furniture stock; they count towards the
day's schedule and the business statistics.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from decimal import Decimal
from enum import Enum

from rentals.domain.exceptions import ValidationError
from rentals.domain.model.value_objects import Money

DEFAULT_SALON_PRICE = Money(Decimal("5000.00"))


class SalonEventStatus(Enum):
    CONFIRMED = "confirmado"
    COMPLETED = "completado"
    CANCELLED = "cancelado"


@dataclass
class SalonEvent:

    id: int | None
    customer_name: str
    event_date: date
    start_time: time
    price: Money = DEFAULT_SALON_PRICE
    customer_phone: str | None = None
    event_type: str | None = None
    guests: int | None = None
    paid: bool = False
    deposit: Money = field(default_factory=Money.zero)
    conditions: str | None = None
    notes: str | None = None
    status: SalonEventStatus = SalonEventStatus.CONFIRMED
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @staticmethod
    def create(
        customer_name: str,
        event_date: date | None,
        start_time: time | None,
        price: Money | None = None,
        customer_phone: str | None = None,
        event_type: str | None = None,
        guests: int | None = None,
        paid: bool = False,
        deposit: Money | None = None,
        conditions: str | None = None,
        notes: str | None = None,
    ) -> SalonEvent:
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if event_date is None:
            raise ValidationError("Event date is required")
        if start_time is None:
            raise ValidationError("Start time is required")
        if guests is not None and guests <= 0:
            raise ValidationError("Number of guests must be positive")

        event = SalonEvent(
            id=None,
            customer_name=customer_name.strip(),
            event_date=event_date,
            start_time=start_time,
            price=price or DEFAULT_SALON_PRICE,
            customer_phone=customer_phone or None,
            event_type=event_type or None,
            guests=guests,
            paid=paid,
            deposit=Money.zero() if paid or deposit is None else deposit,
            conditions=conditions or None,
            notes=notes or None,
        )
        if event.deposit > event.price:
            raise ValidationError(
                f"Deposit {event.deposit} exceeds salon price {event.price}"
            )
        return event

    def complete(self) -> None:
        if self.status != SalonEventStatus.CONFIRMED:
            raise ValidationError(
                f"Cannot complete salon event in {self.status.value} status"
            )
        self.status = SalonEventStatus.COMPLETED

    def cancel(self) -> None:
        if self.status != SalonEventStatus.CONFIRMED:
            raise ValidationError(
                f"Cannot cancel salon event in {self.status.value} status"
            )
        self.status = SalonEventStatus.CANCELLED

    @property
    def balance_due(self) -> Money:
        if self.paid or self.deposit >= self.price:
            return Money.zero()
        return self.price - self.deposit
