"""Application services: salon bookings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, time

from rentals.domain.exceptions import EntityNotFoundError, ValidationError
from rentals.domain.model.salon_event import SalonEvent, SalonEventStatus
from rentals.domain.model.value_objects import Money
from rentals.domain.repository.salon_event_repository import SalonEventRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SalonEventDTO:
    id: int
    customer_name: str
    event_date: str
    start_time: str
    event_type: str
    guests: int | None
    price: str
    balance_due: str
    status: str


def salon_event_to_dto(event: SalonEvent) -> SalonEventDTO:
    return SalonEventDTO(
        id=event.id,  # type: ignore[arg-type]
        customer_name=event.customer_name,
        event_date=event.event_date.isoformat(),
        start_time=event.start_time.strftime("%H:%M"),
        event_type=event.event_type or "",
        guests=event.guests,
        price=str(event.price),
        balance_due=str(event.balance_due),
        status=event.status.value,
    )


class CreateSalonEventHandler:

    def __init__(self, salon_repo: SalonEventRepository) -> None:
        self._salon_repo = salon_repo

    def handle(
        self,
        customer_name: str,
        event_date: date | None,
        start_time: time | None,
        price: str | None = None,
        customer_phone: str | None = None,
        event_type: str | None = None,
        guests: int | None = None,
        paid: bool = False,
        deposit: str | None = None,
        conditions: str | None = None,
        notes: str | None = None,
    ) -> SalonEventDTO:
        event = SalonEvent.create(
            customer_name=customer_name,
            event_date=event_date,
            start_time=start_time,
            price=Money.of(price) if price else None,
            customer_phone=customer_phone,
            event_type=event_type,
            guests=guests,
            paid=paid,
            deposit=Money.of(deposit) if deposit else None,
            conditions=conditions,
            notes=notes,
        )
        self._salon_repo.save(event)
        logger.info("Salon event #%s booked for %s", event.id, event.event_date)
        return salon_event_to_dto(event)


class ListSalonEventsHandler:

    def __init__(self, salon_repo: SalonEventRepository) -> None:
        self._salon_repo = salon_repo

    def handle(self, status: str | None = None, search: str | None = None) -> list[SalonEventDTO]:
        wanted = None
        if status:
            try:
                wanted = SalonEventStatus(status)
            except ValueError:
                valid = ", ".join(s.value for s in SalonEventStatus)
                raise ValidationError(f"Unknown status '{status}' (expected one of {valid})")

        needle = (search or "").strip().lower()
        return [
            salon_event_to_dto(event)
            for event in self._salon_repo.list_all()
            if (wanted is None or event.status == wanted)
            and (
                not needle
                or needle in event.customer_name.lower()
                or needle in (event.event_type or "").lower()
            )
        ]


class UpdateSalonEventStatusHandler:

    def __init__(self, salon_repo: SalonEventRepository) -> None:
        self._salon_repo = salon_repo

    def complete(self, event_id: int) -> None:
        event = self._load(event_id)
        event.complete()
        self._salon_repo.save(event)

    def cancel(self, event_id: int) -> None:
        event = self._load(event_id)
        event.cancel()
        self._salon_repo.save(event)

    def _load(self, event_id: int) -> SalonEvent:
        event = self._salon_repo.get_by_id(event_id)
        if event is None:
            raise EntityNotFoundError(f"Salon event #{event_id} not found")
        return event
