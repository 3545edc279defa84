"""JSON-file-backed implementation of SalonEventRepository."""

from __future__ import annotations

from datetime import date
from pathlib import Path

from rentals.domain.model.salon_event import SalonEvent
from rentals.domain.repository.salon_event_repository import SalonEventRepository
from rentals.infrastructure.persistence import rows as r
from rentals.infrastructure.persistence.json_table import JsonTable


class JsonSalonEventRepository(SalonEventRepository):

    def __init__(self, data_dir: Path) -> None:
        self._events = JsonTable(data_dir, r.SALON_EVENTS)

    def get_by_id(self, event_id: int) -> SalonEvent | None:
        for row in self._events.rows():
            if int(row["id"]) == event_id:
                return r.row_to_salon_event(row)
        return None

    def list_all(self) -> list[SalonEvent]:
        events = [r.row_to_salon_event(row) for row in self._events.rows()]
        return sorted(events, key=lambda e: (e.event_date, e.start_time), reverse=True)

    def list_between(self, start: date, end: date) -> list[SalonEvent]:
        first, last = start.isoformat(), end.isoformat()
        return [
            r.row_to_salon_event(row)
            for row in self._events.rows()
            if first <= row["fecha_evento"] <= last
        ]

    def save(self, event: SalonEvent) -> None:
        row = self._events.upsert(r.salon_event_to_row(event))
        event.id = int(row["id"])
