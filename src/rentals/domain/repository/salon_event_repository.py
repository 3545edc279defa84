"""Abstract repository for SalonEvent aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import date

from rentals.domain.model.salon_event import SalonEvent


class SalonEventRepository(ABC):

    @abstractmethod
    def get_by_id(self, event_id: int) -> SalonEvent | None:
        """Return a salon event by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[SalonEvent]:
        """Return every salon event, most recent first."""

    @abstractmethod
    def list_between(self, start: date, end: date) -> list[SalonEvent]:
        """Return the salon events whose date lies in [start, end]."""

    @abstractmethod
    def save(self, event: SalonEvent) -> None:
        """Persist a new or updated salon event."""
