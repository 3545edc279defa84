"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import date

from rentals.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order (with its lines) by its ID, or None if not found."""

    @abstractmethod
    def list_all(self) -> list[Order]:
        """Return every order, most recent event first."""

    @abstractmethod
    def list_for_date(
        self, event_date: date, exclude_statuses: Iterable[OrderStatus] = ()
    ) -> list[Order]:
        """Return the orders of one event date, skipping the given statuses."""

    @abstractmethod
    def list_between(self, start: date, end: date) -> list[Order]:
        """Return the orders whose event date lies in [start, end]."""

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order together with its lines."""
