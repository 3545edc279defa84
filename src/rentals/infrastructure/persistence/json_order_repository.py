"""JSON-file-backed implementation of OrderRepository.

Orders and their lines are kept in two tables, like the hosted backend.
Lines are written once, when the order is first saved; if that write
fails the new order row is removed again.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from datetime import date
from pathlib import Path

from rentals.domain.exceptions import BackendError
from rentals.domain.model.order import Order, OrderStatus
from rentals.domain.repository.order_repository import OrderRepository
from rentals.infrastructure.persistence import rows as r
from rentals.infrastructure.persistence.json_table import JsonTable


class JsonOrderRepository(OrderRepository):

    def __init__(self, data_dir: Path) -> None:
        self._orders = JsonTable(data_dir, r.ORDERS)
        self._items = JsonTable(data_dir, r.ORDER_ITEMS)

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        matches = self._load(lambda row: int(row["id"]) == order_id)
        return matches[0] if matches else None

    def list_all(self) -> list[Order]:
        orders = self._load(lambda row: True)
        return sorted(orders, key=lambda o: (o.event_date, o.event_time), reverse=True)

    def list_for_date(
        self, event_date: date, exclude_statuses: Iterable[OrderStatus] = ()
    ) -> list[Order]:
        day = event_date.isoformat()
        excluded = {s.value for s in exclude_statuses}
        return self._load(
            lambda row: row["fecha_evento"] == day and row.get("estado") not in excluded
        )

    def list_between(self, start: date, end: date) -> list[Order]:
        first, last = start.isoformat(), end.isoformat()
        return self._load(lambda row: first <= row["fecha_evento"] <= last)

    def save(self, order: Order) -> None:
        is_new = order.id is None
        row = self._orders.upsert(r.order_to_row(order))
        order.id = int(row["id"])

        if not is_new:
            return

        try:
            item_rows = self._items.rows()
            item_rows.extend(r.item_to_row(order.id, item) for item in order.items)
            self._items.write(item_rows)
        except BackendError:
            # No order row may outlive a failed write of its lines.
            self._orders.delete(order.id)
            order.id = None
            raise

    # --- Internal helpers -----------------------------------------------------

    def _load(self, keep) -> list[Order]:
        order_rows = [row for row in self._orders.rows() if keep(row)]
        if not order_rows:
            return []

        items_by_order: dict[int, list[dict]] = defaultdict(list)
        for item in self._items.rows():
            items_by_order[int(item["pedido_id"])].append(item)

        return [
            r.row_to_order(row, items_by_order.get(int(row["id"]), []))
            for row in order_rows
        ]
