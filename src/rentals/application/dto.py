"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without
exposing domain internals to the outside world.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, time

from rentals.domain.model.order import Order, OrderLineItem
from rentals.domain.model.product import ColorSlot


@dataclass(frozen=True)
class OrderDetails:
    """Input: the order form, everything except the items."""

    customer_name: str
    event_date: date | None
    event_time: time | None
    venue: str | None = None
    venue_details: str | None = None
    customer_phone: str | None = None
    comments: str | None = None
    paid: bool = False
    deposit: str | None = None


@dataclass(frozen=True)
class OrderLineItemDTO:
    """Output: a single user-facing line as displayed to the user."""

    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "$15.00"
    line_total: str
    details: str  # colours and size, e.g. "Rojo - Grande"


@dataclass(frozen=True)
class OrderDTO:
    """Output: a complete order as displayed to the user."""

    id: int
    customer_name: str
    event_date: str
    event_time: str
    venue: str
    status: str
    items: list[OrderLineItemDTO]
    pieces: int
    total: str
    deposit: str
    balance_due: str
    paid: bool
    created_at: str


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        customer_name=order.customer_name,
        event_date=order.event_date.isoformat(),
        event_time=order.event_time.strftime("%H:%M"),
        venue=order.venue,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
                details=_line_details(item),
            )
            for item in order.visible_items
        ],
        pieces=order.pieces,
        total=str(order.total),
        deposit=str(order.deposit),
        balance_due=str(order.balance_due),
        paid=order.paid,
        created_at=order.created_at.strftime("%Y-%m-%d %H:%M"),
    )


def _line_details(item: OrderLineItem) -> str:
    parts = [item.colors[slot] for slot in ColorSlot if slot in item.colors]
    if item.size:
        parts.append(item.size)
    return " - ".join(parts)
