"""Order aggregate — a furniture rental for one event date.

The Order is an aggregate root that owns its line items. Besides the
lines the customer picked, a saved order also carries one zero-priced
line per bundle component so that inventory accounting has concrete
rows; those artifact lines are hidden from user-facing views.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum

from rentals.domain.exceptions import ValidationError
from rentals.domain.model.product import ColorSlot
from rentals.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    UPCOMING = "proximo"
    DELIVERED = "entregado"
    PICKED_UP = "recogido"
    COMPLETED = "completado"
    CANCELLED = "cancelado"


# Orders in these states no longer hold any furniture.
RELEASED_STATUSES = frozenset(
    {OrderStatus.PICKED_UP, OrderStatus.COMPLETED, OrderStatus.CANCELLED}
)


@dataclass
class OrderLineItem:
    """Captures the price snapshot of a product at order-creation time."""

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money  # locked at order-creation time
    colors: dict[ColorSlot, str] = field(default_factory=dict)
    size: str | None = None
    is_bundle_component: bool = False
    bundle_origin: str | None = None

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value

    def color_for(self, slot: ColorSlot) -> str | None:
        """Colour consumed from a product fed by *slot*.

        The primary colour wins when the line has one.
        """
        return self.colors.get(ColorSlot.PRIMARY) or self.colors.get(slot)


@dataclass
class Order:
    """Aggregate root for rental orders.

    Use the ``Order.create()`` factory for new orders — it enforces all
    business rules.  The ``__init__`` is intentionally simple so the
    repository can reconstitute persisted orders without re-validating.
    """

    id: int | None
    customer_name: str
    event_date: date
    event_time: time
    items: list[OrderLineItem]
    venue: str = "Otro lugar"
    venue_details: str | None = None
    customer_phone: str | None = None
    comments: str | None = None
    paid: bool = False
    deposit: Money = field(default_factory=Money.zero)
    status: OrderStatus = OrderStatus.UPCOMING
    delivered_by: str | None = None
    delivered_at: datetime | None = None
    picked_up_by: str | None = None
    picked_up_at: datetime | None = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer_name: str,
        event_date: date | None,
        event_time: time | None,
        items: list[OrderLineItem],
        venue: str | None = None,
        venue_details: str | None = None,
        customer_phone: str | None = None,
        comments: str | None = None,
        paid: bool = False,
        deposit: Money | None = None,
    ) -> Order:
        """Create a new order, enforcing all invariants."""
        if not customer_name or not customer_name.strip():
            raise ValidationError("Customer name is required")
        if event_date is None:
            raise ValidationError("Event date is required")
        if event_time is None:
            raise ValidationError("Event time is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        order = Order(
            id=None,
            customer_name=customer_name.strip(),
            event_date=event_date,
            event_time=event_time,
            items=list(items),
            venue=(venue or "").strip() or "Otro lugar",
            venue_details=venue_details or None,
            customer_phone=customer_phone or None,
            comments=comments or None,
            paid=paid,
            # A paid order carries no pending deposit.
            deposit=Money.zero() if paid or deposit is None else deposit,
        )

        if order.deposit > order.total:
            raise ValidationError(
                f"Deposit {order.deposit} exceeds order total {order.total}"
            )
        return order

    # --- State transitions ----------------------------------------------------

    def mark_delivered(self, by: str, at: datetime | None = None) -> None:
        """Transition UPCOMING -> DELIVERED."""
        if self.status != OrderStatus.UPCOMING:
            raise ValidationError(
                f"Cannot deliver order — current status is {self.status.value}, "
                f"expected {OrderStatus.UPCOMING.value}"
            )
        self.delivered_by = _required_person(by, "delivered")
        self.delivered_at = at or datetime.now(timezone.utc)
        self.status = OrderStatus.DELIVERED

    def mark_picked_up(self, by: str, at: datetime | None = None) -> None:
        """Transition DELIVERED -> PICKED_UP, releasing the furniture."""
        if self.status != OrderStatus.DELIVERED:
            raise ValidationError(
                f"Cannot pick up order — current status is {self.status.value}, "
                f"expected {OrderStatus.DELIVERED.value}"
            )
        self.picked_up_by = _required_person(by, "picked up")
        self.picked_up_at = at or datetime.now(timezone.utc)
        self.status = OrderStatus.PICKED_UP

    def cancel(self) -> None:
        """Transition UPCOMING|DELIVERED -> CANCELLED."""
        if self.status == OrderStatus.CANCELLED:
            raise ValidationError("Order is already cancelled")
        if self.status in RELEASED_STATUSES:
            raise ValidationError(
                f"Cannot cancel order in {self.status.value} status"
            )
        self.status = OrderStatus.CANCELLED

    # --- Computed properties --------------------------------------------------

    @property
    def holds_inventory(self) -> bool:
        return self.status not in RELEASED_STATUSES

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self.items:
            result = result + item.line_total
        return result

    @property
    def balance_due(self) -> Money:
        if self.paid or self.deposit >= self.total:
            return Money.zero()
        return self.total - self.deposit

    @property
    def visible_items(self) -> list[OrderLineItem]:
        """Lines the customer chose; bundle-component artifacts are hidden."""
        return [item for item in self.items if not item.is_bundle_component]

    @property
    def pieces(self) -> int:
        return sum(item.quantity.value for item in self.visible_items)


def _required_person(name: str, action: str) -> str:
    if not name or not name.strip():
        raise ValidationError(f"Name of the person who {action} the order is required")
    return name.strip()
