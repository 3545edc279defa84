"""The order being put together in one session.

Holds the lines picked so far and guards against submitting the same
draft twice: a save must finish before the draft can be submitted again.
"""

from __future__ import annotations

from rentals.domain.exceptions import SubmissionInProgressError, ValidationError
from rentals.domain.model.order import OrderLineItem
from rentals.domain.model.value_objects import Money


class OrderDraft:

    def __init__(self) -> None:
        self._items: list[OrderLineItem] = []
        self._submitting = False

    @property
    def items(self) -> list[OrderLineItem]:
        return list(self._items)

    def add_item(self, item: OrderLineItem) -> None:
        self._items.append(item)

    def remove_item(self, index: int) -> OrderLineItem:
        if not 0 <= index < len(self._items):
            raise ValidationError(f"No item at position {index + 1}")
        return self._items.pop(index)

    def clear(self) -> None:
        self._items.clear()

    # --- Summary --------------------------------------------------------------

    @property
    def item_count(self) -> int:
        return len(self._items)

    @property
    def pieces(self) -> int:
        return sum(item.quantity.value for item in self._items)

    @property
    def total(self) -> Money:
        result = Money.zero()
        for item in self._items:
            result = result + item.line_total
        return result

    # --- Submission guard -----------------------------------------------------

    @property
    def submitting(self) -> bool:
        return self._submitting

    def begin_submit(self) -> None:
        if self._submitting:
            raise SubmissionInProgressError("This order is already being saved")
        self._submitting = True

    def end_submit(self) -> None:
        self._submitting = False
