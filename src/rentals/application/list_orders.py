"""Application service: List Orders use case (query)."""

from __future__ import annotations

from rentals.application.dto import OrderDTO, order_to_dto
from rentals.domain.exceptions import ValidationError
from rentals.domain.model.order import OrderStatus
from rentals.domain.repository.order_repository import OrderRepository


class ListOrdersHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def handle(self, status: str | None = None) -> list[OrderDTO]:
        wanted = None
        if status:
            try:
                wanted = OrderStatus(status)
            except ValueError:
                valid = ", ".join(s.value for s in OrderStatus)
                raise ValidationError(f"Unknown status '{status}' (expected one of {valid})")

        return [
            order_to_dto(order)
            for order in self._order_repo.list_all()
            if wanted is None or order.status == wanted
        ]
