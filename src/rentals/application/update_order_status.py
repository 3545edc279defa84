"""Application service: delivery, pick-up and cancellation of orders.

Picking up or cancelling an order releases its furniture: from then on
the availability report no longer counts it.
"""

from __future__ import annotations

import logging

from rentals.domain.exceptions import EntityNotFoundError
from rentals.domain.model.order import Order
from rentals.domain.repository.order_repository import OrderRepository

logger = logging.getLogger(__name__)


class UpdateOrderStatusHandler:

    def __init__(self, order_repo: OrderRepository) -> None:
        self._order_repo = order_repo

    def mark_delivered(self, order_id: int, by: str) -> None:
        order = self._load(order_id)
        order.mark_delivered(by)
        self._order_repo.save(order)
        logger.info("Order #%s delivered by %s", order_id, order.delivered_by)

    def mark_picked_up(self, order_id: int, by: str) -> None:
        order = self._load(order_id)
        order.mark_picked_up(by)
        self._order_repo.save(order)
        logger.info("Order #%s picked up by %s", order_id, order.picked_up_by)

    def cancel(self, order_id: int) -> None:
        order = self._load(order_id)
        order.cancel()
        self._order_repo.save(order)
        logger.info("Order #%s cancelled", order_id)

    def _load(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order
