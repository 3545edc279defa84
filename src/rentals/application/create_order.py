"""Application service: Create Order use case.

Validates the draft and the form before touching the backend, expands
bundle lines into their component lines, then persists the order and
all its lines in one save.
"""

from __future__ import annotations

import logging

from rentals.application.dto import OrderDetails, OrderDTO, order_to_dto
from rentals.application.order_draft import OrderDraft
from rentals.domain.model.order import Order
from rentals.domain.model.value_objects import Money
from rentals.domain.repository.order_repository import OrderRepository
from rentals.domain.repository.product_repository import ProductRepository
from rentals.domain.service.bundle_expansion_service import BundleExpansionService

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
    ) -> None:
        self._order_repo = order_repo
        self._bundles = BundleExpansionService(product_repo)

    def handle(self, draft: OrderDraft, details: OrderDetails) -> OrderDTO:
        """Save the draft as a new order.

        Steps:
        1. Block a second submission of the same draft.
        2. Let the Order aggregate validate the form and the lines.
        3. Expand bundles into zero-priced component lines.
        4. Persist, clear the draft and return a DTO.
        """
        draft.begin_submit()
        try:
            order = Order.create(
                customer_name=details.customer_name,
                event_date=details.event_date,
                event_time=details.event_time,
                items=draft.items,
                venue=details.venue,
                venue_details=details.venue_details,
                customer_phone=details.customer_phone,
                comments=details.comments,
                paid=details.paid,
                deposit=Money.of(details.deposit) if details.deposit else None,
            )
            order.items = self._bundles.expand_lines(order.items)
            self._order_repo.save(order)
        finally:
            draft.end_submit()

        logger.info(
            "Order #%s saved for %s on %s (%d lines, %d user-facing)",
            order.id,
            order.customer_name,
            order.event_date,
            len(order.items),
            len(order.visible_items),
        )
        draft.clear()
        return order_to_dto(order)
