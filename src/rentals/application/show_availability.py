"""Application service: Show Availability use case (query).

Fetches everything the availability calculation needs for one date,
then hands it to the pure AvailabilityCalculator. Every lookup finishes
before the tally starts, so no partial result is ever shared.

When the backend fails the handler raises BackendError, unless it was
built with ``fail_open=True``: then it reports every product as fully
available and marks the report as degraded so the caller can warn that
the figures were not checked against existing orders. Colour products
still report the sum of their colour stock when that was readable.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from rentals.domain.exceptions import BackendError
from rentals.domain.model.availability import AvailabilityReport, AvailabilitySnapshot
from rentals.domain.model.order import RELEASED_STATUSES
from rentals.domain.model.product import ColorVariant, Product
from rentals.domain.repository.order_repository import OrderRepository
from rentals.domain.repository.product_repository import ProductRepository
from rentals.domain.service.availability_calculator import (
    AvailabilityCalculator,
    order_by_priority,
)

logger = logging.getLogger(__name__)


class ShowAvailabilityHandler:

    def __init__(
        self,
        product_repo: ProductRepository,
        order_repo: OrderRepository,
        fail_open: bool = False,
        priority: Sequence[str] = (),
    ) -> None:
        self._product_repo = product_repo
        self._order_repo = order_repo
        self._fail_open = fail_open
        self._priority = tuple(priority)
        self._calculator = AvailabilityCalculator()

    def handle(self, day: date) -> AvailabilityReport:
        try:
            catalog = self._product_repo.list_all()
        except BackendError:
            if not self._fail_open:
                raise
            logger.exception("Catalog unavailable; availability for %s not computed", day)
            return AvailabilityReport(date=day, snapshots=[], degraded=True)

        try:
            color_variants = {
                p.id: self._product_repo.list_color_variants(p.id)
                for p in catalog
                if p.has_colors and not p.is_bundle
            }
        except BackendError:
            if not self._fail_open:
                raise
            logger.exception(
                "Colour stock unavailable for %s; reporting everything as available", day
            )
            return self._degraded(day, catalog)

        try:
            orders = self._order_repo.list_for_date(day, exclude_statuses=RELEASED_STATUSES)
            bundle_ids = {p.id for p in catalog if p.is_bundle}
            rented_bundles = {
                line.product_id
                for order in orders
                for line in order.items
                if line.product_id in bundle_ids
            }
            components = {
                bundle_id: self._product_repo.list_bundle_components(bundle_id)
                for bundle_id in sorted(rented_bundles)
            }
        except BackendError:
            if not self._fail_open:
                raise
            logger.exception(
                "Orders unavailable for %s; reporting everything as available", day
            )
            return self._degraded(day, catalog, color_variants)

        snapshots = self._calculator.compute(
            catalog=catalog,
            orders=orders,
            color_variants=color_variants,
            bundle_components=components,
            priority=self._priority,
        )
        logger.debug(
            "Availability for %s: %d orders, %d products", day, len(orders), len(snapshots)
        )
        return AvailabilityReport(date=day, snapshots=snapshots)

    def _degraded(
        self,
        day: date,
        catalog: list[Product],
        color_variants: dict[str, list[ColorVariant]] | None = None,
    ) -> AvailabilityReport:
        """Everything free: colour stock when it was read, ``stock_total`` otherwise."""
        snapshots = []
        for p in catalog:
            if p.is_bundle:
                continue
            if color_variants is not None and p.id in color_variants:
                total = sum(v.stock_available for v in color_variants[p.id])
            else:
                total = p.stock_total
            snapshots.append(
                AvailabilitySnapshot(product_id=p.id, product_name=p.name, total=total, in_use=0)
            )
        return AvailabilityReport(
            date=day, snapshots=order_by_priority(snapshots, self._priority), degraded=True
        )
