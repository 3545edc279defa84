"""Domain service: bundle ("juego") expansion.

A bundle is rented as one priced line but is physically made of fixed
quantities of other products. This service

- describes a bundle for humans ("10 Sillas + 1 Tablón"), and
- expands the lines of a new order so that every bundle line is
  preceded by one zero-priced line per component, tagged as a
  bundle-component artifact.

Both read the same BundleComponent rows the availability calculation
uses, so the pieces persisted per bundle unit always match what stock
accounting assumes.
"""

from __future__ import annotations

import logging

from rentals.domain.exceptions import DomainException, EntityNotFoundError
from rentals.domain.model.order import OrderLineItem
from rentals.domain.model.product import BundleComponent, ColorSlot, Product
from rentals.domain.model.value_objects import Money, Quantity
from rentals.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class BundleExpansionService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def describe(self, bundle_id: str) -> str:
        """Human-readable decomposition of a bundle.

        Returns an empty string when the bundle has no components or the
        lookup fails; never raises.
        """
        try:
            parts = [
                f"{quantity} {name}{'s' if quantity > 1 else ''}"
                for name, quantity in self._named_components(bundle_id)
            ]
        except DomainException:
            logger.exception("Could not load components of bundle %s", bundle_id)
            return ""
        return " + ".join(parts)

    def expand_lines(self, lines: list[OrderLineItem]) -> list[OrderLineItem]:
        """Return the full set of lines to persist for a new order.

        Non-bundle lines pass through unchanged. Each bundle line is kept
        (it carries the price) and written after its component lines.
        """
        expanded: list[OrderLineItem] = []

        for line in lines:
            product = self._product_repo.get_by_id(line.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{line.product_name}'")

            if not product.is_bundle:
                expanded.append(line)
                continue

            for component in self._product_repo.list_bundle_components(product.id):
                target = self._product_repo.get_by_id(component.component_id)
                if target is None:
                    logger.warning(
                        "Bundle %s references missing product %s; component skipped",
                        product.name,
                        component.component_id,
                    )
                    continue
                expanded.append(self._component_line(line, product, target, component))
            expanded.append(line)

        return expanded

    # --- Internal helpers -----------------------------------------------------

    def _named_components(self, bundle_id: str) -> list[tuple[str, int]]:
        named: list[tuple[str, int]] = []
        for component in self._product_repo.list_bundle_components(bundle_id):
            name = component.component_name
            if not name:
                target = self._product_repo.get_by_id(component.component_id)
                if target is None:
                    continue
                name = target.name
            named.append((name, component.quantity))
        return named

    @staticmethod
    def _component_line(
        line: OrderLineItem,
        bundle: Product,
        target: Product,
        component: BundleComponent,
    ) -> OrderLineItem:
        colors: dict[ColorSlot, str] = {}
        if target.has_colors:
            color = line.color_for(target.color_slot)
            if color:
                colors[ColorSlot.PRIMARY] = color

        return OrderLineItem(
            product_id=target.id,
            product_name=target.name,
            quantity=Quantity(component.quantity * line.quantity.value),
            unit_price=Money.zero(),  # components are not charged individually
            colors=colors,
            is_bundle_component=True,
            bundle_origin=bundle.name,
        )
