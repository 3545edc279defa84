"""Domain service: date-scoped availability of rental stock.

Given the catalog, the colour pools, the bundle bills of materials and
the orders of one event date, works out how many pieces of every
physical product are committed and how many remain.

The calculation is a pure function of its inputs. Callers fetch
everything first and hand it over, so nothing here touches the backend
and two calls with the same inputs always agree.

Rules:
- Only orders that still hold inventory count.
- Bundle lines are decomposed through the bundle's components; the
  bundle itself never accrues usage. Component lines persisted at save
  time are skipped, the bundle line already accounts for them.
- Colour-bearing products are tallied per colour. Colours without a
  registered pool, and lines naming no colour, still count.
- ``available`` is clamped at zero.
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from collections.abc import Iterable, Mapping, Sequence

from rentals.domain.model.availability import AvailabilitySnapshot, ColorUsage
from rentals.domain.model.order import Order, OrderLineItem
from rentals.domain.model.product import BundleComponent, ColorVariant, Product

logger = logging.getLogger(__name__)

# product id -> colour (None when untracked) -> pieces in use
Usage = dict[str, Counter]


class AvailabilityCalculator:

    def compute(
        self,
        catalog: Sequence[Product],
        orders: Iterable[Order],
        color_variants: Mapping[str, Sequence[ColorVariant]],
        bundle_components: Mapping[str, Sequence[BundleComponent]],
        priority: Sequence[str] = (),
    ) -> list[AvailabilitySnapshot]:
        """Return one snapshot per non-bundle product of *catalog*.

        Snapshots follow catalog order, except that products named in
        *priority* come first, in that order.
        """
        products_by_id = {p.id: p for p in catalog}
        usage = self.tally_usage(orders, products_by_id, bundle_components)

        snapshots = [
            self._snapshot(product, usage.get(product.id, Counter()), color_variants)
            for product in catalog
            if not product.is_bundle
        ]
        return order_by_priority(snapshots, priority)

    def tally_usage(
        self,
        orders: Iterable[Order],
        products_by_id: Mapping[str, Product],
        bundle_components: Mapping[str, Sequence[BundleComponent]],
    ) -> Usage:
        """Sum the pieces each product (and colour) has committed."""
        usage: Usage = defaultdict(Counter)

        for order in orders:
            if not order.holds_inventory:
                continue
            for line in order.items:
                if line.is_bundle_component:
                    continue
                product = products_by_id.get(line.product_id)
                if product is not None and product.is_bundle:
                    self._tally_bundle(usage, line, product, products_by_id, bundle_components)
                else:
                    self._add(usage, line.product_id, product, line, line.quantity.value)

        return usage

    # --- Internal helpers -----------------------------------------------------

    def _tally_bundle(
        self,
        usage: Usage,
        line: OrderLineItem,
        bundle: Product,
        products_by_id: Mapping[str, Product],
        bundle_components: Mapping[str, Sequence[BundleComponent]],
    ) -> None:
        for component in bundle_components.get(bundle.id, ()):
            target = products_by_id.get(component.component_id)
            if target is None:
                logger.warning(
                    "Bundle %s references missing product %s; component skipped",
                    bundle.name,
                    component.component_id,
                )
                continue
            pieces = line.quantity.value * component.quantity
            self._add(usage, target.id, target, line, pieces)

    @staticmethod
    def _add(
        usage: Usage,
        product_id: str,
        product: Product | None,
        line: OrderLineItem,
        pieces: int,
    ) -> None:
        color = None
        if product is not None and product.has_colors:
            color = line.color_for(product.color_slot)
        usage[product_id][color] += pieces

    @staticmethod
    def _snapshot(
        product: Product,
        used: Counter,
        color_variants: Mapping[str, Sequence[ColorVariant]],
    ) -> AvailabilitySnapshot:
        if not product.has_colors:
            return AvailabilitySnapshot(
                product_id=product.id,
                product_name=product.name,
                total=product.stock_total,
                in_use=sum(used.values()),
            )

        stock: Counter = Counter()
        for variant in color_variants.get(product.id, ()):
            stock[variant.color] += variant.stock_available

        breakdown = [
            ColorUsage(color=color, total=pieces, in_use=used.get(color, 0))
            for color, pieces in stock.items()
        ]
        unregistered = sorted(
            (color for color in used if color not in stock),
            key=lambda c: (c is None, c or ""),
        )
        for color in unregistered:
            logger.warning(
                "%s: %d pieces of colour %r are in use but the colour is not in inventory",
                product.name,
                used[color],
                color,
            )
            breakdown.append(
                ColorUsage(color=color, total=0, in_use=used[color], registered=False)
            )

        return AvailabilitySnapshot(
            product_id=product.id,
            product_name=product.name,
            total=sum(stock.values()),
            in_use=sum(used.values()),
            colors=tuple(breakdown),
        )


def order_by_priority(
    snapshots: Sequence[AvailabilitySnapshot], priority: Sequence[str]
) -> list[AvailabilitySnapshot]:
    """Put the products named in *priority* first; keep the rest in order."""
    if not priority:
        return list(snapshots)

    by_name: dict[str, list[AvailabilitySnapshot]] = defaultdict(list)
    for snapshot in snapshots:
        by_name[snapshot.product_name].append(snapshot)

    ordered: list[AvailabilitySnapshot] = []
    for name in dict.fromkeys(priority):
        ordered.extend(by_name.get(name, ()))
    named = set(priority)
    ordered.extend(s for s in snapshots if s.product_name not in named)
    return ordered
