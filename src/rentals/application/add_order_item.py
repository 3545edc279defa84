"""Application service: Add Item to an order draft."""

from __future__ import annotations

from rentals.application.order_draft import OrderDraft
from rentals.domain.exceptions import EntityNotFoundError, ValidationError
from rentals.domain.model.order import OrderLineItem
from rentals.domain.model.product import ColorSlot
from rentals.domain.model.value_objects import Quantity
from rentals.domain.repository.product_repository import ProductRepository


class AddOrderItemHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        draft: OrderDraft,
        product_name: str,
        quantity: int,
        colors: dict[ColorSlot, str] | None = None,
        size: str | None = None,
    ) -> OrderLineItem:
        """Price a product and append it to the draft.

        Sized products must name a size and take that size's price.
        A primary colour is only accepted on colour-bearing products;
        bundles carry their sub-item colours in the other slots.
        """
        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")

        colors = {slot: c.strip() for slot, c in (colors or {}).items() if c and c.strip()}
        if ColorSlot.PRIMARY in colors and not product.has_colors:
            raise ValidationError(f"{product.name} does not come in colours")

        unit_price = product.rental_price
        if product.has_sizes:
            if not size:
                raise ValidationError(f"Choose a size for {product.name}")
            match = next(
                (
                    s
                    for s in self._product_repo.list_size_variants(product.id)
                    if s.size.lower() == size.strip().lower()
                ),
                None,
            )
            if match is None:
                raise ValidationError(f"{product.name} has no size '{size}'")
            unit_price = match.rental_price
            size = match.size
        elif size:
            raise ValidationError(f"{product.name} does not come in sizes")

        item = OrderLineItem(
            product_id=product.id,
            product_name=product.name,
            quantity=Quantity(quantity),
            unit_price=unit_price,  # <-- price snapshot
            colors=colors,
            size=size or None,
        )
        draft.add_item(item)
        return item
