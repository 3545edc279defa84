"""Application service: Adjust Stock use case.

Stock of a plain product lives on the product; stock of a colour-bearing
product lives in its colour pools, so a colour must be named for those.
"""

from __future__ import annotations

import logging
from enum import Enum

from rentals.domain.exceptions import EntityNotFoundError, ValidationError
from rentals.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class StockAction(Enum):
    ADD = "add"
    REMOVE = "remove"
    SET = "set"


def apply_action(current: int, action: StockAction, quantity: int) -> int:
    """New stock level; removing more than there is leaves zero."""
    if quantity < 0:
        raise ValidationError("Quantity cannot be negative")
    if action is StockAction.ADD:
        return current + quantity
    if action is StockAction.REMOVE:
        return max(0, current - quantity)
    return quantity


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        product_name: str,
        action: StockAction,
        quantity: int,
        color: str | None = None,
    ) -> int:
        """Apply *action* and return the new stock level."""
        if action is not StockAction.SET and quantity == 0:
            raise ValidationError("Quantity must be greater than zero")

        product = self._product_repo.get_by_name(product_name)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{product_name}'")
        if product.is_bundle:
            raise ValidationError(
                f"{product.name} is a bundle; adjust the stock of its components"
            )

        if product.has_colors:
            if not color:
                raise ValidationError(f"Choose a colour of {product.name}")
            variant = next(
                (
                    v
                    for v in self._product_repo.list_color_variants(product.id)
                    if v.color.lower() == color.strip().lower()
                ),
                None,
            )
            if variant is None:
                raise EntityNotFoundError(f"{product.name} has no colour '{color}'")
            variant.set_stock(apply_action(variant.stock_available, action, quantity))
            self._product_repo.save_color_variant(variant)
            new_level = variant.stock_available
        else:
            if color:
                raise ValidationError(f"{product.name} does not come in colours")
            product.set_stock(apply_action(product.stock_total, action, quantity))
            self._product_repo.save(product)
            new_level = product.stock_total

        logger.info(
            "Stock of %s%s set to %d (%s %d)",
            product.name,
            f" ({color})" if color else "",
            new_level,
            action.value,
            quantity,
        )
        return new_level
