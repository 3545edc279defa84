"""Application service: Update Prices use case.

Prices are edited in bulk from the settings page. One bad entry does not
stop the others from being saved.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rentals.domain.exceptions import DomainException, EntityNotFoundError
from rentals.domain.model.value_objects import Money
from rentals.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


@dataclass
class PriceUpdateResult:
    updated: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)  # product id -> reason


class UpdatePricesHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, prices: dict[str, str]) -> PriceUpdateResult:
        """Update rental prices, keyed by product ID.

        This does NOT affect any existing orders; they captured a
        price snapshot at creation time.
        """
        result = PriceUpdateResult()
        for product_id, price in prices.items():
            try:
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError(f"Product with ID '{product_id}' not found")
                product.update_price(Money.of(price))
                self._product_repo.save(product)
            except DomainException as exc:
                logger.error("Price of product %s not updated: %s", product_id, exc)
                result.failed[product_id] = str(exc)
            else:
                result.updated.append(product_id)
        return result
