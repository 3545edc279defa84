"""Application service: Add Product use case."""

from __future__ import annotations

import logging

from rentals.domain.exceptions import ValidationError
from rentals.domain.model.product import ColorSlot, Product
from rentals.domain.model.value_objects import Money
from rentals.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        stock: int = 0,
        category: str = "general",
        has_colors: bool = False,
        has_sizes: bool = False,
        is_bundle: bool = False,
        color_slot: ColorSlot = ColorSlot.PRIMARY,
    ) -> Product:
        """Add a new product to the catalog."""
        if not name or not name.strip():
            raise ValidationError("Product name is required")
        if stock < 0:
            raise ValidationError("Initial stock cannot be negative")

        existing = self._product_repo.get_by_name(name.strip())
        if existing is not None:
            raise ValidationError(f"Product '{name}' already exists")

        product = Product(
            id=None,
            name=name.strip(),
            rental_price=Money.of(price),
            category=(category or "general").strip(),
            is_bundle=is_bundle,
            has_colors=has_colors,
            has_sizes=has_sizes,
            # Colour products and bundles keep no stock of their own.
            stock_total=0 if has_colors or is_bundle else stock,
            color_slot=color_slot,
        )
        self._product_repo.save(product)
        logger.info("Product %s '%s' added", product.id, product.name)
        return product
