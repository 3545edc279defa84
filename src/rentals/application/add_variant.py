"""Application services: add colour pools and size options to a product."""

from __future__ import annotations

from rentals.domain.exceptions import EntityNotFoundError, ValidationError
from rentals.domain.model.product import ColorVariant, Product, SizeVariant
from rentals.domain.model.value_objects import Money
from rentals.domain.repository.product_repository import ProductRepository


def _load(product_repo: ProductRepository, product_name: str) -> Product:
    product = product_repo.get_by_name(product_name)
    if product is None:
        raise EntityNotFoundError(f"Product not found: '{product_name}'")
    return product


class AddColorVariantHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_name: str, color: str, stock: int = 0) -> ColorVariant:
        if not color or not color.strip():
            raise ValidationError("Colour name is required")
        if stock < 0:
            raise ValidationError("Initial stock cannot be negative")

        product = _load(self._product_repo, product_name)
        if not product.has_colors:
            raise ValidationError(f"{product.name} does not come in colours")

        existing = self._product_repo.list_color_variants(product.id)
        if any(v.color.lower() == color.strip().lower() for v in existing):
            raise ValidationError(f"{product.name} already has colour '{color.strip()}'")

        variant = ColorVariant(
            id=None, product_id=product.id, color=color.strip(), stock_available=stock
        )
        self._product_repo.save_color_variant(variant)
        return variant


class AddSizeVariantHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, product_name: str, size: str, price: str) -> SizeVariant:
        if not size or not size.strip():
            raise ValidationError("Size name is required")

        product = _load(self._product_repo, product_name)
        if not product.has_sizes:
            raise ValidationError(f"{product.name} does not come in sizes")

        existing = self._product_repo.list_size_variants(product.id)
        if any(s.size.lower() == size.strip().lower() for s in existing):
            raise ValidationError(f"{product.name} already has size '{size.strip()}'")

        variant = SizeVariant(
            id=None, product_id=product.id, size=size.strip(), rental_price=Money.of(price)
        )
        self._product_repo.save_size_variant(variant)
        return variant
