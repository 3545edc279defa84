"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from dataclasses import dataclass

from rentals.domain.repository.product_repository import ProductRepository


@dataclass(frozen=True)
class InventoryLineDTO:
    product_id: str
    product_name: str
    category: str
    price: str
    stock: int
    colors: list[tuple[str, int]]  # (colour, stock) for colour-bearing products
    sizes: list[tuple[str, str]]  # (size, price) for sized products
    is_bundle: bool


class ShowInventoryHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self) -> list[InventoryLineDTO]:
        lines: list[InventoryLineDTO] = []
        for product in self._product_repo.list_all():
            colors: list[tuple[str, int]] = []
            sizes: list[tuple[str, str]] = []
            stock = product.stock_total
            if product.has_colors:
                colors = [
                    (v.color, v.stock_available)
                    for v in self._product_repo.list_color_variants(product.id)
                ]
                stock = sum(pieces for _, pieces in colors)
            if product.has_sizes:
                sizes = [
                    (s.size, str(s.rental_price))
                    for s in self._product_repo.list_size_variants(product.id)
                ]
            lines.append(
                InventoryLineDTO(
                    product_id=product.id,
                    product_name=product.name,
                    category=product.category,
                    price=str(product.rental_price),
                    stock=0 if product.is_bundle else stock,
                    colors=colors,
                    sizes=sizes,
                    is_bundle=product.is_bundle,
                )
            )
        return lines


def total_pieces(lines: list[InventoryLineDTO]) -> int:
    return sum(line.stock for line in lines)
