"""JSON-file-backed implementation of ProductRepository."""

from __future__ import annotations

from pathlib import Path

from rentals.domain.model.product import (
    BundleComponent,
    ColorVariant,
    Product,
    SizeVariant,
)
from rentals.domain.repository.product_repository import ProductRepository
from rentals.infrastructure.persistence import rows as r
from rentals.infrastructure.persistence.json_table import JsonTable


class JsonProductRepository(ProductRepository):

    def __init__(self, data_dir: Path) -> None:
        self._products = JsonTable(data_dir, r.PRODUCTS)
        self._colors = JsonTable(data_dir, r.COLORS)
        self._sizes = JsonTable(data_dir, r.SIZES)
        self._components = JsonTable(data_dir, r.BUNDLE_COMPONENTS)

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for row in self._products.rows():
            if str(row["id"]) == str(product_id):
                return r.row_to_product(row)
        return None

    def get_by_name(self, name: str) -> Product | None:
        for row in self._products.rows():
            if row["nombre"].lower() == name.lower():
                return r.row_to_product(row)
        return None

    def list_all(self) -> list[Product]:
        products = [r.row_to_product(row) for row in self._products.rows()]
        return sorted(products, key=lambda p: p.name.lower())

    def save(self, product: Product) -> None:
        row = self._products.upsert(r.product_to_row(product))
        product.id = str(row["id"])

    def list_color_variants(self, product_id: str) -> list[ColorVariant]:
        return [
            r.row_to_color(row)
            for row in self._colors.rows()
            if str(row["producto_id"]) == str(product_id)
        ]

    def save_color_variant(self, variant: ColorVariant) -> None:
        row = self._colors.upsert(r.color_to_row(variant))
        variant.id = str(row["id"])

    def list_size_variants(self, product_id: str) -> list[SizeVariant]:
        return [
            r.row_to_size(row)
            for row in self._sizes.rows()
            if str(row["producto_id"]) == str(product_id)
        ]

    def save_size_variant(self, variant: SizeVariant) -> None:
        row = self._sizes.upsert(r.size_to_row(variant))
        variant.id = str(row["id"])

    def list_bundle_components(self, bundle_id: str) -> list[BundleComponent]:
        names = {str(row["id"]): row["nombre"] for row in self._products.rows()}
        return [
            r.row_to_component(row, names.get(str(row["producto_id"]), ""))
            for row in self._components.rows()
            if str(row["juego_id"]) == str(bundle_id)
        ]

    def replace_bundle_components(
        self, bundle_id: str, components: list[BundleComponent]
    ) -> None:
        kept = [
            row for row in self._components.rows() if str(row["juego_id"]) != str(bundle_id)
        ]
        self._components.write(kept + [r.component_to_row(c) for c in components])
