"""Abstract repository for the Product aggregate and the rows it owns.

Defined in the domain layer so the domain never depends on
infrastructure. Concrete implementations (JSON files, the hosted REST
backend, in-memory) live in the infrastructure layer and raise
BackendError when the backend cannot answer.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rentals.domain.model.product import (
    BundleComponent,
    ColorVariant,
    Product,
    SizeVariant,
)


class ProductRepository(ABC):

    @abstractmethod
    def get_by_id(self, product_id: str) -> Product | None:
        """Return a product by its ID, or None if not found."""

    @abstractmethod
    def get_by_name(self, name: str) -> Product | None:
        """Return a product by its name (case-insensitive), or None."""

    @abstractmethod
    def list_all(self) -> list[Product]:
        """Return every product in the catalog, ordered by name."""

    @abstractmethod
    def save(self, product: Product) -> None:
        """Persist a new or updated product; assigns an ID to new ones."""

    @abstractmethod
    def list_color_variants(self, product_id: str) -> list[ColorVariant]:
        """Return the colour pools of a product."""

    @abstractmethod
    def save_color_variant(self, variant: ColorVariant) -> None:
        """Persist a new or updated colour pool."""

    @abstractmethod
    def list_size_variants(self, product_id: str) -> list[SizeVariant]:
        """Return the size options of a product."""

    @abstractmethod
    def save_size_variant(self, variant: SizeVariant) -> None:
        """Persist a new size option."""

    @abstractmethod
    def list_bundle_components(self, bundle_id: str) -> list[BundleComponent]:
        """Return the components of a bundle (empty for non-bundles)."""

    @abstractmethod
    def replace_bundle_components(
        self, bundle_id: str, components: list[BundleComponent]
    ) -> None:
        """Replace the whole component list of a bundle."""
