"""Application service: Describe Bundle use case (query)."""

from __future__ import annotations

from rentals.domain.repository.product_repository import ProductRepository
from rentals.domain.service.bundle_expansion_service import BundleExpansionService


class DescribeBundleHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._bundles = BundleExpansionService(product_repo)

    def handle(self, bundle_id: str) -> str:
        """E.g. "10 Sillas + 1 Tablón"; empty when there is nothing to list."""
        return self._bundles.describe(bundle_id)
