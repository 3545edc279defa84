"""Application service: define what a bundle is made of."""

from __future__ import annotations

from rentals.domain.exceptions import EntityNotFoundError, ValidationError
from rentals.domain.model.product import BundleComponent
from rentals.domain.repository.product_repository import ProductRepository


class SetBundleComponentsHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(self, bundle_name: str, components: dict[str, int]) -> list[BundleComponent]:
        """Replace the component list of a bundle.

        Args:
            bundle_name: The bundle product.
            components: Mapping of component product name -> pieces per
                bundle unit.
        """
        bundle = self._product_repo.get_by_name(bundle_name)
        if bundle is None:
            raise EntityNotFoundError(f"Product not found: '{bundle_name}'")
        if not bundle.is_bundle:
            raise ValidationError(f"{bundle.name} is not a bundle")

        # Phase 1: resolve and validate every component before writing
        rows: list[BundleComponent] = []
        seen: set[str] = set()
        for name, quantity in components.items():
            product = self._product_repo.get_by_name(name)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{name}'")
            if product.is_bundle:
                raise ValidationError(f"A bundle cannot contain another bundle ({product.name})")
            if product.id in seen:
                raise ValidationError(f"{product.name} is listed twice")
            seen.add(product.id)
            rows.append(
                BundleComponent(
                    bundle_id=bundle.id,
                    component_id=product.id,
                    quantity=quantity,
                    component_name=product.name,
                )
            )

        # Phase 2: persist
        self._product_repo.replace_bundle_components(bundle.id, rows)
        return rows
