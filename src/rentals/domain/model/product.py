"""Product aggregate and the rows it owns.

A Product is a piece of rentable furniture (a chair, a tablecloth) or a
bundle ("juego") that is rented as one line but is physically backed by
fixed quantities of other products. Colour-bearing products keep their
stock in ColorVariant rows; the product's own ``stock_total`` is only
meaningful when the product has no colours.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from rentals.domain.exceptions import ValidationError
from rentals.domain.model.value_objects import Money


class ColorSlot(Enum):
    """Where on an order line a colour choice is recorded.

    A bundle can carry two independently coloured sub-items (the
    tablecloth and the bow), each drawn from a different product's
    colour pool, so a line has one slot per kind of colour.
    """

    PRIMARY = "color"
    TABLECLOTH = "color_cubremantel"
    BOW = "color_mono"


@dataclass
class Product:
    """A product in the rental catalog.

    Kept as a mutable dataclass because price and stock updates are
    legitimate mutations on the aggregate.
    """

    id: str | None
    name: str
    rental_price: Money
    category: str = "general"
    is_bundle: bool = False
    has_colors: bool = False
    has_sizes: bool = False
    stock_total: int = 0
    color_slot: ColorSlot = ColorSlot.PRIMARY

    def update_price(self, new_price: Money) -> None:
        """Change the rental price.

        Existing orders keep the unit price they captured when created.
        """
        self.rental_price = new_price

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError(f"Stock for {self.name} cannot be negative")
        self.stock_total = quantity


@dataclass
class ColorVariant:
    """An independently stocked colour pool of a product."""

    id: str | None
    product_id: str
    color: str
    stock_available: int = 0

    def set_stock(self, quantity: int) -> None:
        if quantity < 0:
            raise ValidationError(f"Stock for colour {self.color} cannot be negative")
        self.stock_available = quantity


@dataclass
class SizeVariant:
    """A size option of a product; sized products are priced per size."""

    id: str | None
    product_id: str
    size: str
    rental_price: Money


@dataclass(frozen=True)
class BundleComponent:
    """One entry of a bundle's bill of materials.

    ``quantity`` is the number of component pieces behind a single unit
    of the bundle.
    """

    bundle_id: str
    component_id: str
    quantity: int
    component_name: str = ""

    def __post_init__(self) -> None:
        if self.quantity <= 0:
            raise ValidationError(
                f"Component quantity must be positive (bundle {self.bundle_id}, "
                f"component {self.component_id})"
            )
