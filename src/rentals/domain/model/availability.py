"""Availability read model: computed per date, never persisted."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class ColorUsage:
    """Stock and usage of one colour of a colour-bearing product.

    ``registered`` is False for colours that appear on orders but have no
    ColorVariant row; ``color`` is None for lines that named no colour.
    """

    color: str | None
    total: int
    in_use: int
    registered: bool = True


@dataclass(frozen=True)
class AvailabilitySnapshot:
    """Total, in-use and available pieces of one product on one date."""

    product_id: str
    product_name: str
    total: int
    in_use: int
    colors: tuple[ColorUsage, ...] = ()

    @property
    def available(self) -> int:
        return max(0, self.total - self.in_use)

    @property
    def percent_available(self) -> float:
        if self.total <= 0:
            return 0.0
        return self.available / self.total * 100


@dataclass(frozen=True)
class AvailabilityReport:
    """Snapshots for a date.

    ``degraded`` marks a report built without backend data (every product
    shown fully available); such figures must not be trusted for booking.
    """

    date: date
    snapshots: list[AvailabilitySnapshot]
    degraded: bool = False
