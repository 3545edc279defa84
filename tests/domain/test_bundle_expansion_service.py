"""Unit tests for bundle description and order-line expansion."""

import pytest

from rentals.domain.exceptions import BackendError, EntityNotFoundError
from rentals.domain.model.order import OrderLineItem
from rentals.domain.model.product import BundleComponent, ColorSlot, Product
from rentals.domain.model.value_objects import Money, Quantity
from rentals.domain.service.bundle_expansion_service import BundleExpansionService
from tests.fakes import FakeProductRepository


def _catalog() -> FakeProductRepository:
    return FakeProductRepository(
        products=[
            Product(id="1", name="Silla", rental_price=Money.of("15"), stock_total=100),
            Product(id="2", name="Tablón", rental_price=Money.of("80"), stock_total=20),
            Product(
                id="3",
                name="Cubremantel",
                rental_price=Money.of("40"),
                has_colors=True,
                color_slot=ColorSlot.TABLECLOTH,
            ),
            Product(
                id="4",
                name="Moño",
                rental_price=Money.of("5"),
                has_colors=True,
                color_slot=ColorSlot.BOW,
            ),
            Product(id="9", name="Juego Tablón", rental_price=Money.of("300"), is_bundle=True),
            Product(id="10", name="Juego Vacío", rental_price=Money.of("100"), is_bundle=True),
        ],
        components=[
            BundleComponent(bundle_id="9", component_id="1", quantity=10, component_name="Silla"),
            BundleComponent(bundle_id="9", component_id="2", quantity=1, component_name="Tablón"),
            BundleComponent(bundle_id="9", component_id="3", quantity=1, component_name="Cubremantel"),
            BundleComponent(bundle_id="9", component_id="4", quantity=10, component_name="Moño"),
        ],
    )


def _line(product_id: str, name: str, qty: int, price: str, colors=None) -> OrderLineItem:
    return OrderLineItem(
        product_id=product_id,
        product_name=name,
        quantity=Quantity(qty),
        unit_price=Money.of(price),
        colors=colors or {},
    )


class TestDescribe:

    def test_describes_components_in_order(self):
        service = BundleExpansionService(_catalog())
        assert service.describe("9") == "10 Sillas + 1 Tablón + 1 Cubremantel + 10 Moños"

    def test_bundle_without_components_is_empty(self):
        assert BundleExpansionService(_catalog()).describe("10") == ""

    def test_falls_back_to_product_name(self):
        repo = _catalog()
        repo.replace_bundle_components(
            "10", [BundleComponent(bundle_id="10", component_id="1", quantity=2)]
        )
        assert BundleExpansionService(repo).describe("10") == "2 Sillas"

    def test_backend_failure_returns_empty_string(self):
        class BrokenRepo(FakeProductRepository):
            def list_bundle_components(self, bundle_id):
                raise BackendError("Backend unreachable")

        assert BundleExpansionService(BrokenRepo()).describe("9") == ""


class TestExpandLines:

    def test_plain_lines_pass_through(self):
        line = _line("1", "Silla", 30, "15")
        assert BundleExpansionService(_catalog()).expand_lines([line]) == [line]

    def test_free_component_lines_precede_the_bundle_line(self):
        bundle_line = _line(
            "9",
            "Juego Tablón",
            3,
            "300",
            {ColorSlot.TABLECLOTH: "Rojo", ColorSlot.BOW: "Dorado"},
        )
        expanded = BundleExpansionService(_catalog()).expand_lines([bundle_line])

        assert expanded[-1] is bundle_line
        components = expanded[:-1]
        assert [(c.product_name, c.quantity.value) for c in components] == [
            ("Silla", 30),
            ("Tablón", 3),
            ("Cubremantel", 3),
            ("Moño", 30),
        ]
        assert all(c.is_bundle_component for c in components)
        assert all(c.unit_price.is_zero for c in components)
        assert all(c.bundle_origin == "Juego Tablón" for c in components)

    def test_component_lines_carry_their_slot_colour(self):
        bundle_line = _line(
            "9", "Juego Tablón", 1, "300", {ColorSlot.TABLECLOTH: "Rojo", ColorSlot.BOW: "Dorado"}
        )
        expanded = BundleExpansionService(_catalog()).expand_lines([bundle_line])
        colors = {c.product_name: c.colors for c in expanded[:-1]}

        assert colors["Cubremantel"] == {ColorSlot.PRIMARY: "Rojo"}
        assert colors["Moño"] == {ColorSlot.PRIMARY: "Dorado"}
        assert colors["Silla"] == {}

    def test_total_is_unchanged_by_expansion(self):
        lines = [_line("9", "Juego Tablón", 2, "300"), _line("1", "Silla", 5, "15")]
        expanded = BundleExpansionService(_catalog()).expand_lines(lines)
        total = Money.zero()
        for line in expanded:
            total = total + line.line_total
        assert total == Money.of("675")

    def test_missing_component_product_is_skipped(self):
        repo = _catalog()
        repo.replace_bundle_components(
            "10",
            [
                BundleComponent(bundle_id="10", component_id="404", quantity=1),
                BundleComponent(bundle_id="10", component_id="1", quantity=4),
            ],
        )
        expanded = BundleExpansionService(repo).expand_lines([_line("10", "Juego Vacío", 1, "100")])
        assert [c.product_name for c in expanded[:-1]] == ["Silla"]

    def test_unknown_product_rejected(self):
        with pytest.raises(EntityNotFoundError, match="Fantasma"):
            BundleExpansionService(_catalog()).expand_lines([_line("77", "Fantasma", 1, "10")])
