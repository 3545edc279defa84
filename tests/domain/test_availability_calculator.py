"""Unit tests for the AvailabilityCalculator domain service.

All inputs are plain objects, the calculator never touches a repository.
"""

from datetime import date, time

from rentals.domain.model.order import Order, OrderLineItem, OrderStatus
from rentals.domain.model.product import (
    BundleComponent,
    ColorSlot,
    ColorVariant,
    Product,
)
from rentals.domain.model.value_objects import Money, Quantity
from rentals.domain.service.availability_calculator import (
    AvailabilityCalculator,
    order_by_priority,
)

DAY = date(2025, 6, 1)

CHAIR = Product(id="1", name="Chair", rental_price=Money.of("15"), stock_total=100)
TABLE = Product(id="2", name="Long Table", rental_price=Money.of("80"), stock_total=20)
TABLECLOTH = Product(
    id="3",
    name="Tablecloth",
    rental_price=Money.of("40"),
    has_colors=True,
    color_slot=ColorSlot.TABLECLOTH,
)
BOW = Product(
    id="4",
    name="Bow",
    rental_price=Money.of("5"),
    has_colors=True,
    color_slot=ColorSlot.BOW,
)
PACKAGE = Product(
    id="9", name="Table Package", rental_price=Money.of("300"), is_bundle=True
)

CATALOG = [CHAIR, TABLE, TABLECLOTH, BOW, PACKAGE]

COLORS = {
    "3": [
        ColorVariant(id="c1", product_id="3", color="Red", stock_available=20),
        ColorVariant(id="c2", product_id="3", color="Blue", stock_available=15),
    ],
    "4": [ColorVariant(id="c3", product_id="4", color="Gold", stock_available=50)],
}

COMPONENTS = {
    "9": [
        BundleComponent(bundle_id="9", component_id="1", quantity=10),
        BundleComponent(bundle_id="9", component_id="3", quantity=1),
    ]
}


def _line(product: Product, qty: int, colors=None, component: bool = False) -> OrderLineItem:
    return OrderLineItem(
        product_id=product.id,
        product_name=product.name,
        quantity=Quantity(qty),
        unit_price=Money.zero() if component else product.rental_price,
        colors=colors or {},
        is_bundle_component=component,
    )


def _order(*lines: OrderLineItem, status: OrderStatus = OrderStatus.UPCOMING) -> Order:
    return Order(
        id=None,
        customer_name="Ana",
        event_date=DAY,
        event_time=time(17, 0),
        items=list(lines),
        status=status,
    )


def _compute(orders, catalog=CATALOG, colors=COLORS, components=COMPONENTS, priority=()):
    snapshots = AvailabilityCalculator().compute(
        catalog=catalog,
        orders=orders,
        color_variants=colors,
        bundle_components=components,
        priority=priority,
    )
    return {s.product_name: s for s in snapshots}


class TestNoOrders:

    def test_everything_available(self):
        result = _compute([])
        for snapshot in result.values():
            assert snapshot.in_use == 0
            assert snapshot.available == snapshot.total
        assert result["Chair"].total == 100
        assert result["Tablecloth"].total == 35

    def test_bundles_are_not_reported(self):
        assert "Table Package" not in _compute([])


class TestPlainProducts:

    def test_single_line(self):
        chair = _compute([_order(_line(CHAIR, 30))])["Chair"]
        assert (chair.total, chair.in_use, chair.available) == (100, 30, 70)

    def test_lines_across_orders_add_up(self):
        result = _compute([_order(_line(CHAIR, 30)), _order(_line(CHAIR, 25), _line(TABLE, 2))])
        assert result["Chair"].in_use == 55
        assert result["Long Table"].in_use == 2

    def test_available_is_clamped_at_zero(self):
        chair = _compute([_order(_line(CHAIR, 130))])["Chair"]
        assert chair.in_use == 130
        assert chair.available == 0
        assert chair.percent_available == 0.0


class TestBundles:

    def test_bundle_line_is_decomposed(self):
        result = _compute([_order(_line(PACKAGE, 3, {ColorSlot.TABLECLOTH: "Red"}))])
        assert result["Chair"].in_use == 30
        assert result["Tablecloth"].in_use == 3
        assert "Table Package" not in result

    def test_persisted_component_lines_are_not_counted_twice(self):
        order = _order(
            _line(PACKAGE, 3, {ColorSlot.TABLECLOTH: "Red"}),
            _line(CHAIR, 30, component=True),
            _line(TABLECLOTH, 3, {ColorSlot.PRIMARY: "Red"}, component=True),
        )
        result = _compute([order])
        assert result["Chair"].in_use == 30
        assert result["Tablecloth"].in_use == 3

    def test_bundle_without_components_contributes_nothing(self):
        result = _compute([_order(_line(PACKAGE, 3))], components={})
        assert all(s.in_use == 0 for s in result.values())

    def test_missing_component_product_is_skipped(self):
        components = {
            "9": [
                BundleComponent(bundle_id="9", component_id="404", quantity=5),
                BundleComponent(bundle_id="9", component_id="1", quantity=10),
            ]
        }
        result = _compute([_order(_line(PACKAGE, 1))], components=components)
        assert result["Chair"].in_use == 10

    def test_two_colour_slots_feed_two_products(self):
        components = {
            "9": [
                BundleComponent(bundle_id="9", component_id="3", quantity=1),
                BundleComponent(bundle_id="9", component_id="4", quantity=2),
            ]
        }
        line = _line(PACKAGE, 4, {ColorSlot.TABLECLOTH: "Blue", ColorSlot.BOW: "Gold"})
        result = _compute([_order(line)], components=components)

        tablecloth = {c.color: c for c in result["Tablecloth"].colors}
        bow = {c.color: c for c in result["Bow"].colors}
        assert tablecloth["Blue"].in_use == 4
        assert tablecloth["Red"].in_use == 0
        assert bow["Gold"].in_use == 8


class TestColours:

    def test_unregistered_colour_still_counts(self):
        orders = [
            _order(_line(TABLECLOTH, 5, {ColorSlot.PRIMARY: "Red"})),
            _order(_line(TABLECLOTH, 8, {ColorSlot.PRIMARY: "Green"})),
        ]
        tablecloth = _compute(orders)["Tablecloth"]
        assert (tablecloth.total, tablecloth.in_use, tablecloth.available) == (35, 13, 22)

        by_color = {c.color: c for c in tablecloth.colors}
        assert by_color["Red"].in_use == 5
        assert by_color["Green"].registered is False
        assert by_color["Green"].total == 0

    def test_line_without_colour_still_counts(self):
        tablecloth = _compute([_order(_line(TABLECLOTH, 2))])["Tablecloth"]
        assert tablecloth.in_use == 2
        assert tablecloth.colors[-1].color is None

    def test_colour_product_without_variants_has_no_capacity(self):
        colors = {"4": COLORS["4"]}
        tablecloth = _compute([_order(_line(TABLECLOTH, 1))], colors=colors)["Tablecloth"]
        assert tablecloth.total == 0
        assert tablecloth.available == 0


class TestOrderFiltering:

    def test_released_orders_hold_nothing(self):
        orders = [
            _order(_line(CHAIR, 10), status=OrderStatus.PICKED_UP),
            _order(_line(CHAIR, 20), status=OrderStatus.CANCELLED),
            _order(_line(CHAIR, 40), status=OrderStatus.COMPLETED),
            _order(_line(CHAIR, 5), status=OrderStatus.DELIVERED),
        ]
        assert _compute(orders)["Chair"].in_use == 5


class TestPurity:

    def test_same_inputs_same_output(self):
        orders = [
            _order(_line(PACKAGE, 2, {ColorSlot.TABLECLOTH: "Red"})),
            _order(_line(TABLECLOTH, 8, {ColorSlot.PRIMARY: "Green"})),
        ]
        calculator = AvailabilityCalculator()
        args = dict(
            catalog=CATALOG,
            orders=orders,
            color_variants=COLORS,
            bundle_components=COMPONENTS,
        )
        assert calculator.compute(**args) == calculator.compute(**args)


class TestOrdering:

    def test_catalog_order_by_default(self):
        names = list(_compute([]))
        assert names == ["Chair", "Long Table", "Tablecloth", "Bow"]

    def test_priority_names_come_first(self):
        names = list(_compute([], priority=["Bow", "Missing", "Chair"]))
        assert names == ["Bow", "Chair", "Long Table", "Tablecloth"]

    def test_order_by_priority_without_priority_is_identity(self):
        snapshots = AvailabilityCalculator().compute(CATALOG, [], COLORS, COMPONENTS)
        assert order_by_priority(snapshots, ()) == snapshots
