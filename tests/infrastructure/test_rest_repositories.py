"""Tests for the hosted-backend client and repositories.

Requests go to an httpx.MockTransport; nothing leaves the process.
"""

import json
from datetime import date, time

import httpx
import pytest

from rentals.domain.exceptions import BackendError
from rentals.domain.model.order import Order, OrderLineItem, OrderStatus
from rentals.domain.model.product import ColorSlot, Product
from rentals.domain.model.value_objects import Money, Quantity
from rentals.infrastructure.persistence.rest_client import RestClient
from rentals.infrastructure.persistence.rest_repositories import (
    RestOrderRepository,
    RestProductRepository,
    RestSalonEventRepository,
)

ORDER_ROW = {
    "id": 7,
    "cliente_nombre": "Ana",
    "cliente_telefono": None,
    "fecha_evento": "2025-06-14",
    "hora_evento": "17:00:00",
    "lugar": "Jardín Real",
    "lugar_descripcion": None,
    "comentarios": None,
    "total": "600.00",
    "pagado": False,
    "anticipo": "0.00",
    "estado": "proximo",
    "created_at": "2025-06-01T10:00:00+00:00",
}

ITEM_ROWS = [
    {
        "pedido_id": 7,
        "producto_id": 9,
        "producto_nombre": "Juego Tablón",
        "cantidad": 2,
        "precio_unitario": "300.00",
        "color": None,
        "color_cubremantel": "Rojo",
        "color_mono": None,
        "tamano": None,
        "es_componente_juego": False,
    },
    {
        "pedido_id": 7,
        "producto_id": 1,
        "producto_nombre": "Silla",
        "cantidad": 20,
        "precio_unitario": "0.00",
        "es_componente_juego": True,
        "juego_origen": "Juego Tablón",
    },
]


class FakeBackend:
    """Records requests and answers from a table of canned responses."""

    def __init__(self, responses=None, status_code=200, failing=()):
        self.requests: list[httpx.Request] = []
        self.responses = responses or {}
        self.status_code = status_code
        self.failing = set(failing)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        table = request.url.path.rsplit("/", 1)[-1]
        if (request.method, table) in self.failing:
            return httpx.Response(500, json={"message": "insert failed"})
        body = self.responses.get((request.method, table), [])
        return httpx.Response(self.status_code, json=body)

    def client(self) -> RestClient:
        return RestClient(
            "https://db.example.com/",
            "secret",
            transport=httpx.MockTransport(self),
        )


class TestRestClient:

    def test_select_sends_auth_and_filters(self):
        backend = FakeBackend({("GET", "productos"): [{"id": 1}]})
        rows = backend.client().select("productos", [("nombre", "eq.Silla")])

        request = backend.requests[0]
        assert rows == [{"id": 1}]
        assert request.url.path == "/rest/v1/productos"
        assert request.url.params["nombre"] == "eq.Silla"
        assert request.url.params["select"] == "*"
        assert request.headers["apikey"] == "secret"
        assert request.headers["authorization"] == "Bearer secret"

    def test_error_status_becomes_backend_error(self):
        backend = FakeBackend(status_code=500)
        with pytest.raises(BackendError, match="HTTP 500"):
            backend.client().select("pedidos")

    def test_transport_failure_becomes_backend_error(self):
        def refuse(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = RestClient("https://db.example.com", "k", transport=httpx.MockTransport(refuse))
        with pytest.raises(BackendError, match="unreachable"):
            client.select("pedidos")

    def test_insert_asks_for_stored_rows(self):
        backend = FakeBackend({("POST", "productos"): [{"id": 3}]})
        assert backend.client().insert("productos", [{"nombre": "Silla"}]) == [{"id": 3}]
        assert backend.requests[0].headers["prefer"] == "return=representation"

    def test_insert_nothing_sends_nothing(self):
        backend = FakeBackend()
        assert backend.client().insert("pedido_items", []) == []
        assert backend.requests == []


class TestRestProductRepository:

    def test_get_by_name_is_case_insensitive(self):
        backend = FakeBackend(
            {
                ("GET", "productos"): [
                    {"id": 1, "nombre": "Silla Infantil", "precio_renta": "10"},
                    {"id": 2, "nombre": "Silla", "precio_renta": "15"},
                ]
            }
        )
        product = RestProductRepository(backend.client()).get_by_name("SILLA")
        assert product.id == "2"
        assert product.rental_price == Money.of("15")
        assert backend.requests[0].url.params["nombre"] == "ilike.SILLA"

    def test_colour_slot_guessed_from_name_without_slot_column(self):
        backend = FakeBackend(
            {
                ("GET", "productos"): [
                    {"id": 3, "nombre": "Cubremantel Satín", "tiene_colores": True},
                    {"id": 4, "nombre": "Moño", "tiene_colores": True},
                    {"id": 5, "nombre": "Mantel", "tiene_colores": True},
                    {"id": 6, "nombre": "Moño Especial", "slot_color": "color"},
                ]
            }
        )
        products = RestProductRepository(backend.client()).list_all()
        assert [p.color_slot for p in products] == [
            ColorSlot.TABLECLOTH,
            ColorSlot.BOW,
            ColorSlot.PRIMARY,
            ColorSlot.PRIMARY,
        ]

    def test_save_new_product_uses_generated_id(self):
        backend = FakeBackend({("POST", "productos"): [{"id": 12}]})
        product = Product(id=None, name="Tarima", rental_price=Money.of("250"), stock_total=4)
        RestProductRepository(backend.client()).save(product)

        sent = json.loads(backend.requests[0].content)
        assert product.id == "12"
        assert "id" not in sent[0]
        assert sent[0]["nombre"] == "Tarima"
        assert sent[0]["precio_renta"] == "250"

    def test_save_existing_product_patches_it(self):
        backend = FakeBackend()
        product = Product(id="5", name="Silla", rental_price=Money.of("18"))
        RestProductRepository(backend.client()).save(product)

        request = backend.requests[0]
        assert request.method == "PATCH"
        assert request.url.params["id"] == "eq.5"

    def test_bundle_components_carry_names(self):
        backend = FakeBackend(
            {
                ("GET", "juego_componentes"): [
                    {"juego_id": 9, "producto_id": 1, "cantidad": 10, "productos": {"nombre": "Silla"}}
                ]
            }
        )
        components = RestProductRepository(backend.client()).list_bundle_components("9")
        assert [(c.component_id, c.quantity, c.component_name) for c in components] == [
            ("1", 10, "Silla")
        ]


class TestRestOrderRepository:

    def test_list_for_date_excludes_statuses_and_joins_lines(self):
        backend = FakeBackend(
            {("GET", "pedidos"): [ORDER_ROW], ("GET", "pedido_items"): ITEM_ROWS}
        )
        orders = RestOrderRepository(backend.client()).list_for_date(
            date(2025, 6, 14), exclude_statuses=[OrderStatus.CANCELLED]
        )

        params = backend.requests[0].url.params
        assert params["fecha_evento"] == "eq.2025-06-14"
        assert params["estado"] == "not.in.(cancelado)"
        assert backend.requests[1].url.params["pedido_id"] == "in.(7)"

        order = orders[0]
        assert order.id == 7
        assert order.event_time == time(17, 0)
        assert order.items[0].colors == {ColorSlot.TABLECLOTH: "Rojo"}
        assert order.items[1].is_bundle_component
        assert [i.product_name for i in order.visible_items] == ["Juego Tablón"]

    def test_no_orders_skips_line_query(self):
        backend = FakeBackend()
        assert RestOrderRepository(backend.client()).list_between(
            date(2025, 6, 1), date(2025, 6, 30)
        ) == []
        assert len(backend.requests) == 1

    def test_new_order_inserts_order_then_lines(self):
        backend = FakeBackend({("POST", "pedidos"): [{"id": 31}], ("POST", "pedido_items"): []})
        order = Order.create(
            customer_name="Ana",
            event_date=date(2025, 6, 14),
            event_time=time(17, 0),
            items=[OrderLineItem("1", "Silla", Quantity(30), Money.of("15"))],
        )
        RestOrderRepository(backend.client()).save(order)

        assert order.id == 31
        assert [r.url.path.rsplit("/", 1)[-1] for r in backend.requests] == [
            "pedidos",
            "pedido_items",
        ]
        lines = json.loads(backend.requests[1].content)
        assert lines[0]["pedido_id"] == 31
        assert lines[0]["cantidad"] == 30

    def test_failed_line_insert_removes_the_order(self):
        backend = FakeBackend(
            {("POST", "pedidos"): [{"id": 31}]}, failing=[("POST", "pedido_items")]
        )
        order = Order.create(
            customer_name="Ana",
            event_date=date(2025, 6, 14),
            event_time=time(17, 0),
            items=[OrderLineItem("1", "Silla", Quantity(30), Money.of("15"))],
        )
        with pytest.raises(BackendError):
            RestOrderRepository(backend.client()).save(order)

        cleanup = backend.requests[-1]
        assert cleanup.method == "DELETE"
        assert cleanup.url.path == "/rest/v1/pedidos"
        assert cleanup.url.params["id"] == "eq.31"
        assert order.id is None

    def test_backend_failure_propagates(self):
        backend = FakeBackend(status_code=503)
        with pytest.raises(BackendError):
            RestOrderRepository(backend.client()).list_for_date(date(2025, 6, 14))


class TestRestSalonEventRepository:

    def test_list_between_filters_dates(self):
        backend = FakeBackend(
            {
                ("GET", "eventos_salon"): [
                    {
                        "id": 4,
                        "cliente_nombre": "Rosa",
                        "fecha_evento": "2025-07-05",
                        "hora_inicio": "18:00:00",
                        "precio": "5000.00",
                        "estado": "confirmado",
                    }
                ]
            }
        )
        events = RestSalonEventRepository(backend.client()).list_between(
            date(2025, 7, 1), date(2025, 7, 31)
        )
        params = backend.requests[0].url.params
        assert params.get_list("fecha_evento") == ["gte.2025-07-01", "lte.2025-07-31"]
        assert events[0].price == Money.of("5000")
        assert events[0].start_time == time(18, 0)
