"""Repositories backed by the hosted database (see rest_client)."""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from datetime import date

from rentals.domain.exceptions import BackendError
from rentals.domain.model.order import Order, OrderStatus
from rentals.domain.model.product import (
    BundleComponent,
    ColorVariant,
    Product,
    SizeVariant,
)
from rentals.domain.model.salon_event import SalonEvent
from rentals.domain.repository.order_repository import OrderRepository
from rentals.domain.repository.product_repository import ProductRepository
from rentals.domain.repository.salon_event_repository import SalonEventRepository
from rentals.infrastructure.persistence import rows as r
from rentals.infrastructure.persistence.rest_client import (
    RestClient,
    eq,
    gte,
    ilike,
    in_,
    lte,
    not_in,
)

logger = logging.getLogger(__name__)


def _without_id(row: dict) -> dict:
    return {k: v for k, v in row.items() if k != "id"}


class RestProductRepository(ProductRepository):

    def __init__(self, client: RestClient) -> None:
        self._client = client

    def get_by_id(self, product_id: str) -> Product | None:
        rows = self._client.select(r.PRODUCTS, [eq("id", product_id)])
        return r.row_to_product(rows[0]) if rows else None

    def get_by_name(self, name: str) -> Product | None:
        for row in self._client.select(r.PRODUCTS, [ilike("nombre", name)]):
            if row["nombre"].lower() == name.lower():
                return r.row_to_product(row)
        return None

    def list_all(self) -> list[Product]:
        rows = self._client.select(r.PRODUCTS, [("order", "nombre")])
        return [r.row_to_product(row) for row in rows]

    def save(self, product: Product) -> None:
        row = _without_id(r.product_to_row(product))
        if product.id is None:
            stored = self._client.insert(r.PRODUCTS, [row])
            product.id = str(stored[0]["id"])
        else:
            self._client.update(r.PRODUCTS, row, [eq("id", product.id)])

    def list_color_variants(self, product_id: str) -> list[ColorVariant]:
        rows = self._client.select(r.COLORS, [eq("producto_id", product_id)])
        return [r.row_to_color(row) for row in rows]

    def save_color_variant(self, variant: ColorVariant) -> None:
        row = _without_id(r.color_to_row(variant))
        if variant.id is None:
            stored = self._client.insert(r.COLORS, [row])
            variant.id = str(stored[0]["id"])
        else:
            self._client.update(
                r.COLORS, {"stock_disponible": variant.stock_available}, [eq("id", variant.id)]
            )

    def list_size_variants(self, product_id: str) -> list[SizeVariant]:
        rows = self._client.select(r.SIZES, [eq("producto_id", product_id)])
        return [r.row_to_size(row) for row in rows]

    def save_size_variant(self, variant: SizeVariant) -> None:
        stored = self._client.insert(r.SIZES, [_without_id(r.size_to_row(variant))])
        variant.id = str(stored[0]["id"])

    def list_bundle_components(self, bundle_id: str) -> list[BundleComponent]:
        rows = self._client.select(
            r.BUNDLE_COMPONENTS,
            [("select", "juego_id,producto_id,cantidad,productos:producto_id(nombre)"),
             eq("juego_id", bundle_id)],
        )
        return [
            r.row_to_component(row, (row.get("productos") or {}).get("nombre", ""))
            for row in rows
        ]

    def replace_bundle_components(
        self, bundle_id: str, components: list[BundleComponent]
    ) -> None:
        self._client.delete(r.BUNDLE_COMPONENTS, [eq("juego_id", bundle_id)])
        self._client.insert(r.BUNDLE_COMPONENTS, [r.component_to_row(c) for c in components])


class RestOrderRepository(OrderRepository):

    def __init__(self, client: RestClient) -> None:
        self._client = client

    def get_by_id(self, order_id: int) -> Order | None:
        orders = self._load([eq("id", order_id)])
        return orders[0] if orders else None

    def list_all(self) -> list[Order]:
        return self._load([("order", "fecha_evento.desc,hora_evento.desc")])

    def list_for_date(
        self, event_date: date, exclude_statuses: Iterable[OrderStatus] = ()
    ) -> list[Order]:
        params = [eq("fecha_evento", event_date.isoformat())]
        excluded = [s.value for s in exclude_statuses]
        if excluded:
            params.append(not_in("estado", excluded))
        return self._load(params)

    def list_between(self, start: date, end: date) -> list[Order]:
        return self._load(
            [gte("fecha_evento", start.isoformat()), lte("fecha_evento", end.isoformat())]
        )

    def save(self, order: Order) -> None:
        row = _without_id(r.order_to_row(order))
        if order.id is not None:
            self._client.update(r.ORDERS, row, [eq("id", order.id)])
            return

        stored = self._client.insert(r.ORDERS, [row])
        order.id = int(stored[0]["id"])
        try:
            self._client.insert(
                r.ORDER_ITEMS, [r.item_to_row(order.id, i) for i in order.items]
            )
        except BackendError:
            logger.error("Lines of order %s were not saved; removing the order", order.id)
            self._client.delete(r.ORDERS, [eq("id", order.id)])
            order.id = None
            raise

    def _load(self, params: list[tuple[str, str]]) -> list[Order]:
        order_rows = self._client.select(r.ORDERS, params)
        if not order_rows:
            return []

        ids = [row["id"] for row in order_rows]
        items_by_order: dict[int, list[dict]] = defaultdict(list)
        for item in self._client.select(r.ORDER_ITEMS, [in_("pedido_id", ids)]):
            items_by_order[int(item["pedido_id"])].append(item)

        return [
            r.row_to_order(row, items_by_order.get(int(row["id"]), []))
            for row in order_rows
        ]


class RestSalonEventRepository(SalonEventRepository):

    def __init__(self, client: RestClient) -> None:
        self._client = client

    def get_by_id(self, event_id: int) -> SalonEvent | None:
        rows = self._client.select(r.SALON_EVENTS, [eq("id", event_id)])
        return r.row_to_salon_event(rows[0]) if rows else None

    def list_all(self) -> list[SalonEvent]:
        rows = self._client.select(
            r.SALON_EVENTS, [("order", "fecha_evento.desc,hora_inicio.desc")]
        )
        return [r.row_to_salon_event(row) for row in rows]

    def list_between(self, start: date, end: date) -> list[SalonEvent]:
        rows = self._client.select(
            r.SALON_EVENTS,
            [gte("fecha_evento", start.isoformat()), lte("fecha_evento", end.isoformat())],
        )
        return [r.row_to_salon_event(row) for row in rows]

    def save(self, event: SalonEvent) -> None:
        row = _without_id(r.salon_event_to_row(event))
        if event.id is None:
            stored = self._client.insert(r.SALON_EVENTS, [row])
            event.id = int(stored[0]["id"])
        else:
            self._client.update(r.SALON_EVENTS, row, [eq("id", event.id)])
