"""Mapping between domain objects and backend rows.

Both backends (local JSON files and the hosted database) share the same
tables and column names, so the row format lives here once.
"""

from __future__ import annotations

from datetime import date, datetime, time

from rentals.domain.model.order import Order, OrderLineItem, OrderStatus
from rentals.domain.model.product import (
    BundleComponent,
    ColorSlot,
    ColorVariant,
    Product,
    SizeVariant,
)
from rentals.domain.model.salon_event import SalonEvent, SalonEventStatus
from rentals.domain.model.value_objects import Money, Quantity

PRODUCTS = "productos"
COLORS = "producto_colores"
SIZES = "producto_tamanos"
BUNDLE_COMPONENTS = "juego_componentes"
ORDERS = "pedidos"
ORDER_ITEMS = "pedido_items"
SALON_EVENTS = "eventos_salon"


# --- Products -----------------------------------------------------------------


def product_to_row(product: Product) -> dict:
    return {
        "id": product.id,
        "nombre": product.name,
        "categoria": product.category,
        "precio_renta": str(product.rental_price.amount),
        "es_juego": product.is_bundle,
        "tiene_colores": product.has_colors,
        "tiene_tamanos": product.has_sizes,
        "stock_total": product.stock_total,
        "slot_color": product.color_slot.value,
    }


def row_to_product(row: dict) -> Product:
    return Product(
        id=str(row["id"]),
        name=row["nombre"],
        rental_price=_money(row.get("precio_renta")),
        category=row.get("categoria") or "general",
        is_bundle=bool(row.get("es_juego")),
        has_colors=bool(row.get("tiene_colores")),
        has_sizes=bool(row.get("tiene_tamanos")),
        stock_total=int(row.get("stock_total") or 0),
        color_slot=_color_slot(row),
    )


def _color_slot(row: dict) -> ColorSlot:
    """The stored slot, or one guessed from the name on tables without ``slot_color``."""
    if row.get("slot_color"):
        return ColorSlot(row["slot_color"])
    name = row["nombre"].lower()
    if "cubremantel" in name:
        return ColorSlot.TABLECLOTH
    if "moño" in name or "mono" in name:
        return ColorSlot.BOW
    return ColorSlot.PRIMARY


def color_to_row(variant: ColorVariant) -> dict:
    return {
        "id": variant.id,
        "producto_id": variant.product_id,
        "color": variant.color,
        "stock_disponible": variant.stock_available,
    }


def row_to_color(row: dict) -> ColorVariant:
    return ColorVariant(
        id=str(row["id"]),
        product_id=str(row["producto_id"]),
        color=row["color"],
        stock_available=int(row.get("stock_disponible") or 0),
    )


def size_to_row(variant: SizeVariant) -> dict:
    return {
        "id": variant.id,
        "producto_id": variant.product_id,
        "tamano": variant.size,
        "precio_renta": str(variant.rental_price.amount),
    }


def row_to_size(row: dict) -> SizeVariant:
    return SizeVariant(
        id=str(row["id"]),
        product_id=str(row["producto_id"]),
        size=row["tamano"],
        rental_price=_money(row.get("precio_renta")),
    )


def component_to_row(component: BundleComponent) -> dict:
    return {
        "juego_id": component.bundle_id,
        "producto_id": component.component_id,
        "cantidad": component.quantity,
    }


def row_to_component(row: dict, component_name: str = "") -> BundleComponent:
    return BundleComponent(
        bundle_id=str(row["juego_id"]),
        component_id=str(row["producto_id"]),
        quantity=int(row["cantidad"]),
        component_name=component_name,
    )


# --- Orders -------------------------------------------------------------------


def order_to_row(order: Order) -> dict:
    return {
        "id": order.id,
        "cliente_nombre": order.customer_name,
        "cliente_telefono": order.customer_phone,
        "fecha_evento": order.event_date.isoformat(),
        "hora_evento": order.event_time.strftime("%H:%M"),
        "lugar": order.venue,
        "lugar_descripcion": order.venue_details,
        "comentarios": order.comments,
        "total": str(order.total.amount),
        "pagado": order.paid,
        "anticipo": str(order.deposit.amount),
        "estado": order.status.value,
        "entregado_por": order.delivered_by,
        "fecha_entrega": _iso(order.delivered_at),
        "recogido_por": order.picked_up_by,
        "fecha_recogida": _iso(order.picked_up_at),
        "created_at": order.created_at.isoformat(),
    }


def item_to_row(order_id: int, item: OrderLineItem) -> dict:
    row = {
        "pedido_id": order_id,
        "producto_id": item.product_id,
        "producto_nombre": item.product_name,
        "cantidad": item.quantity.value,
        "precio_unitario": str(item.unit_price.amount),
        "subtotal": str(item.line_total.amount),
        "tamano": item.size,
        "es_componente_juego": item.is_bundle_component,
        "juego_origen": item.bundle_origin,
    }
    for slot in ColorSlot:
        row[slot.value] = item.colors.get(slot)
    return row


def row_to_item(row: dict) -> OrderLineItem:
    return OrderLineItem(
        product_id=str(row["producto_id"]),
        product_name=row.get("producto_nombre") or "Producto",
        quantity=Quantity(int(row["cantidad"])),
        unit_price=_money(row.get("precio_unitario")),
        colors={slot: row[slot.value] for slot in ColorSlot if row.get(slot.value)},
        size=row.get("tamano"),
        is_bundle_component=bool(row.get("es_componente_juego")),
        bundle_origin=row.get("juego_origen"),
    )


def row_to_order(row: dict, item_rows: list[dict]) -> Order:
    return Order(
        id=int(row["id"]),
        customer_name=row["cliente_nombre"],
        customer_phone=row.get("cliente_telefono"),
        event_date=date.fromisoformat(row["fecha_evento"]),
        event_time=_time(row["hora_evento"]),
        venue=row.get("lugar") or "Otro lugar",
        venue_details=row.get("lugar_descripcion"),
        comments=row.get("comentarios"),
        items=[row_to_item(item) for item in item_rows],
        paid=bool(row.get("pagado")),
        deposit=_money(row.get("anticipo")),
        status=OrderStatus(row.get("estado") or OrderStatus.UPCOMING.value),
        delivered_by=row.get("entregado_por"),
        delivered_at=_datetime(row.get("fecha_entrega")),
        picked_up_by=row.get("recogido_por"),
        picked_up_at=_datetime(row.get("fecha_recogida")),
        created_at=_datetime(row.get("created_at")) or datetime.now().astimezone(),
    )


# --- Salon events -------------------------------------------------------------


def salon_event_to_row(event: SalonEvent) -> dict:
    return {
        "id": event.id,
        "cliente_nombre": event.customer_name,
        "cliente_telefono": event.customer_phone,
        "fecha_evento": event.event_date.isoformat(),
        "hora_inicio": event.start_time.strftime("%H:%M"),
        "tipo_evento": event.event_type,
        "num_invitados": event.guests,
        "precio": str(event.price.amount),
        "pagado": event.paid,
        "anticipo": str(event.deposit.amount),
        "condiciones": event.conditions,
        "notas": event.notes,
        "estado": event.status.value,
        "created_at": event.created_at.isoformat(),
    }


def row_to_salon_event(row: dict) -> SalonEvent:
    return SalonEvent(
        id=int(row["id"]),
        customer_name=row["cliente_nombre"],
        customer_phone=row.get("cliente_telefono"),
        event_date=date.fromisoformat(row["fecha_evento"]),
        start_time=_time(row["hora_inicio"]),
        event_type=row.get("tipo_evento"),
        guests=row.get("num_invitados"),
        price=_money(row.get("precio")),
        paid=bool(row.get("pagado")),
        deposit=_money(row.get("anticipo")),
        conditions=row.get("condiciones"),
        notes=row.get("notas"),
        status=SalonEventStatus(row.get("estado") or SalonEventStatus.CONFIRMED.value),
        created_at=_datetime(row.get("created_at")) or datetime.now().astimezone(),
    )


# --- Scalars ------------------------------------------------------------------


def _money(value) -> Money:
    return Money.of(value if value not in (None, "") else 0)


def _time(value: str) -> time:
    # The hosted database returns "HH:MM:SS"; older rows hold "HH:MM".
    return time.fromisoformat(value)


def _datetime(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _iso(value: datetime | None) -> str | None:
    return value.isoformat() if value else None
