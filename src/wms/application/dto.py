"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry data between the CLI and application layers without exposing
domain internals (e.g. an order's stock-restoration bookkeeping).
"""

from __future__ import annotations

from dataclasses import dataclass

from wms.domain.model.order import Order


@dataclass(frozen=True)
class OrderItemSpec:
    """Input: what the customer asked for (SKU + quantity)."""

    sku: str
    quantity: int


@dataclass(frozen=True)
class OrderLineItemDTO:
    sku: str
    product_name: str
    quantity: int
    unit_price: str  # formatted, e.g. "15.00 EUR"
    line_total: str


@dataclass(frozen=True)
class OrderDTO:
    id: int
    order_number: str
    customer_id: str
    status: str
    items: list[OrderLineItemDTO]
    total: str
    shipping_address: str | None
    shipping_city: str | None
    shipping_postal_code: str | None
    shipping_country: str | None
    shipping_phone: str | None
    notes: str | None
    processed_by: str | None
    created_at: str
    updated_at: str
    shipped_at: str | None
    delivered_at: str | None


@dataclass(frozen=True)
class StockLineDTO:
    sku: str
    product_name: str
    available: int
    minimum_level: int
    low_stock: bool


_TIME_FORMAT = "%Y-%m-%d %H:%M UTC"


def order_to_dto(order: Order) -> OrderDTO:
    return OrderDTO(
        id=order.id,  # type: ignore[arg-type]
        order_number=order.order_number,
        customer_id=order.customer_id,
        status=order.status.value,
        items=[
            OrderLineItemDTO(
                sku=item.sku,
                product_name=item.product_name,
                quantity=item.quantity.value,
                unit_price=str(item.unit_price),
                line_total=str(item.line_total),
            )
            for item in order.items
        ],
        total=str(order.total_amount),
        shipping_address=order.shipping.address,
        shipping_city=order.shipping.city,
        shipping_postal_code=order.shipping.postal_code,
        shipping_country=order.shipping.country,
        shipping_phone=order.shipping.phone,
        notes=order.notes,
        processed_by=order.processed_by,
        created_at=order.created_at.strftime(_TIME_FORMAT),
        updated_at=order.updated_at.strftime(_TIME_FORMAT),
        shipped_at=order.shipped_at.strftime(_TIME_FORMAT) if order.shipped_at else None,
        delivered_at=(
            order.delivered_at.strftime(_TIME_FORMAT) if order.delivered_at else None
        ),
    )
