"""JSON-file-backed implementation of OrderRepository."""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from wms.domain.model.order import Order, OrderItem, OrderStatus, ShippingInfo
from wms.domain.model.value_objects import Money, Quantity
from wms.domain.repository.order_repository import OrderRepository
from wms.infrastructure.persistence.json_file import JsonFileRepository


class JsonOrderRepository(JsonFileRepository, OrderRepository):

    # --- OrderRepository interface --------------------------------------------

    def get_by_id(self, order_id: int) -> Order | None:
        for raw in self._load_raw():
            if raw["id"] == order_id:
                return self._to_domain(raw)
        return None

    def get_by_number(self, order_number: str) -> Order | None:
        for raw in self._load_raw():
            if raw["order_number"] == order_number:
                return self._to_domain(raw)
        return None

    def list_all(
        self,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
    ) -> list[Order]:
        orders = []
        for raw in sorted(self._load_raw(), key=lambda r: r["id"]):
            if status is not None and raw["status"] != status.value:
                continue
            if customer_id is not None and raw["customer_id"] != customer_id:
                continue
            orders.append(self._to_domain(raw))
        return orders

    def max_sequence(self, number_prefix: str) -> int:
        highest = 0
        for raw in self._load_raw():
            number = raw["order_number"]
            if number.startswith(number_prefix):
                suffix = number[len(number_prefix):]
                if suffix.isdigit():
                    highest = max(highest, int(suffix))
        return highest

    def save(self, order: Order) -> None:
        with self._lock:
            if order.id is None:
                orders = self._load_raw()
                order.id = max((o["id"] for o in orders), default=0) + 1
            self._upsert("id", self._to_raw(order))

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "order_number": order.order_number,
            "customer_id": order.customer_id,
            "status": order.status.value,
            "total_amount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "shipping": {
                "address": order.shipping.address,
                "city": order.shipping.city,
                "postal_code": order.shipping.postal_code,
                "country": order.shipping.country,
                "phone": order.shipping.phone,
            },
            "notes": order.notes,
            "processed_by": order.processed_by,
            "stock_restored": order.stock_restored,
            "created_at": order.created_at.isoformat(),
            "updated_at": order.updated_at.isoformat(),
            "shipped_at": _iso_or_none(order.shipped_at),
            "delivered_at": _iso_or_none(order.delivered_at),
            "items": [
                {
                    "product_id": item.product_id,
                    "sku": item.sku,
                    "product_name": item.product_name,
                    "quantity": item.quantity.value,
                    "unit_price": str(item.unit_price.amount),
                    "currency": item.unit_price.currency,
                }
                for item in order.items
            ],
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        items = [
            OrderItem(
                product_id=i["product_id"],
                sku=i["sku"],
                product_name=i["product_name"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unit_price"]), i["currency"]),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["id"],
            order_number=raw["order_number"],
            customer_id=raw["customer_id"],
            items=items,
            total_amount=Money(Decimal(raw["total_amount"]), raw["currency"]),
            status=OrderStatus(raw["status"]),
            shipping=ShippingInfo(**raw.get("shipping", {})),
            notes=raw.get("notes"),
            processed_by=raw.get("processed_by"),
            created_at=datetime.fromisoformat(raw["created_at"]),
            updated_at=datetime.fromisoformat(raw["updated_at"]),
            shipped_at=_parse_or_none(raw.get("shipped_at")),
            delivered_at=_parse_or_none(raw.get("delivered_at")),
            stock_restored=raw.get("stock_restored", False),
        )


def _iso_or_none(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


def _parse_or_none(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value is not None else None
