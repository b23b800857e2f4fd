"""Order aggregate.

The Order owns its line items.  Status changes are driven from the outside
by the OrderReservationService, which consults the OrderStateMachine first;
the aggregate itself only guarantees that a freshly created order is
well-formed and that its total is fixed at creation time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from wms.domain.exceptions import ValidationError
from wms.domain.model.user import User
from wms.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    PROCESSING = "PROCESSING"
    READY_FOR_SHIPMENT = "READY_FOR_SHIPMENT"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"
    RETURNED = "RETURNED"


@dataclass(frozen=True)
class OrderItem:
    """One order line with the unit price locked at order time."""

    product_id: str
    sku: str
    product_name: str
    quantity: Quantity
    unit_price: Money

    @property
    def line_total(self) -> Money:
        return self.unit_price * self.quantity.value


@dataclass(frozen=True)
class ShippingInfo:
    address: str | None = None
    city: str | None = None
    postal_code: str | None = None
    country: str | None = None
    phone: str | None = None

    def with_defaults_from(self, user: User) -> ShippingInfo:
        """Fill every blank field from the customer's address on file."""
        return ShippingInfo(
            address=self.address if self.address is not None else user.address,
            city=self.city if self.city is not None else user.city,
            postal_code=(
                self.postal_code if self.postal_code is not None else user.postal_code
            ),
            country=self.country if self.country is not None else user.country,
            phone=self.phone if self.phone is not None else user.phone,
        )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Order:
    """Aggregate root for customer orders.

    Use ``Order.create()`` for new orders.  ``__init__`` stays permissive so
    repositories can reconstitute persisted orders without re-validating.
    ``stock_restored`` is bookkeeping for the cancellation path and is not
    part of any outward representation.
    """

    id: int | None
    order_number: str
    customer_id: str
    items: list[OrderItem]
    total_amount: Money
    status: OrderStatus = OrderStatus.PENDING
    shipping: ShippingInfo = field(default_factory=ShippingInfo)
    notes: str | None = None
    processed_by: str | None = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    shipped_at: datetime | None = None
    delivered_at: datetime | None = None
    stock_restored: bool = field(default=False, repr=False)

    @staticmethod
    def create(
        order_number: str,
        customer_id: str,
        items: list[OrderItem],
        shipping: ShippingInfo | None = None,
        notes: str | None = None,
        now: datetime | None = None,
    ) -> Order:
        if not customer_id or not customer_id.strip():
            raise ValidationError("Customer is required")
        if not items:
            raise ValidationError("Order must contain at least one item")

        total = Money.zero(items[0].unit_price.currency)
        for item in items:
            total = total + item.line_total

        created = now or _utcnow()
        return Order(
            id=None,
            order_number=order_number,
            customer_id=customer_id,
            items=list(items),
            total_amount=total,
            shipping=shipping or ShippingInfo(),
            notes=notes,
            created_at=created,
            updated_at=created,
        )

    def reservation_lines(self) -> list[tuple[str, int]]:
        """The (product_id, quantity) pairs this order holds in stock."""
        return [(item.product_id, item.quantity.value) for item in self.items]
