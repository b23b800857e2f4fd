"""Domain service: Order Reservation.

Ties the InventoryLedger, the order status graph and the order-number
generator together so that creating, advancing and cancelling an order
are each one logical operation:

- ``create_order`` either yields a fully reserved, fully priced PENDING
  order or leaves stock exactly as it found it.
- ``update_status`` / ``cancel_order`` validate against the transition
  table, then apply the side effect tagged on the target status.  They
  serialise per order, never across orders.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import replace
from datetime import datetime, timezone

import structlog

from wms.domain.exceptions import (
    EntityNotFoundError,
    InvalidOperationError,
    ValidationError,
)
from wms.domain.model.order import Order, OrderItem, OrderStatus, ShippingInfo
from wms.domain.model.product import Product
from wms.domain.model.value_objects import Quantity
from wms.domain.repository.order_repository import OrderRepository
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.repository.user_repository import UserRepository
from wms.domain.service import order_state_machine
from wms.domain.service.inventory_ledger import DEFAULT_LOCK_TIMEOUT, InventoryLedger
from wms.domain.service.locking import KeyedLocks
from wms.domain.service.order_number_generator import OrderNumberGenerator
from wms.domain.service.order_state_machine import TransitionEffect

logger = structlog.get_logger(__name__)

# Cancel is refused outright from these.
_DISPATCHED = frozenset({OrderStatus.SHIPPED, OrderStatus.DELIVERED})


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class OrderReservationService:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository,
        user_repo: UserRepository,
        ledger: InventoryLedger,
        number_generator: OrderNumberGenerator,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._user_repo = user_repo
        self._ledger = ledger
        self._number_generator = number_generator
        self._lock_timeout = lock_timeout
        self._clock = clock
        self._order_locks = KeyedLocks("order")

    # --- Commands -------------------------------------------------------------

    def create_order(
        self,
        customer_id: str,
        items: Sequence[tuple[str, int]],
        shipping: ShippingInfo | None = None,
        notes: str | None = None,
    ) -> Order:
        """Reserve stock for every line and materialise a PENDING order.

        Everything that can be rejected without touching stock (input,
        customer, catalog lookups) is checked first.  Once the reservation
        has committed, any later failure releases it again before the error
        propagates.
        """
        lines = list(items)
        if not lines:
            raise ValidationError("Order must contain at least one item")
        for _, qty in lines:
            Quantity(qty)

        customer = self._user_repo.get_by_id(customer_id)
        if customer is None:
            raise EntityNotFoundError(f"Customer '{customer_id}' not found")

        products: dict[str, Product] = {}
        for product_id, _ in lines:
            product = self._product_repo.get_by_id(product_id)
            if product is None:
                raise EntityNotFoundError(f"Product '{product_id}' not found")
            products[product_id] = product

        self._ledger.reserve_all(lines)

        try:
            now = self._clock()
            order_items = [
                OrderItem(
                    product_id=product_id,
                    sku=products[product_id].sku,
                    product_name=products[product_id].name,
                    quantity=Quantity(qty),
                    unit_price=products[product_id].price,  # price snapshot
                )
                for product_id, qty in lines
            ]
            number = self._number_generator.next(OrderNumberGenerator.date_key_for(now))
            order = Order.create(
                order_number=number,
                customer_id=customer_id,
                items=order_items,
                shipping=(shipping or ShippingInfo()).with_defaults_from(customer),
                notes=notes,
                now=now,
            )
            self._order_repo.save(order)
        except Exception:
            logger.error(
                "Order creation failed after reservation, releasing stock",
                customer_id=customer_id,
            )
            try:
                self._ledger.release_all(lines, compensating=True)
            except Exception:
                logger.exception(
                    "Releasing reservation failed, stock left reserved",
                    customer_id=customer_id,
                    lines=lines,
                )
            raise

        logger.info(
            "Order created",
            order_id=order.id,
            order_number=order.order_number,
            customer_id=customer_id,
            total=str(order.total_amount),
        )
        return order

    def update_status(
        self,
        order_id: int,
        target: OrderStatus,
        actor_id: str | None = None,
        notes: str | None = None,
    ) -> Order:
        with self._order_locks.hold([str(order_id)], self._lock_timeout):
            order = self._load(order_id)
            return self._transition(order, target, actor_id, notes)

    def cancel_order(
        self,
        order_id: int,
        reason: str | None = None,
        actor_id: str | None = None,
    ) -> Order:
        """Cancel and return reserved stock.

        Cancelling an already cancelled order returns it unchanged, so a
        retried cancel never releases stock twice.
        """
        with self._order_locks.hold([str(order_id)], self._lock_timeout):
            order = self._load(order_id)
            if order.status in _DISPATCHED:
                raise InvalidOperationError(
                    f"Cannot cancel order {order.order_number}: "
                    f"already {order.status.value}"
                )
            if order.status == OrderStatus.CANCELLED:
                logger.info("Order already cancelled", order_id=order_id)
                return order
            return self._transition(order, OrderStatus.CANCELLED, actor_id, reason)

    # --- Queries --------------------------------------------------------------

    def get_order(self, order_id: int) -> Order:
        return self._load(order_id)

    def get_order_by_number(self, order_number: str) -> Order:
        order = self._order_repo.get_by_number(order_number)
        if order is None:
            raise EntityNotFoundError(f"Order {order_number} not found")
        return order

    def list_orders(
        self,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
    ) -> list[Order]:
        return self._order_repo.list_all(status=status, customer_id=customer_id)

    # --- Internal helpers -----------------------------------------------------

    def _load(self, order_id: int) -> Order:
        order = self._order_repo.get_by_id(order_id)
        if order is None:
            raise EntityNotFoundError(f"Order #{order_id} not found")
        return order

    def _transition(
        self,
        order: Order,
        target: OrderStatus,
        actor_id: str | None,
        notes: str | None,
    ) -> Order:
        """Validate, apply the target's side effect, persist.  Caller holds the order lock.

        Changes are made on a copy, so the loaded order is left as it was if
        anything fails.  A cancellation is persisted (with ``stock_restored``
        set) before its stock goes back to the ledger; if the release fails
        the previous state is written back, so a retry releases exactly once.
        """
        source = order.status
        effect = order_state_machine.validate(source, target)
        now = self._clock()
        updated = replace(order, status=target, updated_at=now)
        if notes is not None:
            updated.notes = notes

        release_lines: list[tuple[str, int]] = []
        if effect is TransitionEffect.RECORD_OPERATOR:
            if actor_id is None:
                raise ValidationError("An operator is required to start processing")
            if self._user_repo.get_by_id(actor_id) is None:
                raise EntityNotFoundError(f"User '{actor_id}' not found")
            updated.processed_by = actor_id
        elif effect is TransitionEffect.STAMP_SHIPPED:
            updated.shipped_at = now
        elif effect is TransitionEffect.STAMP_DELIVERED:
            updated.delivered_at = now
        elif effect is TransitionEffect.RELEASE_STOCK and not order.stock_restored:
            release_lines = order.reservation_lines()
            updated.stock_restored = True

        self._order_repo.save(updated)

        if release_lines:
            try:
                self._ledger.release_all(release_lines, order_ref=order.order_number)
            except Exception:
                logger.error(
                    "Stock release failed, restoring previous order state",
                    order_id=order.id,
                    order_number=order.order_number,
                )
                self._restore(order, release_lines)
                raise

        logger.info(
            "Order status changed",
            order_id=updated.id,
            order_number=updated.order_number,
            source=source.value,
            target=target.value,
            actor_id=actor_id,
        )
        return updated

    def _restore(self, order: Order, release_lines: list[tuple[str, int]]) -> None:
        try:
            self._order_repo.save(order)
        except Exception:
            logger.exception(
                "Restoring order state failed, order cancelled without releasing stock",
                order_id=order.id,
                order_number=order.order_number,
                lines=release_lines,
            )
