"""Order status graph.

Pure functions over a fixed transition table: no I/O, no clock, no
mutation.  Each target status is also tagged with the side effect the
orchestrator must apply when an order enters it.
"""

from __future__ import annotations

from enum import Enum

from wms.domain.exceptions import InvalidTransitionError
from wms.domain.model.order import OrderStatus


class TransitionEffect(Enum):
    NONE = "NONE"
    RECORD_OPERATOR = "RECORD_OPERATOR"
    STAMP_SHIPPED = "STAMP_SHIPPED"
    STAMP_DELIVERED = "STAMP_DELIVERED"
    RELEASE_STOCK = "RELEASE_STOCK"


INITIAL_STATUS = OrderStatus.PENDING

TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDING: frozenset({OrderStatus.CONFIRMED, OrderStatus.CANCELLED}),
    OrderStatus.CONFIRMED: frozenset({OrderStatus.PROCESSING, OrderStatus.CANCELLED}),
    OrderStatus.PROCESSING: frozenset(
        {OrderStatus.READY_FOR_SHIPMENT, OrderStatus.CANCELLED}
    ),
    OrderStatus.READY_FOR_SHIPMENT: frozenset(
        {OrderStatus.SHIPPED, OrderStatus.CANCELLED}
    ),
    OrderStatus.SHIPPED: frozenset({OrderStatus.DELIVERED, OrderStatus.RETURNED}),
    OrderStatus.DELIVERED: frozenset({OrderStatus.RETURNED}),
    OrderStatus.CANCELLED: frozenset(),
    OrderStatus.RETURNED: frozenset(),
}

EFFECTS: dict[OrderStatus, TransitionEffect] = {
    OrderStatus.PROCESSING: TransitionEffect.RECORD_OPERATOR,
    OrderStatus.SHIPPED: TransitionEffect.STAMP_SHIPPED,
    OrderStatus.DELIVERED: TransitionEffect.STAMP_DELIVERED,
    OrderStatus.CANCELLED: TransitionEffect.RELEASE_STOCK,
}


def allowed_targets(source: OrderStatus) -> frozenset[OrderStatus]:
    return TRANSITIONS[source]


def is_terminal(status: OrderStatus) -> bool:
    return not TRANSITIONS[status]


def can_transition(source: OrderStatus, target: OrderStatus) -> bool:
    return target in TRANSITIONS[source]


def validate(source: OrderStatus, target: OrderStatus) -> TransitionEffect:
    """Reject an illegal move; otherwise return the effect of entering *target*."""
    if not can_transition(source, target):
        raise InvalidTransitionError(source, target)
    return effect_of(target)


def effect_of(target: OrderStatus) -> TransitionEffect:
    return EFFECTS.get(target, TransitionEffect.NONE)
