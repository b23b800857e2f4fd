"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the outer layers (CLI, a REST adapter) can catch them uniformly and map
them to user-facing responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from wms.domain.model.order import OrderStatus


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Malformed input, e.g. an empty item list or a non-positive quantity."""


class EntityNotFoundError(DomainException):
    """A requested product, order or user does not exist."""


class InvalidOperationError(DomainException):
    """The request is well-formed but not allowed in the current state."""


class BusyError(DomainException):
    """A lock could not be acquired within the configured wait bound.

    Nothing was mutated; the caller may retry.
    """


class InsufficientStockError(DomainException):

    def __init__(self, product_id: str, requested: int, available: int) -> None:
        self.product_id = product_id
        self.requested = requested
        self.available = available
        super().__init__(
            f"Insufficient stock for product '{product_id}' "
            f"(requested {requested}, available {available})"
        )


class InvalidTransitionError(DomainException):

    def __init__(self, source: OrderStatus, target: OrderStatus) -> None:
        self.source = source
        self.target = target
        super().__init__(
            f"Invalid status transition from {source.value} to {target.value}"
        )
