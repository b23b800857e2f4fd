"""Abstract repository for Order aggregate."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.order import Order, OrderStatus


class OrderRepository(ABC):

    @abstractmethod
    def get_by_id(self, order_id: int) -> Order | None:
        """Return an order by its ID, or None if not found."""

    @abstractmethod
    def get_by_number(self, order_number: str) -> Order | None:
        """Return an order by its order number, or None if not found."""

    @abstractmethod
    def list_all(
        self,
        status: OrderStatus | None = None,
        customer_id: str | None = None,
    ) -> list[Order]:
        """Return orders in ID order, optionally filtered."""

    @abstractmethod
    def max_sequence(self, number_prefix: str) -> int:
        """Highest numeric suffix among order numbers starting with *number_prefix*.

        Returns 0 when no order carries the prefix yet.
        """

    @abstractmethod
    def save(self, order: Order) -> None:
        """Persist a new or updated order, assigning ``order.id`` if unset."""
