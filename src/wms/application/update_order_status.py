"""Application service: Update Order Status use case."""

from __future__ import annotations

from wms.application.dto import OrderDTO, order_to_dto
from wms.domain.exceptions import ValidationError
from wms.domain.model.order import OrderStatus
from wms.domain.service.order_reservation_service import OrderReservationService


def parse_status(raw: str) -> OrderStatus:
    try:
        return OrderStatus(raw.strip().upper())
    except ValueError as exc:
        valid = ", ".join(s.value for s in OrderStatus)
        raise ValidationError(f"Unknown order status '{raw}' (expected one of {valid})") from exc


class UpdateOrderStatusHandler:

    def __init__(self, order_service: OrderReservationService) -> None:
        self._order_service = order_service

    def handle(
        self,
        order_id: int,
        status: str,
        actor_id: str | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        order = self._order_service.update_status(
            order_id, parse_status(status), actor_id=actor_id, notes=notes
        )
        return order_to_dto(order)
