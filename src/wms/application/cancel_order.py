"""Application service: Cancel Order use case.

Stock reserved at creation goes back to the ledger exactly once; a repeated
cancel returns the already-cancelled order.  Orders that have shipped or
been delivered cannot be cancelled here.
"""

from __future__ import annotations

from wms.application.dto import OrderDTO, order_to_dto
from wms.domain.service.order_reservation_service import OrderReservationService


class CancelOrderHandler:

    def __init__(self, order_service: OrderReservationService) -> None:
        self._order_service = order_service

    def handle(
        self,
        order_id: int,
        reason: str | None = None,
        actor_id: str | None = None,
    ) -> OrderDTO:
        order = self._order_service.cancel_order(order_id, reason=reason, actor_id=actor_id)
        return order_to_dto(order)
