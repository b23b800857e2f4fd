"""Application service: Show / List Orders use cases (queries)."""

from __future__ import annotations

from wms.application.dto import OrderDTO, order_to_dto
from wms.application.update_order_status import parse_status
from wms.domain.exceptions import ValidationError
from wms.domain.service.order_reservation_service import OrderReservationService


class ShowOrderHandler:

    def __init__(self, order_service: OrderReservationService) -> None:
        self._order_service = order_service

    def handle(self, order_id: int | None = None, order_number: str | None = None) -> OrderDTO:
        if order_id is not None:
            return order_to_dto(self._order_service.get_order(order_id))
        if order_number:
            return order_to_dto(self._order_service.get_order_by_number(order_number))
        raise ValidationError("An order ID or order number is required")


class ListOrdersHandler:

    def __init__(self, order_service: OrderReservationService) -> None:
        self._order_service = order_service

    def handle(self, status: str | None = None, customer_id: str | None = None) -> list[OrderDTO]:
        orders = self._order_service.list_orders(
            status=parse_status(status) if status else None,
            customer_id=customer_id,
        )
        return [order_to_dto(order) for order in orders]
