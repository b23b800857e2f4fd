"""Application service: Create Order use case.

Translates the customer's SKUs into catalog product IDs and hands the
order to the OrderReservationService, which owns reservation and pricing.
"""

from __future__ import annotations

from wms.application.dto import OrderDTO, OrderItemSpec, order_to_dto
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.model.order import ShippingInfo
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.service.order_reservation_service import OrderReservationService


class CreateOrderHandler:

    def __init__(
        self,
        order_service: OrderReservationService,
        product_repo: ProductRepository,
    ) -> None:
        self._order_service = order_service
        self._product_repo = product_repo

    def handle(
        self,
        customer_id: str,
        item_specs: list[OrderItemSpec],
        shipping: ShippingInfo | None = None,
        notes: str | None = None,
    ) -> OrderDTO:
        lines: list[tuple[str, int]] = []
        for spec in item_specs:
            product = self._product_repo.get_by_sku(spec.sku)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.sku}'")
            lines.append((product.id, spec.quantity))

        order = self._order_service.create_order(
            customer_id=customer_id,
            items=lines,
            shipping=shipping,
            notes=notes,
        )
        return order_to_dto(order)
