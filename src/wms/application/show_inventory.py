"""Application service: Show Inventory use case (query)."""

from __future__ import annotations

from wms.application.dto import StockLineDTO
from wms.domain.repository.inventory_repository import StockRepository
from wms.domain.repository.product_repository import ProductRepository


class ShowInventoryHandler:

    def __init__(self, stock_repo: StockRepository, product_repo: ProductRepository) -> None:
        self._stock_repo = stock_repo
        self._product_repo = product_repo

    def handle(self, low_stock_only: bool = False) -> list[StockLineDTO]:
        names = {p.id: p.name for p in self._product_repo.list_all()}
        return [
            StockLineDTO(
                sku=record.sku,
                product_name=names.get(record.product_id, "?"),
                available=record.available_quantity,
                minimum_level=record.minimum_level,
                low_stock=record.is_low_stock,
            )
            for record in self._stock_repo.list_all()
            if record.is_low_stock or not low_stock_only
        ]
