"""Application service: Adjust Stock use case."""

from __future__ import annotations

from wms.application.dto import StockLineDTO
from wms.domain.exceptions import EntityNotFoundError
from wms.domain.repository.product_repository import ProductRepository
from wms.domain.service.inventory_ledger import InventoryLedger


class AdjustStockHandler:

    def __init__(self, product_repo: ProductRepository, ledger: InventoryLedger) -> None:
        self._product_repo = product_repo
        self._ledger = ledger

    def handle(self, sku: str, delta: int, notes: str | None = None) -> StockLineDTO:
        """Apply a signed stock change (goods received, damage write-off, ...)."""
        product = self._product_repo.get_by_sku(sku)
        if product is None:
            raise EntityNotFoundError(f"Product not found: '{sku}'")

        record = self._ledger.adjust(product.id, delta, notes=notes)
        return StockLineDTO(
            sku=record.sku,
            product_name=product.name,
            available=record.available_quantity,
            minimum_level=record.minimum_level,
            low_stock=record.is_low_stock,
        )
