"""Abstract repository for stock records."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.inventory import StockRecord


class StockRepository(ABC):

    @abstractmethod
    def get_by_product_id(self, product_id: str) -> StockRecord | None:
        """Return the stock record for a product, or None."""

    @abstractmethod
    def get_by_sku(self, sku: str) -> StockRecord | None:
        """Return the stock record for a SKU, or None."""

    @abstractmethod
    def list_all(self) -> list[StockRecord]:
        """Return every stock record."""

    @abstractmethod
    def save(self, record: StockRecord) -> None:
        """Persist a new or updated stock record."""
