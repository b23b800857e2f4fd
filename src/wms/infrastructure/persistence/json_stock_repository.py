"""JSON-file-backed implementation of StockRepository."""

from __future__ import annotations

from wms.domain.model.inventory import DEFAULT_MINIMUM_LEVEL, StockRecord
from wms.domain.repository.inventory_repository import StockRepository
from wms.infrastructure.persistence.json_file import JsonFileRepository


class JsonStockRepository(JsonFileRepository, StockRepository):

    def get_by_product_id(self, product_id: str) -> StockRecord | None:
        for raw in self._load_raw():
            if raw["product_id"] == product_id:
                return self._to_domain(raw)
        return None

    def get_by_sku(self, sku: str) -> StockRecord | None:
        for raw in self._load_raw():
            if raw["sku"].lower() == sku.lower():
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[StockRecord]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, record: StockRecord) -> None:
        self._upsert("product_id", self._to_raw(record))

    @staticmethod
    def _to_raw(record: StockRecord) -> dict:
        return {
            "product_id": record.product_id,
            "sku": record.sku,
            "available_quantity": record.available_quantity,
            "minimum_level": record.minimum_level,
        }

    @staticmethod
    def _to_domain(raw: dict) -> StockRecord:
        return StockRecord(
            product_id=raw["product_id"],
            sku=raw["sku"],
            available_quantity=raw["available_quantity"],
            minimum_level=raw.get("minimum_level", DEFAULT_MINIMUM_LEVEL),
        )
