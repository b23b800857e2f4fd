"""Abstract sink for the inventory audit trail."""

from __future__ import annotations

from abc import ABC, abstractmethod

from wms.domain.model.inventory import InventoryTransaction


class AuditSink(ABC):

    @abstractmethod
    def record(self, entry: InventoryTransaction) -> None:
        """Append one entry. Never read back by the ledger."""
