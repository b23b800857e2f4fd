"""Append-only JSON-lines audit log for inventory transactions."""

from __future__ import annotations

import json
import threading
from pathlib import Path

from wms.domain.model.inventory import InventoryTransaction
from wms.domain.repository.audit_sink import AuditSink


class JsonLinesAuditLog(AuditSink):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._lock = threading.Lock()
        self._file_path.parent.mkdir(parents=True, exist_ok=True)

    def record(self, entry: InventoryTransaction) -> None:
        line = json.dumps(
            {
                "type": entry.type.value,
                "product_id": entry.product_id,
                "quantity": entry.quantity,
                "order_ref": entry.order_ref,
                "notes": entry.notes,
                "created_at": entry.created_at.isoformat(),
            }
        )
        with self._lock:
            with self._file_path.open("a", encoding="utf-8") as fh:
                fh.write(line + "\n")

    def read_all(self) -> list[dict]:
        if not self._file_path.exists():
            return []
        with self._file_path.open(encoding="utf-8") as fh:
            return [json.loads(line) for line in fh if line.strip()]
