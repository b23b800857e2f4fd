"""Domain service: Inventory Ledger.

The only code path that changes a product's available quantity.  A
multi-product reservation is indivisible: every product's lock is taken (in
sorted product-id order), every line is checked, and only then is anything
decremented.  If a line is short, nothing is touched.

Locks are per product, so orders over disjoint products never contend.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from wms.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    ValidationError,
)
from wms.domain.model.inventory import InventoryTransaction, StockRecord, TransactionType
from wms.domain.repository.audit_sink import AuditSink
from wms.domain.repository.inventory_repository import StockRepository
from wms.domain.service.locking import KeyedLocks

logger = structlog.get_logger(__name__)

DEFAULT_LOCK_TIMEOUT = 5.0


class InventoryLedger:

    def __init__(
        self,
        stock_repo: StockRepository,
        audit_sink: AuditSink | None = None,
        lock_timeout: float = DEFAULT_LOCK_TIMEOUT,
    ) -> None:
        self._stock_repo = stock_repo
        self._audit_sink = audit_sink
        self._lock_timeout = lock_timeout
        self._locks = KeyedLocks("stock")

    # --- Reservations ---------------------------------------------------------

    def reserve_all(
        self,
        items: Iterable[tuple[str, int]],
        order_ref: str | None = None,
    ) -> None:
        """Decrement every product by its requested quantity, or nothing at all.

        Two phases under the held locks:
          Phase 1: load and check every line; the first short line raises
                   InsufficientStockError before any mutation.
          Phase 2: decrement and persist.  If persisting fails part-way,
                   the lines already taken are put back before re-raising.
        """
        requested = self._collapse(items)

        with self._locks.hold(requested, self._lock_timeout):
            records = self._load_all(requested)

            for product_id, qty in requested.items():
                record = records[product_id]
                if not record.can_supply(qty):
                    logger.info(
                        "Reservation rejected",
                        product_id=product_id,
                        requested=qty,
                        available=record.available_quantity,
                        order_ref=order_ref,
                    )
                    raise InsufficientStockError(product_id, qty, record.available_quantity)

            taken: dict[str, int] = {}
            try:
                for product_id, qty in requested.items():
                    record = records[product_id]
                    record.take(qty)
                    taken[product_id] = qty
                    self._stock_repo.save(record)
            except Exception:
                self._put_back(records, taken, order_ref)
                raise

        logger.info(
            "Stock reserved",
            order_ref=order_ref,
            lines={pid: qty for pid, qty in requested.items()},
        )
        for product_id in requested:
            record = records[product_id]
            if record.is_low_stock:
                logger.warning(
                    "Low stock",
                    product_id=product_id,
                    sku=record.sku,
                    available=record.available_quantity,
                    minimum_level=record.minimum_level,
                )
        self._audit(TransactionType.RESERVED, requested, order_ref)

    def release_all(
        self,
        items: Iterable[tuple[str, int]],
        order_ref: str | None = None,
        compensating: bool = False,
    ) -> None:
        """Return previously reserved quantities to stock.

        Same lock ordering as ``reserve_all``.  There is no upper stock
        bound, so once the locks are held and every product resolves, the
        release cannot be refused.  A *compensating* release undoes a
        reservation that never became an order; it waits for the locks
        without a deadline instead of raising BusyError.
        """
        requested = self._collapse(items)
        timeout = None if compensating else self._lock_timeout

        with self._locks.hold(requested, timeout):
            records = self._load_all(requested)
            for product_id, qty in requested.items():
                record = records[product_id]
                record.put_back(qty)
                self._stock_repo.save(record)

        logger.info(
            "Stock released",
            order_ref=order_ref,
            lines={pid: qty for pid, qty in requested.items()},
        )
        self._audit(TransactionType.RELEASED, requested, order_ref)

    # --- Stock maintenance ----------------------------------------------------

    def open_stock(
        self,
        product_id: str,
        sku: str,
        quantity: int = 0,
        minimum_level: int | None = None,
    ) -> StockRecord:
        """Create the stock record for a newly catalogued product."""
        with self._locks.hold([product_id], self._lock_timeout):
            if self._stock_repo.get_by_product_id(product_id) is not None:
                raise ValidationError(f"Stock record for product '{product_id}' already exists")
            if self._stock_repo.get_by_sku(sku) is not None:
                raise ValidationError(f"SKU '{sku}' already has a stock record")
            record = StockRecord(product_id=product_id, sku=sku, available_quantity=quantity)
            if minimum_level is not None:
                record.minimum_level = minimum_level
            self._stock_repo.save(record)

        if quantity:
            self._audit(TransactionType.ADJUSTMENT, {product_id: quantity}, None, "opening stock")
        return record

    def adjust(self, product_id: str, delta: int, notes: str | None = None) -> StockRecord:
        """Apply a signed correction; the result may not go below zero."""
        if isinstance(delta, bool) or not isinstance(delta, int) or delta == 0:
            raise ValidationError("Stock adjustment must be a non-zero integer")

        with self._locks.hold([product_id], self._lock_timeout):
            record = self._load_all([product_id])[product_id]
            record.adjust(delta)
            self._stock_repo.save(record)

        logger.info(
            "Stock adjusted",
            product_id=product_id,
            delta=delta,
            available=record.available_quantity,
        )
        self._audit(TransactionType.ADJUSTMENT, {product_id: delta}, None, notes)
        return record

    def available(self, product_id: str) -> int:
        record = self._stock_repo.get_by_product_id(product_id)
        if record is None:
            raise EntityNotFoundError(f"No stock record for product '{product_id}'")
        return record.available_quantity

    # --- Internal helpers -----------------------------------------------------

    @staticmethod
    def _collapse(items: Iterable[tuple[str, int]]) -> dict[str, int]:
        """Validate lines and merge repeated products, keeping first-seen order."""
        merged: dict[str, int] = {}
        for product_id, qty in items:
            if isinstance(qty, bool) or not isinstance(qty, int):
                raise ValidationError(
                    f"Quantity for product '{product_id}' must be an integer"
                )
            if qty <= 0:
                raise ValidationError(
                    f"Quantity for product '{product_id}' must be positive, got {qty}"
                )
            merged[product_id] = merged.get(product_id, 0) + qty
        if not merged:
            raise ValidationError("At least one item is required")
        return merged

    def _load_all(self, product_ids: Iterable[str]) -> dict[str, StockRecord]:
        records: dict[str, StockRecord] = {}
        for product_id in product_ids:
            record = self._stock_repo.get_by_product_id(product_id)
            if record is None:
                raise EntityNotFoundError(f"No stock record for product '{product_id}'")
            records[product_id] = record
        return records

    def _put_back(
        self,
        records: dict[str, StockRecord],
        taken: dict[str, int],
        order_ref: str | None,
    ) -> None:
        logger.error("Reservation commit failed, rolling back", order_ref=order_ref)
        for product_id, qty in taken.items():
            record = records[product_id]
            record.put_back(qty)
            self._stock_repo.save(record)

    def _audit(
        self,
        kind: TransactionType,
        lines: dict[str, int],
        order_ref: str | None,
        notes: str | None = None,
    ) -> None:
        if self._audit_sink is None:
            return
        for product_id, qty in lines.items():
            entry = InventoryTransaction(
                type=kind,
                product_id=product_id,
                quantity=qty,
                order_ref=order_ref,
                notes=notes,
            )
            try:
                self._audit_sink.record(entry)
            except Exception:
                logger.warning(
                    "Audit sink rejected entry",
                    type=kind.value,
                    product_id=product_id,
                    order_ref=order_ref,
                    exc_info=True,
                )
