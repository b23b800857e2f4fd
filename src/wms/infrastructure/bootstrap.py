"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.  Services are cached so
every caller in the process shares one InventoryLedger, and with it one set
of per-product locks.
"""

from __future__ import annotations

from functools import lru_cache

from wms.domain.service.inventory_ledger import InventoryLedger
from wms.domain.service.order_number_generator import OrderNumberGenerator
from wms.domain.service.order_reservation_service import OrderReservationService
from wms.infrastructure.config import get_settings
from wms.infrastructure.persistence.json_audit_log import JsonLinesAuditLog
from wms.infrastructure.persistence.json_order_repository import JsonOrderRepository
from wms.infrastructure.persistence.json_product_repository import JsonProductRepository
from wms.infrastructure.persistence.json_stock_repository import JsonStockRepository
from wms.infrastructure.persistence.json_user_repository import JsonUserRepository


@lru_cache()
def product_repository() -> JsonProductRepository:
    return JsonProductRepository(get_settings().data_dir / "products.json")


@lru_cache()
def stock_repository() -> JsonStockRepository:
    return JsonStockRepository(get_settings().data_dir / "stock.json")


@lru_cache()
def order_repository() -> JsonOrderRepository:
    return JsonOrderRepository(get_settings().data_dir / "orders.json")


@lru_cache()
def user_repository() -> JsonUserRepository:
    return JsonUserRepository(get_settings().data_dir / "users.json")


@lru_cache()
def audit_log() -> JsonLinesAuditLog:
    return JsonLinesAuditLog(get_settings().data_dir / "inventory_transactions.jsonl")


@lru_cache()
def inventory_ledger() -> InventoryLedger:
    return InventoryLedger(
        stock_repo=stock_repository(),
        audit_sink=audit_log(),
        lock_timeout=get_settings().lock_timeout_seconds,
    )


@lru_cache()
def order_reservation_service() -> OrderReservationService:
    settings = get_settings()
    orders = order_repository()
    return OrderReservationService(
        order_repo=orders,
        product_repo=product_repository(),
        user_repo=user_repository(),
        ledger=inventory_ledger(),
        number_generator=OrderNumberGenerator(
            prefix=settings.order_number_prefix,
            seed=orders.max_sequence,
        ),
        lock_timeout=settings.lock_timeout_seconds,
    )
