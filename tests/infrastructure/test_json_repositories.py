"""Tests for the JSON-file repositories and audit log, against a temp dir."""

import json
from datetime import datetime, timezone

import pytest

from wms.domain.model.inventory import InventoryTransaction, StockRecord, TransactionType
from wms.domain.model.order import Order, OrderItem, OrderStatus, ShippingInfo
from wms.domain.model.product import Product
from wms.domain.model.user import Role, User
from wms.domain.model.value_objects import Money, Quantity
from wms.domain.service.inventory_ledger import InventoryLedger
from wms.domain.service.order_number_generator import OrderNumberGenerator
from wms.domain.service.order_reservation_service import OrderReservationService
from wms.infrastructure.persistence.json_audit_log import JsonLinesAuditLog
from wms.infrastructure.persistence.json_order_repository import JsonOrderRepository
from wms.infrastructure.persistence.json_product_repository import JsonProductRepository
from wms.infrastructure.persistence.json_stock_repository import JsonStockRepository
from wms.infrastructure.persistence.json_user_repository import JsonUserRepository


def _order(number: str = "ORD-20240101-000001") -> Order:
    return Order.create(
        number,
        "c1",
        [
            OrderItem(
                product_id="1",
                sku="SKU-A",
                product_name="Widget",
                quantity=Quantity(2),
                unit_price=Money.of("15.00"),
            )
        ],
        shipping=ShippingInfo(address="Main St 1", city="Horsens"),
        now=datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc),
    )


class TestJsonOrderRepository:

    def test_creates_empty_file(self, tmp_path):
        path = tmp_path / "nested" / "orders.json"
        JsonOrderRepository(path)
        assert json.loads(path.read_text()) == []

    def test_save_assigns_ids(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        first, second = _order("ORD-20240101-000001"), _order("ORD-20240101-000002")
        repo.save(first)
        repo.save(second)
        assert (first.id, second.id) == (1, 2)

    def test_round_trip(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        order = _order()
        repo.save(order)
        order.status = OrderStatus.SHIPPED
        order.processed_by = "op1"
        order.shipped_at = datetime(2024, 1, 2, 10, 30, tzinfo=timezone.utc)
        order.stock_restored = True
        repo.save(order)

        loaded = JsonOrderRepository(tmp_path / "orders.json").get_by_id(order.id)
        assert loaded == order
        assert loaded.stock_restored is True
        assert loaded.items[0].unit_price == Money.of("15.00")

    def test_lookup_by_number_and_filters(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        a, b = _order("ORD-20240101-000001"), _order("ORD-20240101-000002")
        b.customer_id = "c2"
        b.status = OrderStatus.CANCELLED
        repo.save(a)
        repo.save(b)
        assert repo.get_by_number("ORD-20240101-000002").id == b.id
        assert repo.get_by_number("ORD-X") is None
        assert [o.id for o in repo.list_all(status=OrderStatus.PENDING)] == [a.id]
        assert [o.id for o in repo.list_all(customer_id="c2")] == [b.id]

    def test_max_sequence(self, tmp_path):
        repo = JsonOrderRepository(tmp_path / "orders.json")
        for number in ("ORD-20240101-000007", "ORD-20240101-000003", "ORD-20240102-000050"):
            repo.save(_order(number))
        assert repo.max_sequence("ORD-20240101-") == 7
        assert repo.max_sequence("ORD-20240103-") == 0


class TestJsonCatalogRepositories:

    def test_product_round_trip(self, tmp_path):
        repo = JsonProductRepository(tmp_path / "products.json")
        repo.save(Product(id="1", sku="SKU-A", name="Widget", price=Money.of("15.00")))
        assert repo.get_by_sku("sku-a").price == Money.of("15.00")
        assert repo.get_by_id("2") is None

    def test_user_round_trip(self, tmp_path):
        repo = JsonUserRepository(tmp_path / "users.json")
        user = User(id="1", full_name="Olaf", email="olaf@example.com",
                    role=Role.WAREHOUSE_OPERATOR, city="Horsens")
        repo.save(user)
        assert repo.get_by_id("1") == user

    def test_stock_upsert(self, tmp_path):
        repo = JsonStockRepository(tmp_path / "stock.json")
        record = StockRecord(product_id="1", sku="SKU-A", available_quantity=5)
        repo.save(record)
        record.available_quantity = 2
        repo.save(record)
        assert len(repo.list_all()) == 1
        assert repo.get_by_sku("SKU-A").available_quantity == 2


class TestLedgerOverJsonStore:

    def test_reservation_is_persisted_and_audited(self, tmp_path):
        stock = JsonStockRepository(tmp_path / "stock.json")
        audit = JsonLinesAuditLog(tmp_path / "audit.jsonl")
        ledger = InventoryLedger(stock, audit_sink=audit)
        ledger.open_stock("1", "SKU-A", quantity=10)
        ledger.reserve_all([("1", 4)], order_ref="ORD-20240101-000001")

        assert JsonStockRepository(tmp_path / "stock.json").get_by_product_id("1").available_quantity == 6
        entries = audit.read_all()
        assert [e["type"] for e in entries] == ["ADJUSTMENT", "RESERVED"]
        assert entries[1]["order_ref"] == "ORD-20240101-000001"


class TestJsonLinesAuditLog:

    def test_appends_lines(self, tmp_path):
        log = JsonLinesAuditLog(tmp_path / "audit.jsonl")
        assert log.read_all() == []
        log.record(InventoryTransaction(TransactionType.RESERVED, "1", 3, order_ref="ORD-1"))
        log.record(InventoryTransaction(TransactionType.RELEASED, "1", 3, order_ref="ORD-1"))
        lines = (tmp_path / "audit.jsonl").read_text().splitlines()
        assert len(lines) == 2
        assert json.loads(lines[1])["type"] == "RELEASED"


class _FlakyOrderRepository(JsonOrderRepository):
    """Fails the next save once ``fail_next`` is set."""

    fail_next = False

    def save(self, order: Order) -> None:
        if self.fail_next:
            self.fail_next = False
            raise OSError("disk full")
        super().save(order)


class TestCancelOverJsonStore:

    def test_failed_cancel_save_then_retry_restores_stock_once(self, tmp_path):
        products = JsonProductRepository(tmp_path / "products.json")
        products.save(Product(id="1", sku="SKU-A", name="Widget", price=Money.of("15.00")))
        users = JsonUserRepository(tmp_path / "users.json")
        users.save(User(id="c1", full_name="Alice", email="alice@example.com"))
        ledger = InventoryLedger(JsonStockRepository(tmp_path / "stock.json"))
        ledger.open_stock("1", "SKU-A", quantity=10)
        orders = _FlakyOrderRepository(tmp_path / "orders.json")
        service = OrderReservationService(
            order_repo=orders,
            product_repo=products,
            user_repo=users,
            ledger=ledger,
            number_generator=OrderNumberGenerator(seed=orders.max_sequence),
        )

        order = service.create_order("c1", [("1", 4)])
        assert ledger.available("1") == 6

        orders.fail_next = True
        with pytest.raises(OSError):
            service.cancel_order(order.id)
        assert orders.get_by_id(order.id).status == OrderStatus.PENDING
        assert ledger.available("1") == 6

        service.cancel_order(order.id)
        service.cancel_order(order.id)
        assert ledger.available("1") == 10
        assert orders.get_by_id(order.id).stock_restored is True
