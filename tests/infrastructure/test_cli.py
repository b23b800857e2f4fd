"""End-to-end tests for the click CLI against a temporary data directory."""

import logging

import pytest
import structlog
from click.testing import CliRunner

from wms.infrastructure import bootstrap
from wms.infrastructure.cli.main import cli
from wms.infrastructure.config import get_settings

_FACTORIES = (
    bootstrap.product_repository,
    bootstrap.stock_repository,
    bootstrap.order_repository,
    bootstrap.user_repository,
    bootstrap.audit_log,
    bootstrap.inventory_ledger,
    bootstrap.order_reservation_service,
)


def _clear_caches():
    get_settings.cache_clear()
    for factory in _FACTORIES:
        factory.cache_clear()


@pytest.fixture
def runner(tmp_path, monkeypatch):
    monkeypatch.setenv("WMS_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("WMS_LOG_LEVEL", "WARNING")
    _clear_caches()
    yield CliRunner()
    _clear_caches()
    structlog.reset_defaults()
    logging.basicConfig(level=logging.WARNING, force=True)


def _invoke(runner, *args):
    result = runner.invoke(cli, list(args))
    assert result.exit_code == 0, result.output
    return result.output


def _seed(runner):
    _invoke(runner, "user", "add", "--name", "Alice", "--email", "alice@example.com",
            "--city", "Horsens")
    _invoke(runner, "user", "add", "--name", "Olaf", "--email", "olaf@example.com",
            "--role", "WAREHOUSE_OPERATOR")
    _invoke(runner, "product", "add", "--sku", "SKU-A", "--name", "Widget",
            "--price", "15.00", "--quantity", "10")


class TestOrderCommands:

    def test_create_and_cancel_restores_stock(self, runner):
        _seed(runner)
        out = _invoke(runner, "order", "create", "--customer", "1", "--items", "SKU-A:4")
        assert "stock reserved" in out
        assert "Horsens" in out

        out = _invoke(runner, "inventory", "show")
        assert "SKU-A" in out
        assert "6       10  LOW" in out

        out = _invoke(runner, "order", "cancel", "--id", "1", "--reason", "changed mind")
        assert "cancelled" in out

        out = _invoke(runner, "order", "show", "--id", "1")
        assert "status=CANCELLED" in out
        assert "changed mind" in out

    def test_status_walk(self, runner):
        _seed(runner)
        _invoke(runner, "order", "create", "--customer", "1", "--items", "SKU-A:1")
        _invoke(runner, "order", "status", "--id", "1", "--to", "confirmed")
        out = _invoke(runner, "order", "status", "--id", "1", "--to", "PROCESSING", "--actor", "2")
        assert "is now PROCESSING" in out
        out = _invoke(runner, "order", "list", "--status", "PROCESSING")
        assert "ORD-" in out

    def test_domain_errors_become_click_errors(self, runner):
        _seed(runner)
        result = runner.invoke(cli, ["order", "create", "--customer", "1", "--items", "SKU-A:11"])
        assert result.exit_code == 1
        assert "Insufficient stock" in result.output

        result = runner.invoke(cli, ["order", "status", "--id", "1", "--to", "SHIPPED"])
        assert result.exit_code == 1
        assert "Order #1 not found" in result.output

    def test_bad_items_format(self, runner):
        _seed(runner)
        result = runner.invoke(cli, ["order", "create", "--customer", "1", "--items", "SKU-A"])
        assert result.exit_code == 2
        assert "Expected 'SKU:Quantity'" in result.output


class TestInventoryCommands:

    def test_adjust_warns_on_low_stock(self, runner):
        _seed(runner)
        out = _invoke(runner, "inventory", "adjust", "--sku", "SKU-A", "--delta", "-5")
        assert "is now 5" in out
        assert "minimum level" in out

    def test_adjust_below_zero_refused(self, runner):
        _seed(runner)
        result = runner.invoke(cli, ["inventory", "adjust", "--sku", "SKU-A", "--delta", "-11"])
        assert result.exit_code == 1
        assert "cannot go negative" in result.output

    def test_history_shows_audit_trail(self, runner):
        _seed(runner)
        _invoke(runner, "order", "create", "--customer", "1", "--items", "SKU-A:4")
        _invoke(runner, "order", "cancel", "--id", "1")
        number = bootstrap.order_repository().get_by_id(1).order_number

        out = _invoke(runner, "inventory", "history", "--sku", "sku-a")
        assert "ADJUSTMENT" in out
        assert "opening stock" in out
        assert "RESERVED" in out
        assert "RELEASED" in out

        out = _invoke(runner, "inventory", "history", "--order", number)
        assert "RELEASED" in out
        assert "RESERVED" not in out

    def test_history_unknown_sku(self, runner):
        result = runner.invoke(cli, ["inventory", "history", "--sku", "NOPE"])
        assert result.exit_code == 1
        assert "Product not found" in result.output
