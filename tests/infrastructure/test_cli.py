"""End-to-end tests for the click CLI against JSON files in a temp dir."""

import json

import pytest
from click.testing import CliRunner

from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.infrastructure.cli.main import cli
from bundlesync.infrastructure.config import StoreConfig
from bundlesync.infrastructure.persistence.json_bundle_registry import JsonBundleRegistry
from bundlesync.infrastructure.persistence.json_stock_ledger import JsonStockLedger


@pytest.fixture
def config(tmp_path):
    (tmp_path / "products.json").write_text(json.dumps([
        {"id": 1, "name": "Product A", "inventory_level": 10},
        {"id": 2, "name": "Product B", "inventory_level": 20},
        {"id": 100, "name": "Starter Kit", "inventory_level": 5},
    ]), encoding="utf-8")
    (tmp_path / "orders.json").write_text(json.dumps([
        {"id": 124, "products": [{"product_id": 1, "quantity": 3}]},
    ]), encoding="utf-8")
    JsonBundleRegistry(tmp_path / "metafields.json").save_bundle(
        BundleDefinition.of(100, [1, 2], {1: 2, 2: 1})
    )
    return StoreConfig(
        store_hash="test-store-hash",
        access_token="test-access-token",
        data_dir=tmp_path,
        log_level="WARNING",
    )


def _run(config, *args):
    return CliRunner().invoke(cli, list(args), obj=config)


def _levels(config):
    return JsonStockLedger(config.data_dir / "products.json").fetch_levels([1, 2, 100])


class TestSaleCommands:

    def test_simulate_bundle_sale(self, config):
        result = _run(config, "sale", "simulate", "--product-id", "100", "--quantity", "2")

        assert result.exit_code == 0, result.output
        assert "Sale simulated: product #100 x 2" in result.output
        assert _levels(config) == {1: 6, 2: 18, 100: 5}

    def test_simulate_dry_run_writes_nothing(self, config):
        result = _run(config, "sale", "simulate", "--product-id", "1", "--quantity", "3", "--dry-run")

        assert result.exit_code == 0, result.output
        assert "product" in result.output
        assert "bundle" in result.output
        assert _levels(config) == {1: 10, 2: 20, 100: 5}

    def test_simulate_unknown_product(self, config):
        result = _run(config, "sale", "simulate", "--product-id", "999")

        assert result.exit_code != 0
        assert "Product not found" in result.output

    def test_replay_order(self, config):
        result = _run(config, "sale", "order", "--order-id", "124")

        assert result.exit_code == 0, result.output
        assert "Order #124 reconciled (1 line items)" in result.output
        assert _levels(config) == {1: 10, 2: 20, 100: 5}

    def test_replay_unknown_order(self, config):
        result = _run(config, "sale", "order", "--order-id", "1")

        assert result.exit_code != 0
        assert "Failed to fetch order products" in result.output

    @pytest.mark.parametrize("args", [
        ("sale", "simulate", "--product-id", "1"),
        ("sale", "simulate", "--product-id", "1", "--dry-run"),
        ("sale", "order", "--order-id", "124"),
    ])
    def test_refuses_to_run_without_credentials(self, config, args):
        unconfigured = config.model_copy(update={"store_hash": "", "access_token": ""})

        result = _run(unconfigured, *args)

        assert result.exit_code != 0
        assert "Missing store configuration" in result.output
        assert _levels(config) == {1: 10, 2: 20, 100: 5}


class TestBundleCommands:

    def test_list(self, config):
        result = _run(config, "bundle", "list")

        assert result.exit_code == 0, result.output
        assert "Bundle #100  achievable=5  recorded=5" in result.output

    def test_check_valid(self, config):
        result = _run(config, "bundle", "check", "--id", "100", "--items", "1:2,2:1")

        assert result.exit_code == 0, result.output
        assert "5 units can be built" in result.output

    def test_check_invalid(self, config):
        result = _run(config, "bundle", "check", "--id", "100", "--items", "100:1,1:0")

        assert result.exit_code != 0
        assert "Bundle cannot contain itself." in result.output
        assert "Invalid quantity for product 1: must be at least 1." in result.output

    def test_check_bad_items(self, config):
        result = _run(config, "bundle", "check", "--id", "100", "--items", "one:2")

        assert result.exit_code != 0
        assert "Invalid item" in result.output

    def test_check_and_save(self, config):
        result = _run(config, "bundle", "check", "--id", "101", "--items", "1:1,2:4", "--save")

        assert result.exit_code == 0, result.output
        assert "Bundle #101 saved" in result.output
        saved = JsonBundleRegistry(config.data_dir / "metafields.json").get_bundle(101)
        assert saved == BundleDefinition.of(101, [1, 2], {1: 1, 2: 4})

    def test_invalid_bundle_is_not_saved(self, config):
        result = _run(config, "bundle", "check", "--id", "101", "--items", "101:1", "--save")

        assert result.exit_code != 0
        assert JsonBundleRegistry(config.data_dir / "metafields.json").get_bundle(101) is None


class TestStockCommands:

    def test_show(self, config):
        result = _run(config, "stock", "show")

        assert result.exit_code == 0, result.output
        assert "Starter Kit" in result.output

    def test_set(self, config):
        result = _run(config, "stock", "set", "--product-id", "2", "--level", "7")

        assert result.exit_code == 0, result.output
        assert _levels(config)[2] == 7

    def test_set_rejects_negative(self, config):
        result = _run(config, "stock", "set", "--product-id", "2", "--level", "-1")

        assert result.exit_code != 0
