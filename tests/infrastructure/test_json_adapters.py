"""Tests for the JSON-file-backed ledger, registry and order lookup."""

import json

import pytest

from bundlesync.domain.exceptions import UpstreamError, ValidationError
from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.domain.model.stock import SaleLine
from bundlesync.infrastructure.persistence.json_bundle_registry import JsonBundleRegistry
from bundlesync.infrastructure.persistence.json_order_line_source import JsonOrderLineSource
from bundlesync.infrastructure.persistence.json_stock_ledger import JsonStockLedger


def _write(path, data):
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestJsonStockLedger:

    def test_creates_empty_file(self, tmp_path):
        ledger = JsonStockLedger(tmp_path / "nested" / "products.json")
        assert ledger.list_all() == []

    def test_reads_and_writes_levels(self, tmp_path):
        path = _write(tmp_path / "products.json", [
            {"id": 1, "name": "Product A", "inventory_level": 10},
            {"id": 2, "name": "Product B", "inventory_level": 20},
        ])
        ledger = JsonStockLedger(path)

        assert ledger.fetch_level(1) == 10
        assert ledger.fetch_level(999) is None
        assert ledger.fetch_levels([1, 2, 999]) == {1: 10, 2: 20}

        ledger.write_level(1, 6)

        reloaded = JsonStockLedger(path)
        assert reloaded.fetch_level(1) == 6
        assert [p.name for p in reloaded.list_all()] == ["Product A", "Product B"]

    def test_corrupt_file_is_upstream_error(self, tmp_path):
        path = tmp_path / "products.json"
        path.write_text("{not json", encoding="utf-8")

        with pytest.raises(UpstreamError, match="Could not read stock ledger"):
            JsonStockLedger(path).fetch_level(1)


class TestJsonBundleRegistry:

    def test_saved_bundle_is_listed_and_found(self, tmp_path):
        registry = JsonBundleRegistry(tmp_path / "metafields.json")
        registry.save_bundle(BundleDefinition.of(100, [1, 2], {1: 2, 2: 1}))

        reloaded = JsonBundleRegistry(tmp_path / "metafields.json")
        assert reloaded.get_bundle(100) == BundleDefinition.of(100, [1, 2], {1: 2, 2: 1})
        assert reloaded.is_bundle(100)
        assert not reloaded.is_bundle(1)
        assert [b.id for b in reloaded.list_bundles_referencing(2)] == [100]

    def test_invalid_bundle_is_rejected_before_writing(self, tmp_path):
        path = tmp_path / "metafields.json"
        registry = JsonBundleRegistry(path)

        with pytest.raises(ValidationError, match="Bundle cannot contain itself."):
            registry.save_bundle(BundleDefinition.of(100, [100, 1], {100: 1, 1: 1}))

        assert json.loads(path.read_text(encoding="utf-8")) == []

    def test_partial_metadata_treated_as_plain_product(self, tmp_path):
        path = _write(tmp_path / "metafields.json", [
            {
                "product_id": 100,
                "metafields": [
                    {"namespace": "bundle", "key": "is_bundle", "value": "true"},
                    {"namespace": "bundle", "key": "linked_product_ids", "value": "[1, 2]"},
                ],
            }
        ])
        registry = JsonBundleRegistry(path)

        assert registry.get_bundle(100) is None
        assert registry.list_all_bundles() == []

    def test_save_keeps_other_namespaces(self, tmp_path):
        path = _write(tmp_path / "metafields.json", [
            {
                "product_id": 100,
                "metafields": [{"namespace": "seo", "key": "title", "value": "Kit"}],
            }
        ])
        registry = JsonBundleRegistry(path)
        registry.save_bundle(BundleDefinition.of(100, [1], {1: 1}))

        raw = json.loads(path.read_text(encoding="utf-8"))
        namespaces = [f["namespace"] for f in raw[0]["metafields"]]
        assert namespaces == ["seo", "bundle", "bundle", "bundle"]

    def test_corrupt_file_is_upstream_error(self, tmp_path):
        path = _write(tmp_path / "metafields.json", [{"metafields": []}])

        with pytest.raises(UpstreamError, match="Could not read bundle registry"):
            JsonBundleRegistry(path).list_all_bundles()


class TestJsonOrderLineSource:

    def test_lines_for_order(self, tmp_path):
        path = _write(tmp_path / "orders.json", [
            {"id": 123, "products": [{"product_id": 100, "quantity": 2}]},
            {"id": 124, "products": [{"product_id": 1}, {"product_id": 2, "quantity": 0}]},
        ])
        source = JsonOrderLineSource(path)

        assert source.lines_for_order(123) == [SaleLine(100, 2)]
        assert source.lines_for_order(124) == [SaleLine(1, 1), SaleLine(2, 1)]

    def test_unknown_order_is_upstream_error(self, tmp_path):
        source = JsonOrderLineSource(_write(tmp_path / "orders.json", []))

        with pytest.raises(UpstreamError, match="Failed to fetch order products"):
            source.lines_for_order(1)

    def test_missing_file_is_upstream_error(self, tmp_path):
        with pytest.raises(UpstreamError):
            JsonOrderLineSource(tmp_path / "orders.json").lines_for_order(1)

    def test_unexpected_payload_is_upstream_error(self, tmp_path):
        path = _write(tmp_path / "orders.json", [{"id": 1, "products": [{"sku": "x"}]}])

        with pytest.raises(UpstreamError, match="Unexpected order products payload"):
            JsonOrderLineSource(path).lines_for_order(1)
