"""Composition root — wires concrete implementations to domain interfaces.

This is the only place in the codebase that knows about *all* layers.
Every other module depends only on abstractions.
"""

from __future__ import annotations

from bundlesync.infrastructure.config import StoreConfig
from bundlesync.infrastructure.persistence.json_bundle_registry import (
    JsonBundleRegistry,
)
from bundlesync.infrastructure.persistence.json_order_line_source import (
    JsonOrderLineSource,
)
from bundlesync.infrastructure.persistence.json_stock_ledger import JsonStockLedger


def stock_ledger(config: StoreConfig) -> JsonStockLedger:
    return JsonStockLedger(config.data_dir / "products.json")


def bundle_registry(config: StoreConfig) -> JsonBundleRegistry:
    return JsonBundleRegistry(config.data_dir / "metafields.json")


def order_line_source(config: StoreConfig) -> JsonOrderLineSource:
    return JsonOrderLineSource(config.data_dir / "orders.json")
