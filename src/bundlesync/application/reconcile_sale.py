"""Application service: Sale Reconciliation.

Takes the line items of one sale and brings the stock ledger back in
line with the bundle definitions:

- Selling a bundle consumes its constituents. Each constituent's level is
  reduced by ``units * required quantity``; the bundle's own counter is
  left alone.
- Selling a plain product lowers what every bundle containing it can
  build, so each of those bundles gets its achievable stock recomputed
  from current ledger levels and written back as its own level.

Whether the plain product's own level is decremented here depends on the
channel. A simulated sale has nobody else to do it. A storefront order
has already been decremented by the storefront, so doing it again would
double-count.

There is no transaction across line items: if line 3 fails, the writes
made for lines 1 and 2 stay committed.
"""

from __future__ import annotations

from enum import Enum

import structlog

from bundlesync.application.registry_cache import CachingBundleRegistry
from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.domain.model.stock import SaleLine
from bundlesync.domain.repository.bundle_registry import BundleRegistry
from bundlesync.domain.repository.stock_ledger import StockLedger
from bundlesync.domain.service.bundle_calculator import achievable_stock, sale_deltas

logger = structlog.get_logger(__name__)


class SaleChannel(Enum):
    SIMULATED = "SIMULATED"
    STOREFRONT_ORDER = "STOREFRONT_ORDER"

    @property
    def decrements_plain_products(self) -> bool:
        return self is SaleChannel.SIMULATED


class ReconcileSaleHandler:

    def __init__(
        self,
        stock_ledger: StockLedger,
        bundle_registry: BundleRegistry,
        channel: SaleChannel,
    ) -> None:
        self._stock_ledger = stock_ledger
        self._bundle_registry = bundle_registry
        self._channel = channel

    def handle(self, lines: list[SaleLine]) -> list[SaleLine]:
        """Reconcile every line item in order and return the lines processed."""
        registry = CachingBundleRegistry(self._bundle_registry)

        for line in lines:
            bundle = registry.get_bundle(line.product_id)
            if bundle is not None:
                logger.info(
                    "Sold item is a bundle",
                    product_id=line.product_id,
                    quantity=line.quantity,
                    constituents=list(bundle.linked_product_ids),
                )
                self._sell_bundle(bundle, line.quantity)
            else:
                logger.info(
                    "Sold item is an individual product",
                    product_id=line.product_id,
                    quantity=line.quantity,
                )
                self._sell_product(line, registry)

        logger.info(
            "Sale reconciled",
            channel=self._channel.value,
            line_count=len(lines),
        )
        return list(lines)

    # --- Branches -------------------------------------------------------------

    def _sell_bundle(self, bundle: BundleDefinition, units_sold: int) -> None:
        levels = self._stock_ledger.fetch_levels(list(bundle.linked_product_ids))
        for delta in sale_deltas(bundle, units_sold, levels):
            self._write(delta.product_id, levels.get(delta.product_id), delta.new_level)

    def _sell_product(self, line: SaleLine, registry: BundleRegistry) -> None:
        if self._channel.decrements_plain_products:
            current = self._stock_ledger.fetch_level(line.product_id)
            if current is not None:
                self._write(line.product_id, current, max(0, current - line.quantity))

        affected = registry.list_bundles_referencing(line.product_id)
        logger.info(
            "Recomputing bundles containing product",
            product_id=line.product_id,
            bundle_ids=[b.id for b in affected],
        )
        for bundle in affected:
            wanted = list(dict.fromkeys([*bundle.linked_product_ids, bundle.id]))
            levels = self._stock_ledger.fetch_levels(wanted)
            self._write(bundle.id, levels.get(bundle.id), achievable_stock(bundle, levels))

    def _write(self, product_id: int, old_level: int | None, new_level: int) -> None:
        logger.info(
            "Writing stock level",
            product_id=product_id,
            old_level=old_level,
            new_level=new_level,
        )
        self._stock_ledger.write_level(product_id, new_level)
