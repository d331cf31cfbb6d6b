"""Application service: Preview Sale use case (query).

Answers "what would a simulated sale write?" without writing anything.
Uses the same calculator functions as the real reconciliation, applied
to a single snapshot read up front.
"""

from __future__ import annotations

from bundlesync.application.dto import PlannedWriteDTO
from bundlesync.domain.exceptions import NotFoundError
from bundlesync.domain.model.stock import SaleLine
from bundlesync.domain.repository.bundle_registry import BundleRegistry
from bundlesync.domain.repository.stock_ledger import StockLedger
from bundlesync.domain.service.bundle_calculator import (
    ripple_from_individual_sale,
    sale_deltas,
)


class PreviewSaleHandler:

    def __init__(
        self,
        stock_ledger: StockLedger,
        bundle_registry: BundleRegistry,
    ) -> None:
        self._stock_ledger = stock_ledger
        self._bundle_registry = bundle_registry

    def handle(self, product_id: object, quantity: object = None) -> list[PlannedWriteDTO]:
        line = SaleLine.of(product_id, quantity)

        current = self._stock_ledger.fetch_level(line.product_id)
        if current is None:
            raise NotFoundError("Product not found")

        bundle = self._bundle_registry.get_bundle(line.product_id)
        if bundle is not None:
            levels = self._stock_ledger.fetch_levels(list(bundle.linked_product_ids))
            return [
                PlannedWriteDTO(d.product_id, levels[d.product_id], d.new_level, "constituent")
                for d in sale_deltas(bundle, line.quantity, levels)
            ]

        affected = self._bundle_registry.list_bundles_referencing(line.product_id)
        wanted = {line.product_id}
        for b in affected:
            wanted.update(b.linked_product_ids)
        wanted.update(b.id for b in affected)
        levels = self._stock_ledger.fetch_levels(sorted(wanted))

        planned = [
            PlannedWriteDTO(
                line.product_id, current, max(0, current - line.quantity), "product"
            )
        ]
        for update in ripple_from_individual_sale(
            line.product_id, line.quantity, affected, levels
        ):
            planned.append(
                PlannedWriteDTO(
                    update.bundle_id, levels.get(update.bundle_id), update.new_stock, "bundle"
                )
            )
        return planned
