"""Application service: Show Bundles use case (query)."""

from __future__ import annotations

from bundlesync.application.dto import BundleDTO, ConstituentDTO
from bundlesync.domain.repository.bundle_registry import BundleRegistry
from bundlesync.domain.repository.stock_ledger import StockLedger
from bundlesync.domain.service.bundle_calculator import achievable_stock


class ShowBundlesHandler:

    def __init__(
        self,
        stock_ledger: StockLedger,
        bundle_registry: BundleRegistry,
    ) -> None:
        self._stock_ledger = stock_ledger
        self._bundle_registry = bundle_registry

    def handle(self) -> list[BundleDTO]:
        result: list[BundleDTO] = []
        for bundle in self._bundle_registry.list_all_bundles():
            levels = self._stock_ledger.fetch_levels(
                [bundle.id, *bundle.linked_product_ids]
            )
            result.append(
                BundleDTO(
                    bundle_id=bundle.id,
                    constituents=[
                        ConstituentDTO(
                            product_id=pid,
                            required_quantity=bundle.required_quantity(pid),
                            inventory_level=levels.get(pid),
                        )
                        for pid in bundle.linked_product_ids
                    ],
                    achievable_stock=achievable_stock(bundle, levels),
                    recorded_stock=levels.get(bundle.id),
                )
            )
        return result
