"""Application service: Check Bundle use case.

Run when a merchant configures a bundle, before the definition is saved:
reports every structural problem and, for a valid definition, how many
units can be built from current stock.
"""

from __future__ import annotations

from bundlesync.application.dto import BundleCheckDTO
from bundlesync.domain.exceptions import NotFoundError
from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.domain.repository.stock_ledger import StockLedger
from bundlesync.domain.service.bundle_calculator import initial_bundle_stock
from bundlesync.domain.service.bundle_validator import validate_bundle


class CheckBundleHandler:

    def __init__(self, stock_ledger: StockLedger) -> None:
        self._stock_ledger = stock_ledger

    def handle(
        self,
        bundle_id: int,
        linked_product_ids: list[int],
        product_quantities: dict[int, int],
    ) -> BundleCheckDTO:
        if self._stock_ledger.fetch_level(bundle_id) is None:
            raise NotFoundError(f"Product #{bundle_id} not found")

        draft = BundleDefinition.of(bundle_id, linked_product_ids, product_quantities)
        errors = validate_bundle(draft)
        if errors:
            return BundleCheckDTO(bundle_id=bundle_id, errors=errors)

        levels = self._stock_ledger.fetch_levels(list(linked_product_ids))
        return BundleCheckDTO(
            bundle_id=bundle_id,
            initial_stock=initial_bundle_stock(linked_product_ids, product_quantities, levels),
        )
