"""Application service: Simulate Sale use case.

Lets a merchant test bundle behaviour without placing a real order. The
sold product must exist in the ledger; that is checked before anything
is written.
"""

from __future__ import annotations

from bundlesync.application.dto import SaleLineDTO
from bundlesync.application.reconcile_sale import ReconcileSaleHandler, SaleChannel
from bundlesync.domain.exceptions import NotFoundError
from bundlesync.domain.model.stock import SaleLine
from bundlesync.domain.repository.bundle_registry import BundleRegistry
from bundlesync.domain.repository.stock_ledger import StockLedger


class SimulateSaleHandler:

    def __init__(
        self,
        stock_ledger: StockLedger,
        bundle_registry: BundleRegistry,
    ) -> None:
        self._stock_ledger = stock_ledger
        self._bundle_registry = bundle_registry

    def handle(self, product_id: object, quantity: object = None) -> SaleLineDTO:
        line = SaleLine.of(product_id, quantity)

        if self._stock_ledger.fetch_level(line.product_id) is None:
            raise NotFoundError("Product not found")

        reconcile = ReconcileSaleHandler(
            self._stock_ledger, self._bundle_registry, SaleChannel.SIMULATED
        )
        reconcile.handle([line])
        return SaleLineDTO(product_id=line.product_id, quantity=line.quantity)
