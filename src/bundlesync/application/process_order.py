"""Application service: Process Order use case.

Called when the storefront reports a new order. The order's line items
are looked up first, then reconciled as a storefront sale: plain products
have already been decremented by the storefront, so only constituents of
sold bundles and the bundles containing sold products are written.
"""

from __future__ import annotations

from bundlesync.application.dto import OrderDTO, SaleLineDTO
from bundlesync.application.reconcile_sale import ReconcileSaleHandler, SaleChannel
from bundlesync.domain.repository.bundle_registry import BundleRegistry
from bundlesync.domain.repository.order_line_source import OrderLineSource
from bundlesync.domain.repository.stock_ledger import StockLedger


class ProcessOrderHandler:

    def __init__(
        self,
        order_lines: OrderLineSource,
        stock_ledger: StockLedger,
        bundle_registry: BundleRegistry,
    ) -> None:
        self._order_lines = order_lines
        self._stock_ledger = stock_ledger
        self._bundle_registry = bundle_registry

    def handle(self, order_id: int) -> OrderDTO:
        lines = self._order_lines.lines_for_order(order_id)

        reconcile = ReconcileSaleHandler(
            self._stock_ledger, self._bundle_registry, SaleChannel.STOREFRONT_ORDER
        )
        processed = reconcile.handle(lines)

        return OrderDTO(
            order_id=order_id,
            items=[SaleLineDTO(line.product_id, line.quantity) for line in processed],
        )
