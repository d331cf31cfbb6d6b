"""Abstract lookup of the line items belonging to a storefront order."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bundlesync.domain.model.stock import SaleLine


class OrderLineSource(ABC):

    @abstractmethod
    def lines_for_order(self, order_id: int) -> list[SaleLine]:
        """Return the sold line items of an order.

        Raises UpstreamError if the order cannot be fetched.
        """
