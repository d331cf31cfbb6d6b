"""Abstract gateway to per-product inventory counts.

Defined in the domain layer so the core never depends on a storefront
API. Concrete implementations (JSON file, storefront HTTP API) live in
the infrastructure layer and raise UpstreamError when the underlying
store fails.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class StockLedger(ABC):

    @abstractmethod
    def fetch_level(self, product_id: int) -> int | None:
        """Return the current inventory level, or None if the product is unknown."""

    @abstractmethod
    def fetch_levels(self, product_ids: list[int]) -> dict[int, int]:
        """Return levels for the given products, omitting unknown ids."""

    @abstractmethod
    def write_level(self, product_id: int, level: int) -> None:
        """Overwrite a product's inventory level."""
