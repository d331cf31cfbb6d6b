"""Data Transfer Objects — plain containers that cross layer boundaries.

DTOs carry results from the application handlers out to the CLI and the
sale triggers without exposing domain internals.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class SaleLineDTO:
    """A processed sale line, echoed back to the caller."""

    product_id: int
    quantity: int


@dataclass(frozen=True)
class OrderDTO:
    """Output: the line items of a storefront order that were reconciled."""

    order_id: int
    items: list[SaleLineDTO]


@dataclass(frozen=True)
class PlannedWriteDTO:
    """Output: one ledger write a sale would make (dry run)."""

    product_id: int
    current_level: int | None
    new_level: int
    kind: str  # "constituent", "product" or "bundle"


@dataclass(frozen=True)
class ConstituentDTO:
    product_id: int
    required_quantity: int
    inventory_level: int | None  # None when the ledger does not know the product


@dataclass(frozen=True)
class BundleDTO:
    """Output: a bundle with its constituents and what it can currently build."""

    bundle_id: int
    constituents: list[ConstituentDTO]
    achievable_stock: int
    recorded_stock: int | None


@dataclass(frozen=True)
class BundleCheckDTO:
    """Output: structural problems and the starting stock of a draft bundle."""

    bundle_id: int
    errors: list[str] = field(default_factory=list)
    initial_stock: int = 0

    @property
    def is_valid(self) -> bool:
        return not self.errors
