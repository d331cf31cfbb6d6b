"""Stock value objects: product levels, sale lines and proposed changes.

All of these are snapshots. The stock ledger owns the real numbers; the
core only reads them and proposes new levels.
"""

from __future__ import annotations

from dataclasses import dataclass

from bundlesync.domain.exceptions import ValidationError


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass(frozen=True)
class ProductStock:
    """A catalog product as seen by the ledger at one point in time."""

    id: int
    inventory_level: int
    name: str | None = None


@dataclass(frozen=True)
class SaleLine:
    """One sold line item: which product, and how many units.

    Use ``SaleLine.of()`` for caller-supplied input; it applies the
    default quantity of 1.
    """

    product_id: int
    quantity: int = 1

    def __post_init__(self) -> None:
        if not _is_int(self.product_id) or self.product_id <= 0:
            raise ValidationError(
                f"Product ID must be a positive integer, got {self.product_id!r}"
            )
        if not _is_int(self.quantity) or self.quantity < 0:
            raise ValidationError(
                f"Quantity must be a non-negative integer, got {self.quantity!r}"
            )

    @staticmethod
    def of(product_id: object, quantity: object = None) -> SaleLine:
        """Build a sale line from loosely typed input.

        A missing or falsy quantity means one unit was sold.
        """
        if product_id is None or product_id == "":
            raise ValidationError("productId is required")
        return SaleLine(
            product_id=_coerce_int(product_id, "productId"),
            quantity=_coerce_int(quantity, "quantity") if quantity else 1,
        )


@dataclass(frozen=True)
class StockDelta:
    """A proposed new inventory level for one product (never negative)."""

    product_id: int
    new_level: int

    def __post_init__(self) -> None:
        if self.new_level < 0:
            raise ValidationError(
                f"Stock level for product {self.product_id} cannot be negative"
            )


@dataclass(frozen=True)
class BundleStockUpdate:
    """A bundle's recomputed achievable stock after a constituent sale."""

    bundle_id: int
    new_stock: int


def _coerce_int(value: object, field_name: str) -> int:
    if _is_int(value):
        return value  # type: ignore[return-value]
    try:
        return int(str(value))
    except ValueError as exc:
        raise ValidationError(f"{field_name} must be an integer, got {value!r}") from exc
