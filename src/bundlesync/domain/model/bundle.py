"""BundleDefinition: a product whose stock is derived from other products.

A bundle IS a product: its ``id`` is a catalog product id. What makes it a
bundle is the list of constituent products it is built from and how many
units of each one a single bundle unit consumes.
"""

from __future__ import annotations

from dataclasses import dataclass, field

DEFAULT_REQUIRED_QUANTITY = 1


@dataclass(frozen=True)
class BundleDefinition:
    """Read-only view of a bundle as stored in the bundle registry.

    Invariants (enforced by the validator before persistence, not here):
    - ``linked_product_ids`` is non-empty and excludes ``id``
    - every linked id maps to a quantity >= 1

    Quantity keys that are not linked ids are inert.
    """

    id: int
    linked_product_ids: tuple[int, ...]
    product_quantities: dict[int, int] = field(default_factory=dict)

    def required_quantity(self, product_id: int) -> int:
        """Units of ``product_id`` consumed by one bundle unit."""
        return self.product_quantities.get(product_id) or DEFAULT_REQUIRED_QUANTITY

    def references(self, product_id: int) -> bool:
        return product_id in self.linked_product_ids

    @staticmethod
    def of(
        bundle_id: int,
        linked_product_ids: list[int] | tuple[int, ...],
        product_quantities: dict[int, int] | None = None,
    ) -> BundleDefinition:
        return BundleDefinition(
            id=bundle_id,
            linked_product_ids=tuple(linked_product_ids),
            product_quantities=dict(product_quantities or {}),
        )
