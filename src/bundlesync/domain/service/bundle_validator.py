"""Domain service: structural validation of a bundle definition.

Runs before a definition is persisted. Every rule is checked
independently and all problems are reported together; the caller decides
whether any of them blocks the save.
"""

from __future__ import annotations

from bundlesync.domain.model.bundle import BundleDefinition


def validate_bundle(bundle: BundleDefinition) -> list[str]:
    """Return a list of error messages; an empty list means the bundle is valid."""
    errors: list[str] = []

    if not bundle.linked_product_ids:
        errors.append("Bundle must contain at least one product.")

    if bundle.id in bundle.linked_product_ids:
        errors.append("Bundle cannot contain itself.")

    for product_id in bundle.linked_product_ids:
        quantity = bundle.product_quantities.get(product_id)
        if quantity is None or quantity < 1:
            errors.append(
                f"Invalid quantity for product {product_id}: must be at least 1."
            )

    return errors
