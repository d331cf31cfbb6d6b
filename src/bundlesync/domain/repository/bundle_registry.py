"""Abstract read access to bundle definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod

from bundlesync.domain.model.bundle import BundleDefinition


class BundleRegistry(ABC):

    @abstractmethod
    def get_bundle(self, product_id: int) -> BundleDefinition | None:
        """Return the bundle definition for a product, or None if it is a plain product."""

    @abstractmethod
    def list_all_bundles(self) -> list[BundleDefinition]:
        """Return every bundle in the catalog."""

    # --- Derived queries ------------------------------------------------------

    def is_bundle(self, product_id: int) -> bool:
        return self.get_bundle(product_id) is not None

    def get_linked_ids(self, product_id: int) -> list[int]:
        bundle = self.get_bundle(product_id)
        return list(bundle.linked_product_ids) if bundle else []

    def get_quantities(self, product_id: int) -> dict[int, int]:
        bundle = self.get_bundle(product_id)
        return dict(bundle.product_quantities) if bundle else {}

    def list_bundles_referencing(self, product_id: int) -> list[BundleDefinition]:
        return [b for b in self.list_all_bundles() if b.references(product_id)]
