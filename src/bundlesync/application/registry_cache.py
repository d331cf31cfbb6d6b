"""Per-pass memoisation of bundle registry reads.

A reconciliation pass asks the registry twice about the same catalog:
once per sold item ("is this a bundle?") and once to find bundles that
reference a plain product. Wrapping the registry for the duration of a
pass means each product's metadata and the bundle list are read at most
once. A new cache is created for every pass, so later passes always see
fresh definitions.
"""

from __future__ import annotations

from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.domain.repository.bundle_registry import BundleRegistry

_MISSING = object()


class CachingBundleRegistry(BundleRegistry):

    def __init__(self, inner: BundleRegistry) -> None:
        self._inner = inner
        self._bundles: dict[int, BundleDefinition | None] = {}
        self._all: list[BundleDefinition] | None = None

    def get_bundle(self, product_id: int) -> BundleDefinition | None:
        cached = self._bundles.get(product_id, _MISSING)
        if cached is not _MISSING:
            return cached  # type: ignore[return-value]

        if self._all is not None:
            bundle = next((b for b in self._all if b.id == product_id), None)
        else:
            bundle = self._inner.get_bundle(product_id)
        self._bundles[product_id] = bundle
        return bundle

    def list_all_bundles(self) -> list[BundleDefinition]:
        if self._all is None:
            self._all = self._inner.list_all_bundles()
            for bundle in self._all:
                self._bundles.setdefault(bundle.id, bundle)
        return list(self._all)
