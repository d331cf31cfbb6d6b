"""Domain service: Bundle Calculator.

Pure functions over bundle definitions and stock snapshots. Nothing here
reads or writes the ledger; the orchestrator feeds in a snapshot
(product id -> inventory level) and commits whatever comes back.

Every level produced here is clamped at zero.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.domain.model.stock import BundleStockUpdate, ProductStock, StockDelta

Snapshot = Mapping[int, int]


def snapshot_of(products: Iterable[ProductStock]) -> dict[int, int]:
    """Index a list of product records by id."""
    return {p.id: p.inventory_level for p in products}


def achievable_stock(bundle: BundleDefinition, snapshot: Snapshot) -> int:
    """Maximum number of bundle units buildable from current constituent stock.

    Returns 0 when any constituent is missing from the snapshot or when
    the bundle has no constituents.
    """
    limit: int | None = None  # no constituent seen yet

    for product_id in bundle.linked_product_ids:
        level = snapshot.get(product_id)
        if level is None:
            return 0
        buildable = level // bundle.required_quantity(product_id)
        limit = buildable if limit is None else min(limit, buildable)

    return max(0, limit) if limit is not None else 0


def sale_deltas(
    bundle: BundleDefinition, units_sold: int, snapshot: Snapshot
) -> list[StockDelta]:
    """New constituent levels after selling ``units_sold`` bundle units.

    Constituents missing from the snapshot are skipped.
    """
    deltas: list[StockDelta] = []
    for product_id in bundle.linked_product_ids:
        level = snapshot.get(product_id)
        if level is None:
            continue
        consumed = units_sold * bundle.required_quantity(product_id)
        deltas.append(StockDelta(product_id, max(0, level - consumed)))
    return deltas


def find_affected_bundles(
    product_id: int, bundles: Iterable[BundleDefinition]
) -> list[BundleDefinition]:
    """Bundles that list ``product_id`` as a constituent, in input order."""
    return [b for b in bundles if b.references(product_id)]


def ripple_from_individual_sale(
    sold_product_id: int,
    units_sold: int,
    bundles: Iterable[BundleDefinition],
    snapshot: Snapshot,
) -> list[BundleStockUpdate]:
    """Recompute every bundle affected by selling a product on its own."""
    after_sale = dict(snapshot)
    if sold_product_id in after_sale:
        after_sale[sold_product_id] = max(0, after_sale[sold_product_id] - units_sold)

    return [
        BundleStockUpdate(bundle.id, achievable_stock(bundle, after_sale))
        for bundle in find_affected_bundles(sold_product_id, bundles)
    ]


def initial_bundle_stock(
    linked_product_ids: list[int],
    product_quantities: Mapping[int, int],
    snapshot: Snapshot,
) -> int:
    """Achievable stock of a bundle that has not been saved yet."""
    draft = BundleDefinition.of(0, linked_product_ids, dict(product_quantities))
    return achievable_stock(draft, snapshot)
