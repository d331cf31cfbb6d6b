"""Bundle metadata as stored against a catalog product.

Storefronts keep bundle configuration as loose key/value metadata on the
product rather than as a first-class record. Everything lives in the
``bundle`` namespace:

    is_bundle            "true" when the product is a bundle
    linked_product_ids   JSON array of constituent product ids
    product_quantities   JSON object, constituent id -> units per bundle

A product only counts as a bundle when the flag is set AND both payloads
are present and parse cleanly. Anything else is treated as a plain
product; this parser never raises on bad metadata.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from bundlesync.domain.model.bundle import BundleDefinition

BUNDLE_NAMESPACE = "bundle"
IS_BUNDLE_KEY = "is_bundle"
LINKED_IDS_KEY = "linked_product_ids"
QUANTITIES_KEY = "product_quantities"


@dataclass(frozen=True)
class MetafieldEntry:
    namespace: str
    key: str
    value: str


def find_value(entries: list[MetafieldEntry], key: str) -> str | None:
    """Return the value stored under ``bundle.<key>``, or None."""
    for entry in entries:
        if entry.namespace == BUNDLE_NAMESPACE and entry.key == key:
            return entry.value
    return None


def is_flagged_bundle(entries: list[MetafieldEntry]) -> bool:
    return find_value(entries, IS_BUNDLE_KEY) == "true"


def bundle_from_metadata(
    product_id: int, entries: list[MetafieldEntry]
) -> BundleDefinition | None:
    """Parse a product's metadata into a BundleDefinition.

    Returns None when the product is not a bundle, including when the
    flag is set but the linked ids or quantities are missing or malformed.
    """
    if not is_flagged_bundle(entries):
        return None

    linked_raw = find_value(entries, LINKED_IDS_KEY)
    quantities_raw = find_value(entries, QUANTITIES_KEY)
    if linked_raw is None or quantities_raw is None:
        return None

    linked_ids = parse_linked_ids(linked_raw)
    quantities = parse_quantities(quantities_raw)
    if linked_ids is None or quantities is None:
        return None

    return BundleDefinition.of(product_id, linked_ids, quantities)


def parse_linked_ids(raw: str) -> list[int] | None:
    try:
        value = json.loads(raw)
        if not isinstance(value, list):
            return None
        return [_strict_int(item) for item in value]
    except (ValueError, TypeError):
        return None


def parse_quantities(raw: str) -> dict[int, int] | None:
    try:
        value = json.loads(raw)
        if not isinstance(value, dict):
            return None
        return {_strict_int(key): _strict_int(qty) for key, qty in value.items()}
    except (ValueError, TypeError):
        return None


def _strict_int(value: object) -> int:
    # Whole numbers or digit strings only; 1.9 or true must not become a valid id.
    if isinstance(value, bool):
        raise TypeError(f"not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.isdecimal():
        return int(value)
    raise ValueError(f"not an integer: {value!r}")


def bundle_to_metadata(bundle: BundleDefinition) -> list[MetafieldEntry]:
    """Inverse of ``bundle_from_metadata``, used when seeding a store."""
    return [
        MetafieldEntry(BUNDLE_NAMESPACE, IS_BUNDLE_KEY, "true"),
        MetafieldEntry(
            BUNDLE_NAMESPACE, LINKED_IDS_KEY, json.dumps(list(bundle.linked_product_ids))
        ),
        MetafieldEntry(
            BUNDLE_NAMESPACE,
            QUANTITIES_KEY,
            json.dumps({str(k): v for k, v in bundle.product_quantities.items()}),
        ),
    ]
