"""JSON-file-backed implementation of BundleRegistry.

The file mirrors how a storefront keeps product metadata: one entry per
product holding a list of ``{namespace, key, value}`` metafields.

    [{"product_id": 100, "metafields": [{"namespace": "bundle", ...}]}]
"""

from __future__ import annotations

import json
from pathlib import Path

import structlog

from bundlesync.domain.exceptions import UpstreamError, ValidationError
from bundlesync.domain.model.bundle import BundleDefinition
from bundlesync.domain.model.bundle_metadata import (
    BUNDLE_NAMESPACE,
    MetafieldEntry,
    bundle_from_metadata,
    bundle_to_metadata,
    is_flagged_bundle,
)
from bundlesync.domain.repository.bundle_registry import BundleRegistry
from bundlesync.domain.service.bundle_validator import validate_bundle

logger = structlog.get_logger(__name__)


class JsonBundleRegistry(BundleRegistry):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- BundleRegistry interface ---------------------------------------------

    def get_bundle(self, product_id: int) -> BundleDefinition | None:
        entries = self._load().get(product_id, [])
        return self._to_bundle(product_id, entries)

    def list_all_bundles(self) -> list[BundleDefinition]:
        bundles: list[BundleDefinition] = []
        for product_id, entries in self._load().items():
            bundle = self._to_bundle(product_id, entries)
            if bundle is not None:
                bundles.append(bundle)
        return bundles

    # --- Seeding ----------------------------------------------------------------

    def save_bundle(self, bundle: BundleDefinition) -> None:
        """Store a bundle's metafields, replacing any earlier ``bundle`` entries.

        Raises ValidationError, and writes nothing, if the definition is invalid.
        """
        errors = validate_bundle(bundle)
        if errors:
            raise ValidationError(" ".join(errors))

        records = self._load()
        others = [e for e in records.get(bundle.id, []) if e.namespace != BUNDLE_NAMESPACE]
        records[bundle.id] = others + bundle_to_metadata(bundle)
        self._persist(records)

    # --- Serialization helpers ------------------------------------------------

    @staticmethod
    def _to_bundle(product_id: int, entries: list[MetafieldEntry]) -> BundleDefinition | None:
        bundle = bundle_from_metadata(product_id, entries)
        if bundle is None and is_flagged_bundle(entries):
            logger.warning(
                "Bundle metadata incomplete or malformed, treating as plain product",
                product_id=product_id,
            )
        return bundle

    def _load(self) -> dict[int, list[MetafieldEntry]]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {
                int(item["product_id"]): [
                    MetafieldEntry(
                        namespace=field["namespace"],
                        key=field["key"],
                        value=str(field["value"]),
                    )
                    for field in item.get("metafields", [])
                ]
                for item in raw
            }
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise UpstreamError(f"Could not read bundle registry: {exc}") from exc

    def _persist(self, records: dict[int, list[MetafieldEntry]]) -> None:
        raw = [
            {
                "product_id": product_id,
                "metafields": [
                    {"namespace": e.namespace, "key": e.key, "value": e.value}
                    for e in entries
                ],
            }
            for product_id, entries in records.items()
        ]
        try:
            self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise UpstreamError(f"Could not write bundle registry: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
