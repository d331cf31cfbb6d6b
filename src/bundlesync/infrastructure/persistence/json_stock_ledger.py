"""JSON-file-backed implementation of StockLedger."""

from __future__ import annotations

import json
from pathlib import Path

from bundlesync.domain.exceptions import UpstreamError
from bundlesync.domain.model.stock import ProductStock
from bundlesync.domain.repository.stock_ledger import StockLedger


class JsonStockLedger(StockLedger):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- StockLedger interface ------------------------------------------------

    def fetch_level(self, product_id: int) -> int | None:
        product = self._load().get(product_id)
        return product.inventory_level if product else None

    def fetch_levels(self, product_ids: list[int]) -> dict[int, int]:
        products = self._load()
        return {
            pid: products[pid].inventory_level for pid in product_ids if pid in products
        }

    def write_level(self, product_id: int, level: int) -> None:
        products = self._load()
        existing = products.get(product_id)
        name = existing.name if existing else None
        products[product_id] = ProductStock(id=product_id, inventory_level=level, name=name)
        self._persist(products)

    # --- Catalog helpers (not part of the ledger contract) ----------------------

    def list_all(self) -> list[ProductStock]:
        return list(self._load().values())

    # --- Serialization helpers ------------------------------------------------

    def _load(self) -> dict[int, ProductStock]:
        try:
            raw = json.loads(self._file_path.read_text(encoding="utf-8"))
            return {
                int(item["id"]): ProductStock(
                    id=int(item["id"]),
                    inventory_level=int(item["inventory_level"]),
                    name=item.get("name"),
                )
                for item in raw
            }
        except (OSError, ValueError, KeyError, TypeError) as exc:
            raise UpstreamError(f"Could not read stock ledger: {exc}") from exc

    def _persist(self, products: dict[int, ProductStock]) -> None:
        raw = [
            {"id": p.id, "name": p.name, "inventory_level": p.inventory_level}
            for p in products.values()
        ]
        try:
            self._file_path.write_text(json.dumps(raw, indent=2) + "\n", encoding="utf-8")
        except OSError as exc:
            raise UpstreamError(f"Could not write stock ledger: {exc}") from exc

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
